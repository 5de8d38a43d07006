"""
Carrier API integrations for tracking information.
Currently supports EMS Russian Post.
"""

import json
from abc import ABC, abstractmethod
from typing import Optional

import requests
from loguru import logger

from emstracker.config import DEFAULT_EMS_URL
from emstracker.errors import ErrorCause, TrackingError
from emstracker.models import TrackingStatusInfo
from emstracker.tracking.parsing import process_response


class TrackingRetriever(ABC):
    """Base class for carrier tracking integrations."""

    @abstractmethod
    def get_tracking_info(self, tracking_code: str) -> list[TrackingStatusInfo]:
        """
        Get the tracking history for a shipment.

        Raises:
            TrackingError: if the request or the response parsing fails
        """
        pass

    @abstractmethod
    def get_carrier_name(self) -> str:
        """Get the carrier name."""
        pass


class EMSRussianPostRetriever(TrackingRetriever):
    """
    EMS Russian Post tracking integration.

    The endpoint takes a JSON POST and returns the history table as an
    HTML fragment wrapped in a JSON envelope.
    """

    TRACK_URL = DEFAULT_EMS_URL
    REJECTED_MESSAGE = "Cannot get tracking data from EMS Russian Post"

    def __init__(
        self,
        url: str = TRACK_URL,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self._session = session

    def get_carrier_name(self) -> str:
        return "ems"

    @staticmethod
    def build_request_body(tracking_code: str) -> bytes:
        """Request payload: ``{"emsNumber": "<CODE>"}``."""
        return json.dumps({"emsNumber": tracking_code.upper()}).encode("utf-8")

    def _make_request(self, tracking_code: str) -> bytes:
        """POST the tracking code and return the raw response body."""
        http = self._session or requests

        logger.debug(f"Requesting EMS tracking info for {tracking_code.upper()}")

        try:
            response = http.post(
                self.url,
                data=self.build_request_body(tracking_code),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
                stream=True,
            )
        except requests.RequestException as e:
            raise TrackingError(ErrorCause.transport_failure(e)) from e

        with response:
            if not 200 <= response.status_code < 300:
                logger.debug(f"EMS tracking request rejected: {response.status_code}")
                raise TrackingError.from_http_response(response, self.REJECTED_MESSAGE)

            try:
                return response.content
            except (requests.RequestException, OSError) as e:
                raise TrackingError(ErrorCause.io_failure(e)) from e

    def get_tracking_info(self, tracking_code: str) -> list[TrackingStatusInfo]:
        """Get tracking history from EMS Russian Post."""
        content = self._make_request(tracking_code)
        return process_response(content)
