"""
Tracking Manager.
Routes tracking lookups to the retriever registered for a carrier.
"""

from typing import Optional
from loguru import logger

from emstracker.config import TrackerConfig
from emstracker.models import TrackingStatusInfo
from emstracker.tracking.carrier_api import (
    TrackingRetriever,
    EMSRussianPostRetriever,
)


class TrackingManager:
    """
    Holds one retriever per carrier name.

    Lookups are passed straight through: no caching, no batching.
    """

    def __init__(self, config: TrackerConfig):
        self.config = config
        self._retrievers: dict[str, TrackingRetriever] = {}

        self._initialize_retrievers()

    def _initialize_retrievers(self):
        """Initialize carrier retrievers from config."""
        self.register(EMSRussianPostRetriever(
            url=self.config.ems_url,
            timeout=self.config.request_timeout,
        ))

    def register(self, retriever: TrackingRetriever) -> None:
        """Register a retriever under its carrier name."""
        self._retrievers[retriever.get_carrier_name()] = retriever
        logger.debug(f"Registered tracking retriever: {retriever.get_carrier_name()}")

    @property
    def carriers(self) -> list[str]:
        return sorted(self._retrievers)

    def get_retriever(self, carrier: Optional[str] = None) -> TrackingRetriever:
        """
        Get the retriever for a carrier.

        Args:
            carrier: Carrier name (configured default if not provided)

        Raises:
            ValueError: if no retriever is registered for the carrier
        """
        carrier = (carrier or self.config.default_carrier).lower()

        retriever = self._retrievers.get(carrier)
        if retriever is None:
            raise ValueError(
                f"Unknown carrier: {carrier} (available: {', '.join(self.carriers)})"
            )

        return retriever

    def get_tracking_info(
        self,
        tracking_code: str,
        carrier: Optional[str] = None,
    ) -> list[TrackingStatusInfo]:
        """Get tracking history for a shipment from the given carrier."""
        retriever = self.get_retriever(carrier)

        events = retriever.get_tracking_info(tracking_code)
        logger.info(f"Tracking {tracking_code}: {len(events)} events from {retriever.get_carrier_name()}")

        return events
