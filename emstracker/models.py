"""
Data models for the EMS tracker.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class TrackingStatusInfo(BaseModel):
    """
    One tracking event from the carrier's history table.

    Every field is optional because the source table may omit or
    malform any cell. Only ``date`` is left empty on a successful parse.
    """

    date: Optional[datetime] = None  # UTC
    zip_code: Optional[str] = None
    description: Optional[str] = None  # location
    status: Optional[str] = None
    weight: Optional[str] = None  # kg, or "-" when not reported


@dataclass
class Settings:
    """Command-line settings for one invocation."""

    tracking_code: Optional[str] = None
    carrier: str = "ems"
