"""
Tracking integration module.
Pulls tracking history from EMS Russian Post.
"""

from emstracker.tracking.carrier_api import TrackingRetriever, EMSRussianPostRetriever
from emstracker.tracking.parsing import (
    parse_date,
    parse_table,
    parse_json,
    extract_table_html,
    process_response,
)
from emstracker.tracking.tracking_manager import TrackingManager

__all__ = [
    "TrackingRetriever",
    "EMSRussianPostRetriever",
    "TrackingManager",
    "parse_date",
    "parse_table",
    "parse_json",
    "extract_table_html",
    "process_response",
]
