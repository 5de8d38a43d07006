"""
Response parsing for the EMS tracking service.

The service answers with a JSON envelope ``{"d": "<html>"}``. The HTML
fragment holds a ``<table class="emsNumber">`` whose first row is a header
and whose remaining rows are tracking events. These functions are carrier
agnostic and keep no state between calls.
"""

import re
from datetime import datetime, timezone
from typing import Any, Optional

import orjson
from bs4 import BeautifulSoup
from loguru import logger

from emstracker.errors import ErrorCause, TrackingError
from emstracker.models import TrackingStatusInfo


TABLE_CLASS = "emsNumber"
ENVELOPE_KEY = "d"

DATE_FORMAT = "%d.%m.%Y %H:%M"
_DATE_PATTERN = re.compile(r"[0-9]{2}\.[0-9]{2}\.[0-9]{4} [0-9]{2}:[0-9]{2}")

# Column positions in the events table, after the header row is dropped
_TEXT_COLUMNS = (
    (1, "zip_code", "zip code"),
    (2, "description", "description"),
    (3, "status", "status"),
    (4, "weight", "weight"),
)


def parse_date(date_text: str) -> datetime:
    """
    Parse a ``DD.MM.YYYY HH:MM`` timestamp as UTC.

    Raises:
        TrackingError: DATE_PARSE_FAILURE if the text does not match exactly
    """
    if not _DATE_PATTERN.fullmatch(date_text):
        raise TrackingError(ErrorCause.date_parse_failure(
            message=f"Date does not match DD.MM.YYYY HH:MM: {date_text!r}"
        ))

    try:
        parsed = datetime.strptime(date_text, DATE_FORMAT)
    except ValueError as e:
        raise TrackingError(ErrorCause.date_parse_failure(e)) from e

    return parsed.replace(tzinfo=timezone.utc)


def _parse_row_date(date_text: str) -> Optional[datetime]:
    try:
        return parse_date(date_text)
    except TrackingError as e:
        logger.warning(f"Cannot parse date: {e}")
        return None


def parse_table(table_html: str) -> list[TrackingStatusInfo]:
    """
    Parse the events table out of an HTML fragment.

    Columns are mapped by position: date, zip code, description, status,
    weight. Trailing columns are ignored. An unparseable date leaves the
    event's date empty; any other missing cell fails the whole table.

    Raises:
        TrackingError: HTML_STRUCTURE_FAILURE if the table or a cell is missing
    """
    document = BeautifulSoup(table_html, "html.parser")

    table = document.find(class_=TABLE_CLASS)
    if table is None:
        raise TrackingError(ErrorCause.html_structure_failure(
            f'Class not found: "{TABLE_CLASS}"'
        ))

    result = []

    # First row is the header
    for row in table.find_all("tr")[1:]:
        cells_text = [cell.get_text() for cell in row.find_all("td")]

        if not cells_text:
            raise TrackingError(ErrorCause.html_structure_failure(
                "Cannot get date text from cell"
            ))

        fields: dict[str, Any] = {"date": _parse_row_date(cells_text[0])}

        for index, field_name, label in _TEXT_COLUMNS:
            if index >= len(cells_text):
                raise TrackingError(ErrorCause.html_structure_failure(
                    f"Cannot get {label} text from cell"
                ))
            fields[field_name] = cells_text[index]

        result.append(TrackingStatusInfo(**fields))

    logger.debug(f"Parsed {len(result)} tracking events")
    return result


def parse_json(content: bytes) -> Any:
    """
    Decode a UTF-8 JSON response body.

    Raises:
        TrackingError: TEXT_ENCODING_FAILURE or JSON_PARSE_FAILURE
    """
    try:
        data = content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise TrackingError(ErrorCause.text_encoding_failure(e)) from e

    try:
        return orjson.loads(data)
    except orjson.JSONDecodeError as e:
        raise TrackingError(ErrorCause.json_parse_failure(e)) from e


def extract_table_html(document: Any) -> str:
    """Return the HTML string stored under the envelope's ``"d"`` key."""
    table_html = document.get(ENVELOPE_KEY) if isinstance(document, dict) else None

    if not isinstance(table_html, str):
        raise TrackingError(ErrorCause.response_shape_failure("Wrong JSON content"))

    return table_html


def process_response(content: bytes) -> list[TrackingStatusInfo]:
    """Turn a raw response body into tracking events."""
    document = parse_json(content)
    return parse_table(extract_table_html(document))
