"""
Conversion between Python datetimes and SOLR's date format.

SOLR stores dates as UTC with a trailing ``Z`` (``2023-01-31T09:30:00Z``).
"""

from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer


def format_datetime(value: datetime) -> str:
    """
    Render a datetime in SOLR date format.

    Aware values are converted to UTC; naive values are taken to be UTC already.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_datetime(value: str) -> datetime:
    """Parse a SOLR date string into an aware UTC datetime."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _coerce_datetime(value: Any) -> Any:
    if isinstance(value, str):
        return parse_datetime(value)
    return value


# Use in document models for fields holding SOLR dates.
SolrDateTime = Annotated[
    datetime,
    BeforeValidator(_coerce_datetime),
    PlainSerializer(format_datetime, return_type=str),
]
