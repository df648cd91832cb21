"""
Print Job Model
===============

A single ticket print request, built from the kiosk's JSON body.
"""

from datetime import datetime, timezone
from dataclasses import dataclass
from typing import Dict, Any

MIN_YEAR = 2
MAX_YEAR = 9998


class InvalidPrintJob(ValueError):
    """Raised when a print request body does not describe a ticket."""


def _has_control_chars(text: str) -> bool:
    return any(ord(ch) < 0x20 or ord(ch) == 0x7f for ch in text)


def _require_text(data: Dict[str, Any], key: str, required: bool = True,
                  allow_empty: bool = False) -> str:
    value = data.get(key)
    if value is None:
        if required:
            raise InvalidPrintJob(f'{key} is required')
        return ''
    if not isinstance(value, str):
        raise InvalidPrintJob(f'{key} must be a string')
    if not value and not allow_empty:
        raise InvalidPrintJob(f'{key} must not be empty')
    # Text goes straight into the ESC/POS stream, which has no escaping
    if _has_control_chars(value):
        raise InvalidPrintJob(f'{key} must not contain control characters')
    try:
        value.encode('utf-8')
    except UnicodeEncodeError:
        raise InvalidPrintJob(f'{key} is not valid text')
    return value


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 instant.

    Accepts a trailing ``Z``. Naive values are taken as UTC.
    """
    text = value.strip()
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    # Leave room for rendering in any ticket timezone
    try:
        utc = dt.astimezone(timezone.utc)
    except OverflowError:
        raise ValueError('timestamp out of range')
    if not MIN_YEAR <= utc.year <= MAX_YEAR:
        raise ValueError('timestamp out of range')
    return dt


@dataclass(frozen=True)
class PrintJob:
    """Ticket to print."""

    ticket_number: str
    category_name: str
    timestamp: datetime
    category_prefix: str = ""  # Not printed
    is_priority: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> 'PrintJob':
        """
        Create from the camelCase request body.

        Raises:
            InvalidPrintJob: if a field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise InvalidPrintJob('Request body must be a JSON object')

        ticket_number = _require_text(data, 'ticketNumber')
        category_name = _require_text(data, 'categoryName', allow_empty=True)
        category_prefix = _require_text(data, 'categoryPrefix', required=False, allow_empty=True)

        is_priority = data.get('isPriority', False)
        if is_priority is None:
            is_priority = False
        if not isinstance(is_priority, bool):
            raise InvalidPrintJob('isPriority must be a boolean')

        raw_timestamp = data.get('timestamp')
        if raw_timestamp is None:
            raise InvalidPrintJob('timestamp is required')
        if not isinstance(raw_timestamp, str):
            raise InvalidPrintJob('timestamp must be an ISO-8601 string')
        try:
            timestamp = parse_timestamp(raw_timestamp)
        except ValueError:
            raise InvalidPrintJob(f'timestamp is not a valid ISO-8601 date: {raw_timestamp!r}')

        return cls(
            ticket_number=ticket_number,
            category_name=category_name,
            category_prefix=category_prefix,
            is_priority=is_priority,
            timestamp=timestamp,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase request representation."""
        return {
            'ticketNumber': self.ticket_number,
            'categoryName': self.category_name,
            'categoryPrefix': self.category_prefix,
            'isPriority': self.is_priority,
            'timestamp': self.timestamp.isoformat(),
        }
