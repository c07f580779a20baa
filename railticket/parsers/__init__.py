"""Text normalization and field extraction for booking emails."""

from .dates import parse_ticket_date
from .extractors import extract_fields, ExtractedFields
from .normalizer import normalize_email_text
from .passengers import parse_passengers
from .status import resolve_booking_status

__all__ = [
    "parse_ticket_date",
    "extract_fields",
    "ExtractedFields",
    "normalize_email_text",
    "parse_passengers",
    "resolve_booking_status",
]
