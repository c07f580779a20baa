"""Date parsing for IRCTC style dates (10-Feb-2026, 10/02/2026)."""

import re
from datetime import date

from railticket.utils.logger import get_logger

logger = get_logger(__name__)


MONTH_ABBREVIATIONS: dict[str, int] = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

_SEPARATORS = re.compile(r"[-/]")


def _parse_month(value: str) -> int:
    month = MONTH_ABBREVIATIONS.get(value[:3].lower())
    if month is not None:
        return month
    return int(value)


def parse_ticket_date(value: str | None) -> date:
    """
    Parse a DD-Mon-YYYY or DD/MM/YYYY date.

    Unparseable input yields today's date: a ticket with a wrong date can be
    corrected during review, a failed upload cannot.

    Args:
        value: Date string as matched in the email, or None

    Returns:
        Parsed date, or date.today() on any failure
    """
    if not value:
        return date.today()

    parts = _SEPARATORS.split(value.strip())
    if len(parts) != 3:
        logger.warning("date_parse_failed", date_str=value, reason="malformed")
        return date.today()

    try:
        day = int(parts[0])
        month = _parse_month(parts[1])
        year = int(parts[2])
        return date(year, month, day)
    except (ValueError, OverflowError):
        logger.warning("date_parse_failed", date_str=value, reason="invalid")
        return date.today()
