"""Passenger manifest parsing."""

import re

from railticket.models.ticket import Gender, ParsedPassenger, PassengerStatus
from railticket.parsers.extractors import extract_adult_count
from railticket.utils.logger import get_logger

logger = get_logger(__name__)


_STATUS_TOKENS = r"CNF|WL|RAC|CAN|RLWL|GNWL|PQWL"
_GENDER_WORDS = r"Male|Female|Transgender|M|F|T"

# "1 P NARENDER RAJU 53 Male N/A CNF S6 10"
# (sl. no, name, age, gender, catering = N/A, status, coach, seat)
PASSENGER_TABLE_PATTERN = re.compile(
    r"(\d+)\s+([A-Z][A-Z\s]+?)\s+(\d{1,3})\s+(" + _GENDER_WORDS + r")\s+N/A\s+"
    r"(" + _STATUS_TOKENS + r")\s+([A-Z0-9]+)\s+(\d+)",
    re.IGNORECASE,
)

# "1. Ravi Kumar, 34 yrs, Male, RLWL"
PASSENGER_LIST_PATTERN = re.compile(
    r"(\d+)\.\s*([A-Za-z\s]+?),?\s*(\d+)\s*(?:yrs?|years?)?,?\s*"
    r"(" + _GENDER_WORDS + r")\b\s*,?\s*(" + _STATUS_TOKENS + r")\b",
    re.IGNORECASE,
)

WAITLIST_TOKENS = frozenset({"WL", "RLWL", "GNWL", "PQWL"})

PLACEHOLDER_AGE = 30


def normalize_status(raw_status: str) -> PassengerStatus:
    """
    Collapse a raw booking token to a passenger status.

    All waitlist pools become WL. CAN keeps the CNF bucket here; the
    cancellation itself is carried by the raw token and the ticket status.
    """
    token = raw_status.upper()
    if token in WAITLIST_TOKENS:
        return PassengerStatus.WAITLISTED
    if token == "RAC":
        return PassengerStatus.RAC
    return PassengerStatus.CONFIRMED


def normalize_gender(raw_gender: str) -> Gender:
    token = raw_gender.upper()
    if token.startswith("M"):
        return Gender.MALE
    if token.startswith("F"):
        return Gender.FEMALE
    return Gender.OTHER


def _parse_table_rows(text: str) -> list[ParsedPassenger]:
    passengers = []
    for match in list(PASSENGER_TABLE_PATTERN.finditer(text)):
        raw_status = match.group(5).upper()
        coach = match.group(6).upper()
        seat = match.group(7)
        passengers.append(
            ParsedPassenger(
                name=match.group(2).strip(),
                age=int(match.group(3)),
                gender=normalize_gender(match.group(4)),
                seat_number=f"{coach}-{seat}",
                status=normalize_status(raw_status),
                booking_status=raw_status,
                current_status=f"{coach}/{seat}",
            )
        )
    return passengers


def _parse_list_rows(text: str) -> list[ParsedPassenger]:
    passengers = []
    for match in list(PASSENGER_LIST_PATTERN.finditer(text)):
        raw_status = match.group(5).upper()
        passengers.append(
            ParsedPassenger(
                name=match.group(2).strip(),
                age=int(match.group(3)),
                gender=normalize_gender(match.group(4)),
                seat_number="TBA",
                status=normalize_status(raw_status),
                booking_status=raw_status,
                current_status=raw_status,
            )
        )
    return passengers


def placeholder_passengers(count: int) -> list[ParsedPassenger]:
    """Synthesize 'Passenger 1..N' entries when no manifest could be read."""
    return [
        ParsedPassenger(
            name=f"Passenger {number}",
            age=PLACEHOLDER_AGE,
            gender=Gender.MALE,
            seat_number="TBA",
            status=PassengerStatus.CONFIRMED,
            booking_status="CNF",
            current_status="CNF",
        )
        for number in range(1, max(count, 1) + 1)
    ]


def parse_passengers(text: str) -> list[ParsedPassenger]:
    """
    Extract the passenger manifest from normalized email text.

    Tries the IRCTC table layout first, then a numbered list layout. When
    neither matches, placeholders are synthesized from the "Adult : N" count
    (default 1), so the result is never empty.

    Args:
        text: Normalized email text

    Returns:
        Passengers in manifest order, at least one
    """
    passengers = _parse_table_rows(text)
    layout = "table"

    if not passengers:
        passengers = _parse_list_rows(text)
        layout = "list"

    if not passengers:
        count = extract_adult_count(text) or 1
        passengers = placeholder_passengers(count)
        layout = "placeholder"

    logger.debug("passengers_extracted", count=len(passengers), layout=layout)
    return passengers
