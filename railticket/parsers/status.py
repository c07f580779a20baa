"""Overall booking status from passenger statuses and cancellation wording."""

import re
from typing import Iterable

from railticket.models.ticket import BookingStatus, ParsedPassenger, PassengerStatus


# "Ticket Cancelled", "booking has been cancelled", "cancellation of PNR",
# "your ticket is cancelled". "Cancellation charges" must not match.
CANCELLATION_PATTERNS = (
    re.compile(r"\b(?:ticket|booking|PNR)\s+(?:has\s+been\s+)?cancell?ed\b", re.IGNORECASE),
    re.compile(r"\bcancell?ation\s+of\s+(?:ticket|booking|PNR)\b", re.IGNORECASE),
    re.compile(
        r"\byour\s+(?:ticket|booking)\s+(?:is|has\s+been)\s+cancell?ed\b",
        re.IGNORECASE,
    ),
)


def mentions_cancellation(text: str) -> bool:
    """True if the email states that the ticket itself was cancelled."""
    return any(pattern.search(text) for pattern in CANCELLATION_PATTERNS)


def resolve_booking_status(
    passengers: Iterable[ParsedPassenger],
    text: str,
) -> BookingStatus:
    """
    Combine passenger statuses and email wording into one ticket status.

    Precedence: Cancelled > Waitlisted > RAC > Confirmed. A booking with a
    single waitlisted passenger is waitlisted however many are confirmed.
    """
    has_waitlist = False
    has_rac = False
    has_cancelled_passenger = False

    for passenger in passengers:
        if passenger.status == PassengerStatus.WAITLISTED:
            has_waitlist = True
        elif passenger.status == PassengerStatus.RAC:
            has_rac = True
        if passenger.is_cancelled:
            has_cancelled_passenger = True

    if has_cancelled_passenger or mentions_cancellation(text):
        return BookingStatus.CANCELLED
    if has_waitlist:
        return BookingStatus.WAITLISTED
    if has_rac:
        return BookingStatus.RAC
    return BookingStatus.CONFIRMED
