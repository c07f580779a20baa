"""Ticket and train schedule models."""

from .ticket import (
    BookingStatus,
    ChartStatus,
    Gender,
    ParsedPassenger,
    ParsedTicket,
    PassengerStatus,
    TravelClass,
)
from .schedule import (
    ScheduleFetchOutcome,
    ScheduleLookupResult,
    StationStop,
    TrainSchedule,
)

__all__ = [
    # Ticket
    "BookingStatus",
    "ChartStatus",
    "Gender",
    "ParsedPassenger",
    "ParsedTicket",
    "PassengerStatus",
    "TravelClass",
    # Schedule
    "ScheduleFetchOutcome",
    "ScheduleLookupResult",
    "StationStop",
    "TrainSchedule",
]
