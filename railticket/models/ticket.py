"""Pydantic models for parsed train ticket data."""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


NOT_AVAILABLE = "N.A."
UNKNOWN = "Unknown"


class Gender(str, Enum):
    """Passenger gender as printed on the reservation."""

    MALE = "M"
    FEMALE = "F"
    OTHER = "O"


class PassengerStatus(str, Enum):
    """Normalized per-passenger reservation status."""

    CONFIRMED = "CNF"
    WAITLISTED = "WL"
    RAC = "RAC"


class BookingStatus(str, Enum):
    """Overall ticket status."""

    CONFIRMED = "CNF"
    WAITLISTED = "WL"
    RAC = "RAC"
    CANCELLED = "CAN"

    @property
    def label(self) -> str:
        return {
            "CNF": "Confirmed",
            "WL": "Waiting List",
            "RAC": "RAC",
            "CAN": "Cancelled",
        }[self.value]


class ChartStatus(str, Enum):
    """Whether the reservation chart has been prepared."""

    NOT_PREPARED = "NOT_PREPARED"
    PREPARED = "PREPARED"


class TravelClass(str, Enum):
    """Indian Railways travel class codes."""

    FIRST_AC = "1A"
    SECOND_AC = "2A"
    THIRD_AC = "3A"
    SLEEPER = "SL"
    CHAIR_CAR = "CC"
    SECOND_SITTING = "2S"
    EXECUTIVE_CHAIR_CAR = "EC"
    FIRST_CLASS = "FC"
    THIRD_AC_ECONOMY = "3E"

    @property
    def label(self) -> str:
        return {
            "1A": "First AC",
            "2A": "Second AC",
            "3A": "Third AC",
            "SL": "Sleeper",
            "CC": "Chair Car",
            "2S": "Second Sitting",
            "EC": "Executive Chair Car",
            "FC": "First Class",
            "3E": "Third AC Economy",
        }[self.value]

    @classmethod
    def from_code(cls, code: str) -> "TravelClass | None":
        """Return the class for a code such as '3A', or None if unknown."""
        try:
            return cls(code.strip().upper())
        except ValueError:
            return None


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ParsedPassenger(_CamelModel):
    """One row of the reservation manifest."""

    name: str
    age: int = Field(ge=0)
    gender: Gender
    seat_number: str = "TBA"  # "S6-10" or TBA
    status: PassengerStatus
    booking_status: str  # Raw token: CNF, RLWL, GNWL, CAN ...
    current_status: str  # "S6/10" or the raw status

    @property
    def is_cancelled(self) -> bool:
        return self.booking_status == "CAN"


class ParsedTicket(_CamelModel):
    """Reservation record extracted from a booking confirmation email."""

    # Identifiers
    pnr: str = UNKNOWN
    train_number: str = UNKNOWN
    train_name: str = "Unknown Train"

    # Dates
    journey_date: date
    booking_date: date

    # Route
    boarding_station: str = UNKNOWN
    boarding_station_code: str = "UNK"
    destination_station: str = UNKNOWN
    destination_station_code: str = "UNK"

    # Schedule
    departure_time: str = NOT_AVAILABLE
    arrival_time: str = NOT_AVAILABLE
    duration: str = NOT_AVAILABLE

    # Booking
    travel_class: TravelClass = TravelClass.SLEEPER
    quota: str = "GENERAL"
    passengers: list[ParsedPassenger] = Field(min_length=1)
    total_fare: Decimal = Field(default=Decimal("0"), ge=0)
    status: BookingStatus = BookingStatus.CONFIRMED
    chart_status: ChartStatus = ChartStatus.NOT_PREPARED

    @property
    def passenger_count(self) -> int:
        return len(self.passengers)

    def to_record(self) -> dict[str, Any]:
        """
        Build the payload handed to the ticket store.

        The store assigns id, createdAt and updatedAt itself.
        """
        return self.model_dump(mode="json", by_alias=True)
