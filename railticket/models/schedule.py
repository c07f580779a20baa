"""Pydantic models for train schedule data."""

from enum import Enum
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field


NO_TIME = "--"  # Origin has no arrival, terminus has no departure


class StationStop(BaseModel):
    """One stop of a train's timetable."""

    code: str
    name: str = ""
    arrival_time: str = NO_TIME
    departure_time: str = NO_TIME
    day: int = Field(default=1, ge=1)  # 1 = day the train leaves its origin


class TrainSchedule(BaseModel):
    """Full multi-stop timetable for one train."""

    train_number: str
    train_name: str
    stations: list[StationStop]

    def find_stop(self, code: str) -> StationStop | None:
        for stop in self.stations:
            if stop.code == code:
                return stop
        return None


class ScheduleLookupResult(BaseModel):
    """Times between two stops of one train, from the timetable or the schedule API."""

    train_number: str
    train_name: str | None = None
    boarding_time: str
    arrival_time: str
    duration: str
    source: Literal["static", "network"]


# =============================================================================
# Schedule API payload
# =============================================================================


class ApiScheduleStop(BaseModel):
    """Stop entry as returned by the schedule API (camelCase or snake_case)."""

    station_code: str = Field(
        validation_alias=AliasChoices("stationCode", "station_code"),
    )
    departure_time: str | None = Field(
        default=None,
        validation_alias=AliasChoices("departureTime", "departure_time", "departure"),
    )
    arrival_time: str | None = Field(
        default=None,
        validation_alias=AliasChoices("arrivalTime", "arrival_time", "arrival"),
    )
    day: int | None = None


class ApiSchedulePayload(BaseModel):
    """Top-level schedule API response."""

    train_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("trainName", "train_name"),
    )
    schedule: list[ApiScheduleStop]

    def find_stop(self, code: str) -> ApiScheduleStop | None:
        for stop in self.schedule:
            if stop.station_code == code:
                return stop
        return None


class ScheduleFetchOutcome(str, Enum):
    """How a schedule API call ended."""

    SUCCESS = "success"
    TIMEOUT = "timeout"
    HTTP_ERROR = "http_error"
    INVALID_PAYLOAD = "invalid_payload"
    STATION_NOT_FOUND = "station_not_found"
    DISABLED = "disabled"
