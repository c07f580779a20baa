"""Resolve departure/arrival times and train name for a parsed ticket."""

from dataclasses import dataclass
from typing import Mapping

from railticket.config import get_settings
from railticket.models.schedule import ScheduleLookupResult, TrainSchedule
from railticket.models.ticket import NOT_AVAILABLE
from railticket.reference import COMMON_TRAINS, TRAIN_SCHEDULES
from railticket.services.schedule_client import ScheduleApiClient, calculate_duration
from railticket.utils.logger import get_logger

logger = get_logger(__name__)


UNKNOWN_TRAIN = "Unknown Train"


@dataclass(frozen=True)
class ResolvedSchedule:
    """Final schedule fields for a ticket."""

    departure_time: str
    arrival_time: str
    duration: str
    train_name: str
    source: str  # static, network or email


def lookup_static_schedule(
    train_number: str,
    boarding_code: str,
    destination_code: str,
    schedules: Mapping[str, TrainSchedule] = TRAIN_SCHEDULES,
) -> ScheduleLookupResult | None:
    """
    Times between two stops from the built-in timetables.

    Returns None when the train is not tabulated or either station is not one
    of its stops.
    """
    schedule = schedules.get(train_number)
    if not schedule:
        return None

    boarding = schedule.find_stop(boarding_code)
    destination = schedule.find_stop(destination_code)
    if not boarding or not destination:
        return None

    return ScheduleLookupResult(
        train_number=schedule.train_number,
        train_name=schedule.train_name,
        boarding_time=boarding.departure_time,
        arrival_time=destination.arrival_time,
        duration=calculate_duration(
            boarding.departure_time,
            destination.arrival_time,
            boarding.day,
            destination.day,
        ),
        source="static",
    )


class ScheduleResolver:
    """
    Looks up train times: static timetable first, then the schedule API.

    Email-extracted values and "N.A." sentinels fill whatever neither source
    provides (see finalize()).
    """

    def __init__(
        self,
        api_client: ScheduleApiClient | None = None,
        schedules: Mapping[str, TrainSchedule] = TRAIN_SCHEDULES,
        common_trains: Mapping[str, str] = COMMON_TRAINS,
    ):
        """
        Initialize resolver.

        Args:
            api_client: Schedule API client; None disables network lookups
            schedules: Static timetables keyed by train number
            common_trains: Train names keyed by train number
        """
        self.api_client = api_client
        self.schedules = schedules
        self.common_trains = common_trains

    async def resolve(
        self,
        train_number: str | None,
        boarding_code: str,
        destination_code: str,
    ) -> ScheduleLookupResult | None:
        """
        Find times between two stations, or None if no source knows them.

        Network failures are logged and reported as None.
        """
        if train_number:
            static = lookup_static_schedule(
                train_number, boarding_code, destination_code, self.schedules
            )
            if static:
                logger.debug(
                    "schedule_lookup_static_hit",
                    train_number=train_number,
                    boarding=boarding_code,
                    destination=destination_code,
                )
                return static

        if not train_number or self.api_client is None:
            return None

        try:
            result = await self.api_client.fetch_schedule(
                train_number, boarding_code, destination_code
            )
        except Exception as e:
            logger.warning(
                "schedule_lookup_network_error",
                train_number=train_number,
                error=str(e),
            )
            return None

        return result.lookup if result.success else None

    def finalize(
        self,
        lookup: ScheduleLookupResult | None,
        train_number: str | None,
        email_train_name: str | None = None,
        email_departure: str | None = None,
        email_arrival: str | None = None,
    ) -> ResolvedSchedule:
        """
        Merge a lookup result with values read from the email.

        Times: lookup, then email, then "N.A.". Train name: lookup, then
        email, then the common-trains table, then "Unknown Train".
        """
        departure = _usable_time(lookup.boarding_time if lookup else None)
        arrival = _usable_time(lookup.arrival_time if lookup else None)

        train_name = (
            (lookup.train_name if lookup else None)
            or email_train_name
            or (self.common_trains.get(train_number) if train_number else None)
            or UNKNOWN_TRAIN
        )

        return ResolvedSchedule(
            departure_time=departure or email_departure or NOT_AVAILABLE,
            arrival_time=arrival or email_arrival or NOT_AVAILABLE,
            duration=lookup.duration if lookup else NOT_AVAILABLE,
            train_name=train_name,
            source=lookup.source if lookup else "email",
        )

    async def resolve_for_ticket(
        self,
        train_number: str | None,
        boarding_code: str,
        destination_code: str,
        email_train_name: str | None = None,
        email_departure: str | None = None,
        email_arrival: str | None = None,
    ) -> ResolvedSchedule:
        """Run resolve() and finalize() in one call."""
        lookup = await self.resolve(train_number, boarding_code, destination_code)
        return self.finalize(
            lookup,
            train_number,
            email_train_name=email_train_name,
            email_departure=email_departure,
            email_arrival=email_arrival,
        )

    async def aclose(self) -> None:
        """Close the API client, if any."""
        if self.api_client is not None:
            await self.api_client.aclose()


def _usable_time(value: str | None) -> str | None:
    if not value or value in ("--", NOT_AVAILABLE):
        return None
    return value


def create_schedule_resolver() -> ScheduleResolver:
    """Create a resolver with an API client configured from settings."""
    settings = get_settings()
    client = ScheduleApiClient(
        base_url=settings.schedule_api_base_url,
        timeout=settings.schedule_api_timeout,
        enabled=settings.schedule_api_enabled,
    )
    return ScheduleResolver(api_client=client)
