"""Client for the public Indian Railways train schedule API."""

import asyncio
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from railticket.models.schedule import (
    ApiSchedulePayload,
    ScheduleFetchOutcome,
    ScheduleLookupResult,
)
from railticket.utils.logger import get_logger

logger = get_logger(__name__)


# =============================================================================
# Exceptions
# =============================================================================


class ScheduleApiError(Exception):
    """Schedule API request failed."""

    def __init__(self, message: str, outcome: ScheduleFetchOutcome, response: Any = None):
        super().__init__(message)
        self.outcome = outcome
        self.response = response


# =============================================================================
# Result
# =============================================================================


@dataclass
class ScheduleFetchResult:
    """Outcome of one schedule API call."""

    outcome: ScheduleFetchOutcome
    lookup: ScheduleLookupResult | None = None
    error_message: str | None = None

    @property
    def success(self) -> bool:
        return self.outcome == ScheduleFetchOutcome.SUCCESS and self.lookup is not None


# =============================================================================
# Duration
# =============================================================================


def calculate_duration(
    departure_time: str | None,
    arrival_time: str | None,
    departure_day: int = 1,
    arrival_day: int = 1,
) -> str:
    """
    Travel time between two stops as "Xh Ym".

    Each day of offset between the stops adds 24 hours. Returns "N.A." when
    either time is missing or is the "--" placeholder.
    """
    if not departure_time or not arrival_time or "--" in (departure_time, arrival_time):
        return "N.A."

    try:
        dep_hour, dep_min = (int(part) for part in departure_time.split(":")[:2])
        arr_hour, arr_min = (int(part) for part in arrival_time.split(":")[:2])
    except ValueError:
        return "N.A."

    total_minutes = (arr_hour * 60 + arr_min) - (dep_hour * 60 + dep_min)
    if arrival_day > departure_day:
        total_minutes += (arrival_day - departure_day) * 24 * 60
    if total_minutes < 0:
        total_minutes += 24 * 60

    hours, minutes = divmod(total_minutes, 60)
    return f"{hours}h {minutes}m"


# =============================================================================
# Schedule API Client
# =============================================================================


class ScheduleApiClient:
    """
    Async client for the train schedule API.

    Usage:
        async with ScheduleApiClient(base_url) as client:
            result = await client.fetch_schedule("12733", "SC", "TPTY")
            if result.success:
                print(result.lookup.boarding_time)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        enabled: bool = True,
    ):
        """
        Initialize schedule client.

        Args:
            base_url: API base URL (e.g., https://indian-railway-api.cyclic.app)
            timeout: Request timeout in seconds; the whole call is abandoned after it
            enabled: When False every lookup returns DISABLED without a request
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.enabled = enabled
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "ScheduleApiClient":
        """Async context manager entry."""
        self._client = httpx.AsyncClient(
            timeout=self.timeout,
            headers={"Accept": "application/json"},
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.aclose()

    async def aclose(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get HTTP client, created on first use."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def _get_schedule_payload(self, train_number: str) -> ApiSchedulePayload:
        """
        GET the schedule for one train.

        Raises:
            ScheduleApiError: On timeout, non-2xx status or malformed payload
        """
        url = f"{self.base_url}/trains/getSchedule/{train_number}"

        try:
            response = await asyncio.wait_for(self.client.get(url), timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            raise ScheduleApiError(
                f"Schedule API timed out after {self.timeout}s",
                outcome=ScheduleFetchOutcome.TIMEOUT,
            ) from e
        except httpx.HTTPStatusError as e:
            raise ScheduleApiError(
                f"Schedule API returned HTTP {e.response.status_code}",
                outcome=ScheduleFetchOutcome.HTTP_ERROR,
                response=e.response,
            ) from e
        except httpx.HTTPError as e:
            raise ScheduleApiError(
                f"Schedule API request failed: {e}",
                outcome=ScheduleFetchOutcome.HTTP_ERROR,
            ) from e
        except ValueError as e:
            raise ScheduleApiError(
                f"Schedule API returned invalid JSON: {e}",
                outcome=ScheduleFetchOutcome.INVALID_PAYLOAD,
            ) from e

        try:
            return ApiSchedulePayload.model_validate(data)
        except ValidationError as e:
            raise ScheduleApiError(
                f"Unexpected schedule payload: {e.error_count()} errors",
                outcome=ScheduleFetchOutcome.INVALID_PAYLOAD,
                response=data,
            ) from e

    async def fetch_schedule(
        self,
        train_number: str,
        boarding_code: str,
        destination_code: str,
    ) -> ScheduleFetchResult:
        """
        Look up departure and arrival times between two stops of a train.

        Never raises; failures are reported through the result outcome.

        Args:
            train_number: 5-digit train number
            boarding_code: Boarding station code
            destination_code: Destination station code

        Returns:
            ScheduleFetchResult
        """
        if not self.enabled:
            return ScheduleFetchResult(outcome=ScheduleFetchOutcome.DISABLED)

        logger.debug("schedule_api_request", train_number=train_number)

        try:
            payload = await self._get_schedule_payload(train_number)
        except ScheduleApiError as e:
            logger.warning(
                "schedule_api_failed",
                train_number=train_number,
                outcome=e.outcome.value,
                error=str(e),
            )
            return ScheduleFetchResult(outcome=e.outcome, error_message=str(e))

        boarding = payload.find_stop(boarding_code)
        destination = payload.find_stop(destination_code)

        if not boarding or not destination:
            logger.info(
                "schedule_api_station_not_found",
                train_number=train_number,
                boarding=boarding_code,
                destination=destination_code,
            )
            return ScheduleFetchResult(outcome=ScheduleFetchOutcome.STATION_NOT_FOUND)

        lookup = ScheduleLookupResult(
            train_number=train_number,
            train_name=payload.train_name,
            boarding_time=boarding.departure_time or "N.A.",
            arrival_time=destination.arrival_time or "N.A.",
            duration=calculate_duration(
                boarding.departure_time,
                destination.arrival_time,
                boarding.day or 1,
                destination.day or 1,
            ),
            source="network",
        )

        logger.info(
            "schedule_api_success",
            train_number=train_number,
            departure=lookup.boarding_time,
            arrival=lookup.arrival_time,
        )
        return ScheduleFetchResult(outcome=ScheduleFetchOutcome.SUCCESS, lookup=lookup)
