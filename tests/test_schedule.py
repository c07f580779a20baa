"""Tests for schedule lookup: static timetables, API client and resolver."""

import asyncio

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from railticket.models.schedule import ScheduleFetchOutcome, ScheduleLookupResult
from railticket.services.schedule_client import (
    ScheduleApiClient,
    ScheduleFetchResult,
    calculate_duration,
)
from railticket.services.schedule_resolver import (
    ScheduleResolver,
    lookup_static_schedule,
)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Create a test client."""
    return ScheduleApiClient(base_url="http://schedule.test/", timeout=5.0)


@pytest.fixture
def mock_response():
    """Create a mock HTTP response."""
    response = MagicMock()
    response.raise_for_status = MagicMock()
    return response


@pytest.fixture
def network_lookup():
    return ScheduleLookupResult(
        train_number="12627",
        train_name="KARNATAKA EXP",
        boarding_time="19:20",
        arrival_time="09:00",
        duration="37h 40m",
        source="network",
    )


# =============================================================================
# Duration Tests
# =============================================================================


class TestCalculateDuration:
    """Tests for calculate_duration."""

    def test_same_day(self):
        assert calculate_duration("20:30", "22:47") == "2h 17m"

    def test_next_day_by_offset(self):
        assert calculate_duration("20:30", "07:35", 1, 2) == "11h 5m"

    def test_wraps_midnight_without_day_offset(self):
        assert calculate_duration("23:00", "01:30") == "2h 30m"

    @pytest.mark.parametrize("dep,arr", [("--", "07:35"), ("20:30", "--"), (None, "07:35")])
    def test_missing_time(self, dep, arr):
        assert calculate_duration(dep, arr) == "N.A."


# =============================================================================
# Static Lookup Tests
# =============================================================================


class TestStaticSchedule:
    """Tests for the built-in timetables."""

    def test_full_route(self):
        lookup = lookup_static_schedule("12733", "SC", "TPTY")

        assert lookup.boarding_time == "20:30"
        assert lookup.arrival_time == "07:35"
        assert lookup.duration == "11h 5m"
        assert lookup.train_name == "NARAYANADRI SF EXP"
        assert lookup.source == "static"

    def test_intermediate_stops(self):
        lookup = lookup_static_schedule("12301", "CNB", "HWH")

        assert lookup.boarding_time == "21:53"
        assert lookup.arrival_time == "09:55"
        assert lookup.duration == "12h 2m"

    def test_station_not_on_route(self):
        assert lookup_static_schedule("12733", "NLR", "LPI") is None

    def test_unknown_train(self):
        assert lookup_static_schedule("99999", "SC", "TPTY") is None


# =============================================================================
# API Client Tests
# =============================================================================


class TestScheduleApiClient:
    """Tests for ScheduleApiClient."""

    @pytest.mark.asyncio
    async def test_fetch_schedule_success(self, api_client, mock_response):
        mock_response.json.return_value = {
            "trainName": "NARAYANADRI EXP",
            "schedule": [
                {"stationCode": "TPTY", "departureTime": "19:30", "day": 1},
                {"stationCode": "NLR", "arrivalTime": "21:33", "departureTime": "21:35", "day": 1},
                {"stationCode": "SC", "arrivalTime": "08:30", "day": 2},
            ],
        }

        with patch.object(api_client, "_client") as mock_client:
            mock_client.get = AsyncMock(return_value=mock_response)
            result = await api_client.fetch_schedule("12734", "NLR", "SC")

            mock_client.get.assert_awaited_once_with(
                "http://schedule.test/trains/getSchedule/12734"
            )

        assert result.success
        assert result.lookup.boarding_time == "21:35"
        assert result.lookup.arrival_time == "08:30"
        assert result.lookup.duration == "10h 55m"
        assert result.lookup.train_name == "NARAYANADRI EXP"
        assert result.lookup.source == "network"

    @pytest.mark.asyncio
    async def test_fetch_schedule_snake_case_payload(self, api_client, mock_response):
        mock_response.json.return_value = {
            "train_name": "NARAYANADRI EXP",
            "schedule": [
                {"station_code": "NLR", "departure": "21:35"},
                {"station_code": "LPI", "arrival": "06:10", "day": 2},
            ],
        }

        with patch.object(api_client, "_client") as mock_client:
            mock_client.get = AsyncMock(return_value=mock_response)
            result = await api_client.fetch_schedule("12734", "NLR", "LPI")

        assert result.success
        assert result.lookup.duration == "8h 35m"

    @pytest.mark.asyncio
    async def test_fetch_schedule_station_not_found(self, api_client, mock_response):
        mock_response.json.return_value = {
            "schedule": [{"stationCode": "TPTY", "departureTime": "19:30"}],
        }

        with patch.object(api_client, "_client") as mock_client:
            mock_client.get = AsyncMock(return_value=mock_response)
            result = await api_client.fetch_schedule("12734", "NLR", "SC")

        assert result.outcome == ScheduleFetchOutcome.STATION_NOT_FOUND
        assert not result.success

    @pytest.mark.asyncio
    async def test_fetch_schedule_timeout(self, api_client):
        with patch.object(api_client, "_client") as mock_client:
            mock_client.get = AsyncMock(side_effect=httpx.ReadTimeout("timed out"))
            result = await api_client.fetch_schedule("12734", "NLR", "SC")

        assert result.outcome == ScheduleFetchOutcome.TIMEOUT
        assert "timed out" in result.error_message

    @pytest.mark.asyncio
    async def test_fetch_schedule_abandoned_after_timeout(self, mock_response):
        client = ScheduleApiClient(base_url="http://schedule.test", timeout=0.05)

        async def slow_get(url):
            await asyncio.sleep(1)
            return mock_response

        with patch.object(client, "_client") as mock_client:
            mock_client.get = slow_get
            result = await client.fetch_schedule("12734", "NLR", "SC")

        assert result.outcome == ScheduleFetchOutcome.TIMEOUT

    @pytest.mark.asyncio
    async def test_fetch_schedule_http_error(self, api_client, mock_response):
        mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "Service Unavailable",
            request=MagicMock(),
            response=MagicMock(status_code=503),
        )

        with patch.object(api_client, "_client") as mock_client:
            mock_client.get = AsyncMock(return_value=mock_response)
            result = await api_client.fetch_schedule("12734", "NLR", "SC")

        assert result.outcome == ScheduleFetchOutcome.HTTP_ERROR
        assert "503" in result.error_message

    @pytest.mark.asyncio
    async def test_fetch_schedule_invalid_payload(self, api_client, mock_response):
        mock_response.json.return_value = {"message": "train not found"}

        with patch.object(api_client, "_client") as mock_client:
            mock_client.get = AsyncMock(return_value=mock_response)
            result = await api_client.fetch_schedule("12734", "NLR", "SC")

        assert result.outcome == ScheduleFetchOutcome.INVALID_PAYLOAD

    @pytest.mark.asyncio
    async def test_fetch_schedule_invalid_json(self, api_client, mock_response):
        mock_response.json.side_effect = ValueError("Expecting value")

        with patch.object(api_client, "_client") as mock_client:
            mock_client.get = AsyncMock(return_value=mock_response)
            result = await api_client.fetch_schedule("12734", "NLR", "SC")

        assert result.outcome == ScheduleFetchOutcome.INVALID_PAYLOAD

    @pytest.mark.asyncio
    async def test_disabled_client_makes_no_request(self):
        client = ScheduleApiClient(base_url="http://schedule.test", enabled=False)

        with patch.object(client, "_client") as mock_client:
            mock_client.get = AsyncMock()
            result = await client.fetch_schedule("12734", "NLR", "SC")

            mock_client.get.assert_not_awaited()

        assert result.outcome == ScheduleFetchOutcome.DISABLED


# =============================================================================
# Resolver Tests
# =============================================================================


class TestScheduleResolver:
    """Tests for ScheduleResolver."""

    @pytest.fixture
    def mock_api_client(self):
        client = MagicMock(spec=ScheduleApiClient)
        client.fetch_schedule = AsyncMock(
            return_value=ScheduleFetchResult(outcome=ScheduleFetchOutcome.TIMEOUT)
        )
        return client

    @pytest.mark.asyncio
    async def test_static_hit_never_calls_network(self, mock_api_client):
        resolver = ScheduleResolver(api_client=mock_api_client)

        schedule = await resolver.resolve_for_ticket("12733", "SC", "TPTY")

        assert schedule.departure_time == "20:30"
        assert schedule.arrival_time == "07:35"
        assert schedule.duration == "11h 5m"
        assert schedule.source == "static"
        mock_api_client.fetch_schedule.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_static_miss_uses_network(self, mock_api_client, network_lookup):
        mock_api_client.fetch_schedule.return_value = ScheduleFetchResult(
            outcome=ScheduleFetchOutcome.SUCCESS, lookup=network_lookup
        )
        resolver = ScheduleResolver(api_client=mock_api_client)

        schedule = await resolver.resolve_for_ticket("12627", "SBC", "NDLS")

        mock_api_client.fetch_schedule.assert_awaited_once_with("12627", "SBC", "NDLS")
        assert schedule.train_name == "KARNATAKA EXP"
        assert schedule.departure_time == "19:20"
        assert schedule.arrival_time == "09:00"
        assert schedule.duration == "37h 40m"
        assert schedule.source == "network"

    @pytest.mark.asyncio
    async def test_network_failure_falls_back_to_email_times(self, mock_api_client):
        resolver = ScheduleResolver(api_client=mock_api_client)

        schedule = await resolver.resolve_for_ticket(
            "12733",
            "NLR",
            "LPI",
            email_train_name="NARAYANADRI SF",
            email_departure="21:35",
        )

        mock_api_client.fetch_schedule.assert_awaited_once()
        assert schedule.departure_time == "21:35"
        assert schedule.arrival_time == "N.A."
        assert schedule.duration == "N.A."
        assert schedule.train_name == "NARAYANADRI SF"
        assert schedule.source == "email"

    @pytest.mark.asyncio
    async def test_network_exception_is_swallowed(self, mock_api_client):
        mock_api_client.fetch_schedule.side_effect = RuntimeError("connection reset")
        resolver = ScheduleResolver(api_client=mock_api_client)

        assert await resolver.resolve("12627", "SBC", "NDLS") is None
        mock_api_client.fetch_schedule.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_no_train_number_skips_network(self, mock_api_client):
        resolver = ScheduleResolver(api_client=mock_api_client)

        schedule = await resolver.resolve_for_ticket(None, "NLR", "LPI")

        mock_api_client.fetch_schedule.assert_not_awaited()
        assert schedule.train_name == "Unknown Train"
        assert schedule.departure_time == "N.A."

    @pytest.mark.asyncio
    async def test_train_name_from_common_trains(self):
        resolver = ScheduleResolver()

        schedule = await resolver.resolve_for_ticket("12627", "SBC", "NDLS")

        assert schedule.train_name == "KARNATAKA EXP"

    def test_placeholder_time_falls_through_to_email(self):
        lookup = ScheduleLookupResult(
            train_number="12733",
            boarding_time="--",
            arrival_time="07:35",
            duration="N.A.",
            source="static",
        )

        schedule = ScheduleResolver().finalize(lookup, "12733", email_departure="20:30")

        assert schedule.departure_time == "20:30"
        assert schedule.arrival_time == "07:35"
        assert schedule.train_name == "NARAYANADRI SF EXP"
