"""Search and listing helpers over saved tickets."""

from datetime import date
from typing import Iterable

from pydantic import BaseModel

from railticket.models.ticket import BookingStatus, ParsedTicket


class TicketFilters(BaseModel):
    """Ticket list filters. Unset fields do not filter."""

    search_query: str | None = None
    date_from: date | None = None
    date_to: date | None = None
    status: BookingStatus | None = None
    source: str | None = None
    destination: str | None = None
    passenger_name: str | None = None
    train_number: str | None = None


def _contains(haystack: str, needle: str) -> bool:
    return needle.lower() in haystack.lower()


def _matches_search(ticket: ParsedTicket, query: str) -> bool:
    return (
        _contains(ticket.pnr, query)
        or _contains(ticket.train_name, query)
        or _contains(ticket.train_number, query)
        or _contains(ticket.boarding_station, query)
        or _contains(ticket.destination_station, query)
        or any(_contains(p.name, query) for p in ticket.passengers)
    )


def matches_filters(ticket: ParsedTicket, filters: TicketFilters) -> bool:
    """True if the ticket passes every filter that is set."""
    if filters.search_query and not _matches_search(ticket, filters.search_query):
        return False

    if filters.date_from and ticket.journey_date < filters.date_from:
        return False
    if filters.date_to and ticket.journey_date > filters.date_to:
        return False
    if filters.status and ticket.status != filters.status:
        return False

    if filters.source and not (
        _contains(ticket.boarding_station, filters.source)
        or _contains(ticket.boarding_station_code, filters.source)
    ):
        return False

    if filters.destination and not (
        _contains(ticket.destination_station, filters.destination)
        or _contains(ticket.destination_station_code, filters.destination)
    ):
        return False

    if filters.passenger_name and not any(
        _contains(p.name, filters.passenger_name) for p in ticket.passengers
    ):
        return False

    # Train number match is case-sensitive substring
    if filters.train_number and filters.train_number not in ticket.train_number:
        return False

    return True


def filter_tickets(
    tickets: Iterable[ParsedTicket],
    filters: TicketFilters,
) -> list[ParsedTicket]:
    return [ticket for ticket in tickets if matches_filters(ticket, filters)]


def recent_tickets(tickets: Iterable[ParsedTicket], count: int = 5) -> list[ParsedTicket]:
    """Most recently booked tickets first."""
    return sorted(tickets, key=lambda t: t.booking_date, reverse=True)[:count]


def upcoming_tickets(
    tickets: Iterable[ParsedTicket],
    today: date | None = None,
) -> list[ParsedTicket]:
    """Journeys after today that are not cancelled, soonest first."""
    today = today or date.today()
    return sorted(
        (
            t
            for t in tickets
            if t.journey_date > today and t.status != BookingStatus.CANCELLED
        ),
        key=lambda t: t.journey_date,
    )


def tickets_by_station(tickets: Iterable[ParsedTicket], station: str) -> list[ParsedTicket]:
    """Tickets boarding or alighting at a station (name or code, substring match)."""
    return [
        t
        for t in tickets
        if _contains(t.boarding_station, station)
        or _contains(t.boarding_station_code, station)
        or _contains(t.destination_station, station)
        or _contains(t.destination_station_code, station)
    ]
