"""IRCTC booking confirmation email parser."""

from railticket.models.ticket import ChartStatus, ParsedTicket, UNKNOWN
from railticket.parsers.dates import parse_ticket_date
from railticket.parsers.extractors import extract_fields
from railticket.parsers.normalizer import normalize_email_text
from railticket.parsers.passengers import parse_passengers
from railticket.parsers.status import resolve_booking_status
from railticket.services.schedule_resolver import ScheduleResolver, create_schedule_resolver
from railticket.utils.logger import get_logger

logger = get_logger(__name__)


# =============================================================================
# Ticket Email Parser
# =============================================================================


class TicketEmailParser:
    """
    Parser for IRCTC e-ticket booking confirmation emails.

    Extraction never fails on missing fields: each field has a fallback
    chain ending in a default, so every email yields a complete record that
    can be corrected during review.
    """

    def __init__(self, schedule_resolver: ScheduleResolver | None = None):
        """
        Initialize parser.

        Args:
            schedule_resolver: Resolver for train times; defaults to one
                configured from settings (static timetables, then the API)
        """
        self.schedule_resolver = schedule_resolver or create_schedule_resolver()

    async def parse(self, raw_text: str, source_name: str = "memory") -> ParsedTicket:
        """
        Parse a booking confirmation email.

        Args:
            raw_text: Email content (plain text, HTML or quoted-printable)
            source_name: Name for logging

        Returns:
            ParsedTicket
        """
        text = normalize_email_text(raw_text)

        logger.debug(
            "parsing_ticket_email",
            source=source_name,
            text_length=len(text),
        )

        fields = extract_fields(text)
        passengers = parse_passengers(text)
        status = resolve_booking_status(passengers, text)

        train_number = fields.train.number if fields.train else None
        boarding_code = fields.boarding_code
        destination_code = fields.destination_code

        schedule = await self.schedule_resolver.resolve_for_ticket(
            train_number,
            boarding_code,
            destination_code,
            email_train_name=fields.train.name if fields.train else None,
            email_departure=fields.departure_time,
            email_arrival=fields.arrival_time,
        )

        ticket = ParsedTicket(
            pnr=fields.pnr or UNKNOWN,
            train_number=train_number or UNKNOWN,
            train_name=schedule.train_name,
            journey_date=parse_ticket_date(fields.journey_date_text),
            booking_date=parse_ticket_date(fields.booking_date_text),
            boarding_station=fields.boarding.name if fields.boarding else UNKNOWN,
            boarding_station_code=boarding_code,
            destination_station=fields.destination.name if fields.destination else UNKNOWN,
            destination_station_code=destination_code,
            departure_time=schedule.departure_time,
            arrival_time=schedule.arrival_time,
            duration=schedule.duration,
            travel_class=fields.travel_class,
            quota=fields.quota,
            passengers=passengers,
            total_fare=fields.total_fare,
            status=status,
            chart_status=ChartStatus.NOT_PREPARED,
        )

        logger.info(
            "ticket_email_parsed",
            source=source_name,
            pnr=ticket.pnr,
            train=ticket.train_number,
            route=f"{ticket.boarding_station_code}-{ticket.destination_station_code}",
            journey_date=str(ticket.journey_date),
            passengers=ticket.passenger_count,
            status=ticket.status.value,
            schedule_source=schedule.source,
        )

        return ticket


# =============================================================================
# Convenience Functions
# =============================================================================


async def parse_ticket_email(
    raw_text: str,
    schedule_resolver: ScheduleResolver | None = None,
) -> ParsedTicket:
    """
    Convenience function to parse one booking confirmation email.

    Args:
        raw_text: Email content
        schedule_resolver: Optional resolver; if omitted, one is created from
            settings and closed before returning

    Returns:
        ParsedTicket
    """
    if schedule_resolver is not None:
        return await TicketEmailParser(schedule_resolver).parse(raw_text)

    resolver = create_schedule_resolver()
    try:
        return await TicketEmailParser(resolver).parse(raw_text)
    finally:
        await resolver.aclose()
