"""Command-line entry point for the railway ticket parser."""

import asyncio
import json
import mimetypes
import sys
from pathlib import Path

from railticket.config import get_settings
from railticket.models.ticket import ParsedTicket
from railticket.parsers.email_parser import TicketEmailParser
from railticket.reference import TICKET_STATUSES
from railticket.services.intake_service import TicketIntakeService, UploadedFile
from railticket.services.schedule_resolver import create_schedule_resolver
from railticket.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


USAGE = """Usage:
  railticket parse FILE [FILE ...]       Parse booking emails, print JSON records
  railticket schedule TRAIN FROM TO      Resolve departure/arrival for a journey"""


def load_upload(path: Path) -> UploadedFile:
    """Read a file from disk as if it had been uploaded."""
    content_type, _ = mimetypes.guess_type(path.name)
    if path.suffix.lower() == ".eml":
        content_type = "message/rfc822"
    return UploadedFile(
        filename=path.name,
        content_type=content_type or "application/octet-stream",
        content=path.read_bytes(),
    )


def _print_ticket_summary(ticket: ParsedTicket) -> None:
    print(f"🎫 PNR {ticket.pnr} | {ticket.train_number} {ticket.train_name}", file=sys.stderr)
    print(
        f"   {ticket.boarding_station_code} {ticket.departure_time} → "
        f"{ticket.destination_station_code} {ticket.arrival_time} "
        f"({ticket.duration}) on {ticket.journey_date:%d-%b-%Y}",
        file=sys.stderr,
    )
    print(
        f"   {ticket.travel_class.label} | {ticket.passenger_count} passenger(s) | "
        f"Rs. {ticket.total_fare} | {ticket.status.label}",
        file=sys.stderr,
    )
    for passenger in ticket.passengers:
        status = TICKET_STATUSES.get(passenger.booking_status, passenger.booking_status)
        print(
            f"   👤 {passenger.name} ({passenger.age}/{passenger.gender.value}) "
            f"{passenger.seat_number} - {status}",
            file=sys.stderr,
        )


# =============================================================================
# CLI Commands
# =============================================================================


async def cmd_parse(paths: list[str]) -> int:
    """Parse files and print their records as JSON on stdout."""
    resolver = create_schedule_resolver()
    service = TicketIntakeService(TicketEmailParser(resolver))

    uploads = []
    missing = []
    for raw_path in paths:
        path = Path(raw_path)
        if path.is_file():
            uploads.append(load_upload(path))
        else:
            missing.append(f"{path.name}: File not found.")

    try:
        result = await service.parse_batch(uploads)
    finally:
        await resolver.aclose()

    result.errors.extend(missing)

    for ticket in result.tickets:
        _print_ticket_summary(ticket)

    if result.error_message:
        print(f"\n❌ {result.error_message}", file=sys.stderr)

    records = [ticket.to_record() for ticket in result.tickets]
    print(json.dumps(records, indent=2, ensure_ascii=False))

    return 0 if result.tickets else 1


async def cmd_schedule(train_number: str, boarding_code: str, destination_code: str) -> int:
    """Print the resolved schedule for one journey."""
    resolver = create_schedule_resolver()

    try:
        schedule = await resolver.resolve_for_ticket(
            train_number,
            boarding_code.upper(),
            destination_code.upper(),
        )
    finally:
        await resolver.aclose()

    print(f"\n🚆 {train_number} {schedule.train_name}")
    print(f"   {boarding_code.upper()} dep {schedule.departure_time}")
    print(f"   {destination_code.upper()} arr {schedule.arrival_time}")
    print(f"   Duration: {schedule.duration} (source: {schedule.source})\n")

    return 0


# =============================================================================
# Main
# =============================================================================


def main() -> None:
    """Main entry point."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    command = sys.argv[1] if len(sys.argv) > 1 else None
    args = sys.argv[2:]

    if command == "parse" and args:
        sys.exit(asyncio.run(cmd_parse(args)))
    elif command == "schedule" and len(args) == 3:
        sys.exit(asyncio.run(cmd_schedule(*args)))
    else:
        if command:
            print(f"Unknown command: {command} {' '.join(args)}".rstrip())
        print(USAGE)
        sys.exit(1)


if __name__ == "__main__":
    main()
