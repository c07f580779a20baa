"""
Ticket intake: uploaded files in, reviewed ticket records out.

Files are parsed one at a time; a bad file is reported and the rest of the
batch continues. Parsed tickets wait in a ReviewQueue and nothing reaches the
ticket store until it is confirmed.
"""

import email
import email.message
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterable

from railticket.models.ticket import ParsedTicket
from railticket.parsers.email_parser import TicketEmailParser
from railticket.utils.logger import get_logger

logger = get_logger(__name__)


TicketSink = Callable[[dict[str, Any]], Awaitable[None]]


# =============================================================================
# Exceptions
# =============================================================================


class TicketIntakeError(Exception):
    """Base exception for ticket intake errors."""

    pass


class UnsupportedFileError(TicketIntakeError):
    """Uploaded file cannot be read as ticket text."""

    def __init__(self, filename: str, reason: str):
        super().__init__(f"{filename}: {reason}")
        self.filename = filename
        self.reason = reason


# =============================================================================
# Uploaded files
# =============================================================================


@dataclass(frozen=True)
class UploadedFile:
    """One uploaded file as received from the client."""

    filename: str
    content_type: str
    content: bytes

    @property
    def is_pdf(self) -> bool:
        return self.content_type == "application/pdf"

    @property
    def is_mime_message(self) -> bool:
        return self.content_type == "message/rfc822" or self.filename.lower().endswith(".eml")

    @property
    def is_text(self) -> bool:
        return (
            "text" in self.content_type
            or self.is_mime_message
            or self.filename.lower().endswith(".txt")
        )


def _decode(payload: bytes) -> str:
    return payload.decode("utf-8", errors="ignore")


def extract_message_body(content: bytes) -> str:
    """
    Extract the readable body of an RFC 822 message.

    HTML and plain-text parts that are not attachments are decoded (base64
    and quoted-printable included) and joined. Content that is not a MIME
    message, or has no text body, is returned as decoded UTF-8.
    """
    msg = email.message_from_bytes(content)
    if not msg.keys():
        return _decode(content)

    bodies: list[str] = []
    parts: Iterable[email.message.Message] = msg.walk() if msg.is_multipart() else [msg]

    for part in parts:
        content_type = part.get_content_type()
        content_disposition = str(part.get("Content-Disposition", ""))

        if "attachment" in content_disposition:
            continue
        if content_type not in ("text/plain", "text/html"):
            continue

        payload = part.get_payload(decode=True)
        if payload:
            bodies.append(_decode(payload))

    if not bodies:
        logger.debug("mime_body_not_found", parts=len(list(msg.walk())))
        return _decode(content)

    return "\n".join(bodies)


def read_uploaded_text(upload: UploadedFile) -> str:
    """
    Read an uploaded file as email text.

    Raises:
        UnsupportedFileError: For PDFs and non-text files
    """
    if upload.is_pdf:
        raise UnsupportedFileError(upload.filename, "PDF parsing requires backend processing.")

    if not upload.is_text:
        raise UnsupportedFileError(upload.filename, "Unsupported file format.")

    if upload.is_mime_message:
        return extract_message_body(upload.content)

    return _decode(upload.content)


# =============================================================================
# Batch parsing
# =============================================================================


@dataclass
class BatchParseResult:
    """Result of parsing a batch of uploaded files."""

    tickets: list[ParsedTicket] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def total_processed(self) -> int:
        return len(self.tickets) + len(self.errors)

    @property
    def error_message(self) -> str | None:
        """
        User-facing summary.

        Every error when nothing parsed, a count when some files failed,
        None when all succeeded.
        """
        if not self.errors:
            return None
        if not self.tickets:
            return "\n".join(self.errors)
        return f"Parsed {len(self.tickets)} tickets. Errors: {len(self.errors)}"


class TicketIntakeService:
    """Parses uploaded booking emails into tickets awaiting review."""

    def __init__(self, parser: TicketEmailParser | None = None):
        self.parser = parser or TicketEmailParser()

    async def parse_file(self, upload: UploadedFile) -> ParsedTicket:
        """
        Parse a single uploaded file.

        Raises:
            UnsupportedFileError: If the file type cannot be parsed
        """
        text = read_uploaded_text(upload)
        return await self.parser.parse(text, source_name=upload.filename)

    async def parse_batch(self, uploads: Iterable[UploadedFile]) -> BatchParseResult:
        """
        Parse uploaded files in submission order.

        A failure is recorded as "<filename>: <reason>" and does not stop the
        remaining files.
        """
        result = BatchParseResult()

        for upload in uploads:
            try:
                ticket = await self.parse_file(upload)
            except UnsupportedFileError as e:
                logger.warning(
                    "file_rejected",
                    filename=upload.filename,
                    content_type=upload.content_type,
                    reason=e.reason,
                )
                result.errors.append(str(e))
                continue
            except Exception as e:
                logger.error(
                    "file_parse_failed",
                    filename=upload.filename,
                    error=str(e),
                )
                result.errors.append(f"{upload.filename}: {str(e) or 'Failed to parse'}")
                continue

            result.tickets.append(ticket)

        logger.info(
            "batch_parsed",
            total=result.total_processed,
            parsed=len(result.tickets),
            failed=len(result.errors),
        )
        return result


# =============================================================================
# Review
# =============================================================================


class ReviewQueue:
    """
    Cursor over parsed tickets awaiting confirmation.

    Confirmed tickets are handed to the sink as records; skipped tickets are
    dropped. Once the cursor passes the last ticket the queue is empty.
    """

    def __init__(self, tickets: Iterable[ParsedTicket], sink: TicketSink):
        self._tickets: tuple[ParsedTicket, ...] = tuple(tickets)
        self._index = 0
        self._sink = sink

    @property
    def current(self) -> ParsedTicket | None:
        if self._index < len(self._tickets):
            return self._tickets[self._index]
        return None

    @property
    def position(self) -> int:
        """1-based position of the current ticket, 0 when the queue is done."""
        return self._index + 1 if self.current else 0

    @property
    def total(self) -> int:
        return len(self._tickets)

    @property
    def remaining(self) -> int:
        return max(len(self._tickets) - self._index, 0)

    @property
    def is_done(self) -> bool:
        return self.current is None

    def _advance(self) -> None:
        self._index += 1
        if self._index >= len(self._tickets):
            self._clear()

    def _clear(self) -> None:
        self._tickets = ()
        self._index = 0

    async def confirm(self) -> ParsedTicket | None:
        """Save the current ticket and move to the next one."""
        ticket = self.current
        if ticket is None:
            return None

        await self._sink(ticket.to_record())
        logger.info("ticket_confirmed", train=ticket.train_number, position=self.position)
        self._advance()
        return ticket

    def skip(self) -> ParsedTicket | None:
        """Drop the current ticket without saving it."""
        ticket = self.current
        if ticket is None:
            return None

        logger.info("ticket_skipped", train=ticket.train_number, position=self.position)
        self._advance()
        return ticket

    async def confirm_all(self) -> int:
        """Save every ticket still in the queue. Returns the number saved."""
        pending = self._tickets[self._index:]
        for ticket in pending:
            await self._sink(ticket.to_record())

        logger.info("tickets_confirmed_all", count=len(pending))
        self._clear()
        return len(pending)

    def cancel_all(self) -> None:
        """Discard every ticket still in the queue."""
        logger.info("review_cancelled", discarded=self.remaining)
        self._clear()
