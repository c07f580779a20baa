"""Pattern-based field extractors for IRCTC booking confirmation text."""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Callable, Generic, NamedTuple, TypeVar

from railticket.models.ticket import TravelClass
from railticket.reference import CLASS_NAME_TO_CODE, lookup_class_name
from railticket.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


# =============================================================================
# Extraction Rules
# =============================================================================


@dataclass(frozen=True)
class ExtractionRule(Generic[T]):
    """A regex and the function turning its match into a typed value."""

    pattern: re.Pattern
    extract: Callable[[re.Match], T | None]


@dataclass(frozen=True)
class FieldSpec(Generic[T]):
    """Ordered extraction rules for one field; the first non-None value wins."""

    name: str
    rules: tuple[ExtractionRule[T], ...]
    default: T | None = None

    def extract(self, text: str) -> T | None:
        """Return the first value produced by a rule, or None."""
        for index, rule in enumerate(self.rules):
            match = rule.pattern.search(text)
            if not match:
                continue

            value = rule.extract(match)
            if value is not None:
                logger.debug(
                    "field_extracted",
                    field=self.name,
                    rule=index,
                    value=str(value)[:50],
                )
                return value

        return None

    def resolve(self, text: str) -> T | None:
        """Like extract(), but falls back to the field default."""
        value = self.extract(text)
        return self.default if value is None else value


def _rule(
    pattern: str,
    extract: Callable[[re.Match], T | None] | None = None,
    flags: int = re.IGNORECASE,
) -> ExtractionRule[T]:
    return ExtractionRule(re.compile(pattern, flags), extract or _first_group)


def _first_group(match: re.Match) -> str | None:
    return match.group(1).strip() or None


# =============================================================================
# Typed values
# =============================================================================


class TrainIdentity(NamedTuple):
    number: str
    name: str


class StationRef(NamedTuple):
    name: str
    code: str


def _train(match: re.Match) -> TrainIdentity | None:
    name = match.group(2).strip()
    if not name:
        return None
    return TrainIdentity(number=match.group(1), name=name)


def _station(match: re.Match) -> StationRef | None:
    name = match.group(1).strip()
    return StationRef(name=name or "Unknown", code=match.group(2).upper())


def _upper(match: re.Match) -> str | None:
    return match.group(1).strip().upper() or None


def _amount(match: re.Match) -> Decimal | None:
    try:
        return Decimal(match.group(1).replace(",", ""))
    except InvalidOperation:
        return None


def _count(match: re.Match) -> int | None:
    return int(match.group(1))


def match_travel_class(value: str) -> TravelClass | None:
    """
    Map a class as printed on the ticket to its code.

    Accepts a code ('3A'), a full name ('THIRD AC') or a full name followed by
    trailing words ('SLEEPER CLASS (SL)').
    """
    travel_class = TravelClass.from_code(value) or lookup_class_name(value)
    if travel_class:
        return travel_class

    lowered = " ".join(value.lower().split())
    for name in sorted(CLASS_NAME_TO_CODE, key=len, reverse=True):
        if lowered.startswith(name + " "):
            return CLASS_NAME_TO_CODE[name]
    return None


def _labelled_class(match: re.Match) -> TravelClass:
    # An explicit "Class :" label is final; unknown names fall back to Sleeper
    return match_travel_class(match.group(1)) or TravelClass.SLEEPER


def _class_token(match: re.Match) -> TravelClass | None:
    return match_travel_class(match.group(1))


# =============================================================================
# Field Specs
# =============================================================================

_CODE = r"((?-i:[A-Z]{2,5}))"
_DATE_MON = r"(\d{1,2}[-/][A-Za-z]{3}[-/]\d{4})"
_DATE_NUM = r"(\d{1,2}[-/]\d{1,2}[-/]\d{4})"
_TIME = r"(\d{1,2}:\d{2}(?:\s*[AP]M)?)"
_AMOUNT = r"([0-9][0-9,]*(?:\.[0-9]{1,2})?)"

PNR: FieldSpec[str] = FieldSpec(
    name="pnr",
    rules=(
        # "PNR No. : 4938302790"
        _rule(r"PNR\s*(?:No\.?|Number)?\s*[:\s]\s*(\d{10})(?!\d)"),
        # "4938302790 is your PNR"
        _rule(r"(?<!\d)(\d{10})\s*(?:is\s+your\s+PNR|PNR)"),
    ),
    default="Unknown",
)

TRAIN: FieldSpec[TrainIdentity] = FieldSpec(
    name="train",
    rules=(
        # "Train No. / Name : 12733 / NARAYANADRI SF Quota"
        _rule(
            r"Train\s*(?:No\.?\s*/\s*Name|Number)[:\s]*(\d{5})\s*[/\s]+([A-Za-z\s]+?)"
            r"(?=\s+(?:Quota|on|from)\b)",
            _train,
        ),
        # "12733 - NARAYANADRI SF Class"
        _rule(
            r"(?<!\d)(\d{5})\s*[-/]\s*([A-Za-z\s]+?)(?=\s+(?:Quota|Class|From)\b)",
            _train,
        ),
    ),
)

QUOTA: FieldSpec[str] = FieldSpec(
    name="quota",
    rules=(_rule(r"Quota\s*[:\s]\s*((?-i:[A-Z]+))\b", _upper),),
    default="GENERAL",
)

TRAVEL_CLASS: FieldSpec[TravelClass] = FieldSpec(
    name="travel_class",
    rules=(
        # "Class : SLEEPER CLASS From"
        _rule(
            r"\bClass\s*[:\s]\s*([A-Za-z0-9\s]+?)"
            r"(?=\s+(?:From|Transaction|Date|Quota|Boarding|Distance|To)\b|\s*$)",
            _labelled_class,
        ),
        _rule(
            r"\b((?i:SLEEPER\s*CLASS|FIRST\s*AC|SECOND\s*AC|THIRD\s*AC)"
            r"|1A|2A|3A|SL|CC|2S|3E|EC|FC)\b",
            _class_token,
            flags=0,
        ),
    ),
    default=TravelClass.SLEEPER,
)

BOARDING_STATION: FieldSpec[StationRef] = FieldSpec(
    name="boarding_station",
    rules=(
        # "From : NELLORE (NLR)"
        _rule(r"\bFrom\s*[:\s]\s*([A-Za-z\s]+?)\s*\(" + _CODE + r"\)", _station),
    ),
)

DESTINATION_STATION: FieldSpec[StationRef] = FieldSpec(
    name="destination_station",
    rules=(
        # "To : LINGAMPALLI (LPI)", "Reservation Upto : ..."
        _rule(
            r"\b(?:To|Destination|Reserv(?:ation)?\s*(?:Upto|Up\s*To))\b[:\s-]*"
            r"([A-Za-z\s]+?)\s*\(" + _CODE + r"\)",
            _station,
        ),
        # "... to TIRUPATI (TPTY)", "→ TIRUPATI (TPTY)"
        _rule(r"(?:\bto|→)\s*([A-Za-z\s]+?)\s*\(" + _CODE + r"\)", _station),
    ),
)

BOARDING_POINT: FieldSpec[str] = FieldSpec(
    name="boarding_point",
    rules=(
        # "Boarding At : NLR"
        _rule(r"\bBoarding\s+At\s*:\s*" + _CODE + r"\b"),
        # "Boarding At : NELLORE (NLR)"
        _rule(r"\bBoarding\s+At\s*:\s*[A-Za-z\s]*?\(" + _CODE + r"\)"),
    ),
)

JOURNEY_DATE: FieldSpec[str] = FieldSpec(
    name="journey_date",
    rules=(
        _rule(r"Date\s*(?:of)?\s*Journey\s*[:\s]\s*" + _DATE_MON),
        _rule(r"Date\s*(?:of)?\s*Journey\s*[:\s]\s*" + _DATE_NUM),
    ),
)

BOOKING_DATE: FieldSpec[str] = FieldSpec(
    name="booking_date",
    rules=(
        # "Date & Time of Booking : 03-Jan-2026 09:17:40 PM HRS"
        _rule(r"Date\s*&\s*Time\s*of\s*Booking\s*[:\s]\s*" + _DATE_MON),
        _rule(r"Date\s*&\s*Time\s*of\s*Booking\s*[:\s]\s*" + _DATE_NUM),
    ),
)

DEPARTURE_TIME: FieldSpec[str] = FieldSpec(
    name="departure_time",
    rules=(_rule(r"(?:Scheduled\s+)?Departure\*?\s*[:\s]\s*" + _TIME),),
)

ARRIVAL_TIME: FieldSpec[str] = FieldSpec(
    name="arrival_time",
    rules=(_rule(r"(?:Scheduled\s+)?Arrival\*?\s*[:\s]\s*" + _TIME),),
)

FARE: FieldSpec[Decimal] = FieldSpec(
    name="total_fare",
    rules=(
        # "Rs. 768.60 *#", "₹1,250"
        _rule(r"(?:\b(?:Rs\.?|INR)|₹)\s*" + _AMOUNT + r"\s*\*?#?", _amount),
        _rule(r"Total\s*Fare[:\s]*(?:Rs\.?|INR|₹)?\s*" + _AMOUNT, _amount),
    ),
    default=Decimal("0"),
)

ADULT_COUNT: FieldSpec[int] = FieldSpec(
    name="adult_count",
    rules=(_rule(r"Adults?\s*[:\s]\s*(\d+)", _count),),
)

FIELDS: dict[str, FieldSpec] = {
    field_spec.name: field_spec
    for field_spec in (
        PNR,
        TRAIN,
        QUOTA,
        TRAVEL_CLASS,
        BOARDING_STATION,
        DESTINATION_STATION,
        BOARDING_POINT,
        JOURNEY_DATE,
        BOOKING_DATE,
        DEPARTURE_TIME,
        ARRIVAL_TIME,
        FARE,
        ADULT_COUNT,
    )
}


# =============================================================================
# Extraction Functions
# =============================================================================


def extract_pnr(text: str) -> str | None:
    return PNR.extract(text)


def extract_train(text: str) -> TrainIdentity | None:
    return TRAIN.extract(text)


def extract_quota(text: str) -> str:
    return QUOTA.resolve(text)


def extract_travel_class(text: str) -> TravelClass:
    """Travel class code; 'Sleeper Class' -> SL, unrecognized names -> SL."""
    return TRAVEL_CLASS.resolve(text)


def extract_boarding(text: str) -> StationRef | None:
    return BOARDING_STATION.extract(text)


def extract_destination(text: str) -> StationRef | None:
    return DESTINATION_STATION.extract(text)


def extract_boarding_point(text: str) -> str | None:
    return BOARDING_POINT.extract(text)


def extract_journey_date_text(text: str) -> str | None:
    return JOURNEY_DATE.extract(text)


def extract_booking_date_text(text: str) -> str | None:
    return BOOKING_DATE.extract(text)


def extract_departure_time(text: str) -> str | None:
    return DEPARTURE_TIME.extract(text)


def extract_arrival_time(text: str) -> str | None:
    return ARRIVAL_TIME.extract(text)


def extract_fare(text: str) -> Decimal:
    return FARE.resolve(text)


def extract_adult_count(text: str) -> int | None:
    return ADULT_COUNT.extract(text)


# =============================================================================
# All fields at once
# =============================================================================


@dataclass(frozen=True)
class ExtractedFields:
    """Raw per-field results for one email, before defaults and schedule lookup."""

    pnr: str | None
    train: TrainIdentity | None
    quota: str
    travel_class: TravelClass
    boarding: StationRef | None
    destination: StationRef | None
    boarding_point: str | None
    journey_date_text: str | None
    booking_date_text: str | None
    departure_time: str | None
    arrival_time: str | None
    total_fare: Decimal

    @property
    def boarding_code(self) -> str:
        """Explicit boarding point wins over the 'From' station code."""
        if self.boarding_point:
            return self.boarding_point
        if self.boarding:
            return self.boarding.code
        return "UNK"

    @property
    def destination_code(self) -> str:
        return self.destination.code if self.destination else "UNK"


def extract_fields(text: str) -> ExtractedFields:
    """Run every field extractor over normalized text."""
    return ExtractedFields(
        pnr=extract_pnr(text),
        train=extract_train(text),
        quota=extract_quota(text),
        travel_class=extract_travel_class(text),
        boarding=extract_boarding(text),
        destination=extract_destination(text),
        boarding_point=extract_boarding_point(text),
        journey_date_text=extract_journey_date_text(text),
        booking_date_text=extract_booking_date_text(text),
        departure_time=extract_departure_time(text),
        arrival_time=extract_arrival_time(text),
        total_fare=extract_fare(text),
    )
