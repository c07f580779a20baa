"""Static Indian Railways reference data: timetables, train names, class names."""

from types import MappingProxyType
from typing import Mapping

from railticket.models.schedule import StationStop, TrainSchedule
from railticket.models.ticket import BookingStatus, TravelClass


# =============================================================================
# Timetables
# =============================================================================


def _stop(code: str, name: str, arrival: str, departure: str, day: int) -> StationStop:
    return StationStop(
        code=code,
        name=name,
        arrival_time=arrival,
        departure_time=departure,
        day=day,
    )


_SCHEDULES = [
    TrainSchedule(
        train_number="12733",
        train_name="NARAYANADRI SF EXP",
        stations=[
            _stop("SC", "Secunderabad Jn", "--", "20:30", 1),
            _stop("LPI", "Lingampalli", "20:56", "20:58", 1),
            _stop("MBNR", "Mahabubnagar", "22:45", "22:47", 1),
            _stop("KRN", "Kurnool City", "00:48", "00:50", 2),
            _stop("GTL", "Guntakal Jn", "02:30", "02:40", 2),
            _stop("GY", "Gooty", "03:02", "03:04", 2),
            _stop("YNPD", "Yerraguntla", "04:23", "04:25", 2),
            _stop("KDP", "Kadapa", "05:00", "05:02", 2),
            _stop("NRE", "Nandalur", "05:40", "05:42", 2),
            _stop("RU", "Renigunta Jn", "07:00", "07:05", 2),
            _stop("TPTY", "Tirupati", "07:35", "--", 2),
        ],
    ),
    TrainSchedule(
        train_number="12734",
        train_name="NARAYANADRI SF EXP",
        stations=[
            _stop("TPTY", "Tirupati", "--", "19:30", 1),
            _stop("RU", "Renigunta Jn", "19:50", "19:55", 1),
            _stop("NLR", "Nellore", "21:33", "21:35", 1),
            _stop("OGL", "Ongole", "23:08", "23:10", 1),
            _stop("GNT", "Guntur Jn", "01:10", "01:15", 2),
            _stop("BZA", "Vijayawada Jn", "02:30", "02:40", 2),
            _stop("KI", "Khammam", "04:53", "04:55", 2),
            _stop("WL", "Warangal", "06:28", "06:30", 2),
            _stop("SC", "Secunderabad Jn", "08:30", "--", 2),
        ],
    ),
    TrainSchedule(
        train_number="12259",
        train_name="SEALDAH DURONTO",
        stations=[
            _stop("NDLS", "New Delhi", "--", "19:15", 1),
            _stop("SDAH", "Sealdah", "12:30", "--", 2),
        ],
    ),
    TrainSchedule(
        train_number="12301",
        train_name="HOWRAH RAJDHANI",
        stations=[
            _stop("NDLS", "New Delhi", "--", "16:55", 1),
            _stop("CNB", "Kanpur Central", "21:48", "21:53", 1),
            _stop("ALD", "Prayagraj Jn", "00:25", "00:30", 2),
            _stop("MGS", "Mughal Sarai", "02:40", "02:50", 2),
            _stop("GAYA", "Gaya Jn", "05:15", "05:20", 2),
            _stop("DHN", "Dhanbad Jn", "07:25", "07:30", 2),
            _stop("ASN", "Asansol Jn", "08:20", "08:23", 2),
            _stop("HWH", "Howrah Jn", "09:55", "--", 2),
        ],
    ),
]

TRAIN_SCHEDULES: Mapping[str, TrainSchedule] = MappingProxyType(
    {schedule.train_number: schedule for schedule in _SCHEDULES}
)


# =============================================================================
# Train names by number
# =============================================================================

COMMON_TRAINS: Mapping[str, str] = MappingProxyType({
    "12733": "NARAYANADRI SF EXP",
    "12734": "NARAYANADRI SF EXP",
    "12259": "SEALDAH DURONTO",
    "12260": "DURONTO EXP",
    "12301": "HOWRAH RAJDHANI",
    "12302": "NEW DELHI RAJDHANI",
    "12951": "MUMBAI RAJDHANI",
    "12952": "DELHI RAJDHANI",
    "12627": "KARNATAKA EXP",
    "12628": "KARNATAKA EXP",
    "12723": "TELANGANA EXP",
    "12724": "TELANGANA EXP",
    "12785": "AP SAMPARK KRANTI",
    "12786": "AP SAMPARK KRANTI",
    "11019": "KONARK EXPRESS",
    "11020": "KONARK EXPRESS",
    "12615": "GRAND TRUNK EXP",
    "12616": "GRAND TRUNK EXP",
})


# =============================================================================
# Travel classes
# =============================================================================

TRAIN_CLASSES: Mapping[TravelClass, str] = MappingProxyType(
    {travel_class: travel_class.label for travel_class in TravelClass}
)

# Full class names as printed by IRCTC, lowercase
CLASS_NAME_TO_CODE: Mapping[str, TravelClass] = MappingProxyType({
    "sleeper class": TravelClass.SLEEPER,
    "sleeper": TravelClass.SLEEPER,
    "first ac": TravelClass.FIRST_AC,
    "first class ac": TravelClass.FIRST_AC,
    "ac first class": TravelClass.FIRST_AC,
    "second ac": TravelClass.SECOND_AC,
    "second class ac": TravelClass.SECOND_AC,
    "ac 2 tier": TravelClass.SECOND_AC,
    "third ac": TravelClass.THIRD_AC,
    "third class ac": TravelClass.THIRD_AC,
    "ac 3 tier": TravelClass.THIRD_AC,
    "chair car": TravelClass.CHAIR_CAR,
    "ac chair car": TravelClass.CHAIR_CAR,
    "second sitting": TravelClass.SECOND_SITTING,
    "ac 3 economy": TravelClass.THIRD_AC_ECONOMY,
    "executive class": TravelClass.EXECUTIVE_CHAIR_CAR,
    "exec. chair car": TravelClass.EXECUTIVE_CHAIR_CAR,
    "first class": TravelClass.FIRST_CLASS,
})


# =============================================================================
# Ticket statuses
# =============================================================================

# Raw booking tokens as printed on tickets, with display labels
TICKET_STATUSES: Mapping[str, str] = MappingProxyType({
    "CNF": BookingStatus.CONFIRMED.label,
    "WL": BookingStatus.WAITLISTED.label,
    "RAC": BookingStatus.RAC.label,
    "CAN": BookingStatus.CANCELLED.label,
    "GNWL": "General Waiting List",
    "RLWL": "Remote Location WL",
    "PQWL": "Pooled Quota WL",
})


def get_train_schedule(train_number: str) -> TrainSchedule | None:
    """Return the static timetable for a train, or None if it is not tabulated."""
    return TRAIN_SCHEDULES.get(train_number)


def get_common_train_name(train_number: str) -> str | None:
    return COMMON_TRAINS.get(train_number)


def lookup_class_name(name: str) -> TravelClass | None:
    """Map a full class name ('Sleeper Class', 'THIRD AC') to its code."""
    return CLASS_NAME_TO_CODE.get(" ".join(name.lower().split()))
