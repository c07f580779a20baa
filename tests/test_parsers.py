"""Tests for text normalization, field extraction and date parsing."""

import pytest
from datetime import date
from decimal import Decimal

from railticket.models.ticket import TravelClass
from railticket.parsers.dates import parse_ticket_date
from railticket.parsers.extractors import (
    StationRef,
    TrainIdentity,
    extract_boarding,
    extract_boarding_point,
    extract_destination,
    extract_fare,
    extract_fields,
    extract_pnr,
    extract_quota,
    extract_train,
    extract_travel_class,
    match_travel_class,
)
from railticket.parsers.normalizer import normalize_email_text


# =============================================================================
# Normalizer Tests
# =============================================================================


class TestNormalizeEmailText:
    """Tests for normalize_email_text."""

    def test_strips_tags_and_collapses_whitespace(self):
        assert normalize_email_text("<p>PNR</p>\n\n<b>No.</b>") == " PNR No. "

    def test_drops_style_and_script_blocks(self):
        raw = "<style>td { color: red; }</style>Fare<script>var x = 1;</script>"
        assert normalize_email_text(raw) == "Fare"

    def test_decodes_entities(self):
        assert normalize_email_text("A&nbsp;&amp;&nbsp;B &lt;x&gt;") == "A & B <x>"

    def test_removes_numeric_entities(self):
        assert normalize_email_text("Fare &#8377;768") == "Fare 768"

    def test_quoted_printable_soft_break_and_escape(self):
        assert normalize_email_text("Total Fa=\nre=3A Rs. 768") == "Total Fare: Rs. 768"

    def test_quoted_printable_multibyte_sequence(self):
        assert normalize_email_text("Fare =E2=82=B9768.60") == "Fare ₹768.60"

    def test_quoted_printable_non_utf8_byte(self):
        assert normalize_email_text("Caf=E9") == "Café"

    def test_empty_input(self):
        assert normalize_email_text("") == ""


# =============================================================================
# Field Extractor Tests
# =============================================================================


class TestFieldExtractors:
    """Tests for single-field extractors on normalized text."""

    @pytest.fixture
    def text(self, ticket_email):
        return normalize_email_text(ticket_email)

    def test_pnr_labelled(self, text):
        assert extract_pnr(text) == "4938302790"

    def test_pnr_trailing_form(self):
        assert extract_pnr("Dear user, 2345678901 is your PNR for travel") == "2345678901"

    def test_pnr_missing(self):
        assert extract_pnr("PNR No. : 12345") is None

    def test_train(self, text):
        assert extract_train(text) == TrainIdentity("12733", "NARAYANADRI SF")

    def test_train_dash_form(self):
        assert extract_train("12734 - NARAYANADRI EXP Class : 3A") == TrainIdentity(
            "12734", "NARAYANADRI EXP"
        )

    def test_quota(self, text):
        assert extract_quota(text) == "GENERAL"

    def test_quota_default(self):
        assert extract_quota("no quota line here") == "GENERAL"

    def test_quota_ignores_prose(self):
        assert extract_quota("Tatkal quota tickets are non-refundable") == "GENERAL"

    def test_quota_labelled_value(self):
        assert extract_quota("Quota : TATKAL Class : 3A") == "TATKAL"

    def test_stations(self, text):
        assert extract_boarding(text) == StationRef("NELLORE", "NLR")
        assert extract_destination(text) == StationRef("LINGAMPALLI", "LPI")

    def test_destination_reservation_upto(self):
        text = "Reservation Upto : TIRUPATI (TPTY)"
        assert extract_destination(text) == StationRef("TIRUPATI", "TPTY")

    def test_destination_arrow_form(self):
        assert extract_destination("SECUNDERABAD (SC) → TIRUPATI (TPTY)") == StationRef(
            "TIRUPATI", "TPTY"
        )

    def test_boarding_point(self):
        assert extract_boarding_point("Boarding At : NLR Distance : 550 KM") == "NLR"
        assert extract_boarding_point("Boarding At : NELLORE (NLR)") == "NLR"

    def test_boarding_point_overrides_from_code(self):
        fields = extract_fields("From : SECUNDERABAD (SC) Boarding At : LPI To : TIRUPATI (TPTY)")
        assert fields.boarding_code == "LPI"
        assert fields.destination_code == "TPTY"

    def test_uppercase_boarding_at_with_station_name(self):
        fields = extract_fields(
            "FROM : SECUNDERABAD (SC) BOARDING AT : LINGAMPALLI (LPI) TO : TIRUPATI (TPTY)"
        )
        assert fields.boarding_point == "LPI"
        assert fields.boarding_code == "LPI"

    def test_other_boarding_labels_do_not_override_from_code(self):
        fields = extract_fields(
            "FROM : SECUNDERABAD (SC) BOARDING DATE : 10-FEB-2026 TO : TIRUPATI (TPTY)"
        )
        assert fields.boarding_point is None
        assert fields.boarding_code == "SC"

    def test_missing_station_codes_default(self):
        fields = extract_fields("nothing useful")
        assert fields.boarding_code == "UNK"
        assert fields.destination_code == "UNK"

    def test_fare_rupee_symbol_with_grouping(self):
        assert extract_fare("Amount paid ₹1,250.50") == Decimal("1250.50")

    def test_fare_total_fare_label(self):
        assert extract_fare("Total Fare : 890") == Decimal("890")

    def test_fare_default(self):
        assert extract_fare("09:17:40 PM HRS") == Decimal("0")

    def test_extract_fields(self, text):
        fields = extract_fields(text)

        assert fields.pnr == "4938302790"
        assert fields.travel_class == TravelClass.SLEEPER
        assert fields.journey_date_text == "10-Feb-2026"
        assert fields.booking_date_text == "03-Jan-2026"
        assert fields.total_fare == Decimal("768.60")
        assert fields.departure_time is None


class TestTravelClass:
    """Tests for travel class extraction."""

    def test_sleeper_class_label(self):
        assert extract_travel_class("Class : Sleeper Class From : NELLORE (NLR)") == TravelClass.SLEEPER

    def test_unknown_class_label_falls_back_to_sleeper(self):
        assert extract_travel_class("Class : Luxury Class From : NELLORE (NLR)") == TravelClass.SLEEPER

    def test_code_label(self):
        assert extract_travel_class("Class : 3A Quota : TATKAL") == TravelClass.THIRD_AC

    def test_full_name_label(self):
        assert extract_travel_class("Class : THIRD AC (3A) Date") == TravelClass.THIRD_AC

    def test_bare_code_token(self):
        assert extract_travel_class("12627 KARNATAKA EXP 2A NDLS-SBC") == TravelClass.SECOND_AC

    def test_default(self):
        assert extract_travel_class("no class information") == TravelClass.SLEEPER

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("SL", TravelClass.SLEEPER),
            ("cc", TravelClass.CHAIR_CAR),
            ("AC 3 Economy", TravelClass.THIRD_AC_ECONOMY),
            ("First Class", TravelClass.FIRST_CLASS),
            ("SLEEPER CLASS (SL)", TravelClass.SLEEPER),
            ("Luxury", None),
        ],
    )
    def test_match_travel_class(self, value, expected):
        assert match_travel_class(value) == expected


# =============================================================================
# Date Tests
# =============================================================================


class TestParseTicketDate:
    """Tests for parse_ticket_date."""

    def test_month_abbreviation(self):
        assert parse_ticket_date("10-Feb-2026") == date(2026, 2, 10)

    def test_full_month_name(self):
        assert parse_ticket_date("10-February-2026") == date(2026, 2, 10)

    def test_numeric(self):
        assert parse_ticket_date("10/02/2026") == date(2026, 2, 10)

    @pytest.mark.parametrize(
        "value",
        ["31-Feb-2026", "10-Foo-2026", "garbage", "10-02", "", None, "99/99/99999999999999999999"],
    )
    def test_malformed_returns_today(self, value):
        assert parse_ticket_date(value) == date.today()
