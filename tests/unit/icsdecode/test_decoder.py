"""Unit tests for the VEVENT property decoder."""

from datetime import date, datetime

import pytest

from icsdecode.config import DecoderSettings
from icsdecode.decoder import PROPERTY_PARSERS, decode_property
from icsdecode.exceptions import (
    InvalidDateTimeValueError,
    InvalidEnumValueError,
    InvalidIntegerValueError,
    InvalidRecurrenceRuleValueError,
    SemanticConflictError,
)
from icsdecode.lexer import Lexer
from icsdecode.models import (
    ContentLine,
    Count,
    EventClass,
    EventStatus,
    FloatingDateTime,
    Frequency,
    LocalDateTime,
    Transparency,
    UtcDateTime,
    VEventPropertyKind,
)
from icsdecode.registry import ExtensionName, PropertyName

pytestmark = pytest.mark.unit


def decode_one(data: bytes, settings: DecoderSettings):
    content_line = Lexer(data, settings).next_content_line()
    assert content_line is not None
    return decode_property(content_line)


class TestDecodedProperties:
    """Tests for properties with a decoder."""

    def test_dtstart_with_tzid(self, settings: DecoderSettings) -> None:
        prop = decode_one(b"DTSTART;TZID=America/New_York:20240108T090000\r\n", settings)

        assert prop.kind == VEventPropertyKind.DTSTART
        assert prop.value == LocalDateTime(datetime(2024, 1, 8, 9), "America/New_York")
        assert prop.line == 1
        assert prop.is_decoded
        assert prop.content_line is None

    def test_dtend_date(self, settings: DecoderSettings) -> None:
        prop = decode_one(b"DTEND;VALUE=DATE:20240110\r\n", settings)

        assert prop.kind == VEventPropertyKind.DTEND
        assert prop.value == date(2024, 1, 10)

    def test_recurrence_id_floating(self, settings: DecoderSettings) -> None:
        prop = decode_one(b"RECURRENCE-ID:20240110T100000\r\n", settings)

        assert prop.kind == VEventPropertyKind.RECURRENCE_ID
        assert prop.value == FloatingDateTime(datetime(2024, 1, 10, 10))

    @pytest.mark.parametrize("name", [b"DTSTAMP", b"CREATED", b"LAST-MODIFIED"])
    def test_utc_properties(self, settings: DecoderSettings, name: bytes) -> None:
        prop = decode_one(name + b":20240101T120000Z\r\n", settings)

        assert prop.kind.value == name.decode()
        assert prop.value == UtcDateTime(datetime(2024, 1, 1, 12))

    def test_utc_property_rejects_floating(self, settings: DecoderSettings) -> None:
        with pytest.raises(InvalidDateTimeValueError):
            decode_one(b"DTSTAMP:20240101T120000\r\n", settings)

    @pytest.mark.parametrize(
        "name",
        [b"SUMMARY", b"DESCRIPTION", b"LOCATION", b"UID", b"COMMENT", b"CONTACT", b"URL", b"ORGANIZER", b"RELATED-TO"],
    )
    def test_text_properties(self, settings: DecoderSettings, name: bytes) -> None:
        """Test text values pass through already unescaped."""
        prop = decode_one(name + b":a\\, b\\nc\r\n", settings)

        assert prop.kind.value == name.decode()
        assert prop.value == "a, b\nc"

    def test_rrule(self, settings: DecoderSettings) -> None:
        prop = decode_one(b"RRULE:FREQ=WEEKLY;COUNT=5;BYDAY=MO,WE,FR\r\n", settings)

        assert prop.kind == VEventPropertyKind.RRULE
        assert prop.value.freq == Frequency.WEEKLY
        assert prop.value.stop == Count(5)

    def test_exrule(self, settings: DecoderSettings) -> None:
        prop = decode_one(b"EXRULE:FREQ=DAILY\r\n", settings)

        assert prop.kind == VEventPropertyKind.EXRULE

    @pytest.mark.parametrize(
        ("data", "kind", "expected"),
        [
            (b"CLASS:private\r\n", VEventPropertyKind.CLASS, EventClass.PRIVATE),
            (b"STATUS:CANCELLED\r\n", VEventPropertyKind.STATUS, EventStatus.CANCELLED),
            (b"TRANSP:TRANSPARENT\r\n", VEventPropertyKind.TRANSP, Transparency.TRANSPARENT),
            (b"PRIORITY:1\r\n", VEventPropertyKind.PRIORITY, 1),
            (b"SEQUENCE:3\r\n", VEventPropertyKind.SEQUENCE, 3),
        ],
    )
    def test_enumerated_and_integer_properties(
        self, settings: DecoderSettings, data: bytes, kind: VEventPropertyKind, expected: object
    ) -> None:
        prop = decode_one(data, settings)

        assert prop.kind == kind
        assert prop.value == expected

    def test_exdate_list(self, settings: DecoderSettings) -> None:
        prop = decode_one(b"EXDATE:20240101T090000Z,20240108T090000Z\r\n", settings)

        assert prop.kind == VEventPropertyKind.EXDATE
        assert prop.value == [
            UtcDateTime(datetime(2024, 1, 1, 9)),
            UtcDateTime(datetime(2024, 1, 8, 9)),
        ]

    def test_rdate_dates(self, settings: DecoderSettings) -> None:
        prop = decode_one(b"RDATE;VALUE=DATE:20240101,20240201\r\n", settings)

        assert prop.value == [date(2024, 1, 1), date(2024, 2, 1)]

    def test_every_decoded_kind_has_a_parser(self) -> None:
        """Test the dispatch table covers every decoded kind."""
        decoded_kinds = {
            kind.value
            for kind in VEventPropertyKind
            if kind not in (VEventPropertyKind.UNKNOWN, VEventPropertyKind.EXTENDED)
        }

        assert decoded_kinds == {name.value for name in PROPERTY_PARSERS}


class TestUndecodedProperties:
    """Tests for UNKNOWN and EXTENDED properties."""

    @pytest.mark.parametrize("data", [b"BEGIN:VEVENT\r\n", b"END:VEVENT\r\n", b"GEO:37.3;-122.0\r\n"])
    def test_unknown(self, settings: DecoderSettings, data: bytes) -> None:
        """Test registered names without a decoder keep their content line."""
        prop = decode_one(data, settings)

        assert prop.kind == VEventPropertyKind.UNKNOWN
        assert prop.value is None
        assert prop.content_line is not None
        assert not prop.is_decoded

    def test_rdate_period_is_unknown(self, settings: DecoderSettings) -> None:
        prop = decode_one(b"RDATE;VALUE=PERIOD:20240101T090000Z/PT1H\r\n", settings)

        assert prop.kind == VEventPropertyKind.UNKNOWN
        assert prop.content_line.name == PropertyName.RDATE

    def test_extension(self, lenient_settings: DecoderSettings) -> None:
        prop = decode_one(b"X-MICROSOFT-CDO-BUSYSTATUS:BUSY\r\n", lenient_settings)

        assert prop.kind == VEventPropertyKind.EXTENDED
        assert prop.value == "BUSY"
        assert prop.content_line.name == ExtensionName(b"X-MICROSOFT-CDO-BUSYSTATUS")


class TestDecodeErrors:
    """Tests for values that do not match their property's type."""

    @pytest.mark.parametrize(
        ("value", "error"),
        [
            ("STATUS:NEEDS-ACTION", InvalidEnumValueError),
            ("PRIORITY:high", InvalidIntegerValueError),
            ("RRULE:COUNT=3", InvalidRecurrenceRuleValueError),
            ("DTSTART:tomorrow", InvalidDateTimeValueError),
            ("DTSTART;TZID=Europe/Paris:20240101T090000Z", SemanticConflictError),
        ],
    )
    def test_error_carries_line(self, settings: DecoderSettings, value: str, error: type) -> None:
        """Test the error reports the content line's source line."""
        data = b"UID:1\r\nSUMMARY:a\r\n b\r\n" + value.encode() + b"\r\n"
        lexer = Lexer(data, settings)
        lexer.next_content_line()
        lexer.next_content_line()
        content_line = lexer.next_content_line()

        with pytest.raises(error) as exc_info:
            decode_property(content_line)

        assert exc_info.value.line == 4
        assert str(exc_info.value).startswith("While parsing line 4: ")

    def test_direct_content_line(self) -> None:
        """Test decoding a hand-built content line."""
        content_line = ContentLine(name=PropertyName.SEQUENCE, params=(), value="x", line=12)

        with pytest.raises(InvalidIntegerValueError) as exc_info:
            decode_property(content_line)

        assert exc_info.value.line == 12
