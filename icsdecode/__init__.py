"""iCalendar content-line lexer and VEVENT property decoder."""

__version__ = "0.1.0"

from .config import DecoderSettings, get_settings, load_settings, reset_settings
from .decoder import decode_property
from .exceptions import (
    ContentLineError,
    ICSDecodeError,
    InvalidDateTimeValueError,
    InvalidDateValueError,
    InvalidEnumValueError,
    InvalidIntegerValueError,
    InvalidRecurrenceRuleValueError,
    IoFailureError,
    LexerClosedError,
    MalformedContentLineError,
    PropertyDecodeError,
    SemanticConflictError,
    TextEncodingError,
    UnexpectedEndOfInputError,
    UnrecognizedParameterNameError,
    UnrecognizedPropertyNameError,
)
from .lexer import Lexer, feed_records, iter_content_lines
from .logging_config import configure_logging
from .models import (
    ContentLine,
    Count,
    EventClass,
    EventStatus,
    FloatingDateTime,
    Frequency,
    LocalDateTime,
    Param,
    Rrule,
    Transparency,
    Until,
    UtcDateTime,
    VEventProperty,
    VEventPropertyKind,
    Weekday,
    WeekdayNum,
)
from .registry import ExtensionName, ParamName, PropertyName, lookup_param, lookup_property
from .rrule import parse_rrule
from .stream import DecodeResult, decode_stream
from .values import (
    parse_date,
    parse_datetime,
    parse_enum,
    parse_integer,
    parse_utc_datetime,
    parse_when,
    parse_when_list,
)

__all__ = [
    "ContentLine",
    "ContentLineError",
    "Count",
    "DecodeResult",
    "DecoderSettings",
    "EventClass",
    "EventStatus",
    "ExtensionName",
    "FloatingDateTime",
    "Frequency",
    "ICSDecodeError",
    "InvalidDateTimeValueError",
    "InvalidDateValueError",
    "InvalidEnumValueError",
    "InvalidIntegerValueError",
    "InvalidRecurrenceRuleValueError",
    "IoFailureError",
    "Lexer",
    "LexerClosedError",
    "LocalDateTime",
    "MalformedContentLineError",
    "Param",
    "ParamName",
    "PropertyDecodeError",
    "PropertyName",
    "Rrule",
    "SemanticConflictError",
    "TextEncodingError",
    "Transparency",
    "UnexpectedEndOfInputError",
    "UnrecognizedParameterNameError",
    "UnrecognizedPropertyNameError",
    "Until",
    "UtcDateTime",
    "VEventProperty",
    "VEventPropertyKind",
    "Weekday",
    "WeekdayNum",
    "configure_logging",
    "decode_property",
    "decode_stream",
    "feed_records",
    "get_settings",
    "iter_content_lines",
    "load_settings",
    "lookup_param",
    "lookup_property",
    "parse_date",
    "parse_datetime",
    "parse_enum",
    "parse_integer",
    "parse_rrule",
    "parse_utc_datetime",
    "parse_when",
    "parse_when_list",
    "reset_settings",
]
