"""Value parsers for iCalendar property values.

Pure functions that turn raw (already unescaped) strings into typed values.
They raise PropertyDecodeError subclasses without a line number; the property
decoder attaches the owning content line's line number.
"""

import logging
import re
from datetime import date, datetime
from enum import Enum
from typing import Optional, TypeVar

from .exceptions import (
    InvalidDateTimeValueError,
    InvalidDateValueError,
    InvalidEnumValueError,
    InvalidIntegerValueError,
    SemanticConflictError,
)
from .models import ContentLine, DateTime, FloatingDateTime, LocalDateTime, UtcDateTime, When
from .registry import ParamName

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)

UTC_TZID_CONFLICT = "UTC time must not have a timezone reference"


def _is_ascii_digits(s: str) -> bool:
    return s.isascii() and s.isdigit()


def parse_date(s: str) -> date:
    """Parse a DATE value (YYYYMMDD).

    Args:
        s: Raw value, e.g. "20240229"

    Returns:
        The calendar date

    Raises:
        InvalidDateValueError: If s is not 8 digits or not a real calendar date
    """
    if len(s) != 8 or not _is_ascii_digits(s):
        raise InvalidDateValueError(s)
    try:
        return date(int(s[0:4]), int(s[4:6]), int(s[6:8]))
    except ValueError as e:
        raise InvalidDateValueError(s) from e


def attach_tzid(value: DateTime, tzid: str, raw: str) -> DateTime:
    """Bind a timezone reference to a parsed date-time.

    Args:
        value: Parsed date-time
        tzid: Timezone reference from the TZID parameter
        raw: Original value string, for error reporting

    Returns:
        A LocalDateTime for floating input

    Raises:
        SemanticConflictError: If value is a UTC date-time
        RuntimeError: If value already carries a timezone reference
    """
    if isinstance(value, FloatingDateTime):
        return LocalDateTime(value.value, tzid)
    if isinstance(value, UtcDateTime):
        raise SemanticConflictError(raw, UTC_TZID_CONFLICT)
    raise RuntimeError(f"Timezone reference already attached to {value!r}")


def parse_datetime(s: str, tzid: Optional[str] = None) -> DateTime:
    """Parse a DATE-TIME value (YYYYMMDDTHHMMSS with optional trailing Z).

    Args:
        s: Raw value, e.g. "20240101T090000Z"
        tzid: Timezone reference from the owning content line, if any

    Returns:
        UtcDateTime for a trailing Z, LocalDateTime when tzid is given,
        otherwise FloatingDateTime

    Raises:
        InvalidDateTimeValueError: If s is not a valid DATE-TIME
        SemanticConflictError: If s is UTC and tzid is given
    """
    date_part, separator, time_part = s.partition("T")
    if not separator or len(time_part) < 6:
        raise InvalidDateTimeValueError(s)
    try:
        day = parse_date(date_part)
    except InvalidDateValueError as e:
        raise InvalidDateTimeValueError(s) from e

    clock, suffix = time_part[:6], time_part[6:]
    if not _is_ascii_digits(clock) or suffix not in ("", "Z"):
        raise InvalidDateTimeValueError(s)
    try:
        moment = datetime(day.year, day.month, day.day, int(clock[0:2]), int(clock[2:4]), int(clock[4:6]))
    except ValueError as e:
        raise InvalidDateTimeValueError(s) from e

    result: DateTime = UtcDateTime(moment) if suffix == "Z" else FloatingDateTime(moment)
    if tzid is not None:
        result = attach_tzid(result, tzid, s)
    return result


def parse_utc_datetime(s: str) -> UtcDateTime:
    """Parse a DATE-TIME value that must be in UTC (DTSTAMP, CREATED, ...).

    Raises:
        InvalidDateTimeValueError: If s is not a UTC DATE-TIME
    """
    result = parse_datetime(s)
    if not isinstance(result, UtcDateTime):
        raise InvalidDateTimeValueError(s, f"Expected a UTC DATE-TIME value: {s!r}")
    return result


def _is_date_valued(content_line: ContentLine) -> bool:
    value_type = content_line.value_of(ParamName.VALUE)
    return value_type is not None and value_type.upper() == "DATE"


def _parse_when_value(s: str, date_valued: bool, tzid: Optional[str]) -> When:
    if date_valued:
        return parse_date(s)
    return parse_datetime(s, tzid)


def parse_when(content_line: ContentLine) -> When:
    """Parse a DATE or DATE-TIME property value.

    VALUE=DATE selects DATE; otherwise the value is a DATE-TIME bound to the
    line's TZID parameter, if present.
    """
    return _parse_when_value(content_line.value, _is_date_valued(content_line), content_line.tzid)


def parse_when_list(content_line: ContentLine) -> list[When]:
    """Parse a comma-separated list of DATE or DATE-TIME values (EXDATE, RDATE).

    Every entry shares the line's VALUE and TZID parameters.
    """
    date_valued = _is_date_valued(content_line)
    tzid = content_line.tzid
    return [_parse_when_value(item, date_valued, tzid) for item in content_line.value.split(",")]


def parse_integer(s: str) -> int:
    """Parse an INTEGER value (optional sign followed by ASCII digits).

    Raises:
        InvalidIntegerValueError: If s is not an integer
    """
    if not _INTEGER_RE.fullmatch(s):
        raise InvalidIntegerValueError(s)
    return int(s)


def parse_enum(enum_cls: type[E], s: str) -> E:
    """Parse a token of a closed enumeration, ignoring ASCII case.

    Raises:
        InvalidEnumValueError: If s is not a member of enum_cls
    """
    try:
        return enum_cls(s.upper())
    except ValueError as e:
        raise InvalidEnumValueError(s, f"Invalid {enum_cls.__name__} value: {s!r}") from e
