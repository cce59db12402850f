"""RRULE (RECUR value) parsing.

Parses recurrence rules such as "FREQ=WEEKLY;COUNT=5;BYDAY=MO,WE,FR" into
an Rrule. Only parsing is done here; expanding a rule into occurrence
instants is left to the caller.

Duplicate rule parts are rejected, as is a rule that carries both UNTIL and
COUNT.
"""

import logging
from typing import Any, Callable

from .exceptions import InvalidRecurrenceRuleValueError, PropertyDecodeError
from .models import Count, Frequency, Rrule, Until, Weekday, WeekdayNum, When
from .values import parse_date, parse_datetime, parse_enum, parse_integer

logger = logging.getLogger(__name__)

# Allowed ranges for numeric BY* parts; signed parts also accept the negated range
_NUMERIC_PARTS: dict[str, tuple[int, int, bool]] = {
    "BYSECOND": (0, 60, False),
    "BYMINUTE": (0, 59, False),
    "BYHOUR": (0, 23, False),
    "BYMONTH": (1, 12, False),
    "BYYEARDAY": (1, 366, True),
    "BYMONTHDAY": (1, 31, True),
    "BYWEEKNO": (1, 53, True),
    "BYSETPOS": (1, 366, True),
}

RRULE_KEYS = frozenset({"FREQ", "UNTIL", "COUNT", "INTERVAL", "WKST", "BYDAY", *_NUMERIC_PARTS})


def _in_range(number: int, low: int, high: int, signed: bool) -> bool:
    if signed:
        return low <= abs(number) <= high and number != 0
    return low <= number <= high


def _parse_number_list(key: str, value: str) -> tuple[int, ...]:
    low, high, signed = _NUMERIC_PARTS[key]
    numbers = []
    for item in value.split(","):
        number = parse_integer(item)
        if not _in_range(number, low, high, signed):
            raise ValueError(f"{key} value {number} out of range")
        numbers.append(number)
    return tuple(numbers)


def parse_weekday_num(token: str) -> WeekdayNum:
    """Parse a BYDAY entry: optional signed ordinal followed by a weekday.

    Examples: "MO", "2MO", "-1FR", "+3TU".
    """
    if len(token) < 2:
        raise ValueError(f"Invalid BYDAY entry {token!r}")
    weekday = parse_enum(Weekday, token[-2:])
    if len(token) == 2:
        return WeekdayNum(weekday)
    ordinal = parse_integer(token[:-2])
    if not _in_range(ordinal, 1, 53, True):
        raise ValueError(f"BYDAY ordinal {ordinal} out of range")
    return WeekdayNum(weekday, ordinal)


def _parse_until(value: str) -> Until:
    when: When = parse_datetime(value) if "T" in value else parse_date(value)
    return Until(when)


def _parse_count(value: str) -> Count:
    count = parse_integer(value)
    if count < 0:
        raise ValueError("COUNT must not be negative")
    return Count(count)


def _parse_interval(value: str) -> int:
    interval = parse_integer(value)
    if interval < 1:
        raise ValueError("INTERVAL must be positive")
    return interval


_PART_PARSERS: dict[str, tuple[str, Callable[[str], Any]]] = {
    "FREQ": ("freq", lambda value: parse_enum(Frequency, value)),
    "UNTIL": ("stop", _parse_until),
    "COUNT": ("stop", _parse_count),
    "INTERVAL": ("interval", _parse_interval),
    "WKST": ("wkst", lambda value: parse_enum(Weekday, value)),
    "BYDAY": ("byday", lambda value: tuple(parse_weekday_num(item) for item in value.split(","))),
}


def parse_rrule(s: str) -> Rrule:
    """Parse a RECUR value into an Rrule.

    Args:
        s: Rule text, e.g. "FREQ=MONTHLY;BYDAY=2MO"

    Returns:
        Parsed Rrule with BY* lists in source order

    Raises:
        InvalidRecurrenceRuleValueError: If a part is unknown, duplicated or
            malformed, if both UNTIL and COUNT are given, or if FREQ is missing
    """
    fields: dict[str, Any] = {}
    seen: set[str] = set()

    for part in s.split(";"):
        if not part:
            continue
        key, separator, value = part.partition("=")
        key = key.upper()
        if not separator:
            raise InvalidRecurrenceRuleValueError(s, f"Rule part without '=': {part!r}")
        if key not in RRULE_KEYS:
            raise InvalidRecurrenceRuleValueError(s, f"Unknown rule part {key!r} in {s!r}")
        if key in seen:
            raise InvalidRecurrenceRuleValueError(s, f"Duplicate rule part {key} in {s!r}")
        seen.add(key)

        try:
            if key in _NUMERIC_PARTS:
                fields[key.lower()] = _parse_number_list(key, value)
            else:
                field, parser = _PART_PARSERS[key]
                fields[field] = parser(value)
        except (PropertyDecodeError, ValueError) as e:
            raise InvalidRecurrenceRuleValueError(s, f"Invalid {key} value {value!r} in {s!r}") from e

    if "UNTIL" in seen and "COUNT" in seen:
        raise InvalidRecurrenceRuleValueError(s, f"UNTIL and COUNT are mutually exclusive in {s!r}")
    if "freq" not in fields:
        raise InvalidRecurrenceRuleValueError(s, f"Missing mandatory FREQ in {s!r}")

    rule = Rrule(**fields)
    logger.debug("Parsed RRULE %r -> %s", s, rule)
    return rule
