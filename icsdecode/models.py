"""Data models for content lines and decoded VEVENT properties."""

from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo
from enum import Enum
from typing import Any, Optional, Union
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict

from .registry import ParamName, ParamTag, PropertyTag


@dataclass(frozen=True)
class Param:
    """A property parameter: name plus its values in source order."""

    name: ParamTag
    values: tuple[str, ...]


@dataclass(frozen=True)
class ContentLine:
    """One logical record after unfolding and escape decoding.

    Attributes:
        name: Property name tag (or extension name)
        params: Parameters in source order
        value: Unescaped property value
        line: 1-based source line where the record began
    """

    name: PropertyTag
    params: tuple[Param, ...]
    value: str
    line: int

    def params_named(self, name: ParamTag) -> list[Param]:
        """Return every parameter with the given name, in source order."""
        return [param for param in self.params if param.name == name]

    def values_of(self, name: ParamTag) -> Optional[tuple[str, ...]]:
        """Return the values of the first parameter with the given name."""
        for param in self.params:
            if param.name == name:
                return param.values
        return None

    def value_of(self, name: ParamTag) -> Optional[str]:
        """Return the first value of the first parameter with the given name."""
        values = self.values_of(name)
        if not values:
            return None
        return values[0]

    @property
    def tzid(self) -> Optional[str]:
        """Timezone reference from the TZID parameter, if any."""
        return self.value_of(ParamName.TZID)


# Date-time variants


@dataclass(frozen=True)
class UtcDateTime:
    """A date-time with a trailing 'Z'; never carries a timezone reference."""

    value: datetime

    def to_aware(self) -> datetime:
        return self.value.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class LocalDateTime:
    """A date-time bound to a timezone reference (TZID parameter)."""

    value: datetime
    tzid: str

    def to_aware(self) -> datetime:
        """Attach the referenced IANA zone.

        Raises:
            zoneinfo.ZoneInfoNotFoundError: If tzid is not an IANA zone name
        """
        return self.value.replace(tzinfo=ZoneInfo(self.tzid))


@dataclass(frozen=True)
class FloatingDateTime:
    """A date-time with no zone, interpreted in the observer's local context."""

    value: datetime

    def to_aware(self, tz: tzinfo) -> datetime:
        return self.value.replace(tzinfo=tz)


DateTime = Union[UtcDateTime, LocalDateTime, FloatingDateTime]
When = Union[date, UtcDateTime, LocalDateTime, FloatingDateTime]


# Recurrence rule


class Frequency(str, Enum):
    """RRULE FREQ values."""

    SECONDLY = "SECONDLY"
    MINUTELY = "MINUTELY"
    HOURLY = "HOURLY"
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class Weekday(str, Enum):
    """Two-letter weekday tags used by BYDAY and WKST."""

    MO = "MO"
    TU = "TU"
    WE = "WE"
    TH = "TH"
    FR = "FR"
    SA = "SA"
    SU = "SU"


@dataclass(frozen=True)
class WeekdayNum:
    """A BYDAY entry such as "MO" (every Monday) or "-1FR" (last Friday)."""

    weekday: Weekday
    ordinal: Optional[int] = None


@dataclass(frozen=True)
class Until:
    """Recurrence bounded by an end date or date-time."""

    when: When


@dataclass(frozen=True)
class Count:
    """Recurrence bounded by a number of occurrences."""

    count: int


Stop = Union[Until, Count]


@dataclass(frozen=True)
class Rrule:
    """A parsed recurrence rule.

    BY* fields are None when the rule part is absent; present lists keep the
    order in which they appeared.
    """

    freq: Frequency
    stop: Optional[Stop] = None
    interval: Optional[int] = None
    wkst: Optional[Weekday] = None
    bysecond: Optional[tuple[int, ...]] = None
    byminute: Optional[tuple[int, ...]] = None
    byhour: Optional[tuple[int, ...]] = None
    bymonth: Optional[tuple[int, ...]] = None
    byyearday: Optional[tuple[int, ...]] = None
    bymonthday: Optional[tuple[int, ...]] = None
    byweekno: Optional[tuple[int, ...]] = None
    bysetpos: Optional[tuple[int, ...]] = None
    byday: Optional[tuple[WeekdayNum, ...]] = None


# Small enumerations


class EventClass(str, Enum):
    """CLASS property values."""

    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"
    CONFIDENTIAL = "CONFIDENTIAL"


class EventStatus(str, Enum):
    """STATUS property values allowed on a VEVENT."""

    TENTATIVE = "TENTATIVE"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class Transparency(str, Enum):
    """TRANSP property values."""

    OPAQUE = "OPAQUE"
    TRANSPARENT = "TRANSPARENT"


class VEventPropertyKind(str, Enum):
    """Kinds of decoded VEVENT properties.

    Decoded kinds reuse the property token text. UNKNOWN marks registered
    properties without a decoder (including BEGIN/END); EXTENDED marks
    properties whose name is outside the registry.
    """

    DTSTART = "DTSTART"
    DTEND = "DTEND"
    RECURRENCE_ID = "RECURRENCE-ID"
    DTSTAMP = "DTSTAMP"
    CREATED = "CREATED"
    LAST_MODIFIED = "LAST-MODIFIED"
    SUMMARY = "SUMMARY"
    DESCRIPTION = "DESCRIPTION"
    LOCATION = "LOCATION"
    UID = "UID"
    COMMENT = "COMMENT"
    CONTACT = "CONTACT"
    URL = "URL"
    ORGANIZER = "ORGANIZER"
    RELATED_TO = "RELATED-TO"
    RRULE = "RRULE"
    EXRULE = "EXRULE"
    CLASS = "CLASS"
    STATUS = "STATUS"
    TRANSP = "TRANSP"
    PRIORITY = "PRIORITY"
    SEQUENCE = "SEQUENCE"
    EXDATE = "EXDATE"
    RDATE = "RDATE"
    UNKNOWN = "UNKNOWN"
    EXTENDED = "EXTENDED"


class VEventProperty(BaseModel):
    """A decoded VEVENT property.

    ``value`` holds the typed value for decoded kinds (When, str, Rrule, enum,
    int or a list of When). UNKNOWN and EXTENDED properties keep the original
    content line instead.
    """

    kind: VEventPropertyKind
    value: Any = None
    line: int
    content_line: Optional[ContentLine] = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_decoded(self) -> bool:
        return self.kind not in (VEventPropertyKind.UNKNOWN, VEventPropertyKind.EXTENDED)
