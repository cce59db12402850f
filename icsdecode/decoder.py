"""VEVENT property decoder.

Maps one ContentLine to one VEventProperty by dispatching on the property
name. Registered properties without a decoder (and BEGIN/END) become
UNKNOWN markers, logged at debug level. Properties outside the registry
become EXTENDED and keep their content line.
"""

import logging
from typing import Any, Callable

from .exceptions import PropertyDecodeError
from .models import (
    ContentLine,
    EventClass,
    EventStatus,
    Transparency,
    VEventProperty,
    VEventPropertyKind,
)
from .registry import ExtensionName, ParamName, PropertyName
from .rrule import parse_rrule
from .values import (
    parse_enum,
    parse_integer,
    parse_utc_datetime,
    parse_when,
    parse_when_list,
)

logger = logging.getLogger(__name__)

PropertyParser = Callable[[ContentLine], Any]


def _text(content_line: ContentLine) -> str:
    return content_line.value


def _utc_datetime(content_line: ContentLine) -> Any:
    return parse_utc_datetime(content_line.value)


def _integer(content_line: ContentLine) -> int:
    return parse_integer(content_line.value)


def _rrule(content_line: ContentLine) -> Any:
    return parse_rrule(content_line.value)


def _enum(enum_cls: type) -> PropertyParser:
    def parse(content_line: ContentLine) -> Any:
        return parse_enum(enum_cls, content_line.value)

    return parse


PROPERTY_PARSERS: dict[PropertyName, PropertyParser] = {
    PropertyName.DTSTART: parse_when,
    PropertyName.DTEND: parse_when,
    PropertyName.RECURRENCE_ID: parse_when,
    PropertyName.DTSTAMP: _utc_datetime,
    PropertyName.CREATED: _utc_datetime,
    PropertyName.LAST_MODIFIED: _utc_datetime,
    PropertyName.SUMMARY: _text,
    PropertyName.DESCRIPTION: _text,
    PropertyName.LOCATION: _text,
    PropertyName.UID: _text,
    PropertyName.COMMENT: _text,
    PropertyName.CONTACT: _text,
    PropertyName.URL: _text,
    PropertyName.ORGANIZER: _text,
    PropertyName.RELATED_TO: _text,
    PropertyName.RRULE: _rrule,
    PropertyName.EXRULE: _rrule,
    PropertyName.CLASS: _enum(EventClass),
    PropertyName.STATUS: _enum(EventStatus),
    PropertyName.TRANSP: _enum(Transparency),
    PropertyName.PRIORITY: _integer,
    PropertyName.SEQUENCE: _integer,
    PropertyName.EXDATE: parse_when_list,
    PropertyName.RDATE: parse_when_list,
}


def _unknown(content_line: ContentLine, reason: str) -> VEventProperty:
    logger.debug(
        "VEVENT property not decoded (%s): %s at line %d",
        reason,
        content_line.name.value,
        content_line.line,
    )
    return VEventProperty(
        kind=VEventPropertyKind.UNKNOWN, line=content_line.line, content_line=content_line
    )


def decode_property(content_line: ContentLine) -> VEventProperty:
    """Decode a content line into a typed VEVENT property.

    Args:
        content_line: Lexed content line

    Returns:
        Decoded property, an UNKNOWN marker or an EXTENDED pass-through

    Raises:
        PropertyDecodeError: If the value does not match the property's type;
            the error's `line` is the content line's source line
    """
    name = content_line.name
    if isinstance(name, ExtensionName):
        return VEventProperty(
            kind=VEventPropertyKind.EXTENDED,
            value=content_line.value,
            line=content_line.line,
            content_line=content_line,
        )

    parser = PROPERTY_PARSERS.get(name)
    if parser is None:
        reason = "component delimiter" if name in (PropertyName.BEGIN, PropertyName.END) else "no decoder"
        return _unknown(content_line, reason)

    value_type = content_line.value_of(ParamName.VALUE)
    if name == PropertyName.RDATE and value_type is not None and value_type.upper() == "PERIOD":
        return _unknown(content_line, "PERIOD values")

    try:
        value = parser(content_line)
    except PropertyDecodeError as e:
        e.line = content_line.line
        raise

    return VEventProperty(kind=VEventPropertyKind(name.value), value=value, line=content_line.line)
