"""Registry of IANA property and parameter names.

Property names and parameter names are two independent closed vocabularies.
Each member's value is the canonical token text, so ``PropertyName("DTSTART")``
and ``PropertyName.DTSTART.value`` are exact inverses. Names outside the
registry can be carried as ExtensionName when extensions are enabled.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class PropertyName(str, Enum):
    """Registered property names (RFC 5545 section 8.3.2) plus BEGIN/END."""

    CALSCALE = "CALSCALE"
    METHOD = "METHOD"
    PRODID = "PRODID"
    VERSION = "VERSION"
    ATTACH = "ATTACH"
    CATEGORIES = "CATEGORIES"
    CLASS = "CLASS"
    COMMENT = "COMMENT"
    DESCRIPTION = "DESCRIPTION"
    GEO = "GEO"
    LOCATION = "LOCATION"
    PERCENT_COMPLETE = "PERCENT-COMPLETE"
    PRIORITY = "PRIORITY"
    RESOURCES = "RESOURCES"
    STATUS = "STATUS"
    SUMMARY = "SUMMARY"
    COMPLETED = "COMPLETED"
    DTEND = "DTEND"
    DUE = "DUE"
    DTSTART = "DTSTART"
    DURATION = "DURATION"
    FREEBUSY = "FREEBUSY"
    TRANSP = "TRANSP"
    TZID = "TZID"
    TZNAME = "TZNAME"
    TZOFFSETFROM = "TZOFFSETFROM"
    TZOFFSETTO = "TZOFFSETTO"
    TZURL = "TZURL"
    ATTENDEE = "ATTENDEE"
    CONTACT = "CONTACT"
    ORGANIZER = "ORGANIZER"
    RECURRENCE_ID = "RECURRENCE-ID"
    RELATED_TO = "RELATED-TO"
    URL = "URL"
    UID = "UID"
    EXDATE = "EXDATE"
    EXRULE = "EXRULE"
    RDATE = "RDATE"
    RRULE = "RRULE"
    ACTION = "ACTION"
    REPEAT = "REPEAT"
    TRIGGER = "TRIGGER"
    CREATED = "CREATED"
    DTSTAMP = "DTSTAMP"
    LAST_MODIFIED = "LAST-MODIFIED"
    SEQUENCE = "SEQUENCE"
    REQUEST_STATUS = "REQUEST-STATUS"
    # Component delimiters
    BEGIN = "BEGIN"
    END = "END"


class ParamName(str, Enum):
    """Registered property parameter names (RFC 5545 section 8.3.3)."""

    ALTREP = "ALTREP"
    CN = "CN"
    CUTYPE = "CUTYPE"
    DELEGATED_FROM = "DELEGATED-FROM"
    DELEGATED_TO = "DELEGATED-TO"
    DIR = "DIR"
    ENCODING = "ENCODING"
    FMTTYPE = "FMTTYPE"
    FBTYPE = "FBTYPE"
    LANGUAGE = "LANGUAGE"
    MEMBER = "MEMBER"
    PARTSTAT = "PARTSTAT"
    RANGE = "RANGE"
    RELATED = "RELATED"
    RELTYPE = "RELTYPE"
    ROLE = "ROLE"
    RSVP = "RSVP"
    SENT_BY = "SENT-BY"
    TZID = "TZID"
    VALUE = "VALUE"


@dataclass(frozen=True)
class ExtensionName:
    """A property or parameter name that is not in the registry.

    Holds the raw token bytes exactly as they appeared in the source.
    """

    raw: bytes

    @property
    def value(self) -> str:
        """Token text; names only ever contain ASCII letters, digits and '-'."""
        return self.raw.decode("ascii")


PropertyTag = Union[PropertyName, ExtensionName]
ParamTag = Union[ParamName, ExtensionName]

_PROPERTY_TABLE: dict[bytes, PropertyName] = {
    member.value.encode("ascii"): member for member in PropertyName
}
_PARAM_TABLE: dict[bytes, ParamName] = {member.value.encode("ascii"): member for member in ParamName}


def lookup_property(raw: bytes) -> Optional[PropertyName]:
    """Look up a property name token, ignoring ASCII case.

    Args:
        raw: Token bytes as read from the source

    Returns:
        The registered PropertyName, or None if the token is not registered
    """
    return _PROPERTY_TABLE.get(bytes(raw).upper())


def lookup_param(raw: bytes) -> Optional[ParamName]:
    """Look up a parameter name token, ignoring ASCII case."""
    return _PARAM_TABLE.get(bytes(raw).upper())


def token_bytes(tag: Union[PropertyTag, ParamTag]) -> bytes:
    """Return the token bytes for a registered or extension name."""
    if isinstance(tag, ExtensionName):
        return tag.raw
    return tag.value.encode("ascii")
