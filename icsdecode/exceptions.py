"""ICS decoding exceptions for error handling.

Lexer errors derive from ContentLineError and describe problems with the
structure of a content line. Decoder errors derive from PropertyDecodeError and
describe a property value that does not match its declared data type. Every
error carries the 1-based source line where the offending record began.
"""

from typing import Optional


class ICSDecodeError(Exception):
    """Base exception for all content-line and property decoding errors."""

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"While parsing line {self.line}: {self.message}"


class LexerClosedError(ICSDecodeError):
    """Raised when a lexer is used after an unrecoverable error."""


class ContentLineError(ICSDecodeError):
    """Base exception for structural errors raised by the lexer.

    Recoverable errors leave the lexer positioned at the start of the next
    record, so the caller may keep pulling content lines.
    """

    recoverable = True


class UnexpectedEndOfInputError(ContentLineError):
    """The byte stream ended in the middle of a content line."""

    recoverable = False

    def __init__(self, line: Optional[int] = None):
        super().__init__("Unexpected end of input", line)


class IoFailureError(ContentLineError):
    """The underlying byte source raised an I/O error."""

    recoverable = False


class TextEncodingError(ContentLineError):
    """A parameter value or property value is not valid UTF-8."""


class UnrecognizedPropertyNameError(ContentLineError):
    """The property name is not in the registry."""

    def __init__(self, raw: bytes, line: Optional[int] = None):
        super().__init__(f"Unrecognized property name: {raw!r}", line)
        self.raw = raw


class UnrecognizedParameterNameError(ContentLineError):
    """The parameter name is not in the registry."""

    def __init__(self, raw: bytes, line: Optional[int] = None):
        super().__init__(f"Unrecognized parameter name: {raw!r}", line)
        self.raw = raw


class MalformedContentLineError(ContentLineError):
    """The content line does not follow the name/params/value grammar.

    Raised when:
    - A property or parameter name is empty
    - A parameter name is not followed by '='
    - Text follows a closing quote before the next delimiter
    - A logical line ends inside a parameter list
    - A record exceeds the configured maximum length
    """


class PropertyDecodeError(ICSDecodeError):
    """Base exception for property values that cannot be decoded.

    Value parsers raise these without a line number; the property decoder
    fills in the line of the owning content line before re-raising.
    """

    datatype = "property"

    def __init__(self, raw: str, message: Optional[str] = None, line: Optional[int] = None):
        super().__init__(message or f"Invalid {self.datatype} value: {raw!r}", line)
        self.raw = raw


class InvalidDateValueError(PropertyDecodeError):
    """Value is not a DATE (YYYYMMDD)."""

    datatype = "DATE"


class InvalidDateTimeValueError(PropertyDecodeError):
    """Value is not a DATE-TIME (YYYYMMDDTHHMMSS[Z])."""

    datatype = "DATE-TIME"


class InvalidRecurrenceRuleValueError(PropertyDecodeError):
    """Value is not a valid RECUR rule."""

    datatype = "RECUR"


class InvalidEnumValueError(PropertyDecodeError):
    """Value is not one of the allowed enumeration tokens."""

    datatype = "enumerated"


class InvalidIntegerValueError(PropertyDecodeError):
    """Value is not an INTEGER."""

    datatype = "INTEGER"


class SemanticConflictError(PropertyDecodeError):
    """Value and parameters contradict each other.

    Raised when:
    - A UTC date-time (trailing 'Z') also carries a TZID parameter
    """

    datatype = "conflicting"
