"""Tests for the icsdecode exception hierarchy."""

import pytest

from icsdecode.exceptions import (
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

pytestmark = pytest.mark.unit


class TestExceptionHierarchy:
    """Test that the exception hierarchy is structured correctly."""

    @pytest.mark.parametrize(
        "exc_class",
        [
            UnexpectedEndOfInputError,
            IoFailureError,
            TextEncodingError,
            UnrecognizedPropertyNameError,
            UnrecognizedParameterNameError,
            MalformedContentLineError,
        ],
    )
    def test_lexer_errors_inherit_from_content_line_error(self, exc_class: type) -> None:
        assert issubclass(exc_class, ContentLineError)
        assert issubclass(exc_class, ICSDecodeError)

    @pytest.mark.parametrize(
        "exc_class",
        [
            InvalidDateValueError,
            InvalidDateTimeValueError,
            InvalidRecurrenceRuleValueError,
            InvalidEnumValueError,
            InvalidIntegerValueError,
            SemanticConflictError,
        ],
    )
    def test_decode_errors_inherit_from_property_decode_error(self, exc_class: type) -> None:
        assert issubclass(exc_class, PropertyDecodeError)
        assert not issubclass(exc_class, ContentLineError)

    def test_lexer_closed_is_not_a_content_line_error(self) -> None:
        """Test callers catching ContentLineError do not swallow misuse."""
        assert issubclass(LexerClosedError, ICSDecodeError)
        assert not issubclass(LexerClosedError, ContentLineError)

    def test_recoverability(self) -> None:
        assert not UnexpectedEndOfInputError.recoverable
        assert not IoFailureError.recoverable
        assert TextEncodingError.recoverable
        assert MalformedContentLineError.recoverable
        assert UnrecognizedPropertyNameError.recoverable


class TestExceptionMessages:
    """Test exception messages and attributes."""

    def test_message_without_line(self) -> None:
        assert str(MalformedContentLineError("Missing property name")) == "Missing property name"

    def test_message_with_line(self) -> None:
        error = MalformedContentLineError("Missing property name", 3)

        assert str(error) == "While parsing line 3: Missing property name"
        assert error.message == "Missing property name"

    def test_unrecognized_name_keeps_raw_bytes(self) -> None:
        error = UnrecognizedPropertyNameError(b"X-FOO", 2)

        assert error.raw == b"X-FOO"
        assert str(error) == "While parsing line 2: Unrecognized property name: b'X-FOO'"

    def test_decode_error_default_message(self) -> None:
        error = InvalidIntegerValueError("abc")

        assert str(error) == "Invalid INTEGER value: 'abc'"
        assert error.raw == "abc"

    def test_decode_error_line_attached_later(self) -> None:
        error = InvalidDateValueError("2024")
        error.line = 9

        assert str(error) == "While parsing line 9: Invalid DATE value: '2024'"

    def test_end_of_input_message(self) -> None:
        assert str(UnexpectedEndOfInputError(5)) == "While parsing line 5: Unexpected end of input"
