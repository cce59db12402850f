"""Streaming content-line lexer for iCalendar data.

The lexer pulls octets from a byte source in chunks and produces one
ContentLine per call, performing line unfolding, CRLF normalization, quoted
parameter value parsing and backslash escape decoding on the way.

Records are returned as independent immutable snapshots. The name and value
bytes are accumulated in two bytearrays owned by the lexer and cleared for
each record, and parameter values reuse a slot list by index, so the working
set per record stays bounded no matter how many lines the stream holds.
"""

import io
import logging
import re
from collections.abc import Iterable, Iterator
from typing import Any, Callable, Optional, Union

from .config import DecoderSettings, get_settings
from .exceptions import (
    ContentLineError,
    IoFailureError,
    LexerClosedError,
    MalformedContentLineError,
    TextEncodingError,
    UnexpectedEndOfInputError,
    UnrecognizedParameterNameError,
    UnrecognizedPropertyNameError,
)
from .models import ContentLine, Param
from .registry import (
    ExtensionName,
    ParamTag,
    PropertyTag,
    lookup_param,
    lookup_property,
    token_bytes,
)

logger = logging.getLogger(__name__)

# A file-like object with read(size) -> bytes, an iterable of bytes chunks, or bytes
ByteSource = Union[bytes, bytearray, memoryview, io.IOBase, Iterable[bytes]]

RecordCallback = Callable[[bytes, list[tuple[bytes, list[str]]], str], Any]

_EOF = -1
_HTAB = 0x09
_LF = 0x0A
_CR = 0x0D
_SP = 0x20
_DQUOTE = 0x22
_COMMA = 0x2C
_COLON = 0x3A
_SEMICOLON = 0x3B
_EQUALS = 0x3D
_BACKSLASH = 0x5C
_LOWER_N = 0x6E

_NAME_OCTETS = frozenset(b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-")

# Runs of octets that need no unfolding or escape handling
_PLAIN_VALUE_RUN = re.compile(rb"[^\\\r\n]+")
_PLAIN_PARAM_RUN = re.compile(rb'[^\\\r\n,;:"]+')


class _ChunkedReader:
    """Buffered, forward-only reader over a file-like object or byte chunks.

    Supports a few octets of lookahead across chunk boundaries; never seeks.
    """

    def __init__(self, source: ByteSource, chunk_size: int) -> None:
        if isinstance(source, (bytes, bytearray, memoryview)):
            source = io.BytesIO(bytes(source))
        if hasattr(source, "read"):
            self._file: Optional[Any] = source
            self._chunks: Optional[Iterator[bytes]] = None
        else:
            self._file = None
            self._chunks = iter(source)
        self._chunk_size = chunk_size
        self._chunk = b""
        self._pos = 0
        self._exhausted = False

    def _read_chunk(self) -> Optional[bytes]:
        """Read the next non-empty chunk, or None at end of stream."""
        if self._file is not None:
            chunk = self._file.read(self._chunk_size)
            if not chunk:
                return None
        else:
            chunk = b""
            while not chunk:
                chunk = next(self._chunks, None)
                if chunk is None:
                    return None
        if not isinstance(chunk, (bytes, bytearray)):
            raise TypeError(f"Byte source must produce bytes, got {type(chunk).__name__}")
        return bytes(chunk)

    def _fill(self, needed: int) -> bool:
        """Ensure `needed` unread octets are buffered; False if the stream ends first."""
        while len(self._chunk) - self._pos < needed:
            if self._exhausted:
                return False
            chunk = self._read_chunk()
            if chunk is None:
                self._exhausted = True
                return False
            self._chunk = self._chunk[self._pos :] + chunk
            self._pos = 0
        return True

    def peek(self, offset: int = 0) -> int:
        """Return the octet `offset` places ahead without consuming it, or -1."""
        if not self._fill(offset + 1):
            return _EOF
        return self._chunk[self._pos + offset]

    def skip(self, count: int = 1) -> None:
        self._pos += count

    def take_run(self, pattern: "re.Pattern[bytes]") -> bytes:
        """Consume and return the longest buffered run matching `pattern`."""
        match = pattern.match(self._chunk, self._pos)
        if match is None:
            return b""
        self._pos = match.end()
        return match.group()


class Lexer:
    """Pull-based content-line lexer.

    Call next_content_line() until it returns None, or iterate the lexer.
    Recoverable errors (bad names, bad encoding, malformed records) leave the
    lexer at the start of the next record. Unrecoverable errors (end of input
    inside a record, I/O failure) close it.

    Example:
        >>> lexer = Lexer(b"SUMMARY:Team sync\\r\\n")
        >>> lexer.next_content_line().value
        'Team sync'
    """

    def __init__(self, source: ByteSource, settings: Optional[DecoderSettings] = None) -> None:
        """Initialize the lexer.

        Args:
            source: Bytes, a binary file-like object, or an iterable of byte chunks
            settings: Decoder settings (global settings when omitted)
        """
        self.settings = settings if settings is not None else get_settings()
        self._source = source
        self._reader = _ChunkedReader(source, self.settings.read_chunk_size_bytes)
        self._line = 1
        self._record_line = 1
        self._pending_newline = False
        self._closed = False

        self._name_buffer = bytearray()
        self._value_buffer = bytearray()
        self._param_slots: list[str] = []

    @property
    def line(self) -> int:
        """Current 1-based physical line number."""
        return self._line

    @property
    def closed(self) -> bool:
        return self._closed

    def finish(self) -> ByteSource:
        """Close the lexer and hand back the byte source it was created with.

        Octets already read ahead into the lexer's buffer are not returned.
        """
        self._closed = True
        return self._source

    def __iter__(self) -> Iterator[ContentLine]:
        return self

    def __next__(self) -> ContentLine:
        while True:
            try:
                content_line = self.next_content_line()
            except ContentLineError as e:
                if e.recoverable and self.settings.skip_invalid_lines:
                    logger.warning("Skipping invalid content line: %s", e)
                    continue
                raise
            if content_line is None:
                raise StopIteration
            return content_line

    def next_content_line(self) -> Optional[ContentLine]:
        """Lex the next content line.

        Returns:
            The next ContentLine, or None at the end of the stream

        Raises:
            ContentLineError: If the record is malformed; see `recoverable`
            LexerClosedError: If called after finish() or an unrecoverable error
            Exception: Anything else raised by the byte source; the lexer is closed
        """
        if self._closed:
            raise LexerClosedError("Lexer is closed", self._record_line)
        try:
            return self._lex_content_line()
        except ContentLineError as e:
            if not e.recoverable:
                self._closed = True
                raise
            try:
                self._resynchronize()
            except Exception:
                self._closed = True
                raise
            raise
        except Exception:
            # The source failed or misbehaved; its position is unknown
            self._closed = True
            raise

    # Octet level

    def _peek(self) -> int:
        """Return the next logical octet without consuming it.

        Folded line breaks (CRLF or LF followed by SP/HTAB) are consumed and
        dropped. A line break that is not a fold is surfaced as LF; it has
        already been read from the source and is consumed by _advance().
        """
        if self._pending_newline:
            return _LF
        reader = self._reader
        try:
            while True:
                octet = reader.peek()
                if octet == _CR and reader.peek(1) == _LF:
                    width = 2
                elif octet == _LF:
                    width = 1
                else:
                    return octet
                following = reader.peek(width)
                reader.skip(width)
                self._line += 1
                if following in (_SP, _HTAB):
                    reader.skip()
                    continue
                self._pending_newline = True
                return _LF
        except OSError as e:
            raise IoFailureError(f"I/O failure: {e}", self._record_line) from e

    def _require(self) -> int:
        """Like _peek(), but the end of the stream is an error."""
        octet = self._peek()
        if octet == _EOF:
            raise UnexpectedEndOfInputError(self._record_line)
        return octet

    def _advance(self) -> None:
        if self._pending_newline:
            self._pending_newline = False
        else:
            self._reader.skip()

    def _take_run(self, pattern: "re.Pattern[bytes]") -> bytes:
        if self._pending_newline:
            return b""
        return self._reader.take_run(pattern)

    def _resynchronize(self) -> None:
        """Skip to just past the next logical newline (or the end of the stream)."""
        while True:
            if self._take_run(_PLAIN_VALUE_RUN):
                continue
            octet = self._peek()
            if octet == _EOF:
                return
            self._advance()
            if octet == _LF:
                return

    # Record level

    def _check_length(self, buffer: bytearray) -> None:
        if len(buffer) > self.settings.max_line_length_bytes:
            raise MalformedContentLineError(
                f"Content line exceeds {self.settings.max_line_length_bytes} bytes",
                self._record_line,
            )

    def _lex_content_line(self) -> Optional[ContentLine]:
        # Skip blank lines between records; end of stream here is normal termination
        while True:
            self._record_line = self._line
            octet = self._peek()
            if octet == _EOF:
                return None
            if octet != _LF:
                break
            self._advance()

        name = self._read_property_name()
        params = self._read_params()
        value = self._read_value()
        return ContentLine(name=name, params=params, value=value, line=self._record_line)

    def _read_name(self) -> bytes:
        buffer = self._name_buffer
        buffer.clear()
        while True:
            octet = self._require()
            if octet not in _NAME_OCTETS:
                break
            buffer.append(octet)
            self._advance()
            self._check_length(buffer)
        return bytes(buffer)

    def _read_property_name(self) -> PropertyTag:
        raw = self._read_name()
        if not raw:
            raise MalformedContentLineError("Missing property name", self._record_line)
        name = lookup_property(raw)
        if name is not None:
            return name
        if self.settings.allow_extensions:
            return ExtensionName(raw)
        raise UnrecognizedPropertyNameError(raw, self._record_line)

    def _read_param_name(self) -> ParamTag:
        raw = self._read_name()
        if not raw:
            raise MalformedContentLineError("Missing parameter name", self._record_line)
        name = lookup_param(raw)
        if name is not None:
            return name
        if self.settings.allow_extensions:
            return ExtensionName(raw)
        raise UnrecognizedParameterNameError(raw, self._record_line)

    def _read_params(self) -> tuple[Param, ...]:
        params: list[Param] = []
        while True:
            octet = self._require()
            if octet == _COLON:
                self._advance()
                return tuple(params)
            if octet != _SEMICOLON:
                raise MalformedContentLineError(
                    f"Unexpected character {chr(octet)!r} after name", self._record_line
                )
            self._advance()
            params.append(self._read_param())

    def _read_param(self) -> Param:
        name = self._read_param_name()
        if self._require() != _EQUALS:
            raise MalformedContentLineError(
                f"Expected '=' after parameter name {name.value}", self._record_line
            )
        self._advance()

        slots = self._param_slots
        count = 0
        while True:
            value = self._read_param_value()
            if count < len(slots):
                slots[count] = value
            else:
                slots.append(value)
            count += 1
            octet = self._require()
            if octet == _COMMA:
                self._advance()
                continue
            if octet in (_SEMICOLON, _COLON):
                return Param(name=name, values=tuple(slots[:count]))
            raise MalformedContentLineError(
                f"Unexpected character {chr(octet)!r} after parameter value", self._record_line
            )

    def _read_param_value(self) -> str:
        buffer = self._value_buffer
        buffer.clear()
        if self._require() == _DQUOTE:
            self._advance()
            while True:
                octet = self._require()
                if octet == _DQUOTE:
                    self._advance()
                    break
                if octet == _LF:
                    raise MalformedContentLineError(
                        "Unterminated quoted parameter value", self._record_line
                    )
                if octet == _BACKSLASH:
                    self._read_escape(buffer)
                else:
                    buffer.append(octet)
                    self._advance()
                self._check_length(buffer)
        else:
            while True:
                run = self._take_run(_PLAIN_PARAM_RUN)
                if run:
                    buffer += run
                    self._check_length(buffer)
                    continue
                octet = self._require()
                if octet in (_COMMA, _SEMICOLON, _COLON):
                    break
                if octet == _LF:
                    raise MalformedContentLineError(
                        "Line ended inside the parameter list", self._record_line
                    )
                if octet == _BACKSLASH:
                    self._read_escape(buffer)
                else:
                    buffer.append(octet)
                    self._advance()
                self._check_length(buffer)
        return self._decode(buffer)

    def _read_value(self) -> str:
        buffer = self._value_buffer
        buffer.clear()
        while True:
            run = self._take_run(_PLAIN_VALUE_RUN)
            if run:
                buffer += run
                self._check_length(buffer)
                continue
            octet = self._require()
            if octet == _LF:
                # The newline stays pending until the value has decoded
                value = self._decode(buffer)
                self._advance()
                return value
            if octet == _BACKSLASH:
                self._read_escape(buffer)
            else:
                buffer.append(octet)
                self._advance()
            self._check_length(buffer)

    def _read_escape(self, buffer: bytearray) -> None:
        """Decode a backslash escape: \\n is a newline, \\X is X.

        A backslash at the end of a logical line is kept as a literal.
        """
        self._advance()
        octet = self._require()
        if octet == _LF:
            buffer.append(_BACKSLASH)
            return
        self._advance()
        buffer.append(_LF if octet == _LOWER_N else octet)

    def _decode(self, buffer: bytearray) -> str:
        try:
            return buffer.decode("utf-8")
        except UnicodeDecodeError as e:
            raise TextEncodingError(f"Invalid UTF-8: {e.reason}", self._record_line) from e


def iter_content_lines(
    source: ByteSource, settings: Optional[DecoderSettings] = None
) -> Iterator[ContentLine]:
    """Lazily yield the content lines of a byte source."""
    yield from Lexer(source, settings)


def feed_records(
    source: ByteSource,
    on_record: RecordCallback,
    settings: Optional[DecoderSettings] = None,
) -> int:
    """Push adapter: invoke a callback once per record until the stream ends.

    Args:
        source: Byte source, as accepted by Lexer
        on_record: Called with (name bytes, [(param name bytes, [values])], value)
        settings: Decoder settings (global settings when omitted)

    Returns:
        Number of records delivered

    Raises:
        ContentLineError: As raised by the lexer
    """
    count = 0
    for content_line in Lexer(source, settings):
        params = [(token_bytes(param.name), list(param.values)) for param in content_line.params]
        on_record(token_bytes(content_line.name), params, content_line.value)
        count += 1
    logger.debug("Delivered %d records to callback", count)
    return count
