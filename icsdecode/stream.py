"""Stream decoding pipeline.

Drives the lexer and the property decoder over a whole byte source and
collects the decoded properties together with per-line errors and counters.
Grouping properties into events (BEGIN/END nesting) is left to the caller.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from .config import DecoderSettings, get_settings
from .decoder import decode_property
from .exceptions import ContentLineError, PropertyDecodeError
from .lexer import ByteSource, Lexer
from .models import VEventProperty, VEventPropertyKind

logger = logging.getLogger(__name__)


class DecodeResult(BaseModel):
    """Result of decoding a content-line stream.

    `success` is False only when the stream could not be read to the end.
    Property values that fail to decode are reported in `errors` and skipped;
    records skipped by the lexer are reported in `warnings`.
    """

    success: bool
    properties: list[VEventProperty] = Field(default_factory=list, description="Decoded properties")

    # Parse statistics
    content_line_count: int = 0
    unknown_count: int = 0
    extension_count: int = 0

    # Error information
    error_message: Optional[str] = None
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    parse_time: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def decoded_count(self) -> int:
        return len(self.properties) - self.unknown_count - self.extension_count


def decode_stream(source: ByteSource, settings: Optional[DecoderSettings] = None) -> DecodeResult:
    """Decode every content line of a byte source into VEVENT properties.

    Args:
        source: Bytes, a binary file-like object, or an iterable of byte chunks
        settings: Decoder settings (global settings when omitted)

    Returns:
        DecodeResult with decoded properties, errors and counters
    """
    settings = settings if settings is not None else get_settings()
    lexer = Lexer(source, settings)
    result = DecodeResult(success=True)

    while True:
        try:
            content_line = lexer.next_content_line()
        except ContentLineError as e:
            if e.recoverable and settings.skip_invalid_lines:
                logger.warning("Skipping invalid content line: %s", e)
                result.warnings.append(str(e))
                continue
            logger.error("Content-line stream decoding stopped: %s", e)
            result.success = False
            result.error_message = str(e)
            break

        if content_line is None:
            break
        result.content_line_count += 1

        try:
            prop = decode_property(content_line)
        except PropertyDecodeError as e:
            logger.warning("Failed to decode property %s: %s", content_line.name.value, e)
            result.errors.append(str(e))
            continue

        if prop.kind == VEventPropertyKind.UNKNOWN:
            result.unknown_count += 1
        elif prop.kind == VEventPropertyKind.EXTENDED:
            result.extension_count += 1
        result.properties.append(prop)

    logger.debug(
        "Decoded %d content lines: %d properties, %d errors, %d warnings",
        result.content_line_count,
        len(result.properties),
        len(result.errors),
        len(result.warnings),
    )
    return result
