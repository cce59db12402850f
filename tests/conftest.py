"""Shared test configuration for icsdecode."""

from collections.abc import Generator
from typing import Any

import pytest

from icsdecode.config import DecoderSettings, reset_settings


def pytest_configure(config: Any) -> None:
    """Configure pytest with project markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "critical_path: Core functionality tests")


@pytest.fixture(autouse=True)
def clean_test_environment(monkeypatch: Any) -> Generator[None, Any, None]:
    """Clear ICSDECODE_* environment variables and the global settings between tests."""
    for name in (
        "ICSDECODE_ALLOW_EXTENSIONS",
        "ICSDECODE_SKIP_INVALID_LINES",
        "ICSDECODE_READ_CHUNK_SIZE_BYTES",
        "ICSDECODE_MAX_LINE_LENGTH_BYTES",
        "ICSDECODE_LOG_LEVEL",
        "ICSDECODE_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings() -> DecoderSettings:
    """Strict settings: closed registries, stop on the first invalid record."""
    return DecoderSettings()


@pytest.fixture
def lenient_settings() -> DecoderSettings:
    """Settings that accept extension names and skip invalid records."""
    return DecoderSettings(allow_extensions=True, skip_invalid_lines=True)


# ==================== ICS Test Data Fixtures ====================


@pytest.fixture
def sample_vevent_bytes() -> bytes:
    """
    Return a small calendar with a single recurring event.

    Lines (1-based):
        1 BEGIN:VCALENDAR ... 14 END:VCALENDAR, with DESCRIPTION folded
        over lines 9-10.
    """
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//icsdecode test//EN",
        "BEGIN:VEVENT",
        "UID:event-1@example.com",
        "DTSTAMP:20240101T120000Z",
        "DTSTART;TZID=America/New_York:20240108T090000",
        "DTEND;TZID=America/New_York:20240108T093000",
        "DESCRIPTION:Weekly planning\\, with notes\\nand a long line that is",
        "  folded",
        "RRULE:FREQ=WEEKLY;COUNT=5;BYDAY=MO,WE,FR",
        "SUMMARY:Team sync",
        "END:VEVENT",
        "END:VCALENDAR",
    ]
    return ("\r\n".join(lines) + "\r\n").encode("utf-8")
