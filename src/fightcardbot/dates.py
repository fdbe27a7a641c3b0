"""Turn the hero date text of an event page into an aware datetime.

ufc.com prints start times like ``Sat, Mar 5 / 10:00 PM EST / Main Card``
and usually leaves the year out. Pages that carry a ``data-timestamp`` on the
date element are trusted over the text.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, time

import pytz

from .models import Event

LOGGER = logging.getLogger(__name__)

SITE_TIMEZONE = "America/New_York"

_ZONE_ABBREVIATIONS = {
    "EST": "America/New_York",
    "EDT": "America/New_York",
    "ET": "America/New_York",
    "CST": "America/Chicago",
    "CDT": "America/Chicago",
    "MST": "America/Denver",
    "MDT": "America/Denver",
    "PST": "America/Los_Angeles",
    "PDT": "America/Los_Angeles",
    "UTC": "UTC",
    "GMT": "UTC",
    "BST": "Europe/London",
    "AEST": "Australia/Sydney",
    "AEDT": "Australia/Sydney",
}

_DAY_RE = re.compile(
    r"\b(?P<month>[A-Za-z]{3,9})\.?\s+(?P<day>\d{1,2})(?:st|nd|rd|th)?\b(?:,?\s*(?P<year>\d{4})\b)?"
)
_TIME_RE = re.compile(
    r"\b(?P<hour>\d{1,2})(?::(?P<minute>\d{2}))?\s*(?P<meridiem>[AaPp])\.?[Mm]\.?(?![A-Za-z])"
)
_ZONE_RE = re.compile(r"\b(" + "|".join(sorted(_ZONE_ABBREVIATIONS, key=len, reverse=True)) + r")\b")


def _month_number(name: str) -> int | None:
    for fmt, token in (("%B", name), ("%b", name[:3])):
        try:
            return datetime.strptime(token.title(), fmt).month
        except ValueError:
            continue
    return None


def _parse_time(text: str) -> time | None:
    m = _TIME_RE.search(text)
    if not m:
        return time(0, 0)
    minute = m.group("minute") or "00"
    meridiem = "AM" if m.group("meridiem").lower() == "a" else "PM"
    try:
        return datetime.strptime(f"{m.group('hour')}:{minute} {meridiem}", "%I:%M %p").time()
    except ValueError:
        return None


def _zone_for(text: str, default_tz: str) -> pytz.BaseTzInfo:
    m = _ZONE_RE.search(text)
    if m:
        return pytz.timezone(_ZONE_ABBREVIATIONS[m.group(1)])
    return pytz.timezone(default_tz)


def parse_event_date(
    text: str,
    *,
    now: datetime | None = None,
    default_tz: str = SITE_TIMEZONE,
) -> datetime | None:
    """Parse ufc.com date text; ``None`` means the text could not be read.

    Without a year in the text, the year placing the date closest to ``now``
    wins, so a January card seen in December lands in the next year.
    """
    if not text:
        return None
    now = now or datetime.now(pytz.utc)

    month = day = year = None
    for m in _DAY_RE.finditer(text):
        month = _month_number(m.group("month"))
        if month is not None:
            day = int(m.group("day"))
            year = int(m.group("year")) if m.group("year") else None
            break
    if month is None:
        return None

    start_time = _parse_time(text)
    if start_time is None:
        return None
    zone = _zone_for(text, default_tz)

    years = [year] if year is not None else [now.year - 1, now.year, now.year + 1]
    candidates: list[datetime] = []
    for y in years:
        try:
            naive = datetime(y, month, day, start_time.hour, start_time.minute)
        except ValueError:
            continue
        candidates.append(zone.localize(naive))
    if not candidates:
        return None
    return min(candidates, key=lambda dt: abs(dt - now))


def event_to_date(
    event: Event,
    *,
    now: datetime | None = None,
    default_tz: str = SITE_TIMEZONE,
    logger: logging.Logger = LOGGER,
) -> datetime | None:
    if event.timestamp is not None:
        try:
            return datetime.fromtimestamp(event.timestamp, tz=pytz.utc)
        except (OverflowError, OSError, ValueError):
            logger.warning("Event timestamp out of range: %s", event.timestamp)

    start = parse_event_date(event.date, now=now, default_tz=default_tz)
    if start is None:
        logger.warning("Could not parse event date %r for %r", event.date, event.title)
    return start


def is_upcoming(start: datetime | None, now: datetime) -> bool:
    """An unparseable start counts as already past."""
    return start is not None and start >= now
