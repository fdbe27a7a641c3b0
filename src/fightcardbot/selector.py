"""Pick the fight card that is still relevant now.

Candidates are tried in listing order, one fetch at a time. The first event
whose start is not yet past wins. When every candidate has started already,
the last one parsed is returned instead of nothing.
"""

from __future__ import annotations

import enum
import logging
from collections import deque
from datetime import datetime
from typing import Iterable, Protocol

import pytz

from .dates import SITE_TIMEZONE, event_to_date, is_upcoming
from .models import Event
from .parser import parse_event

LOGGER = logging.getLogger(__name__)


class MarkupLoader(Protocol):
    async def fetch_data(self, url: str) -> str | None: ...


class SelectionState(enum.Enum):
    """Selector states; every transition is logged at debug level."""

    FETCHING_CANDIDATE = "fetching_candidate"
    EVALUATING = "evaluating"
    SELECTED = "selected"
    EXHAUSTED = "exhausted"


async def select_current_event(
    links: Iterable[str],
    loader: MarkupLoader,
    *,
    now: datetime | None = None,
    default_tz: str = SITE_TIMEZONE,
    logger: logging.Logger = LOGGER,
) -> tuple[str, Event] | None:
    """Return ``(link, event)`` for the next event, or ``None`` without links.

    A candidate whose fetch failed is only returned when every fetch failed.
    """
    now = now or datetime.now(pytz.utc)
    pending = deque(links)
    last_parsed: tuple[str, Event] | None = None
    last_tried: tuple[str, Event] | None = None

    def enter(state: SelectionState, link: str) -> None:
        logger.debug("-> %s: %s", state.value, link)

    while pending:
        link = pending.popleft()
        enter(SelectionState.FETCHING_CANDIDATE, link)
        html = await loader.fetch_data(link)
        event = parse_event(html, logger=logger)
        last_tried = (link, event)
        if html is not None:
            last_parsed = last_tried

        enter(SelectionState.EVALUATING, link)
        start = event_to_date(event, now=now, default_tz=default_tz, logger=logger)
        if is_upcoming(start, now):
            enter(SelectionState.SELECTED, link)
            logger.info("Selected %s (%s) starting %s", event.title or link, link, start)
            return last_tried

        logger.info("Skipping %s, start %s is before %s", link, start, now)

    if last_tried is None:
        logger.info("No candidate links to select from")
        return None

    fallback = last_parsed or last_tried
    enter(SelectionState.EXHAUSTED, fallback[0])
    logger.info("No upcoming event left, falling back to %s", fallback[0])
    return fallback
