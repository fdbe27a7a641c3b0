from __future__ import annotations

from datetime import datetime

import pytest
import pytz

from fightcardbot.models import Event
from fightcardbot.selector import select_current_event

NOW = pytz.utc.localize(datetime(2024, 12, 1, 12, 0))
NOW_TS = 1733054400
PAST_TS = 1732000000
FUTURE_TS = 1733626800
FAR_FUTURE_TS = 4102444800


def _page(title: str, timestamp: int | None = None, date: str = "") -> str:
    stamp = f' data-timestamp="{timestamp}"' if timestamp is not None else ""
    return (
        f'<div class="c-hero__headline-prefix">{title}</div>'
        f'<div class="c-hero__headline-suffix"{stamp}>{date}</div>'
    )


class FakeLoader:
    def __init__(self, pages: dict[str, str | None]) -> None:
        self.pages = pages
        self.calls: list[str] = []

    async def fetch_data(self, url: str) -> str | None:
        self.calls.append(url)
        return self.pages.get(url)


@pytest.mark.asyncio
async def test_skips_past_event() -> None:
    loader = FakeLoader(
        {
            "L1": _page("UFC 309", PAST_TS),
            "L2": _page("UFC 310", FUTURE_TS),
            "L3": _page("UFC 311", FAR_FUTURE_TS),
        }
    )

    link, event = await select_current_event(["L1", "L2", "L3"], loader, now=NOW)

    assert link == "L2"
    assert event.title == "UFC 310"
    assert loader.calls == ["L1", "L2"]


@pytest.mark.asyncio
async def test_first_upcoming_short_circuits() -> None:
    loader = FakeLoader({"L1": _page("UFC 310", FUTURE_TS), "L2": _page("UFC 311", FAR_FUTURE_TS)})

    link, _ = await select_current_event(["L1", "L2"], loader, now=NOW)

    assert link == "L1"
    assert loader.calls == ["L1"]


@pytest.mark.asyncio
async def test_exhausted_falls_back_to_last_candidate() -> None:
    loader = FakeLoader({"L1": _page("UFC 309", PAST_TS)})

    link, event = await select_current_event(["L1"], loader, now=NOW)

    assert link == "L1"
    assert event.title == "UFC 309"


@pytest.mark.asyncio
async def test_exhausted_returns_last_of_many() -> None:
    loader = FakeLoader({"L1": _page("UFC 308", PAST_TS - 86400), "L2": _page("UFC 309", PAST_TS)})

    link, event = await select_current_event(["L1", "L2"], loader, now=NOW)

    assert link == "L2"
    assert event.title == "UFC 309"
    assert loader.calls == ["L1", "L2"]


@pytest.mark.asyncio
async def test_no_links_means_no_event() -> None:
    loader = FakeLoader({})

    assert await select_current_event([], loader, now=NOW) is None
    assert loader.calls == []


@pytest.mark.asyncio
async def test_start_exactly_now_is_selected() -> None:
    loader = FakeLoader({"L1": _page("UFC 310", NOW_TS), "L2": _page("UFC 311", FAR_FUTURE_TS)})

    link, _ = await select_current_event(["L1", "L2"], loader, now=NOW)

    assert link == "L1"


@pytest.mark.asyncio
async def test_unparseable_date_counts_as_past() -> None:
    loader = FakeLoader({"L1": _page("UFC 310", date="Date TBA"), "L2": _page("UFC 311", FAR_FUTURE_TS)})

    link, _ = await select_current_event(["L1", "L2"], loader, now=NOW)

    assert link == "L2"


@pytest.mark.asyncio
async def test_all_fetches_failed_degrades_to_empty_event() -> None:
    loader = FakeLoader({"L1": None, "L2": None})

    link, event = await select_current_event(["L1", "L2"], loader, now=NOW)

    assert link == "L2"
    assert event == Event()


@pytest.mark.asyncio
async def test_failed_last_fetch_keeps_last_parsed_card() -> None:
    loader = FakeLoader({"L1": _page("UFC 309", PAST_TS), "L2": None})

    link, event = await select_current_event(["L1", "L2"], loader, now=NOW)

    assert link == "L1"
    assert event.title == "UFC 309"
    assert loader.calls == ["L1", "L2"]


@pytest.mark.asyncio
async def test_failed_fetch_between_past_cards_is_not_the_fallback() -> None:
    loader = FakeLoader({"L1": _page("UFC 308", PAST_TS), "L2": None, "L3": _page("UFC 309", PAST_TS)})

    link, event = await select_current_event(["L1", "L2", "L3"], loader, now=NOW)

    assert link == "L3"
    assert event.title == "UFC 309"


@pytest.mark.asyncio
async def test_text_date_used_without_timestamp() -> None:
    loader = FakeLoader(
        {
            "L1": _page("UFC 309", date="Sat, Nov 16 / 10:00 PM EST / Main Card"),
            "L2": _page("UFC 310", date="Sat, Dec 7 / 10:00 PM EST / Main Card"),
        }
    )

    link, _ = await select_current_event(["L1", "L2"], loader, now=NOW)

    assert link == "L2"


@pytest.mark.asyncio
async def test_defaults_to_current_time() -> None:
    loader = FakeLoader({"L1": _page("UFC 309", PAST_TS), "L2": _page("UFC 400", FAR_FUTURE_TS)})

    link, _ = await select_current_event(iter(["L1", "L2"]), loader)

    assert link == "L2"
