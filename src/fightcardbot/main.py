from __future__ import annotations

import asyncio
import logging
import sys

from dotenv import load_dotenv

from .config import Settings
from .ufc import UfcClient

LOGGER = logging.getLogger(__name__)


async def show_links(client: UfcClient) -> int:
    links = await client.fetch_event_links()
    if not links:
        LOGGER.error("No upcoming events found")
        return 1
    for link in links:
        LOGGER.info("%s", link)
    return 0


async def show_current_event(client: UfcClient) -> int:
    selection = await client.fetch_current_event()
    if selection is None:
        LOGGER.error("Failed retrieving event information from UFC")
        return 1

    link, event = selection
    LOGGER.info("%s | %s | %s | %s", event.title, event.subtitle, event.date, link)
    for fight in event.fights:
        red, blue = fight.red_corner, fight.blue_corner
        LOGGER.info(
            "%s: %s %s vs. %s %s",
            fight.weight_class,
            red.rank,
            red.name,
            blue.rank,
            blue.name,
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.logging_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = sys.argv[1:] if argv is None else argv
    client = UfcClient(settings, logger=logging.getLogger("fightcardbot"))

    if args and args[0] == "links":
        return asyncio.run(show_links(client))
    return asyncio.run(show_current_event(client))


if __name__ == "__main__":
    raise SystemExit(main())
