from __future__ import annotations

import logging

import httpx

from .config import Settings
from .models import Event
from .parser import parse_event, parse_listing_links
from .selector import select_current_event

LOGGER = logging.getLogger(__name__)


class UfcClient:
    def __init__(self, settings: Settings, logger: logging.Logger | None = None) -> None:
        self.settings = settings
        self.logger = logger or LOGGER

    async def fetch_data(self, url: str) -> str | None:
        try:
            async with httpx.AsyncClient(
                follow_redirects=True,
                timeout=self.settings.ufc_timeout_seconds,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            self.logger.error("Fetching %s failed: %s", url, exc)
            return None

        self.logger.debug("Fetched %s (%d chars)", url, len(response.text))
        return response.text

    async def fetch_events(self) -> str | None:
        return await self.fetch_data(self.settings.ufc_events_url)

    async def fetch_event_links(self) -> list[str]:
        html = await self.fetch_events()
        if html is None:
            self.logger.error("Failed retrieving events from %s", self.settings.ufc_events_url)
            return []
        links = parse_listing_links(html, self.settings.ufc_base_url, logger=self.logger)
        self.logger.info("Found %d event links", len(links))
        return links

    async def fetch_event(self, url: str) -> Event:
        html = await self.fetch_data(url)
        return parse_event(html, logger=self.logger)

    async def fetch_current_event(self) -> tuple[str, Event] | None:
        links = await self.fetch_event_links()
        return await select_current_event(
            links,
            self,
            default_tz=self.settings.ufc_timezone,
            logger=self.logger,
        )
