from __future__ import annotations

import logging
from dataclasses import dataclass
from os import getenv

import pytz


@dataclass(slots=True)
class Settings:
    ufc_base_url: str
    ufc_events_url: str
    ufc_timeout_seconds: float
    ufc_timezone: str
    logging_level: str

    @classmethod
    def from_env(cls) -> "Settings":
        base_url = getenv("UFC_BASE_URL", "https://www.ufc.com").strip().rstrip("/")
        events_url = getenv("UFC_EVENTS_URL", f"{base_url}/events").strip()

        raw_timeout = getenv("UFC_TIMEOUT_SECONDS", "20").strip()
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(f"UFC_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}") from None
        if timeout <= 0:
            raise ValueError("UFC_TIMEOUT_SECONDS must be positive")

        timezone = getenv("UFC_TIMEZONE", "America/New_York").strip()
        if timezone not in pytz.all_timezones_set:
            raise ValueError(f"Unknown UFC_TIMEZONE {timezone!r}")

        level = getenv("LOGGING_LEVEL", "INFO").strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown LOGGING_LEVEL {level!r}")

        return cls(
            ufc_base_url=base_url,
            ufc_events_url=events_url,
            ufc_timeout_seconds=timeout,
            ufc_timezone=timezone,
            logging_level=level,
        )
