from __future__ import annotations

from dataclasses import dataclass, field

UNKNOWN_WEIGHT_CLASS = "Unknown"


@dataclass(frozen=True, slots=True)
class FightCorner:
    name: str = ""
    rank: str = ""
    odds: str = ""
    img_url: str = ""


@dataclass(frozen=True, slots=True)
class Fight:
    red_corner: FightCorner
    blue_corner: FightCorner
    weight_class: str = UNKNOWN_WEIGHT_CLASS


@dataclass(frozen=True, slots=True)
class Event:
    title: str = ""
    subtitle: str = ""
    date: str = ""
    img_url: str = ""
    fights: tuple[Fight, ...] = field(default_factory=tuple)
    timestamp: int | None = None
