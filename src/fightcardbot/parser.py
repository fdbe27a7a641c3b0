"""Extraction of fight-card data from ufc.com markup.

The event pages are flat: names, ranks, odds and weight classes come from
independent selector queries and are re-paired by position. Missing markup
never raises; it yields empty strings or empty lists.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from .models import UNKNOWN_WEIGHT_CLASS, Event, Fight, FightCorner

LOGGER = logging.getLogger(__name__)

BASE_URL = "https://www.ufc.com"

# Headline hrefs are joined onto the origin with urljoin, so absolute hrefs pass through unchanged.
LISTING_HEADLINE_SELECTOR = ".c-card-event--result__headline"

TITLE_SELECTOR = ".c-hero__headline-prefix"
SUBTITLE_SELECTOR = ".c-hero__headline.is-large-text"
DATE_SELECTOR = ".c-hero__headline-suffix"
HERO_IMAGE_SELECTOR = ".c-hero__image"

WEIGHT_CLASS_SELECTOR = "div.c-listing-fight__details > div.c-listing-fight__class"
ODDS_SELECTOR = ".c-listing-fight__odds"
FIGHTER_SELECTOR = ".c-listing-fight__corner-name"
RANK_SELECTOR = ".c-listing-fight__corner-rank"
RED_CORNER_IMAGE_SELECTOR = (
    "div.c-listing-fight__content-row > div.c-listing-fight__corner--red"
    " > div.c-listing-fight__corner-image--red"
)
BLUE_CORNER_IMAGE_SELECTOR = (
    "div.c-listing-fight__content-row > div.c-listing-fight__corner--blue"
    " > div.c-listing-fight__corner-image--blue"
)

# Names and odds come as red, blue per fight.
CORNER_STRIDE = 2
# The site repeats every rank label three times.
RANK_STRIDE = 3

_WHITESPACE_RE = re.compile(r"\s+")


def clean_text(text: str | None) -> str:
    if not text:
        return ""
    return text.strip().replace("\n", "")


def collapse_spaces(text: str | None) -> str:
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def _soup(html: str | None) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def _at(values: list[str], index: int) -> str:
    """Positional lookup; anything out of range reads as an empty string."""
    if 0 <= index < len(values):
        return values[index]
    return ""


def _attr(node: Tag | None, name: str) -> str:
    if node is None:
        return ""
    value = node.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return str(value).strip()


def _texts(soup: BeautifulSoup, selector: str, normalize=clean_text) -> list[str]:
    return [normalize(el.get_text()) for el in soup.select(selector)]


def _text(soup: BeautifulSoup, selector: str, normalize=clean_text) -> str:
    node = soup.select_one(selector)
    return normalize(node.get_text()) if node is not None else ""


def _image_src(node: Tag | None) -> str:
    if node is None:
        return ""
    return _attr(node.find("img"), "src")


def _corner_images(soup: BeautifulSoup, selector: str) -> list[str]:
    return [_image_src(el) for el in soup.select(selector)]


def _timestamp(node: Tag | None) -> int | None:
    raw = _attr(node, "data-timestamp")
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        LOGGER.warning("Ignoring malformed data-timestamp %r", raw)
        return None


def parse_listing_links(
    html: str | None,
    base_url: str = BASE_URL,
    *,
    logger: logging.Logger = LOGGER,
) -> list[str]:
    """Return absolute event links from the events index, in page order."""
    soup = _soup(html)
    links: list[str] = []
    for headline in soup.select(LISTING_HEADLINE_SELECTOR):
        child = headline.find(recursive=False)
        href = _attr(child, "href")
        if not href:
            logger.warning("Event headline without link: %s", clean_text(headline.get_text()))
            continue
        links.append(urljoin(f"{base_url}/", href))
    return links


def pair_fights(
    names: list[str],
    ranks: list[str],
    weight_classes: list[str],
    odds: list[str],
    red_images: list[str],
    blue_images: list[str],
) -> tuple[Fight, ...]:
    """Rebuild one Fight per weight-class entry from the flat field lists.

    Fight ``i`` reads its names and odds at ``i * CORNER_STRIDE`` (red) and
    the following index (blue), its ranks at ``i * RANK_STRIDE`` and the
    following index, and its images at ``i``.
    """
    fights: list[Fight] = []
    for i, weight_class in enumerate(weight_classes):
        corner = i * CORNER_STRIDE
        rank = i * RANK_STRIDE
        fights.append(
            Fight(
                weight_class=collapse_spaces(weight_class) or UNKNOWN_WEIGHT_CLASS,
                red_corner=FightCorner(
                    name=collapse_spaces(_at(names, corner)),
                    rank=_at(ranks, rank),
                    odds=_at(odds, corner),
                    img_url=_at(red_images, i),
                ),
                blue_corner=FightCorner(
                    name=collapse_spaces(_at(names, corner + 1)),
                    rank=_at(ranks, rank + 1),
                    odds=_at(odds, corner + 1),
                    img_url=_at(blue_images, i),
                ),
            )
        )
    return tuple(fights)


def parse_event(html: str | None, *, logger: logging.Logger = LOGGER) -> Event:
    soup = _soup(html)

    names = _texts(soup, FIGHTER_SELECTOR, collapse_spaces)
    ranks = _texts(soup, RANK_SELECTOR)
    logger.debug("ranks: %s", ranks)
    weight_classes = _texts(soup, WEIGHT_CLASS_SELECTOR, collapse_spaces)
    odds = _texts(soup, ODDS_SELECTOR)

    red_images = _corner_images(soup, RED_CORNER_IMAGE_SELECTOR)
    blue_images = _corner_images(soup, BLUE_CORNER_IMAGE_SELECTOR)
    logger.debug("red corner images: %s", red_images)
    logger.debug("blue corner images: %s", blue_images)

    date_node = soup.select_one(DATE_SELECTOR)

    return Event(
        title=_text(soup, TITLE_SELECTOR),
        subtitle=_text(soup, SUBTITLE_SELECTOR, collapse_spaces),
        date=clean_text(date_node.get_text()) if date_node is not None else "",
        img_url=_image_src(soup.select_one(HERO_IMAGE_SELECTOR)),
        fights=pair_fights(names, ranks, weight_classes, odds, red_images, blue_images),
        timestamp=_timestamp(date_node),
    )
