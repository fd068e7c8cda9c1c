"""
Show metadata and episode listing for KhmerAve
Handles the show page: title, poster, description and ordered episodes
"""
import logging
import re
from typing import List, Optional, Tuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from ...core.caching import TTLCache
from ...models import Episode, ShowMeta
from ...utils.locators import EPISODE, SHOW, decode_locator, encode_locator
from .base import KhmerAveBaseClient

logger = logging.getLogger(__name__)

FALLBACK_TITLE = "Untitled"

# Episode tables and grids seen across show page layouts
EPISODE_ANCHOR_SELECTORS = [
    "table#latest-videos a[href]",
    "#latest-videos a[href]",
    "table.table a[href]",
    ".episode-list a[href]",
    ".episodes a[href]",
    "div.col-xl-2 a[href]",
]

_EPISODE_WORD_RE = re.compile(r"\b(?:episode|ep|part)\.?\s*#?\s*(\d+)", re.IGNORECASE)
_E_NUMBER_RE = re.compile(r"\bE\s*(\d+)", re.IGNORECASE)
_ANY_NUMBER_RE = re.compile(r"(\d+)")


def parse_episode_number(label: Optional[str]) -> Optional[int]:
    """
    Parse an episode number from an anchor label

    Preference: "Episode/Ep/Part N", then "E<N>", then any bare integer.

    Returns:
        Episode number or None when the label has no digits
    """
    if not label:
        return None
    for pattern in (_EPISODE_WORD_RE, _E_NUMBER_RE, _ANY_NUMBER_RE):
        m = pattern.search(label)
        if m:
            return int(m.group(1))
    return None


def order_episodes(items: List[Tuple[str, Optional[int]]]) -> List[Tuple[str, int]]:
    """
    Order (url, parsed_number) pairs and assign sequence numbers

    When at least half of the items carry a number they are sorted by it
    (unnumbered last); otherwise the page lists newest first and the
    order is reversed. Unnumbered items take their 1-based position, or the
    next number past the largest in use when a parsed number holds it.
    """
    if not items:
        return []

    numbered = sum(1 for _, num in items if num is not None)
    if numbered * 2 >= len(items):
        ordered = sorted(items, key=lambda item: (item[1] is None, item[1] or 0))
    else:
        ordered = list(reversed(items))

    used = {num for _, num in ordered if num is not None}
    result = []
    for position, (url, num) in enumerate(ordered, start=1):
        if num is None:
            num = position if position not in used else max(used) + 1
            used.add(num)
        result.append((url, num))
    return result


def _meta_content(soup: BeautifulSoup, *selectors: str) -> Optional[str]:
    for selector in selectors:
        tag = soup.select_one(selector)
        if tag and tag.get("content", "").strip():
            return tag["content"].strip()
    return None


def parse_show_page(html: str, page_url: str, show_id: str, namespace: str) -> ShowMeta:
    """Extract title, poster, description and the ordered episode list."""
    soup = BeautifulSoup(html or "", "html.parser")

    name = None
    h1 = soup.find("h1")
    if h1 and h1.get_text(strip=True):
        name = h1.get_text(" ", strip=True)
    elif soup.title and soup.title.get_text(strip=True):
        name = soup.title.get_text(" ", strip=True)

    poster = _meta_content(soup, 'meta[property="og:image"]', 'meta[name="twitter:image"]')
    description = _meta_content(soup, 'meta[property="og:description"]', 'meta[name="description"]')
    if poster:
        try:
            poster = urljoin(page_url, poster)
        except ValueError:
            poster = None

    seen = set()
    items: List[Tuple[str, Optional[int]]] = []
    for selector in EPISODE_ANCHOR_SELECTORS:
        for anchor in soup.select(selector):
            href = anchor.get("href", "").strip()
            if not href or href.startswith(("#", "javascript:")):
                continue
            try:
                url = urljoin(page_url, href)
            except ValueError:
                logger.debug(f"[KhmerAveEpisodes] Skipping malformed link {href!r}")
                continue
            if url in seen:
                continue
            seen.add(url)
            label = anchor.get_text(" ", strip=True) or anchor.get("title", "")
            items.append((url, parse_episode_number(label)))

    episodes = [
        Episode(
            id=encode_locator(namespace, EPISODE, url),
            title=f"Episode {number:02d}",
            number=number,
        )
        for url, number in order_episodes(items)
    ]

    return ShowMeta(
        id=show_id,
        name=name or FALLBACK_TITLE,
        poster=poster,
        description=description,
        episodes=episodes,
    )


class KhmerAveEpisodesService:
    """Service for fetching show metadata and episodes"""

    def __init__(self, client: KhmerAveBaseClient, cache: TTLCache, namespace: str):
        self.client = client
        self.cache = cache
        self.namespace = namespace

    async def get_show(self, show_id: str) -> ShowMeta:
        """
        Resolve a show locator to its metadata

        Raises:
            DecodeError: malformed or non-show locator
            FetchError: show page could not be fetched
        """
        cached = self.cache.get(show_id)
        if cached is not None:
            return cached

        url = decode_locator(show_id, self.namespace, SHOW)
        html = await self.client.fetch(url)
        meta = parse_show_page(html, url, show_id, self.namespace)

        logger.info(f"[KhmerAveEpisodes] {url}: title={meta.name!r}, episodes={len(meta.episodes)}")
        self.cache.set(show_id, meta)
        return meta

    async def episodes(self, show_id: str) -> List[Episode]:
        """Alias that returns just the episode list"""
        meta = await self.get_show(show_id)
        return meta.episodes
