"""
Catalog listing for KhmerAve
Handles the paginated album listing and the search form
"""
import logging
import re
from typing import List, Optional
from urllib.parse import quote_plus, urljoin

from bs4 import BeautifulSoup

from ...core.caching import TTLCache
from ...core.errors import FetchError
from ...models import ShowSummary
from ...utils.locators import SHOW, encode_locator
from .base import KhmerAveBaseClient

logger = logging.getLogger(__name__)

PAGE_SIZE = 24

# First selector that matches anything wins
CATALOG_ITEM_SELECTORS = [
    "div.thumbnail-container",
    "div.col-6.col-sm-4",
    "article",
    "div.card",
]
TITLE_SELECTORS = "h3, h2, h4, .card-title, .title, .entry-title"

_BG_URL_RE = re.compile(r"""background(?:-image)?\s*:[^;]*?url\(\s*['"]?([^'")]+?)['"]?\s*\)""", re.IGNORECASE)


def skip_to_page(skip: int) -> int:
    """Convert a Stremio `skip` offset into a 1-based page number."""
    try:
        offset = int(skip)
    except (TypeError, ValueError):
        offset = 0
    return max(offset, 0) // PAGE_SIZE + 1


def build_catalog_url(base_url: str, page: int, search: Optional[str] = None) -> str:
    base = base_url.rstrip("/")
    query = (search or "").strip()
    if query:
        prefix = f"{base}/page/{page}/" if page > 1 else f"{base}/"
        return f"{prefix}?s={quote_plus(query)}"
    if page > 1:
        return f"{base}/album/page/{page}/"
    return f"{base}/album/"


def parse_background_image(style: Optional[str]) -> Optional[str]:
    """Pull the URL out of an inline `background-image: url(...)` declaration."""
    if not style:
        return None
    m = _BG_URL_RE.search(style)
    return m.group(1).strip() if m else None


def _absolute(page_url: str, href: str) -> Optional[str]:
    try:
        return urljoin(page_url, href)
    except ValueError:
        return None


def _find_poster(node, page_url: str) -> Optional[str]:
    styled = [node] + node.select("[style]")
    for el in styled:
        url = parse_background_image(el.get("style"))
        if url:
            return _absolute(page_url, url)
    img = node.find("img")
    if img:
        src = img.get("data-src") or img.get("src")
        if src:
            return _absolute(page_url, src.strip())
    return None


def parse_catalog(html: str, page_url: str, namespace: str) -> List[ShowSummary]:
    """
    Turn a listing page into show summaries

    Args:
        html: Listing page HTML
        page_url: URL the page was fetched from (for relative links)
        namespace: Locator namespace

    Returns:
        Summaries in document order; nodes without a usable link or title are skipped
    """
    soup = BeautifulSoup(html or "", "html.parser")

    nodes = []
    for selector in CATALOG_ITEM_SELECTORS:
        nodes = soup.select(selector)
        if nodes:
            break

    shows = []
    for node in nodes:
        link = node.select_one("a[href]")
        if not link or not link.get("href", "").strip():
            continue

        heading = node.select_one(TITLE_SELECTORS)
        name = heading.get_text(" ", strip=True) if heading else ""
        if not name:
            name = (link.get("title") or "").strip()
        if not name:
            continue

        show_url = _absolute(page_url, link["href"].strip())
        if not show_url:
            logger.debug(f"[KhmerAveCatalog] Skipping malformed link {link['href']!r}")
            continue
        shows.append(ShowSummary(
            id=encode_locator(namespace, SHOW, show_url),
            name=name,
            poster=_find_poster(node, page_url),
        ))
    return shows


class KhmerAveCatalogService:
    """Service for listing and searching shows"""

    def __init__(self, client: KhmerAveBaseClient, cache: TTLCache, namespace: str, timeout: float = 10):
        self.client = client
        self.cache = cache
        self.namespace = namespace
        self.timeout = timeout

    async def catalog(self, skip: int = 0, search: Optional[str] = None) -> List[ShowSummary]:
        """
        Fetch one catalog page

        A timeout on the listing fetch is reported as an empty page.
        """
        page = skip_to_page(skip)
        url = build_catalog_url(self.client.base_url, page, search)

        cache_key = f"catalog:{url}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            html = await self.client.fetch(url, timeout=self.timeout)
        except FetchError as exc:
            if exc.timeout:
                logger.warning(f"[KhmerAveCatalog] Timeout for {url}, returning no results")
                return []
            raise

        shows = parse_catalog(html, url, self.namespace)
        logger.info(f"[KhmerAveCatalog] page={page}, search={search!r}, shows={len(shows)}")
        self.cache.set(cache_key, shows)
        return shows
