"""
Stream resolution for KhmerAve episodes
Runs the extraction heuristics on the episode page, follows at most one
level of embedded pages and ranks the result
"""
import logging
from typing import List

from bs4 import BeautifulSoup

from ...core.caching import TTLCache
from ...core.errors import FetchError
from ...models import StreamCandidate
from ...utils.locators import EPISODE, decode_locator
from ..stream_utils import (
    collect_candidates,
    dedupe_urls,
    describe_candidate,
    is_direct_media,
    rank_urls,
)
from .base import KhmerAveBaseClient

logger = logging.getLogger(__name__)

# Embed pages are only followed when there are this few of them
MAX_NESTED_FETCHES = 2
FALLBACK_LABEL = "Open episode page"


class KhmerAveStreamService:
    """Service for resolving playable streams of an episode"""

    def __init__(self, client: KhmerAveBaseClient, cache: TTLCache, namespace: str):
        self.client = client
        self.cache = cache
        self.namespace = namespace

    async def get_streams(self, episode_id: str) -> List[StreamCandidate]:
        """
        Resolve an episode locator to ranked stream candidates.

        Flow:
          1. Fetch the episode page and run every extraction strategy
          2. If one or two candidates are embed pages, fetch each once and
             run the same strategies on them (failures are ignored)
          3. Dedupe, put direct media first
          4. Fall back to the episode page itself when nothing was found

        Raises:
            DecodeError: malformed or non-episode locator
            FetchError: the episode page itself could not be fetched
        """
        cached = self.cache.get(episode_id)
        if cached is not None:
            return cached

        page_url = decode_locator(episode_id, self.namespace, EPISODE)
        html = await self.client.fetch(page_url)

        urls = collect_candidates(html, page_url, BeautifulSoup(html, "html.parser"))

        embeds = [u for u in urls if not is_direct_media(u)]
        if 0 < len(embeds) <= MAX_NESTED_FETCHES:
            for embed_url in embeds:
                urls.extend(await self._nested_candidates(embed_url))

        ranked = rank_urls(dedupe_urls(urls))
        if ranked:
            streams = [
                StreamCandidate(label=describe_candidate(u), url=u, is_direct=is_direct_media(u))
                for u in ranked
            ]
        else:
            logger.info(f"[KhmerAveStreams] No candidates on {page_url}, falling back to the page itself")
            streams = [StreamCandidate(label=FALLBACK_LABEL, url=page_url, is_direct=False)]

        logger.info(
            f"[KhmerAveStreams] {page_url}: {len(streams)} stream(s), "
            f"direct={sum(1 for s in streams if s.is_direct)}"
        )
        self.cache.set(episode_id, streams)
        return streams

    async def _nested_candidates(self, embed_url: str) -> List[str]:
        """Candidates of one embedded page; never followed any deeper."""
        try:
            html = await self.client.fetch(embed_url)
        except FetchError as exc:
            logger.debug(f"[KhmerAveStreams] Skipping embed {embed_url}: {exc}")
            return []
        return collect_candidates(html, embed_url)
