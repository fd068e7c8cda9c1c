"""
Main KhmerAve scraper - unified interface
Delegates to specialized service modules
"""
from typing import List, Optional

from ...core.caching import TTLCache
from ...models import ShowMeta, ShowSummary, StreamCandidate
from .base import KhmerAveBaseClient
from .catalog import KhmerAveCatalogService
from .episodes import KhmerAveEpisodesService
from .streams import KhmerAveStreamService


class KhmerAveScraper:
    """
    Async scraper for the KhmerAve site.
    Caches are created by the owner and injected here.
    """

    def __init__(
        self,
        base_url: str,
        namespace: str,
        user_agent: str,
        html_cache: TTLCache,
        negative_cache: TTLCache,
        meta_cache: TTLCache,
        stream_cache: TTLCache,
        request_timeout: float = 15,
        catalog_timeout: float = 10,
    ):
        # Initialize base client
        self.client = KhmerAveBaseClient(
            base_url,
            html_cache=html_cache,
            negative_cache=negative_cache,
            user_agent=user_agent,
            timeout=request_timeout,
        )

        # Initialize services
        self.catalog_service = KhmerAveCatalogService(self.client, meta_cache, namespace, timeout=catalog_timeout)
        self.episodes_service = KhmerAveEpisodesService(self.client, meta_cache, namespace)
        self.stream_service = KhmerAveStreamService(self.client, stream_cache, namespace)

    async def catalog(self, skip: int = 0, search: Optional[str] = None) -> List[ShowSummary]:
        """List one page of shows, or search results"""
        return await self.catalog_service.catalog(skip=skip, search=search)

    async def get_show(self, show_id: str) -> ShowMeta:
        """Fetch show metadata with its ordered episodes"""
        return await self.episodes_service.get_show(show_id)

    async def get_streams(self, episode_id: str) -> List[StreamCandidate]:
        """Resolve ranked stream candidates for an episode"""
        return await self.stream_service.get_streams(episode_id)
