"""
Stremio addon handlers on top of the KhmerAve scraper.
Every failure below this layer degrades to an empty protocol answer.
"""
import logging
from typing import Any, Dict, Optional
from urllib.parse import parse_qs

from ..core.caching import TTLCache
from ..core.errors import AddonError
from ..models import AddonResult
from ..utils.locators import EPISODE, SHOW, has_prefix
from .khmerave import KhmerAveScraper

logger = logging.getLogger(__name__)

CONTENT_TYPE = "series"


def parse_extra(extra: Optional[str]) -> Dict[str, str]:
    """
    Parse the Stremio `extra` path segment ("search=foo&skip=24")

    Returns:
        Flat dict with the first value of each key
    """
    if not extra:
        return {}
    if extra.endswith(".json"):
        extra = extra[: -len(".json")]
    return {k: v[0] for k, v in parse_qs(extra, keep_blank_values=False).items() if v}


class AddonService:
    """
    Process-level service object.
    Owns the caches, builds the scraper and exposes the catalog, meta and
    stream handlers.
    """

    def __init__(self, config: Any):
        self.config = config
        self.namespace = config.ID_NAMESPACE
        self.catalog_id = config.CATALOG_ID
        self.addon_name = config.ADDON_NAME

        max_entries = config.CACHE_MAX_ENTRIES
        self.caches: Dict[str, TTLCache] = {
            "html": TTLCache(max_entries, ttl=config.HTML_CACHE_TTL),
            "negative": TTLCache(max_entries, ttl=config.NEGATIVE_CACHE_TTL),
            "meta": TTLCache(max_entries, ttl=config.META_CACHE_TTL),
            "streams": TTLCache(max_entries, ttl=config.STREAM_CACHE_TTL),
        }

        self.scraper = KhmerAveScraper(
            base_url=config.KHMERAVE_BASE_URL,
            namespace=self.namespace,
            user_agent=config.USER_AGENT,
            html_cache=self.caches["html"],
            negative_cache=self.caches["negative"],
            meta_cache=self.caches["meta"],
            stream_cache=self.caches["streams"],
            request_timeout=config.REQUEST_TIMEOUT,
            catalog_timeout=config.CATALOG_TIMEOUT,
        )
        logger.info(f"[Addon] Initialized for {config.KHMERAVE_BASE_URL} (namespace={self.namespace})")

    def manifest(self) -> Dict[str, Any]:
        """Static addon descriptor"""
        return {
            "id": self.config.ADDON_ID,
            "version": self.config.ADDON_VERSION,
            "name": self.addon_name,
            "description": "Khmer dubbed series from KhmerAve.",
            "resources": ["catalog", "meta", "stream"],
            "types": [CONTENT_TYPE],
            "idPrefixes": [f"{self.namespace}:"],
            "catalogs": [
                {
                    "type": CONTENT_TYPE,
                    "id": self.catalog_id,
                    "name": self.config.CATALOG_NAME,
                    "extra": [
                        {"name": "search", "isRequired": False},
                        {"name": "skip", "isRequired": False},
                    ],
                }
            ],
            "behaviorHints": {"configurable": False},
        }

    # =========================================================================
    # CATALOG
    # =========================================================================
    async def catalog(self, content_type: str, catalog_id: str, extra: Optional[str] = None) -> AddonResult:
        """List shows of the single supported catalog"""
        if content_type != CONTENT_TYPE or catalog_id != self.catalog_id:
            logger.debug(f"[Addon] Ignoring catalog {content_type}/{catalog_id}")
            return AddonResult(payload={"metas": []})

        params = parse_extra(extra)
        search = params.get("search")
        try:
            skip = int(params.get("skip", 0))
        except ValueError:
            skip = 0

        try:
            shows = await self.scraper.catalog(skip=skip, search=search)
        except AddonError as e:
            logger.warning(f"[Addon] Catalog failed (skip={skip}, search={search!r}): {e}")
            return AddonResult.empty("metas", str(e))
        except Exception as e:
            logger.exception("[Addon] Unexpected catalog error")
            return AddonResult.empty("metas", str(e))

        return AddonResult(payload={"metas": [s.to_meta_preview(CONTENT_TYPE) for s in shows]})

    # =========================================================================
    # META
    # =========================================================================
    async def meta(self, content_type: str, meta_id: str) -> AddonResult:
        """Show metadata with its episode list"""
        if not has_prefix(meta_id, self.namespace, SHOW):
            return AddonResult.empty("meta", f"Unsupported id {meta_id!r}")

        try:
            show = await self.scraper.get_show(meta_id)
        except AddonError as e:
            logger.warning(f"[Addon] Meta failed for {meta_id}: {e}")
            return AddonResult.empty("meta", str(e))
        except Exception as e:
            logger.exception(f"[Addon] Unexpected meta error for {meta_id}")
            return AddonResult.empty("meta", str(e))

        return AddonResult(payload={"meta": show.to_meta(CONTENT_TYPE)})

    # =========================================================================
    # STREAM
    # =========================================================================
    async def stream(self, content_type: str, stream_id: str) -> AddonResult:
        """Playable streams of one episode, direct media first"""
        if not has_prefix(stream_id, self.namespace, EPISODE):
            return AddonResult.empty("streams", f"Unsupported id {stream_id!r}")

        try:
            streams = await self.scraper.get_streams(stream_id)
        except AddonError as e:
            logger.warning(f"[Addon] Stream failed for {stream_id}: {e}")
            return AddonResult.empty("streams", str(e))
        except Exception as e:
            logger.exception(f"[Addon] Unexpected stream error for {stream_id}")
            return AddonResult.empty("streams", str(e))

        return AddonResult(payload={"streams": [s.to_stream(self.addon_name) for s in streams]})

    def cache_stats(self) -> Dict[str, Any]:
        return {name: cache.stats() for name, cache in self.caches.items()}
