"""
Base HTTP client for KhmerAve page requests
Handles headers, timeouts, raw-HTML caching and negative caching
"""
import aiohttp
import asyncio
import logging
from typing import Optional, Dict

from ...core.caching import TTLCache
from ...core.errors import FetchError

logger = logging.getLogger(__name__)


class KhmerAveBaseClient:
    """HTML fetcher with a positive and a negative (recent failure) cache"""

    def __init__(
        self,
        base_url: str,
        html_cache: TTLCache,
        negative_cache: TTLCache,
        user_agent: str,
        timeout: float = 15,
        default_headers: Optional[Dict[str, str]] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.html_cache = html_cache
        self.negative_cache = negative_cache
        self.timeout = timeout
        self.default_headers = {
            "User-Agent": user_agent,
            "Referer": f"{self.base_url}/",
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            **(default_headers or {}),
        }

    async def fetch(self, url: str, timeout: Optional[float] = None) -> str:
        """
        Fetch a page as text, cache-checked

        Args:
            url: Absolute URL
            timeout: Override of the total request timeout in seconds

        Returns:
            Page HTML

        Raises:
            FetchError: on non-success status, transport error or timeout,
                or when the URL failed recently
        """
        failure = self.negative_cache.get(url)
        if failure is not None:
            logger.debug(f"[KhmerAveFetch] Negative cache hit for {url}")
            raise FetchError(url, status=failure.status, reason=failure.reason, timeout=failure.timeout)

        cached = self.html_cache.get(url)
        if cached is not None:
            logger.debug(f"[KhmerAveFetch] Cache hit for {url}")
            return cached

        try:
            text = await self._get(url, timeout=timeout)
        except FetchError as exc:
            logger.warning(f"[KhmerAveFetch] {exc}")
            self.negative_cache.set(url, exc)
            raise

        self.html_cache.set(url, text)
        return text

    async def _get(self, url: str, timeout: Optional[float] = None) -> str:
        """Single GET request, redirects followed, no retries"""
        client_timeout = aiohttp.ClientTimeout(total=timeout or self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=client_timeout, headers=self.default_headers) as session:
                async with session.get(url, allow_redirects=True) as resp:
                    status = resp.status
                    text = await resp.text(errors="replace")
        except asyncio.TimeoutError:
            raise FetchError(url, timeout=True)
        except aiohttp.ClientError as exc:
            raise FetchError(url, reason=str(exc) or exc.__class__.__name__)

        if status >= 400:
            raise FetchError(url, status=status)
        return text
