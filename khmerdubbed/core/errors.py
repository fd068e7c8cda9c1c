"""
Error taxonomy for the addon.
Services raise these; the addon boundary turns them into empty answers.
"""
from typing import Optional


class AddonError(Exception):
    """Base class for addon errors"""


class FetchError(AddonError):
    """Upstream page could not be fetched (bad status, transport error or timeout)"""

    def __init__(self, url: str, status: Optional[int] = None, reason: str = "", timeout: bool = False):
        self.url = url
        self.status = status
        self.reason = reason
        self.timeout = timeout
        if timeout:
            detail = "timed out"
        elif status is not None:
            detail = f"HTTP {status}"
        else:
            detail = reason or "request failed"
        super().__init__(f"Failed to fetch {url}: {detail}")


class DecodeError(AddonError):
    """Opaque locator is malformed or of the wrong kind"""
