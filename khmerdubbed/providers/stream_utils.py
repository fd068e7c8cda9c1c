"""
Stream extraction utility functions
Pattern-matching heuristics that pull candidate media URLs out of episode
and embed pages, plus URL resolution, denylist filtering and ranking.
"""
import base64
import binascii
import html
import re
from typing import Callable, Iterable, List, Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

# Tracking / social hosts that never carry a playable stream
DENYLIST_DOMAINS = (
    "facebook.com",
    "facebook.net",
    "fb.com",
    "twitter.com",
    "x.com",
    "instagram.com",
    "pinterest.com",
    "google-analytics.com",
    "googletagmanager.com",
    "googlesyndication.com",
    "doubleclick.net",
    "disqus.com",
    "addthis.com",
    "sharethis.com",
    "histats.com",
)

DIRECT_MEDIA_EXTENSIONS = (
    ".mp4", ".m3u8", ".mpd", ".webm", ".mkv", ".mov", ".m4v", ".flv", ".ts",
)

# atob("...") / Base64.decode('...') / base64_decode("...") / decode("...")
_B64_CALL_RE = re.compile(
    r"""(?:\batob|\bBase64\.decode|\bbase64_decode|\bdecode)\s*\(\s*["']([A-Za-z0-9+/_\-]{16,}={0,2})["']\s*\)"""
)
_IFRAME_SRC_RE = re.compile(r"""<iframe\b[^>]*?\bsrc\s*=\s*["']([^"']+)["']""", re.IGNORECASE)

# Player configuration idioms found in inline scripts
PLAYER_PATTERNS = (
    re.compile(r"""\bfile\s*:\s*["']([^"']+)["']"""),
    re.compile(r"""\bplaylist\s*:\s*["']([^"']+)["']"""),
    re.compile(r"""embedSWF\(\s*["']([^"']+)["']"""),
    re.compile(r"""\bsrc\s*=\s*["']([^"']+)["']\s+allow\s*=\s*["']autoplay""", re.IGNORECASE),
    re.compile(r"""<source\b[^>]*?\bsrc\s*=\s*["']([^"']+)["']""", re.IGNORECASE),
)


def _b64decode_loose(data: str) -> Optional[str]:
    """Decode standard or urlsafe base64 with or without padding."""
    padded = data.rstrip("=")
    padded += "=" * (-len(padded) % 4)
    decode = base64.urlsafe_b64decode if ("-" in data or "_" in data) else base64.b64decode
    try:
        return decode(padded.encode("ascii")).decode("utf-8", errors="replace")
    except (binascii.Error, ValueError):
        return None


def extract_base64_iframes(text: str) -> List[str]:
    """
    Find iframe sources hidden inside base64 decode-call literals

    Args:
        text: Raw page text

    Returns:
        Entity-decoded iframe src values in order of appearance
    """
    found = []
    for match in _B64_CALL_RE.finditer(text or ""):
        decoded = _b64decode_loose(match.group(1))
        if not decoded or "<iframe" not in decoded.lower():
            continue
        found.extend(html.unescape(m.group(1)).strip() for m in _IFRAME_SRC_RE.finditer(decoded))
    return found


def extract_dom_sources(soup: BeautifulSoup) -> List[str]:
    """Every <iframe src> and <source src> element, in document order."""
    found = []
    for tag in soup.find_all(["iframe", "source"]):
        src = tag.get("src")
        if src and src.strip():
            found.append(src.strip())
    return found


def extract_player_config(text: str) -> List[str]:
    """
    Regex scan for inline player configuration

    Pattern order: file, playlist, embedSWF, autoplay iframe src, <source>.
    Matches are HTML-entity-decoded.
    """
    found = []
    for pattern in PLAYER_PATTERNS:
        for match in pattern.finditer(text or ""):
            found.append(html.unescape(match.group(1)).strip())
    return found


# Applied in order; extend or reorder here without touching fetch/cache code
EXTRACTORS: List[Callable[[str, BeautifulSoup], List[str]]] = [
    lambda text, soup: extract_base64_iframes(text),
    lambda text, soup: extract_dom_sources(soup),
    lambda text, soup: extract_player_config(text),
]


def extract_raw_candidates(text: str, soup: Optional[BeautifulSoup] = None) -> List[str]:
    """Run every extraction strategy and return raw (unresolved) candidates."""
    if soup is None:
        soup = BeautifulSoup(text or "", "html.parser")
    raw: List[str] = []
    for extractor in EXTRACTORS:
        raw.extend(extractor(text, soup))
    return raw


def is_denylisted(url: str) -> bool:
    host = (urlparse(url).hostname or "").lower()
    return any(host == d or host.endswith("." + d) for d in DENYLIST_DOMAINS)


def resolve_candidate(candidate: str, page_url: str) -> Optional[str]:
    """
    Resolve a raw candidate against its page URL

    Returns:
        Absolute http(s) URL, or None when unresolvable or denylisted
    """
    if not candidate:
        return None
    try:
        absolute = urljoin(page_url, candidate.strip())
        parsed = urlparse(absolute)
    except ValueError:
        return None
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return None
    if is_denylisted(absolute):
        return None
    return absolute


def is_direct_media(url: str) -> bool:
    """True when the URL looks directly playable rather than an embed page."""
    lowered = (url or "").lower()
    if ".m3u8" in lowered:
        return True
    path = urlparse(lowered).path
    return path.endswith(DIRECT_MEDIA_EXTENSIONS)


def dedupe_urls(urls: Iterable[str]) -> List[str]:
    """Drop repeated URLs, first occurrence wins."""
    seen = set()
    out = []
    for url in urls:
        if url in seen:
            continue
        seen.add(url)
        out.append(url)
    return out


def rank_urls(urls: Iterable[str]) -> List[str]:
    """Stable sort: direct media before embed pages."""
    return sorted(urls, key=lambda u: 0 if is_direct_media(u) else 1)


def collect_candidates(text: str, page_url: str, soup: Optional[BeautifulSoup] = None) -> List[str]:
    """Extract, resolve, filter and dedupe the candidates of one page."""
    resolved = (resolve_candidate(c, page_url) for c in extract_raw_candidates(text, soup))
    return dedupe_urls(u for u in resolved if u)


def describe_candidate(url: str) -> str:
    """Human label for a stream entry, e.g. "HLS - cdn.example.com"."""
    host = urlparse(url).hostname or "source"
    if host.startswith("www."):
        host = host[4:]
    lowered = url.lower()
    if ".m3u8" in lowered:
        kind = "HLS"
    elif is_direct_media(url):
        kind = "Direct"
    else:
        kind = "Embed"
    return f"{kind} - {host}"
