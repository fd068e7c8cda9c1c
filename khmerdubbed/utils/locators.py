"""
Opaque addon identifiers.
Encodes absolute page URLs as "<namespace>:<kind>:<urlsafe-base64>" so
the protocol never carries raw scraped URLs.
"""
import base64
import binascii
from typing import Tuple

from ..core.errors import DecodeError

SHOW = "show"
EPISODE = "ep"
KINDS = (SHOW, EPISODE)


def encode_locator(namespace: str, kind: str, url: str) -> str:
    """
    Build an opaque locator for an absolute URL

    Args:
        namespace: Addon id prefix (e.g. "khmerave")
        kind: "show" or "ep"
        url: Absolute page URL

    Returns:
        Locator string with base64 padding stripped
    """
    if kind not in KINDS:
        raise ValueError(f"Unknown locator kind: {kind}")
    encoded = base64.urlsafe_b64encode(url.encode("utf-8")).decode("ascii").rstrip("=")
    return f"{namespace}:{kind}:{encoded}"


def split_locator(locator: str) -> Tuple[str, str, str]:
    """Split a locator into (namespace, kind, payload) without decoding."""
    parts = (locator or "").split(":", 2)
    if len(parts) != 3 or not all(parts):
        raise DecodeError(f"Malformed locator: {locator!r}")
    return parts[0], parts[1], parts[2]


def decode_payload(payload: str) -> str:
    """Decode a urlsafe base64 payload, tolerating missing padding."""
    padded = payload + "=" * (-len(payload) % 4)
    try:
        return base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8")
    except (binascii.Error, UnicodeError, ValueError) as exc:
        raise DecodeError(f"Invalid locator payload: {payload!r}") from exc


def decode_locator(locator: str, namespace: str, kind: str) -> str:
    """
    Decode a locator back to its absolute URL, checking namespace and kind

    Raises:
        DecodeError: when the locator is malformed, foreign or of another kind
    """
    ns, found_kind, payload = split_locator(locator)
    if ns != namespace or found_kind != kind:
        raise DecodeError(f"Expected a {namespace}:{kind} locator, got {locator!r}")

    url = decode_payload(payload)
    if not url.startswith(("http://", "https://")):
        raise DecodeError(f"Locator does not hold an absolute URL: {locator!r}")
    return url


def has_prefix(locator: str, namespace: str, kind: str) -> bool:
    return bool(locator) and locator.startswith(f"{namespace}:{kind}:")
