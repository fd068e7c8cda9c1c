"""
Listing models shared by the scraping services and the addon boundary
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ShowSummary:
    id: str
    name: str
    poster: Optional[str] = None

    def to_meta_preview(self, content_type: str = "series") -> Dict[str, Any]:
        preview = {
            "id": self.id,
            "type": content_type,
            "name": self.name,
            "posterShape": "poster",
        }
        if self.poster:
            preview["poster"] = self.poster
        return preview


@dataclass
class Episode:
    id: str
    title: str
    number: int

    def to_video(self, season: int = 1) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "season": season,
            "episode": self.number,
        }


@dataclass
class ShowMeta:
    id: str
    name: str
    poster: Optional[str] = None
    description: Optional[str] = None
    episodes: List[Episode] = field(default_factory=list)

    def to_meta(self, content_type: str = "series") -> Dict[str, Any]:
        meta = {
            "id": self.id,
            "type": content_type,
            "name": self.name,
            "posterShape": "poster",
            "videos": [ep.to_video() for ep in self.episodes],
        }
        if self.poster:
            meta["poster"] = self.poster
            meta["background"] = self.poster
        if self.description:
            meta["description"] = self.description
        return meta


@dataclass
class StreamCandidate:
    label: str
    url: str
    is_direct: bool = False

    def to_stream(self, addon_name: str) -> Dict[str, Any]:
        stream = {
            "name": addon_name,
            "title": self.label,
            "url": self.url,
        }
        if not self.is_direct:
            # embed/player pages cannot be played inline by web clients
            stream["behaviorHints"] = {"notWebReady": True}
        return stream


@dataclass
class AddonResult:
    """
    Outcome of one addon handler call.

    ``payload`` is always a valid protocol body; ``degraded`` marks the
    neutral fallback produced when the upstream site failed.
    """
    payload: Dict[str, Any]
    degraded: bool = False
    error: Optional[str] = None

    @classmethod
    def empty(cls, key: str, error: Optional[str] = None) -> "AddonResult":
        neutral = {"metas": [], "meta": None, "streams": []}[key]
        return cls(payload={key: neutral}, degraded=True, error=error)
