from .listing import ShowSummary, ShowMeta, Episode, StreamCandidate, AddonResult

__all__ = [
    "ShowSummary",
    "ShowMeta",
    "Episode",
    "StreamCandidate",
    "AddonResult",
]
