from .khmerave import KhmerAveScraper
from .addon import AddonService

__all__ = [
    "KhmerAveScraper",
    "AddonService",
]
