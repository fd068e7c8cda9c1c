from .khmerave import KhmerAveScraper

__all__ = ["KhmerAveScraper"]
