"""KhmerDubbed: Stremio addon for KhmerAve series."""

__version__ = "1.0.0"
