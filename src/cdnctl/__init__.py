"""cdnctl: self-hosted file CDN control utility."""

__version__ = "0.3.0"
