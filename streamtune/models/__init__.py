"""Data models for streamtune."""

from streamtune.models.options import QualityTier, StreamOptions, VideoSource

__all__ = [
    "QualityTier",
    "StreamOptions",
    "VideoSource",
]
