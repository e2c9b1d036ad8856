"""
Data models for resolved stream options.

This module contains the enums naming quality tiers and video sources, and
the dataclass handed to the streaming client once presets are applied.
"""

from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any


class QualityTier(str, Enum):
    """Named quality tier."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class VideoSource(str, Enum):
    """Where a video is streamed from."""

    YOUTUBE = "youtube"
    TWITCH = "twitch"
    LOCAL = "local"


@dataclass(frozen=True)
class StreamOptions:
    """Encoder settings for one stream."""

    width: int
    height: int
    frame_rate: int
    bitrate_video: int  # kbps
    bitrate_video_max: int  # kbps
    video_codec: str
    hardware_accelerated_decoding: bool
    minimize_latency: bool = True
    h26x_preset: str = "ultrafast"
    audio_bitrate: int = 96  # kbps
    audio_channels: int = 2
    audio_sample_rate: int = 48000
    keyframe_interval: int = 1  # seconds
    buffer_size: int = 8192
    max_muxing_queue_size: int = 2048

    @property
    def resolution(self) -> str:
        """Get resolution as string (e.g., '1280x720')."""
        return f"{self.width}x{self.height}"

    def with_limits(self, frame_rate: int, bitrate_video: int) -> "StreamOptions":
        """Return a copy with frame rate and bitrate capped at the given values."""
        return replace(
            self,
            frame_rate=min(self.frame_rate, frame_rate),
            bitrate_video=min(self.bitrate_video, bitrate_video),
            minimize_latency=True,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)
