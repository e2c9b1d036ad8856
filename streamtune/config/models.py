"""
Configuration models using Pydantic.

This module defines the configuration structure for streamtune: the base
stream settings and the performance tables (quality tiers and per-source
overrides) the preset lookups read from.
"""

import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from streamtune.models import QualityTier, VideoSource
from streamtune.utils.errors import ConfigurationError
from streamtune.utils.helpers import normalize_video_codec


class StreamSettings(BaseModel):
    """Base stream settings before any preset is applied."""

    width: int = Field(default=1280, ge=16, le=7680, description="Output width in pixels")
    height: int = Field(default=720, ge=16, le=4320, description="Output height in pixels")
    fps: int = Field(default=30, ge=1, le=240, description="Target frame rate")
    bitrate_kbps: int = Field(default=1000, ge=50, description="Target video bitrate in kbps")
    max_bitrate_kbps: int = Field(
        default=2500, ge=50, description="Maximum video bitrate in kbps"
    )
    video_codec: str = Field(default="H264", description="Video codec: H264, H265, VP8, VP9, AV1")
    hardware_accelerated_decoding: bool = Field(
        default=False, description="Decode input with hardware acceleration"
    )

    @field_validator("video_codec")
    @classmethod
    def validate_video_codec(cls, v: str) -> str:
        """Validate and normalize video codec."""
        try:
            return normalize_video_codec(v)
        except ConfigurationError as e:
            raise ValueError(str(e)) from e


class QualityPreset(BaseModel):
    """Quality tier settings."""

    frame_rate: int = Field(ge=1, le=240, description="Frame rate")
    bitrate_video: int = Field(ge=50, description="Video bitrate in kbps")
    minimize_latency: bool = Field(default=True, description="Favour latency over quality")
    description: str = Field(default="", description="Human-readable summary")


class SourceSettings(BaseModel):
    """Per-source override settings."""

    frame_rate: int = Field(ge=1, le=240, description="Frame rate")
    bitrate_video: int = Field(ge=50, description="Video bitrate in kbps")
    minimize_latency: bool = Field(default=True, description="Favour latency over quality")
    reason: str = Field(default="", description="Why this source gets these settings")


def default_quality_presets() -> dict[str, QualityPreset]:
    """Build the built-in quality tier table."""
    return {
        QualityTier.LOW.value: QualityPreset(
            frame_rate=24,
            bitrate_video=1000,
            minimize_latency=True,
            description="Low quality, minimal stuttering",
        ),
        QualityTier.MEDIUM.value: QualityPreset(
            frame_rate=30,
            bitrate_video=1500,
            minimize_latency=True,
            description="Balanced quality and performance",
        ),
        QualityTier.HIGH.value: QualityPreset(
            frame_rate=30,
            bitrate_video=2000,
            minimize_latency=False,
            description="High quality, may have some stuttering",
        ),
    }


def default_source_settings() -> dict[str, SourceSettings]:
    """Build the built-in per-source table."""
    return {
        VideoSource.YOUTUBE.value: SourceSettings(
            frame_rate=24,
            bitrate_video=1500,
            minimize_latency=True,
            reason="YouTube videos often have variable frame rates",
        ),
        VideoSource.TWITCH.value: SourceSettings(
            frame_rate=30,
            bitrate_video=1800,
            minimize_latency=True,
            reason="Twitch streams are optimized for live content",
        ),
        VideoSource.LOCAL.value: SourceSettings(
            frame_rate=30,
            bitrate_video=2000,
            minimize_latency=False,
            reason="Local files can handle higher quality",
        ),
    }


class PerformanceConfig(BaseModel):
    """Performance tuning configuration."""

    buffer_size: int = Field(default=4096, ge=512, description="Playback buffer size")
    max_muxing_queue_size: int = Field(
        default=1024, ge=16, description="FFmpeg muxing queue size"
    )
    analyze_duration: str = Field(default="10M", description="FFmpeg -analyzeduration value")
    probe_size: str = Field(default="10M", description="FFmpeg -probesize value")
    max_delay: int = Field(
        default=500000, ge=0, description="Maximum audio/video sync delay in microseconds"
    )
    mux_delay: float = Field(default=0.1, ge=0, description="Muxing delay in seconds")
    mux_preload: float = Field(default=0.1, ge=0, description="Muxing preload in seconds")
    presets: dict[str, QualityPreset] = Field(default_factory=default_quality_presets)
    source_settings: dict[str, SourceSettings] = Field(default_factory=default_source_settings)

    @field_validator("analyze_duration", "probe_size")
    @classmethod
    def validate_size(cls, v: str) -> str:
        """Validate FFmpeg size strings such as 10M or 5000000."""
        value = v.strip()
        if not re.fullmatch(r"[0-9]+[KMGkmg]?", value):
            raise ValueError(f"invalid size '{v}', expected e.g. 10M or 5000000")
        return value

    @field_validator("presets")
    @classmethod
    def validate_presets(cls, v: dict[str, QualityPreset]) -> dict[str, QualityPreset]:
        """Lower-case tier names and require at least one tier."""
        if not v:
            raise ValueError("presets must define at least one quality tier")
        return {name.lower(): preset for name, preset in v.items()}

    @field_validator("source_settings")
    @classmethod
    def validate_source_settings(
        cls, v: dict[str, SourceSettings]
    ) -> dict[str, SourceSettings]:
        """Require exactly the known video sources."""
        valid_sources = [source.value for source in VideoSource]
        normalized = {name.lower(): settings for name, settings in v.items()}
        unknown = sorted(set(normalized) - set(valid_sources))
        if unknown:
            raise ValueError(f"unknown video sources {unknown}, valid: {valid_sources}")
        missing = sorted(set(valid_sources) - set(normalized))
        if missing:
            raise ValueError(f"source_settings is missing {missing}")
        return normalized


class AppConfig(BaseModel):
    """Main streamtune configuration."""

    stream: StreamSettings = Field(default_factory=StreamSettings)
    performance: PerformanceConfig = Field(default_factory=PerformanceConfig)

    @classmethod
    def create_default(cls) -> "AppConfig":
        """Create default configuration with the built-in preset tables."""
        return cls()

    def get_preset(self, name: str) -> Optional[QualityPreset]:
        """Get quality preset by tier name."""
        return self.performance.presets.get(name.lower())
