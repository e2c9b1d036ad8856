"""
Performance presets and baseline FFmpeg options.

This module resolves quality tiers and per-source settings from the
performance tables and builds the baseline FFmpeg input/output argument
lists that go with them.
"""

from typing import List, Optional, Union

from ..config.models import PerformanceConfig, QualityPreset, SourceSettings
from ..models import QualityTier, VideoSource
from ..utils import PresetNotFoundError, format_number, get_logger

logger = get_logger(__name__)

# Substrings identifying each remote source; anything else is a local file
SOURCE_MARKERS = {
    VideoSource.YOUTUBE: ("youtube.com", "youtu.be"),
    VideoSource.TWITCH: ("twitch.tv",),
}


def detect_video_source(source: str) -> VideoSource:
    """
    Detect where a video comes from by inspecting its URL or path.

    Args:
        source: Video URL or local file path

    Returns:
        Detected VideoSource (LOCAL when nothing matches)
    """
    for video_source, markers in SOURCE_MARKERS.items():
        if any(marker in source for marker in markers):
            return video_source
    return VideoSource.LOCAL


def get_performance_settings(
    source: str, config: Optional[PerformanceConfig] = None
) -> SourceSettings:
    """
    Get performance settings for a specific video source.

    Args:
        source: Video URL or local file path
        config: Performance tables (built-in defaults if None)

    Returns:
        Settings for the detected source
    """
    config = config or PerformanceConfig()
    video_source = detect_video_source(source)
    logger.debug(f"Detected {video_source.value} source for {source}")
    return config.source_settings[video_source.value]


def get_quality_preset(
    quality: Union[QualityTier, str], config: Optional[PerformanceConfig] = None
) -> QualityPreset:
    """
    Get quality preset settings.

    Args:
        quality: Quality tier (low, medium, high, or a tier defined in config)
        config: Performance tables (built-in defaults if None)

    Returns:
        Preset for the tier

    Raises:
        PresetNotFoundError: If the tier is not defined
    """
    config = config or PerformanceConfig()
    name = quality.value if isinstance(quality, QualityTier) else quality.strip().lower()

    preset = config.presets.get(name)
    if preset is None:
        raise PresetNotFoundError(name, list(config.presets.keys()))
    return preset


def get_ffmpeg_input_options(config: Optional[PerformanceConfig] = None) -> List[str]:
    """
    Get FFmpeg input options for smoother playback.

    Args:
        config: Performance tables (built-in defaults if None)

    Returns:
        List of FFmpeg arguments that precede -i
    """
    config = config or PerformanceConfig()
    return [
        "-re",  # Read input at native frame rate
        "-analyzeduration",
        config.analyze_duration,
        "-probesize",
        config.probe_size,
        "-fflags",
        "+genpts",
        "-avoid_negative_ts",
        "make_zero",
        "-max_delay",
        str(config.max_delay),
    ]


def get_ffmpeg_output_options(config: Optional[PerformanceConfig] = None) -> List[str]:
    """
    Get FFmpeg output options for low-latency MPEG-TS streaming.

    Args:
        config: Performance tables (built-in defaults if None)

    Returns:
        List of FFmpeg arguments that follow the input
    """
    config = config or PerformanceConfig()
    return [
        # Video
        "-c:v",
        "libx264",
        "-preset",
        "veryfast",
        "-tune",
        "zerolatency",
        "-profile:v",
        "baseline",
        "-level",
        "3.0",
        "-x264-params",
        "keyint=60:min-keyint=60:scenecut=0",
        "-g",
        "60",
        "-bf",
        "0",  # No B-frames
        "-refs",
        "1",
        # Audio
        "-c:a",
        "aac",
        "-b:a",
        "128k",
        "-ar",
        "48000",
        "-ac",
        "2",
        # Output
        "-f",
        "mpegts",
        "-muxdelay",
        format_number(config.mux_delay),
        "-muxpreload",
        format_number(config.mux_preload),
        "-flush_packets",
        "1",
        "-fflags",
        "+genpts",
        "-avoid_negative_ts",
        "make_zero",
        "-max_muxing_queue_size",
        str(config.max_muxing_queue_size),
    ]
