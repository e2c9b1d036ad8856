"""Quality presets, source detection and FFmpeg argument builders."""

from streamtune.presets.optimizer import (
    build_ffmpeg_command,
    get_emergency_stream_options,
    get_optimized_ffmpeg_input,
    get_optimized_ffmpeg_output,
    get_optimized_stream_options,
    get_performance_filters,
    get_stream_options_for_video,
    resolve_stream_options,
)
from streamtune.presets.performance import (
    detect_video_source,
    get_ffmpeg_input_options,
    get_ffmpeg_output_options,
    get_performance_settings,
    get_quality_preset,
)

__all__ = [
    # Optimizer
    "build_ffmpeg_command",
    "get_emergency_stream_options",
    "get_optimized_ffmpeg_input",
    "get_optimized_ffmpeg_output",
    "get_optimized_stream_options",
    "get_performance_filters",
    "get_stream_options_for_video",
    "resolve_stream_options",
    # Performance
    "detect_video_source",
    "get_ffmpeg_input_options",
    "get_ffmpeg_output_options",
    "get_performance_settings",
    "get_quality_preset",
]
