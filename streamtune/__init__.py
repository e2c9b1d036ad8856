"""
streamtune

Quality presets, FFmpeg argument builders and time string parsing for
streaming videos with minimal stuttering.
"""

__version__ = "0.1.0"

from streamtune.models import QualityTier, StreamOptions, VideoSource
from streamtune.utils import (
    ConfigurationError,
    InvalidDurationError,
    InvalidFormatError,
    PresetNotFoundError,
    StreamTuneError,
    format_time_string,
    get_logger,
    parse_time_string,
    setup_logger,
)

__all__ = [
    "__version__",
    # Models
    "QualityTier",
    "StreamOptions",
    "VideoSource",
    # Time strings
    "format_time_string",
    "parse_time_string",
    # Utils
    "ConfigurationError",
    "InvalidDurationError",
    "InvalidFormatError",
    "PresetNotFoundError",
    "StreamTuneError",
    "get_logger",
    "setup_logger",
]
