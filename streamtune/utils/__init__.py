"""Utility functions and helpers."""

from streamtune.utils.errors import (
    ConfigurationError,
    InvalidDurationError,
    InvalidFormatError,
    PresetNotFoundError,
    StreamTuneError,
    TimeCodecError,
)
from streamtune.utils.helpers import (
    format_bitrate,
    format_kbps,
    format_number,
    join_command,
    normalize_video_codec,
)
from streamtune.utils.logger import get_logger, setup_logger
from streamtune.utils.timecode import (
    format_time_string,
    is_valid_time_string,
    parse_time_string,
)

__all__ = [
    # Errors
    "ConfigurationError",
    "InvalidDurationError",
    "InvalidFormatError",
    "PresetNotFoundError",
    "StreamTuneError",
    "TimeCodecError",
    # Helpers
    "format_bitrate",
    "format_kbps",
    "format_number",
    "join_command",
    "normalize_video_codec",
    # Logging
    "get_logger",
    "setup_logger",
    # Time strings
    "format_time_string",
    "is_valid_time_string",
    "parse_time_string",
]
