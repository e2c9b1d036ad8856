"""
Helper functions for streamtune.

This module contains utility functions used throughout the application.
"""

import re
import shlex
from typing import Sequence

from .errors import ConfigurationError

# Accepted spellings for each codec the streaming client understands
_CODEC_ALIASES: dict[str, str] = {
    "h264": "H264",
    "avc": "H264",
    "h265": "H265",
    "hevc": "H265",
    "vp8": "VP8",
    "vp9": "VP9",
    "av1": "AV1",
}


def normalize_video_codec(codec: str) -> str:
    """
    Normalize a video codec name to its canonical upper-case form.

    Args:
        codec: Codec name in any case (e.g., "h264", "HEVC", "vp9")

    Returns:
        Canonical codec name (e.g., "H264", "H265", "VP9")

    Raises:
        ConfigurationError: If the codec is not supported
    """
    key = re.sub(r"[^a-z0-9]", "", codec.strip().lower())
    if key not in _CODEC_ALIASES:
        valid = sorted(set(_CODEC_ALIASES.values()))
        raise ConfigurationError(f"Unsupported video codec '{codec}'. Use one of {valid}")
    return _CODEC_ALIASES[key]


def format_kbps(kbps: int) -> str:
    """
    Format a kilobit rate as an FFmpeg bitrate argument.

    Args:
        kbps: Bitrate in kilobits per second

    Returns:
        Bitrate string (e.g., "1200k")
    """
    return f"{kbps}k"


def format_bitrate(bits_per_second: int) -> str:
    """
    Format bitrate in human-readable format.

    Args:
        bits_per_second: Bitrate in bits per second

    Returns:
        Formatted bitrate string (e.g., "1.2 Mbps")
    """
    if bits_per_second >= 1000000:
        return f"{bits_per_second / 1000000:.1f} Mbps"
    elif bits_per_second >= 1000:
        return f"{bits_per_second / 1000:.1f} Kbps"
    else:
        return f"{bits_per_second} bps"


def format_number(value: float) -> str:
    """Render a number the way it should appear on a command line (0.1, 500000)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def join_command(args: Sequence[str]) -> str:
    """Quote an argument list into a single shell-safe string."""
    return shlex.join(args)
