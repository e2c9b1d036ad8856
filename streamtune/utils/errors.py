"""
Custom exceptions for streamtune.

This module defines the exception hierarchy used throughout the application.
All errors are raised synchronously to the caller; nothing here retries.
"""

from typing import Optional


class StreamTuneError(Exception):
    """Base exception for all streamtune errors."""

    pass


class ConfigurationError(StreamTuneError):
    """Configuration is invalid or missing."""

    pass


class PresetNotFoundError(ConfigurationError):
    """Requested quality tier or source preset does not exist."""

    def __init__(self, name: str, available: Optional[list[str]] = None):
        """
        Initialize preset lookup error.

        Args:
            name: Preset name that was requested
            available: Names of presets that do exist
        """
        self.name = name
        self.available = available or []
        message = f"Preset '{name}' not found"
        if self.available:
            message += f". Available presets: {', '.join(self.available)}"
        super().__init__(message)


class TimeCodecError(StreamTuneError):
    """Time string could not be parsed or formatted."""

    pass


class InvalidFormatError(TimeCodecError):
    """Time string is malformed (wrong field count or non-numeric field)."""

    def __init__(self, message: str, text: Optional[str] = None):
        """
        Initialize format error.

        Args:
            message: Error message
            text: Offending input string
        """
        super().__init__(message)
        self.text = text


class InvalidDurationError(TimeCodecError):
    """Duration is outside the representable domain (e.g. negative seconds)."""

    def __init__(self, message: str, value: object = None):
        """
        Initialize duration error.

        Args:
            message: Error message
            value: Offending duration value
        """
        super().__init__(message)
        self.value = value
