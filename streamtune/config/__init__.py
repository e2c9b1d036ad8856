"""Configuration management for streamtune."""

from streamtune.config.manager import (
    ConfigManager,
    get_config,
    get_config_manager,
    reset_config_manager,
)
from streamtune.config.models import (
    AppConfig,
    PerformanceConfig,
    QualityPreset,
    SourceSettings,
    StreamSettings,
    default_quality_presets,
    default_source_settings,
)

__all__ = [
    # Manager
    "ConfigManager",
    "get_config",
    "get_config_manager",
    "reset_config_manager",
    # Models
    "AppConfig",
    "PerformanceConfig",
    "QualityPreset",
    "SourceSettings",
    "StreamSettings",
    "default_quality_presets",
    "default_source_settings",
]
