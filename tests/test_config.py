"""
Tests for configuration system.
"""

import tempfile
from pathlib import Path

import pytest

from streamtune.config import (
    AppConfig,
    ConfigManager,
    PerformanceConfig,
    QualityPreset,
    StreamSettings,
    get_config,
    get_config_manager,
    reset_config_manager,
)
from streamtune.utils import ConfigurationError, PresetNotFoundError


@pytest.fixture
def no_default_config(monkeypatch, tmp_path):
    """Point the default config locations at files that don't exist."""
    monkeypatch.setattr(
        ConfigManager, "DEFAULT_CONFIG_LOCATIONS", [tmp_path / "missing.yaml"]
    )


class TestAppConfig:
    """Test AppConfig model."""

    def test_create_default(self):
        """Test creating default configuration."""
        config = AppConfig.create_default()

        assert config.stream.width == 1280
        assert config.stream.height == 720
        assert config.stream.video_codec == "H264"
        assert len(config.performance.presets) == 3
        assert "low" in config.performance.presets
        assert "medium" in config.performance.presets
        assert "high" in config.performance.presets
        assert set(config.performance.source_settings) == {"youtube", "twitch", "local"}

    def test_get_preset(self):
        """Test getting quality preset."""
        config = AppConfig.create_default()

        medium = config.get_preset("Medium")
        assert medium is not None
        assert medium.bitrate_video == 1500
        assert config.get_preset("ultra") is None

    def test_defaults_not_shared(self):
        """Test each config gets its own preset tables."""
        first = AppConfig.create_default()
        second = AppConfig.create_default()

        first.performance.presets["custom"] = QualityPreset(frame_rate=10, bitrate_video=300)
        assert "custom" not in second.performance.presets


class TestStreamSettings:
    """Test StreamSettings validation."""

    def test_codec_normalized(self):
        """Test codec names are normalized."""
        assert StreamSettings(video_codec="hevc").video_codec == "H265"
        assert StreamSettings(video_codec="vp9").video_codec == "VP9"

    def test_invalid_codec(self):
        """Test unsupported codec."""
        with pytest.raises(ValueError):
            StreamSettings(video_codec="mpeg2")

    def test_invalid_fps(self):
        """Test out-of-range frame rate."""
        with pytest.raises(ValueError):
            StreamSettings(fps=0)


class TestPerformanceConfig:
    """Test PerformanceConfig validation."""

    def test_defaults(self):
        """Test default tuning values."""
        config = PerformanceConfig()

        assert config.buffer_size == 4096
        assert config.max_muxing_queue_size == 1024
        assert config.analyze_duration == "10M"
        assert config.probe_size == "10M"
        assert config.max_delay == 500000
        assert config.mux_delay == 0.1

    def test_invalid_size(self):
        """Test malformed FFmpeg size strings."""
        with pytest.raises(ValueError):
            PerformanceConfig(analyze_duration="lots")
        with pytest.raises(ValueError):
            PerformanceConfig(probe_size="10X")

    def test_tier_names_lowercased(self):
        """Test tier names are lower-cased."""
        config = PerformanceConfig(presets={"Ultra": {"frame_rate": 60, "bitrate_video": 6000}})

        assert list(config.presets) == ["ultra"]

    def test_empty_presets(self):
        """Test at least one tier is required."""
        with pytest.raises(ValueError):
            PerformanceConfig(presets={})

    def test_missing_source(self):
        """Test every known source must be configured."""
        with pytest.raises(ValueError):
            PerformanceConfig(
                source_settings={
                    "youtube": {"frame_rate": 24, "bitrate_video": 1500},
                    "local": {"frame_rate": 30, "bitrate_video": 2000},
                }
            )

    def test_unknown_source(self):
        """Test unknown sources are rejected."""
        with pytest.raises(ValueError):
            PerformanceConfig(
                source_settings={
                    "youtube": {"frame_rate": 24, "bitrate_video": 1500},
                    "twitch": {"frame_rate": 30, "bitrate_video": 1800},
                    "local": {"frame_rate": 30, "bitrate_video": 2000},
                    "vimeo": {"frame_rate": 30, "bitrate_video": 2000},
                }
            )


class TestConfigManager:
    """Test ConfigManager."""

    def test_load_default(self, no_default_config):
        """Test loading default configuration."""
        manager = ConfigManager()
        config = manager.load()

        assert isinstance(config, AppConfig)
        assert config.stream.fps == 30

    def test_save_and_load(self):
        """Test saving and loading configuration."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "config.yaml"

            manager = ConfigManager(config_path)
            config = AppConfig.create_default()
            config.stream.fps = 24
            manager.save(config_path, config)

            assert config_path.exists()

            loaded_config = ConfigManager(config_path).load()

            assert loaded_config.stream.fps == 24
            assert loaded_config.performance.presets == config.performance.presets

    def test_partial_file(self, tmp_path):
        """Test missing sections fall back to defaults."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("stream:\n  fps: 60\n  video_codec: av1\n", encoding="utf-8")

        config = ConfigManager(config_path).load()

        assert config.stream.fps == 60
        assert config.stream.video_codec == "AV1"
        assert config.performance.buffer_size == 4096

    def test_missing_file(self, tmp_path):
        """Test explicit path that doesn't exist."""
        with pytest.raises(ConfigurationError):
            ConfigManager(tmp_path / "nope.yaml").load()

    def test_empty_file(self, tmp_path):
        """Test empty configuration file."""
        config_path = tmp_path / "config.yaml"
        config_path.touch()

        with pytest.raises(ConfigurationError):
            ConfigManager(config_path).load()

    def test_invalid_yaml(self, tmp_path):
        """Test malformed YAML."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("stream: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            ConfigManager(config_path).load()

    def test_invalid_values(self, tmp_path):
        """Test values failing validation."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("stream:\n  fps: 0\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            ConfigManager(config_path).load()

    def test_init_default_config(self, tmp_path):
        """Test initializing default config file."""
        config_path = tmp_path / "config.yaml"

        created_path = ConfigManager().init_default_config(config_path)

        assert created_path == config_path
        assert created_path.exists()

    def test_init_existing_config_without_force(self, tmp_path):
        """Test initializing config when file exists without force."""
        config_path = tmp_path / "config.yaml"
        config_path.touch()

        with pytest.raises(ConfigurationError):
            ConfigManager().init_default_config(config_path, force=False)

    def test_init_existing_config_with_force(self, tmp_path):
        """Test force overwrites an existing file."""
        config_path = tmp_path / "config.yaml"
        config_path.touch()

        ConfigManager().init_default_config(config_path, force=True)

        assert ConfigManager(config_path).load().stream.width == 1280

    def test_get_quality_preset(self, no_default_config):
        """Test getting a preset through the manager."""
        manager = ConfigManager()

        assert manager.get_quality_preset("high").bitrate_video == 2000

    def test_get_nonexistent_preset(self, no_default_config):
        """Test getting nonexistent preset."""
        manager = ConfigManager()

        with pytest.raises(PresetNotFoundError):
            manager.get_quality_preset("ultra")

    def test_available_presets(self, no_default_config):
        """Test getting available presets."""
        manager = ConfigManager()

        assert manager.available_presets == ["low", "medium", "high"]

    def test_reload(self, tmp_path):
        """Test reload picks up file changes."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("stream:\n  fps: 60\n", encoding="utf-8")
        manager = ConfigManager(config_path)
        assert manager.config.stream.fps == 60

        config_path.write_text("stream:\n  fps: 25\n", encoding="utf-8")

        assert manager.reload().stream.fps == 25
        assert manager.config.stream.fps == 25


class TestGlobalConfig:
    """Test the process-wide config accessors."""

    @pytest.fixture(autouse=True)
    def fresh_manager(self):
        """Start and finish each test without a cached manager."""
        reset_config_manager()
        yield
        reset_config_manager()

    def test_get_config_from_path(self, tmp_path):
        """Test get_config loads the given file on first use."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("stream:\n  fps: 60\n", encoding="utf-8")

        assert get_config(config_path).stream.fps == 60

    def test_get_config_defaults(self, no_default_config):
        """Test get_config falls back to defaults when no file exists."""
        config = get_config()

        assert config.stream.fps == 30
        assert config.performance.buffer_size == 4096

    def test_manager_is_cached(self, tmp_path):
        """Test later calls reuse the first manager."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("stream:\n  fps: 60\n", encoding="utf-8")

        first = get_config_manager(config_path)

        assert get_config_manager() is first
        assert get_config().stream.fps == 60

    def test_reload_through_global_manager(self, tmp_path):
        """Test reloading the global manager updates get_config."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("stream:\n  fps: 60\n", encoding="utf-8")
        get_config(config_path)

        config_path.write_text("stream:\n  fps: 25\n", encoding="utf-8")
        get_config_manager().reload()

        assert get_config().stream.fps == 25
