"""Unit tests for configuration loading and saving."""

import tomllib
from pathlib import Path

import pytest
from btrfsctl.core.config import BtrfsctlConfig, load_config, save_config
from btrfsctl.core.errors import ConfigError, ConfigParseError
from btrfsctl.core.paths import get_config_path


class TestBtrfsctlConfig:
    """Tests for the BtrfsctlConfig model."""

    def test_defaults(self) -> None:
        """Defaults match the documented values."""
        config = BtrfsctlConfig()

        assert config.btrfs_binary == "btrfs"
        assert config.poll_interval_seconds == 2.0
        assert config.settle_seconds == 2.0
        assert config.use_ionice is True

    @pytest.mark.parametrize("interval", [0.1, 0.0, 61.0])
    def test_rejects_out_of_range_interval(self, interval: float) -> None:
        """Poll interval must stay within 0.5-60 seconds."""
        with pytest.raises(ValueError):
            BtrfsctlConfig(poll_interval_seconds=interval)

    def test_rejects_empty_binary(self) -> None:
        """The btrfs binary cannot be empty."""
        with pytest.raises(ValueError):
            BtrfsctlConfig(btrfs_binary="")

    def test_rejects_unknown_keys(self) -> None:
        """Unknown settings are rejected."""
        with pytest.raises(ValueError):
            BtrfsctlConfig(poll_every=3)  # type: ignore[call-arg]


class TestLoadConfig:
    """Tests for load_config function."""

    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        """No config file means defaults."""
        assert load_config(tmp_path / "missing.toml") == BtrfsctlConfig()

    def test_uses_xdg_config_path(self, isolated_config_home: Path) -> None:
        """Without a path argument, the XDG config file is read."""
        path = isolated_config_home / "btrfsctl" / "config.toml"
        path.parent.mkdir(parents=True)
        path.write_text("poll_interval_seconds = 5.0\n")

        assert get_config_path() == path
        assert load_config().poll_interval_seconds == 5.0

    def test_partial_file_keeps_other_defaults(self, tmp_path: Path) -> None:
        """Keys not in the file keep their defaults."""
        path = tmp_path / "config.toml"
        path.write_text('btrfs_binary = "/usr/local/bin/btrfs"\nuse_ionice = false\n')

        config = load_config(path)

        assert config.btrfs_binary == "/usr/local/bin/btrfs"
        assert config.use_ionice is False
        assert config.poll_interval_seconds == 2.0

    def test_invalid_toml_raises_parse_error(self, tmp_path: Path) -> None:
        """Broken TOML raises ConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("poll_interval_seconds = [[[")

        with pytest.raises(ConfigParseError, match="Invalid TOML"):
            load_config(path)

    def test_unknown_key_raises_config_error(self, tmp_path: Path) -> None:
        """Unknown keys raise ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text("colour = 1\n")

        with pytest.raises(ConfigError, match="Invalid config content"):
            load_config(path)

    def test_bad_value_raises_config_error(self, tmp_path: Path) -> None:
        """Out-of-range values raise ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text("settle_seconds = 100.0\n")

        with pytest.raises(ConfigError):
            load_config(path)


class TestSaveConfig:
    """Tests for save_config function."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """A saved config loads back unchanged."""
        config = BtrfsctlConfig(poll_interval_seconds=1.5, use_ionice=False)
        path = tmp_path / "nested" / "config.toml"

        saved = save_config(config, path)

        assert saved == path
        assert load_config(path) == config

    def test_writes_every_key(self, tmp_path: Path) -> None:
        """Defaults are written too, so the file documents every setting."""
        path = save_config(BtrfsctlConfig(), tmp_path / "config.toml")

        with open(path, "rb") as f:
            data = tomllib.load(f)

        assert set(data) == set(BtrfsctlConfig.model_fields)

    def test_leaves_no_temp_files(self, tmp_path: Path) -> None:
        """The temporary file is moved into place."""
        save_config(BtrfsctlConfig(), tmp_path / "config.toml")

        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]

    def test_unwritable_location_raises_config_error(self, tmp_path: Path) -> None:
        """Write failures raise ConfigError."""
        blocker = tmp_path / "file"
        blocker.write_text("")

        with pytest.raises(ConfigError, match="Failed to write"):
            save_config(BtrfsctlConfig(), blocker / "config.toml")
