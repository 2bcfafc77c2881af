"""Unit tests for theme module.

Tests for theme loading, validation, and Rich theme generation.
"""

# pyright: reportPrivateUsage=false

from pathlib import Path
from unittest.mock import patch

import btrfsctl.core.theme as theme_module
import pytest
from btrfsctl.core.theme import (
    ThemeColors,
    _load_toml_colors,
    get_bundled_theme_path,
    get_rich_theme,
    get_theme,
    load_theme,
    reload_theme,
)
from rich.theme import Theme


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_default_values(self) -> None:
        """ThemeColors has sensible defaults."""
        colors = ThemeColors()
        assert colors.text == "#ffffff"
        assert colors.header == "#5fafff"
        assert colors.success == "#00d75f"
        assert colors.error == "#ff5f5f"

    def test_valid_hex_colors(self) -> None:
        """ThemeColors accepts #RGB and #RRGGBB codes."""
        colors = ThemeColors(text="#AABBCC", muted="#abc", device_ssd="#123456")
        assert colors.text == "#AABBCC"
        assert colors.muted == "#abc"
        assert colors.device_ssd == "#123456"

    def test_strips_whitespace(self) -> None:
        """Surrounding whitespace is removed."""
        assert ThemeColors(text="  #000000 ").text == "#000000"

    def test_invalid_hex_no_hash(self) -> None:
        """ThemeColors rejects colors without # prefix."""
        with pytest.raises(ValueError, match="must start with '#'"):
            ThemeColors(text="ffffff")

    def test_invalid_hex_wrong_length(self) -> None:
        """ThemeColors rejects colors with wrong length."""
        with pytest.raises(ValueError, match="must be #RGB or #RRGGBB"):
            ThemeColors(text="#ff")

    def test_invalid_hex_chars(self) -> None:
        """ThemeColors rejects invalid hex characters."""
        with pytest.raises(ValueError, match="invalid hex color"):
            ThemeColors(scrub_running="#gggggg")

    def test_extra_fields_forbidden(self) -> None:
        """ThemeColors rejects unknown fields."""
        with pytest.raises(ValueError):
            ThemeColors(package_manual="#ffffff")  # type: ignore[call-arg]


class TestLoadTomlColors:
    """Tests for _load_toml_colors internal function."""

    def test_loads_valid_toml(self, tmp_path: Path) -> None:
        """Loads colors from valid TOML file."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\ntext = "#000000"\ndevice_hdd = "#aabbcc"\n')

        result = _load_toml_colors(theme_file)

        assert result == {"text": "#000000", "device_hdd": "#aabbcc"}

    def test_returns_none_for_missing_file(self, tmp_path: Path) -> None:
        """Returns None when file doesn't exist."""
        assert _load_toml_colors(tmp_path / "nonexistent.toml") is None

    def test_returns_none_for_invalid_toml(self, tmp_path: Path) -> None:
        """Returns None for malformed TOML."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text("not valid [ toml syntax")

        assert _load_toml_colors(theme_file) is None

    def test_returns_empty_dict_for_missing_colors_section(self, tmp_path: Path) -> None:
        """Returns empty dict when colors section is missing."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[other]\nkey = "value"\n')

        assert _load_toml_colors(theme_file) == {}

    def test_ignores_non_string_values(self, tmp_path: Path) -> None:
        """Non-string entries are dropped."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\ntext = "#000000"\nmuted = 5\n')

        assert _load_toml_colors(theme_file) == {"text": "#000000"}


class TestLoadTheme:
    """Tests for load_theme function."""

    def test_bundled_theme_exists(self) -> None:
        """The bundled theme ships with the package."""
        assert Path(get_bundled_theme_path()).is_file()

    def test_loads_bundled_theme(self) -> None:
        """Loads theme from bundled data file."""
        colors = load_theme()

        assert colors == ThemeColors()

    def test_user_theme_overrides_bundled(self, tmp_path: Path) -> None:
        """User theme overrides bundled theme values."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nheader = "#ff0000"\n')

        with patch("btrfsctl.core.theme.get_user_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors.header == "#ff0000"
        assert colors.text == "#ffffff"
        assert colors.success == "#00d75f"

    def test_graceful_fallback_on_invalid_user_theme(self, tmp_path: Path) -> None:
        """Falls back to bundled theme when user theme is invalid."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text("invalid toml [[[")

        with patch("btrfsctl.core.theme.get_user_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors.header == "#5fafff"

    def test_invalid_color_falls_back_to_defaults(self, tmp_path: Path) -> None:
        """A bad color value yields the default theme."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nheader = "blue"\n')

        with patch("btrfsctl.core.theme.get_user_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors == ThemeColors()


class TestGetRichTheme:
    """Tests for get_rich_theme function."""

    def test_returns_rich_theme(self) -> None:
        """Returns a Rich Theme instance."""
        assert isinstance(get_rich_theme(), Theme)

    def test_includes_device_and_scrub_styles(self) -> None:
        """Theme includes the device type and scrub state styles."""
        theme = get_rich_theme(ThemeColors())

        for name in (
            "device_ssd",
            "device_hdd",
            "device_mixed",
            "device_unknown",
            "scrub_running",
            "scrub_finished",
            "scrub_idle",
        ):
            assert name in theme.styles

    def test_includes_convenience_styles(self) -> None:
        """Theme includes convenience styles."""
        theme = get_rich_theme()

        assert "bold_header" in theme.styles
        assert "section" in theme.styles
        assert "dim" in theme.styles

    def test_error_is_bold(self) -> None:
        """Error style is bold."""
        theme = get_rich_theme(ThemeColors())

        assert theme.styles["error"].bold


class TestGetTheme:
    """Tests for get_theme caching function."""

    def test_caches_theme(self) -> None:
        """get_theme returns cached instance on subsequent calls."""
        theme_module._cached_theme = None

        assert get_theme() is get_theme()

    def test_reload_creates_new_theme(self) -> None:
        """reload_theme replaces the cached instance."""
        theme_module._cached_theme = None

        original = get_theme()
        reloaded = reload_theme()

        assert reloaded is not original
        assert get_theme() is reloaded
