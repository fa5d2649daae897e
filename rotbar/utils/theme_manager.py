# rotbar/utils/theme_manager.py
from collections.abc import Mapping
from copy import deepcopy
from typing import Any, Optional

from loguru import logger

# Emphasis key pairs a theme has to provide, one per widget state.
STATE_KEYS = (
    ("idle_bg", "idle_fg"),
    ("info_bg", "info_fg"),
    ("good_bg", "good_fg"),
    ("warning_bg", "warning_fg"),
    ("critical_bg", "critical_fg"),
)

BUILTIN_THEMES: dict[str, dict[str, str]] = {
    "plain": {
        "idle_bg": "#000000",
        "idle_fg": "#93a1a1",
        "info_bg": "#000000",
        "info_fg": "#93a1a1",
        "good_bg": "#000000",
        "good_fg": "#00ff00",
        "warning_bg": "#000000",
        "warning_fg": "#ffff00",
        "critical_bg": "#000000",
        "critical_fg": "#ff0000",
    },
    "solarized-dark": {
        "idle_bg": "#002b36",
        "idle_fg": "#93a1a1",
        "info_bg": "#268bd2",
        "info_fg": "#002b36",
        "good_bg": "#859900",
        "good_fg": "#002b36",
        "warning_bg": "#b58900",
        "warning_fg": "#002b36",
        "critical_bg": "#dc322f",
        "critical_fg": "#002b36",
    },
    "gruvbox-dark": {
        "idle_bg": "#282828",
        "idle_fg": "#ebdbb2",
        "info_bg": "#458588",
        "info_fg": "#ebdbb2",
        "good_bg": "#98971a",
        "good_fg": "#282828",
        "warning_bg": "#d79921",
        "warning_fg": "#282828",
        "critical_bg": "#cc241d",
        "critical_fg": "#ebdbb2",
    },
}

BUILTIN_ICONS: dict[str, dict[str, str]] = {
    "none": {
        "music": " MUSIC ",
        "music_play": "  >  ",
        "music_pause": "  || ",
        "music_next": " > ",
        "music_prev": " < ",
        "info": " INFO ",
        "warning": " WARN ",
        "critical": " CRIT ",
        "mail": " MAIL ",
        "net_wireless": " WLAN ",
        "time": " TIME ",
    },
    "awesome": {
        "music": "  ",
        "music_play": "    ",
        "music_pause": "    ",
        "music_next": "  ",
        "music_prev": "  ",
        "info": "  ",
        "warning": "  ",
        "critical": "  ",
        "mail": "  ",
        "net_wireless": "  ",
        "time": "  ",
    },
}


class ThemeError(LookupError):
    """Raised when a theme is missing a key a widget asked for."""


class Theme:
    def __init__(self, values: Mapping[str, Any]):
        self.values = dict(values)

    def __getitem__(self, key: str) -> str:
        value = self.values.get(key)
        if not isinstance(value, str):
            raise ThemeError(f"Theme has no color value for {key!r}")
        return value

    def icon(self, name: str) -> str:
        icons = self.values.get("icons")
        if not isinstance(icons, Mapping):
            raise ThemeError("Theme has no icon table")
        glyph = icons.get(name)
        if not isinstance(glyph, str):
            raise ThemeError(f"Wrong icon identifier: {name!r}")
        return glyph

    def colors(self, keys: tuple[str, str]) -> tuple[str, str]:
        """Looks up a (background, foreground) key pair."""
        key_bg, key_fg = keys
        return self[key_bg], self[key_fg]

    def validate(self) -> "Theme":
        for pair in STATE_KEYS:
            self.colors(pair)
        if not isinstance(self.values.get("icons"), Mapping):
            raise ThemeError("Theme has no icon table")
        return self


def load_theme(
    name: str = "plain",
    icons: str = "none",
    overrides: Optional[Mapping[str, Any]] = None,
) -> Theme:
    """
    Builds a theme from a built-in palette and icon set, then applies user
    overrides. An ``icons`` table in the overrides is merged into the icon set.
    """
    if name not in BUILTIN_THEMES:
        raise ThemeError(f"Unknown theme {name!r}")
    if icons not in BUILTIN_ICONS:
        raise ThemeError(f"Unknown icon set {icons!r}")

    values: dict[str, Any] = deepcopy(BUILTIN_THEMES[name])
    values["icons"] = deepcopy(BUILTIN_ICONS[icons])

    if overrides:
        for key, value in overrides.items():
            if key == "icons":
                if not isinstance(value, Mapping):
                    raise ThemeError("Theme override 'icons' must be a table")
                values["icons"].update(value)
            else:
                values[key] = value

    theme = Theme(values).validate()
    logger.debug(f"[Theme] Loaded: {name} (icons: {icons})")
    return theme
