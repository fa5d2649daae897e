import pytest

from rotbar.utils.theme_manager import (
    BUILTIN_ICONS,
    BUILTIN_THEMES,
    STATE_KEYS,
    Theme,
    ThemeError,
    load_theme,
)


@pytest.mark.parametrize("name", sorted(BUILTIN_THEMES))
@pytest.mark.parametrize("icons", sorted(BUILTIN_ICONS))
def test_builtin_themes_are_complete(name, icons):
    theme = load_theme(name, icons)
    for pair in STATE_KEYS:
        assert all(color.startswith("#") for color in theme.colors(pair))


def test_icon_sets_share_names():
    assert BUILTIN_ICONS["none"].keys() == BUILTIN_ICONS["awesome"].keys()


def test_unknown_theme_or_icon_set():
    with pytest.raises(ThemeError):
        load_theme("no-such-theme")
    with pytest.raises(ThemeError):
        load_theme("plain", "no-such-icons")


def test_overrides_merge_colors_and_icons():
    theme = load_theme("plain", "none", {"idle_bg": "#123456", "icons": {"music": "M"}})

    assert theme["idle_bg"] == "#123456"
    assert theme.icon("music") == "M"
    assert theme.icon("mail") == " MAIL "


def test_overrides_do_not_leak_into_builtins():
    load_theme("plain", "none", {"idle_bg": "#123456", "icons": {"music": "M"}})

    assert BUILTIN_THEMES["plain"]["idle_bg"] == "#000000"
    assert BUILTIN_ICONS["none"]["music"] == " MUSIC "


def test_override_with_bad_icon_table():
    with pytest.raises(ThemeError):
        load_theme("plain", "none", {"icons": "music"})


def test_missing_keys_are_errors():
    theme = Theme({"idle_bg": "#000000", "icons": {}})

    with pytest.raises(ThemeError):
        theme["idle_fg"]
    with pytest.raises(ThemeError):
        theme.icon("warning")
    with pytest.raises(ThemeError):
        theme.validate()
    with pytest.raises(LookupError):
        Theme({}).icon("music")


def test_validate_requires_icon_table():
    values = dict(BUILTIN_THEMES["plain"])
    with pytest.raises(ThemeError, match="icon table"):
        Theme(values).validate()
