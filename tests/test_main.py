import pytest

import main
from rotbar.config import ConfigParser
from rotbar.utils.theme_manager import ThemeError
from rotbar.widgets.rotatingtext import State


def write_config(tmp_path, body: str):
    path = tmp_path / "rotbar.toml"
    path.write_text(body, encoding="utf-8")
    return ConfigParser(path)


def test_build_widget_from_config(tmp_path):
    config = write_config(
        tmp_path,
        "[rotation]\nwidth = 8\n"
        '[theme]\nname = "gruvbox-dark"\n'
        "[theme.overrides]\nicons = { mail = \"@\" }\n"
        '[block]\nicon = "mail"\nstate = "good"\n',
    )

    widget = main.build_widget(config)

    assert widget.width == 8
    assert widget.state is State.GOOD
    assert widget.icon == "@"
    assert widget.get_rendered().background == "#98971a"


def test_width_argument_wins(tmp_path):
    config = write_config(tmp_path, "[rotation]\nwidth = 8\n")

    assert main.build_widget(config, 0).width == 0


def test_bad_icon_aborts_build(tmp_path):
    config = write_config(tmp_path, '[block]\nicon = "nope"\n')

    with pytest.raises(ThemeError):
        main.build_widget(config)


def test_run_reports_theme_errors(tmp_path):
    write_config(tmp_path, '[theme]\nname = "nope"\n')

    assert main.run(["-c", str(tmp_path / "rotbar.toml")]) == 1


def test_version(capsys):
    assert main.run(["--version"]) == 0
    assert "rotbar v" in capsys.readouterr().out


def test_missing_explicit_config_is_an_error(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main.run(["-c", str(tmp_path / "typo.toml")])

    assert exc.value.code == 2
    assert "typo.toml" in capsys.readouterr().err
