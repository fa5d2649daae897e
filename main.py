import sys
import setproctitle
from argparse import ArgumentParser
from pathlib import Path

from loguru import logger

from rotbar.config import BAR_CONFIG, ConfigParser
from rotbar.statusbar import StatusBar
from rotbar.utils.theme_manager import ThemeError, load_theme
from rotbar.widgets.rotatingtext import RotatingText

__version__ = "1.0.0"

parser = ArgumentParser(description="Rotating text block for i3bar/swaybar")
parser.add_argument("-v", "--version", action="store_true", help="Show version")
parser.add_argument("-c", "--config", type=Path, help="Path to rotbar.toml")
parser.add_argument("-w", "--width", type=int, help="Visible characters (0 disables rotation)")
parser.add_argument("--debug", action="store_true", help="Log debugging info to stderr")


def setup_logging(debug: bool):
    # stdout carries the bar protocol, logs go to stderr only
    logger.remove()
    if debug:
        logger.add(sys.stderr, level="DEBUG")
        logger.debug("Enabled debugging info")
    else:
        logger.add(sys.stderr, level="WARNING")


def build_widget(config: ConfigParser, width: int | None = None) -> RotatingText:
    """Builds the block from config. Theme mistakes raise ThemeError."""
    theme = load_theme(
        config.theme.get("name", "plain"),
        config.theme.get("icons", "none"),
        config.theme.get("overrides"),
    )
    rotation = config.rotation
    widget = RotatingText(
        rotation["interval"],
        rotation["speed"],
        width if width is not None else rotation["width"],
        theme,
    ).with_state(config.state)

    icon = config.block.get("icon")
    if icon:
        widget.set_icon(icon)
    return widget


def run(argv: list[str] | None = None) -> int:
    args = parser.parse_args(argv)
    if args.version:
        print(f"rotbar v{__version__}")
        return 0

    if args.config and not args.config.is_file():
        parser.error(f"config file {args.config} not found")

    setproctitle.setproctitle("rotbar")

    config = ConfigParser(args.config) if args.config else BAR_CONFIG
    setup_logging(args.debug or config.debug)

    if args.width is not None and args.width < 0:
        parser.error("--width must not be negative")

    try:
        widget = build_widget(config, args.width)
    except ThemeError as e:
        logger.error(f"[Theme] {e}")
        return 1

    try:
        StatusBar(widget, sys.stdin, sys.stdout).run()
    except KeyboardInterrupt:
        pass
    except ThemeError as e:
        logger.error(f"[Theme] {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(run())
