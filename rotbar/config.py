# rotbar/config.py
import math
import os
from pathlib import Path
from typing import Any, Optional

import toml_rs
from loguru import logger

from rotbar.utils.getrootdir import get_project_root
from rotbar.widgets.rotatingtext import State

ROTATION_DEFAULTS = {"interval": 10.0, "speed": 0.5, "width": 30}


def default_config_path() -> Path:
    env_path = os.environ.get("ROTBAR_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return get_project_root() / "rotbar.toml"


class ConfigParser:
    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else default_config_path()
        self.reload()

    def reload(self):
        """Reloads the TOML file into memory. A missing file means defaults."""
        if self.path.exists():
            with open(self.path, "rb") as f:
                self.conf = toml_rs.load(f)
        else:
            logger.debug(f"[Config] {self.path} not found, using defaults")
            self.conf = {}

        # Expose sections as properties for easy access
        self.general = self.conf.get("general", {})
        self.theme = self.conf.get("theme", {})
        self.block = self.conf.get("block", {})
        self.rotation = self._read_rotation(self.conf.get("rotation", {}))

    @staticmethod
    def _read_rotation(section: dict[str, Any]) -> dict[str, Any]:
        rotation = dict(ROTATION_DEFAULTS)
        for key, default in ROTATION_DEFAULTS.items():
            if key not in section:
                continue
            value = section[key]
            expected = int if isinstance(default, int) else (int, float)
            if (
                not isinstance(value, expected)
                or isinstance(value, bool)
                or not math.isfinite(value)
                or value < 0
            ):
                logger.warning(f"Expected finite non-negative {type(default).__name__} in \"{key}\", got {value!r}")
                logger.warning(f"Setting {key} to {default} anyways")
                continue
            rotation[key] = value
        return rotation

    @property
    def debug(self) -> bool:
        return bool(self.general.get("debug", False))

    @property
    def state(self) -> State:
        name = str(self.block.get("state", "idle")).lower()
        try:
            return State(name)
        except ValueError:
            logger.warning(f"Unknown block state \"{name}\", falling back to idle")
            return State.IDLE


# Global Instance
BAR_CONFIG = ConfigParser()
