import enum
import json
import time
from collections.abc import Callable
from dataclasses import asdict, dataclass
from typing import Optional

from loguru import logger

from rotbar.utils.theme_manager import Theme

# i3bar min_width hint for any non-empty block, in pixels
MIN_WIDTH = 240
CONTINUATION_MARK = "|"


class State(enum.Enum):
    IDLE = "idle"
    INFO = "info"
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"

    def theme_keys(self) -> tuple[str, str]:
        return _THEME_KEYS[self]


_THEME_KEYS = {
    State.IDLE: ("idle_bg", "idle_fg"),
    State.INFO: ("info_bg", "info_fg"),
    State.GOOD: ("good_bg", "good_fg"),
    State.WARNING: ("warning_bg", "warning_fg"),
    State.CRITICAL: ("critical_bg", "critical_fg"),
}


class RotationPhase(enum.Enum):
    STATIC = "static"
    PAUSED_AT_START = "paused_at_start"
    SCROLLING = "scrolling"


@dataclass(frozen=True)
class RenderedBlock:
    full_text: str = ""
    separator: bool = False
    separator_block_width: int = 0
    min_width: int = 0
    align: str = "left"
    background: str = "#000000"
    color: str = "#000000"

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


def rotate_window(text: str, width: int, offset: int) -> str:
    """
    Returns the part of ``text`` visible at ``offset``. When the window runs
    past the end it wraps to the start behind a continuation mark, so the text
    appears to scroll in a circle. A width of 0 never clips.
    """
    if width == 0 or len(text) <= width:
        return text

    missing = max(0, offset + width - len(text))
    if missing == 0:
        return text[offset:offset + width]
    return text[offset:offset + width] + CONTINUATION_MARK + text[:missing - 1]


class RotatingText:
    """
    Status bar block that rotates text wider than ``width`` characters.

    The host calls :meth:`advance` whenever the last returned sleep hint has
    elapsed. ``interval`` is the pause before every rotation cycle and
    ``speed`` the delay between two single-character steps, both in seconds.
    """

    def __init__(
        self,
        interval: float,
        speed: float,
        width: int,
        theme: Theme,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._interval = interval
        self._speed = speed
        self._width = width
        self._theme = theme
        self._clock = clock

        self._text = ""
        self._offset = 0
        self._rotating = False
        self._next_rotation: Optional[float] = None
        self._icon: Optional[str] = None
        self._state = State.IDLE

        background, color = theme.colors(self._state.theme_keys())
        self._rendered = RenderedBlock(background=background, color=color)
        self._cached_output = self._rendered.to_json()

    # --- builder helpers ---
    def with_text(self, content: str) -> "RotatingText":
        self.set_text(content)
        return self

    def with_icon(self, name: str) -> "RotatingText":
        self.set_icon(name)
        return self

    def with_state(self, state: State) -> "RotatingText":
        self.set_state(state)
        return self

    # --- mutators ---
    def set_text(self, content: str):
        if content == self._text:
            return

        self._text = content
        self._offset = 0
        self._rotating = False
        if self._needs_rotation():
            self._next_rotation = self._clock() + self._interval
        else:
            self._next_rotation = None
        self._refresh()

    def set_icon(self, name: str):
        # Raises ThemeError before touching any state
        self._icon = self._theme.icon(name)
        self._refresh()

    def set_state(self, state: State):
        self._state = state
        self._refresh()

    # --- scheduler contract ---
    def advance(self) -> tuple[bool, Optional[float]]:
        """
        Runs one scheduler tick. Returns whether the rendered block changed
        and how long the host may sleep before calling again (None: until the
        text changes).
        """
        if self._next_rotation is None:
            return False, None

        now = self._clock()
        if self._next_rotation > now:
            return False, self._next_rotation - now

        if not self._rotating:
            # Arm tick: motion starts on the next call
            self._rotating = True
            return True, self._speed

        if self._offset < len(self._text):
            self._offset += 1
            self._next_rotation = now + self._speed
            self._refresh()
            return True, self._speed

        self._offset = 0
        self._rotating = False
        self._next_rotation = now + self._interval
        self._refresh()
        logger.trace(f"[RotatingText] Cycle finished, pausing {self._interval}s")
        return True, self._interval

    # --- reads ---
    def visible_window(self) -> str:
        return rotate_window(self._text, self._width, self._offset)

    def to_display_string(self) -> str:
        return self._cached_output

    def get_rendered(self) -> RenderedBlock:
        return self._rendered

    @property
    def text(self) -> str:
        return self._text

    @property
    def width(self) -> int:
        return self._width

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def rotating(self) -> bool:
        return self._rotating

    @property
    def next_rotation(self) -> Optional[float]:
        return self._next_rotation

    @property
    def state(self) -> State:
        return self._state

    @property
    def icon(self) -> Optional[str]:
        return self._icon

    @property
    def phase(self) -> RotationPhase:
        if self._next_rotation is None:
            return RotationPhase.STATIC
        if self._rotating:
            return RotationPhase.SCROLLING
        return RotationPhase.PAUSED_AT_START

    def _needs_rotation(self) -> bool:
        return self._width > 0 and len(self._text) > self._width

    def _refresh(self):
        """Rebuilds the cached block. The only writer of the render cache."""
        background, color = self._theme.colors(self._state.theme_keys())
        icon = self._icon if self._icon is not None else " "

        self._rendered = RenderedBlock(
            full_text=f"{icon}{self.visible_window()} ",
            min_width=0 if self._text == "" else MIN_WIDTH,
            background=background,
            color=color,
        )
        self._cached_output = self._rendered.to_json()
