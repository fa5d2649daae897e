import json
import queue
import time
from typing import IO, Optional

from loguru import logger

from rotbar.utils.threads import run_as_daemon
from rotbar.widgets.rotatingtext import RotatingText, State

# Marks end of input on the line queue
_EOF = None


class StatusBar:
    """
    Drives a single RotatingText block over the i3bar protocol.

    Lines read from ``source`` become the block text. ``!state <name>`` and
    ``!icon <name>`` lines change the emphasis state and icon instead.
    """

    def __init__(self, widget: RotatingText, source: IO[str], sink: IO[str]):
        self.widget = widget
        self.source = source
        self.sink = sink
        self.lines: "queue.Queue[Optional[str]]" = queue.Queue()
        self.running = False

    @run_as_daemon
    def read_input(self):
        for line in self.source:
            self.lines.put(line.rstrip("\n"))
        self.lines.put(_EOF)

    def handle_line(self, line: Optional[str]) -> bool:
        """Applies one input line to the widget. Returns False on EOF."""
        if line is _EOF:
            return False
        if line.startswith("!state "):
            name = line[len("!state "):].strip().lower()
            try:
                self.widget.set_state(State(name))
            except ValueError:
                logger.warning(f"Ignoring unknown state \"{name}\"")
        elif line.startswith("!icon "):
            # Unknown icons are a theme bug and propagate
            self.widget.set_icon(line[len("!icon "):].strip())
        else:
            self.widget.set_text(line)
        return True

    def write_header(self):
        self.sink.write(json.dumps({"version": 1}) + "\n[\n")
        self.sink.flush()

    def emit(self):
        self.sink.write(f"[{self.widget.to_display_string()}],\n")
        self.sink.flush()

    def stop(self):
        """Ends the run loop after the current tick."""
        self.running = False

    def run(self):
        """
        Emits the block until stopped. Once input closes the loop keeps
        ticking while the text still rotates and returns when it is static.
        """
        self.write_header()
        self.emit()
        self.read_input()

        sleep_hint: Optional[float] = None
        input_open = True
        self.running = True
        while self.running:
            before = self.widget.to_display_string()
            if input_open:
                try:
                    line = self.lines.get(timeout=sleep_hint)
                except queue.Empty:
                    pass
                else:
                    input_open = self.handle_line(line)
                    # Drain whatever arrived meanwhile so one status line covers it
                    while input_open:
                        try:
                            input_open = self.handle_line(self.lines.get_nowait())
                        except queue.Empty:
                            break
                    if not input_open:
                        logger.debug("[StatusBar] Input closed")
            elif sleep_hint is None:
                break
            elif sleep_hint > 0:
                time.sleep(sleep_hint)

            _, sleep_hint = self.widget.advance()
            # The arm tick reports a change without moving the text
            if self.widget.to_display_string() != before:
                self.emit()

        logger.debug("[StatusBar] Stopping")
