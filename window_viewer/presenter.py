from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from blessed import Terminal

from .app_state import AppState
from .enumerator import WindowDescriptor
from .event_loop import KeyAction
from .selectable_list import SelectableList

MAIN_TITLE = "Main Windows"
CHILD_TITLE = "Children of Selected"
KEY_HELP = "up/down select | r reload | q quit"
CTRL_C = "\x03"
_PROCESS_NAME_TTL_SECONDS = 5.0


def classify_key(key) -> KeyAction:
    """Map a blessed keystroke (empty on timeout) to a loop action."""
    if not key:
        return KeyAction.NONE
    name = getattr(key, "name", None) or ""
    if name == "KEY_UP":
        return KeyAction.UP
    if name == "KEY_DOWN":
        return KeyAction.DOWN
    text = str(key)
    if text == CTRL_C or name == "KEY_CTRL_C":
        return KeyAction.QUIT
    if getattr(key, "is_sequence", False):
        return KeyAction.NONE
    if text == "q":
        return KeyAction.QUIT
    if text == "r":
        return KeyAction.REFRESH
    return KeyAction.NONE


def split_columns(width: int, main_percent: int) -> Tuple[int, int]:
    left = max(0, width * main_percent // 100)
    return left, max(0, width - left)


def scroll_offset(count: int, selected: Optional[int], rows: int) -> int:
    """First visible row index so that ``selected`` stays on screen."""
    if selected is None or rows <= 0 or count <= rows:
        return 0
    if selected < rows:
        return 0
    return min(selected - rows + 1, count - rows)


def _clean(text: str) -> str:
    return "".join(" " if ch in "\r\n\t" or ord(ch) < 32 else ch for ch in text)


@contextmanager
def terminal_session(term: Terminal) -> Iterator[Terminal]:
    with term.fullscreen(), term.raw(), term.hidden_cursor():
        yield term


class TerminalPresenter:
    def __init__(
        self,
        term: Terminal,
        main_pane_percent: int = 60,
        show_status_line: bool = True,
        process_name_provider: Optional[Callable[[int], str]] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.term = term
        self.main_pane_percent = main_pane_percent
        self.show_status_line = show_status_line
        self._process_name_provider = process_name_provider
        self._process_names: Dict[int, Tuple[float, str]] = {}
        self._clock = clock or time.monotonic

    def read_action(self, timeout: float) -> KeyAction:
        return classify_key(self.term.inkey(timeout=timeout))

    def render(self, state: AppState) -> None:
        frame = self.render_frame(state, self.term.width, self.term.height)
        print(frame, end="", flush=True)

    def render_frame(self, state: AppState, width: int, height: int) -> str:
        term = self.term
        body_height = height - 1 if self.show_status_line else height
        left_width, right_width = split_columns(width, self.main_pane_percent)
        left = self._pane(MAIN_TITLE, state.top_windows, left_width, body_height, term.blue)
        right = self._pane(CHILD_TITLE, state.children, right_width, body_height, term.red)

        out = [term.home]
        for y in range(max(body_height, 0)):
            out.append(term.move_xy(0, y) + left[y] + right[y])
        if self.show_status_line and height > 0:
            out.append(term.move_xy(0, height - 1) + term.reverse(self._fit(self.status_text(state), width)))
        return "".join(out)

    def status_text(self, state: AppState) -> str:
        counts = f"windows={len(state.top_windows)} related={len(state.children)}"
        selected = state.top_windows.selected_item()
        if selected is None:
            return f" {counts} | {KEY_HELP}"
        process = self._process_name(selected.process_id)
        owner = f"pid={selected.process_id}" + (f" ({process})" if process else "")
        return f" hwnd={selected.handle:#x} tid={selected.owner_id} {owner} | {counts} | {KEY_HELP}"

    def _process_name(self, pid: int) -> str:
        if pid <= 0 or self._process_name_provider is None:
            return ""
        now = self._clock()
        hit = self._process_names.get(pid)
        if hit and (now - hit[0]) <= _PROCESS_NAME_TTL_SECONDS:
            return hit[1]
        self._process_names = {
            key: entry for key, entry in self._process_names.items() if (now - entry[0]) <= _PROCESS_NAME_TTL_SECONDS
        }
        name = self._process_name_provider(pid) or ""
        self._process_names[pid] = (now, name)
        return name

    def _fit(self, text: str, width: int) -> str:
        """Clip and pad ``text`` to exactly ``width`` terminal columns."""
        if width <= 0:
            return ""
        return self.term.ljust(self.term.truncate(text, width), width)

    def _pane(
        self,
        title: str,
        windows: SelectableList[WindowDescriptor],
        width: int,
        height: int,
        border_style,
    ) -> List[str]:
        if height <= 0:
            return []
        if width < 2:
            return [" " * width for _ in range(height)]

        inner_width = width - 2
        inner_height = max(height - 2, 0)
        label = self.term.truncate(_clean(f" {title} "), inner_width)
        top = border_style("┌" + label + "─" * (inner_width - self.term.length(label)) + "┐")
        bottom = border_style("└" + "─" * inner_width + "┘")
        side = border_style("│")

        rows: List[str] = []
        items = windows.items
        offset = scroll_offset(len(items), windows.selected, inner_height)
        for index in range(offset, offset + inner_height):
            if index >= len(items):
                rows.append(side + " " * inner_width + side)
                continue
            rows.append(side + self._row(items[index], inner_width, index == windows.selected) + side)

        lines = [top] + rows
        if height >= 2:
            lines.append(bottom)
        return lines[:height]

    def _row(self, window: WindowDescriptor, width: int, highlighted: bool) -> str:
        term = self.term
        class_name = term.truncate(_clean(window.class_name), width)
        rest = self._fit("->" + _clean(window.window_text), width - term.length(class_name))
        if highlighted:
            return term.magenta_on_bright_black(class_name) + term.white_on_bright_black(rest)
        return term.magenta(class_name) + term.white(rest)


__all__ = [
    "TerminalPresenter",
    "classify_key",
    "split_columns",
    "scroll_offset",
    "terminal_session",
    "MAIN_TITLE",
    "CHILD_TITLE",
]
