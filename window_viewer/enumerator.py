from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .window_filter import NoiseFilter
from .win32_api import Win32API


@dataclass(frozen=True)
class WindowDescriptor:
    class_name: str
    window_text: str
    handle: int
    owner_id: int
    process_id: int = 0


class WindowEnumerator:
    def __init__(
        self,
        logger: logging.Logger,
        api: Optional[Win32API] = None,
        noise_filter: Optional[NoiseFilter] = None,
    ) -> None:
        self.logger = logger.getChild("WindowEnumerator")
        self.api = api or Win32API()
        self.noise_filter = noise_filter or NoiseFilter()

    def list_top_level(self) -> List[WindowDescriptor]:
        windows = self._collect(self.api.enum_windows, "EnumWindows")
        return [w for w in windows if self.noise_filter.accepts(w.class_name, w.window_text)]

    def list_related(self, of: WindowDescriptor) -> List[WindowDescriptor]:
        """Children of ``of`` followed by every window owned by its thread.

        The result is unfiltered and may repeat ``of`` itself. A window that
        vanished before the query yields an empty list. A pass that returns
        FALSE is logged and still contributes the windows it gathered.
        """
        if not self.api.is_window(of.handle):
            self.logger.debug("list_related: hwnd=%#x is gone", of.handle)
            return []
        children = self._collect(lambda cb: self.api.enum_child_windows(of.handle, cb), "EnumChildWindows")
        owned = self._collect(lambda cb: self.api.enum_thread_windows(of.owner_id, cb), "EnumThreadWindows")
        return children + owned

    def describe(self, hwnd: int) -> WindowDescriptor:
        thread_id, process_id = self.api.get_window_thread_process_id(hwnd)
        return WindowDescriptor(
            class_name=self.api.get_class_name(hwnd) or "",
            window_text=self.api.get_window_text(hwnd) or "",
            handle=hwnd,
            owner_id=thread_id,
            process_id=process_id,
        )

    def _collect(self, enum: Callable[[Callable[[int], bool]], bool], label: str) -> List[WindowDescriptor]:
        result: List[WindowDescriptor] = []

        def cb(hwnd: int) -> bool:
            result.append(self.describe(hwnd))
            return True

        if not enum(cb):
            # FALSE also means "nothing found" for EnumThreadWindows; keep what was gathered.
            self.logger.debug("%s returned FALSE after %d windows (error=%d)", label, len(result), self.api.get_last_error())
        return result


__all__ = ["WindowDescriptor", "WindowEnumerator"]
