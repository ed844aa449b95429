from __future__ import annotations

import ctypes
import ctypes.wintypes
import os
from typing import Callable, Tuple


class Win32API:
    def __init__(self) -> None:
        self.available = os.name == "nt"
        self._callback_refs = []
        if not self.available:
            return

        self.user32 = ctypes.WinDLL("user32", use_last_error=True)
        self.WNDENUMPROC = ctypes.WINFUNCTYPE(
            ctypes.c_bool,
            ctypes.wintypes.HWND,
            ctypes.wintypes.LPARAM,
        )
        self._bind_signatures()

    def _bind_signatures(self) -> None:
        hwnd_t = ctypes.wintypes.HWND
        lparam_t = ctypes.wintypes.LPARAM
        bool_t = ctypes.wintypes.BOOL
        dword_t = ctypes.wintypes.DWORD
        dword_ptr_t = ctypes.POINTER(ctypes.wintypes.DWORD)

        self.user32.EnumWindows.argtypes = [self.WNDENUMPROC, lparam_t]
        self.user32.EnumWindows.restype = bool_t

        self.user32.EnumChildWindows.argtypes = [hwnd_t, self.WNDENUMPROC, lparam_t]
        self.user32.EnumChildWindows.restype = bool_t

        self.user32.EnumThreadWindows.argtypes = [dword_t, self.WNDENUMPROC, lparam_t]
        self.user32.EnumThreadWindows.restype = bool_t

        self.user32.GetWindowThreadProcessId.argtypes = [hwnd_t, dword_ptr_t]
        self.user32.GetWindowThreadProcessId.restype = dword_t

        self.user32.GetClassNameW.argtypes = [hwnd_t, ctypes.wintypes.LPWSTR, ctypes.c_int]
        self.user32.GetClassNameW.restype = ctypes.c_int

        self.user32.GetWindowTextW.argtypes = [hwnd_t, ctypes.wintypes.LPWSTR, ctypes.c_int]
        self.user32.GetWindowTextW.restype = ctypes.c_int

        self.user32.IsWindow.argtypes = [hwnd_t]
        self.user32.IsWindow.restype = bool_t

    def _wrap(self, callback: Callable[[int], bool]):
        def _cb(hwnd, _lparam):
            try:
                return bool(callback(int(hwnd or 0)))
            except Exception:
                return True

        return self.WNDENUMPROC(_cb)

    def _run_enum(self, fn, *args) -> bool:
        c_cb = args[-1]
        self._callback_refs.append(c_cb)
        try:
            return bool(fn(*args, 0))
        finally:
            self._callback_refs.remove(c_cb)

    def enum_windows(self, callback: Callable[[int], bool]) -> bool:
        if not self.available:
            return False
        return self._run_enum(self.user32.EnumWindows, self._wrap(callback))

    def enum_child_windows(self, parent_hwnd: int, callback: Callable[[int], bool]) -> bool:
        if not self.available:
            return False
        return self._run_enum(self.user32.EnumChildWindows, parent_hwnd, self._wrap(callback))

    def enum_thread_windows(self, thread_id: int, callback: Callable[[int], bool]) -> bool:
        if not self.available:
            return False
        return self._run_enum(self.user32.EnumThreadWindows, thread_id, self._wrap(callback))

    def get_window_thread_process_id(self, hwnd: int) -> Tuple[int, int]:
        """Return ``(thread_id, process_id)``; both are 0 for a dead handle."""
        if not self.available:
            return 0, 0
        pid = ctypes.wintypes.DWORD(0)
        tid = self.user32.GetWindowThreadProcessId(hwnd, ctypes.byref(pid))
        return int(tid), int(pid.value)

    def get_class_name(self, hwnd: int) -> str:
        if not self.available:
            return ""
        buf = ctypes.create_unicode_buffer(256)
        self.user32.GetClassNameW(hwnd, buf, 256)
        return buf.value

    def get_window_text(self, hwnd: int) -> str:
        if not self.available:
            return ""
        buf = ctypes.create_unicode_buffer(512)
        self.user32.GetWindowTextW(hwnd, buf, 512)
        return buf.value

    def is_window(self, hwnd: int) -> bool:
        if not self.available:
            return False
        return bool(self.user32.IsWindow(hwnd))

    def get_last_error(self) -> int:
        if not self.available:
            return 0
        return int(ctypes.get_last_error())


__all__ = ["Win32API"]
