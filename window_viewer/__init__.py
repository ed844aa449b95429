from __future__ import annotations

from importlib import import_module
from typing import Dict, Tuple

_MODULE_EXPORTS = {
    "app": "window_viewer.app",
}

_ATTR_EXPORTS: Dict[str, Tuple[str, str]] = {
    "main": ("window_viewer.app", "main"),
    "VERSION": ("window_viewer.config", "VERSION"),
    "APPDATA_DIR": ("window_viewer.config", "APPDATA_DIR"),
    "SETTINGS_FILE": ("window_viewer.config", "SETTINGS_FILE"),
    "FILTER_RULES_FILE": ("window_viewer.config", "FILTER_RULES_FILE"),
    "LOG_FILE": ("window_viewer.config", "LOG_FILE"),
    "ViewerSettings": ("window_viewer.config", "ViewerSettings"),
    "FilterRules": ("window_viewer.config", "FilterRules"),
    "ensure_runtime_files": ("window_viewer.config", "ensure_runtime_files"),
    "consume_load_warnings": ("window_viewer.config", "consume_load_warnings"),
    "WindowDescriptor": ("window_viewer.enumerator", "WindowDescriptor"),
    "WindowEnumerator": ("window_viewer.enumerator", "WindowEnumerator"),
    "NoiseFilter": ("window_viewer.window_filter", "NoiseFilter"),
    "SelectableList": ("window_viewer.selectable_list", "SelectableList"),
    "AppState": ("window_viewer.app_state", "AppState"),
    "KeyAction": ("window_viewer.event_loop", "KeyAction"),
    "RefreshLoop": ("window_viewer.event_loop", "RefreshLoop"),
    "TerminalPresenter": ("window_viewer.presenter", "TerminalPresenter"),
    "ProcessInspector": ("window_viewer.services", "ProcessInspector"),
    "Win32API": ("window_viewer.win32_api", "Win32API"),
    "setup_logging": ("window_viewer.logging_setup", "setup_logging"),
}

__all__ = [
    "app",
    "main",
    "VERSION",
    "APPDATA_DIR",
    "SETTINGS_FILE",
    "FILTER_RULES_FILE",
    "LOG_FILE",
    "ViewerSettings",
    "FilterRules",
    "ensure_runtime_files",
    "consume_load_warnings",
    "WindowDescriptor",
    "WindowEnumerator",
    "NoiseFilter",
    "SelectableList",
    "AppState",
    "KeyAction",
    "RefreshLoop",
    "TerminalPresenter",
    "ProcessInspector",
    "Win32API",
    "setup_logging",
]


def __getattr__(name: str):
    module_name = _MODULE_EXPORTS.get(name)
    if module_name is not None:
        module = import_module(module_name)
        globals()[name] = module
        return module

    target = _ATTR_EXPORTS.get(name)
    if target is not None:
        source_module_name, source_attr_name = target
        source_module = import_module(source_module_name)
        value = getattr(source_module, source_attr_name)
        globals()[name] = value
        return value

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(set(globals().keys()) | set(__all__))
