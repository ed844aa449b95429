from __future__ import annotations

import json
import os
import shutil
import threading
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, List

VERSION = "1.0.0"
APPDATA_DIRNAME = "WindowViewer"
DEFAULT_IME_CLASS_PREFIXES = ("IME", "MSCTFIME UI")
DEFAULT_TOOLKIT_CLASS_PREFIXES = ("WindowsForms10",)

_LOAD_WARNINGS: List[str] = []
_LOAD_WARNINGS_LOCK = threading.Lock()


def _push_load_warning(message: str) -> None:
    with _LOAD_WARNINGS_LOCK:
        _LOAD_WARNINGS.append(message)


def consume_load_warnings() -> List[str]:
    with _LOAD_WARNINGS_LOCK:
        out = list(_LOAD_WARNINGS)
        _LOAD_WARNINGS.clear()
        return out


def get_app_data_dir() -> str:
    appdata = os.environ.get("APPDATA")
    if not appdata:
        appdata = str(Path.home() / "AppData" / "Roaming")
    return str(Path(appdata) / APPDATA_DIRNAME)


APPDATA_DIR = get_app_data_dir()
SETTINGS_FILE = os.path.join(APPDATA_DIR, "viewer_settings.json")
FILTER_RULES_FILE = os.path.join(APPDATA_DIR, "filter_rules.json")
LOG_FILE = os.path.join(APPDATA_DIR, "window_viewer.log")


def _coerce_bool(value: Any, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _coerce_int(value: Any, default: int, minimum: int | None = None, maximum: int | None = None) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        out = default
    else:
        out = value
    if minimum is not None:
        out = max(out, minimum)
    if maximum is not None:
        out = min(out, maximum)
    return out


def _coerce_str(value: Any, default: str) -> str:
    return value if isinstance(value, str) else default


def _coerce_str_list(value: Any, default: List[str]) -> List[str]:
    if not isinstance(value, list):
        return list(default)
    out = [x for x in value if isinstance(x, str) and x.strip()]
    return out if out else list(default)


def _backup_broken_json(path: str, label: str, reason: str) -> None:
    if not os.path.exists(path):
        return
    backup_path = f"{path}.broken-{datetime.now().strftime('%Y%m%d-%H%M%S')}"
    try:
        shutil.copy2(path, backup_path)
        _push_load_warning(f"{label} is corrupt: {reason}. Backup written to {backup_path}. Using defaults.")
    except OSError as exc:
        _push_load_warning(f"{label} is corrupt: {reason}. Backup failed ({exc.__class__.__name__}). Using defaults.")


def _load_json_object(path: str, label: str) -> dict[str, Any] | None:
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError:
        return None
    except Exception as exc:
        _backup_broken_json(path, label, f"JSON parse failed ({exc.__class__.__name__})")
        return None
    if not isinstance(raw, dict):
        _backup_broken_json(path, label, "top-level value is not an object")
        return None
    return raw


@dataclass
class ViewerSettings:
    tick_interval_ms: int = 250
    main_pane_percent: int = 60
    log_level: str = "INFO"
    show_status_line: bool = True

    @property
    def tick_interval_seconds(self) -> float:
        return max(int(self.tick_interval_ms), 50) / 1000.0

    @classmethod
    def load(cls, path: str = SETTINGS_FILE) -> "ViewerSettings":
        defaults = cls()
        raw = _load_json_object(path, "viewer_settings.json")
        if raw is None:
            return defaults
        return cls(
            tick_interval_ms=_coerce_int(raw.get("tick_interval_ms"), defaults.tick_interval_ms, minimum=50, maximum=5000),
            main_pane_percent=_coerce_int(raw.get("main_pane_percent"), defaults.main_pane_percent, minimum=20, maximum=80),
            log_level=_coerce_str(raw.get("log_level"), defaults.log_level).upper(),
            show_status_line=_coerce_bool(raw.get("show_status_line"), defaults.show_status_line),
        )

    @classmethod
    def default_json(cls) -> str:
        return json.dumps(asdict(cls()), indent=2, ensure_ascii=False)


@dataclass
class FilterRules:
    """Class-name prefixes that mark helper windows hidden from the top-level list."""

    ime_class_prefixes: List[str] = field(default_factory=lambda: list(DEFAULT_IME_CLASS_PREFIXES))
    toolkit_class_prefixes: List[str] = field(default_factory=lambda: list(DEFAULT_TOOLKIT_CLASS_PREFIXES))

    @classmethod
    def load(cls, path: str = FILTER_RULES_FILE) -> "FilterRules":
        defaults = cls()
        raw = _load_json_object(path, "filter_rules.json")
        if raw is None:
            return defaults
        return cls(
            ime_class_prefixes=_coerce_str_list(raw.get("ime_class_prefixes"), defaults.ime_class_prefixes),
            toolkit_class_prefixes=_coerce_str_list(raw.get("toolkit_class_prefixes"), defaults.toolkit_class_prefixes),
        )

    @classmethod
    def default_json(cls) -> str:
        return json.dumps(asdict(cls()), indent=2, ensure_ascii=False)


def _ensure_default_file(dst: str, default_text: str) -> None:
    if os.path.exists(dst):
        return
    os.makedirs(os.path.dirname(dst), exist_ok=True)
    with open(dst, "w", encoding="utf-8") as f:
        f.write(default_text)


def ensure_runtime_files() -> None:
    os.makedirs(APPDATA_DIR, exist_ok=True)
    _ensure_default_file(SETTINGS_FILE, ViewerSettings.default_json())
    _ensure_default_file(FILTER_RULES_FILE, FilterRules.default_json())


__all__ = [
    "VERSION",
    "APPDATA_DIRNAME",
    "APPDATA_DIR",
    "SETTINGS_FILE",
    "FILTER_RULES_FILE",
    "LOG_FILE",
    "DEFAULT_IME_CLASS_PREFIXES",
    "DEFAULT_TOOLKIT_CLASS_PREFIXES",
    "ViewerSettings",
    "FilterRules",
    "get_app_data_dir",
    "ensure_runtime_files",
    "consume_load_warnings",
]
