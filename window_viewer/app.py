from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import asdict
from typing import Callable, List, Optional, Tuple

from blessed import Terminal

from .app_state import AppState
from .config import APPDATA_DIR, VERSION, FilterRules, ViewerSettings, consume_load_warnings, ensure_runtime_files
from .enumerator import WindowEnumerator
from .event_loop import RefreshLoop
from .logging_setup import LOG_LEVELS, setup_logging
from .presenter import TerminalPresenter, terminal_session
from .services import ProcessInspector
from .window_filter import NoiseFilter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=f"Window Viewer v{VERSION}")
    parser.add_argument("--dump", action="store_true", help="Print top-level windows and their related windows as JSON and exit")
    parser.add_argument("--self-check", action="store_true", help="Run environment self-check and exit")
    parser.add_argument("--interval-ms", type=int, default=None, help="Child list refresh interval in milliseconds")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=None, help="Console log level for --dump")
    return parser


def _check_appdata_writable() -> Tuple[bool, str]:
    try:
        os.makedirs(APPDATA_DIR, exist_ok=True)
        marker_path = os.path.join(APPDATA_DIR, ".selfcheck-write.tmp")
        with open(marker_path, "w", encoding="utf-8") as f:
            f.write("ok")
        os.remove(marker_path)
        return True, f"writable ({APPDATA_DIR})"
    except Exception as exc:
        return False, f"{exc.__class__.__name__}: {exc}"


def _check_terminal() -> Tuple[bool, str]:
    try:
        term = Terminal()
        return True, f"{term.kind or 'unknown'} {term.width}x{term.height}, tty={term.is_a_tty}"
    except Exception as exc:
        return False, f"{exc.__class__.__name__}: {exc}"


def _run_self_check() -> int:
    checks: List[Tuple[str, Callable[[], Tuple[bool, str]]]] = [
        ("app data directory", _check_appdata_writable),
        ("process lookup", ProcessInspector.self_check),
        ("terminal", _check_terminal),
    ]
    passed = 0
    for label, fn in checks:
        ok, detail = fn()
        if ok:
            passed += 1
        print(f"[{'OK' if ok else 'FAIL'}] {label}: {detail}")
    print(f"Summary: {passed}/{len(checks)} checks passed")
    return 0 if passed == len(checks) else 1


def _dump_windows(enumerator: WindowEnumerator) -> int:
    data = []
    for window in enumerator.list_top_level():
        entry = asdict(window)
        entry["related"] = [asdict(related) for related in enumerator.list_related(window)]
        data.append(entry)
    print(json.dumps(data, indent=2, ensure_ascii=False))
    return 0


def _apply_overrides(settings: ViewerSettings, args: argparse.Namespace) -> ViewerSettings:
    if args.interval_ms is not None:
        settings.tick_interval_ms = min(max(args.interval_ms, 50), 5000)
    if args.log_level:
        settings.log_level = args.log_level.upper()
    return settings


def run_viewer(enumerator: WindowEnumerator, settings: ViewerSettings, logger: logging.Logger) -> int:
    term = Terminal()
    presenter = TerminalPresenter(
        term,
        main_pane_percent=settings.main_pane_percent,
        show_status_line=settings.show_status_line,
        process_name_provider=ProcessInspector.get_process_name,
    )
    with terminal_session(term):
        state = AppState(enumerator)
        loop = RefreshLoop(state, presenter, presenter, settings.tick_interval_seconds, logger)
        loop.run()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    if os.name != "nt":
        print("This application only supports Windows.", file=sys.stderr)
        return 2

    args = build_parser().parse_args(argv if argv is not None else sys.argv[1:])
    if args.self_check:
        return _run_self_check()

    ensure_runtime_files()
    settings = _apply_overrides(ViewerSettings.load(), args)
    rules = FilterRules.load()
    logger = setup_logging(settings.log_level, console=args.dump)
    for warning in consume_load_warnings():
        logger.warning(warning)

    enumerator = WindowEnumerator(logger, noise_filter=NoiseFilter(rules))
    if args.dump:
        return _dump_windows(enumerator)

    logger.info("Window Viewer v%s starting", VERSION)
    return run_viewer(enumerator, settings, logger)


__all__ = ["main", "build_parser", "run_viewer", "VERSION"]
