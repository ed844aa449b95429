from __future__ import annotations

import csv
import io
import subprocess
from typing import Tuple

import psutil


class ProcessInspector:
    @staticmethod
    def get_process_name(pid: int) -> str:
        if pid <= 0:
            return ""
        try:
            return psutil.Process(pid).name() or ""
        except psutil.NoSuchProcess:
            return ""
        except psutil.Error:
            # Access denied on protected processes; tasklist can still name them.
            return ProcessInspector._tasklist_name(pid)

    @staticmethod
    def _tasklist_name(pid: int) -> str:
        try:
            result = subprocess.run(
                ["tasklist", "/FI", f"PID eq {pid}", "/FO", "CSV", "/NH"],
                capture_output=True,
                text=True,
                creationflags=0x08000000,
                timeout=3,
            )
        except (OSError, subprocess.SubprocessError):
            return ""
        for row in csv.reader(io.StringIO(result.stdout)):
            if len(row) < 2:
                continue
            try:
                if int(row[1]) == pid:
                    return row[0].strip()
            except ValueError:
                continue
        return ""

    @staticmethod
    def self_check() -> Tuple[bool, str]:
        try:
            count = sum(1 for _ in psutil.process_iter(["pid"]))
            return True, f"psutil {psutil.__version__}: {count} processes"
        except Exception as exc:
            return False, f"{exc.__class__.__name__}: {exc}"


__all__ = ["ProcessInspector"]
