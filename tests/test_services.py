import subprocess
from types import SimpleNamespace

import psutil

import window_viewer.services as services
from window_viewer.services import ProcessInspector


class _FakeProcess:
    def __init__(self, name=None, error=None):
        self._name = name
        self._error = error

    def name(self):
        if self._error is not None:
            raise self._error
        return self._name


def test_get_process_name_uses_psutil(monkeypatch):
    monkeypatch.setattr(services.psutil, "Process", lambda pid: _FakeProcess(name="notepad.exe"))

    assert ProcessInspector.get_process_name(42) == "notepad.exe"


def test_get_process_name_ignores_non_positive_pid(monkeypatch):
    def fail(_pid):
        raise AssertionError("should not be called")

    monkeypatch.setattr(services.psutil, "Process", fail)

    assert ProcessInspector.get_process_name(0) == ""


def test_get_process_name_for_exited_process(monkeypatch):
    monkeypatch.setattr(services.psutil, "Process", lambda pid: _FakeProcess(error=psutil.NoSuchProcess(pid)))

    assert ProcessInspector.get_process_name(42) == ""


def test_get_process_name_falls_back_to_tasklist_on_access_denied(monkeypatch):
    monkeypatch.setattr(services.psutil, "Process", lambda pid: _FakeProcess(error=psutil.AccessDenied(pid)))
    captured = {}

    def fake_run(cmd, **kwargs):
        captured["cmd"] = cmd
        return SimpleNamespace(stdout='"csrss.exe","612","Services","0","5,000 K"\n')

    monkeypatch.setattr(services.subprocess, "run", fake_run)

    assert ProcessInspector.get_process_name(612) == "csrss.exe"
    assert captured["cmd"][:3] == ["tasklist", "/FI", "PID eq 612"]


def test_tasklist_failure_yields_empty_name(monkeypatch):
    def fake_run(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, 3)

    monkeypatch.setattr(services.subprocess, "run", fake_run)

    assert ProcessInspector._tasklist_name(612) == ""


def test_tasklist_ignores_unrelated_rows(monkeypatch):
    monkeypatch.setattr(
        services.subprocess,
        "run",
        lambda cmd, **kwargs: SimpleNamespace(stdout='INFO: No tasks are running which match the specified criteria.\n'),
    )

    assert ProcessInspector._tasklist_name(612) == ""


def test_self_check_reports_failure(monkeypatch):
    def boom(_attrs):
        raise RuntimeError("no proc")

    monkeypatch.setattr(services.psutil, "process_iter", boom)

    ok, detail = ProcessInspector.self_check()
    assert ok is False
    assert "RuntimeError" in detail
