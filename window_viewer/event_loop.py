from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable, Optional

from .app_state import AppState


class KeyAction(Enum):
    NONE = "none"
    QUIT = "quit"
    UP = "up"
    DOWN = "down"
    REFRESH = "refresh"


class RefreshLoop:
    """Single-threaded render / wait-for-key / tick loop.

    The only wait is ``keys.read_action(timeout)`` and the timeout never runs
    past the next tick, so the child list is re-derived every ``interval``
    seconds even when no key arrives. The top-level list is only reloaded on
    request.
    """

    def __init__(
        self,
        state: AppState,
        presenter,
        keys,
        interval: float,
        logger: logging.Logger,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.state = state
        self.presenter = presenter
        self.keys = keys
        self.interval = float(interval)
        self.logger = logger.getChild("RefreshLoop")
        self._clock = clock or time.monotonic
        self._last_tick = self._clock()
        self.running = True

    def timeout(self) -> float:
        return max(0.0, self.interval - (self._clock() - self._last_tick))

    def handle(self, action: KeyAction) -> None:
        if action is KeyAction.QUIT:
            self.running = False
        elif action is KeyAction.UP:
            self.state.select_previous()
        elif action is KeyAction.DOWN:
            self.state.select_next()
        elif action is KeyAction.REFRESH:
            self.logger.debug("manual refresh requested")
            self.state.reload()

    def step(self) -> bool:
        self.presenter.render(self.state)
        action = self.keys.read_action(self.timeout())
        self.handle(action)
        if not self.running:
            return False

        if self._clock() - self._last_tick >= self.interval:
            self._last_tick = self._clock()
            self.state.refresh_children()
        return True

    def run(self) -> None:
        self.logger.info(
            "loop started: %d top-level windows, tick=%.3fs",
            len(self.state.top_windows),
            self.interval,
        )
        while self.step():
            pass
        self.logger.info("loop stopped")


__all__ = ["KeyAction", "RefreshLoop"]
