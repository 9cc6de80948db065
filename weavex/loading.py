"""Animated "Weaving..." indicator shown while the agent waits on the network.

The indicator runs on one background thread. The agent loop pauses it before
printing diagnostics, resumes it afterwards and stops it before returning.
State is shared through an `IndicatorState` guarded by a condition variable;
the thread only holds a reference to that state, never to the indicator
itself. Every write to the terminal happens while holding the same lock, so a
cleared line can never interleave with the caller's output.
"""

from __future__ import annotations

import sys
import threading
from typing import Any, TextIO

from .constants import DEFAULT_INDICATOR_INTERVAL

CLEAR_LINE = "\r\033[K"


def _write(stream: TextIO, text: str) -> None:
    try:
        stream.write(text)
        stream.flush()
    except (OSError, ValueError):
        # Closed or broken terminal
        pass


class IndicatorState:
    """Running/visible flags plus the stream they render to.

    Once `running` is False it never becomes True again.
    """

    def __init__(self, stream: TextIO) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._stream = stream
        self.running = True
        self.visible = True

    def set_visible(self, visible: bool) -> None:
        with self._cond:
            if not self.running or self.visible == visible:
                return
            self.visible = visible
            if not visible:
                _write(self._stream, CLEAR_LINE)

    def shutdown(self) -> None:
        with self._cond:
            self.running = False
            self._cond.notify_all()

    def snapshot(self) -> tuple[bool, bool]:
        with self._cond:
            return self.running, self.visible

    def render(self, frame: str) -> bool:
        """Draw one frame (or a blank line when hidden); False once stopped."""
        with self._cond:
            if not self.running:
                return False
            _write(self._stream, frame if self.visible else CLEAR_LINE)
            return True

    def wait(self, timeout: float) -> bool:
        """Sleep up to timeout; return True if shut down meanwhile."""
        with self._cond:
            if self.running:
                self._cond.wait(timeout)
            return not self.running

    def clear(self) -> None:
        with self._cond:
            _write(self._stream, CLEAR_LINE)


class LoadingIndicator:
    """Cooperative status line with pause/resume/stop transitions.

    Can be used as a context manager:
        with LoadingIndicator.start() as indicator:
            ...
    """

    def __init__(
        self,
        *,
        interval: float = DEFAULT_INDICATOR_INTERVAL,
        stream: TextIO | None = None,
        label: str = "🧵 Weaving",
    ) -> None:
        self.interval = interval
        self.label = label
        self._state = IndicatorState(stream or sys.stdout)
        self._thread: threading.Thread | None = None

    @classmethod
    def start(cls, **kwargs: Any) -> "LoadingIndicator":
        indicator = cls(**kwargs)
        indicator._thread = threading.Thread(
            target=_render_loop,
            args=(indicator._state, indicator.label, indicator.interval),
            name="weavex-indicator",
            daemon=True,
        )
        indicator._thread.start()
        return indicator

    def __enter__(self) -> "LoadingIndicator":
        return self

    def __exit__(self, _exc_type: Any, _exc_val: Any, _exc_tb: Any) -> None:
        self.stop()

    @property
    def running(self) -> bool:
        return self._state.snapshot()[0]

    @property
    def visible(self) -> bool:
        running, visible = self._state.snapshot()
        return running and visible

    def pause(self) -> None:
        self._state.set_visible(False)

    def resume(self) -> None:
        self._state.set_visible(True)

    def stop(self) -> None:
        """Stop rendering and block until the status line has been cleared."""
        self._state.shutdown()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        self._thread = None


def _render_loop(state: IndicatorState, label: str, interval: float) -> None:
    dot_count = 0
    while state.render(f"\r\033[36m{label}{'.' * dot_count}\033[0m"):
        if state.wait(interval):
            break
        dot_count += 1
    state.clear()


__all__ = ["CLEAR_LINE", "IndicatorState", "LoadingIndicator"]
