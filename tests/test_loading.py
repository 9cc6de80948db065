from __future__ import annotations

import io
import threading
import time

from weavex.loading import CLEAR_LINE, IndicatorState, LoadingIndicator


class RecordingStream(io.StringIO):
    """StringIO that is safe to read while the indicator thread writes."""

    def __init__(self) -> None:
        super().__init__()
        self._lock = threading.Lock()

    def write(self, text: str) -> int:
        with self._lock:
            return super().write(text)

    def contents(self) -> str:
        with self._lock:
            return self.getvalue()


class BrokenStream:
    def write(self, text: str) -> int:
        raise OSError("terminal gone")

    def flush(self) -> None:
        raise OSError("terminal gone")


def _wait_for(predicate, timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


def test_indicator_renders_label_and_clears_on_stop() -> None:
    stream = RecordingStream()
    indicator = LoadingIndicator.start(interval=10.0, stream=stream)
    assert _wait_for(lambda: "Weaving" in stream.contents())
    indicator.stop()
    text = stream.contents()
    assert "\r\033[36m🧵 Weaving\033[0m" in text
    assert text.endswith(CLEAR_LINE)
    assert not indicator.running


def test_each_tick_adds_a_dot() -> None:
    stream = RecordingStream()
    indicator = LoadingIndicator.start(interval=0.01, stream=stream)
    try:
        assert _wait_for(lambda: "🧵 Weaving...\033[0m" in stream.contents())
    finally:
        indicator.stop()
    text = stream.contents()
    assert text.index("Weaving\033[0m") < text.index("Weaving.\033[0m") < text.index("Weaving..\033[0m")


def test_stop_is_idempotent_and_fast() -> None:
    stream = RecordingStream()
    indicator = LoadingIndicator.start(interval=60.0, stream=stream)
    indicator.stop()
    indicator.stop()
    assert not indicator.running
    assert not indicator.visible


def test_pause_clears_line_and_resume_restores() -> None:
    stream = RecordingStream()
    indicator = LoadingIndicator.start(interval=60.0, stream=stream)
    try:
        indicator.pause()
        assert not indicator.visible
        assert stream.contents().endswith(CLEAR_LINE)
        indicator.resume()
        assert indicator.visible
    finally:
        indicator.stop()


def test_transitions_after_stop_are_ignored() -> None:
    stream = RecordingStream()
    indicator = LoadingIndicator.start(interval=60.0, stream=stream)
    indicator.stop()
    written = stream.contents()
    indicator.resume()
    indicator.pause()
    assert stream.contents() == written
    assert not indicator.running


def test_context_manager_stops() -> None:
    stream = RecordingStream()
    with LoadingIndicator.start(interval=60.0, stream=stream) as indicator:
        assert indicator.running
    assert not indicator.running


def test_stop_without_start() -> None:
    indicator = LoadingIndicator(stream=RecordingStream())
    indicator.stop()
    assert not indicator.running


def test_broken_stream_does_not_raise() -> None:
    indicator = LoadingIndicator.start(interval=60.0, stream=BrokenStream())
    indicator.pause()
    indicator.resume()
    indicator.stop()
    assert not indicator.running


class TestIndicatorState:
    """Shared state between the caller and the render thread."""

    def test_render_draws_frame_or_blank(self) -> None:
        stream = io.StringIO()
        state = IndicatorState(stream)
        assert state.render("frame")
        state.set_visible(False)
        assert state.render("frame")
        assert stream.getvalue() == "frame" + CLEAR_LINE + CLEAR_LINE

    def test_render_after_shutdown(self) -> None:
        stream = io.StringIO()
        state = IndicatorState(stream)
        state.shutdown()
        assert not state.render("frame")
        assert stream.getvalue() == ""
        assert state.snapshot() == (False, True)

    def test_set_visible_unchanged_writes_nothing(self) -> None:
        stream = io.StringIO()
        state = IndicatorState(stream)
        state.set_visible(True)
        assert stream.getvalue() == ""

    def test_wait_returns_immediately_once_stopped(self) -> None:
        state = IndicatorState(io.StringIO())
        state.shutdown()
        assert state.wait(60.0) is True

    def test_wait_times_out_while_running(self) -> None:
        state = IndicatorState(io.StringIO())
        assert state.wait(0.01) is False
