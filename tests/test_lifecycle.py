"""Tests for linkway.lifecycle — foreground/background detection."""

import logging

import pytest

from linkway.errors import ConfigurationError
from linkway.lifecycle import (
    AppStatus,
    ForegroundDetector,
    FunctionCallback,
    ScreenEvents,
    ScreenStatus,
)


class Screen:
    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"Screen({self.name!r})"


class LinkScreen(Screen):
    """A screen owned by the host's deeplink trampoline."""


class Recorder:
    def __init__(self, log: list[str], name: str = "") -> None:
        self.log = log
        self.name = name

    def on_background(self) -> None:
        self.log.append(f"{self.name}background")

    def on_foreground(self) -> None:
        self.log.append(f"{self.name}foreground")


@pytest.fixture
def events() -> ScreenEvents:
    return ScreenEvents()


@pytest.fixture
def log() -> list[str]:
    return []


@pytest.fixture
def detector(events: ScreenEvents, log: list[str]) -> ForegroundDetector:
    detector = ForegroundDetector(events, is_internal=lambda s: isinstance(s, LinkScreen))
    detector.add_callback(Recorder(log))
    return detector


A = Screen("A")
B = Screen("B")


class TestConstruction:
    def test_starts_in_foreground(self, detector: ForegroundDetector) -> None:
        assert detector.status is AppStatus.FOREGROUND
        assert detector.is_foreground
        assert detector.history == ()

    def test_requires_event_source(self) -> None:
        with pytest.raises(ConfigurationError, match="event source"):
            ForegroundDetector(None)

    def test_rejects_object_without_add_listener(self) -> None:
        with pytest.raises(ConfigurationError):
            ForegroundDetector(object())  # type: ignore[arg-type]

    def test_attaches_to_source(self, events: ScreenEvents) -> None:
        detector = ForegroundDetector(events)
        events.resume(A)
        events.pause(A)
        assert detector.history == (ScreenStatus.PAUSED,)


class TestBackground:
    def test_resume_pause_stop(
        self, events: ScreenEvents, detector: ForegroundDetector, log: list[str]
    ) -> None:
        events.resume(A)
        events.pause(A)
        assert log == []

        events.stop(A)

        assert log == ["background"]
        assert detector.status is AppStatus.BACKGROUND
        assert detector.history == ()

    def test_screen_transition_is_not_background(
        self, events: ScreenEvents, detector: ForegroundDetector, log: list[str]
    ) -> None:
        events.resume(A)
        events.pause(A)
        events.resume(B)

        assert detector.history == (ScreenStatus.PAUSED, ScreenStatus.RESUMED)

        events.stop(A)

        assert log == []
        assert detector.status is AppStatus.FOREGROUND
        assert detector.history == ()

    def test_resume_does_not_clear_history(
        self, events: ScreenEvents, detector: ForegroundDetector
    ) -> None:
        events.resume(A)
        events.pause(A)
        events.resume(B)
        events.pause(B)

        assert detector.history == (
            ScreenStatus.PAUSED,
            ScreenStatus.RESUMED,
            ScreenStatus.PAUSED,
        )

    def test_background_fires_once(
        self, events: ScreenEvents, detector: ForegroundDetector, log: list[str]
    ) -> None:
        events.resume(A)
        events.pause(A)
        events.stop(A)
        events.pause(B)
        events.stop(B)

        assert log == ["background"]

    def test_stop_without_pause(
        self, events: ScreenEvents, detector: ForegroundDetector, log: list[str]
    ) -> None:
        events.stop(A)

        assert log == []
        assert detector.history == ()


class TestForeground:
    def test_first_resume_not_announced(
        self, events: ScreenEvents, detector: ForegroundDetector, log: list[str]
    ) -> None:
        events.resume(A)

        assert log == []
        assert detector.history == ()

    def test_round_trip(
        self, events: ScreenEvents, detector: ForegroundDetector, log: list[str]
    ) -> None:
        events.resume(A)
        events.pause(A)
        events.stop(A)
        events.resume(A)

        assert log == ["background", "foreground"]
        assert detector.status is AppStatus.FOREGROUND
        # History was cleared by stop, so this resume is not recorded
        assert detector.history == ()

    def test_second_round_trip(
        self, events: ScreenEvents, detector: ForegroundDetector, log: list[str]
    ) -> None:
        for _ in range(2):
            events.resume(A)
            events.pause(A)
            events.stop(A)
        events.resume(A)

        assert log == ["background", "foreground", "background", "foreground"]


class TestInternalScreens:
    def test_internal_screens_ignored(
        self, events: ScreenEvents, detector: ForegroundDetector, log: list[str]
    ) -> None:
        link = LinkScreen("link")
        events.resume(A)
        events.pause(A)
        events.resume(link)
        events.pause(link)
        events.stop(link)

        assert detector.history == (ScreenStatus.PAUSED,)

        events.stop(A)
        assert log == ["background"]


class TestCallbacks:
    def test_registration_order(self, events: ScreenEvents, log: list[str]) -> None:
        detector = ForegroundDetector(events)
        detector.add_callback(Recorder(log, "first:"))
        detector.add_callback(Recorder(log, "second:"))

        events.pause(A)
        events.stop(A)

        assert log == ["first:background", "second:background"]

    def test_failing_callback_is_isolated(
        self, events: ScreenEvents, log: list[str], caplog: pytest.LogCaptureFixture
    ) -> None:
        detector = ForegroundDetector(events)

        def explode() -> None:
            raise RuntimeError("boom")

        detector.add_lifecycle_callback(on_background=explode)
        detector.add_callback(Recorder(log))

        with caplog.at_level(logging.ERROR, logger="linkway.lifecycle"):
            events.pause(A)
            events.stop(A)

        assert log == ["background"]
        assert detector.status is AppStatus.BACKGROUND
        assert any(r.exc_info for r in caplog.records)

    def test_plain_functions(self, events: ScreenEvents, log: list[str]) -> None:
        detector = ForegroundDetector(events)
        callback = detector.add_lifecycle_callback(
            on_background=lambda: log.append("bg"),
            on_foreground=lambda: log.append("fg"),
        )

        events.pause(A)
        events.stop(A)
        events.resume(A)

        assert isinstance(callback, FunctionCallback)
        assert log == ["bg", "fg"]

    def test_callbacks_added_later_apply(self, events: ScreenEvents, log: list[str]) -> None:
        detector = ForegroundDetector(events)
        events.pause(A)
        events.stop(A)

        detector.add_callback(Recorder(log))
        events.resume(A)

        assert log == ["foreground"]


class TestHistoryLimit:
    def test_history_is_bounded(self, events: ScreenEvents) -> None:
        detector = ForegroundDetector(events, history_limit=3)
        events.pause(A)
        for _ in range(10):
            events.resume(B)
        assert len(detector.history) == 3

    @pytest.mark.parametrize("limit", [0, 1])
    def test_limit_below_two_rejected(self, events: ScreenEvents, limit: int) -> None:
        with pytest.raises(ConfigurationError, match="history_limit"):
            ForegroundDetector(events, history_limit=limit)

    def test_smallest_limit_still_detects_background(
        self, events: ScreenEvents, log: list[str]
    ) -> None:
        detector = ForegroundDetector(events, history_limit=2)
        detector.add_callback(Recorder(log))
        events.resume(A)
        events.pause(A)
        events.stop(A)
        assert log == ["background"]
        assert detector.status is AppStatus.BACKGROUND


class TestScreenEvents:
    def test_listeners_in_order(self, events: ScreenEvents) -> None:
        calls: list[str] = []

        class Listener:
            def __init__(self, name: str) -> None:
                self.name = name

            def on_resumed(self, screen: object) -> None:
                calls.append(f"{self.name}:resumed")

            def on_paused(self, screen: object) -> None:
                calls.append(f"{self.name}:paused")

            def on_stopped(self, screen: object) -> None:
                calls.append(f"{self.name}:stopped")

        events.add_listener(Listener("a"))
        events.add_listener(Listener("b"))
        events.resume(A)
        events.pause(A)
        events.stop(A)

        assert calls == [
            "a:resumed",
            "b:resumed",
            "a:paused",
            "b:paused",
            "a:stopped",
            "b:stopped",
        ]
