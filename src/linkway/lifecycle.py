"""Application foreground/background detection.

Platforms report lifecycle events per screen, not per application. A
``ForegroundDetector`` listens to those events and infers when the whole
app went to the background or came back:

- **background**: a screen is paused and then stopped with no other
  screen resumed in between (history starts with ``[PAUSED, STOPPED]``)
- **foreground**: any screen resumes while the app is in the background

Moving between two screens of the same app produces
``pause(A), resume(B), stop(A)``. The resume lands between pause and stop,
so no background transition is reported.

Thread safety:
    History and status are guarded by a single Lock; the
    record-evaluate-clear step of ``on_stopped`` runs under one
    acquisition. Callbacks are invoked outside the lock, in registration
    order, each isolated from failures of the others.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from linkway.errors import ConfigurationError

logger = logging.getLogger("linkway.lifecycle")


class ScreenStatus(Enum):
    """The per-screen transitions that matter for detection."""

    PAUSED = "paused"
    RESUMED = "resumed"
    STOPPED = "stopped"


class AppStatus(Enum):
    FOREGROUND = "foreground"
    BACKGROUND = "background"


class ScreenListener(Protocol):
    """Receives per-screen lifecycle events."""

    def on_resumed(self, screen: Any) -> None: ...
    def on_paused(self, screen: Any) -> None: ...
    def on_stopped(self, screen: Any) -> None: ...


class ScreenEventSource(Protocol):
    """Anything a ``ScreenListener`` can attach to."""

    def add_listener(self, listener: ScreenListener) -> None: ...


class LifecycleCallback(Protocol):
    """Notified on app-level transitions."""

    def on_background(self) -> None: ...
    def on_foreground(self) -> None: ...


@dataclass(frozen=True, slots=True)
class FunctionCallback:
    """Adapts a pair of plain functions to ``LifecycleCallback``."""

    background: Callable[[], object] | None = None
    foreground: Callable[[], object] | None = None

    def on_background(self) -> None:
        if self.background is not None:
            self.background()

    def on_foreground(self) -> None:
        if self.foreground is not None:
            self.foreground()


class ScreenEvents:
    """In-process screen event source.

    Hosts forward their platform callbacks here; every attached listener
    receives each event synchronously, in attachment order::

        events = ScreenEvents()
        detector = ForegroundDetector(events)
        events.resume(main_screen)
    """

    __slots__ = ("_listeners", "_lock")

    def __init__(self) -> None:
        self._listeners: list[ScreenListener] = []
        self._lock = threading.Lock()

    def add_listener(self, listener: ScreenListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def _emit(self, method: str, screen: Any) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            getattr(listener, method)(screen)

    def resume(self, screen: Any) -> None:
        self._emit("on_resumed", screen)

    def pause(self, screen: Any) -> None:
        self._emit("on_paused", screen)

    def stop(self, screen: Any) -> None:
        self._emit("on_stopped", screen)


class ForegroundDetector:
    """Infers app foreground/background transitions from screen events.

    Starts in ``FOREGROUND``. Attaches itself to *source* on construction;
    screens for which *is_internal* returns True (the host's own
    trampoline screens, for instance) are ignored entirely.

    Usage::

        detector = ForegroundDetector(events, is_internal=lambda s: isinstance(s, LinkScreen))
        detector.add_lifecycle_callback(
            on_background=session.pause,
            on_foreground=session.resume,
        )
    """

    __slots__ = ("_callbacks", "_history", "_history_limit", "_is_internal", "_lock", "_status")

    def __init__(
        self,
        source: ScreenEventSource | None,
        *,
        is_internal: Callable[[Any], bool] | None = None,
        history_limit: int = 16,
    ) -> None:
        if source is None or not callable(getattr(source, "add_listener", None)):
            msg = "ForegroundDetector needs a screen event source to attach to."
            raise ConfigurationError(msg)
        if history_limit < 2:
            msg = f"history_limit must be at least 2, got {history_limit}"
            raise ConfigurationError(msg)

        self._status = AppStatus.FOREGROUND
        self._history: list[ScreenStatus] = []
        self._history_limit = history_limit
        self._callbacks: list[LifecycleCallback] = []
        self._is_internal = is_internal
        self._lock = threading.Lock()
        source.add_listener(self)

    # -- Callbacks --

    def add_callback(self, callback: LifecycleCallback) -> LifecycleCallback:
        """Register *callback*. Callbacks fire in registration order."""
        with self._lock:
            self._callbacks.append(callback)
        return callback

    def add_lifecycle_callback(
        self,
        on_background: Callable[[], object] | None = None,
        on_foreground: Callable[[], object] | None = None,
    ) -> LifecycleCallback:
        """Register a pair of plain functions as a lifecycle callback."""
        return self.add_callback(FunctionCallback(on_background, on_foreground))

    # -- State --

    @property
    def status(self) -> AppStatus:
        return self._status

    @property
    def is_foreground(self) -> bool:
        return self._status is AppStatus.FOREGROUND

    @property
    def history(self) -> tuple[ScreenStatus, ...]:
        """Screen transitions recorded since the last stop."""
        with self._lock:
            return tuple(self._history)

    # -- Screen events --

    def on_resumed(self, screen: Any) -> None:
        if self._ignored(screen):
            return
        with self._lock:
            # The first resume after start is not recorded
            if self._history:
                self._record(ScreenStatus.RESUMED)
            entered = self._status is AppStatus.BACKGROUND
            if entered:
                self._status = AppStatus.FOREGROUND
        if entered:
            logger.debug("Application entered the foreground")
            self._fire("on_foreground")

    def on_paused(self, screen: Any) -> None:
        if self._ignored(screen):
            return
        with self._lock:
            self._record(ScreenStatus.PAUSED)

    def on_stopped(self, screen: Any) -> None:
        if self._ignored(screen):
            return
        with self._lock:
            self._record(ScreenStatus.STOPPED)
            left = (
                self._history[:2] == [ScreenStatus.PAUSED, ScreenStatus.STOPPED]
                and self._status is AppStatus.FOREGROUND
            )
            if left:
                self._status = AppStatus.BACKGROUND
            self._history.clear()
        if left:
            logger.debug("Application entered the background")
            self._fire("on_background")

    def _ignored(self, screen: Any) -> bool:
        return self._is_internal is not None and self._is_internal(screen)

    def _record(self, status: ScreenStatus) -> None:
        # Caller holds the lock. Only the first two entries are ever evaluated.
        if len(self._history) < self._history_limit:
            self._history.append(status)

    def _fire(self, method: str) -> None:
        with self._lock:
            callbacks = list(self._callbacks)
        for callback in callbacks:
            try:
                getattr(callback, method)()
            except Exception:
                logger.exception("Lifecycle callback %r failed in %s", callback, method)
