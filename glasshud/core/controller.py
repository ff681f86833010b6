from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Protocol

from glasshud.core import metrics
from glasshud.core.corpus import TextGenerator
from glasshud.core.effects import (
    CellVerdictChanged,
    CursorMoved,
    Effect,
    LiveMetricsUpdated,
    SessionReset,
    VelocityChanged,
)
from glasshud.core.keystrokes import process_key
from glasshud.core.session import SessionState, SessionStatus, Verdict
from glasshud.core.settings import Settings, is_valid_duration

logger = logging.getLogger(__name__)

Listener = Callable[[Effect], None]


class TaskHandle(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    def call_every(self, interval_ms: int, callback: Callable[[], None]) -> TaskHandle:
        ...


class SessionController:
    """Owns the current session and drives it through Idle → Running → Finished.

    Key events and scheduled ticks are the only inputs; every resulting
    effect is handed synchronously to the subscribed listeners. While a
    session runs, two periodic tasks are active: one refreshes the live
    metrics, the other samples each elapsed second and ends the test when
    time is up. Both are bound to the session generation they were started
    for, so a tick that outlives its session cancels itself untouched.
    """

    def __init__(
        self,
        generator: TextGenerator,
        settings: Settings,
        scheduler: Scheduler,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._generator = generator
        self._settings = settings
        self._scheduler = scheduler
        self._clock = clock
        self._clock_offset = 0.0
        self._listeners: list[Listener] = []
        self._tasks: list[TaskHandle] = []
        self._duration = settings.default_duration
        self._generation = 0
        self._results_visible = False
        self._state = self._new_state()

    @property
    def state(self) -> SessionState:
        """The session currently on screen."""
        return self._state

    @property
    def status(self) -> SessionStatus:
        """Lifecycle stage of the current session."""
        return self._state.status

    @property
    def duration_seconds(self) -> int:
        """Configured test length applied to the next and current session."""
        return self._duration

    @property
    def generation(self) -> int:
        """Counter bumped on every restart; scheduled ticks compare against it."""
        return self._generation

    @property
    def settings(self) -> Settings:
        """Settings the controller was built with."""
        return self._settings

    @property
    def results_visible(self) -> bool:
        """True from the moment results are ready until the next restart."""
        return self._results_visible

    def subscribe(self, listener: Listener) -> None:
        """Register ``listener`` to receive every effect, in emission order."""
        self._listeners.append(listener)

    def configure(self, duration_seconds: int) -> bool:
        """Change the test length; applying it always starts a fresh session.

        Out-of-range values are ignored and the previous length is kept.
        """
        if not is_valid_duration(duration_seconds):
            logger.debug("Ignoring invalid duration %r", duration_seconds)
            return False
        self._duration = duration_seconds
        self._reset()
        return True

    def request_restart(self) -> None:
        """Abandon the current session and start an idle one with fresh text."""
        self._reset()

    def submit_key(self, key: str, timestamp: Optional[float] = None) -> bool:
        """Feed one key event to the session; return True when a character was judged.

        ``timestamp`` defaults to the injected clock. A caller-supplied
        timestamp may use its own time base: the first key of a session
        anchors that base to the clock, and every later reading of the
        session (ticks, refresh) is taken on the same base. Later
        timestamps must therefore come from the same source as the first.
        """
        if self._results_visible or self._state.finished:
            return False
        state = self._state
        was_started = state.started
        now = timestamp if timestamp is not None else self._now()

        _, effects = process_key(state, key, now, self._settings.velocity_threshold_wpm)

        if state.started and not was_started and timestamp is not None:
            self._clock_offset = timestamp - self._clock()
        if state.finished:
            self._on_finished()
        elif state.started and not was_started:
            logger.info("Test started (%ds, %d chars)", state.duration_seconds, state.length)
            self._start_ticks()
        self._emit(effects)
        return any(
            isinstance(e, CellVerdictChanged) and e.verdict is not Verdict.UNTESTED for e in effects
        )

    def refresh(self) -> None:
        """Re-send what a freshly laid out view needs; the session is left untouched."""
        self._emit(
            [
                metrics.live_update(self._state, self._now()),
                CursorMoved(index=self._state.cursor),
            ]
        )

    def _now(self) -> float:
        return self._clock() + self._clock_offset

    def _new_state(self) -> SessionState:
        text = self._generator.generate(self._duration)
        return SessionState.create(text, self._duration, generation=self._generation)

    def _reset(self) -> None:
        self._cancel_ticks()
        was_velocity = self._state.velocity_active
        self._generation += 1
        self._clock_offset = 0.0
        self._results_visible = False
        self._state = self._new_state()
        logger.info("Test restarted (%ds)", self._duration)

        effects: list[Effect] = [
            SessionReset(target_text=self._state.text, duration_seconds=self._duration),
            CursorMoved(index=0),
            LiveMetricsUpdated(wpm=0, accuracy=100, remaining_seconds=self._duration),
        ]
        if was_velocity:
            effects.append(VelocityChanged(active=False))
        self._emit(effects)

    def _start_ticks(self) -> None:
        self._schedule(self._on_metrics_tick)
        self._schedule(self._on_countdown_tick)

    def _schedule(self, callback: Callable[[], None]) -> None:
        generation = self._generation
        handle: Optional[TaskHandle] = None

        def tick() -> None:
            if generation != self._generation:
                logger.warning("Stale tick from session %d cancelled", generation)
                if handle is not None:
                    handle.cancel()
                return
            callback()

        handle = self._scheduler.call_every(self._settings.tick_interval_ms, tick)
        self._tasks.append(handle)

    def _cancel_ticks(self) -> None:
        tasks, self._tasks = self._tasks, []
        for handle in tasks:
            handle.cancel()

    def _on_metrics_tick(self) -> None:
        if self._state.finished:
            return
        self._emit([metrics.live_update(self._state, self._now())])

    def _on_countdown_tick(self) -> None:
        effects = metrics.check_time_budget(self._state, self._now())
        if self._state.finished:
            self._on_finished()
        self._emit(effects)

    def _on_finished(self) -> None:
        self._cancel_ticks()
        self._results_visible = True
        final = self._state.final
        if final is not None:
            logger.info("Complete | WPM: %d | Acc: %d%%", final.wpm, final.accuracy)

    def _emit(self, effects: list[Effect]) -> None:
        for effect in effects:
            for listener in list(self._listeners):
                listener(effect)
