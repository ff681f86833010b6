from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from glasshud.core.effects import Effect, LiveMetricsUpdated, SessionFinished
from glasshud.core.session import PerformanceSample, SessionState

CHARS_PER_WORD = 5


def round_half_up(value: float) -> int:
    """Round .5 ties upward; the builtin ``round`` would send them to the even neighbour."""
    return int(math.floor(value + 0.5))


def elapsed_minutes(started_at: Optional[float], now: float) -> float:
    if started_at is None:
        return 0.0
    return max(0.0, now - started_at) / 60.0


def wpm_rate(correct: int, minutes: float) -> float:
    """Unrounded net words per minute."""
    if minutes <= 0:
        return 0.0
    return (correct / CHARS_PER_WORD) / minutes


def net_wpm(correct: int, minutes: float) -> int:
    """Correct characters / 5 / minutes, rounded."""
    return round_half_up(wpm_rate(correct, minutes))


def raw_wpm(judged: int, minutes: float) -> int:
    """All judged characters / 5 / minutes, rounded."""
    return round_half_up(wpm_rate(judged, minutes))


def accuracy(correct: int, keys_pressed: int) -> int:
    """Percentage of accepted keystrokes that matched; 100 before any input."""
    if keys_pressed <= 0:
        return 100
    return max(0, min(100, round_half_up(correct / keys_pressed * 100)))


@dataclass(frozen=True)
class LiveMetrics:
    wpm: int
    accuracy: int
    remaining_seconds: int


@dataclass(frozen=True)
class FinalMetrics:
    """Frozen results of a finished test.

    ``elapsed_seconds`` is capped at the configured duration; the rates are
    computed over that capped time.
    """

    wpm: int
    accuracy: int
    raw_wpm: int
    total_chars: int
    correct_chars: int
    incorrect_chars: int
    elapsed_seconds: float

    @property
    def display_seconds(self) -> int:
        return round_half_up(self.elapsed_seconds)


def _clock_end(state: SessionState, now: float) -> float:
    return state.finished_at if state.finished_at is not None else now


def live_metrics(state: SessionState, now: float) -> LiveMetrics:
    end = _clock_end(state, now)
    minutes = elapsed_minutes(state.started_at, end)
    if state.started_at is None:
        remaining = state.duration_seconds
    else:
        remaining = math.ceil(max(0.0, state.duration_seconds - minutes * 60.0))
    return LiveMetrics(
        wpm=net_wpm(state.correct_count, minutes),
        accuracy=accuracy(state.correct_count, state.keys_pressed),
        remaining_seconds=remaining,
    )


def live_update(state: SessionState, now: float) -> LiveMetricsUpdated:
    live = live_metrics(state, now)
    return LiveMetricsUpdated(
        wpm=live.wpm,
        accuracy=live.accuracy,
        remaining_seconds=live.remaining_seconds,
    )


def is_velocity(state: SessionState, now: float, threshold: float = 80.0) -> bool:
    minutes = elapsed_minutes(state.started_at, _clock_end(state, now))
    return wpm_rate(state.correct_count, minutes) >= threshold


def sample_second(state: SessionState, second: int) -> Optional[PerformanceSample]:
    """Record the performance point for a whole elapsed second.

    Each second is sampled at most once and never past the configured
    duration; the rates use the whole second as elapsed time.
    """
    if second <= state.last_sampled_second or second > state.duration_seconds:
        return None
    minutes = second / 60.0
    sample = PerformanceSample(
        second=second,
        wpm=net_wpm(state.correct_count, minutes),
        accuracy=accuracy(state.correct_count, state.keys_pressed),
    )
    state.samples.append(sample)
    state.last_sampled_second = second
    return sample


def check_time_budget(state: SessionState, now: float) -> list[Effect]:
    """Countdown tick: sample the current second and finish once time is up."""
    if state.started_at is None or state.finished:
        return []
    elapsed = max(0.0, now - state.started_at)
    sample_second(state, int(math.floor(elapsed)))
    if elapsed >= state.duration_seconds:
        return finish_session(state, now)
    return []


def finish_session(state: SessionState, now: float) -> list[Effect]:
    """Move the session to Finished and freeze its results. No-op when already finished."""
    if state.finished:
        return []
    state.finished = True
    state.finished_at = now

    if state.started_at is None:
        total_seconds = 0.0
    else:
        total_seconds = min(max(0.0, now - state.started_at), float(state.duration_seconds))
    whole = int(math.floor(total_seconds))
    if whole > state.last_sampled_second:
        sample_second(state, whole)

    minutes = total_seconds / 60.0
    metrics = FinalMetrics(
        wpm=net_wpm(state.correct_count, minutes),
        accuracy=accuracy(state.correct_count, state.keys_pressed),
        raw_wpm=raw_wpm(state.judged, minutes),
        total_chars=state.judged,
        correct_chars=state.correct_count,
        incorrect_chars=state.incorrect_count,
        elapsed_seconds=total_seconds,
    )
    state.final = metrics
    return [SessionFinished(metrics=metrics, samples=tuple(state.samples))]
