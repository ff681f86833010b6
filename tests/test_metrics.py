"""Tests for glasshud.core.metrics – WPM, accuracy, sampling and finishing."""

from __future__ import annotations

import pytest

from glasshud.core import metrics
from glasshud.core.effects import LiveMetricsUpdated, SessionFinished
from glasshud.core.metrics import FinalMetrics, LiveMetrics
from glasshud.core.session import PerformanceSample, SessionState

T0 = 1000.0


def _running(text: str = "x" * 200, duration: int = 60, correct: int = 0, incorrect: int = 0,
             keys: int = 0) -> SessionState:
    state = SessionState.create(text, duration)
    state.started_at = T0
    state.correct_count = correct
    state.incorrect_count = incorrect
    state.keys_pressed = keys
    state.cursor = correct + incorrect
    return state


# ---------------------------------------------------------------------------
# Rounding and formulas
# ---------------------------------------------------------------------------

class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value, expected",
        [(0.0, 0), (0.4, 0), (0.5, 1), (1.5, 2), (2.5, 3), (66.666, 67), (99.5, 100)],
    )
    def test_values(self, value: float, expected: int):
        assert metrics.round_half_up(value) == expected


class TestFormulas:
    def test_elapsed_minutes_not_started(self):
        assert metrics.elapsed_minutes(None, T0) == 0.0

    def test_elapsed_minutes(self):
        assert metrics.elapsed_minutes(T0, T0 + 90) == 1.5

    def test_elapsed_minutes_never_negative(self):
        assert metrics.elapsed_minutes(T0, T0 - 5) == 0.0

    def test_net_wpm_half_minute(self):
        # 25 correct chars in half a minute -> 25 / 5 / 0.5 = 10
        assert metrics.net_wpm(25, 0.5) == 10

    def test_net_wpm_zero_minutes(self):
        assert metrics.net_wpm(50, 0.0) == 0

    def test_raw_wpm_counts_all_judged(self):
        assert metrics.raw_wpm(30, 0.5) == 12

    def test_wpm_rate_unrounded(self):
        assert metrics.wpm_rate(1, 1.0) == pytest.approx(0.2)

    def test_accuracy_perfect_before_input(self):
        assert metrics.accuracy(0, 0) == 100

    def test_accuracy_one_miss_in_three(self):
        assert metrics.accuracy(2, 3) == 67

    def test_accuracy_all_wrong(self):
        assert metrics.accuracy(0, 10) == 0

    @pytest.mark.parametrize("correct, keys", [(0, 1), (1, 1), (5, 3), (7, 9), (0, 0)])
    def test_accuracy_bounded(self, correct: int, keys: int):
        assert 0 <= metrics.accuracy(correct, keys) <= 100


# ---------------------------------------------------------------------------
# Live metrics
# ---------------------------------------------------------------------------

class TestLiveMetrics:
    def test_before_start(self):
        state = SessionState.create("abc", 30)
        assert metrics.live_metrics(state, T0) == LiveMetrics(wpm=0, accuracy=100, remaining_seconds=30)

    def test_running(self):
        state = _running(correct=25, keys=25)
        live = metrics.live_metrics(state, T0 + 30)
        assert live == LiveMetrics(wpm=10, accuracy=100, remaining_seconds=30)

    def test_remaining_rounds_up(self):
        state = _running(duration=60)
        assert metrics.live_metrics(state, T0 + 10.25).remaining_seconds == 50

    def test_remaining_never_negative(self):
        state = _running(duration=5)
        assert metrics.live_metrics(state, T0 + 9).remaining_seconds == 0

    def test_frozen_after_finish(self):
        state = _running(correct=25, keys=25)
        state.finished = True
        state.finished_at = T0 + 30
        assert metrics.live_metrics(state, T0 + 600).wpm == 10

    def test_live_update_effect(self):
        state = _running(correct=25, incorrect=5, keys=30)
        assert metrics.live_update(state, T0 + 30) == LiveMetricsUpdated(
            wpm=10, accuracy=83, remaining_seconds=30
        )


class TestVelocity:
    def test_threshold_reached(self):
        # 200 correct in 30 s -> 40 words / 0.5 min = 80 wpm
        state = _running(correct=200, keys=200)
        assert metrics.is_velocity(state, T0 + 30, threshold=80)

    def test_below_threshold(self):
        state = _running(correct=199, keys=199)
        assert not metrics.is_velocity(state, T0 + 30, threshold=80)

    def test_uses_unrounded_rate(self):
        # 79.6 wpm rounds to 80 for display but stays below the threshold
        state = _running(correct=398, keys=398)
        assert metrics.net_wpm(398, 1.0) == 80
        assert not metrics.is_velocity(state, T0 + 60, threshold=80)

    def test_not_started(self):
        assert not metrics.is_velocity(SessionState.create("abc", 60), T0)


# ---------------------------------------------------------------------------
# Per-second sampling
# ---------------------------------------------------------------------------

class TestSampleSecond:
    def test_appends_sample(self):
        state = _running(correct=10, keys=10)
        sample = metrics.sample_second(state, 6)
        # 10 / 5 / 0.1 = 20 wpm
        assert sample == PerformanceSample(second=6, wpm=20, accuracy=100)
        assert state.samples == [sample]
        assert state.last_sampled_second == 6

    def test_same_second_never_twice(self):
        state = _running()
        metrics.sample_second(state, 3)
        assert metrics.sample_second(state, 3) is None
        assert len(state.samples) == 1

    def test_earlier_second_ignored(self):
        state = _running()
        metrics.sample_second(state, 4)
        assert metrics.sample_second(state, 2) is None

    def test_second_zero_ignored(self):
        state = _running()
        assert metrics.sample_second(state, 0) is None

    def test_beyond_duration_ignored(self):
        state = _running(duration=10)
        assert metrics.sample_second(state, 11) is None
        assert metrics.sample_second(state, 10) is not None


# ---------------------------------------------------------------------------
# Countdown tick
# ---------------------------------------------------------------------------

class TestCheckTimeBudget:
    def test_idle_is_noop(self):
        state = SessionState.create("abc", 60)
        assert metrics.check_time_budget(state, T0) == []
        assert state.samples == []

    def test_samples_whole_second(self):
        state = _running()
        assert metrics.check_time_budget(state, T0 + 1.05) == []
        assert [s.second for s in state.samples] == [1]

    def test_no_sample_before_first_second(self):
        state = _running()
        metrics.check_time_budget(state, T0 + 0.7)
        assert state.samples == []

    def test_repeated_ticks_same_second(self):
        state = _running()
        for offset in (2.0, 2.1, 2.2, 2.9):
            metrics.check_time_budget(state, T0 + offset)
        assert [s.second for s in state.samples] == [2]

    def test_time_up_caps_elapsed_at_duration(self):
        state = _running(duration=60, correct=100, keys=100)
        state.last_sampled_second = 59
        effects = metrics.check_time_budget(state, T0 + 60.5)
        assert state.finished
        assert len(effects) == 1 and isinstance(effects[0], SessionFinished)
        assert effects[0].metrics.elapsed_seconds == 60.0
        assert effects[0].metrics.display_seconds == 60
        assert [s.second for s in state.samples] == [60]

    def test_finished_is_noop(self):
        state = _running()
        state.finished = True
        assert metrics.check_time_budget(state, T0 + 100) == []


# ---------------------------------------------------------------------------
# Finishing
# ---------------------------------------------------------------------------

class TestFinishSession:
    def test_final_metrics(self):
        state = _running(correct=25, incorrect=5, keys=30)
        effects = metrics.finish_session(state, T0 + 30)
        assert state.final == FinalMetrics(
            wpm=10,
            accuracy=83,
            raw_wpm=12,
            total_chars=30,
            correct_chars=25,
            incorrect_chars=5,
            elapsed_seconds=30.0,
        )
        assert effects == [SessionFinished(metrics=state.final, samples=tuple(state.samples))]

    def test_elapsed_capped_at_duration(self):
        state = _running(duration=30, correct=50, keys=50)
        metrics.finish_session(state, T0 + 45)
        assert state.final.elapsed_seconds == 30.0
        # rates computed over the capped 30 s: 50 / 5 / 0.5
        assert state.final.wpm == 20

    def test_final_sample_taken(self):
        state = _running(correct=10, keys=10)
        state.last_sampled_second = 4
        metrics.finish_session(state, T0 + 5.8)
        assert [s.second for s in state.samples] == [5]

    def test_no_duplicate_final_sample(self):
        state = _running()
        metrics.sample_second(state, 5)
        metrics.finish_session(state, T0 + 5.3)
        assert [s.second for s in state.samples] == [5]

    def test_under_one_second_has_no_sample(self):
        state = _running(text="ab", correct=2, keys=2)
        metrics.finish_session(state, T0 + 0.4)
        assert state.samples == []

    def test_idempotent(self):
        state = _running()
        first = metrics.finish_session(state, T0 + 10)
        second = metrics.finish_session(state, T0 + 20)
        assert len(first) == 1
        assert second == []
        assert state.finished_at == T0 + 10

    def test_display_seconds_rounds(self):
        fm = FinalMetrics(wpm=0, accuracy=100, raw_wpm=0, total_chars=0,
                          correct_chars=0, incorrect_chars=0, elapsed_seconds=12.5)
        assert fm.display_seconds == 13

    def test_samples_in_effect_are_a_snapshot(self):
        state = _running()
        metrics.sample_second(state, 1)
        effect = metrics.finish_session(state, T0 + 2.5)[0]
        state.samples.append(PerformanceSample(3, 0, 100))
        assert [s.second for s in effect.samples] == [1, 2]
