"""Tests for glasshud.ui.models – results display strings."""

from __future__ import annotations

import pytest

from glasshud.core.metrics import FinalMetrics
from glasshud.ui.models import ResultsSummary, StatTile


def _metrics(**overrides) -> FinalMetrics:
    values = dict(
        wpm=72,
        accuracy=96,
        raw_wpm=75,
        total_chars=375,
        correct_chars=360,
        incorrect_chars=15,
        elapsed_seconds=60.0,
    )
    values.update(overrides)
    return FinalMetrics(**values)


class TestStatTile:
    def test_creation(self):
        tile = StatTile("RAW WPM", "75")
        assert tile.label == "RAW WPM"
        assert tile.value == "75"

    def test_frozen(self):
        tile = StatTile("A", "1")
        with pytest.raises(AttributeError):
            tile.value = "2"  # type: ignore[misc]


class TestResultsSummary:
    def test_headline_values(self):
        summary = ResultsSummary.from_metrics(_metrics())
        assert summary.wpm == "72"
        assert summary.accuracy == "96%"

    def test_detail_tiles_in_order(self):
        summary = ResultsSummary.from_metrics(_metrics())
        assert summary.details == [
            StatTile("CHARACTERS", "375"),
            StatTile("RAW WPM", "75"),
            StatTile("CORRECT", "360"),
            StatTile("INCORRECT", "15"),
            StatTile("TIME", "60s"),
        ]

    def test_time_rounded_for_display(self):
        summary = ResultsSummary.from_metrics(_metrics(elapsed_seconds=7.5))
        assert summary.details[-1] == StatTile("TIME", "8s")

    def test_empty_test(self):
        summary = ResultsSummary.from_metrics(
            _metrics(wpm=0, accuracy=100, raw_wpm=0, total_chars=0,
                     correct_chars=0, incorrect_chars=0, elapsed_seconds=0.0)
        )
        assert summary.wpm == "0"
        assert summary.accuracy == "100%"
        assert summary.details[-1].value == "0s"
