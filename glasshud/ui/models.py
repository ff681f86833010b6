"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass

from glasshud.core.metrics import FinalMetrics


@dataclass(frozen=True)
class StatTile:
    """One labelled value on the results overlay."""

    label: str
    value: str


@dataclass(frozen=True)
class ResultsSummary:
    """Display strings for a finished test."""

    wpm: str
    accuracy: str
    details: list[StatTile]

    @classmethod
    def from_metrics(cls, metrics: FinalMetrics) -> "ResultsSummary":
        return cls(
            wpm=str(metrics.wpm),
            accuracy=f"{metrics.accuracy}%",
            details=[
                StatTile("CHARACTERS", str(metrics.total_chars)),
                StatTile("RAW WPM", str(metrics.raw_wpm)),
                StatTile("CORRECT", str(metrics.correct_chars)),
                StatTile("INCORRECT", str(metrics.incorrect_chars)),
                StatTile("TIME", f"{metrics.display_seconds}s"),
            ],
        )
