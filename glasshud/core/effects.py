"""Outbound effects: what the core asks the presentation layer to show."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from glasshud.core.session import PerformanceSample, Verdict

if TYPE_CHECKING:
    from glasshud.core.metrics import FinalMetrics


@dataclass(frozen=True)
class CursorMoved:
    index: int


@dataclass(frozen=True)
class CellVerdictChanged:
    index: int
    verdict: Verdict


@dataclass(frozen=True)
class LiveMetricsUpdated:
    wpm: int
    accuracy: int
    remaining_seconds: int


@dataclass(frozen=True)
class VelocityChanged:
    active: bool


@dataclass(frozen=True)
class SessionFinished:
    metrics: "FinalMetrics"
    samples: tuple[PerformanceSample, ...]


@dataclass(frozen=True)
class SessionReset:
    target_text: str
    duration_seconds: int


Effect = Union[
    CursorMoved,
    CellVerdictChanged,
    LiveMetricsUpdated,
    VelocityChanged,
    SessionFinished,
    SessionReset,
]
