from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from glasshud.core.metrics import FinalMetrics


class Verdict(Enum):
    UNTESTED = "untested"
    CORRECT = "correct"
    INCORRECT = "incorrect"


class SessionStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"


@dataclass
class CharacterCell:
    """One position of the target text and the verdict typed against it."""

    expected: str
    verdict: Verdict = Verdict.UNTESTED


@dataclass(frozen=True)
class PerformanceSample:
    second: int
    wpm: int
    accuracy: int


@dataclass
class SessionState:
    """Authoritative record of one typing test, from setup until restart.

    The cursor always equals ``correct_count + incorrect_count``: cells below
    it carry a verdict, cells at or above it are untested. A new instance is
    built for every restart; ``generation`` tells the controller's scheduled
    ticks which instance they belong to.
    """

    cells: list[CharacterCell]
    duration_seconds: int
    generation: int = 0
    cursor: int = 0
    started_at: Optional[float] = None
    finished: bool = False
    finished_at: Optional[float] = None
    correct_count: int = 0
    incorrect_count: int = 0
    keys_pressed: int = 0
    samples: list[PerformanceSample] = field(default_factory=list)
    last_sampled_second: int = 0
    velocity_active: bool = False
    final: Optional["FinalMetrics"] = None

    @classmethod
    def create(cls, text: str, duration_seconds: int, generation: int = 0) -> "SessionState":
        """Build an idle session with one untested cell per character of ``text``."""
        return cls(
            cells=[CharacterCell(expected=ch) for ch in text],
            duration_seconds=duration_seconds,
            generation=generation,
        )

    @property
    def text(self) -> str:
        """The target text the cells were built from."""
        return "".join(cell.expected for cell in self.cells)

    @property
    def length(self) -> int:
        """Number of characters in the target text."""
        return len(self.cells)

    @property
    def started(self) -> bool:
        """True once the first character key has been judged."""
        return self.started_at is not None

    @property
    def judged(self) -> int:
        """Number of cells holding a verdict."""
        return self.correct_count + self.incorrect_count

    @property
    def status(self) -> SessionStatus:
        """Lifecycle stage derived from the start and finish markers."""
        if self.finished:
            return SessionStatus.FINISHED
        if self.started:
            return SessionStatus.RUNNING
        return SessionStatus.IDLE

    def check_invariants(self) -> list[str]:
        """Return a description of every violated consistency rule (empty when sound)."""
        problems: list[str] = []
        if self.cursor != self.judged:
            problems.append(
                f"cursor {self.cursor} != correct {self.correct_count} + incorrect {self.incorrect_count}"
            )
        if self.correct_count < 0 or self.incorrect_count < 0 or self.keys_pressed < 0:
            problems.append("negative counter")
        if self.keys_pressed != self.judged:
            problems.append(f"keys_pressed={self.keys_pressed} but {self.judged} cells judged")
        if not 0 <= self.cursor <= self.length:
            problems.append(f"cursor {self.cursor} outside [0, {self.length}]")
        correct = sum(1 for c in self.cells if c.verdict is Verdict.CORRECT)
        incorrect = sum(1 for c in self.cells if c.verdict is Verdict.INCORRECT)
        if correct != self.correct_count:
            problems.append(f"{correct} correct cells but correct_count={self.correct_count}")
        if incorrect != self.incorrect_count:
            problems.append(f"{incorrect} incorrect cells but incorrect_count={self.incorrect_count}")
        if any(c.verdict is Verdict.UNTESTED for c in self.cells[: self.cursor]):
            problems.append("untested cell below cursor")
        if any(c.verdict is not Verdict.UNTESTED for c in self.cells[self.cursor :]):
            problems.append("judged cell at or above cursor")
        seconds = [s.second for s in self.samples]
        if any(b <= a for a, b in zip(seconds, seconds[1:])):
            problems.append("samples not strictly increasing")
        if any(s > self.duration_seconds for s in seconds):
            problems.append("sample beyond configured duration")
        return problems
