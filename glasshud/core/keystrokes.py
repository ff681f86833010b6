"""Keystroke processing: judging typed characters against the target text.

Keys arrive as either a single character (``"a"``, ``" "``, ``"é"``) or a
control-key name (``"Backspace"``, ``"Shift"``, ``"ArrowLeft"`` ...).
"""

from __future__ import annotations

import logging
from enum import Enum

from glasshud.core import metrics
from glasshud.core.effects import (
    CellVerdictChanged,
    CursorMoved,
    Effect,
    VelocityChanged,
)
from glasshud.core.session import SessionState, Verdict

logger = logging.getLogger(__name__)

BACKSPACE = "Backspace"

IGNORED_KEYS: frozenset[str] = frozenset(
    [
        "Shift", "Control", "Alt", "Meta",
        "CapsLock", "Tab", "Escape",
        "ArrowUp", "ArrowDown", "ArrowLeft", "ArrowRight",
        "Home", "End", "PageUp", "PageDown",
        "Insert", "Delete", "Enter",
    ]
    + [f"F{n}" for n in range(1, 13)]
)


class KeyKind(Enum):
    IGNORED = "ignored"
    BACKSPACE = "backspace"
    CHARACTER = "character"


def classify_key(key: str) -> KeyKind:
    if key in IGNORED_KEYS:
        return KeyKind.IGNORED
    if key == BACKSPACE:
        return KeyKind.BACKSPACE
    # Only one code point counts as a typed character; composed input is dropped.
    if len(key) == 1:
        return KeyKind.CHARACTER
    return KeyKind.IGNORED


def process_key(
    state: SessionState,
    key: str,
    now: float,
    velocity_threshold: float = 80.0,
) -> tuple[SessionState, list[Effect]]:
    """Apply one key event to ``state`` and return it with the effects to render.

    Only ``state`` is mutated and ``now`` is the only time source. Keys that
    arrive after the session finished are discarded without effects.
    """
    if state.finished:
        return state, []

    kind = classify_key(key)
    if kind is KeyKind.BACKSPACE:
        return state, _retract(state, now)
    if kind is KeyKind.CHARACTER:
        return state, _judge(state, key, now, velocity_threshold)
    return state, []


def _judge(state: SessionState, key: str, now: float, velocity_threshold: float) -> list[Effect]:
    if state.cursor >= state.length:
        return metrics.finish_session(state, now)

    if state.started_at is None:
        state.started_at = now
        logger.debug("Session %d started", state.generation)

    state.keys_pressed += 1

    index = state.cursor
    cell = state.cells[index]
    if key == cell.expected:
        cell.verdict = Verdict.CORRECT
        state.correct_count += 1
    else:
        cell.verdict = Verdict.INCORRECT
        state.incorrect_count += 1
    state.cursor += 1

    effects: list[Effect] = [
        CellVerdictChanged(index=index, verdict=cell.verdict),
        CursorMoved(index=state.cursor),
        metrics.live_update(state, now),
    ]

    active = metrics.is_velocity(state, now, velocity_threshold)
    if active != state.velocity_active:
        state.velocity_active = active
        effects.append(VelocityChanged(active=active))

    if state.cursor >= state.length:
        effects.extend(metrics.finish_session(state, now))
    return effects


def _retract(state: SessionState, now: float) -> list[Effect]:
    if state.cursor == 0:
        return []

    state.cursor -= 1
    cell = state.cells[state.cursor]
    if cell.verdict is Verdict.CORRECT:
        state.correct_count = max(0, state.correct_count - 1)
    elif cell.verdict is Verdict.INCORRECT:
        state.incorrect_count = max(0, state.incorrect_count - 1)
    cell.verdict = Verdict.UNTESTED

    if state.keys_pressed > 0:
        state.keys_pressed -= 1

    return [
        CellVerdictChanged(index=state.cursor, verdict=Verdict.UNTESTED),
        CursorMoved(index=state.cursor),
        metrics.live_update(state, now),
    ]

