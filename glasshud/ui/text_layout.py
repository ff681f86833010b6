"""Word wrapping of the target text into a character grid."""

from __future__ import annotations


def wrap_positions(text: str, columns: int) -> list[tuple[int, int]]:
    """Return the (line, column) of every character of ``text``.

    Words move to the next line as a whole when they do not fit; a space may
    hang one column past the right edge. Words longer than a line are split.
    """
    columns = max(1, columns)
    positions: list[tuple[int, int]] = []
    line = col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == " ":
            positions.append((line, col))
            col += 1
            i += 1
            continue
        j = i
        while j < n and text[j] != " ":
            j += 1
        if col > 0 and col + (j - i) > columns:
            line += 1
            col = 0
        for _ in range(i, j):
            if col >= columns:
                line += 1
                col = 0
            positions.append((line, col))
            col += 1
        i = j
    return positions


def first_visible_line(cursor_line: int, visible_lines: int) -> int:
    """Keep the cursor on the second visible line once typing moves past the first."""
    if visible_lines <= 1:
        return max(0, cursor_line)
    return max(0, cursor_line - 1)
