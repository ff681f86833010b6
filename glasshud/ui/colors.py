"""Theme colors and color utilities for the UI."""


class HudColors:
    """Dark glass palette."""

    BG_TOP = "#0b1120"
    BG_BOTTOM = "#1e1b4b"

    CARD_BG = "rgba(255, 255, 255, 0.06)"
    CARD_BORDER = "rgba(255, 255, 255, 0.12)"
    CARD_SOLID = "#111827"

    ACCENT = "#22d3ee"
    ACCENT_SOFT = "#67e8f9"
    VELOCITY = "#f472b6"
    ACCURACY = "#a855f7"

    TEXT_PRIMARY = "#f8fafc"
    TEXT_SECONDARY = "#94a3b8"
    TEXT_MUTED = "#475569"

    CHAR_UNTESTED = "#64748b"
    CHAR_CORRECT = "#e2e8f0"
    CHAR_INCORRECT = "#f87171"
    CHAR_INCORRECT_BG = "#3f1d2b"
    CURSOR = "#22d3ee"
    CURSOR_TYPING = "#0e7490"


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    try:
        a = a.strip()
        b = b.strip()
        if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
            return a
        t = max(0.0, min(1.0, float(t)))
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
        r = int(ar + (br - ar) * t)
        g = int(ag + (bg - ag) * t)
        bl = int(ab + (bb - ab) * t)
        return f"#{r:02X}{g:02X}{bl:02X}"
    except (TypeError, ValueError):
        return a
