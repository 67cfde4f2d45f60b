"""Theme palettes and color utilities for the UI."""

from __future__ import annotations

from dataclasses import dataclass

LIGHT = "light"
DARK = "dark"
THEMES = (LIGHT, DARK)


@dataclass(frozen=True)
class ThemeColors:
    name: str
    bg_main: str
    bg_card: str
    bg_input: str
    text_primary: str
    text_secondary: str
    text_muted: str
    border: str
    highlight: str
    error: str
    success: str
    button_bg: str
    button_text: str


LIGHT_COLORS = ThemeColors(
    name=LIGHT,
    bg_main="#EEF6F6",
    bg_card="#FFFFFF",
    bg_input="#FFFFFF",
    text_primary="#1F2933",
    text_secondary="#334155",
    text_muted="#64748B",
    border="#CBD5E1",
    highlight="#0F766E",
    error="#D64545",
    success="#2F855A",
    button_bg="#00838F",
    button_text="#FFFFFF",
)

DARK_COLORS = ThemeColors(
    name=DARK,
    bg_main="#121A1F",
    bg_card="#1B262C",
    bg_input="#22313A",
    text_primary="#E6EEF2",
    text_secondary="#B8C7CF",
    text_muted="#6F8590",
    border="#33454F",
    highlight="#4FB3BF",
    error="#FF7A7A",
    success="#69F0AE",
    button_bg="#4FB3BF",
    button_text="#0B1215",
)


def normalize_theme(name: object) -> str:
    """Return *name* if it is a known theme, otherwise the light theme."""
    return name if name in THEMES else LIGHT


def next_theme(name: str) -> str:
    return DARK if normalize_theme(name) == LIGHT else LIGHT


def colors_for(name: str) -> ThemeColors:
    return DARK_COLORS if normalize_theme(name) == DARK else LIGHT_COLORS


def toggle_button_label(name: str) -> str:
    """Label for the theme button: it names the theme a click switches to."""
    return "Toggle Light Mode" if normalize_theme(name) == DARK else "Toggle Dark Mode"


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
    except ValueError:
        return a
