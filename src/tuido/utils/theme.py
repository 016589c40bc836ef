"""Colours for tuido, taken from the Nord palette.

Nord palette reference: https://www.nordtheme.com/docs/colors-and-palettes
"""

from __future__ import annotations

from textual.theme import Theme

NORD = {
    "night": "#2E3440",
    "night-raised": "#3B4252",
    "night-panel": "#434C5E",
    "night-muted": "#4C566A",
    "snow": "#ECEFF4",
    "frost-teal": "#8FBCBB",
    "frost-blue": "#81A1C1",
    "frost-deep": "#5E81AC",
    "red": "#BF616A",
    "yellow": "#EBCB8B",
    "green": "#A3BE8C",
    "purple": "#B48EAD",
}

# Priority letters with a dedicated colour; other letters are only bold.
PRIORITY_COLORS = {
    "A": NORD["red"],
    "B": NORD["yellow"],
    "C": NORD["frost-blue"],
}

VISUAL_BACKGROUND = "#284050"
CURSOR_BACKGROUND = "#3C3C3C"


def create_tuido_theme() -> Theme:
    """Dark Textual theme registered as ``tuido``."""
    return Theme(
        name="tuido",
        primary=NORD["frost-deep"],
        secondary=NORD["green"],
        accent=NORD["frost-teal"],
        foreground=NORD["snow"],
        background=NORD["night"],
        success=NORD["green"],
        warning=NORD["yellow"],
        error=NORD["red"],
        surface=NORD["night-raised"],
        panel=NORD["night-panel"],
        dark=True,
        variables={
            "night-muted": NORD["night-muted"],
            "aurora-purple": NORD["purple"],
        },
    )
