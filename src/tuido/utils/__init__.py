"""Shared utilities."""

from __future__ import annotations

from tuido.utils.theme import PRIORITY_COLORS, create_tuido_theme

__all__ = [
    "PRIORITY_COLORS",
    "create_tuido_theme",
]
