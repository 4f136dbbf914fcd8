"""Color theme selection."""

from __future__ import annotations

from typing import Optional

from rich.theme import Theme

from devflow.core.constants import DARK_PALETTE, DEFAULT_MODE, LIGHT_MODE, LIGHT_PALETTE


def normalize_mode(value: Optional[str]) -> str:
    """Map a mode value to a known mode, falling back to dark."""
    if value is not None and value.strip().lower() == LIGHT_MODE:
        return LIGHT_MODE
    return DEFAULT_MODE


def palette_for(mode: Optional[str]) -> dict:
    return dict(LIGHT_PALETTE if normalize_mode(mode) == LIGHT_MODE else DARK_PALETTE)


def select_theme(mode: Optional[str]) -> Theme:
    """Build the rich theme for a color mode."""
    return Theme(palette_for(mode), inherit=True)
