"""Radar data models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RadarFrame:
    """One past radar image with its local display time."""

    time: str  # local "HH:MM"
    tile_url: str
    timestamp: int  # unix seconds, as reported by RainViewer
