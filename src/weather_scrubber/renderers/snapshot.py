"""Slider page and snapshot panels."""

from __future__ import annotations

from typing import TYPE_CHECKING

from weather_scrubber.datasources.weather.client import TARGET_DATE
from weather_scrubber.renderers import render_template

if TYPE_CHECKING:
    from weather_scrubber.schemas import ViewState

HOURS = range(24)

#: Heading text for the covered day, e.g. "July 1, 2024".
DAY_LABEL = f"{TARGET_DATE:%B} {TARGET_DATE.day}, {TARGET_DATE.year}"


def hour_label(hour: int) -> str:
    """Slider tick label, e.g. ``7:00``."""
    return f"{hour}:00"


def build_snapshot_html(state: ViewState) -> str:
    """
    Render the loading indicator, error banner and data panels.

    Data panels are hidden while any error is showing; a partial snapshot is
    never drawn next to an error.
    """
    snapshot = state.snapshot
    show_data = snapshot is not None and snapshot.weather is not None and not state.errors
    return render_template(
        "snapshot.html.j2",
        loading=state.loading,
        errors=state.errors,
        snapshot=snapshot if show_data else None,
    )


def build_page_html(state: ViewState, hour: int, *, interactive: bool = True) -> str:
    """Render a full page with the slider positioned at ``hour``."""
    snapshot = state.snapshot
    selected_time = snapshot.time if snapshot is not None and snapshot.time else "00:00"
    return render_template(
        "page.html.j2",
        day_label=DAY_LABEL,
        hour=hour,
        ticks=[(h, hour_label(h)) for h in HOURS],
        selected_time=selected_time,
        interactive=interactive,
        snapshot_html=build_snapshot_html(state),
    )
