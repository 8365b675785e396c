"""Cross-datasource joins.

Dependency rule: analysis/ imports from datasources/ models only.
It never fetches data or produces HTML.

Modules:
  - alignment: radar frames + weather hour -> frames within the tolerance window
"""

from weather_scrubber.analysis.alignment import DEFAULT_TOLERANCE, align_frames, anchor_time

__all__ = ["DEFAULT_TOLERANCE", "align_frames", "anchor_time"]
