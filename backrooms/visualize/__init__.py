"""
Visualization tools for the grid raycaster.

Includes:
- columns: project hits onto screen columns (no display needed)
- depth_viewer: interactive pygame first-person / map viewer

Import the viewer directly (it needs pygame):
    from backrooms.visualize.depth_viewer import DepthViewer
"""

from .columns import column_spans, perpendicular_distance, spans_to_ascii

__all__ = ["column_spans", "perpendicular_distance", "spans_to_ascii"]
