# entry_frame/viz - Visualization Tools
"""
VIZ: Plotly projection of frame members
=======================================

Reads member geometry and current positions, keeps no state of its own.
"""

from .viz3d import (
    create_frame_figure,
    create_explode_animation,
    plot_frame_3d,
    member_traces,
    to_plot_coords,
)

__all__ = [
    'create_frame_figure',
    'create_explode_animation',
    'plot_frame_3d',
    'member_traces',
    'to_plot_coords',
]
