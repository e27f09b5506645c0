# app/components/model_viewer.py
"""
3D model viewer component using Plotly.
"""

import plotly.graph_objects as go
from typing import List
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from entry_frame.geometry import Member
from entry_frame.viz import create_frame_figure


def render_frame_model(
    members: List[Member],
    height: int = 500,
    style: str = 'boxes',
    color_by: str = 'none',
) -> go.Figure:
    """
    Create a 3D view of the members at their current positions.
    
    Parameters:
    -----------
    members : List[Member]
        Members to draw (scene.members)
    height : int
        Figure height in pixels
    style : str
        'boxes' or 'lines'
    color_by : str
        'none' or 'role'
    
    Returns:
    --------
    go.Figure
        Plotly figure
    """
    fig = create_frame_figure(
        members,
        title="",
        style=style,
        color_by=color_by,
        height=height,
    )
    # Keep the camera where the user left it between animation frames
    fig.update_layout(uirevision='frame', margin=dict(l=0, r=0, t=0, b=0))
    return fig
