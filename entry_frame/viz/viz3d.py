# entry_frame/viz/viz3d.py
"""
3D VISUALIZATION: Frame Viewer and Explode Animation
====================================================

PURPOSE:
--------
Stateless projection of a member list onto a Plotly figure. The viewer
only reads member geometry and current positions; it never keeps any
state of its own, so it can be called every frame.

AXES:
-----
Frame coordinates are Y-up with the canopy projecting toward -Z. Plotly
is Z-up, so points are mapped

    (x, y, z) -> (x, -z, y)

which is a proper rotation (no mirroring): the canopy points toward +Y
on screen and height stays vertical.
"""

import os
from typing import Dict, List, Literal, Optional

import numpy as np
import plotly.graph_objects as go

from ..geometry import BOX_TRIANGLES, Member, box_vertices
from ..topology import ROLES

STEEL_COLOR = 'rgb(51, 65, 85)'  # slate-700

ROLE_COLORS = {
    'column_back': 'rgb(51, 65, 85)',
    'column_front': 'rgb(71, 85, 105)',
    'tie_main_long': 'rgb(37, 99, 235)',
    'tie_main_cross': 'rgb(96, 165, 250)',
    'canopy_post': 'rgb(22, 163, 74)',
    'canopy_tie_long': 'rgb(234, 88, 12)',
    'canopy_tie_cross': 'rgb(251, 146, 60)',
}


def to_plot_coords(points: np.ndarray) -> np.ndarray:
    """Map Y-up frame coordinates (..., 3) to Z-up plot coordinates."""
    points = np.asarray(points, dtype=float)
    return np.stack([points[..., 0], -points[..., 2], points[..., 1]], axis=-1)


def _group_members(members: List[Member], color_by: str) -> Dict[str, List[Member]]:
    """Split members into trace groups (one group unless coloring by role)."""
    if color_by != 'role':
        return {'Members': list(members)}
    groups = {role: [] for role in ROLES}
    for member in members:
        groups.setdefault(member.role, []).append(member)
    return groups


def _box_trace(members: List[Member], name: str, color: str) -> go.Mesh3d:
    if members:
        verts = np.vstack([box_vertices(m) for m in members])
        tris = np.vstack([BOX_TRIANGLES + 8 * i for i in range(len(members))])
    else:
        verts = np.zeros((0, 3))
        tris = np.zeros((0, 3), dtype=int)
    pts = to_plot_coords(verts)
    return go.Mesh3d(
        x=pts[:, 0], y=pts[:, 1], z=pts[:, 2],
        i=tris[:, 0], j=tris[:, 1], k=tris[:, 2],
        color=color,
        flatshading=True,
        lighting=dict(ambient=0.6, diffuse=0.7, specular=0.4, roughness=0.3),
        name=name,
        showlegend=True,
        hoverinfo='name',
    )


def _line_trace(members: List[Member], name: str, color: str) -> go.Scatter3d:
    # Centerlines through the current position, broken with None between members
    xs, ys, zs = [], [], []
    texts = []
    for m in members:
        half = m.direction * (m.length / 2)
        a, b = to_plot_coords(np.array([m.current_position - half, m.current_position + half]))
        xs.extend([a[0], b[0], None])
        ys.extend([a[1], b[1], None])
        zs.extend([a[2], b[2], None])
        label = f"Member {m.index} ({m.role}): L={m.length*1000:.0f} mm"
        texts.extend([label, label, ''])
    return go.Scatter3d(
        x=xs, y=ys, z=zs,
        mode='lines',
        line=dict(color=color, width=5),
        name=name,
        text=texts,
        hoverinfo='text',
    )


def member_traces(
    members: List[Member],
    style: Literal['boxes', 'lines'] = 'boxes',
    color_by: Literal['none', 'role'] = 'none',
) -> List:
    """
    Plotly traces for a member list at the members' current positions.
    
    The number and order of traces depends only on style/color_by, never
    on positions, so traces from different ticks can be used as animation
    frames of one figure.
    """
    traces = []
    for name, group in _group_members(members, color_by).items():
        color = ROLE_COLORS.get(name, STEEL_COLOR) if color_by == 'role' else STEEL_COLOR
        if style == 'lines':
            traces.append(_line_trace(group, name, color))
        else:
            traces.append(_box_trace(group, name, color))
    return traces


def ground_grid_trace(half_size: float = 3.0, divisions: int = 10) -> go.Scatter3d:
    """Square grid on the ground plane, centered on the origin."""
    xs, ys, zs = [], [], []
    for t in np.linspace(-half_size, half_size, divisions + 1):
        xs.extend([-half_size, half_size, None, t, t, None])
        ys.extend([t, t, None, -half_size, half_size, None])
        zs.extend([0.0, 0.0, None, 0.0, 0.0, None])
    return go.Scatter3d(
        x=xs, y=ys, z=zs,
        mode='lines',
        line=dict(color='rgb(148, 163, 184)', width=1),
        name='Ground',
        hoverinfo='skip',
        showlegend=False,
    )


def _scene_layout(lo: np.ndarray, hi: np.ndarray, pad: float = 0.3) -> dict:
    """Scene dict with equal-scale axes covering [lo, hi] in plot coordinates."""
    mid = (lo + hi) / 2
    span = max(float(np.max(hi - lo)), 1.0) / 2 + pad
    return dict(
        xaxis=dict(title='X', range=[mid[0] - span, mid[0] + span], backgroundcolor='rgb(241, 245, 249)'),
        yaxis=dict(title='Depth', range=[mid[1] - span, mid[1] + span], backgroundcolor='rgb(241, 245, 249)'),
        zaxis=dict(title='Height', range=[0.0, hi[2] + pad], backgroundcolor='rgb(241, 245, 249)'),
        aspectmode='manual',
        aspectratio=dict(x=1, y=1, z=(hi[2] + pad) / (2 * span)),
        camera=dict(eye=dict(x=1.1, y=-1.5, z=0.9)),
    )


def _member_extent(members: List[Member], explode_scale: Optional[np.ndarray] = None) -> np.ndarray:
    """Plot-space bounds of member endpoints, optionally including the exploded layout."""
    pts = []
    for m in members:
        half = m.direction * (m.length / 2)
        centers = [m.current_position, m.assembled_position]
        if explode_scale is not None:
            centers.append(m.assembled_position * explode_scale)
        for c in centers:
            pts.extend([c - half, c + half])
    pts = to_plot_coords(np.array(pts))
    return np.array([pts.min(axis=0), pts.max(axis=0)])


def create_frame_figure(
    members: List[Member],
    title: str = "Entrance Frame",
    style: Literal['boxes', 'lines'] = 'boxes',
    color_by: Literal['none', 'role'] = 'none',
    show_grid: bool = True,
    height: Optional[int] = None,
) -> go.Figure:
    """
    Create a Plotly figure of the members at their current positions.
    
    Parameters:
    -----------
    members : List[Member]
        Members to draw (e.g. scene.members)
    title : str
        Plot title
    style : str
        'boxes' draws each member as its oriented box,
        'lines' draws centerlines only
    color_by : str
        'none' for uniform steel, 'role' for one color per member role
    show_grid : bool
        Draw the ground grid
    height : Optional[int]
        Figure height in pixels
    
    Returns:
    --------
    go.Figure
    """
    fig = go.Figure()
    
    if show_grid:
        fig.add_trace(ground_grid_trace())
    for trace in member_traces(members, style=style, color_by=color_by):
        fig.add_trace(trace)
    
    if members:
        lo, hi = _member_extent(members)
    else:
        lo, hi = np.zeros(3), np.ones(3)
    
    fig.update_layout(
        title=dict(text=title, font=dict(size=16)),
        scene=_scene_layout(lo, hi),
        showlegend=color_by == 'role',
        legend=dict(x=0.02, y=0.98),
        margin=dict(l=0, r=0, t=40, b=0),
        paper_bgcolor='rgb(241, 245, 249)',
    )
    if height:
        fig.update_layout(height=height)
    
    return fig


def create_explode_animation(
    scene,
    n_frames: int = 60,
    ticks_per_frame: int = 1,
    title: str = "Exploded View",
    style: Literal['boxes', 'lines'] = 'boxes',
    color_by: Literal['none', 'role'] = 'role',
    frame_duration_ms: int = 33,
) -> go.Figure:
    """
    Record the scene's explode animation into a Plotly animation.
    
    This DRIVES the scene: it calls scene.tick() n_frames * ticks_per_frame
    times with whatever explode flag the scene currently has. The first
    frame is the state before any tick.
    
    Parameters:
    -----------
    scene : FrameScene
        Scene to tick
    n_frames : int
        Number of recorded frames after the initial one
    ticks_per_frame : int
        Scene ticks between recorded frames
    
    Returns:
    --------
    go.Figure
        Figure with frames and a play button
    """
    members = scene.members
    scale = np.asarray(scene.settings.scale, dtype=float)
    lo, hi = _member_extent(members, explode_scale=scale)
    
    # Ground grid is trace 0 and stays put; only member traces are animated
    initial = member_traces(members, style=style, color_by=color_by)
    animated = list(range(1, 1 + len(initial)))
    
    fig = go.Figure()
    fig.add_trace(ground_grid_trace())
    for trace in initial:
        fig.add_trace(trace)
    
    frames = []
    for f in range(n_frames):
        for _ in range(ticks_per_frame):
            scene.tick()
        frames.append(go.Frame(
            data=member_traces(members, style=style, color_by=color_by),
            traces=animated,
            name=str(f + 1),
        ))
    fig.frames = frames
    
    fig.update_layout(
        title=dict(text=title, font=dict(size=16)),
        scene=_scene_layout(lo, hi),
        showlegend=color_by == 'role',
        margin=dict(l=0, r=0, t=40, b=0),
        paper_bgcolor='rgb(241, 245, 249)',
        updatemenus=[dict(
            type='buttons',
            showactive=False,
            x=0.02, y=0.02, xanchor='left', yanchor='bottom',
            buttons=[dict(
                label='Play',
                method='animate',
                args=[None, dict(
                    frame=dict(duration=frame_duration_ms, redraw=True),
                    fromcurrent=True,
                    transition=dict(duration=0),
                )],
            )],
        )],
    )
    
    return fig


def plot_frame_3d(
    members: List[Member],
    title: str = "Entrance Frame",
    outpath: Optional[str] = None,
    show: bool = True,
    **kwargs
) -> go.Figure:
    """
    Create and optionally display/save a frame figure.
    
    Parameters:
    -----------
    members, title:
        See create_frame_figure()
    outpath : Optional[str]
        If provided, save as HTML file
    show : bool
        Whether to display the figure
    **kwargs:
        Passed to create_frame_figure()
    """
    fig = create_frame_figure(members, title=title, **kwargs)
    
    if outpath:
        os.makedirs(os.path.dirname(outpath) if os.path.dirname(outpath) else '.', exist_ok=True)
        fig.write_html(outpath)
        print(f"3D visualization saved to: {outpath}")
    
    if show:
        fig.show()
    
    return fig
