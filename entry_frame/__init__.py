# entry_frame - Parametric Entrance Frame with Exploded View
"""
ENTRY-FRAME: Parametric Frame Geometry and Explode Animation
============================================================

This package provides:
- A dimension-driven generator for a four-column entrance frame
  (columns, main ties, cantilevered canopy)
- Oriented box members built from centerlines
- An explode-view animator that smoothly moves members between the
  assembled layout and a spread-out layout, one tick at a time
- A member schedule (cut list) and a Plotly viewer

ARCHITECTURE:
-------------
    config.py       DimensionConfig, ExplodeSettings, ConfigurationError
    topology.py     Segment + ordered centerline generator
    geometry.py     Member, two-vector rotation, box vertices
    assembly.py     Assembly: members + frozen assembled positions
    animator.py     ExplodeAnimator (per-tick smoothing)
    scene.py        FrameScene: (re)build, explode flag, tick driver
    schedule.py     Cut list and length bins
    viz/            Plotly viewer and explode animation export

Data flows one way:

    DimensionConfig -> segments -> members -> Assembly -> animator -> viewer

USAGE:
------
    from entry_frame import FrameScene, DimensionConfig
    
    scene = FrameScene(DimensionConfig(column_spacing=0.6))
    scene.set_exploded(True)
    for _ in range(60):
        scene.tick()
    positions = scene.assembly.current_positions()
"""

from .config import (
    DimensionConfig,
    ExplodeSettings,
    ConfigurationError,
    DEFAULT_DIMENSIONS,
    DEFAULT_EXPLODE,
)
from .topology import Segment, generate_segments, column_positions, ROLES
from .geometry import Member, build_member, rotation_between, quaternion_to_matrix
from .assembly import Assembly, assemble
from .animator import ExplodeAnimator, StaleAssemblyError, exploded_target
from .scene import FrameScene

__version__ = "0.1.0"

__all__ = [
    'DimensionConfig',
    'ExplodeSettings',
    'ConfigurationError',
    'DEFAULT_DIMENSIONS',
    'DEFAULT_EXPLODE',
    'Segment',
    'generate_segments',
    'column_positions',
    'ROLES',
    'Member',
    'build_member',
    'rotation_between',
    'quaternion_to_matrix',
    'Assembly',
    'assemble',
    'ExplodeAnimator',
    'StaleAssemblyError',
    'exploded_target',
    'FrameScene',
]
