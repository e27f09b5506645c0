# entry_frame/geometry.py
"""
BEAM MESH BUILDER: From Centerline to Oriented Box
==================================================

PURPOSE:
--------
Each member is drawn as a square-section box. The box is modelled along
a canonical long axis (+Y) with extents

    profile × length × profile

and then rotated so that +Y lines up with the member direction and moved
so its center sits at the segment midpoint.

ORIENTATION:
------------
The rotation is stored as a unit quaternion (w, x, y, z) built from two
unit vectors a → b:

    q = normalize( [1 + a·b,  a × b] )

When a and b are anti-parallel (1 + a·b ≈ 0) the cross product vanishes
and any axis perpendicular to a works for the 180° turn. We pick one
from the dominant components of a, so the choice is deterministic.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np

from .config import ConfigurationError
from .topology import Segment

# Box long axis in member-local coordinates
LONG_AXIS = np.array([0.0, 1.0, 0.0])

# Anti-parallel threshold for the two-vector rotation
_PARALLEL_EPS = 1e-8

# Unit box corners in local (x, y, z) sign pattern; see BOX_TRIANGLES
_BOX_CORNER_SIGNS = np.array([
    [-1, -1, -1],
    [+1, -1, -1],
    [+1, +1, -1],
    [-1, +1, -1],
    [-1, -1, +1],
    [+1, -1, +1],
    [+1, +1, +1],
    [-1, +1, +1],
], dtype=float)

# 12 triangles (two per face) indexing the corners above
BOX_TRIANGLES = np.array([
    [0, 1, 2], [0, 2, 3],   # -z
    [4, 6, 5], [4, 7, 6],   # +z
    [0, 5, 1], [0, 4, 5],   # -y
    [3, 2, 6], [3, 6, 7],   # +y
    [0, 3, 7], [0, 7, 4],   # -x
    [1, 5, 6], [1, 6, 2],   # +x
], dtype=int)


def rotation_between(a: Sequence[float], b: Sequence[float]) -> np.ndarray:
    """
    Unit quaternion (w, x, y, z) rotating direction a onto direction b.
    
    Both inputs are normalized here, so any non-zero vectors are accepted.
    
    Raises:
    -------
    ValueError
        If either vector has zero length
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    na = np.linalg.norm(a)
    nb = np.linalg.norm(b)
    if na == 0.0 or nb == 0.0:
        raise ValueError("Cannot build a rotation from a zero-length vector")
    a = a / na
    b = b / nb
    
    r = float(np.dot(a, b)) + 1.0
    
    if r < _PARALLEL_EPS:
        # Anti-parallel: half turn about any axis perpendicular to a
        if abs(a[0]) > abs(a[2]):
            q = np.array([0.0, -a[1], a[0], 0.0])
        else:
            q = np.array([0.0, 0.0, -a[2], a[1]])
    else:
        c = np.cross(a, b)
        q = np.array([r, c[0], c[1], c[2]])
    
    return q / np.linalg.norm(q)


def quaternion_to_matrix(q: Sequence[float]) -> np.ndarray:
    """3×3 rotation matrix for a unit quaternion (w, x, y, z)."""
    w, x, y, z = q
    return np.array([
        [1 - 2*(y*y + z*z), 2*(x*y - w*z),     2*(x*z + w*y)],
        [2*(x*y + w*z),     1 - 2*(x*x + z*z), 2*(y*z - w*x)],
        [2*(x*z - w*y),     2*(y*z + w*x),     1 - 2*(x*x + y*y)],
    ], dtype=float)


@dataclass(eq=False)
class Member:
    """
    A built, placed frame member.
    
    Geometry fields are fixed at build time. Only current_position moves:
    the explode animator writes it every tick. assembled_position is a
    read-only array and is the "home" reference for the member.
    
    Parameters:
    -----------
    index : int
        Position in the owning assembly's member list
    role : str
        Member category (see topology.ROLES)
    start, end : np.ndarray
        Segment endpoints as built
    cross_section : float
        Side of the square profile
    length : float
        |end - start|
    orientation : np.ndarray
        Unit quaternion (w, x, y, z) taking LONG_AXIS to the member direction
    assembled_position : np.ndarray
        Segment midpoint, read-only
    current_position : np.ndarray
        Live position, starts equal to assembled_position
    """
    index: int
    role: str
    start: np.ndarray
    end: np.ndarray
    cross_section: float
    length: float
    orientation: np.ndarray
    assembled_position: np.ndarray
    current_position: np.ndarray = field(default=None)

    def __post_init__(self):
        self.assembled_position = np.array(self.assembled_position, dtype=float)
        self.assembled_position.setflags(write=False)
        if self.current_position is None:
            self.current_position = self.assembled_position.copy()
        else:
            self.current_position = np.array(self.current_position, dtype=float)

    @property
    def direction(self) -> np.ndarray:
        return (self.end - self.start) / self.length

    @property
    def rotation_matrix(self) -> np.ndarray:
        return quaternion_to_matrix(self.orientation)

    @property
    def offset(self) -> np.ndarray:
        """Displacement of the live position from home."""
        return self.current_position - self.assembled_position


def build_member(segment: Segment, cross_section: float, index: int = 0) -> Member:
    """
    Realize a segment as an oriented box member.
    
    Parameters:
    -----------
    segment : Segment
        Member centerline
    cross_section : float
        Profile size (must be positive)
    index : int
        Index the member will have in its assembly
    
    Returns:
    --------
    Member
        New member with current_position == assembled_position
    
    Raises:
    -------
    ConfigurationError
        If the segment length is zero or not finite, or the cross-section is not positive
    """
    if not cross_section > 0.0:
        raise ConfigurationError(f"Member {index}: cross-section must be positive, got {cross_section!r}")
    
    start = np.asarray(segment.start, dtype=float)
    end = np.asarray(segment.end, dtype=float)
    delta = end - start
    length = float(np.linalg.norm(delta))
    
    if length <= 0.0:
        raise ConfigurationError(
            f"Member {index} ({segment.role or 'unnamed'}) has zero length "
            f"(start and end at {tuple(start)})"
        )
    if not np.isfinite(length):
        raise ConfigurationError(
            f"Member {index} ({segment.role or 'unnamed'}) has non-finite length {length!r}"
        )
    
    orientation = rotation_between(LONG_AXIS, delta / length)
    
    return Member(
        index=index,
        role=segment.role,
        start=start,
        end=end,
        cross_section=float(cross_section),
        length=length,
        orientation=orientation,
        assembled_position=(start + end) / 2,
    )


def box_vertices(member: Member, position: np.ndarray = None) -> np.ndarray:
    """
    The 8 corners of a member's box, shape (8, 3).
    
    Uses current_position unless a position is given. Corner order
    matches BOX_TRIANGLES.
    """
    if position is None:
        position = member.current_position
    half = np.array([member.cross_section, member.length, member.cross_section]) / 2
    local = _BOX_CORNER_SIGNS * half
    return local @ member.rotation_matrix.T + np.asarray(position, dtype=float)


def frame_mesh(members: List[Member]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Flatten all member boxes into one triangle mesh.
    
    Returns:
    --------
    vertices : np.ndarray
        (8 * n_members, 3) corner coordinates
    triangles : np.ndarray
        (12 * n_members, 3) vertex indices
    """
    if not members:
        return np.zeros((0, 3)), np.zeros((0, 3), dtype=int)
    
    vertices = np.vstack([box_vertices(m) for m in members])
    triangles = np.vstack([BOX_TRIANGLES + 8 * i for i in range(len(members))])
    return vertices, triangles
