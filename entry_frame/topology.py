# entry_frame/topology.py
"""
SEGMENT TOPOLOGY: Frame Centerlines from Dimensions
===================================================

PURPOSE:
--------
Turn a DimensionConfig into the ordered list of member centerlines.
This is a pure function: same config in, bit-identical segments out.

COORDINATES:
------------
Y is up. The back column row sits on z=0, the front row on z=-depth and
the canopy projects further to z=-(depth + overhang). Columns are centered
on the origin along X:

    x_i = -total_width/2 + i * spacing     (i = 0 .. column_count-1)

which for 4 columns gives -1.5s, -0.5s, 0.5s, 1.5s.

EMISSION ORDER:
---------------
The order only matters for stable member indices:

    1. columns           back (z=0) then front (z=-depth), per column
    2. main long ties    along X at z=0 and z=-depth, y=main_height
    3. main cross ties   back to front, per column
    4. canopy posts      front row, main_height -> canopy level, per column
    5. canopy long ties  along X at z=-depth and z=-(depth+overhang)
    6. canopy cross ties front row -> canopy far edge, per column

For 4 columns: 8 + 2 + 4 + 4 + 2 + 4 = 24 segments.
"""

from dataclasses import dataclass
from typing import List, Tuple

from .config import DimensionConfig

Point3 = Tuple[float, float, float]

ROLES = (
    'column_back',
    'column_front',
    'tie_main_long',
    'tie_main_cross',
    'canopy_post',
    'canopy_tie_long',
    'canopy_tie_cross',
)


@dataclass(frozen=True)
class Segment:
    """
    A straight member centerline before meshing.
    
    start, end : Point3
        Endpoints (x, y, z)
    role : str
        Member category, one of ROLES
    """
    start: Point3
    end: Point3
    role: str = ''

    @property
    def length(self) -> float:
        dx = self.end[0] - self.start[0]
        dy = self.end[1] - self.start[1]
        dz = self.end[2] - self.start[2]
        return (dx*dx + dy*dy + dz*dz) ** 0.5

    @property
    def midpoint(self) -> Point3:
        return (
            (self.start[0] + self.end[0]) / 2,
            (self.start[1] + self.end[1]) / 2,
            (self.start[2] + self.end[2]) / 2,
        )


def column_positions(config: DimensionConfig) -> List[float]:
    """X-coordinates of the column lines, left to right."""
    half = config.total_width / 2
    return [-half + i * config.column_spacing for i in range(config.column_count)]


def expected_segment_count(column_count: int) -> int:
    """Number of segments generate_segments emits for a given column count."""
    # per column: 2 columns + cross tie + canopy post + canopy cross tie
    return 5 * column_count + 4


def generate_segments(config: DimensionConfig) -> List[Segment]:
    """
    Generate every member centerline of the frame, in fixed order.
    
    Parameters:
    -----------
    config : DimensionConfig
        Frame dimensions (validated here)
    
    Returns:
    --------
    List[Segment]
        Ordered centerlines; see module docstring for the order
    
    Raises:
    -------
    ConfigurationError
        If the config is invalid
    
    Example:
    --------
    >>> segments = generate_segments(DimensionConfig())
    >>> len(segments)
    24
    """
    config.validate()
    
    xs = column_positions(config)
    x_left, x_right = xs[0], xs[-1]
    
    h = config.main_height
    hc = config.canopy_level
    d = config.structure_depth
    dc = config.canopy_depth
    
    segments = []
    
    # 1. Columns: back row then front row at each column line
    for x in xs:
        segments.append(Segment((x, 0.0, 0.0), (x, h, 0.0), 'column_back'))
        segments.append(Segment((x, 0.0, -d), (x, h, -d), 'column_front'))
    
    # 2. Main level ties along the span
    segments.append(Segment((x_left, h, 0.0), (x_right, h, 0.0), 'tie_main_long'))
    segments.append(Segment((x_left, h, -d), (x_right, h, -d), 'tie_main_long'))
    
    # 3. Main level cross ties, back to front
    for x in xs:
        segments.append(Segment((x, h, 0.0), (x, h, -d), 'tie_main_cross'))
    
    # 4. Canopy posts on the front row
    for x in xs:
        segments.append(Segment((x, h, -d), (x, hc, -d), 'canopy_post'))
    
    # 5. Canopy ties along the span
    segments.append(Segment((x_left, hc, -d), (x_right, hc, -d), 'canopy_tie_long'))
    segments.append(Segment((x_left, hc, -dc), (x_right, hc, -dc), 'canopy_tie_long'))
    
    # 6. Canopy cross ties out to the far edge
    for x in xs:
        segments.append(Segment((x, hc, -d), (x, hc, -dc), 'canopy_tie_cross'))
    
    return segments
