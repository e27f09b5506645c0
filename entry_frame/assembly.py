# entry_frame/assembly.py
"""
STRUCTURE ASSEMBLY: The Member Arena
====================================

An Assembly is the ordered, fixed-size list of members produced by one
build, together with a frozen copy of every member's assembled position.

The positions are deliberately duplicated: the animator mutates each
member's current_position every tick, while assembled_positions[i] must
stay exactly what member i was built with. Both are indexed by the same
stable member index for the lifetime of the assembly.

An assembly is never edited. A dimension change builds a new one.
"""

import itertools
import logging
from dataclasses import dataclass, field
from typing import Iterator, List

import numpy as np

from .config import DimensionConfig
from .geometry import Member, build_member
from .topology import generate_segments

logger = logging.getLogger(__name__)

_generation_counter = itertools.count(1)


@dataclass(eq=False)
class Assembly:
    """
    Members of one build plus their frozen home positions.
    
    Attributes:
    -----------
    config : DimensionConfig
        Dimensions the assembly was built from
    members : List[Member]
        Ordered members, members[i].index == i
    assembled_positions : np.ndarray
        (n, 3) read-only array, row i is member i's home position
    generation : int
        Monotonic build number, distinct for every assembly in the process
    """
    config: DimensionConfig
    members: List[Member]
    assembled_positions: np.ndarray
    generation: int = field(default_factory=lambda: next(_generation_counter))

    def __post_init__(self):
        if len(self.members) != len(self.assembled_positions):
            raise ValueError(
                f"{len(self.members)} members but {len(self.assembled_positions)} assembled positions"
            )
        self.assembled_positions.setflags(write=False)

    def __len__(self) -> int:
        return len(self.members)

    def __iter__(self) -> Iterator[Member]:
        return iter(self.members)

    def __getitem__(self, index: int) -> Member:
        return self.members[index]

    def current_positions(self) -> np.ndarray:
        """Snapshot (copy) of the live member positions, shape (n, 3)."""
        return np.array([m.current_position for m in self.members], dtype=float).reshape(-1, 3)


def assemble(config: DimensionConfig) -> Assembly:
    """
    Build a complete assembly from dimensions.
    
    Generates the segments, meshes each one in order and captures the
    home positions. Nothing is returned unless every member builds, so a
    bad config never yields a partial assembly.
    
    Raises:
    -------
    ConfigurationError
        Invalid dimensions or a degenerate segment
    """
    segments = generate_segments(config)
    
    members = [
        build_member(segment, config.profile_size, index=i)
        for i, segment in enumerate(segments)
    ]
    assembled = np.array([m.assembled_position for m in members], dtype=float)
    
    assembly = Assembly(config=config, members=members, assembled_positions=assembled)
    logger.debug("Built assembly #%d with %d members", assembly.generation, len(members))
    return assembly
