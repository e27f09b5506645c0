# entry_frame/config.py
"""
DIMENSION CONFIG: The Numbers That Define the Frame
===================================================

PURPOSE:
--------
A frame build is fully determined by a handful of dimensions. This module
holds them in an immutable value object and validates them before anything
downstream (topology, meshing, assembly) gets to see them.

It also holds the explode-view tuning constants. Those are purely visual:
the scale factors push members away from the origin (more in depth than
in height, least in width) and the smoothing rate controls how fast a
member chases its target each tick.

UNITS:
------
All lengths share one linear unit. The reference frame uses meters:
600 mm column spacing, 3 m main height, 60 mm square profile.
"""

import math
import numbers
from dataclasses import dataclass, asdict, replace as dc_replace
from typing import Any, Dict, Tuple


class ConfigurationError(ValueError):
    """Raised when dimensions are invalid or produce a degenerate member."""
    pass


@dataclass(frozen=True)
class DimensionConfig:
    """
    Dimensions of the entrance frame.
    
    Parameters:
    -----------
    column_spacing : float
        Distance between neighbouring columns along the span (X)
    structure_depth : float
        Distance between the back (z=0) and front (z=-depth) column rows
    canopy_overhang : float
        How far the canopy projects past the front row (further into -Z)
    main_height : float
        Height of the columns and the main tie level (Y)
    canopy_height : float
        Height of the canopy posts above the main tie level
    profile_size : float
        Side length of the square member cross-section
    column_count : int
        Number of column positions along the span (4 in the reference frame)
    
    Examples:
    ---------
    >>> cfg = DimensionConfig()
    >>> cfg.replace(column_spacing=0.8).column_spacing
    0.8
    """
    column_spacing: float = 0.6
    structure_depth: float = 0.6
    canopy_overhang: float = 0.6
    main_height: float = 3.0
    canopy_height: float = 0.6
    profile_size: float = 0.06
    column_count: int = 4

    def validate(self) -> 'DimensionConfig':
        """Check every dimension; return self so calls can be chained."""
        for name in ('column_spacing', 'structure_depth', 'canopy_overhang',
                     'main_height', 'canopy_height', 'profile_size'):
            value = getattr(self, name)
            if not isinstance(value, numbers.Real) or isinstance(value, bool):
                raise ConfigurationError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value) or value <= 0.0:
                raise ConfigurationError(f"{name} must be positive and finite, got {value!r}")
        
        if not isinstance(self.column_count, numbers.Integral) or isinstance(self.column_count, bool):
            raise ConfigurationError(f"column_count must be an integer, got {self.column_count!r}")
        if self.column_count < 2:
            # One column collapses the longitudinal ties to zero length
            raise ConfigurationError(f"column_count must be at least 2, got {self.column_count}")
        
        # Finite fields can still overflow once combined
        for name in ('total_width', 'canopy_depth', 'canopy_level'):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ConfigurationError(f"{name} overflows, got {value!r}")
        
        return self

    @property
    def total_width(self) -> float:
        """Distance between the outermost column centerlines."""
        return (self.column_count - 1) * self.column_spacing

    @property
    def canopy_depth(self) -> float:
        """Z-distance from the back row to the canopy far edge."""
        return self.structure_depth + self.canopy_overhang

    @property
    def canopy_level(self) -> float:
        """Y of the canopy tie level."""
        return self.main_height + self.canopy_height

    def replace(self, **changes) -> 'DimensionConfig':
        return dc_replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ExplodeSettings:
    """
    Visual tuning for the explode animation.
    
    scale : (sx, sy, sz)
        Exploded target = assembled position scaled component-wise from the origin
    smoothing : float
        Fraction of the remaining distance covered per tick, in (0, 1]
    settle_tolerance : float
        Residual distance below which a member counts as arrived
    """
    scale: Tuple[float, float, float] = (1.2, 1.1, 1.5)
    smoothing: float = 0.1
    settle_tolerance: float = 1e-4

    def validate(self) -> 'ExplodeSettings':
        try:
            scale = [float(factor) for factor in self.scale]
            smoothing = float(self.smoothing)
            tolerance = float(self.settle_tolerance)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"explode settings must be numbers: {e}") from e
        
        if len(scale) != 3:
            raise ConfigurationError(f"scale needs 3 components, got {len(scale)}")
        for axis, factor in zip('xyz', scale):
            if not math.isfinite(factor) or factor <= 0.0:
                raise ConfigurationError(f"scale {axis} must be positive and finite, got {factor!r}")
        if not (0.0 < smoothing <= 1.0):
            raise ConfigurationError(f"smoothing must be in (0, 1], got {self.smoothing!r}")
        if not math.isfinite(tolerance) or tolerance <= 0.0:
            raise ConfigurationError(
                f"settle_tolerance must be positive, got {self.settle_tolerance!r}"
            )
        return self


# Reference frame from the entrance sketch
DEFAULT_DIMENSIONS = DimensionConfig()
DEFAULT_EXPLODE = ExplodeSettings()
