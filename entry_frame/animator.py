# entry_frame/animator.py
"""
EXPLODE ANIMATOR: Per-Tick Smoothing Between Two Layouts
========================================================

PURPOSE:
--------
Move every member of an assembly toward one of two layouts:

- assembled: the member's home position (midpoint as built)
- exploded:  the home position scaled away from the origin

    target = (ax * sx, ay * sy, az * sz)       default (1.2, 1.1, 1.5)

THE STEP:
---------
Once per tick, for every member i:

    current_i <- current_i + (target_i - current_i) * smoothing

This is exponential smoothing: the remaining distance shrinks by a factor
(1 - smoothing) each tick. It never snaps and never overshoots. Flipping
the explode flag does not reset anything; members simply start chasing
the other target from wherever they are.

LIFETIME:
---------
An animator is bound to exactly one Assembly. It has no terminal state:
it keeps stepping (a no-op once converged) until cancelled. Cancelling is
final; any later step raises StaleAssemblyError and writes nothing.
"""

import logging
from typing import Sequence

import numpy as np

from .assembly import Assembly
from .config import ExplodeSettings, DEFAULT_EXPLODE

logger = logging.getLogger(__name__)


class StaleAssemblyError(RuntimeError):
    """Raised when a tick targets a cancelled animator or a superseded assembly."""
    pass


def exploded_target(position: Sequence[float], scale: Sequence[float] = DEFAULT_EXPLODE.scale) -> np.ndarray:
    """Exploded position for an assembled position (component-wise scale from origin)."""
    return np.asarray(position, dtype=float) * np.asarray(scale, dtype=float)


class ExplodeAnimator:
    """
    Tick-driven smoothing of one assembly's member positions.
    
    Parameters:
    -----------
    assembly : Assembly
        The members to move. Indices are read from this assembly only.
    settings : ExplodeSettings
        Scale factors, smoothing rate and settle tolerance
    
    Example:
    --------
    >>> animator = ExplodeAnimator(assemble(DimensionConfig()))
    >>> for _ in range(60):
    ...     animator.step(exploded=True)
    """

    def __init__(self, assembly: Assembly, settings: ExplodeSettings = DEFAULT_EXPLODE):
        self.assembly = assembly
        self.settings = settings.validate()
        self.ticks = 0
        self._cancelled = False
        self._scale = np.asarray(settings.scale, dtype=float)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop for good. No member is written after this returns."""
        if not self._cancelled:
            self._cancelled = True
            logger.debug(
                "Cancelled animator for assembly #%d after %d ticks",
                self.assembly.generation, self.ticks,
            )

    def targets(self, exploded: bool) -> np.ndarray:
        """Active target for every member, shape (n, 3)."""
        home = self.assembly.assembled_positions
        if exploded:
            return home * self._scale
        return home.copy()

    def residual(self, exploded: bool) -> float:
        """Largest distance from any member to its active target."""
        if len(self.assembly) == 0:
            return 0.0
        delta = self.targets(exploded) - self.assembly.current_positions()
        return float(np.max(np.linalg.norm(delta, axis=1)))

    def is_settled(self, exploded: bool) -> bool:
        return self.residual(exploded) < self.settings.settle_tolerance

    def step(self, exploded: bool) -> float:
        """
        Advance every member one tick toward the active layout.
        
        The flag is read once, so all members of a tick chase the same
        layout. Member i always pairs with assembled_positions[i].
        
        Parameters:
        -----------
        exploded : bool
            Which layout to chase on this tick
        
        Returns:
        --------
        float
            Largest remaining distance to target after the step
        
        Raises:
        -------
        StaleAssemblyError
            If the animator has been cancelled
        """
        if self._cancelled:
            raise StaleAssemblyError(
                f"Animator for assembly #{self.assembly.generation} was cancelled"
            )
        
        targets = self.targets(bool(exploded))
        rate = self.settings.smoothing
        worst = 0.0
        
        for i, member in enumerate(self.assembly.members):
            delta = targets[i] - member.current_position
            member.current_position += delta * rate
            worst = max(worst, float(np.linalg.norm(delta)) * (1.0 - rate))
        
        self.ticks += 1
        return worst
