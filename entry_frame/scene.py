# entry_frame/scene.py
"""
FRAME SCENE: Build, Rebuild and Drive the Explode Loop
======================================================

PURPOSE:
--------
The scene is what a host (UI loop, API request, test) talks to. It owns:

- the current Assembly
- the ExplodeAnimator bound to that assembly
- the single explode flag shared by all members

The host calls tick() once per frame. A viewport reads scene.members
on the same cadence. Everything runs on the host's one loop; nothing
here blocks or spawns threads.

REBUILD ORDER:
--------------
    1. assemble(new_config)      pure; may raise ConfigurationError
    2. cancel the old animator   no further writes to old members
    3. install new assembly + a fresh animator

If step 1 fails, the old assembly and its animator keep running as if
nothing happened. The explode flag survives a rebuild; the new members
start at their assembled positions and chase the active layout from there.
"""

import logging
from typing import List, Optional

from .animator import ExplodeAnimator, StaleAssemblyError
from .assembly import Assembly, assemble
from .config import DimensionConfig, ExplodeSettings, DEFAULT_DIMENSIONS, DEFAULT_EXPLODE
from .geometry import Member

logger = logging.getLogger(__name__)


class FrameScene:
    """
    Current frame assembly plus its explode animation.
    
    Parameters:
    -----------
    config : DimensionConfig
        Initial dimensions (built immediately)
    settings : ExplodeSettings
        Explode tuning shared by every animator this scene creates
    exploded : bool
        Initial state of the explode flag
    """

    def __init__(
        self,
        config: DimensionConfig = DEFAULT_DIMENSIONS,
        settings: ExplodeSettings = DEFAULT_EXPLODE,
        exploded: bool = False,
    ):
        self.settings = settings.validate()
        self.exploded = bool(exploded)
        self._torn_down = False
        self.assembly: Assembly = assemble(config)
        self.animator = ExplodeAnimator(self.assembly, self.settings)

    @property
    def config(self) -> DimensionConfig:
        return self.assembly.config

    @property
    def members(self) -> List[Member]:
        return self.assembly.members

    @property
    def active(self) -> bool:
        return not self._torn_down

    # =========================================================================
    # BUILD
    # =========================================================================

    def rebuild(self, config: Optional[DimensionConfig] = None) -> Assembly:
        """
        Replace the assembly with a fresh build.
        
        Calling with the current config yields a structurally identical,
        newly allocated assembly.
        
        Raises:
        -------
        ConfigurationError
            The new config is invalid; the current assembly is kept
        StaleAssemblyError
            The scene has been torn down
        """
        if self._torn_down:
            raise StaleAssemblyError("Cannot rebuild a scene that has been torn down")
        if config is None:
            config = self.config
        
        new_assembly = assemble(config)
        
        old = self.assembly
        self.animator.cancel()
        self.assembly = new_assembly
        self.animator = ExplodeAnimator(new_assembly, self.settings)
        
        logger.debug("Rebuilt assembly #%d -> #%d", old.generation, new_assembly.generation)
        return new_assembly

    # =========================================================================
    # EXPLODE FLAG
    # =========================================================================

    def set_exploded(self, exploded: bool) -> None:
        self.exploded = bool(exploded)

    def toggle(self) -> bool:
        """Flip the explode flag and return the new value."""
        self.exploded = not self.exploded
        return self.exploded

    # =========================================================================
    # TICKING
    # =========================================================================

    def tick(self) -> float:
        """
        One animation frame: advance every member toward the active layout.
        
        Returns the largest remaining distance to target.
        """
        if self._torn_down:
            raise StaleAssemblyError("Scene has been torn down")
        if self.animator.assembly is not self.assembly:
            raise StaleAssemblyError(
                f"Animator bound to assembly #{self.animator.assembly.generation}, "
                f"current is #{self.assembly.generation}"
            )
        return self.animator.step(self.exploded)

    def run(self, n_ticks: int) -> float:
        """Run a fixed number of ticks; return the final residual."""
        residual = self.animator.residual(self.exploded)
        for _ in range(n_ticks):
            residual = self.tick()
        return residual

    def run_until_settled(self, max_ticks: int = 1000) -> int:
        """
        Tick until every member is within settle_tolerance of its target.
        
        Returns the number of ticks run (0 if already settled). Stops at
        max_ticks even if not settled.
        """
        ticks = 0
        while ticks < max_ticks and not self.animator.is_settled(self.exploded):
            self.tick()
            ticks += 1
        if ticks:
            logger.debug(
                "Settled %s after %d ticks (residual %.2e)",
                'exploded' if self.exploded else 'assembled',
                ticks, self.animator.residual(self.exploded),
            )
        return ticks

    def is_settled(self) -> bool:
        return self.animator.is_settled(self.exploded)

    def teardown(self) -> None:
        """Stop the explode loop permanently."""
        if not self._torn_down:
            self.animator.cancel()
            self._torn_down = True
            logger.debug("Scene torn down (assembly #%d)", self.assembly.generation)
