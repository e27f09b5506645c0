# tests/test_scene.py
"""
SCENE TESTS: Rebuild, Cancellation and the Shared Explode Flag
==============================================================

The scene is where stale-loop bugs would show up: a rebuild must cancel
the old animator before the new assembly goes live, and a rejected
config must leave the running assembly untouched.
"""

import logging

import numpy as np
import pytest

from entry_frame.animator import StaleAssemblyError
from entry_frame.config import ConfigurationError, DimensionConfig, ExplodeSettings
from entry_frame.scene import FrameScene
from entry_frame.topology import column_positions


class TestBuildAndTick:

    def test_initial_build(self):
        scene = FrameScene()
        assert len(scene.members) == 24
        assert scene.exploded is False
        assert scene.active
        assert scene.is_settled()

    def test_tick_uses_shared_flag(self):
        scene = FrameScene()
        scene.set_exploded(True)
        scene.run(5)
        offsets = np.linalg.norm(scene.assembly.current_positions() - scene.assembly.assembled_positions, axis=1)
        assert np.all(offsets > 0.0)
        assert scene.animator.ticks == 5

    def test_toggle(self):
        scene = FrameScene()
        assert scene.toggle() is True
        assert scene.exploded is True
        assert scene.toggle() is False

    def test_run_until_settled(self):
        scene = FrameScene(settings=ExplodeSettings(settle_tolerance=1e-6))
        assert scene.run_until_settled() == 0
        
        scene.set_exploded(True)
        ticks = scene.run_until_settled(max_ticks=1000)
        assert 0 < ticks < 1000
        assert scene.is_settled()
        assert scene.animator.residual(True) < 1e-6

    def test_run_until_settled_respects_cap(self):
        scene = FrameScene(exploded=True)
        assert scene.run_until_settled(max_ticks=3) == 3
        assert not scene.is_settled()

    def test_initial_bad_config_raises(self):
        with pytest.raises(ConfigurationError):
            FrameScene(DimensionConfig(profile_size=0.0))


class TestRebuild:

    def test_rebuild_new_spacing(self):
        """New spacing: same member count, different endpoints."""
        scene = FrameScene()
        old = scene.assembly
        new_config = scene.config.replace(column_spacing=0.9)
        
        new = scene.rebuild(new_config)
        
        assert new is scene.assembly
        assert new is not old
        assert len(new) == len(old) == 24
        assert not np.allclose(new.assembled_positions, old.assembled_positions)
        np.testing.assert_allclose(
            [m.start[0] for m in new.members[0:8:2]],
            column_positions(new_config),
        )

    def test_old_loop_writes_nothing_after_rebuild(self):
        scene = FrameScene(exploded=True)
        scene.run(10)
        old_assembly = scene.assembly
        old_animator = scene.animator
        snapshot = old_assembly.current_positions()
        
        scene.rebuild(scene.config.replace(column_spacing=0.8))
        assert old_animator.cancelled
        
        # The scene keeps ticking, only the new members move
        scene.run(25)
        np.testing.assert_array_equal(old_assembly.current_positions(), snapshot)
        
        with pytest.raises(StaleAssemblyError):
            old_animator.step(True)
        np.testing.assert_array_equal(old_assembly.current_positions(), snapshot)

    def test_rebuild_is_logged(self, caplog):
        scene = FrameScene()
        old_generation = scene.assembly.generation
        with caplog.at_level(logging.DEBUG, logger="entry_frame"):
            scene.rebuild()

        messages = [r.getMessage() for r in caplog.records]
        assert f"Rebuilt assembly #{old_generation} -> #{scene.assembly.generation}" in messages
        assert any(m.startswith(f"Built assembly #{scene.assembly.generation}") for m in messages)

    def test_rebuild_same_config_fresh_members(self):
        scene = FrameScene()
        scene.set_exploded(True)
        scene.run(10)
        old = scene.assembly
        
        new = scene.rebuild()
        
        assert new is not old
        assert new.config == old.config
        np.testing.assert_array_equal(new.assembled_positions, old.assembled_positions)
        # Fresh members start home, not where the old ones had drifted to
        np.testing.assert_array_equal(new.current_positions(), new.assembled_positions)

    def test_explode_flag_survives_rebuild(self):
        scene = FrameScene(exploded=True)
        scene.rebuild(scene.config.replace(main_height=2.5))
        assert scene.exploded is True
        scene.tick()
        assert np.any(scene.assembly.current_positions() != scene.assembly.assembled_positions)

    def test_rejected_config_keeps_previous_assembly(self):
        scene = FrameScene(exploded=True)
        scene.run(5)
        assembly = scene.assembly
        animator = scene.animator
        snapshot = assembly.current_positions()
        
        with pytest.raises(ConfigurationError):
            scene.rebuild(scene.config.replace(structure_depth=0.0))
        
        assert scene.assembly is assembly
        assert scene.animator is animator
        assert not animator.cancelled
        np.testing.assert_array_equal(assembly.current_positions(), snapshot)
        
        # Still animating
        scene.tick()
        assert animator.ticks == 6

    def test_tick_refuses_mismatched_animator(self):
        scene = FrameScene()
        other = FrameScene()
        scene.animator = other.animator
        with pytest.raises(StaleAssemblyError):
            scene.tick()


class TestTeardown:

    def test_teardown_stops_loop(self):
        scene = FrameScene(exploded=True)
        scene.run(3)
        snapshot = scene.assembly.current_positions()
        
        scene.teardown()
        
        assert not scene.active
        assert scene.animator.cancelled
        with pytest.raises(StaleAssemblyError):
            scene.tick()
        with pytest.raises(StaleAssemblyError):
            scene.rebuild()
        np.testing.assert_array_equal(scene.assembly.current_positions(), snapshot)

    def test_teardown_idempotent(self):
        scene = FrameScene()
        scene.teardown()
        scene.teardown()
        assert not scene.active
