# tests/test_geometry.py
"""
GEOMETRY TESTS: Oriented Box Members
====================================

A member's box long axis (+Y) must line up with its segment direction,
its center must be the segment midpoint, and zero-length segments must
be rejected before a member exists.
"""

import numpy as np
import pytest

from entry_frame.config import ConfigurationError
from entry_frame.geometry import (
    BOX_TRIANGLES,
    LONG_AXIS,
    box_vertices,
    build_member,
    frame_mesh,
    quaternion_to_matrix,
    rotation_between,
)
from entry_frame.topology import Segment


def _assert_rotation(R):
    np.testing.assert_allclose(R @ R.T, np.eye(3), atol=1e-12)
    assert np.linalg.det(R) == pytest.approx(1.0)


class TestRotationBetween:

    @pytest.mark.parametrize("target", [
        (1.0, 0.0, 0.0),
        (0.0, 0.0, -1.0),
        (0.0, 1.0, 0.0),
        (1.0, 1.0, 1.0),
        (-0.3, 0.2, 0.9),
    ])
    def test_maps_long_axis_to_target(self, target):
        q = rotation_between(LONG_AXIS, target)
        assert np.linalg.norm(q) == pytest.approx(1.0)
        
        R = quaternion_to_matrix(q)
        _assert_rotation(R)
        
        expected = np.asarray(target) / np.linalg.norm(target)
        np.testing.assert_allclose(R @ LONG_AXIS, expected, atol=1e-12)

    def test_identity_for_same_direction(self):
        q = rotation_between(LONG_AXIS, LONG_AXIS)
        np.testing.assert_allclose(q, [1.0, 0.0, 0.0, 0.0], atol=1e-12)

    @pytest.mark.parametrize("a", [
        (0.0, 1.0, 0.0),
        (1.0, 0.0, 0.0),
        (0.0, 0.0, 1.0),
        (0.6, 0.0, 0.8),
    ])
    def test_anti_parallel_is_half_turn(self, a):
        a = np.asarray(a)
        q = rotation_between(a, -a)
        R = quaternion_to_matrix(q)
        _assert_rotation(R)
        np.testing.assert_allclose(R @ a, -a, atol=1e-12)
        # Half turn: w == 0 and the axis is perpendicular to a
        assert q[0] == pytest.approx(0.0, abs=1e-12)
        assert np.dot(q[1:], a) == pytest.approx(0.0, abs=1e-12)

    def test_zero_vector_rejected(self):
        with pytest.raises(ValueError):
            rotation_between((0.0, 0.0, 0.0), (1.0, 0.0, 0.0))


class TestBuildMember:

    def test_vertical_member(self):
        m = build_member(Segment((0.3, 0.0, 0.0), (0.3, 3.0, 0.0), 'column_back'), 0.06, index=2)
        
        assert m.index == 2
        assert m.role == 'column_back'
        assert m.length == pytest.approx(3.0)
        assert m.cross_section == pytest.approx(0.06)
        np.testing.assert_allclose(m.assembled_position, [0.3, 1.5, 0.0])
        np.testing.assert_allclose(m.orientation, [1.0, 0.0, 0.0, 0.0], atol=1e-12)

    def test_horizontal_member_orientation(self):
        m = build_member(Segment((-0.9, 3.0, 0.0), (0.9, 3.0, 0.0)), 0.06)
        np.testing.assert_allclose(m.rotation_matrix @ LONG_AXIS, [1.0, 0.0, 0.0], atol=1e-12)
        np.testing.assert_allclose(m.direction, [1.0, 0.0, 0.0])
        assert m.length == pytest.approx(1.8)

    def test_downward_member_orientation(self):
        """A segment pointing -Y needs the anti-parallel branch."""
        m = build_member(Segment((0.0, 3.0, 0.0), (0.0, 0.0, 0.0)), 0.06)
        np.testing.assert_allclose(m.rotation_matrix @ LONG_AXIS, [0.0, -1.0, 0.0], atol=1e-12)

    def test_current_starts_at_assembled(self):
        m = build_member(Segment((0.0, 0.0, 0.0), (0.0, 0.0, -0.6)), 0.06)
        np.testing.assert_array_equal(m.current_position, m.assembled_position)
        assert m.current_position is not m.assembled_position
        np.testing.assert_allclose(m.offset, 0.0)

    def test_assembled_position_read_only(self):
        m = build_member(Segment((0.0, 0.0, 0.0), (0.0, 1.0, 0.0)), 0.06)
        with pytest.raises(ValueError):
            m.assembled_position[0] = 5.0

    def test_zero_length_rejected(self):
        with pytest.raises(ConfigurationError, match="zero length"):
            build_member(Segment((1.0, 2.0, 3.0), (1.0, 2.0, 3.0), 'tie_main_long'), 0.06, index=7)

    def test_overflowing_length_rejected(self):
        # Both coordinates are finite but the distance between them is not
        seg = Segment((-1e308, 0.0, 0.0), (1e308, 0.0, 0.0), 'tie_main_long')
        with pytest.raises(ConfigurationError, match="non-finite length"):
            build_member(seg, 0.06, index=3)

    @pytest.mark.parametrize("cs", [0.0, -0.06])
    def test_non_positive_cross_section_rejected(self, cs):
        with pytest.raises(ConfigurationError):
            build_member(Segment((0.0, 0.0, 0.0), (0.0, 1.0, 0.0)), cs)


class TestBoxVertices:

    def test_vertical_box_extents(self):
        m = build_member(Segment((0.0, 0.0, 0.0), (0.0, 3.0, 0.0)), 0.06)
        v = box_vertices(m)
        
        assert v.shape == (8, 3)
        np.testing.assert_allclose(v.min(axis=0), [-0.03, 0.0, -0.03], atol=1e-12)
        np.testing.assert_allclose(v.max(axis=0), [0.03, 3.0, 0.03], atol=1e-12)

    def test_box_along_depth(self):
        m = build_member(Segment((0.0, 3.0, 0.0), (0.0, 3.0, -0.6)), 0.06)
        v = box_vertices(m)
        np.testing.assert_allclose(v.min(axis=0), [-0.03, 2.97, -0.6], atol=1e-12)
        np.testing.assert_allclose(v.max(axis=0), [0.03, 3.03, 0.0], atol=1e-12)

    def test_follows_current_position(self):
        m = build_member(Segment((0.0, 0.0, 0.0), (0.0, 2.0, 0.0)), 0.1)
        before = box_vertices(m)
        m.current_position += np.array([1.0, 0.5, -2.0])
        after = box_vertices(m)
        np.testing.assert_allclose(after - before, np.tile([1.0, 0.5, -2.0], (8, 1)))

    def test_frame_mesh_indices(self):
        members = [
            build_member(Segment((0.0, 0.0, 0.0), (0.0, 1.0, 0.0)), 0.05, index=0),
            build_member(Segment((0.0, 1.0, 0.0), (1.0, 1.0, 0.0)), 0.05, index=1),
        ]
        verts, tris = frame_mesh(members)
        
        assert verts.shape == (16, 3)
        assert tris.shape == (24, 3)
        np.testing.assert_array_equal(tris[:12], BOX_TRIANGLES)
        np.testing.assert_array_equal(tris[12:], BOX_TRIANGLES + 8)

    def test_frame_mesh_empty(self):
        verts, tris = frame_mesh([])
        assert verts.shape == (0, 3)
        assert tris.shape == (0, 3)
