# tests/test_schedule.py
"""
SCHEDULE TESTS: Cut List and Length Bins
========================================
"""

import pytest

from entry_frame.assembly import assemble
from entry_frame.config import DimensionConfig
from entry_frame.schedule import length_bins, member_schedule, schedule_dataframe, schedule_summary


@pytest.fixture
def assembly():
    return assemble(DimensionConfig())


def test_schedule_rows(assembly):
    rows = member_schedule(assembly)
    assert len(rows) == 24
    assert [r['index'] for r in rows] == list(range(24))
    assert rows[0]['role'] == 'column_back'
    assert rows[0]['length'] == pytest.approx(3.0)
    assert rows[19]['end_z'] == pytest.approx(-1.2)


def test_schedule_dataframe(assembly):
    df = schedule_dataframe(assembly)
    assert len(df) == 24
    assert df.index.name == 'index'
    assert df.loc[8, 'role'] == 'tie_main_long'
    assert df.loc[8, 'length'] == pytest.approx(1.8)


def test_length_bins_reference_frame(assembly):
    """Reference frame has three distinct cuts: 600 mm, 1800 mm, 3000 mm."""
    bins = length_bins(assembly)
    assert list(bins.keys()) == ['L1 (600mm)', 'L2 (1800mm)', 'L3 (3000mm)']
    
    # 4 cross ties + 4 posts + 4 canopy cross ties
    assert len(bins['L1 (600mm)']) == 12
    assert len(bins['L2 (1800mm)']) == 4
    assert len(bins['L3 (3000mm)']) == 8
    assert sorted(i for ids in bins.values() for i in ids) == list(range(24))


def test_length_bins_tolerance():
    assembly = assemble(DimensionConfig(structure_depth=0.6, canopy_height=0.603, canopy_overhang=0.62))
    assert len(length_bins(assembly, tolerance=0.005)) == 4
    assert len(length_bins(assembly, tolerance=0.001)) == 5


def test_summary(assembly):
    summary = schedule_summary(assembly)
    
    assert summary['column_back'] == {'count': 4, 'total_length': pytest.approx(12.0)}
    assert summary['canopy_tie_long']['count'] == 2
    assert summary['canopy_tie_long']['total_length'] == pytest.approx(3.6)
    assert summary['all']['count'] == 24
    
    role_total = sum(row['total_length'] for role, row in summary.items() if role != 'all')
    assert summary['all']['total_length'] == pytest.approx(role_total)
