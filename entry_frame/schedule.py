# entry_frame/schedule.py
"""
MEMBER SCHEDULE: Cut List for the Frame
=======================================

PURPOSE:
--------
List every member with its role and cut length, and group members of
equal length into bins. Fewer bins = fewer distinct cuts in the shop.

Lengths are centerline lengths in the config's unit; labels assume meters
and print millimetres.
"""

from typing import Any, Dict, List

import pandas as pd

from .assembly import Assembly
from .topology import ROLES


def member_schedule(assembly: Assembly) -> List[Dict[str, Any]]:
    """One row per member, in member index order."""
    rows = []
    for member in assembly.members:
        rows.append({
            'index': member.index,
            'role': member.role,
            'length': member.length,
            'profile': member.cross_section,
            'start_x': float(member.start[0]),
            'start_y': float(member.start[1]),
            'start_z': float(member.start[2]),
            'end_x': float(member.end[0]),
            'end_y': float(member.end[1]),
            'end_z': float(member.end[2]),
        })
    return rows


def schedule_dataframe(assembly: Assembly) -> pd.DataFrame:
    """member_schedule() as a DataFrame indexed by member index."""
    return pd.DataFrame(member_schedule(assembly)).set_index('index')


def length_bins(assembly: Assembly, tolerance: float = 0.005) -> Dict[str, List[int]]:
    """
    Group members into length bins for fabrication.
    
    Members within `tolerance` of a bin's reference length join that bin.
    Bins are created shortest first.
    
    Returns:
    --------
    Dict mapping bin label, e.g. "L1 (600mm)", to member indices
    """
    lengths = sorted(((m.index, m.length) for m in assembly.members), key=lambda x: x[1])
    
    bins = []  # (ref_length, [indices])
    for index, length in lengths:
        for ref_length, indices in bins:
            if abs(length - ref_length) <= tolerance:
                indices.append(index)
                break
        else:
            bins.append((length, [index]))
    
    return {
        f"L{i + 1} ({ref_length*1000:.0f}mm)": sorted(indices)
        for i, (ref_length, indices) in enumerate(bins)
    }


def schedule_summary(assembly: Assembly) -> Dict[str, Dict[str, float]]:
    """
    Count and total length per role, plus an 'all' row.
    
    Roles appear in emission order; roles with no members are left out.
    """
    summary = {}
    for role in ROLES:
        lengths = [m.length for m in assembly.members if m.role == role]
        if lengths:
            summary[role] = {'count': len(lengths), 'total_length': sum(lengths)}
    summary['all'] = {
        'count': len(assembly.members),
        'total_length': sum(m.length for m in assembly.members),
    }
    return summary
