# app/components/metrics_panel.py
"""
Schedule display panel component.
"""

import streamlit as st
from typing import Dict


def render_schedule_panel(summary: Dict[str, Dict[str, float]], bins: Dict[str, list]) -> None:
    """
    Render member counts, total length and length bins.
    
    Parameters:
    -----------
    summary : Dict
        schedule_summary() output
    bins : Dict
        length_bins() output
    """
    total = summary.get('all', {})
    
    st.subheader("Structure")
    cols = st.columns(3)
    with cols[0]:
        st.metric("Members", int(total.get('count', 0)))
    with cols[1]:
        st.metric("Total Length", f"{total.get('total_length', 0):.2f} m")
    with cols[2]:
        st.metric("Length Bins", len(bins))
    
    st.subheader("By Role")
    for role, row in summary.items():
        if role == 'all':
            continue
        st.caption(f"{role}: {int(row['count'])} × ({row['total_length']:.2f} m total)")
    
    st.subheader("Cuts")
    for label, indices in bins.items():
        st.caption(f"{label}: {len(indices)} pcs")
