# app/components/parameter_inputs.py
"""
Parameter input components for the frame dimensions.
"""

import streamlit as st
import sys
from pathlib import Path

# Add app directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import CONFIG
from entry_frame import DimensionConfig


def render_dimension_inputs() -> DimensionConfig:
    """
    Render dimension sliders.
    
    Returns the DimensionConfig for the current slider values.
    """
    st.subheader("Plan")
    
    col1, col2 = st.columns(2)
    with col1:
        spacing = st.slider(
            "Spacing (m)",
            min_value=CONFIG.spacing_range[0],
            max_value=CONFIG.spacing_range[1],
            value=CONFIG.default_spacing,
            step=0.05,
            key="column_spacing",
            help="Distance between neighbouring columns"
        )
    with col2:
        column_count = st.slider(
            "Columns",
            min_value=CONFIG.column_count_range[0],
            max_value=CONFIG.column_count_range[1],
            value=CONFIG.default_column_count,
            key="column_count",
            help="Column lines along the span"
        )
    
    col1, col2 = st.columns(2)
    with col1:
        depth = st.slider(
            "Depth (m)",
            min_value=CONFIG.depth_range[0],
            max_value=CONFIG.depth_range[1],
            value=CONFIG.default_depth,
            step=0.05,
            key="structure_depth",
            help="Back row to front row"
        )
    with col2:
        overhang = st.slider(
            "Overhang (m)",
            min_value=CONFIG.overhang_range[0],
            max_value=CONFIG.overhang_range[1],
            value=CONFIG.default_overhang,
            step=0.05,
            key="canopy_overhang",
            help="Canopy projection past the front row"
        )
    
    st.subheader("Elevation")
    
    col1, col2 = st.columns(2)
    with col1:
        main_height = st.slider(
            "Main H (m)",
            min_value=CONFIG.main_height_range[0],
            max_value=CONFIG.main_height_range[1],
            value=CONFIG.default_main_height,
            step=0.1,
            key="main_height",
        )
    with col2:
        canopy_height = st.slider(
            "Canopy H (m)",
            min_value=CONFIG.canopy_height_range[0],
            max_value=CONFIG.canopy_height_range[1],
            value=CONFIG.default_canopy_height,
            step=0.05,
            key="canopy_height",
        )
    
    st.subheader("Section")
    
    profile_mm = st.slider(
        "Square profile (mm)",
        min_value=CONFIG.profile_mm_range[0],
        max_value=CONFIG.profile_mm_range[1],
        value=CONFIG.default_profile_mm,
        step=5,
        key="profile_mm",
    )
    
    return DimensionConfig(
        column_spacing=spacing,
        structure_depth=depth,
        canopy_overhang=overhang,
        main_height=main_height,
        canopy_height=canopy_height,
        profile_size=profile_mm / 1000,  # mm to m
        column_count=column_count,
    )
