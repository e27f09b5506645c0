# app/main.py
"""
Entry-Frame Viewer - Live Exploded View

Dimension changes rebuild the frame; the explode button animates the
members between the assembled and exploded layouts.

Run with:
    streamlit run app/main.py
"""

import streamlit as st
import sys
import time
from pathlib import Path

# Add app directory to path
sys.path.insert(0, str(Path(__file__).parent))
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import CONFIG
from components import render_frame_model, render_schedule_panel, render_dimension_inputs
from state import get_scene, is_exploded, toggle_exploded
from entry_frame import ConfigurationError
from entry_frame.schedule import length_bins, schedule_dataframe, schedule_summary

# Page configuration - must be first Streamlit command
st.set_page_config(
    page_title=CONFIG.app_name,
    page_icon="🏗️",
    layout="wide",
    initial_sidebar_state="expanded",
)


# =============================================================================
# SIDEBAR - Dimension Controls
# =============================================================================

with st.sidebar:
    st.title("🏗️ Entry-Frame")
    st.caption(CONFIG.app_subtitle)
    
    st.divider()
    
    config = render_dimension_inputs()
    
    st.divider()
    
    style = st.radio("Draw as", options=['boxes', 'lines'], horizontal=True, key="style")
    color_by = st.radio("Color by", options=['none', 'role'], horizontal=True, key="color_by")
    
    with st.expander("ℹ️ Help", expanded=False):
        st.markdown("""
        **Frame:**
        - Two rows of columns (back and front) on each column line
        - Ties along the span and across the depth at main height
        - Canopy posts on the front row, canopy projects forward
        
        **Exploded view:**
        - Members move apart from the origin, most in depth, least in width
        - Toggling mid-way reverses smoothly from the current position
        """)


# =============================================================================
# BUILD
# =============================================================================

try:
    scene = get_scene(config)
except ConfigurationError as e:
    st.error(f"Invalid dimensions: {e}")
    st.stop()

scene.set_exploded(is_exploded())


# =============================================================================
# MAIN AREA - 3D Model + Schedule
# =============================================================================

st.title("Interactive Frame Model")

col_3d, col_info = st.columns([2, 1])

with col_3d:
    label = "Assemble" if is_exploded() else "Exploded view"
    if st.button(label, type="primary", use_container_width=True):
        toggle_exploded()
        st.rerun()
    
    viewport = st.empty()
    
    # Host frame loop: one scene tick per frame until settled
    frames = 0
    while frames < CONFIG.max_frames_per_run and not scene.is_settled():
        scene.tick()
        viewport.plotly_chart(
            render_frame_model(scene.members, height=CONFIG.viewer_height, style=style, color_by=color_by),
            use_container_width=True,
        )
        frames += 1
        time.sleep(1.0 / CONFIG.fps)
    
    if frames == 0:
        viewport.plotly_chart(
            render_frame_model(scene.members, height=CONFIG.viewer_height, style=style, color_by=color_by),
            use_container_width=True,
        )
    
    st.caption("(Conceptual 3D visualization)")

with col_info:
    render_schedule_panel(schedule_summary(scene.assembly), length_bins(scene.assembly))

with st.expander("Member schedule", expanded=False):
    st.dataframe(schedule_dataframe(scene.assembly), use_container_width=True)

st.warning(
    "Conceptual demonstration only. Not for structural design, calculation or fabrication.",
    icon="⚠️",
)
