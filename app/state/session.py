# app/state/session.py
"""
Session state management for Streamlit.

Provides typed accessors for session state to avoid
scattered st.session_state['key'] calls throughout the app.

The FrameScene lives in session state so the explode animation keeps
its member positions across Streamlit reruns.
"""

import streamlit as st
from typing import Optional

from entry_frame import DimensionConfig, FrameScene


# ============================================================================
# Scene State
# ============================================================================

def get_scene(config: DimensionConfig) -> FrameScene:
    """
    Get the session's scene, building or rebuilding it for `config`.
    
    A rebuild only happens when the dimensions changed. If the new
    dimensions are rejected the previous scene is kept and the error
    is re-raised for the caller to show.
    """
    scene: Optional[FrameScene] = st.session_state.get('scene', None)
    
    if scene is None or not scene.active:
        scene = FrameScene(config, exploded=st.session_state.get('exploded', False))
        st.session_state.scene = scene
    elif scene.config != config:
        scene.rebuild(config)
    
    return scene


def is_exploded() -> bool:
    return st.session_state.get('exploded', False)


def toggle_exploded() -> bool:
    """Flip the explode flag for this session (and its scene, if any)."""
    st.session_state.exploded = not is_exploded()
    scene = st.session_state.get('scene', None)
    if scene is not None:
        scene.set_exploded(st.session_state.exploded)
    return st.session_state.exploded

