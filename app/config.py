# app/config.py
"""
Application configuration and defaults.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class AppConfig:
    """Global application configuration."""
    
    # App metadata
    app_name: str = "Entry-Frame"
    app_subtitle: str = "Entrance Frame with Exploded View"
    version: str = "0.1.0"
    
    # Slider ranges (meters unless noted)
    spacing_range: Tuple[float, float] = (0.3, 2.0)
    depth_range: Tuple[float, float] = (0.3, 2.0)
    overhang_range: Tuple[float, float] = (0.2, 2.0)
    main_height_range: Tuple[float, float] = (2.0, 5.0)
    canopy_height_range: Tuple[float, float] = (0.2, 1.5)
    profile_mm_range: Tuple[int, int] = (20, 200)
    column_count_range: Tuple[int, int] = (2, 8)
    
    # Default values (reference entrance frame)
    default_spacing: float = 0.6
    default_depth: float = 0.6
    default_overhang: float = 0.6
    default_main_height: float = 3.0
    default_canopy_height: float = 0.6
    default_profile_mm: int = 60
    default_column_count: int = 4
    
    # Animation loop
    fps: int = 30
    max_frames_per_run: int = 150
    
    # Viewer
    viewer_height: int = 560


# Global config instance
CONFIG = AppConfig()
