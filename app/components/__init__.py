# app/components - Reusable UI components
from .model_viewer import render_frame_model
from .metrics_panel import render_schedule_panel
from .parameter_inputs import render_dimension_inputs

__all__ = [
    'render_frame_model',
    'render_schedule_panel',
    'render_dimension_inputs',
]
