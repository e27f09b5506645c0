# app/state - Session state management
from .session import (
    get_scene,
    is_exploded,
    toggle_exploded,
)

__all__ = [
    'get_scene',
    'is_exploded',
    'toggle_exploded',
]
