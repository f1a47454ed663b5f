"""Camera-side collaborators: MediaPipe detection and OpenCV drawing."""

from .hand_tracker import HandTracker
from .visualization import (
    TrackerDisplay,
    compose_frame,
    draw_render_instructions,
    draw_display_state,
)

__all__ = [
    "HandTracker",
    "TrackerDisplay",
    "compose_frame",
    "draw_render_instructions",
    "draw_display_state",
]
