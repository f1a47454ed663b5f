"""Hand skeleton overlay with smoothed finger counting.

The OpenCV / MediaPipe collaborators live in ``finger_track.hand_tracks`` and
are imported explicitly so the core stays usable without a camera stack.
"""

from .hand_gestures import (
    SmoothingPolicy,
    CoordinateSpace,
    ExtensionVector,
    classify_fingers,
    get_handedness_label,
    HandSmoother,
    ViewOptions,
    HandDetection,
    FrameProcessor,
    FrameResult,
    DisplayState,
    RenderInstructions,
    detect_safely,
)

__all__ = [
    # Core
    "SmoothingPolicy",
    "CoordinateSpace",
    "ExtensionVector",
    "classify_fingers",
    "get_handedness_label",
    "HandSmoother",
    # Frames
    "ViewOptions",
    "HandDetection",
    "FrameProcessor",
    "FrameResult",
    "DisplayState",
    "RenderInstructions",
    "detect_safely",
]
