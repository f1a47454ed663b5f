"""Finger counting core: geometry, classification, smoothing, frame processing."""

from .config import (
    SmoothingPolicy, CoordinateSpace,
    NUM_LANDMARKS, MAX_NUM_HANDS, HISTORY_SIZE, NO_HAND_LABEL,
)
from .math_utils import angle_3pt_deg
from .features import (
    LM,
    FINGER_JOINTS,
    TIP_INDICES,
    ExtensionVector,
    classify_fingers,
    finger_angles,
    get_handedness_label,
    mirror_handedness,
    to_point3,
)
from .smoothing import HandSmoother, most_common_recent
from .frames import (
    HAND_CONNECTIONS,
    ViewOptions,
    HandDetection,
    Segment,
    Marker,
    RenderInstructions,
    DisplayState,
    HandAnalysis,
    FrameResult,
    FrameProcessor,
    detect_safely,
    normalize_landmarks,
)

__all__ = [
    "SmoothingPolicy",
    "CoordinateSpace",
    "NUM_LANDMARKS",
    "MAX_NUM_HANDS",
    "HISTORY_SIZE",
    "NO_HAND_LABEL",
    "angle_3pt_deg",
    "LM",
    "FINGER_JOINTS",
    "TIP_INDICES",
    "ExtensionVector",
    "classify_fingers",
    "finger_angles",
    "get_handedness_label",
    "mirror_handedness",
    "to_point3",
    "HandSmoother",
    "most_common_recent",
    "HAND_CONNECTIONS",
    "ViewOptions",
    "HandDetection",
    "Segment",
    "Marker",
    "RenderInstructions",
    "DisplayState",
    "HandAnalysis",
    "FrameResult",
    "FrameProcessor",
    "detect_safely",
    "normalize_landmarks",
]
