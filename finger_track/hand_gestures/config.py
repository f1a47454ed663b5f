"""Configuration constants for finger counting and overlay rendering."""

from enum import Enum


class SmoothingPolicy(Enum):
    MEDIAN_BLEND = "median"
    MODE = "mode"


class CoordinateSpace(Enum):
    AUTO = "AUTO"
    NORMALIZED = "NORMALIZED"
    PIXELS = "PIXELS"


# =============================================================================
# HAND MODEL
# =============================================================================
NUM_LANDMARKS = 21
MAX_NUM_HANDS = 2
UNKNOWN_LABEL = "Unknown"
NO_HAND_LABEL = "Unknown"


# =============================================================================
# FINGER EXTENSION THRESHOLDS
# =============================================================================
THUMB_EXT_MIN_IP_ANGLE_DEG = 150.0
FINGER_EXT_MIN_PIP_ANGLE_DEG = 160.0


# =============================================================================
# TEMPORAL SMOOTHING
# =============================================================================
HISTORY_SIZE = 8
BLEND_PREV_WEIGHT = 0.6
# Blend against the unrounded previous value instead of the displayed count.
BLEND_CARRY_FRACTION = False
SMOOTHING_POLICY = SmoothingPolicy.MEDIAN_BLEND


# =============================================================================
# COORDINATES
# =============================================================================
# Any x/y component above this is taken to be in pixels.
PIXEL_SPACE_THRESHOLD = 1.5


# =============================================================================
# DETECTOR / CAMERA
# =============================================================================
MIN_DETECTION_CONFIDENCE = 0.7
MIN_TRACKING_CONFIDENCE = 0.6
MODEL_COMPLEXITY = 1
CAPTURE_WIDTH = 1280
CAPTURE_HEIGHT = 720
MAX_READ_FAILURES = 30
READ_RETRY_DELAY_S = 0.03


# =============================================================================
# OVERLAY STYLE (BGR)
# =============================================================================
COLOR_ACCENT = (168, 224, 0)
COLOR_NEUTRAL = (255, 255, 255)
COLOR_TEXT = (255, 255, 255)
COLOR_PANEL = (0, 0, 0)

SKELETON_LINE_THICKNESS = 3
SKELETON_JOINT_RADIUS = 3
SKELETON_TIP_RADIUS = 6
TIP_ONLY_RADIUS = 7

ACCENT_OPACITY = 0.95
SKELETON_IDLE_OPACITY = 0.12
TIP_ONLY_IDLE_OPACITY = 0.08
