"""Finger extension features from hand landmarks."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

import numpy as np

from .math_utils import Point3, angle_3pt_deg
from .config import (
    NUM_LANDMARKS, UNKNOWN_LABEL,
    THUMB_EXT_MIN_IP_ANGLE_DEG, FINGER_EXT_MIN_PIP_ANGLE_DEG,
)


# MediaPipe landmark indices
class LM:
    WRIST = 0
    THUMB_CMC, THUMB_MCP, THUMB_IP, THUMB_TIP = 1, 2, 3, 4
    INDEX_MCP, INDEX_PIP, INDEX_DIP, INDEX_TIP = 5, 6, 7, 8
    MIDDLE_MCP, MIDDLE_PIP, MIDDLE_DIP, MIDDLE_TIP = 9, 10, 11, 12
    RING_MCP, RING_PIP, RING_DIP, RING_TIP = 13, 14, 15, 16
    PINKY_MCP, PINKY_PIP, PINKY_DIP, PINKY_TIP = 17, 18, 19, 20


@dataclass(frozen=True)
class FingerJoint:
    """Joint triple whose middle angle decides whether a finger is straight."""
    name: str
    base: int
    joint: int
    tip: int
    min_angle_deg: float


# Non-thumb triples are MCP -> PIP -> TIP; the DIP joint is not used.
FINGER_JOINTS: tuple[FingerJoint, ...] = (
    FingerJoint("thumb", LM.THUMB_MCP, LM.THUMB_IP, LM.THUMB_TIP, THUMB_EXT_MIN_IP_ANGLE_DEG),
    FingerJoint("index", LM.INDEX_MCP, LM.INDEX_PIP, LM.INDEX_TIP, FINGER_EXT_MIN_PIP_ANGLE_DEG),
    FingerJoint("middle", LM.MIDDLE_MCP, LM.MIDDLE_PIP, LM.MIDDLE_TIP, FINGER_EXT_MIN_PIP_ANGLE_DEG),
    FingerJoint("ring", LM.RING_MCP, LM.RING_PIP, LM.RING_TIP, FINGER_EXT_MIN_PIP_ANGLE_DEG),
    FingerJoint("pinky", LM.PINKY_MCP, LM.PINKY_PIP, LM.PINKY_TIP, FINGER_EXT_MIN_PIP_ANGLE_DEG),
)

TIP_INDICES: tuple[int, ...] = tuple(f.tip for f in FINGER_JOINTS)


@dataclass(frozen=True)
class ExtensionVector:
    """Which of the five fingers are extended in a single frame."""
    thumb: bool = False
    index: bool = False
    middle: bool = False
    ring: bool = False
    pinky: bool = False

    @property
    def count(self) -> int:
        return sum([self.thumb, self.index, self.middle, self.ring, self.pinky])

    def as_list(self) -> list[bool]:
        return [self.thumb, self.index, self.middle, self.ring, self.pinky]

    @classmethod
    def none(cls) -> "ExtensionVector":
        return cls()


def to_point3(lm) -> Point3:
    """
    Coerce a landmark into an (x, y, z) tuple of floats.

    Accepts objects with x/y(/z) attributes (MediaPipe landmarks), mappings
    with "x"/"y"(/"z") keys, or 2- and 3-element sequences and 1-D numpy
    rows. A missing z is 0.

    Raises:
        TypeError / ValueError if the landmark cannot be read as a point.
    """
    if isinstance(lm, Mapping):
        x, y, z = lm["x"], lm["y"], lm.get("z")
    elif hasattr(lm, "x") and hasattr(lm, "y"):
        x, y, z = lm.x, lm.y, getattr(lm, "z", None)
    elif _is_point_row(lm):
        x, y = lm[0], lm[1]
        z = lm[2] if len(lm) == 3 else None
    else:
        raise TypeError(f"Cannot read landmark of type {type(lm).__name__}")
    return (float(x), float(y), float(z or 0.0))


def _is_point_row(lm) -> bool:
    if isinstance(lm, np.ndarray):
        return lm.ndim == 1 and len(lm) in (2, 3)
    return isinstance(lm, Sequence) and len(lm) in (2, 3)


def _finger_angle(landmarks: Sequence, finger: FingerJoint) -> float:
    return angle_3pt_deg(
        to_point3(landmarks[finger.base]),
        to_point3(landmarks[finger.joint]),
        to_point3(landmarks[finger.tip]),
    )


def finger_angles(landmarks: Sequence) -> dict[str, float | None]:
    """Joint angle per finger in degrees, or None where landmarks are unusable."""
    angles: dict[str, float | None] = {}
    for finger in FINGER_JOINTS:
        try:
            angles[finger.name] = _finger_angle(landmarks, finger)
        except (IndexError, KeyError, TypeError, ValueError):
            angles[finger.name] = None
    return angles


def classify_fingers(landmarks: Sequence) -> ExtensionVector:
    """
    Decide which fingers are extended from joint angles.

    A finger is extended when its joint angle is strictly above the finger's
    threshold (150 deg for the thumb IP joint, 160 deg for the PIP joints).
    A finger whose landmarks are missing or malformed counts as not extended;
    the other fingers are still classified.

    Args:
        landmarks: Hand landmarks, ideally 21 of them

    Returns:
        ExtensionVector for thumb, index, middle, ring, pinky
    """
    angles = finger_angles(landmarks)
    flags = {
        finger.name: angles[finger.name] is not None and angles[finger.name] > finger.min_angle_deg
        for finger in FINGER_JOINTS
    }
    return ExtensionVector(**flags)


def has_full_skeleton(landmarks) -> bool:
    """True when the landmark list has exactly the 21 expected points."""
    try:
        return len(landmarks) == NUM_LANDMARKS
    except TypeError:
        return False


def mirror_handedness(label: str) -> str:
    """Swap Left and Right; any other label is returned unchanged."""
    return {"Left": "Right", "Right": "Left"}.get(label, label)


def get_handedness_label(handedness, mirror: bool = False) -> str:
    """
    Extract a handedness label, optionally swapping left/right.

    Accepts a plain string, a MediaPipe classification list
    (``handedness.classification[0].label``), a Tasks category
    (``category_name``) or a sequence of those. Anything else is "Unknown".
    """
    lbl = _raw_label(handedness)
    if not lbl:
        return UNKNOWN_LABEL
    lbl = lbl.strip().capitalize()
    if lbl not in ("Left", "Right"):
        return UNKNOWN_LABEL
    return mirror_handedness(lbl) if mirror else lbl


def _raw_label(handedness) -> str | None:
    if handedness is None:
        return None
    if isinstance(handedness, str):
        return handedness
    if hasattr(handedness, "classification"):
        entries = handedness.classification
        return _raw_label(entries[0]) if entries else None
    if isinstance(handedness, Mapping):
        return handedness.get("label") or handedness.get("category_name")
    for attr in ("category_name", "label"):
        value = getattr(handedness, attr, None)
        if isinstance(value, str) and value:
            return value
    if isinstance(handedness, Sequence) and handedness:
        return _raw_label(handedness[0])
    return None
