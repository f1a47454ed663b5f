"""Per-frame orchestration: hand selection, classification, smoothing, overlay."""

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from .math_utils import Point2, Point3
from .features import (
    ExtensionVector, TIP_INDICES,
    classify_fingers, get_handedness_label, has_full_skeleton, to_point3,
)
from .smoothing import HandSmoother
from .config import (
    CoordinateSpace, PIXEL_SPACE_THRESHOLD, NO_HAND_LABEL,
    COLOR_ACCENT, COLOR_NEUTRAL,
    SKELETON_LINE_THICKNESS, SKELETON_JOINT_RADIUS, SKELETON_TIP_RADIUS, TIP_ONLY_RADIUS,
    ACCENT_OPACITY, SKELETON_IDLE_OPACITY, TIP_ONLY_IDLE_OPACITY,
)


# Bone connectors per finger, wrist first.
HAND_CONNECTIONS: tuple[tuple[int, int], ...] = (
    (0, 1), (1, 2), (2, 3), (3, 4),
    (0, 5), (5, 6), (6, 7), (7, 8),
    (0, 9), (9, 10), (10, 11), (11, 12),
    (0, 13), (13, 14), (14, 15), (15, 16),
    (0, 17), (17, 18), (18, 19), (19, 20),
)

STATUS_NO_HANDS = "No hands detected"


def _timestamp() -> str:
    return time.strftime('%H:%M:%S')


def status_for(num_hands: int) -> str:
    if num_hands <= 0:
        return STATUS_NO_HANDS
    return f"Detected {num_hands} hand(s)"


# =============================================================================
# INPUT / OUTPUT TYPES
# =============================================================================

@dataclass
class ViewOptions:
    """User-togglable presentation flags, read once per frame."""
    show_skeleton: bool = True
    multi_hand: bool = False
    mirror: bool = False

    @property
    def max_hands(self) -> int:
        return 2 if self.multi_hand else 1

    def toggle_skeleton(self) -> bool:
        self.show_skeleton = not self.show_skeleton
        return self.show_skeleton

    def toggle_multi_hand(self) -> bool:
        self.multi_hand = not self.multi_hand
        return self.multi_hand

    def toggle_mirror(self) -> bool:
        self.mirror = not self.mirror
        return self.mirror


@dataclass
class HandDetection:
    """One hand as reported by the external detector."""
    landmarks: Sequence
    handedness: object = None
    coordinate_space: CoordinateSpace = CoordinateSpace.AUTO


@dataclass(frozen=True)
class Segment:
    start: Point2
    end: Point2
    color: tuple[int, int, int]
    thickness: int


@dataclass(frozen=True)
class Marker:
    center: Point2
    radius: int
    color: tuple[int, int, int]
    opacity: float


@dataclass
class RenderInstructions:
    """Overlay primitives in normalized [0, 1] frame coordinates."""
    segments: list[Segment] = field(default_factory=list)
    markers: list[Marker] = field(default_factory=list)
    mirrored: bool = False


@dataclass
class DisplayState:
    finger_count: int = 0
    hand_label: str = NO_HAND_LABEL
    status_message: str = STATUS_NO_HANDS


@dataclass
class HandAnalysis:
    """Classification result for a single processed hand."""
    label: str
    landmarks: list[Point3]
    extension: ExtensionVector

    @property
    def count(self) -> int:
        return self.extension.count


@dataclass
class FrameResult:
    hands: list[HandAnalysis]
    render: RenderInstructions
    display: DisplayState


# =============================================================================
# COORDINATES
# =============================================================================

def looks_like_pixels(points: Sequence[Point3]) -> bool:
    """Heuristic: any x/y component above the threshold means pixel space."""
    return any(p[0] > PIXEL_SPACE_THRESHOLD or p[1] > PIXEL_SPACE_THRESHOLD for p in points)


def normalize_landmarks(
    points: Sequence[Point3],
    frame_size: tuple[int, int],
    space: CoordinateSpace = CoordinateSpace.AUTO,
) -> list[Point3]:
    """
    Bring landmarks into normalized [0, 1] space.

    Args:
        points: Landmarks as (x, y, z)
        frame_size: (width, height) of the frame the landmarks refer to
        space: Declared convention; AUTO falls back to the pixel heuristic

    Returns:
        Landmarks with x divided by width and y by height when they were in
        pixels, otherwise unchanged. z is never rescaled.
    """
    if space is CoordinateSpace.NORMALIZED:
        return list(points)
    if space is CoordinateSpace.AUTO and not looks_like_pixels(points):
        return list(points)

    w, h = frame_size
    if w <= 0 or h <= 0:
        raise ValueError(f"Frame size must be positive, got {frame_size}")
    return [(x / w, y / h, z) for x, y, z in points]


# =============================================================================
# RENDERING
# =============================================================================

def build_hand_overlay(
    landmarks: Sequence[Point3], extension: ExtensionVector, show_skeleton: bool
) -> tuple[list[Segment], list[Marker]]:
    """
    Overlay primitives for one hand.

    Skeleton mode draws every bone plus a marker per joint; fingertips are
    accented when extended and faded otherwise. Tip-only mode draws just the
    five fingertip markers.
    """
    extended = extension.as_list()
    segments: list[Segment] = []
    markers: list[Marker] = []

    if show_skeleton:
        for a, b in HAND_CONNECTIONS:
            segments.append(Segment(
                start=landmarks[a][:2], end=landmarks[b][:2],
                color=COLOR_ACCENT, thickness=SKELETON_LINE_THICKNESS,
            ))
        for i, p in enumerate(landmarks):
            if i in TIP_INDICES:
                on = extended[TIP_INDICES.index(i)]
                markers.append(Marker(
                    center=p[:2], radius=SKELETON_TIP_RADIUS,
                    color=COLOR_ACCENT if on else COLOR_NEUTRAL,
                    opacity=ACCENT_OPACITY if on else SKELETON_IDLE_OPACITY,
                ))
            else:
                markers.append(Marker(
                    center=p[:2], radius=SKELETON_JOINT_RADIUS,
                    color=COLOR_NEUTRAL, opacity=SKELETON_IDLE_OPACITY,
                ))
        return segments, markers

    for finger_idx, tip in enumerate(TIP_INDICES):
        on = extended[finger_idx]
        markers.append(Marker(
            center=landmarks[tip][:2], radius=TIP_ONLY_RADIUS,
            color=COLOR_ACCENT if on else COLOR_NEUTRAL,
            opacity=ACCENT_OPACITY if on else TIP_ONLY_IDLE_OPACITY,
        ))
    return segments, markers


# =============================================================================
# ORCHESTRATOR
# =============================================================================

def detect_safely(detect: Callable, frame) -> list[HandDetection]:
    """
    Run the external detector, treating any failure as zero hands.

    The frame loop keeps going on the next frame either way.
    """
    try:
        return list(detect(frame) or [])
    except Exception as e:
        print(f"[{_timestamp()}] Detector error: {e!r}")
        return []


class FrameProcessor:
    """
    Turns one frame of detector output into overlay + smoothed display state.

    Owns a single HandSmoother; use one FrameProcessor per video stream.
    Only the first selected hand feeds the smoother.
    """

    def __init__(self, smoother: HandSmoother | None = None, options: ViewOptions | None = None):
        self.smoother = smoother if smoother is not None else HandSmoother()
        self.options = options if options is not None else ViewOptions()
        self._display = DisplayState()
        self._had_hands = False

    @property
    def display(self) -> DisplayState:
        return self._display

    def _analyze(
        self, detection: HandDetection, frame_size: tuple[int, int], mirror: bool
    ) -> HandAnalysis | None:
        if not has_full_skeleton(detection.landmarks):
            return None
        try:
            points = [to_point3(lm) for lm in detection.landmarks]
            points = normalize_landmarks(points, frame_size, detection.coordinate_space)
        except (KeyError, TypeError, ValueError):
            return None
        label = get_handedness_label(detection.handedness, mirror=mirror)
        return HandAnalysis(label=label, landmarks=points, extension=classify_fingers(points))

    def _reset(self) -> FrameResult:
        if self._had_hands:
            print(f"[{_timestamp()}] Hand lost")
        self._had_hands = False
        self.smoother.reset()
        count, label = self.smoother.current_display()
        self._display = DisplayState(count, label, STATUS_NO_HANDS)
        return FrameResult(
            hands=[],
            render=RenderInstructions(mirrored=self.options.mirror),
            display=self._display,
        )

    def process_frame(
        self,
        detections: Sequence[HandDetection] | None,
        frame_size: tuple[int, int],
        options: ViewOptions | None = None,
    ) -> FrameResult:
        """
        Process one frame of detector output.

        Args:
            detections: Hands in detector order (None or empty for no hands)
            frame_size: (width, height) used to normalize pixel landmarks
            options: Overrides the processor's own ViewOptions for this frame

        Returns:
            FrameResult with per-hand analysis, render instructions and the
            smoothed display state
        """
        if options is not None:
            self.options = options
        opts = self.options

        detections = list(detections or [])
        if not detections:
            return self._reset()

        if not self._had_hands:
            print(f"[{_timestamp()}] Hand acquired")
        self._had_hands = True

        render = RenderInstructions(mirrored=opts.mirror)
        analyses: list[HandAnalysis] = []

        for i, detection in enumerate(detections[:opts.max_hands]):
            analysis = self._analyze(detection, frame_size, opts.mirror)
            if analysis is None:
                continue

            if i == 0:
                self.smoother.observe(analysis.count, analysis.label)

            segments, markers = build_hand_overlay(
                analysis.landmarks, analysis.extension, opts.show_skeleton
            )
            render.segments.extend(segments)
            render.markers.extend(markers)
            analyses.append(analysis)

        count, label = self.smoother.current_display()
        self._display = DisplayState(count, label, status_for(len(detections)))
        return FrameResult(hands=analyses, render=render, display=self._display)

    def reset(self) -> None:
        self._reset()
