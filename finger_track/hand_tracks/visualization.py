"""Visualization utilities for the finger count overlay."""

import cv2
import numpy as np
from numpy.typing import NDArray

from ..hand_gestures import RenderInstructions, DisplayState, ViewOptions
from ..hand_gestures.config import COLOR_TEXT, COLOR_PANEL


FONT = cv2.FONT_HERSHEY_SIMPLEX


def _to_px(point: tuple[float, float], w: int, h: int) -> tuple[int, int]:
    return int(point[0] * w), int(point[1] * h)


def draw_render_instructions(frame: NDArray[np.uint8], render: RenderInstructions) -> None:
    """Draw bone segments and joint markers onto the (unflipped) frame."""
    h, w = frame.shape[:2]

    for seg in render.segments:
        cv2.line(frame, _to_px(seg.start, w, h), _to_px(seg.end, w, h),
                 seg.color, seg.thickness, cv2.LINE_AA)

    for marker in render.markers:
        center = _to_px(marker.center, w, h)
        if marker.opacity >= 1.0:
            cv2.circle(frame, center, marker.radius, marker.color, -1, cv2.LINE_AA)
            continue
        # Blend only the marker's bounding box.
        r = marker.radius + 1
        x0, y0 = max(center[0] - r, 0), max(center[1] - r, 0)
        x1, y1 = min(center[0] + r + 1, w), min(center[1] + r + 1, h)
        if x0 >= x1 or y0 >= y1:
            continue
        roi = frame[y0:y1, x0:x1]
        layer = roi.copy()
        cv2.circle(layer, (center[0] - x0, center[1] - y0), marker.radius,
                   marker.color, -1, cv2.LINE_AA)
        frame[y0:y1, x0:x1] = cv2.addWeighted(layer, marker.opacity, roi, 1.0 - marker.opacity, 0)


def overlay_lines(display: DisplayState, options: ViewOptions) -> list[str]:
    """Text shown in the info panel."""
    return [
        display.status_message,
        f"Fingers: {display.finger_count}",
        f"Hand: {display.hand_label}",
        f"[s] Skeleton: {'On' if options.show_skeleton else 'Off'}  "
        f"[m] Multi-hand: {'On' if options.multi_hand else 'Off'}  "
        f"[f] Mirror: {'On' if options.mirror else 'Off'}",
    ]


def draw_display_state(
    frame: NDArray[np.uint8], display: DisplayState, options: ViewOptions
) -> None:
    """Draw the smoothed count, handedness and status panel."""
    lines = overlay_lines(display, options)
    x0, y0, line_h = 12, 22, 22
    max_chars = max(len(s) for s in lines)
    box_w = min(16 + max_chars * 9, frame.shape[1] - 24)
    box_h = 12 + line_h * len(lines)

    cv2.rectangle(frame, (8, 8), (8 + box_w, 8 + box_h), COLOR_PANEL, -1)
    for i, s in enumerate(lines):
        cv2.putText(frame, s, (x0, y0 + i * line_h), FONT, 0.6, COLOR_TEXT, 2, cv2.LINE_AA)


def compose_frame(
    frame: NDArray[np.uint8],
    render: RenderInstructions,
    display: DisplayState,
    options: ViewOptions,
) -> NDArray[np.uint8]:
    """
    Overlay skeleton and text on a frame.

    Landmarks are drawn in camera space, then the frame is flipped when the
    view is mirrored so the text stays readable.
    """
    draw_render_instructions(frame, render)
    out = cv2.flip(frame, 1) if render.mirrored else frame
    draw_display_state(out, display, options)
    return out


class TrackerDisplay:
    """Manages OpenCV window and visualization."""

    def __init__(self, window_name: str = "Finger Count Tracker"):
        self.window_name = window_name
        cv2.namedWindow(window_name, cv2.WINDOW_NORMAL)

    def show(self, frame: NDArray[np.uint8]) -> int:
        """Display frame and return key press."""
        cv2.imshow(self.window_name, frame)
        return cv2.waitKey(1) & 0xFF

    def close(self) -> None:
        """Close display window."""
        cv2.destroyWindow(self.window_name)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
