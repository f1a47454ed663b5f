"""Tests for overlay drawing."""

import importlib.util
import unittest

import numpy as np

from finger_track.hand_gestures import (
    DisplayState, FrameProcessor, HandDetection, RenderInstructions, ViewOptions,
)
from finger_track.hand_gestures.frames import Marker, Segment
from finger_track.hand_gestures.test_features import make_hand

_HAS_CAMERA_STACK = all(
    importlib.util.find_spec(name) is not None for name in ("cv2", "mediapipe")
)


@unittest.skipUnless(_HAS_CAMERA_STACK, "OpenCV / MediaPipe not installed")
class TestVisualization(unittest.TestCase):

    def setUp(self):
        from finger_track.hand_tracks import visualization
        self.vis = visualization
        self.frame = np.zeros((100, 200, 3), dtype=np.uint8)

    def test_opaque_marker_drawn_at_scaled_position(self):
        render = RenderInstructions(markers=[Marker((0.5, 0.5), 4, (0, 255, 0), 1.0)])
        self.vis.draw_render_instructions(self.frame, render)
        self.assertGreater(int(self.frame[50, 100, 1]), 200)
        self.assertEqual(int(self.frame[50, 100, 0]), 0)
        self.assertEqual(tuple(self.frame[5, 5]), (0, 0, 0))

    def test_translucent_marker_blends(self):
        render = RenderInstructions(markers=[Marker((0.5, 0.5), 4, (200, 200, 200), 0.5)])
        self.vis.draw_render_instructions(self.frame, render)
        self.assertTrue(90 <= self.frame[50, 100, 0] <= 110)

    def test_marker_off_frame_is_ignored(self):
        render = RenderInstructions(markers=[Marker((5.0, 5.0), 4, (255, 255, 255), 0.3)])
        self.vis.draw_render_instructions(self.frame, render)
        self.assertEqual(int(self.frame.sum()), 0)

    def test_segment_drawn(self):
        render = RenderInstructions(segments=[Segment((0.0, 0.5), (1.0, 0.5), (255, 0, 0), 3)])
        self.vis.draw_render_instructions(self.frame, render)
        self.assertGreater(int(self.frame[50, 100, 0]), 200)

    def test_overlay_lines(self):
        lines = self.vis.overlay_lines(DisplayState(3, "Left", "Detected 1 hand(s)"), ViewOptions())
        self.assertEqual(lines[:3], ["Detected 1 hand(s)", "Fingers: 3", "Hand: Left"])
        self.assertIn("Skeleton: On", lines[3])
        self.assertIn("Mirror: Off", lines[3])

    def test_compose_mirrored_frame(self):
        frame = np.zeros((360, 640, 3), dtype=np.uint8)
        proc = FrameProcessor(options=ViewOptions(mirror=True))
        result = proc.process_frame([HandDetection(make_hand(), "Left")], (640, 360))
        out = self.vis.compose_frame(frame, result.render, result.display, proc.options)
        self.assertEqual(out.shape, frame.shape)
        self.assertGreater(int(out.sum()), 0)


if __name__ == "__main__":
    unittest.main()
