"""Tests for the temporal smoother."""

import unittest

from finger_track.hand_gestures.config import SmoothingPolicy, NO_HAND_LABEL
from finger_track.hand_gestures.smoothing import HandSmoother, most_common_recent


class TestMostCommonRecent(unittest.TestCase):

    def test_clear_winner(self):
        self.assertEqual(most_common_recent([5, 5, 4, 5, 4, 4, 5]), 5)

    def test_tie_goes_to_most_recent(self):
        self.assertEqual(most_common_recent([3, 4, 4, 3]), 3)
        self.assertEqual(most_common_recent([4, 3, 3, 4]), 4)
        self.assertEqual(most_common_recent(["Left", "Right"]), "Right")

    def test_empty(self):
        self.assertIsNone(most_common_recent([]))


class TestHandSmootherWindows(unittest.TestCase):

    def test_window_is_bounded(self):
        smoother = HandSmoother(history_size=6)
        for i in range(6 + 4):
            smoother.observe(i % 6, "Left")
        self.assertEqual(len(smoother.count_history), 6)
        self.assertEqual(len(smoother.label_history), 6)
        self.assertEqual(smoother.count_history, [4, 5, 0, 1, 2, 3])

    def test_reset_clears_everything(self):
        smoother = HandSmoother()
        for _ in range(5):
            smoother.observe(5, "Right")
        smoother.reset()
        self.assertEqual(smoother.count_history, [])
        self.assertEqual(smoother.label_history, [])
        self.assertEqual(smoother.current_display(), (0, NO_HAND_LABEL))

    def test_initial_display(self):
        self.assertEqual(HandSmoother().current_display(), (0, NO_HAND_LABEL))

    def test_rejects_bad_config(self):
        with self.assertRaises(ValueError):
            HandSmoother(history_size=0)
        with self.assertRaises(ValueError):
            HandSmoother(blend_prev_weight=1.5)


class TestModePolicy(unittest.TestCase):

    def test_mode_example(self):
        smoother = HandSmoother(history_size=8, policy=SmoothingPolicy.MODE)
        for c in [5, 5, 4, 5, 4, 4, 5]:
            smoother.observe(c, "Left")
        self.assertEqual(smoother.current_display(), (5, "Left"))

    def test_single_outlier_ignored(self):
        smoother = HandSmoother(history_size=8, policy=SmoothingPolicy.MODE)
        for c in [2, 2, 2, 5]:
            count, _ = smoother.observe(c, "Right")
        self.assertEqual(count, 2)

    def test_policy_from_value(self):
        self.assertIs(HandSmoother(policy="mode").policy, SmoothingPolicy.MODE)


class TestMedianBlendPolicy(unittest.TestCase):

    def test_rounded_feedback_settles_below_steady_count(self):
        smoother = HandSmoother(history_size=8)
        shown = [smoother.observe(5, "Left")[0] for _ in range(6)]
        # round(0.6 * 4 + 0.4 * 5) == 4, so the displayed count holds at 4.
        self.assertEqual(shown, [2, 3, 4, 4, 4, 4])

    def test_carry_fraction_converges_to_steady_count(self):
        smoother = HandSmoother(history_size=8, carry_fraction=True)
        shown = [smoother.observe(5, "Left")[0] for _ in range(6)]
        self.assertEqual(shown, [2, 3, 4, 4, 5, 5])

    def test_blend_first_steps(self):
        smoother = HandSmoother(history_size=8, blend_prev_weight=0.6)
        self.assertEqual(smoother.observe(5, "Left")[0], 2)   # 0.4 * 5
        self.assertEqual(smoother.observe(5, "Left")[0], 3)   # 0.6 * 2.0 + 2.0

    def test_even_window_uses_mean_of_middle(self):
        smoother = HandSmoother(history_size=8, blend_prev_weight=0.0)
        smoother.observe(2, "Left")
        count, _ = smoother.observe(3, "Left")
        # median 2.5 rounds half up
        self.assertEqual(count, 3)

    def test_single_outlier_damped(self):
        smoother = HandSmoother(history_size=8)
        for _ in range(7):
            before, _ = smoother.observe(3, "Left")
        count, _ = smoother.observe(5, "Left")
        self.assertEqual(count, before)

    def test_handedness_mode(self):
        smoother = HandSmoother(history_size=6)
        for lbl in ["Left", "Right", "Left", "Left", "Right"]:
            _, label = smoother.observe(1, lbl)
        self.assertEqual(label, "Left")

    def test_reset_restarts_blend(self):
        smoother = HandSmoother(history_size=8)
        for _ in range(10):
            smoother.observe(5, "Left")
        smoother.reset()
        self.assertEqual(smoother.observe(5, "Left")[0], 2)


if __name__ == "__main__":
    unittest.main()
