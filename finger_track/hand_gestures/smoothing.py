"""Temporal smoothing of per-frame finger counts and handedness labels."""

from collections import deque
from collections.abc import Iterable, Hashable

import numpy as np

from .math_utils import round_half_up
from .config import (
    HISTORY_SIZE, BLEND_PREV_WEIGHT, BLEND_CARRY_FRACTION, SMOOTHING_POLICY, NO_HAND_LABEL,
    SmoothingPolicy,
)


def most_common_recent(values: Iterable[Hashable]):
    """
    Most frequent value; ties go to the value observed most recently.

    Returns None for an empty input.
    """
    counts: dict = {}
    last_seen: dict = {}
    for i, v in enumerate(values):
        counts[v] = counts.get(v, 0) + 1
        last_seen[v] = i
    if not counts:
        return None
    return max(counts, key=lambda v: (counts[v], last_seen[v]))


class HandSmoother:
    """
    Bounded history of raw per-frame observations for one tracked hand slot.

    The count window and the label window share a capacity; the oldest entry
    is dropped once it is exceeded. The display pair is recomputed on every
    observation and reset whenever the hand disappears.
    """

    def __init__(
        self,
        history_size: int = HISTORY_SIZE,
        policy: SmoothingPolicy = SMOOTHING_POLICY,
        blend_prev_weight: float = BLEND_PREV_WEIGHT,
        carry_fraction: bool = BLEND_CARRY_FRACTION,
    ):
        if history_size < 1:
            raise ValueError(f"history_size must be >= 1, got {history_size}")
        if not 0.0 <= blend_prev_weight <= 1.0:
            raise ValueError(f"blend_prev_weight must be in [0, 1], got {blend_prev_weight}")

        self._history_size = history_size
        self._policy = SmoothingPolicy(policy)
        self._blend_prev_weight = blend_prev_weight
        self._carry_fraction = carry_fraction

        self._counts: deque[int] = deque(maxlen=history_size)
        self._labels: deque[str] = deque(maxlen=history_size)
        self._blend = 0.0
        self._display_count = 0
        self._display_label = NO_HAND_LABEL

    @property
    def history_size(self) -> int:
        return self._history_size

    @property
    def policy(self) -> SmoothingPolicy:
        return self._policy

    @property
    def count_history(self) -> list[int]:
        return list(self._counts)

    @property
    def label_history(self) -> list[str]:
        return list(self._labels)

    def observe(self, count: int, hand_label: str) -> tuple[int, str]:
        """
        Record one frame's raw values and refresh the display pair.

        Args:
            count: Raw number of extended fingers this frame
            hand_label: Raw handedness label this frame

        Returns:
            (display_count, display_label)
        """
        self._counts.append(int(count))
        self._labels.append(hand_label)

        if self._policy is SmoothingPolicy.MODE:
            self._display_count = most_common_recent(self._counts)
        else:
            self._display_count = self._blend_median()
        self._display_label = most_common_recent(self._labels)

        return self.current_display()

    def _blend_median(self) -> int:
        median = float(np.median(self._counts))
        w = self._blend_prev_weight
        prev = self._blend if self._carry_fraction else float(self._display_count)
        self._blend = w * prev + (1.0 - w) * median
        return round_half_up(self._blend)

    def current_display(self) -> tuple[int, str]:
        return self._display_count, self._display_label

    def reset(self) -> None:
        """Forget all history; used when no hand is detected."""
        self._counts.clear()
        self._labels.clear()
        self._blend = 0.0
        self._display_count = 0
        self._display_label = NO_HAND_LABEL
