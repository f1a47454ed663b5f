"""MediaPipe hand tracking wrapper."""

import shutil
import time
import urllib.error
import urllib.request
from pathlib import Path

import cv2
import mediapipe as mp
import numpy as np
from numpy.typing import NDArray

from ..hand_gestures import HandDetection, CoordinateSpace
from ..hand_gestures.config import (
    MAX_NUM_HANDS, MIN_DETECTION_CONFIDENCE, MIN_TRACKING_CONFIDENCE, MODEL_COMPLEXITY,
)


DEFAULT_MODEL_URL = (
    "https://storage.googleapis.com/mediapipe-models/hand_landmarker/"
    "hand_landmarker/float16/1/hand_landmarker.task"
)


def _has_solutions_backend() -> bool:
    return hasattr(mp, "solutions") and hasattr(mp.solutions, "hands")


class HandTracker:
    """
    Wrapper for MediaPipe hand landmark detection.

    Uses the legacy ``mp.solutions.hands`` API when the installed MediaPipe
    still ships it and the Tasks ``HandLandmarker`` otherwise. Either way,
    ``detect`` returns HandDetection objects with normalized landmarks.
    """

    def __init__(
        self,
        max_num_hands: int = MAX_NUM_HANDS,
        min_detection_confidence: float = MIN_DETECTION_CONFIDENCE,
        min_tracking_confidence: float = MIN_TRACKING_CONFIDENCE,
        model_path: str | None = None,
    ):
        self._max_num_hands = max_num_hands
        self._min_detection_confidence = min_detection_confidence
        self._min_tracking_confidence = min_tracking_confidence
        self._last_timestamp_ms = 0

        if model_path is None and _has_solutions_backend():
            self.backend = "solutions"
            self._hands = mp.solutions.hands.Hands(
                static_image_mode=False,
                max_num_hands=max_num_hands,
                model_complexity=MODEL_COMPLEXITY,
                min_detection_confidence=min_detection_confidence,
                min_tracking_confidence=min_tracking_confidence,
            )
        else:
            self.backend = "tasks"
            self._hands = self._create_landmarker(self._ensure_model(model_path))

    def _create_landmarker(self, model_path: Path):
        vision = mp.tasks.vision
        options = vision.HandLandmarkerOptions(
            base_options=mp.tasks.BaseOptions(model_asset_path=str(model_path)),
            running_mode=vision.RunningMode.VIDEO,
            num_hands=self._max_num_hands,
            min_hand_detection_confidence=self._min_detection_confidence,
            min_hand_presence_confidence=self._min_tracking_confidence,
            min_tracking_confidence=self._min_tracking_confidence,
        )
        return vision.HandLandmarker.create_from_options(options)

    @staticmethod
    def _ensure_model(model_path: str | None) -> Path:
        """Resolve the landmarker model, downloading it once if needed."""
        if model_path:
            path = Path(model_path).expanduser().resolve()
            if not path.exists():
                raise FileNotFoundError(
                    f"Model file not found at {path}. "
                    "Pass a valid --model-path to a hand_landmarker.task file."
                )
            return path

        model_dir = Path.cwd() / "models"
        path = model_dir / "hand_landmarker.task"
        if path.exists():
            return path

        model_dir.mkdir(exist_ok=True)
        tmp_path = path.with_suffix(".task.tmp")
        try:
            with urllib.request.urlopen(DEFAULT_MODEL_URL, timeout=60) as response:
                with open(tmp_path, "wb") as f:
                    shutil.copyfileobj(response, f)
            tmp_path.replace(path)
        except (urllib.error.URLError, TimeoutError, OSError) as e:
            raise RuntimeError(
                "Failed to download the hand landmarker model. "
                f"Download it manually from {DEFAULT_MODEL_URL} and pass --model-path."
            ) from e
        return path

    def _next_timestamp_ms(self) -> int:
        now_ms = int(time.time() * 1000)
        if now_ms <= self._last_timestamp_ms:
            now_ms = self._last_timestamp_ms + 1
        self._last_timestamp_ms = now_ms
        return now_ms

    def detect(self, frame: NDArray[np.uint8]) -> list[HandDetection]:
        """Detect hands in a BGR frame, in the order MediaPipe reports them."""
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        rgb.flags.writeable = False

        if self.backend == "solutions":
            results = self._hands.process(rgb)
            if not results.multi_hand_landmarks:
                return []
            handedness = results.multi_handedness or []
            return [
                HandDetection(
                    landmarks=list(hand.landmark),
                    handedness=handedness[i] if i < len(handedness) else None,
                    coordinate_space=CoordinateSpace.NORMALIZED,
                )
                for i, hand in enumerate(results.multi_hand_landmarks)
            ]

        image = mp.Image(image_format=mp.ImageFormat.SRGB, data=np.ascontiguousarray(rgb))
        results = self._hands.detect_for_video(image, self._next_timestamp_ms())
        detections = []
        for i, hand in enumerate(results.hand_landmarks or []):
            categories = results.handedness[i] if i < len(results.handedness) else []
            detections.append(HandDetection(
                landmarks=list(hand),
                handedness=categories[0] if categories else None,
                coordinate_space=CoordinateSpace.NORMALIZED,
            ))
        return detections

    def close(self) -> None:
        """Release resources."""
        self._hands.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
