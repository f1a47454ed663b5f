"""
Live Finger Count Tracker.

Combines:
- MediaPipe hand landmark detection
- Angle-based finger extension classification
- Windowed smoothing of the displayed count and handedness
- Skeleton / fingertip overlay with runtime toggles
"""

import time

import cv2

from finger_track.hand_gestures import (
    FrameProcessor,
    HandSmoother,
    SmoothingPolicy,
    ViewOptions,
    detect_safely,
)
from finger_track.hand_gestures.config import (
    CAPTURE_WIDTH, CAPTURE_HEIGHT, HISTORY_SIZE, MAX_READ_FAILURES, READ_RETRY_DELAY_S,
)
from finger_track.hand_tracks import HandTracker, TrackerDisplay, compose_frame


INSTRUCTIONS = """
==================================================
Finger Count Tracker
==================================================

Show one or two hands to the camera.

Controls:
  's' - Toggle skeleton / fingertips only
  'm' - Toggle multi-hand mode
  'f' - Toggle mirror (selfie) view
  'q' or ESC - Quit
"""


def _timestamp() -> str:
    return time.strftime('%H:%M:%S')


def _on_off(flag: bool) -> str:
    return "ON" if flag else "OFF"


def handle_key(key: int, options: ViewOptions) -> bool:
    """
    Apply a keyboard toggle to the view options.

    Returns:
        False when the key asks to quit, True otherwise
    """
    if key in (ord("q"), 27):
        return False
    if key == ord("s"):
        print(f"[{_timestamp()}] Skeleton {_on_off(options.toggle_skeleton())}")
    elif key == ord("m"):
        print(f"[{_timestamp()}] Multi-hand mode {_on_off(options.toggle_multi_hand())}")
    elif key == ord("f"):
        print(f"[{_timestamp()}] Mirror {_on_off(options.toggle_mirror())}")
    return True


def read_frame(cap, max_failures: int = MAX_READ_FAILURES, retry_delay_s: float = READ_RETRY_DELAY_S):
    """
    Read the next camera frame, retrying short dropouts.

    Returns:
        The frame, or None once `max_failures` reads in a row have failed
    """
    for _ in range(max_failures):
        ok, frame = cap.read()
        if ok and frame is not None:
            return frame
        time.sleep(retry_delay_s)
    print(f"[{_timestamp()}] Camera error: no frame after {max_failures} attempts")
    return None


def run_finger_tracker(
    camera_index: int = 0,
    width: int = CAPTURE_WIDTH,
    height: int = CAPTURE_HEIGHT,
    history_size: int = HISTORY_SIZE,
    policy: SmoothingPolicy = SmoothingPolicy.MEDIAN_BLEND,
    options: ViewOptions | None = None,
    model_path: str | None = None,
) -> None:
    """
    Run the live finger count viewer.

    Args:
        camera_index: Camera device index
        width: Requested capture width
        height: Requested capture height
        history_size: Smoothing window length in frames
        policy: Count smoothing policy
        options: Initial skeleton / multi-hand / mirror flags
        model_path: Optional hand_landmarker.task for the Tasks backend
    """
    print(INSTRUCTIONS)
    options = options or ViewOptions()

    try:
        tracker = HandTracker(model_path=model_path)
    except (FileNotFoundError, RuntimeError) as e:
        print(f"Model init failed: {e}")
        return

    cap = cv2.VideoCapture(camera_index)
    if not cap.isOpened():
        print(f"Error: Cannot open camera {camera_index}")
        tracker.close()
        return

    cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
    print("Camera started. Show your hand.")

    processor = FrameProcessor(HandSmoother(history_size=history_size, policy=policy), options)

    try:
        with tracker, TrackerDisplay() as display:
            while True:
                frame = read_frame(cap)
                if frame is None:
                    break

                h, w = frame.shape[:2]
                detections = detect_safely(tracker.detect, frame)
                result = processor.process_frame(detections, (w, h))

                out = compose_frame(frame, result.render, result.display, processor.options)
                key = display.show(out)
                if not handle_key(key, processor.options):
                    break
    finally:
        cap.release()
        cv2.destroyAllWindows()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Live hand skeleton + finger count tracker")
    parser.add_argument("-c", "--camera", type=int, default=0, help="Camera index")
    parser.add_argument("--width", type=int, default=CAPTURE_WIDTH, help="Capture width")
    parser.add_argument("--height", type=int, default=CAPTURE_HEIGHT, help="Capture height")
    parser.add_argument("--history", type=int, default=HISTORY_SIZE, help="Smoothing window (frames)")
    parser.add_argument("--policy", choices=[p.value for p in SmoothingPolicy],
                        default=SmoothingPolicy.MEDIAN_BLEND.value, help="Count smoothing policy")
    parser.add_argument("--multi-hand", action="store_true", help="Process up to two hands")
    parser.add_argument("--mirror", action="store_true", help="Selfie-style mirrored view")
    parser.add_argument("--no-skeleton", action="store_true", help="Draw fingertips only")
    parser.add_argument("--model-path", type=str, default=None, help="hand_landmarker.task path")
    args = parser.parse_args()

    run_finger_tracker(
        camera_index=args.camera,
        width=args.width,
        height=args.height,
        history_size=args.history,
        policy=SmoothingPolicy(args.policy),
        options=ViewOptions(
            show_skeleton=not args.no_skeleton,
            multi_hand=args.multi_hand,
            mirror=args.mirror,
        ),
        model_path=args.model_path,
    )
