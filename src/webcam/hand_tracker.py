"""
MediaPipe Hand Tracker wrapper using the Tasks API.
Handles camera capture and single-hand landmark detection.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, List, Tuple
import time
import cv2
import numpy as np
import mediapipe as mp

from ..core.config import Config, CameraConfig, MediaPipeConfig
from ..core.gesture_classifier import FINGER_TIPS, bounding_box

# MediaPipe Tasks API imports
BaseOptions = mp.tasks.BaseOptions
HandLandmarker = mp.tasks.vision.HandLandmarker
HandLandmarkerOptions = mp.tasks.vision.HandLandmarkerOptions
VisionRunningMode = mp.tasks.vision.RunningMode


MODEL_URL = (
    "https://storage.googleapis.com/mediapipe-models/hand_landmarker/"
    "hand_landmarker/float16/1/hand_landmarker.task"
)


@dataclass
class HandLandmarks:
    """
    Normalized hand landmarks from MediaPipe.

    Attributes:
        landmarks: List of 21 (x, y, z) tuples, x/y normalized 0-1
        handedness: 'Left' or 'Right'
        confidence: Detection confidence 0-1
    """
    landmarks: List[Tuple[float, float, float]]
    handedness: str
    confidence: float


# Hand connections for drawing (same as MediaPipe's HAND_CONNECTIONS)
HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),      # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),      # Index
    (0, 9), (9, 10), (10, 11), (11, 12), # Middle
    (0, 13), (13, 14), (14, 15), (15, 16), # Ring
    (0, 17), (17, 18), (18, 19), (19, 20), # Pinky
    (5, 9), (9, 13), (13, 17),           # Palm
]


class HandTracker:
    """
    MediaPipe hand tracking wrapper with camera management.
    Uses the MediaPipe Tasks API (0.10+) in VIDEO mode, one hand.

    Every successful read bumps a frame counter, which doubles as the frame
    id consumers use to skip frames they have already classified.
    """

    # Default model path relative to project root
    DEFAULT_MODEL_PATH = Path(__file__).parent.parent.parent / "models" / "hand_landmarker.task"

    def __init__(self, config: Config, model_path: Optional[Path] = None):
        """
        Initialize hand tracker.

        Args:
            config: PaperBurn configuration
            model_path: Path to hand_landmarker.task model file
        """
        self._camera_config: CameraConfig = config.camera
        self._mp_config: MediaPipeConfig = config.mediapipe
        configured = config.mediapipe.model_path
        self._model_path = Path(model_path or configured or self.DEFAULT_MODEL_PATH)

        # Lazy initialization
        self._cap: Optional[cv2.VideoCapture] = None
        self._landmarker: Optional[HandLandmarker] = None

        # State
        self._is_running = False
        self._frame_count = 0
        self._start_perf: float = 0
        self._last_timestamp_ms: int = -1

    def start(self) -> bool:
        """
        Start camera capture and MediaPipe.

        Returns:
            True if started successfully, False otherwise.
        """
        if self._is_running:
            return True

        if not self._model_path.exists():
            print(f"ERROR: Model file not found: {self._model_path}")
            print(f"Download from: {MODEL_URL}")
            return False

        self._cap = cv2.VideoCapture(self._camera_config.device_id)
        if not self._cap.isOpened():
            print(f"ERROR: Could not open camera {self._camera_config.device_id}")
            self._cap = None
            return False

        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, self._camera_config.width)
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self._camera_config.height)
        self._cap.set(cv2.CAP_PROP_FPS, self._camera_config.fps)

        options = HandLandmarkerOptions(
            base_options=BaseOptions(model_asset_path=str(self._model_path)),
            running_mode=VisionRunningMode.VIDEO,
            num_hands=self._mp_config.max_num_hands,
            min_hand_detection_confidence=self._mp_config.min_detection_confidence,
            min_tracking_confidence=self._mp_config.min_tracking_confidence,
        )

        self._landmarker = HandLandmarker.create_from_options(options)
        self._start_perf = time.perf_counter()
        self._last_timestamp_ms = -1
        self._is_running = True
        return True

    def stop(self) -> None:
        """Stop camera capture and release resources."""
        self._is_running = False

        if self._landmarker:
            self._landmarker.close()
            self._landmarker = None

        if self._cap:
            self._cap.release()
            self._cap = None

    def read(self) -> Tuple[int, Optional[np.ndarray], Optional[HandLandmarks]]:
        """
        Capture a frame and detect the hand in it.

        Returns:
            (frame_id, frame, landmarks). When no new frame could be read,
            frame_id is unchanged from the previous call and frame is None.
            landmarks is None when no hand was found. frame is the BGR image
            the landmarks were detected on (mirrored if configured).
        """
        if not self._is_running or self._cap is None or self._landmarker is None:
            return self._frame_count, None, None

        ret, frame = self._cap.read()
        if not ret:
            return self._frame_count, None, None

        self._frame_count += 1

        if self._camera_config.mirror:
            frame = cv2.flip(frame, 1)

        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        rgb_frame.flags.writeable = False
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_frame)

        # Calculate strictly monotonic timestamp
        timestamp_ms = int((time.perf_counter() - self._start_perf) * 1000)
        if timestamp_ms <= self._last_timestamp_ms:
            timestamp_ms = self._last_timestamp_ms + 1
        self._last_timestamp_ms = timestamp_ms

        result = self._landmarker.detect_for_video(mp_image, timestamp_ms)

        if not result.hand_landmarks:
            return self._frame_count, frame, None

        # Extract first hand
        hand_landmarks = result.hand_landmarks[0]
        handedness = result.handedness[0][0]

        return self._frame_count, frame, HandLandmarks(
            landmarks=[(lm.x, lm.y, lm.z) for lm in hand_landmarks],
            handedness=handedness.category_name,
            confidence=handedness.score,
        )

    def get_frame_with_landmarks(
        self,
        frame: Optional[np.ndarray],
        landmarks: Optional[HandLandmarks] = None,
    ) -> Optional[np.ndarray]:
        """
        Copy a frame from read() and draw its landmarks on it.

        Args:
            frame: BGR frame returned by read() together with landmarks.
            landmarks: If provided, draw skeleton and bounding box.

        Returns:
            Annotated copy of frame, or None if frame is None.
        """
        if frame is None:
            return None

        frame = frame.copy()

        if landmarks is not None:
            h, w = frame.shape[:2]

            for start_idx, end_idx in HAND_CONNECTIONS:
                start = landmarks.landmarks[start_idx]
                end = landmarks.landmarks[end_idx]
                start_pos = (int(start[0] * w), int(start[1] * h))
                end_pos = (int(end[0] * w), int(end[1] * h))
                cv2.line(frame, start_pos, end_pos, (0, 255, 0), 2)

            for i, (x, y, z) in enumerate(landmarks.landmarks):
                color = (0, 0, 255) if i in FINGER_TIPS else (0, 255, 0)
                cv2.circle(frame, (int(x * w), int(y * h)), 5, color, -1)

            # Bounding box drives the proximity score
            min_x, min_y, max_x, max_y = bounding_box(landmarks)
            cv2.rectangle(
                frame, (int(min_x * w), int(min_y * h)), (int(max_x * w), int(max_y * h)),
                (255, 200, 100), 1
            )

        return frame
