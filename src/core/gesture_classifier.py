"""
Per-frame gesture classification from hand landmarks.
Maps one hand's 21 landmarks to a FIST / OPEN_PALM / NONE gesture and a
proximity score. Stateless: every call is independent.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple
import numpy as np

from .config import GestureConfig


# MediaPipe hand landmark indices
NUM_LANDMARKS = 21
WRIST = 0
FINGER_MCPS = (5, 9, 13, 17)    # Index, middle, ring, pinky knuckles
FINGER_PIPS = (6, 10, 14, 18)   # Middle joints (tip - 2)
FINGER_TIPS = (8, 12, 16, 20)


class InvalidInput(ValueError):
    """Landmark set does not hold exactly 21 3D points."""


class GestureType(Enum):
    """Classified hand shape."""
    NONE = auto()        # No hand, or 1-2 curled fingers (transitional)
    FIST = auto()
    OPEN_PALM = auto()


@dataclass(frozen=True)
class GestureSample:
    """Gesture and proximity for a single frame."""
    type: GestureType
    proximity: float = 0.0

    @classmethod
    def none(cls) -> "GestureSample":
        """Sample used for frames where no hand was detected."""
        return cls(GestureType.NONE, 0.0)


_DEFAULT_CONFIG = GestureConfig()


def _as_array(landmarks) -> np.ndarray:
    """Coerce landmarks (sequence of points or HandLandmarks) to a (21, 3) array."""
    points = getattr(landmarks, 'landmarks', landmarks)
    try:
        arr = np.asarray(points, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"Landmarks are not numeric points: {e}") from e

    if arr.ndim != 2 or arr.shape[1] != 3:
        raise InvalidInput(f"Expected (x, y, z) points, got array of shape {arr.shape}")
    if arr.shape[0] != NUM_LANDMARKS:
        raise InvalidInput(f"Expected {NUM_LANDMARKS} landmarks, got {arr.shape[0]}")
    if not np.isfinite(arr).all():
        raise InvalidInput("Landmarks contain NaN or infinite coordinates")
    return arr


def compute_proximity(
    landmarks,
    far_area: float = _DEFAULT_CONFIG.proximity_far_area,
    near_area: float = _DEFAULT_CONFIG.proximity_near_area,
) -> float:
    """
    Heuristic closeness from the hand's 2D bounding-box area.

    Area at or below far_area maps to 0, at or above near_area maps to 1,
    linear in between.
    """
    arr = _as_array(landmarks)
    width, height = np.ptp(arr[:, 0]), np.ptp(arr[:, 1])
    area = float(width * height)
    proximity = (area - far_area) / (near_area - far_area)
    return max(0.0, min(1.0, proximity))


def count_curled_fingers(landmarks) -> int:
    """
    Count curled fingers (thumb excluded).

    A finger is curled when its tip is strictly closer to the wrist than its
    PIP joint is.
    """
    arr = _as_array(landmarks)
    wrist = arr[WRIST]
    tip_dist = np.linalg.norm(arr[list(FINGER_TIPS)] - wrist, axis=1)
    pip_dist = np.linalg.norm(arr[list(FINGER_PIPS)] - wrist, axis=1)
    return int(np.count_nonzero(tip_dist < pip_dist))


def classify(landmarks, config: Optional[GestureConfig] = None) -> GestureSample:
    """
    Classify one hand.

    Args:
        landmarks: 21 (x, y, z) points, or a HandLandmarks object.
        config: Gesture thresholds (defaults used if None).

    Returns:
        GestureSample with FIST for >= fist_min_curled curled fingers,
        OPEN_PALM for none curled, NONE otherwise.

    Raises:
        InvalidInput: if the landmark set is not exactly 21 3D points.
    """
    config = config or _DEFAULT_CONFIG
    arr = _as_array(landmarks)

    proximity = compute_proximity(arr, config.proximity_far_area, config.proximity_near_area)
    curled = count_curled_fingers(arr)

    if curled >= config.fist_min_curled:
        gesture = GestureType.FIST
    elif curled == 0:
        gesture = GestureType.OPEN_PALM
    else:
        gesture = GestureType.NONE

    return GestureSample(gesture, proximity)


def bounding_box(landmarks) -> Tuple[float, float, float, float]:
    """Return (min_x, min_y, max_x, max_y) of the hand in normalized coordinates."""
    arr = _as_array(landmarks)
    min_x, min_y = arr[:, 0].min(), arr[:, 1].min()
    max_x, max_y = arr[:, 0].max(), arr[:, 1].max()
    return (float(min_x), float(min_y), float(max_x), float(max_y))
