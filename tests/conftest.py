import pytest

from src.core.config import Config
from src.core.effects import RecordingEffects
from src.core.scheduler import ManualScheduler


WRIST_POS = (0.5, 0.8, 0.0)
FINGER_X = {0: 0.40, 1: 0.47, 2: 0.53, 3: 0.60}  # index, middle, ring, pinky


def build_hand(curled=(), tip_on_pip=()):
    """
    Build 21 landmarks of an upright hand.

    Args:
        curled: Finger numbers (0=index .. 3=pinky) whose tip folds back
                towards the wrist, inside the PIP joint.
        tip_on_pip: Finger numbers whose tip sits exactly on the PIP joint
                    (equal distance to the wrist).
    """
    points = [None] * 21
    points[0] = WRIST_POS
    # Thumb, off to the side; ignored by the classifier
    points[1] = (0.42, 0.75, 0.0)
    points[2] = (0.36, 0.70, 0.0)
    points[3] = (0.32, 0.65, 0.0)
    points[4] = (0.30, 0.60, 0.0)

    for finger, x in FINGER_X.items():
        base = 5 + finger * 4
        points[base] = (x, 0.60, 0.0)       # MCP
        points[base + 1] = (x, 0.50, 0.0)   # PIP
        if finger in curled:
            points[base + 2] = (x, 0.52, -0.02)  # DIP folding down
            points[base + 3] = (x, 0.62, -0.03)  # Tip back near the palm
        elif finger in tip_on_pip:
            points[base + 2] = (x, 0.48, 0.0)
            points[base + 3] = points[base + 1]
        else:
            points[base + 2] = (x, 0.45, 0.0)
            points[base + 3] = (x, 0.40, 0.0)
    return points


def build_box(width, height, x0=0.0, y0=0.0):
    """21 points whose 2D bounding box is exactly width x height."""
    corners = [
        (x0, y0, 0.0),
        (x0 + width, y0, 0.0),
        (x0, y0 + height, 0.0),
        (x0 + width, y0 + height, 0.0),
    ]
    points = list(corners)
    while len(points) < 21:
        points.append((x0 + width / 2, y0 + height / 2, 0.0))
    return points


@pytest.fixture
def make_hand():
    return build_hand


@pytest.fixture
def make_box():
    return build_box


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def effects():
    return RecordingEffects()
