import numpy as np
import pytest

from src.core.effects import SparksClear
from src.core.game import PaperGame
from src.core.gesture_classifier import GestureSample, GestureType
from src.core.types import IntentEvent, PaperState

FIST = GestureSample(GestureType.FIST, 0.3)
NONE = GestureSample.none()


@pytest.fixture
def game(config, scheduler, effects):
    return PaperGame(config, scheduler, effects, rng=np.random.default_rng(0))


def feed(game, samples):
    return [game.process_sample(s) for s in samples]


def test_crumple_three_times(game):
    game.load_file("essay.docx")
    assert game.state == PaperState.ACTIVE

    feed(game, [FIST] * 6)
    assert game.state == PaperState.CRUMPLED_1

    feed(game, [NONE] + [FIST] * 6)
    assert game.state == PaperState.CRUMPLED_2

    feed(game, [NONE] + [FIST] * 6)
    assert game.state == PaperState.CRUMPLED_FINAL


def test_holding_fist_crumples_only_once(game):
    game.load_file("essay.docx")
    feed(game, [FIST] * 30)
    assert game.state == PaperState.CRUMPLED_1


def test_burn_scenario(game, scheduler, effects):
    game.load_file("essay.docx")
    for _ in range(3):
        feed(game, [NONE] + [FIST] * 6)
    assert game.state == PaperState.CRUMPLED_FINAL

    event = game.process_sample(GestureSample(GestureType.OPEN_PALM, 0.2))
    assert event == IntentEvent.BURN
    assert game.state == PaperState.BURNING
    assert len(game.paper.sparks) == 40

    # Further open palms no longer burn
    assert game.process_sample(GestureSample(GestureType.OPEN_PALM, 0.9)) is None

    scheduler.advance(2500)
    assert game.state == PaperState.ASHES
    assert game.paper.sparks == ()
    assert effects.animations[-1] == SparksClear()


def test_far_open_palm_does_not_burn(game):
    game.load_file("essay.docx")
    for _ in range(3):
        feed(game, [NONE] + [FIST] * 6)
    game.process_sample(GestureSample(GestureType.OPEN_PALM, 0.1))
    assert game.state == PaperState.CRUMPLED_FINAL


def test_gestures_ignored_while_idle(game, effects):
    feed(game, [FIST] * 20)
    assert game.state == PaperState.IDLE
    assert effects.states == []


def test_reset_mid_burn_stays_idle(game, scheduler):
    game.load_file("essay.docx")
    for _ in range(3):
        feed(game, [NONE] + [FIST] * 6)
    game.process_sample(GestureSample(GestureType.OPEN_PALM, 0.5))
    assert game.state == PaperState.BURNING

    game.reset()
    assert game.state == PaperState.IDLE
    scheduler.advance(10000)
    assert game.state == PaperState.IDLE


def test_reset_clears_hold_progress(game):
    game.load_file("a.txt")
    feed(game, [FIST] * 5)
    game.reset()
    assert game.debouncer.state.hold_counter == 0
    game.load_file("b.txt")
    feed(game, [FIST])
    assert game.state == PaperState.ACTIVE


def test_landmarks_drive_the_loop(game, make_hand):
    game.load_file("a.txt")
    fist = make_hand(curled=(0, 1, 2, 3))
    for _ in range(6):
        game.process_landmarks(fist)
    assert game.last_sample.type == GestureType.FIST
    assert game.state == PaperState.CRUMPLED_1


def test_no_hand_is_none_sample(game):
    game.process_sample(FIST)
    game.process_landmarks(None)
    assert game.last_sample == GestureSample.none()


def test_invalid_landmarks_skip_frame(game, make_hand):
    game.load_file("a.txt")
    fist = make_hand(curled=(0, 1, 2, 3))
    for _ in range(3):
        game.process_landmarks(fist)
    before = game.last_sample

    assert game.process_landmarks(fist[:20]) is None
    assert game.last_sample == before
    # Run was not broken by the bad frame
    assert game.debouncer.state.hold_counter == 3
    for _ in range(3):
        game.process_landmarks(fist)
    assert game.state == PaperState.CRUMPLED_1


@pytest.mark.parametrize("state, text", [
    (PaperState.IDLE, "Click or Drag a file here"),
    (PaperState.ACTIVE, "Make a FIST to crumple (0/3)"),
    (PaperState.CRUMPLED_1, "Release & Fist again! (1/3)"),
])
def test_message_follows_state(game, state, text):
    if state != PaperState.IDLE:
        game.load_file("a.txt")
    if state == PaperState.CRUMPLED_1:
        feed(game, [FIST] * 6)
    assert game.state == state
    assert game.message == text


def test_nan_landmarks_cannot_burn(game, make_hand):
    game.load_file("a.txt")
    for _ in range(3):
        feed(game, [NONE] + [FIST] * 6)
    assert game.state == PaperState.CRUMPLED_FINAL

    palm = list(make_hand())
    palm[8] = (float("nan"), float("nan"), float("nan"))
    assert game.process_landmarks(palm) is None
    assert game.state == PaperState.CRUMPLED_FINAL
    assert game.paper.sparks == ()
