"""
Intent debouncing.
Turns the noisy per-frame gesture stream into rate-limited CRUMPLE and BURN
events.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from .config import GestureConfig
from .gesture_classifier import GestureSample, GestureType
from .types import IntentEvent, PaperState


@dataclass(frozen=True)
class DebounceState:
    """
    Hold-and-gate state between frames.

    Attributes:
        hold_counter: Consecutive FIST frames seen while the gate was open
        gate_open: False after a CRUMPLE until a non-fist frame re-arms it
    """
    hold_counter: int = 0
    gate_open: bool = True


_DEFAULT_CONFIG = GestureConfig()


def step(
    state: DebounceState,
    sample: GestureSample,
    paper_state: PaperState,
    config: Optional[GestureConfig] = None,
) -> Tuple[DebounceState, Optional[IntentEvent]]:
    """
    Advance the debouncer by one frame.

    Args:
        state: State after the previous frame
        sample: This frame's gesture sample
        paper_state: Current paper state (BURN is only armed on CRUMPLED_FINAL)
        config: Gesture thresholds (defaults used if None)

    Returns:
        (new_state, event) where event is CRUMPLE, BURN or None.
    """
    config = config or _DEFAULT_CONFIG
    counter, gate_open = state.hold_counter, state.gate_open
    event = None

    if sample.type == GestureType.FIST:
        if gate_open:
            counter += 1
            if counter > config.hold_frames:
                event = IntentEvent.CRUMPLE
                counter = 0
                gate_open = False
        # Closed gate: this hold was already consumed
    else:
        # Any release re-arms the gate and breaks the run
        gate_open = True
        counter = 0

    # Orthogonal to hold/gate; fires every qualifying frame
    if (paper_state == PaperState.CRUMPLED_FINAL
            and sample.type == GestureType.OPEN_PALM
            and sample.proximity > config.burn_proximity):
        event = IntentEvent.BURN

    return DebounceState(counter, gate_open), event


class IntentDebouncer:
    """Frame-loop wrapper that keeps the DebounceState between calls."""

    def __init__(self, config: Optional[GestureConfig] = None):
        self._config = config or _DEFAULT_CONFIG
        self._state = DebounceState()

    @property
    def state(self) -> DebounceState:
        return self._state

    def step(self, sample: GestureSample, paper_state: PaperState) -> Optional[IntentEvent]:
        self._state, event = step(self._state, sample, paper_state, self._config)
        return event

    def reset(self) -> None:
        self._state = DebounceState()
