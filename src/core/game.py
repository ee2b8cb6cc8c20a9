"""
Per-frame game loop: landmarks -> gesture sample -> intent -> paper transition.
"""
from typing import Optional
import numpy as np

from .config import Config
from .debouncer import IntentDebouncer
from .effects import EffectDispatcher
from .gesture_classifier import GestureSample, InvalidInput, classify
from .paper import PaperStateMachine
from .scheduler import Scheduler
from .types import IntentEvent, PaperState


MESSAGES = {
    PaperState.IDLE: "Click or Drag a file here",
    PaperState.ACTIVE: "Make a FIST to crumple (0/3)",
    PaperState.CRUMPLED_1: "Release & Fist again! (1/3)",
    PaperState.CRUMPLED_2: "One more time! (2/3)",
    PaperState.CRUMPLED_FINAL: "Bring OPEN HAND close to BURN IT!",
    PaperState.BURNING: "Burning...",
    PaperState.ASHES: "Gone. Reload or click to reset.",
}


class PaperGame:
    """
    Glue between the gesture stream and the paper.

    Call process_landmarks() (or process_sample()) once per new video frame,
    synchronously and in frame order.
    """

    def __init__(
        self,
        config: Config,
        scheduler: Scheduler,
        effects: Optional[EffectDispatcher] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self._config = config
        self._debouncer = IntentDebouncer(config.gestures)
        self._paper = PaperStateMachine(config.paper, scheduler, effects, rng)
        self._last_sample = GestureSample.none()

    @property
    def paper(self) -> PaperStateMachine:
        return self._paper

    @property
    def state(self) -> PaperState:
        return self._paper.state

    @property
    def debouncer(self) -> IntentDebouncer:
        return self._debouncer

    @property
    def last_sample(self) -> GestureSample:
        return self._last_sample

    @property
    def message(self) -> str:
        return MESSAGES[self._paper.state]

    def process_landmarks(self, landmarks) -> Optional[IntentEvent]:
        """
        Classify one frame's hand and feed it through the loop.

        None means no hand was detected. A malformed landmark set skips the
        frame: last_sample is kept and nothing is emitted.
        """
        if landmarks is None:
            return self.process_sample(GestureSample.none())
        try:
            sample = classify(landmarks, self._config.gestures)
        except InvalidInput:
            return None
        return self.process_sample(sample)

    def process_sample(self, sample: GestureSample) -> Optional[IntentEvent]:
        """Debounce a sample and apply the resulting intent, if any."""
        self._last_sample = sample
        event = self._debouncer.step(sample, self._paper.state)
        if event is not None:
            self._paper.apply(event)
        return event

    def load_file(self, name: str, mime_type: str = "") -> bool:
        return self._paper.load_file(name, mime_type)

    def reset(self) -> None:
        self._debouncer.reset()
        self._paper.reset()
        self._last_sample = GestureSample.none()
