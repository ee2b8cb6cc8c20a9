"""
Outbound effect cues (audio and animation) and the dispatcher boundary.

The paper state machine calls an EffectDispatcher on every real transition.
The Qt window implements it for the app; RecordingEffects captures cues for
tests and ConsoleEffects prints them in debug mode.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Tuple, Union
import numpy as np

from .types import PaperState


class AudioCue(Enum):
    CRUMPLE_SOUND = auto()
    BURN_SOUND = auto()
    MUSIC_START = auto()
    MUSIC_STOP = auto()


@dataclass(frozen=True)
class Spark:
    """
    One burn particle.

    Attributes:
        x, y: Start position in percent of the paper area
        tx, ty: Travel offset in pixels (ty is always upwards)
        scale: Size multiplier
        delay: Animation delay in seconds
        duration: Animation duration in seconds
    """
    x: float
    y: float
    tx: float
    ty: float
    scale: float
    delay: float
    duration: float


@dataclass(frozen=True)
class ShakePulse:
    duration_ms: int


@dataclass(frozen=True)
class SparksBurst:
    sparks: Tuple[Spark, ...]

    @property
    def count(self) -> int:
        return len(self.sparks)


@dataclass(frozen=True)
class SparksClear:
    pass


AnimationCue = Union[ShakePulse, SparksBurst, SparksClear]


def generate_sparks(count: int, rng: Optional[np.random.Generator] = None) -> Tuple[Spark, ...]:
    """Scatter count sparks around the bottom-centre of the paper, flying upwards."""
    rng = rng if rng is not None else np.random.default_rng()
    x = 50 + rng.uniform(-20, 20, count)
    y = 60 + rng.uniform(-10, 10, count)
    tx = rng.uniform(-100, 100, count)
    ty = -rng.uniform(100, 300, count)
    scale = rng.uniform(0.5, 2.0, count)
    delay = rng.uniform(0.0, 0.5, count)
    duration = rng.uniform(0.5, 1.5, count)
    return tuple(
        Spark(float(x[i]), float(y[i]), float(tx[i]), float(ty[i]),
              float(scale[i]), float(delay[i]), float(duration[i]))
        for i in range(count)
    )


class EffectDispatcher:
    """Receiver for transition notifications. Default methods do nothing."""

    def state_changed(self, state: PaperState) -> None:
        pass

    def play_audio(self, cue: AudioCue) -> None:
        pass

    def animate(self, cue: AnimationCue) -> None:
        pass


class RecordingEffects(EffectDispatcher):
    """Collects every cue in arrival order."""

    def __init__(self):
        self.states: List[PaperState] = []
        self.audio: List[AudioCue] = []
        self.animations: List[AnimationCue] = []

    def state_changed(self, state: PaperState) -> None:
        self.states.append(state)

    def play_audio(self, cue: AudioCue) -> None:
        self.audio.append(cue)

    def animate(self, cue: AnimationCue) -> None:
        self.animations.append(cue)

    def clear(self) -> None:
        self.states.clear()
        self.audio.clear()
        self.animations.clear()


class ConsoleEffects(EffectDispatcher):
    """Prints cues to stdout."""

    def state_changed(self, state: PaperState) -> None:
        print(f"State: {state.name}")

    def play_audio(self, cue: AudioCue) -> None:
        print(f"Audio: {cue.name}")

    def animate(self, cue: AnimationCue) -> None:
        if isinstance(cue, SparksBurst):
            print(f"Animation: SparksBurst ({cue.count} sparks)")
        else:
            print(f"Animation: {cue}")
