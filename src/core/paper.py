"""
Paper lifecycle state machine.

IDLE -> ACTIVE on file load, three CRUMPLEs to CRUMPLED_FINAL, BURN to
BURNING, then ASHES after a fixed delay. Reset returns to IDLE from anywhere
and cancels pending timed transitions.
"""
from typing import Optional, Tuple
import numpy as np

from .config import PaperConfig
from .effects import (
    AudioCue, EffectDispatcher, ShakePulse, Spark, SparksBurst, SparksClear,
    generate_sparks,
)
from .scheduler import ScheduledCall, Scheduler
from .types import CRUMPLE_NEXT, IntentEvent, PaperState


class PaperStateMachine:
    """
    Owns the paper state. Transitions are the only mutator.

    Intents arriving in a state that does not accept them are ignored:
    no transition, no effects, no notification.
    """

    def __init__(
        self,
        config: PaperConfig,
        scheduler: Scheduler,
        effects: Optional[EffectDispatcher] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self._config = config
        self._scheduler = scheduler
        self._effects = effects or EffectDispatcher()
        self._rng = rng if rng is not None else np.random.default_rng(config.spark_seed)

        self._state = PaperState.IDLE
        self._file_name = ""
        self._file_type = ""
        self._sparks: Tuple[Spark, ...] = ()
        self._is_shaking = False

        # Pending timed transitions
        self._shake_call: Optional[ScheduledCall] = None
        self._ashes_call: Optional[ScheduledCall] = None

    @property
    def state(self) -> PaperState:
        return self._state

    @property
    def file_name(self) -> str:
        return self._file_name

    @property
    def file_type(self) -> str:
        return self._file_type

    @property
    def sparks(self) -> Tuple[Spark, ...]:
        return self._sparks

    @property
    def is_shaking(self) -> bool:
        return self._is_shaking

    @property
    def crumple_level(self) -> int:
        """0 for a flat sheet, 3 once fully crumpled (and while burning)."""
        return {
            PaperState.CRUMPLED_1: 1,
            PaperState.CRUMPLED_2: 2,
            PaperState.CRUMPLED_FINAL: 3,
            PaperState.BURNING: 3,
            PaperState.ASHES: 3,
        }.get(self._state, 0)

    def load_file(self, name: str, mime_type: str = "") -> bool:
        """Put a file on the table. Only accepted while IDLE."""
        if self._state != PaperState.IDLE:
            return False
        self._file_name = name
        self._file_type = mime_type
        self._set_state(PaperState.ACTIVE)
        self._effects.play_audio(AudioCue.MUSIC_START)
        return True

    def apply(self, intent: IntentEvent) -> bool:
        """
        Apply a debounced intent.

        Returns:
            True if it caused a transition, False if the current state
            ignores it.
        """
        if intent == IntentEvent.CRUMPLE:
            return self._crumple()
        if intent == IntentEvent.BURN:
            return self._burn()
        return False

    def reset(self) -> None:
        """Return to IDLE from any state, cancelling timed transitions."""
        self._cancel(self._ashes_call)
        self._cancel(self._shake_call)
        self._ashes_call = None
        self._shake_call = None
        self._is_shaking = False

        self._file_name = ""
        self._file_type = ""
        had_sparks = bool(self._sparks)
        self._sparks = ()

        if self._state != PaperState.IDLE:
            self._set_state(PaperState.IDLE)
        self._effects.play_audio(AudioCue.MUSIC_STOP)
        if had_sparks:
            self._effects.animate(SparksClear())

    def _crumple(self) -> bool:
        next_state = CRUMPLE_NEXT.get(self._state)
        if next_state is None:
            return False

        self._set_state(next_state)
        self._effects.play_audio(AudioCue.CRUMPLE_SOUND)

        # A new pulse supersedes one still running
        self._cancel(self._shake_call)
        self._is_shaking = True
        self._shake_call = self._scheduler.call_later(self._config.shake_ms, self._end_shake)
        self._effects.animate(ShakePulse(self._config.shake_ms))
        return True

    def _end_shake(self) -> None:
        self._shake_call = None
        self._is_shaking = False

    def _burn(self) -> bool:
        if self._state != PaperState.CRUMPLED_FINAL:
            return False

        self._set_state(PaperState.BURNING)
        self._effects.play_audio(AudioCue.BURN_SOUND)
        self._sparks = generate_sparks(self._config.spark_count, self._rng)
        self._effects.animate(SparksBurst(self._sparks))
        self._ashes_call = self._scheduler.call_later(self._config.burn_ms, self._turn_to_ashes)
        return True

    def _turn_to_ashes(self) -> None:
        self._ashes_call = None
        if self._state != PaperState.BURNING:
            return
        self._sparks = ()
        self._set_state(PaperState.ASHES)
        self._effects.animate(SparksClear())

    def _set_state(self, state: PaperState) -> None:
        self._state = state
        self._effects.state_changed(state)

    @staticmethod
    def _cancel(call: Optional[ScheduledCall]) -> None:
        if call is not None:
            call.cancel()
