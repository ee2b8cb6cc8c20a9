"""
PaperBurn Core Module

Gesture classification, intent debouncing and the paper state machine.
"""
from .config import Config, ConfigError, load_config
from .gesture_classifier import GestureType, GestureSample, InvalidInput, classify
from .debouncer import DebounceState, IntentDebouncer
from .types import IntentEvent, PaperState
from .paper import PaperStateMachine
from .scheduler import Scheduler, ManualScheduler, ScheduledCall
from .effects import (
    AudioCue, EffectDispatcher, RecordingEffects, ConsoleEffects,
    ShakePulse, SparksBurst, SparksClear, Spark,
)
from .frames import FrameGate
from .game import PaperGame

__all__ = [
    'Config',
    'ConfigError',
    'load_config',
    'GestureType',
    'GestureSample',
    'InvalidInput',
    'classify',
    'DebounceState',
    'IntentDebouncer',
    'IntentEvent',
    'PaperState',
    'PaperStateMachine',
    'Scheduler',
    'ManualScheduler',
    'ScheduledCall',
    'AudioCue',
    'EffectDispatcher',
    'RecordingEffects',
    'ConsoleEffects',
    'ShakePulse',
    'SparksBurst',
    'SparksClear',
    'Spark',
    'PaperGame',
    'FrameGate',
]
