"""
Shared enums for the paper game.
"""
from enum import Enum, auto


class IntentEvent(Enum):
    """Discrete user intent distilled from the gesture stream."""
    CRUMPLE = auto()
    BURN = auto()


class PaperState(Enum):
    """Lifecycle of the sheet of paper."""
    IDLE = auto()            # Waiting for a file
    ACTIVE = auto()          # Flat sheet, ready to crumple
    CRUMPLED_1 = auto()
    CRUMPLED_2 = auto()
    CRUMPLED_FINAL = auto()  # Fully balled up, ready to burn
    BURNING = auto()
    ASHES = auto()           # Terminal until reset


# Crumple progression: state -> next state on CRUMPLE
CRUMPLE_NEXT = {
    PaperState.ACTIVE: PaperState.CRUMPLED_1,
    PaperState.CRUMPLED_1: PaperState.CRUMPLED_2,
    PaperState.CRUMPLED_2: PaperState.CRUMPLED_FINAL,
}
