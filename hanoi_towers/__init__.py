"""Tower of Hanoi engine: classical solving and randomized restoration."""

from __future__ import annotations

from .display import (
    NullSink,
    RecordingSink,
    StateSink,
    TextSink,
    display_state,
    format_state,
)
from .engine import MOVE_SPACE, MoveResult, apply_move, is_legal_move, legal_moves, move
from .errors import (
    ConfigurationError,
    HanoiError,
    InvalidDiskCountError,
    InvalidPegError,
    InvalidPegPairError,
    InvalidStateError,
    SearchBudgetExceededError,
)
from .restore import (
    find_restoration_path,
    restore_by_search,
    restore_to_canonical,
    solve,
)
from .solver import optimal_steps, solve_canonical
from .state import GameState, PegId, create_canonical, is_canonical
from .walk import create_arbitrary, create_state, random_move, random_walk

__all__ = [
    "MOVE_SPACE",
    "ConfigurationError",
    "GameState",
    "HanoiError",
    "InvalidDiskCountError",
    "InvalidPegError",
    "InvalidPegPairError",
    "InvalidStateError",
    "MoveResult",
    "NullSink",
    "PegId",
    "RecordingSink",
    "SearchBudgetExceededError",
    "StateSink",
    "TextSink",
    "apply_move",
    "create_arbitrary",
    "create_canonical",
    "create_state",
    "display_state",
    "find_restoration_path",
    "format_state",
    "is_canonical",
    "is_legal_move",
    "legal_moves",
    "move",
    "optimal_steps",
    "random_move",
    "random_walk",
    "restore_by_search",
    "restore_to_canonical",
    "solve",
    "solve_canonical",
]
