from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from .errors import InvalidPegPairError
from .state import PEG_ORDER, GameState, PegId

Move: TypeAlias = tuple[PegId, PegId]

MOVE_SPACE: tuple[Move, ...] = tuple(
    (from_peg, to_peg)
    for from_peg in PEG_ORDER
    for to_peg in PEG_ORDER
    if from_peg != to_peg
)


@dataclass(frozen=True, slots=True)
class MoveResult:
    state: GameState
    applied: bool


def _resolve_pair(from_peg: object, to_peg: object) -> Move:
    source = PegId.coerce(from_peg)
    target = PegId.coerce(to_peg)
    if source == target:
        raise InvalidPegPairError(
            f"from_peg and to_peg must be different, got {source.value} twice"
        )
    return (source, target)


def is_legal_move(state: GameState, from_peg: PegId, to_peg: PegId) -> bool:
    source, target = _resolve_pair(from_peg, to_peg)
    disk = state.top(source)
    if disk is None:
        return False
    landing = state.top(target)
    return landing is None or landing > disk


def legal_moves(state: GameState) -> list[Move]:
    return [pair for pair in MOVE_SPACE if is_legal_move(state, *pair)]


def apply_move(state: GameState, from_peg: PegId, to_peg: PegId) -> MoveResult:
    """Transfer the top disk of `from_peg` onto `to_peg` when the rules allow it.

    Illegal requests (empty source, or a smaller disk already on top of the
    destination) leave the state untouched and report `applied=False`.
    """

    source, target = _resolve_pair(from_peg, to_peg)
    if not is_legal_move(state, source, target):
        return MoveResult(state=state, applied=False)

    source_stack = state.peg(source)
    disk = source_stack[0]
    moved = state.with_pegs(
        {
            source: source_stack[1:],
            target: (disk, *state.peg(target)),
        }
    )
    return MoveResult(state=moved, applied=True)


def move(state: GameState, from_peg: PegId, to_peg: PegId) -> GameState:
    return apply_move(state, from_peg, to_peg).state
