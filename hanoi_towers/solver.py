from __future__ import annotations

from .display import NullSink, StateSink
from .engine import move
from .errors import InvalidDiskCountError, InvalidPegPairError
from .state import GameState, PegId


def optimal_steps(n_disks: int) -> int:
    if n_disks < 0:
        raise ValueError(f"n_disks must be >= 0, got {n_disks}")
    return (1 << n_disks) - 1


def solve_canonical(
    n_disks: int,
    src: PegId,
    aux: PegId,
    dst: PegId,
    state: GameState,
    sink: StateSink | None = None,
) -> GameState:
    """Move the top `n_disks` disks of `src` onto `dst` in 2^n - 1 moves.

    Assumes disks 1..n_disks sit on `src` in order. Every resulting state is
    shown on `sink` exactly once, in move order.
    """

    if isinstance(n_disks, bool) or not isinstance(n_disks, int) or n_disks < 1:
        raise InvalidDiskCountError(f"n_disks must be a positive int, got {n_disks!r}")
    src, aux, dst = PegId.coerce(src), PegId.coerce(aux), PegId.coerce(dst)
    if len({src, aux, dst}) != 3:
        raise InvalidPegPairError("src, aux and dst must be three distinct pegs")
    return _solve(n_disks, src, aux, dst, state, sink or NullSink())


def _solve(
    n_disks: int,
    src: PegId,
    aux: PegId,
    dst: PegId,
    state: GameState,
    sink: StateSink,
) -> GameState:
    if n_disks == 1:
        state = move(state, src, dst)
        sink.show(state)
        return state
    state = _solve(n_disks - 1, src, dst, aux, state, sink)
    state = move(state, src, dst)
    sink.show(state)
    return _solve(n_disks - 1, aux, src, dst, state, sink)
