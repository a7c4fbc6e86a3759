from __future__ import annotations

import random
from typing import Any, Protocol, Sequence, TypeVar

from .engine import MOVE_SPACE, move
from .state import GameState, create_canonical

DEFAULT_SHUFFLE_FACTOR = 200

_T = TypeVar("_T")


class RandomSource(Protocol):
    def choice(self, seq: Sequence[_T]) -> _T: ...


def resolve_rng(rng: RandomSource | None) -> RandomSource:
    return random.Random() if rng is None else rng


def random_move(state: GameState, rng: RandomSource | None = None) -> GameState:
    """Apply one of the six directed peg pairs, chosen uniformly.

    Draws that turn out to be illegal are silent no-ops.
    """

    from_peg, to_peg = resolve_rng(rng).choice(MOVE_SPACE)
    return move(state, from_peg, to_peg)


def random_walk(
    state: GameState, steps: int, rng: RandomSource | None = None
) -> GameState:
    if isinstance(steps, bool) or not isinstance(steps, int):
        raise TypeError(f"steps must be int, got {type(steps).__name__}")
    if steps < 0:
        raise ValueError(f"steps must be >= 0, got {steps}")
    source = resolve_rng(rng)
    for _ in range(steps):
        state = random_move(state, source)
    return state


def create_arbitrary(
    n_disks: int,
    rng: RandomSource | None = None,
    *,
    shuffle_factor: int = DEFAULT_SHUFFLE_FACTOR,
) -> GameState:
    """Shuffle the canonical stack with `shuffle_factor * n_disks` random moves.

    The result is reachable but not uniformly distributed, and may happen to
    be the canonical state itself.
    """

    canonical = create_canonical(n_disks)
    return random_walk(canonical, shuffle_factor * n_disks, rng)


def create_state(
    n_disks: int,
    arbitrary: bool = False,
    rng: RandomSource | None = None,
    **kwargs: Any,
) -> GameState:
    if arbitrary:
        return create_arbitrary(n_disks, rng, **kwargs)
    return create_canonical(n_disks)
