from __future__ import annotations

from collections import deque
from typing import Literal

from .display import FAMILIAR_STATE_NOTE, RESTORING_NOTE, NullSink, StateSink
from .engine import legal_moves, move
from .errors import ConfigurationError, SearchBudgetExceededError
from .progress import NoopSearchProgressReporter, SearchProgressReporter
from .solver import solve_canonical
from .state import GameState, PegId, create_canonical, is_canonical
from .walk import RandomSource, random_walk, resolve_rng

Strategy = Literal["random_walk", "bfs"]
STRATEGIES: tuple[str, ...] = ("random_walk", "bfs")


def _solve_from_familiar(state: GameState, sink: StateSink) -> GameState:
    sink.note(FAMILIAR_STATE_NOTE)
    return solve_canonical(
        state.n_disks, PegId.TOWER1, PegId.TOWER2, PegId.TOWER3, state, sink
    )


def restore_to_canonical(
    state: GameState,
    sink: StateSink | None = None,
    rng: RandomSource | None = None,
    *,
    max_steps: int | None = None,
    progress: SearchProgressReporter | None = None,
) -> GameState:
    """Random-walk an arbitrary state back to the canonical stack, then solve it.

    Announces the restoration on `sink` before searching. Each epoch starts
    at the original state. Walking back onto it drops the history collected
    so far; reaching the canonical state shows the history in visit order
    followed by the canonical state, and hands off to the classical solver.
    Without `max_steps` the search is unbounded.
    """

    if max_steps is not None and max_steps < 1:
        raise ConfigurationError(f"max_steps must be >= 1, got {max_steps}")
    sink = sink or NullSink()
    progress = progress or NoopSearchProgressReporter()
    source = resolve_rng(rng)
    sink.note(RESTORING_NOTE)

    target = create_canonical(state.n_disks)
    original = state
    current = state
    history: list[GameState] = []
    steps = 0
    epochs = 0

    while True:
        if max_steps is not None and steps >= max_steps:
            raise SearchBudgetExceededError(
                f"canonical state not reached within {max_steps} random moves",
                steps=steps,
            )
        nxt = random_walk(current, 1, source)
        steps += 1

        if nxt == target:
            progress.on_step(steps, len(history))
            for visited in history:
                sink.show(visited)
            sink.show(nxt)
            return _solve_from_familiar(nxt, sink)

        if nxt == original:
            epochs += 1
            history = []
            progress.on_epoch(epochs)
        else:
            history.append(nxt)
        current = nxt
        progress.on_step(steps, len(history))


def find_restoration_path(
    state: GameState,
    *,
    max_depth: int | None = None,
    progress: SearchProgressReporter | None = None,
) -> list[GameState]:
    """Shortest sequence of legal moves from `state` to the canonical state.

    The returned list excludes `state` and ends with the canonical state; it
    is empty when `state` is already canonical. `progress.on_step` is called
    once per completed depth level with the size of the next frontier.
    """

    target = create_canonical(state.n_disks)
    if state == target:
        return []

    progress = progress or NoopSearchProgressReporter()
    parents: dict[GameState, GameState] = {state: state}
    frontier: deque[GameState] = deque([state])
    depth = 0
    while frontier:
        if max_depth is not None and depth >= max_depth:
            break
        depth += 1
        for _ in range(len(frontier)):
            current = frontier.popleft()
            for from_peg, to_peg in legal_moves(current):
                nxt = move(current, from_peg, to_peg)
                if nxt in parents:
                    continue
                parents[nxt] = current
                if nxt == target:
                    return _unwind(parents, nxt, state)
                frontier.append(nxt)
        progress.on_step(depth, len(frontier))

    raise SearchBudgetExceededError(
        f"canonical state not reachable within {depth} moves",
        steps=depth,
    )


def restore_by_search(
    state: GameState,
    sink: StateSink | None = None,
    *,
    max_depth: int | None = None,
    progress: SearchProgressReporter | None = None,
) -> GameState:
    """Show the shortest path back to the canonical stack, then solve it."""

    sink = sink or NullSink()
    sink.note(RESTORING_NOTE)
    path = find_restoration_path(state, max_depth=max_depth, progress=progress)
    for visited in path:
        sink.show(visited)
    return _solve_from_familiar(path[-1] if path else state, sink)


def _unwind(
    parents: dict[GameState, GameState], end: GameState, start: GameState
) -> list[GameState]:
    path = [end]
    while parents[path[-1]] != start:
        path.append(parents[path[-1]])
    path.reverse()
    return path


def solve(
    state: GameState,
    sink: StateSink | None = None,
    *,
    rng: RandomSource | None = None,
    strategy: Strategy = "random_walk",
    max_steps: int | None = None,
    progress: SearchProgressReporter | None = None,
) -> GameState:
    """Solve onto tower3, restoring an arbitrary start to the canonical stack first."""

    if strategy not in STRATEGIES:
        raise ConfigurationError(
            f"strategy must be one of {list(STRATEGIES)}, got {strategy!r}"
        )
    sink = sink or NullSink()
    if is_canonical(state):
        return solve_canonical(
            state.n_disks, PegId.TOWER1, PegId.TOWER2, PegId.TOWER3, state, sink
        )

    if strategy == "bfs":
        return restore_by_search(
            state, sink, max_depth=max_steps, progress=progress
        )
    return restore_to_canonical(
        state, sink, rng, max_steps=max_steps, progress=progress
    )
