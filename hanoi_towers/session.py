from __future__ import annotations

import argparse
import random
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .config import load_config, merge_dicts, resolve_config
from .display import FanoutSink, RecordingSink, StateSink, TextSink
from .errors import HanoiError
from .progress import build_search_progress_reporter
from .restore import STRATEGIES, solve
from .state import GameState
from .walk import create_state


@dataclass(frozen=True, slots=True)
class SessionResult:
    initial_state: GameState
    final_state: GameState
    restore_moves: int
    solve_moves: int
    recording: RecordingSink


def run_session(
    config: dict[str, Any],
    *,
    sink: StateSink | None = None,
    explicit_progress: bool = False,
) -> SessionResult:
    """Create a puzzle from a resolved config and solve it, showing every state."""

    rng = random.Random(config["seed"])
    initial = create_state(
        config["n_disks"],
        config["arbitrary"],
        rng,
        shuffle_factor=config["shuffle_factor"],
    )
    recorder = RecordingSink(
        metadata={
            "n_disks": config["n_disks"],
            "arbitrary": config["arbitrary"],
            "seed": config["seed"],
            "strategy": config["strategy"],
        }
    )
    target = recorder if sink is None else FanoutSink(sink, recorder)
    progress = build_search_progress_reporter(
        enabled=bool(config["progress"]) and config["arbitrary"],
        total_steps=config["max_steps"],
        explicit_request=explicit_progress,
    )
    try:
        final = solve(
            initial,
            target,
            rng=rng,
            strategy=config["strategy"],
            max_steps=config["max_steps"],
            progress=progress,
        )
    finally:
        progress.close()

    return SessionResult(
        initial_state=initial,
        final_state=final,
        restore_moves=len(recorder.states_in_phase("restore")),
        solve_moves=len(recorder.states_in_phase("solve")),
        recording=recorder,
    )


def _cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for key in (
        "n_disks",
        "arbitrary",
        "seed",
        "shuffle_factor",
        "strategy",
        "max_steps",
    ):
        value = getattr(args, key)
        if value is not None:
            overrides[key] = value
    if args.progress:
        overrides["progress"] = True
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hanoi-towers solve",
        description=(
            "Create a Tower of Hanoi puzzle and print every state while solving it."
        )
    )
    parser.add_argument("--config", help="Path to JSON config (session defaults).")
    parser.add_argument("--n-disks", type=int, default=None)
    parser.add_argument(
        "--arbitrary",
        action="store_true",
        default=None,
        help="Shuffle the starting stack with random legal moves.",
    )
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--shuffle-factor",
        type=int,
        default=None,
        help="Random moves per disk used to shuffle an arbitrary start (default: 200).",
    )
    parser.add_argument("--strategy", choices=list(STRATEGIES), default=None)
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Give up restoring after this many moves (default: unbounded).",
    )
    parser.add_argument("--record", help="Write the session recording JSON here.")
    parser.add_argument("--frames-dir", help="Write one PNG frame per state here.")
    parser.add_argument(
        "--quiet", action="store_true", help="Do not print states to stdout."
    )
    parser.add_argument(
        "--progress", action="store_true", help="Show tqdm progress while restoring."
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        base = load_config(args.config) if args.config else {}
        config = resolve_config(merge_dicts(base, _cli_overrides(args)))
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc

    sinks: list[StateSink] = []
    if not args.quiet:
        sinks.append(TextSink())
    if args.frames_dir:
        from .vision import ImageSink

        sinks.append(ImageSink(args.frames_dir))

    try:
        result = run_session(
            config,
            sink=FanoutSink(*sinks),
            explicit_progress=args.progress,
        )
    except HanoiError as exc:
        raise SystemExit(f"Solve failed: {exc}") from exc
    except RuntimeError as exc:
        raise SystemExit(str(exc)) from exc

    if args.record:
        path = result.recording.write(
            Path(args.record), initial_state=result.initial_state
        )
        print(f"Recording written: {path}", file=sys.stderr)

    print(
        f"Solved {config['n_disks']} disks: "
        f"restore_moves={result.restore_moves} solve_moves={result.solve_moves}",
        file=sys.stderr,
        flush=True,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
