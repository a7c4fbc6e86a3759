from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, TextIO

from .state import PEG_ORDER, GameState

SEPARATOR = "-" * 15
FAMILIAR_STATE_NOTE = "Familiar state achieved - solving"
RESTORING_NOTE = "Restoring to familiar state"


def format_state(state: GameState) -> str:
    lines = [
        f"{peg_id.value}: [{','.join(str(d) for d in state.peg(peg_id))}]"
        for peg_id in PEG_ORDER
    ]
    lines.append(SEPARATOR)
    return "\n".join(lines)


def display_state(state: GameState, stream: TextIO | None = None) -> None:
    print(format_state(state), file=stream or sys.stdout)


class StateSink:
    """Receives every state the solvers produce, in move order."""

    def show(self, state: GameState) -> None:
        raise NotImplementedError

    def note(self, text: str) -> None:
        raise NotImplementedError


class NullSink(StateSink):
    def show(self, state: GameState) -> None:  # noqa: ARG002
        return

    def note(self, text: str) -> None:  # noqa: ARG002
        return


class TextSink(StateSink):
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdout

    def show(self, state: GameState) -> None:
        display_state(state, self.stream)

    def note(self, text: str) -> None:
        if text == FAMILIAR_STATE_NOTE:
            # framed: separator above, doubled separator below
            print(SEPARATOR, file=self.stream)
            print(text, file=self.stream)
            print(SEPARATOR, file=self.stream)
        else:
            print(text, file=self.stream)
        print(SEPARATOR, file=self.stream)


class RecordingSink(StateSink):
    """Keeps the displayed path so it can be inspected or written as JSON.

    States shown between the restoring note and the familiar-state note
    belong to the "restore" phase, the rest to the "solve" phase.
    """

    def __init__(self, metadata: dict[str, Any] | None = None) -> None:
        self.metadata: dict[str, Any] = dict(metadata or {})
        self.states: list[GameState] = []
        self.events: list[dict[str, Any]] = []
        self._phase = "solve"

    def show(self, state: GameState) -> None:
        self.states.append(state)
        self.events.append({"kind": "state", "phase": self._phase, "state": state})

    def note(self, text: str) -> None:
        if text == RESTORING_NOTE:
            self._phase = "restore"
        elif text == FAMILIAR_STATE_NOTE:
            self._phase = "solve"
        self.events.append({"kind": "note", "phase": self._phase, "text": text})

    def states_in_phase(self, phase: str) -> list[GameState]:
        return [
            event["state"]
            for event in self.events
            if event["kind"] == "state" and event["phase"] == phase
        ]

    def build_recording(
        self, *, initial_state: GameState | None = None
    ) -> dict[str, Any]:
        steps: list[dict[str, Any]] = []
        notes: list[str] = []
        for event in self.events:
            if event["kind"] == "note":
                notes.append(event["text"])
                continue
            steps.append(
                {
                    "index": len(steps) + 1,
                    "phase": event["phase"],
                    "state": event["state"].to_dict(),
                }
            )
        metadata = {
            **self.metadata,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "notes": notes,
            "restore_steps": sum(1 for s in steps if s["phase"] == "restore"),
            "solve_steps": sum(1 for s in steps if s["phase"] == "solve"),
        }
        if initial_state is not None:
            metadata["initial_state"] = initial_state.to_dict()
            metadata.setdefault("n_disks", initial_state.n_disks)
        return {"metadata": metadata, "steps": steps}

    def write(
        self, path: str | Path, *, initial_state: GameState | None = None
    ) -> Path:
        out_path = Path(path)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        recording = self.build_recording(initial_state=initial_state)
        out_path.write_text(json.dumps(recording, indent=2))
        return out_path


class FanoutSink(StateSink):
    def __init__(self, *sinks: StateSink) -> None:
        self.sinks = list(sinks)

    def show(self, state: GameState) -> None:
        for sink in self.sinks:
            sink.show(state)

    def note(self, text: str) -> None:
        for sink in self.sinks:
            sink.note(text)
