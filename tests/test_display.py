from __future__ import annotations

import io
import json
import tempfile
import unittest
from pathlib import Path

from hanoi_towers.display import (
    FAMILIAR_STATE_NOTE,
    RESTORING_NOTE,
    SEPARATOR,
    FanoutSink,
    NullSink,
    RecordingSink,
    TextSink,
    display_state,
    format_state,
)
from hanoi_towers.state import GameState, create_canonical


class TestDisplay(unittest.TestCase):
    def test_format_lists_pegs_in_order_then_separator(self) -> None:
        state = GameState(n_disks=3, tower1=(3,), tower2=(), tower3=(1, 2))
        self.assertEqual(
            format_state(state).splitlines(),
            ["tower1: [3]", "tower2: []", "tower3: [1,2]", SEPARATOR],
        )
        self.assertEqual(SEPARATOR, "---------------")

    def test_display_state_writes_to_stream(self) -> None:
        buffer = io.StringIO()
        display_state(create_canonical(2), buffer)
        self.assertTrue(buffer.getvalue().startswith("tower1: [1,2]\n"))

    def test_text_sink_notes(self) -> None:
        buffer = io.StringIO()
        sink = TextSink(buffer)
        sink.note(RESTORING_NOTE)
        sink.show(create_canonical(1))
        self.assertEqual(
            buffer.getvalue().splitlines(),
            [
                RESTORING_NOTE,
                SEPARATOR,
                "tower1: [1]",
                "tower2: []",
                "tower3: []",
                SEPARATOR,
            ],
        )

    def test_text_sink_frames_familiar_note(self) -> None:
        buffer = io.StringIO()
        TextSink(buffer).note(FAMILIAR_STATE_NOTE)
        self.assertEqual(
            buffer.getvalue().splitlines(),
            [SEPARATOR, FAMILIAR_STATE_NOTE, SEPARATOR, SEPARATOR],
        )

    def test_recording_sink_tracks_phases(self) -> None:
        sink = RecordingSink(metadata={"seed": 1})
        canonical = create_canonical(1)
        solved = GameState(n_disks=1, tower1=(), tower2=(), tower3=(1,))
        sink.note(RESTORING_NOTE)
        sink.show(canonical)
        sink.note(FAMILIAR_STATE_NOTE)
        sink.show(solved)

        self.assertEqual(sink.states, [canonical, solved])
        self.assertEqual(sink.states_in_phase("restore"), [canonical])
        self.assertEqual(sink.states_in_phase("solve"), [solved])

        recording = sink.build_recording(initial_state=canonical)
        self.assertEqual(recording["metadata"]["seed"], 1)
        self.assertEqual(recording["metadata"]["restore_steps"], 1)
        self.assertEqual(recording["metadata"]["solve_steps"], 1)
        self.assertEqual(
            recording["metadata"]["notes"], [RESTORING_NOTE, FAMILIAR_STATE_NOTE]
        )
        self.assertEqual(
            [step["index"] for step in recording["steps"]], [1, 2]
        )
        self.assertEqual(recording["steps"][1]["state"]["pegs"]["tower3"], [1])

    def test_recording_sink_write(self) -> None:
        sink = RecordingSink()
        sink.show(create_canonical(2))
        with tempfile.TemporaryDirectory() as tmp:
            path = sink.write(Path(tmp) / "nested" / "session.json")
            data = json.loads(path.read_text())
        self.assertEqual(len(data["steps"]), 1)
        self.assertEqual(data["steps"][0]["phase"], "solve")

    def test_fanout_sink(self) -> None:
        first = RecordingSink()
        second = RecordingSink()
        sink = FanoutSink(first, NullSink(), second)
        sink.show(create_canonical(1))
        sink.note("hello")
        self.assertEqual(first.events, second.events)
        self.assertEqual(len(first.events), 2)


if __name__ == "__main__":
    unittest.main()
