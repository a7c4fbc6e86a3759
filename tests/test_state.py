from __future__ import annotations

import unittest

from hanoi_towers.errors import (
    InvalidDiskCountError,
    InvalidPegError,
    InvalidStateError,
)
from hanoi_towers.state import (
    GameState,
    PegId,
    create_canonical,
    is_canonical,
    is_ordered,
)


class TestGameState(unittest.TestCase):
    def test_canonical_stacks_everything_on_tower1(self) -> None:
        state = create_canonical(3)
        self.assertEqual(state.peg(PegId.TOWER1), (1, 2, 3))
        self.assertEqual(state.peg(PegId.TOWER2), ())
        self.assertEqual(state.peg(PegId.TOWER3), ())
        self.assertEqual(state.top(PegId.TOWER1), 1)
        self.assertIsNone(state.top(PegId.TOWER3))
        self.assertTrue(is_canonical(state))
        self.assertTrue(is_ordered(state))

    def test_states_compare_by_value(self) -> None:
        self.assertEqual(create_canonical(4), create_canonical(4))
        self.assertNotEqual(create_canonical(4), create_canonical(3))
        self.assertEqual(len({create_canonical(2), create_canonical(2)}), 1)

    def test_invalid_disk_counts_fail_fast(self) -> None:
        for bad in (0, -1, True, 2.0, "3"):
            with self.subTest(bad=bad):
                with self.assertRaises(InvalidDiskCountError):
                    create_canonical(bad)  # type: ignore[arg-type]

    def test_disk_count_error_is_a_value_error(self) -> None:
        with self.assertRaises(ValueError):
            create_canonical(0)

    def test_peg_names_are_accepted(self) -> None:
        state = create_canonical(2)
        self.assertEqual(state.peg("tower1"), (1, 2))  # type: ignore[arg-type]
        with self.assertRaises(InvalidPegError):
            state.peg("tower4")  # type: ignore[arg-type]
        with self.assertRaises(InvalidPegError):
            state.peg(0)  # type: ignore[arg-type]

    def test_from_pegs_checks_conservation(self) -> None:
        state = GameState.from_pegs(3, {"tower2": [1, 3], PegId.TOWER3: [2]})
        self.assertEqual(state.tower1, ())
        self.assertEqual(state.tower2, (1, 3))
        self.assertFalse(is_canonical(state))

        with self.assertRaises(InvalidStateError):
            GameState.from_pegs(3, {"tower1": [1, 2]})
        with self.assertRaises(InvalidStateError):
            GameState.from_pegs(2, {"tower1": [1, 2], "tower2": [2]})

    def test_dict_form_round_trips(self) -> None:
        state = GameState.from_pegs(3, {"tower1": [3], "tower3": [1, 2]})
        data = state.to_dict()
        self.assertEqual(
            data,
            {"n_disks": 3, "pegs": {"tower1": [3], "tower2": [], "tower3": [1, 2]}},
        )
        self.assertEqual(GameState.from_dict(data), state)

    def test_from_dict_requires_named_pegs(self) -> None:
        with self.assertRaises(InvalidStateError):
            GameState.from_dict({"n_disks": 1, "pegs": [[1], [], []]})

    def test_is_ordered_detects_inversions(self) -> None:
        state = GameState(n_disks=2, tower1=(2, 1), tower2=(), tower3=())
        self.assertFalse(is_ordered(state))


if __name__ == "__main__":
    unittest.main()
