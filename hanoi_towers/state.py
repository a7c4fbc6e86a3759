from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Sequence, TypeAlias

from .errors import InvalidDiskCountError, InvalidPegError, InvalidStateError

Disk: TypeAlias = int
Peg: TypeAlias = tuple[Disk, ...]


class PegId(str, Enum):
    """Fixed identities of the three pegs."""

    TOWER1 = "tower1"
    TOWER2 = "tower2"
    TOWER3 = "tower3"

    @classmethod
    def coerce(cls, value: object) -> "PegId":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError as exc:
                raise InvalidPegError(
                    f"peg must be one of {[p.value for p in cls]}, got {value!r}"
                ) from exc
        raise InvalidPegError(
            f"peg must be a PegId or name, got {type(value).__name__}"
        )


PEG_ORDER: tuple[PegId, ...] = (PegId.TOWER1, PegId.TOWER2, PegId.TOWER3)


@dataclass(frozen=True, slots=True)
class GameState:
    """Immutable snapshot of a three-peg Tower of Hanoi configuration.

    Representation notes:
      - each peg is a tuple of disks listed top->bottom (index 0 is the top).
      - disk sizes are integers 1..n, where 1 is the smallest.
      - pegs are addressed by `PegId`, never by position.
    """

    n_disks: int
    tower1: Peg
    tower2: Peg
    tower3: Peg

    def peg(self, peg_id: PegId) -> Peg:
        return getattr(self, PegId.coerce(peg_id).value)

    def top(self, peg_id: PegId) -> Disk | None:
        stack = self.peg(peg_id)
        return stack[0] if stack else None

    @property
    def pegs(self) -> tuple[Peg, Peg, Peg]:
        return (self.tower1, self.tower2, self.tower3)

    def with_pegs(self, changes: Mapping[PegId, Peg]) -> "GameState":
        values = {peg_id.value: self.peg(peg_id) for peg_id in PEG_ORDER}
        for peg_id, stack in changes.items():
            values[PegId.coerce(peg_id).value] = tuple(stack)
        return GameState(n_disks=self.n_disks, **values)

    def to_dict(self) -> dict[str, Any]:
        return {
            "n_disks": self.n_disks,
            "pegs": {peg_id.value: list(self.peg(peg_id)) for peg_id in PEG_ORDER},
        }

    @classmethod
    def from_pegs(
        cls,
        n_disks: int,
        pegs: Mapping[PegId | str, Sequence[Disk]],
    ) -> "GameState":
        """Build a state from untrusted input, checking disk conservation."""

        _validate_n_disks(n_disks)
        values: dict[str, Peg] = {peg_id.value: () for peg_id in PEG_ORDER}
        for key, stack in pegs.items():
            values[PegId.coerce(key).value] = tuple(int(d) for d in stack)
        state = cls(n_disks=n_disks, **values)
        check_conservation(state)
        return state

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameState":
        n_disks = data.get("n_disks")
        pegs = data.get("pegs")
        if not isinstance(pegs, Mapping):
            raise InvalidStateError("state.pegs must be an object keyed by peg name")
        return cls.from_pegs(n_disks, pegs)  # type: ignore[arg-type]


def _validate_n_disks(n_disks: object) -> None:
    if isinstance(n_disks, bool) or not isinstance(n_disks, int):
        raise InvalidDiskCountError(
            f"n_disks must be int, got {type(n_disks).__name__}"
        )
    if n_disks < 1:
        raise InvalidDiskCountError(f"n_disks must be >= 1, got {n_disks}")


def check_conservation(state: GameState) -> None:
    disks = sorted(d for stack in state.pegs for d in stack)
    if disks != list(range(1, state.n_disks + 1)):
        raise InvalidStateError(
            f"pegs must hold exactly the disks 1..{state.n_disks}, got {disks}"
        )


def is_ordered(state: GameState) -> bool:
    """True when every peg is strictly increasing in size from top to bottom."""

    return all(
        all(upper < lower for upper, lower in zip(stack, stack[1:]))
        for stack in state.pegs
    )


def create_canonical(n_disks: int) -> GameState:
    _validate_n_disks(n_disks)
    return GameState(
        n_disks=n_disks,
        tower1=tuple(range(1, n_disks + 1)),
        tower2=(),
        tower3=(),
    )


def is_canonical(state: GameState) -> bool:
    return state == create_canonical(state.n_disks)
