from __future__ import annotations


class HanoiError(Exception):
    """Base exception for the Tower of Hanoi engine."""


class ConfigurationError(HanoiError, ValueError):
    """Raised when a caller asks for something the engine cannot define."""


class InvalidPegPairError(ConfigurationError):
    """Raised when a move or solve names the same peg twice."""


class InvalidDiskCountError(ConfigurationError):
    """Raised when the number of disks is not a positive integer."""


class InvalidPegError(HanoiError, ValueError):
    """Raised when a peg identifier cannot be resolved."""


class InvalidStateError(HanoiError, ValueError):
    """Raised when pegs do not hold exactly the disks 1..n."""


class SearchBudgetExceededError(HanoiError):
    """Raised when a restoration search runs out of its step budget."""

    def __init__(self, message: str, *, steps: int) -> None:
        super().__init__(message)
        self.steps = steps
