"""
Exception hierarchy for the poker core.

Two families:
- IllegalActionError: the caller asked for something the rules forbid right
  now. Nothing has been mutated and the caller may try another action.
- InvariantViolation: the core was driven out of sequence (empty deck,
  wrong card count, acting on a finished hand). These are bugs upstream and
  are never caught inside the core.
"""


class PokerError(Exception):
    """Base class for all poker engine errors."""


class IllegalActionError(PokerError, ValueError):
    """An action outside the current legal set was submitted."""


class InvariantViolation(PokerError, RuntimeError):
    """A structural invariant of the engine was broken."""


class DeckUnderflowError(InvariantViolation):
    """More cards were requested than remain in the deck."""


class InvalidHandError(InvariantViolation):
    """A hand evaluation was requested with an impossible set of cards."""


class HandStateError(InvariantViolation):
    """The hand is not in a state that allows the requested operation."""
