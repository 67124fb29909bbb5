"""Exceptions raised by the rules engine."""

from __future__ import annotations


class ChessRulesError(Exception):
    """Base class for rules-engine errors."""


class InvalidSquareError(ChessRulesError, ValueError):
    """A square lies outside the 8x8 board or cannot be parsed."""


class IllegalMoveError(ChessRulesError):
    """A (from, to) pair is not in the legal move set of the position."""


class MissingKingError(ChessRulesError, RuntimeError):
    """A side has no king, or more than one.

    Positions reached through normal play always hold exactly one king per
    side, so this signals corrupted state rather than a game outcome.
    """
