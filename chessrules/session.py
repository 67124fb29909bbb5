"""Click-driven selection flow on top of a single game."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .constants import EMPTY, GameState, owner
from .game import Game
from .move import Move
from .square import Square, require_square

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BoardView:
    """Read-only snapshot handed to the presentation layer."""

    rows: tuple[tuple[int, ...], ...]
    selected: Square | None
    highlights: frozenset[Square]
    turn: int
    last_move: Move | None
    state: GameState


class GameSession:
    """Tracks the selected square and its highlighted destinations.

    The first click on a piece of the side to move selects it; the second
    click either plays the move (when it lands on a highlighted square) or
    just drops the selection.
    """

    __slots__ = ("game", "selected", "highlights")

    def __init__(self, game: Game | None = None):
        self.game = Game() if game is None else game
        self.selected: Square | None = None
        self.highlights: list[Square] = []

    def click(self, square: Square) -> Move | None:
        require_square(square)
        if self.game.is_over():
            return None

        if self.selected is None:
            piece = self.game.board.piece_at(square)
            if piece != EMPTY and owner(piece) == self.game.turn:
                self.selected = square
                self.highlights = self.game.legal_moves(square)
            return None

        played = None
        if square in self.highlights:
            self.game.apply_move(self.selected, square)
            self.game.update_state()
            played = self.game.last_move
        else:
            _LOGGER.debug("deselected %s", self.selected)
        self.clear_selection()
        return played

    def clear_selection(self) -> None:
        self.selected = None
        self.highlights = []

    def snapshot(self) -> BoardView:
        return BoardView(
            rows=self.game.board.rows(),
            selected=self.selected,
            highlights=frozenset(self.highlights),
            turn=self.game.turn,
            last_move=self.game.last_move,
            state=self.game.state,
        )
