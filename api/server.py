"""FastAPI server exposing click-driven game sessions."""

from __future__ import annotations

import logging
from typing import Literal

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from chessrules.board import Board
from chessrules.constants import BLACK, WHITE, opposite, side_name
from chessrules.errors import ChessRulesError, IllegalMoveError, InvalidSquareError
from chessrules.game import Game
from chessrules.move import parse_move_squares
from chessrules.movegen import in_check
from chessrules.perft import perft, perft_divide
from chessrules.session import GameSession
from chessrules.square import Square, parse_square, square_name

from .sessions import SessionLimitError, SessionStore, UnknownSessionError
from .settings import load_settings


class PositionRequest(BaseModel):
    diagram: str | None = Field(default=None, max_length=256)
    turn: Literal["w", "b"] = Field(default="w")


class SquareRequest(BaseModel):
    square: str = Field(min_length=2, max_length=2)


class MoveRequest(BaseModel):
    move: str = Field(min_length=4, max_length=5)


class PerftRequest(PositionRequest):
    depth: int = Field(default=2, ge=1, le=3)
    divide: bool = Field(default=False)


settings = load_settings()
logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
store = SessionStore(settings.max_sessions)

app = FastAPI(title="Chess Rules API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _game_from_request(payload: PositionRequest) -> Game:
    turn = WHITE if payload.turn == "w" else BLACK
    if payload.diagram is None:
        return Game(turn=turn)
    try:
        board = Board.from_diagram(payload.diagram)
        board.find_king(WHITE)
        board.find_king(BLACK)
    except (ValueError, ChessRulesError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if in_check(board, opposite(turn)):
        raise HTTPException(status_code=400, detail=f"{side_name(opposite(turn))} is in check but not to move")
    return Game(board, turn)


def _parse_square(name: str) -> Square:
    try:
        return parse_square(name)
    except InvalidSquareError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _unknown_session(session_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Unknown session: {session_id}")


def _session_payload(session_id: str, session: GameSession) -> dict:
    view = session.snapshot()
    return {
        "session_id": session_id,
        "board": str(session.game.board).splitlines(),
        "rows": [list(row) for row in view.rows],
        "turn": "w" if view.turn == WHITE else "b",
        "in_check": in_check(session.game.board, view.turn),
        "selected": square_name(view.selected) if view.selected is not None else None,
        "highlights": sorted(square_name(square) for square in view.highlights),
        "last_move": view.last_move.uci() if view.last_move else None,
        "state": view.state.value,
    }


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/sessions")
def create_session(payload: PositionRequest | None = None) -> dict:
    game = _game_from_request(payload or PositionRequest())
    try:
        session_id = store.create(game)
    except SessionLimitError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    with store.checkout(session_id) as session:
        return _session_payload(session_id, session)


@app.get("/sessions/{session_id}")
def get_session(session_id: str) -> dict:
    try:
        with store.checkout(session_id) as session:
            return _session_payload(session_id, session)
    except UnknownSessionError as exc:
        raise _unknown_session(session_id) from exc


@app.delete("/sessions/{session_id}")
def delete_session(session_id: str) -> dict[str, str]:
    try:
        store.remove(session_id)
    except UnknownSessionError as exc:
        raise _unknown_session(session_id) from exc
    return {"status": "deleted"}


@app.post("/sessions/{session_id}/legal-moves")
def session_legal_moves(session_id: str, payload: SquareRequest) -> dict:
    square = _parse_square(payload.square)
    try:
        with store.checkout(session_id) as session:
            moves = session.game.legal_moves(square)
    except UnknownSessionError as exc:
        raise _unknown_session(session_id) from exc
    return {"square": square_name(square), "moves": sorted(square_name(target) for target in moves)}


@app.post("/sessions/{session_id}/click")
def click(session_id: str, payload: SquareRequest) -> dict:
    square = _parse_square(payload.square)
    try:
        with store.checkout(session_id) as session:
            played = session.click(square)
            response = _session_payload(session_id, session)
    except UnknownSessionError as exc:
        raise _unknown_session(session_id) from exc
    response["played"] = played.uci() if played else None
    return response


@app.post("/sessions/{session_id}/move")
def move(session_id: str, payload: MoveRequest) -> dict:
    try:
        from_square, to_square = parse_move_squares(payload.move)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    try:
        with store.checkout(session_id) as session:
            try:
                session.game.play(from_square, to_square)
            except IllegalMoveError as exc:
                raise HTTPException(status_code=400, detail=str(exc)) from exc
            session.clear_selection()
            return _session_payload(session_id, session)
    except UnknownSessionError as exc:
        raise _unknown_session(session_id) from exc


@app.post("/perft")
def run_perft(payload: PerftRequest) -> dict:
    game = _game_from_request(payload)
    if payload.divide:
        return {"divide": perft_divide(game, payload.depth)}
    return {"nodes": perft(game, payload.depth)}
