from __future__ import annotations

import os
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from checkers.pieces import Color

from . import STARTING_SIDE_ENV
from .schemas import MoveRequest, PlayerNamesRequest, ResetRequest, SelectRequest, StartingSideRequest
from .session import GameSession, color_from_label


def create_app(starting_side: Optional[Color] = None) -> FastAPI:
    if starting_side is None:
        starting_side = color_from_label(os.environ.get(STARTING_SIDE_ENV, Color.RED.value))

    app = FastAPI(title="Checkers Rules Engine", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )

    session = GameSession(starting_side=starting_side)
    app.state.session = session

    def get_session() -> GameSession:
        return session

    @app.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/board")
    def read_board(session: GameSession = Depends(get_session)):
        return session.serialize()

    @app.get("/legal-moves")
    def read_legal_moves(
        row: int = Query(..., ge=0, le=7),
        col: int = Query(..., ge=0, le=7),
        session: GameSession = Depends(get_session),
    ):
        try:
            return session.get_legal_moves(row, col)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.post("/select")
    def select_piece(payload: SelectRequest, session: GameSession = Depends(get_session)):
        try:
            return session.select_piece(payload)
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc

    @app.post("/move")
    def play_move(payload: MoveRequest, session: GameSession = Depends(get_session)):
        try:
            return session.make_move(payload)
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc

    @app.get("/hint")
    def hint(session: GameSession = Depends(get_session)):
        try:
            return session.hint()
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc

    @app.post("/reset")
    def reset_game(payload: Optional[ResetRequest] = None, session: GameSession = Depends(get_session)):
        return session.reset(payload)

    @app.post("/starting-side")
    def change_starting_side(payload: StartingSideRequest, session: GameSession = Depends(get_session)):
        try:
            return session.set_starting_side(payload)
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc

    @app.get("/stats")
    def read_stats(session: GameSession = Depends(get_session)):
        return session.stats()

    @app.post("/players")
    def rename_players(payload: PlayerNamesRequest, session: GameSession = Depends(get_session)):
        return session.set_player_names(payload)

    @app.post("/draw")
    def agree_draw(session: GameSession = Depends(get_session)):
        try:
            return session.record_draw()
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc

    @app.post("/stats/reset")
    def reset_stats(session: GameSession = Depends(get_session)):
        return session.reset_stats()

    return app


app = create_app()
