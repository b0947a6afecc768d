"""FastAPI application exposing the classified match feed."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query, Request

from .board import MatchBoard
from .config import AppConfig


def _current_board(request: Request) -> MatchBoard:
    board: MatchBoard = request.app.state.board
    if board.is_stale():
        board.refresh()
    if not board.has_data:
        raise HTTPException(
            status_code=503,
            detail=board.last_error or "The match feed is currently unavailable.",
        )
    board.tick()
    return board


def create_app(board: Optional[MatchBoard] = None, config: Optional[AppConfig] = None) -> FastAPI:
    app = FastAPI(title="Live Sports Match Feed API")
    app.state.board = board or MatchBoard.from_config(config or AppConfig())

    @app.get("/matches")
    def get_matches(request: Request) -> Dict[str, Any]:
        """Return every bucket of the current partition."""

        return _current_board(request).partition.to_dict()

    @app.get("/matches/live")
    def get_live_games(request: Request) -> List[Dict[str, Any]]:
        """Return the featured list of live and today's scheduled matches."""

        partition = _current_board(request).partition
        return [match.to_dict() for match in partition.live_games]

    @app.get("/matches/by-date/{date_key}")
    def get_matches_by_date(date_key: str, request: Request) -> List[Dict[str, Any]]:
        bucket = _current_board(request).partition.by_date.get(date_key)
        if bucket is None:
            raise HTTPException(status_code=404, detail=f"No matches scheduled on {date_key}.")
        return [match.to_dict() for match in bucket]

    @app.get("/events/{event_id}")
    def get_event(event_id: str, request: Request) -> Dict[str, Any]:
        match = _current_board(request).find(event_id)
        if match is None:
            raise HTTPException(status_code=404, detail=f"Event {event_id} not found.")
        payload = match.to_dict()
        payload["watchPath"] = match.watch_path
        return payload

    @app.get("/events/{event_id}/related")
    def get_related_events(
        event_id: str,
        request: Request,
        limit: Optional[int] = Query(
            None,
            ge=1,
            le=50,
            description="Maximum number of related matches.",
        ),
    ) -> List[Dict[str, Any]]:
        """Return live and upcoming matches other than ``event_id``."""

        board = _current_board(request)
        return [match.to_dict() for match in board.related(event_id, limit=limit)]

    return app


app = create_app()
