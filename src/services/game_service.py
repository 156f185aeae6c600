"""Orchestration of communication from API requests to the game session and the session store (and the reverse direction)."""

import logging
from typing import Callable
from uuid import UUID

from src.api.models import (
    CreateSessionRequest,
    DeleteSessionRequest,
    GetSessionRequest,
    JumpRequest,
    MoveRequest,
    ResetRequest,
    ResizeRequest,
    SessionResponse,
    SettingsRequest,
    WinLengthRequest,
)
from src.core.exceptions import InvalidRequestError, RepositoryError
from src.core.models import SessionModel
from src.db.repository import SessionRepository
from src.ninarow.config import DEFAULT_IMAGE_O, DEFAULT_IMAGE_X, GameConfig
from src.ninarow.session import GameSession
from src.ninarow.symbols import symbol_for

logger = logging.getLogger(__name__)


class GameService:
    """Orchestration of layers for the N-in-a-row game."""

    def __init__(self, repository: SessionRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """Start a new game with the requested settings."""

        config = GameConfig(
            size=request.board_size,
            win_length=request.win_length,
            highlight_wins=request.highlight_wins,
            symbol_mode=request.symbol_mode,
            image_x=request.image_x or DEFAULT_IMAGE_X,
            image_o=request.image_o or DEFAULT_IMAGE_O,
        )
        session = GameSession.new_session(config)

        # Store the SessionModel in the repository
        stored_session, session_id = self.repo.create_session(session.to_model())
        logger.info("Created session %s (%sx%s)", session_id, config.size, config.size)

        return self._create_session_response(session_id, stored_session)

    def get_session(self, request: GetSessionRequest) -> SessionResponse:
        """Retrieve the current state, ex. to re-render after a page load."""
        session_model = self._fetch_session(request.session_id)
        return self._create_session_response(request.session_id, session_model)

    def play_move(self, request: MoveRequest) -> SessionResponse:
        """Make a move attempt."""

        def move(session: GameSession) -> None:
            if request.cell is not None:
                index = request.cell
            elif request.row is not None and request.col is not None:
                index = session.current_board.index(request.row, request.col)
            else:
                raise InvalidRequestError(
                    "Supply either 'cell' or both 'row' and 'col' to make a move."
                )
            session.apply_move(index)

        return self._update(request.session_id, move)

    def jump_to(self, request: JumpRequest) -> SessionResponse:
        """Time-travel to an earlier (or later) snapshot."""
        return self._update(
            request.session_id, lambda session: session.jump_to(request.move)
        )

    def reset(self, request: ResetRequest) -> SessionResponse:
        return self._update(request.session_id, lambda session: session.reset())

    def resize(self, request: ResizeRequest) -> SessionResponse:
        """Change the board size. Always starts a fresh game."""
        return self._update(
            request.session_id, lambda session: session.resize(request.board_size)
        )

    def set_win_length(self, request: WinLengthRequest) -> SessionResponse:
        return self._update(
            request.session_id,
            lambda session: session.set_win_length(request.win_length),
        )

    def update_settings(self, request: SettingsRequest) -> SessionResponse:
        """Rendering preferences do not touch the game itself."""
        return self._update(
            request.session_id,
            lambda session: session.update_preferences(
                highlight_wins=request.highlight_wins,
                symbol_mode=request.symbol_mode,
                image_x=request.image_x,
                image_o=request.image_o,
            ),
        )

    def delete_session(self, request: DeleteSessionRequest) -> None:
        """Handle a request to delete a session record."""
        self.repo.delete_session(request.session_id)

    # -- Internal helpers --
    def _update(
        self, session_id: UUID, operation: Callable[[GameSession], None]
    ) -> SessionResponse:
        """
        Shared flow of every request that changes a session
        ---

        1. Retrieve persisted SessionModel from repository
        2. Rebuild the GameSession and perform the operation (exceptions propagate, nothing gets stored)
        3. Store the updated SessionModel and return a SessionResponse
        """
        stored_model = self._fetch_session(session_id)
        session = GameSession.from_model(stored_model)

        operation(session)

        updated_model = session.to_model()
        self.repo.update_session(session_id, updated_model)
        return self._create_session_response(session_id, updated_model)

    def _create_session_response(
        self, session_id: UUID, model: SessionModel
    ) -> SessionResponse:
        """Convert info in SessionModel to a SessionResponse (for session with given ID.)"""
        session = GameSession.from_model(model)
        board = session.current_board
        status = session.current_status()
        return SessionResponse(
            session_id=session_id,
            board_size=session.config.size,
            win_length=session.config.win_length,
            board=list(board),
            symbols=[symbol_for(cell, session.config) for cell in board],
            current_move=session.current_move,
            history=model.history,
            moves=session.move_list(),
            status=status.state,
            winner=status.winner,
            winning_line=list(status.line),
            highlighted_cells=list(session.highlighted_cells()),
            is_draw=status.is_draw,
            next_player=status.next_player,
            status_message=status.message,
        )

    def _fetch_session(self, session_id: UUID) -> SessionModel:
        """Attempt to find the session in the repository and raise error if it fails."""
        session_model = self.repo.get_session(session_id)
        if session_model is None:
            raise RepositoryError(f"Session with {session_id=} not found.")
        return session_model
