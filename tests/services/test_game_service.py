"""Unit tests for src/services/game_service.py"""

from uuid import UUID, uuid4

import pytest

from src.core.exceptions import (
    CellOccupiedError,
    GameAlreadyDecidedError,
    GameError,
    IndexOutOfRangeError,
    InvalidRequestError,
    RepositoryError,
)
from src.core.shared_types import Player, Status
from src.db.memory_repository import InMemorySessionRepository
from src.services.game_service import (
    CreateSessionRequest,
    DeleteSessionRequest,
    GameService,
    GetSessionRequest,
    JumpRequest,
    MoveRequest,
    ResetRequest,
    ResizeRequest,
    SessionResponse,
    SettingsRequest,
    WinLengthRequest,
)


@pytest.fixture
def service(memory_repository: InMemorySessionRepository) -> GameService:
    return GameService(memory_repository)


def _new_session(service: GameService, **settings: object) -> UUID:
    return service.create_session(CreateSessionRequest(**settings)).session_id


def _play(service: GameService, session_id: UUID, cells: list[int]) -> SessionResponse:
    response = service.get_session(GetSessionRequest(session_id=session_id))
    for cell in cells:
        response = service.play_move(MoveRequest(session_id=session_id, cell=cell))
    return response


# --- SERVICE - CREATE / GET ----
def test_create_a_new_session(
    service: GameService, memory_repository: InMemorySessionRepository
) -> None:
    """Check that a new session is created, stored in the repo, and the response describes an empty board."""
    response = service.create_session(CreateSessionRequest(board_size=4, win_length=3))

    # Check response structure
    assert isinstance(response, SessionResponse)
    assert isinstance(response.session_id, UUID)

    # Check response data
    assert response.board_size == 4
    assert response.win_length == 3
    assert response.board == [None] * 16
    assert response.symbols == [""] * 16
    assert response.current_move == 0
    assert response.history == ["..../..../..../...."]
    assert response.moves == ["Go to game start"]
    assert response.status == Status.IN_PROGRESS
    assert response.winner is None
    assert response.winning_line == []
    assert response.highlighted_cells == []
    assert response.is_draw is False
    assert response.next_player == Player.X
    assert response.status_message == "Next player: X"

    # Check stored data
    stored = memory_repository.get_session(response.session_id)
    assert stored is not None
    assert stored.size == 4
    assert stored.history == ["..../..../..../...."]
    assert stored.current_move == 0


def test_create_clamps_settings(service: GameService) -> None:
    response = service.create_session(CreateSessionRequest(board_size=15, win_length=12))
    assert response.board_size == 10
    assert response.win_length == 10


def test_get_session(service: GameService) -> None:
    session_id = _new_session(service)
    response = service.get_session(GetSessionRequest(session_id=session_id))
    assert response.session_id == session_id
    assert response.current_move == 0


def test_unknown_session(service: GameService) -> None:
    with pytest.raises(RepositoryError):
        service.get_session(GetSessionRequest(session_id=uuid4()))
    with pytest.raises(RepositoryError):
        service.play_move(MoveRequest(session_id=uuid4(), cell=0))


# --- SERVICE - MOVES ----
def test_play_move(service: GameService) -> None:
    session_id = _new_session(service)
    response = service.play_move(MoveRequest(session_id=session_id, cell=4))

    assert response.current_move == 1
    assert response.board[4] == Player.X
    assert response.symbols[4] == "X"
    assert response.next_player == Player.O
    assert response.history == [".../.../...", ".../.X./..."]
    assert response.moves == ["Go to game start", "Go to move #1"]


def test_play_move_by_row_and_col(service: GameService) -> None:
    session_id = _new_session(service, board_size=5)
    response = service.play_move(MoveRequest(session_id=session_id, row=2, col=3))
    assert response.board[13] == Player.X


def test_play_move_by_row_and_col_out_of_bounds(service: GameService) -> None:
    session_id = _new_session(service)
    with pytest.raises(IndexOutOfRangeError):
        service.play_move(MoveRequest(session_id=session_id, row=3, col=0))


def test_move_request_without_target(
    service: GameService, memory_repository: InMemorySessionRepository
) -> None:
    """A request built without validation (model_construct) and no target cell is rejected, nothing gets stored."""
    session_id = _new_session(service)
    stored_before = memory_repository.get_session(session_id)

    with pytest.raises(InvalidRequestError):
        service.play_move(MoveRequest.model_construct(session_id=session_id, row=1))

    assert memory_repository.get_session(session_id) == stored_before


def test_x_wins(service: GameService) -> None:
    session_id = _new_session(service)
    response = _play(service, session_id, [0, 4, 1, 5, 2])

    assert response.status == Status.WON
    assert response.winner == Player.X
    assert response.winning_line == [0, 1, 2]
    assert response.highlighted_cells == [0, 1, 2]
    assert response.status_message == "Winner: X"


def test_draw(service: GameService) -> None:
    session_id = _new_session(service)
    response = _play(service, session_id, [0, 1, 2, 4, 3, 5, 7, 6, 8])

    assert response.status == Status.DRAW
    assert response.is_draw is True
    assert response.winner is None
    assert response.status_message == "Draw"


def test_failed_move_is_not_stored(
    service: GameService, memory_repository: InMemorySessionRepository
) -> None:
    """Make sure service propagates the exceptions, and nothing gets stored."""
    session_id = _new_session(service)
    _play(service, session_id, [4])
    stored_before = memory_repository.get_session(session_id)

    with pytest.raises(CellOccupiedError):
        service.play_move(MoveRequest(session_id=session_id, cell=4))

    assert memory_repository.get_session(session_id) == stored_before


def test_move_after_win(service: GameService) -> None:
    session_id = _new_session(service)
    _play(service, session_id, [0, 4, 1, 5, 2])

    # Test any top-level custom exception is raised, and the specific one
    with pytest.raises(GameError):
        service.play_move(MoveRequest(session_id=session_id, cell=8))
    with pytest.raises(GameAlreadyDecidedError):
        service.play_move(MoveRequest(session_id=session_id, cell=8))


# --- SERVICE - TIME TRAVEL ----
def test_jump_and_branch(service: GameService) -> None:
    session_id = _new_session(service)
    _play(service, session_id, [4, 0, 8, 2])

    jumped = service.jump_to(JumpRequest(session_id=session_id, move=1))
    assert jumped.current_move == 1
    assert len(jumped.history) == 5
    assert jumped.board == [None, None, None, None, Player.X, None, None, None, None]
    assert jumped.next_player == Player.O

    branched = service.play_move(MoveRequest(session_id=session_id, cell=6))
    assert branched.current_move == 2
    assert branched.history == [".../.../...", ".../.X./...", ".../.X./O.."]


def test_jump_out_of_range(service: GameService) -> None:
    session_id = _new_session(service)
    with pytest.raises(IndexOutOfRangeError):
        service.jump_to(JumpRequest(session_id=session_id, move=1))


# --- SERVICE - RESET / RESIZE / WIN LENGTH / SETTINGS ----
def test_reset(service: GameService) -> None:
    session_id = _new_session(service)
    _play(service, session_id, [0, 4, 1, 5, 2])

    response = service.reset(ResetRequest(session_id=session_id))
    assert response.current_move == 0
    assert response.history == [".../.../..."]
    assert response.status == Status.IN_PROGRESS


def test_resize(service: GameService) -> None:
    session_id = _new_session(service, board_size=8, win_length=7)
    _play(service, session_id, [0, 1, 2])

    response = service.resize(ResizeRequest(session_id=session_id, board_size=5))
    assert response.board_size == 5
    assert response.win_length == 5
    assert response.board == [None] * 25
    assert response.current_move == 0
    assert response.history == ["...../...../...../...../....."]


def test_set_win_length(service: GameService) -> None:
    session_id = _new_session(service, board_size=5, win_length=4)
    _play(service, session_id, [0, 5, 1, 6, 2])

    response = service.set_win_length(WinLengthRequest(session_id=session_id, win_length=3))
    assert response.win_length == 3
    assert response.current_move == 5
    assert response.winner == Player.X
    assert response.winning_line == [0, 1, 2]


def test_update_settings(service: GameService) -> None:
    session_id = _new_session(service)
    _play(service, session_id, [0, 4, 1, 5, 2])

    response = service.update_settings(
        SettingsRequest(session_id=session_id, highlight_wins=False, symbol_mode="emoji")
    )
    assert response.highlighted_cells == []
    assert response.winning_line == [0, 1, 2]
    assert response.symbols[:3] == ["❌", "❌", "❌"]
    assert response.symbols[4] == "⭕"
    assert response.current_move == 5


def test_custom_images(service: GameService) -> None:
    session_id = _new_session(
        service, symbol_mode="image", image_x="https://example.com/x.png"
    )
    response = _play(service, session_id, [0, 4])
    assert response.symbols[0] == "https://example.com/x.png"
    assert response.symbols[4].endswith("2b55.svg")


# --- SERVICE - DELETE ----
def test_delete_session(
    service: GameService, memory_repository: InMemorySessionRepository
) -> None:
    session_id = _new_session(service)
    service.delete_session(DeleteSessionRequest(session_id=session_id))
    assert memory_repository.get_session(session_id) is None
    with pytest.raises(RepositoryError):
        service.get_session(GetSessionRequest(session_id=session_id))
