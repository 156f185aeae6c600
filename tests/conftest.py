"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

from typing import Generator

import pytest

from src.db.memory_repository import InMemorySessionRepository
from src.ninarow.config import GameConfig
from src.ninarow.session import GameSession


@pytest.fixture
def memory_repository() -> Generator[InMemorySessionRepository, None, None]:
    """Ensures to clear the repository between tests"""
    repo = InMemorySessionRepository()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def classic_session() -> GameSession:
    """Plain 3x3 tic-tac-toe"""
    return GameSession.new_session(GameConfig(size=3, win_length=3))
