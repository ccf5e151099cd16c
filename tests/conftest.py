import pytest

from connectfour.debug import debug, DebugLevel
from connectfour.game.engine import GameEngine


@pytest.fixture
def engine():
    return GameEngine()


@pytest.fixture(autouse=True)
def quiet_logging():
    debug.configure(level=DebugLevel.WARNING, components=[])
    yield
    debug.configure(level=DebugLevel.WARNING, components=[], log_file="")
