"""Pytest fixtures for pyemitter tests."""

import pytest

from pyemitter.config import ConfigType
from pyemitter.lib.events import Emitter


class Session(Emitter):
    """Object that gains event capability by inheritance, as consumers do."""

    def __init__(self, user: str | None = None):
        super().__init__()
        self.user = user
        self.logins = 0

    def login(self, user: str) -> None:
        self.user = user
        self.logins += 1
        self.emit("login", user)


@pytest.fixture
def emitter():
    """Create an emitter with the default configuration."""
    return Emitter()


@pytest.fixture
def isolated_emitter():
    """Create an emitter that logs listener errors instead of raising them."""
    return Emitter(ConfigType.ISOLATED)


@pytest.fixture
def calls():
    """Shared list recording listener calls in order."""
    return []


@pytest.fixture
def session():
    """Create a Session subclassing Emitter."""
    return Session()
