"""Shared fixtures for the buildings API tests."""
from helpers import FakeSession, make_building
import pytest


@pytest.fixture
def buildings():
    return [make_building() for _ in range(5)]


@pytest.fixture
def fake_session_factory():
    def factory(total: int = 0, rows=(), fail_on: str | None = None) -> FakeSession:
        return FakeSession(total=total, rows=rows, fail_on=fail_on)
    return factory
