"""
Pytest configuration and shared fixtures.
"""

from types import SimpleNamespace

import pytest

from taskboard.core.config import settings
from taskboard.services.task_service import TaskService
from taskboard.services.user_service import UserService
from tests.fakes import FakeClock, FakeTaskRepository, FakeUserRepository


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests, no external deps")
    config.addinivalue_line("markers", "db: runs the SQLAlchemy repositories against a temporary SQLite file")


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    """The minimum bcrypt cost keeps registration-heavy tests quick."""
    monkeypatch.setattr(settings, "BCRYPT_ROUNDS", 4)


@pytest.fixture()
def repos():
    clock = FakeClock()
    return SimpleNamespace(users=FakeUserRepository(clock), tasks=FakeTaskRepository(clock))


@pytest.fixture()
def people(repos):
    """An admin and two plain users."""
    return SimpleNamespace(
        admin=repos.users.add("Ada Admin", "ada@example.com", role="admin"),
        alice=repos.users.add("Alice", "alice@example.com"),
        bob=repos.users.add("Bob", "bob@example.com"),
    )


@pytest.fixture()
def task_service(repos) -> TaskService:
    return TaskService(repos.tasks, repos.users)


@pytest.fixture()
def user_service(repos) -> UserService:
    return UserService(repos.users, repos.tasks)
