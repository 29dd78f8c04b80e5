from __future__ import annotations

from datetime import timedelta
from uuid import UUID, uuid4

import pytest

from chirpy.components.chirps import (
    CreateChirpInput,
    GetChirpInput,
    run_create_chirp,
    run_get_chirp,
    run_list_chirps,
)
from chirpy.domain.entities import Chirp, User


class MockChirpRepo:
    def __init__(self) -> None:
        self._chirps: dict[UUID, Chirp] = {}

    def save(self, chirp: Chirp) -> Chirp:
        self._chirps[chirp.id] = chirp
        return chirp

    def get_by_id(self, chirp_id: UUID) -> Chirp | None:
        return self._chirps.get(chirp_id)

    def list_all(self) -> list[Chirp]:
        return sorted(self._chirps.values(), key=lambda c: c.created_at)


class MockUserLookup:
    def __init__(self, *users: User) -> None:
        self._users = {u.id: u for u in users}

    def get_by_id(self, user_id: UUID) -> User | None:
        return self._users.get(user_id)


@pytest.fixture
def author() -> User:
    return User(email="author@example.com", hashed_password="x")


@pytest.fixture
def chirp_repo() -> MockChirpRepo:
    return MockChirpRepo()


@pytest.fixture
def users(author) -> MockUserLookup:
    return MockUserLookup(author)


def test_create_chirp_sanitizes_body(author, chirp_repo, users, time_port):
    result = run_create_chirp(
        CreateChirpInput(body="This is a kerfuffle opinion", user_id=author.id),
        chirp_repo,
        users,
        time_port,
    )
    assert result.success and result.chirp
    assert result.chirp.body == "This is a **** opinion"
    assert result.chirp.user_id == author.id
    assert chirp_repo.get_by_id(result.chirp.id) == result.chirp


def test_create_chirp_at_limit(author, chirp_repo, users, time_port):
    result = run_create_chirp(
        CreateChirpInput(body="a" * 140, user_id=author.id), chirp_repo, users, time_port
    )
    assert result.success


def test_create_chirp_too_long(author, chirp_repo, users, time_port):
    result = run_create_chirp(
        CreateChirpInput(body="a" * 141, user_id=author.id), chirp_repo, users, time_port
    )
    assert not result.success
    assert result.error == "Chirp is too long"
    assert chirp_repo.list_all() == []


def test_create_chirp_unknown_user(chirp_repo, users, time_port):
    result = run_create_chirp(
        CreateChirpInput(body="hello", user_id=uuid4()), chirp_repo, users, time_port
    )
    assert not result.success
    assert result.error_code == "unknown_user"


def test_list_chirps_oldest_first(author, chirp_repo, users, time_port):
    for body in ["first", "second", "third"]:
        run_create_chirp(CreateChirpInput(body=body, user_id=author.id), chirp_repo, users, time_port)
        time_port.advance(timedelta(seconds=1))

    result = run_list_chirps(chirp_repo)
    assert result.total == 3
    assert [c.body for c in result.chirps] == ["first", "second", "third"]


def test_get_chirp(author, chirp_repo, users, time_port):
    created = run_create_chirp(
        CreateChirpInput(body="hi", user_id=author.id), chirp_repo, users, time_port
    ).chirp
    assert created

    result = run_get_chirp(GetChirpInput(chirp_id=str(created.id)), chirp_repo)
    assert result.success
    assert result.chirp == created


@pytest.mark.parametrize("chirp_id", ["not-a-uuid", "", str(uuid4())])
def test_get_chirp_not_found(chirp_repo, chirp_id):
    result = run_get_chirp(GetChirpInput(chirp_id=chirp_id), chirp_repo)
    assert not result.success
    assert result.error_code == "not_found"
