"""
Auth component unit tests.

Registration, login and token authentication against in-memory fakes.
"""

from __future__ import annotations

from datetime import timedelta
from uuid import UUID, uuid4

import pytest
from jose import jwt

from chirpy.components.auth import (
    AuthenticateInput,
    CreateUserInput,
    LoginInput,
    resolve_token_ttl,
    run_authenticate,
    run_create_user,
    run_login,
)
from chirpy.domain.entities import User
from chirpy.domain.errors import DuplicateEmailError

SECRET = "component-secret"
MAX_TTL = timedelta(hours=1)

# --- Mock Implementations ---


class MockUserRepo:
    """In-memory user repository for testing."""

    def __init__(self) -> None:
        self._users: dict[UUID, User] = {}

    def get_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def get_by_id(self, user_id: UUID) -> User | None:
        return self._users.get(user_id)

    def save(self, user: User) -> User:
        self._users[user.id] = user
        return user


class RacingUserRepo(MockUserRepo):
    """Another sign-up claims the email between the lookup and the insert."""

    def save(self, user: User) -> User:
        raise DuplicateEmailError(user.email)


class ExplodingHasher:
    def hash_password(self, plaintext: str) -> str:
        from chirpy.adapters.auth.errors import HashFailureError

        raise HashFailureError("no entropy")

    def check_password_hash(self, plaintext: str, hashed: str) -> bool:
        return False


# --- Fixtures ---


@pytest.fixture
def user_repo() -> MockUserRepo:
    return MockUserRepo()


@pytest.fixture
def alice(user_repo, hasher, time_port) -> User:
    result = run_create_user(
        CreateUserInput(email="alice@example.com", password="04234"), user_repo, hasher, time_port
    )
    assert result.success and result.user
    return result.user


# --- Create user ---


def test_create_user_hashes_password(alice, hasher, time_port):
    assert alice.hashed_password != "04234"
    assert hasher.check_password_hash("04234", alice.hashed_password)
    assert alice.created_at == time_port.now_utc()


def test_create_user_duplicate_email(alice, user_repo, hasher, time_port):
    result = run_create_user(
        CreateUserInput(email="alice@example.com", password="other"), user_repo, hasher, time_port
    )
    assert not result.success
    assert result.error_code == "email_taken"


def test_create_user_duplicate_email_on_insert(hasher, time_port):
    result = run_create_user(
        CreateUserInput(email="alice@example.com", password="04234"),
        RacingUserRepo(),
        hasher,
        time_port,
    )
    assert not result.success
    assert result.user is None
    assert result.error_code == "email_taken"


@pytest.mark.parametrize("email", ["", "   ", "no-at-sign"])
def test_create_user_invalid_email(user_repo, hasher, time_port, email):
    result = run_create_user(CreateUserInput(email=email, password="pw"), user_repo, hasher, time_port)
    assert not result.success
    assert result.error_code == "invalid_email"


def test_create_user_hash_failure(user_repo, time_port):
    result = run_create_user(
        CreateUserInput(email="bob@example.com", password="pw"),
        user_repo,
        ExplodingHasher(),
        time_port,
    )
    assert not result.success
    assert result.error_code == "hash_failure"
    assert user_repo.get_by_email("bob@example.com") is None


# --- Login ---


def test_login_success_returns_token(alice, user_repo, hasher, token_service):
    result = run_login(
        LoginInput(email="alice@example.com", password="04234"),
        user_repo,
        hasher,
        token_service,
        SECRET,
        MAX_TTL,
    )
    assert result.success
    assert result.user == alice
    assert result.token
    assert token_service.validate(result.token, SECRET) == alice.id


def test_login_wrong_password(alice, user_repo, hasher, token_service):
    result = run_login(
        LoginInput(email="alice@example.com", password="nope"),
        user_repo,
        hasher,
        token_service,
        SECRET,
        MAX_TTL,
    )
    assert not result.success
    assert result.token is None
    assert result.error == "Incorrect email or password"


def test_login_unknown_email(user_repo, hasher, token_service):
    result = run_login(
        LoginInput(email="ghost@example.com", password="pw"),
        user_repo,
        hasher,
        token_service,
        SECRET,
        MAX_TTL,
    )
    assert not result.success
    assert result.error_code == "invalid_credentials"


def test_login_with_corrupt_stored_hash(user_repo, hasher, token_service):
    user_repo.save(User(email="eve@example.com", hashed_password="corrupt"))
    result = run_login(
        LoginInput(email="eve@example.com", password="pw"),
        user_repo,
        hasher,
        token_service,
        SECRET,
        MAX_TTL,
    )
    assert not result.success
    assert result.error_code == "malformed_hash"
    assert result.token is None


def test_login_respects_requested_ttl(alice, user_repo, hasher, token_service):
    result = run_login(
        LoginInput(email="alice@example.com", password="04234", expires_in_seconds=60),
        user_repo,
        hasher,
        token_service,
        SECRET,
        MAX_TTL,
    )
    assert result.token
    claims = jwt.get_unverified_claims(result.token)
    assert claims["exp"] - claims["iat"] == 60


@pytest.mark.parametrize(
    ("requested", "expected"),
    [
        (None, MAX_TTL),
        (0, MAX_TTL),
        (-10, MAX_TTL),
        (30, timedelta(seconds=30)),
        (3600, MAX_TTL),
        (7200, MAX_TTL),
        (10**18, MAX_TTL),
    ],
)
def test_resolve_token_ttl(requested, expected):
    assert resolve_token_ttl(requested, MAX_TTL) == expected


# --- Authenticate ---


def test_authenticate_valid_token(token_service):
    user_id = uuid4()
    token = token_service.mint(user_id, SECRET, MAX_TTL)

    result = run_authenticate(AuthenticateInput(token=token), token_service, SECRET)
    assert result.success
    assert result.user_id == user_id


def test_authenticate_expired_token(token_service, time_port):
    token = token_service.mint(uuid4(), SECRET, MAX_TTL)
    time_port.advance(MAX_TTL)

    result = run_authenticate(AuthenticateInput(token=token), token_service, SECRET)
    assert not result.success
    assert result.user_id is None
    assert result.error_code == "token_expired"


def test_authenticate_wrong_secret(token_service):
    token = token_service.mint(uuid4(), SECRET, MAX_TTL)

    result = run_authenticate(AuthenticateInput(token=token), token_service, "other")
    assert result.user_id is None
    assert result.error_code == "token_bad_signature"
