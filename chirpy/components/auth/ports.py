from datetime import datetime, timedelta
from typing import Protocol
from uuid import UUID

from chirpy.adapters.auth.tokens import TokenCheck
from chirpy.domain.entities import User


class UserRepoPort(Protocol):
    def get_by_email(self, email: str) -> User | None: ...
    def save(self, user: User) -> User:
        """Persist user. Raises DuplicateEmailError if the email is taken."""
        ...


class PasswordHasherPort(Protocol):
    def hash_password(self, plaintext: str) -> str: ...
    def check_password_hash(self, plaintext: str, hashed: str) -> bool: ...


class TokenServicePort(Protocol):
    def mint(self, subject_id: UUID | str, secret: str, ttl: timedelta) -> str: ...
    def check(self, token: str, secret: str) -> TokenCheck: ...


class TimePort(Protocol):
    """Port for time operations - enables deterministic testing."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
