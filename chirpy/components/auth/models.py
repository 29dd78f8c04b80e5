from dataclasses import dataclass
from uuid import UUID

from chirpy.domain.entities import User


@dataclass
class CreateUserInput:
    email: str
    password: str


@dataclass
class LoginInput:
    email: str
    password: str
    expires_in_seconds: int | None = None


@dataclass
class AuthenticateInput:
    token: str


@dataclass
class UserOutput:
    user: User | None = None
    success: bool = False
    error: str | None = None
    error_code: str | None = None


@dataclass
class LoginOutput:
    user: User | None = None
    token: str | None = None
    success: bool = False
    error: str | None = None
    error_code: str | None = None


@dataclass
class IdentityOutput:
    # Never set unless success is True.
    user_id: UUID | None = None
    success: bool = False
    error: str | None = None
    error_code: str | None = None
