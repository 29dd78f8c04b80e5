from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from chirpy.domain.entities import Chirp, User


class CreateUserRequest(BaseModel):
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str
    expires_in_seconds: int | None = None


class CreateChirpRequest(BaseModel):
    body: str


class UserResponse(BaseModel):
    id: UUID
    created_at: datetime
    updated_at: datetime
    email: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            created_at=user.created_at,
            updated_at=user.updated_at,
            email=user.email,
        )


class LoginResponse(UserResponse):
    token: str

    @classmethod
    def from_login(cls, user: User, token: str) -> "LoginResponse":
        return cls(
            id=user.id,
            created_at=user.created_at,
            updated_at=user.updated_at,
            email=user.email,
            token=token,
        )


class ChirpResponse(BaseModel):
    id: UUID
    created_at: datetime
    updated_at: datetime
    body: str
    user_id: UUID

    @classmethod
    def from_chirp(cls, chirp: Chirp) -> "ChirpResponse":
        return cls(
            id=chirp.id,
            created_at=chirp.created_at,
            updated_at=chirp.updated_at,
            body=chirp.body,
            user_id=chirp.user_id,
        )


class ErrorResponse(BaseModel):
    error: str
