from uuid import UUID

from fastapi import Depends, HTTPException, Request, status

from chirpy.adapters.auth.errors import TokenError
from chirpy.adapters.auth.passwords import Argon2PasswordHasher
from chirpy.adapters.auth.tokens import JWTTokenService, get_bearer_token
from chirpy.adapters.sqlite.repos import SQLiteChirpRepo, SQLiteUserRepo
from chirpy.app_shell.config import Settings
from chirpy.app_shell.hit_counter import HitCounter
from chirpy.components.auth import AuthenticateInput, run_authenticate
from chirpy.ports.clock import ClockPort

# Long-lived collaborators are built once in create_app and kept on app.state.


# --- Settings ---
def get_settings(request: Request) -> Settings:
    settings: Settings = request.app.state.settings
    return settings


# --- Repos ---
def get_user_repo(settings: Settings = Depends(get_settings)) -> SQLiteUserRepo:
    return SQLiteUserRepo(settings.db_path)


def get_chirp_repo(settings: Settings = Depends(get_settings)) -> SQLiteChirpRepo:
    return SQLiteChirpRepo(settings.db_path)


# --- Shared services ---
def get_hit_counter(request: Request) -> HitCounter:
    counter: HitCounter = request.app.state.hit_counter
    return counter


def get_clock(request: Request) -> ClockPort:
    clock: ClockPort = request.app.state.clock
    return clock


def get_password_hasher(request: Request) -> Argon2PasswordHasher:
    hasher: Argon2PasswordHasher = request.app.state.password_hasher
    return hasher


def get_token_service(request: Request) -> JWTTokenService:
    tokens: JWTTokenService = request.app.state.token_service
    return tokens


# --- Auth ---
def get_current_user_id(
    request: Request,
    tokens: JWTTokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
) -> UUID:
    try:
        token = get_bearer_token(request.headers)
    except TokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.reason,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    result = run_authenticate(AuthenticateInput(token=token), tokens, settings.jwt_secret)
    if not result.success or result.user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return result.user_id
