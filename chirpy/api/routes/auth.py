from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from chirpy.adapters.auth.passwords import Argon2PasswordHasher
from chirpy.adapters.auth.tokens import JWTTokenService
from chirpy.adapters.sqlite.repos import SQLiteUserRepo
from chirpy.api.deps import get_password_hasher, get_settings, get_token_service, get_user_repo
from chirpy.api.schemas import ErrorResponse, LoginRequest, LoginResponse
from chirpy.app_shell.config import Settings
from chirpy.components.auth import LoginInput, run_login

router = APIRouter()


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"model": ErrorResponse}},
)
def login(
    payload: LoginRequest,
    user_repo: SQLiteUserRepo = Depends(get_user_repo),
    hasher: Argon2PasswordHasher = Depends(get_password_hasher),
    tokens: JWTTokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
) -> LoginResponse | JSONResponse:
    """Authenticate with email and password and return an access token."""
    result = run_login(
        LoginInput(
            email=payload.email,
            password=payload.password,
            expires_in_seconds=payload.expires_in_seconds,
        ),
        user_repo,
        hasher,
        tokens,
        settings.jwt_secret,
        settings.token_ttl,
    )
    if not result.success or result.user is None or result.token is None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": result.error},
        )

    return LoginResponse.from_login(result.user, result.token)
