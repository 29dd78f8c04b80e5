from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from chirpy.adapters.auth.passwords import Argon2PasswordHasher
from chirpy.adapters.sqlite.repos import SQLiteUserRepo
from chirpy.api.deps import get_clock, get_password_hasher, get_user_repo
from chirpy.api.schemas import CreateUserRequest, ErrorResponse, UserResponse
from chirpy.components.auth import CreateUserInput, run_create_user
from chirpy.ports.clock import ClockPort

router = APIRouter()

_STATUS_BY_CODE = {
    "email_taken": status.HTTP_409_CONFLICT,
    "invalid_email": status.HTTP_400_BAD_REQUEST,
}


@router.post(
    "/users",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def create_user(
    payload: CreateUserRequest,
    user_repo: SQLiteUserRepo = Depends(get_user_repo),
    hasher: Argon2PasswordHasher = Depends(get_password_hasher),
    clock: ClockPort = Depends(get_clock),
) -> UserResponse | JSONResponse:
    """Register a new user."""
    result = run_create_user(
        CreateUserInput(email=payload.email, password=payload.password),
        user_repo,
        hasher,
        clock,
    )
    if not result.success or result.user is None:
        code = _STATUS_BY_CODE.get(result.error_code or "", status.HTTP_400_BAD_REQUEST)
        return JSONResponse(status_code=code, content={"error": result.error})

    return UserResponse.from_user(result.user)
