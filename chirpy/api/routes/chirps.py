from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from chirpy.adapters.sqlite.repos import SQLiteChirpRepo, SQLiteUserRepo
from chirpy.api.deps import get_chirp_repo, get_clock, get_current_user_id, get_user_repo
from chirpy.api.schemas import ChirpResponse, CreateChirpRequest, ErrorResponse
from chirpy.components.chirps import (
    CreateChirpInput,
    GetChirpInput,
    run_create_chirp,
    run_get_chirp,
    run_list_chirps,
)
from chirpy.ports.clock import ClockPort

router = APIRouter()


@router.post(
    "/chirps",
    status_code=status.HTTP_201_CREATED,
    response_model=ChirpResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
def create_chirp(
    payload: CreateChirpRequest,
    user_id: UUID = Depends(get_current_user_id),
    chirp_repo: SQLiteChirpRepo = Depends(get_chirp_repo),
    user_repo: SQLiteUserRepo = Depends(get_user_repo),
    clock: ClockPort = Depends(get_clock),
) -> ChirpResponse | JSONResponse:
    result = run_create_chirp(
        CreateChirpInput(body=payload.body, user_id=user_id),
        chirp_repo,
        user_repo,
        clock,
    )
    if not result.success or result.chirp is None:
        code = (
            status.HTTP_401_UNAUTHORIZED
            if result.error_code == "unknown_user"
            else status.HTTP_400_BAD_REQUEST
        )
        return JSONResponse(status_code=code, content={"error": result.error})

    return ChirpResponse.from_chirp(result.chirp)


@router.get("/chirps", response_model=list[ChirpResponse])
def list_chirps(
    chirp_repo: SQLiteChirpRepo = Depends(get_chirp_repo),
) -> list[ChirpResponse]:
    result = run_list_chirps(chirp_repo)
    return [ChirpResponse.from_chirp(c) for c in result.chirps]


@router.get(
    "/chirps/{chirp_id}",
    response_model=ChirpResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_chirp(
    chirp_id: str,
    chirp_repo: SQLiteChirpRepo = Depends(get_chirp_repo),
) -> ChirpResponse | JSONResponse:
    result = run_get_chirp(GetChirpInput(chirp_id=chirp_id), chirp_repo)
    if not result.success or result.chirp is None:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": result.error})
    return ChirpResponse.from_chirp(result.chirp)
