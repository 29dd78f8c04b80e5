from dataclasses import dataclass
from uuid import UUID

from chirpy.domain.entities import Chirp


@dataclass
class CreateChirpInput:
    body: str
    user_id: UUID


@dataclass
class GetChirpInput:
    # Raw path value; parsed by the component.
    chirp_id: str


@dataclass
class ChirpOutput:
    chirp: Chirp | None = None
    success: bool = False
    error: str | None = None
    error_code: str | None = None


@dataclass
class ChirpListOutput:
    chirps: list[Chirp]
    total: int
