"""
Chirps component - Create, list and fetch chirps.

Key behaviors:
- Bodies longer than 140 characters are rejected before moderation
- Accepted bodies are stored in their sanitized form
- Unknown or unparsable chirp ids are reported as not found
"""

import logging
from uuid import UUID

from chirpy.domain.entities import Chirp
from chirpy.domain.sanitize import is_chirp_too_long, sanitize_chirp

from .models import ChirpListOutput, ChirpOutput, CreateChirpInput, GetChirpInput
from .ports import ChirpRepoPort, TimePort, UserLookupPort

logger = logging.getLogger(__name__)


def run_create_chirp(
    inp: CreateChirpInput,
    chirp_repo: ChirpRepoPort,
    user_repo: UserLookupPort,
    time: TimePort,
) -> ChirpOutput:
    if is_chirp_too_long(inp.body):
        return ChirpOutput(success=False, error="Chirp is too long", error_code="too_long")

    if not user_repo.get_by_id(inp.user_id):
        return ChirpOutput(success=False, error="User not found", error_code="unknown_user")

    now = time.now_utc()
    chirp = Chirp(
        body=sanitize_chirp(inp.body),
        user_id=inp.user_id,
        created_at=now,
        updated_at=now,
    )
    chirp_repo.save(chirp)
    logger.debug("User %s created chirp %s", inp.user_id, chirp.id)
    return ChirpOutput(chirp=chirp, success=True)


def run_list_chirps(chirp_repo: ChirpRepoPort) -> ChirpListOutput:
    chirps = chirp_repo.list_all()
    return ChirpListOutput(chirps=chirps, total=len(chirps))


def run_get_chirp(inp: GetChirpInput, chirp_repo: ChirpRepoPort) -> ChirpOutput:
    try:
        chirp_id = UUID(inp.chirp_id)
    except ValueError:
        return ChirpOutput(success=False, error="Chirp not found", error_code="not_found")

    chirp = chirp_repo.get_by_id(chirp_id)
    if not chirp:
        return ChirpOutput(success=False, error="Chirp not found", error_code="not_found")
    return ChirpOutput(chirp=chirp, success=True)
