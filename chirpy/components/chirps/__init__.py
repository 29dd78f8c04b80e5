"""
Chirps component - Posting and reading chirps.
"""

from .component import run_create_chirp, run_get_chirp, run_list_chirps
from .models import ChirpListOutput, ChirpOutput, CreateChirpInput, GetChirpInput
from .ports import ChirpRepoPort, TimePort, UserLookupPort

__all__ = [
    # Entry points
    "run_create_chirp",
    "run_get_chirp",
    "run_list_chirps",
    # Models
    "ChirpListOutput",
    "ChirpOutput",
    "CreateChirpInput",
    "GetChirpInput",
    # Ports
    "ChirpRepoPort",
    "TimePort",
    "UserLookupPort",
]
