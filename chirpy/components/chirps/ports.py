from datetime import datetime
from typing import Protocol
from uuid import UUID

from chirpy.domain.entities import Chirp, User


class ChirpRepoPort(Protocol):
    def save(self, chirp: Chirp) -> Chirp: ...
    def get_by_id(self, chirp_id: UUID) -> Chirp | None: ...
    def list_all(self) -> list[Chirp]: ...


class UserLookupPort(Protocol):
    def get_by_id(self, user_id: UUID) -> User | None: ...


class TimePort(Protocol):
    def now_utc(self) -> datetime: ...
