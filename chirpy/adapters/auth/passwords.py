"""
Password hashing (argon2id).

Hashes are PHC strings, e.g. ``$argon2id$v=19$m=65536,t=3,p=4$<salt>$<digest>``.
They carry the algorithm, cost parameters and salt, so verification needs
nothing but the string itself.

Length policy: passwords are never truncated. Argon2 accepts up to
2**32 - 1 bytes; anything longer is rejected with HashFailureError when
hashing and can never match when checking.
"""

from __future__ import annotations

import logging

from argon2 import PasswordHasher, Type
from argon2.exceptions import (
    HashingError,
    InvalidHashError,
    VerificationError,
    VerifyMismatchError,
)

from .errors import HashFailureError, MalformedHashError

logger = logging.getLogger(__name__)

MAX_PASSWORD_BYTES = 2**32 - 1

DEFAULT_TIME_COST = 3
DEFAULT_MEMORY_COST = 65536  # KiB
DEFAULT_PARALLELISM = 4


def _password_size(plaintext: str) -> int:
    return len(plaintext.encode("utf-8"))


class Argon2PasswordHasher:
    """Salted, adaptive password hasher. Stateless between calls and thread-safe."""

    def __init__(
        self,
        time_cost: int = DEFAULT_TIME_COST,
        memory_cost: int = DEFAULT_MEMORY_COST,
        parallelism: int = DEFAULT_PARALLELISM,
    ) -> None:
        self.ph = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            type=Type.ID,
        )

    def hash_password(self, plaintext: str) -> str:
        if _password_size(plaintext) > MAX_PASSWORD_BYTES:
            raise HashFailureError("password exceeds argon2 input limit")
        try:
            return str(self.ph.hash(plaintext))
        except HashingError as e:
            logger.warning("argon2 hashing failed: %s", e)
            raise HashFailureError(str(e)) from e

    def check_password_hash(self, plaintext: str, hashed: str) -> bool:
        """
        Verify plaintext against a stored hash.

        Returns False for a well-formed hash that does not match.
        Raises MalformedHashError if the hash itself cannot be decoded.
        """
        if _password_size(plaintext) > MAX_PASSWORD_BYTES:
            return False
        try:
            self.ph.verify(hashed, plaintext)
            return True
        except VerifyMismatchError:
            return False
        except UnicodeEncodeError as e:
            raise MalformedHashError("hash is not ASCII") from e
        except InvalidHashError as e:
            raise MalformedHashError(str(e) or "unrecognised hash format") from e
        except VerificationError as e:
            # Decodable header but corrupted salt/digest.
            raise MalformedHashError(str(e)) from e

    def needs_rehash(self, hashed: str) -> bool:
        try:
            return bool(self.ph.check_needs_rehash(hashed))
        except (InvalidHashError, UnicodeEncodeError) as e:
            raise MalformedHashError(str(e) or "unrecognised hash format") from e
