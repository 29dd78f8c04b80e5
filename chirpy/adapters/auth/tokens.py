"""
Signed access tokens (HS256 JWT).

Claims: iss="chirpy", sub=<user uuid>, iat and exp as integer epoch seconds.
Tokens are stateless: a structurally valid, correctly signed, unexpired
token is proof of identity on its own.

Times are stored as whole epoch seconds, rounded down. A ttl <= 0 yields
exp == iat (already expired), and so can a positive ttl under one second.

Validation order:
1. structure  -> TokenMalformedError
2. signature  -> TokenBadSignatureError
3. expiry     -> TokenExpiredError (now >= exp)

Time comes from an injected ClockPort so expiry is deterministic in tests.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any
from uuid import UUID

from jose import jws, jwt
from jose.exceptions import JOSEError

from chirpy.adapters.clock import SystemClock
from chirpy.ports.clock import ClockPort

from .errors import (
    TokenBadSignatureError,
    TokenError,
    TokenExpiredError,
    TokenMalformedError,
    TokenMintError,
)

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
ISSUER = "chirpy"
BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class TokenCheck:
    """Outcome of a validation. subject_id is None whenever error is set."""

    subject_id: UUID | None = None
    error: TokenError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _epoch(dt: datetime) -> int:
    return int(dt.timestamp())


class JWTTokenService:
    def __init__(self, clock: ClockPort | None = None) -> None:
        self._clock = clock if clock is not None else SystemClock()

    def mint(self, subject_id: UUID | str, secret: str, ttl: timedelta) -> str:
        """
        Create a token for subject_id that expires ttl after now.

        A ttl of zero or less gives a token that is already expired
        (exp == iat). iat and exp are whole seconds rounded down, so a
        positive ttl under one second can also land on exp == iat.
        """
        try:
            subject = str(UUID(str(subject_id)))
        except (TypeError, ValueError) as e:
            raise TokenMintError(f"invalid subject id {subject_id!r}") from e

        issued_at = self._clock.now_utc()
        expires_at = issued_at + max(ttl, timedelta(0))
        claims = {
            "iss": ISSUER,
            "sub": subject,
            "iat": _epoch(issued_at),
            "exp": _epoch(expires_at),
        }
        return str(jwt.encode(claims, secret, algorithm=ALGORITHM))

    def validate(self, token: str, secret: str) -> UUID:
        """Return the token's subject, or raise a TokenError subclass."""
        try:
            claims = jwt.get_unverified_claims(token)
        except (JOSEError, AttributeError, TypeError) as e:
            raise TokenMalformedError("cannot decode token") from e

        try:
            jws.verify(token, secret, algorithms=[ALGORITHM])
        except JOSEError as e:
            raise TokenBadSignatureError() from e

        subject_id, expires_at = _read_claims(claims)

        if _epoch(self._clock.now_utc()) >= expires_at:
            raise TokenExpiredError()

        return subject_id

    def check(self, token: str, secret: str) -> TokenCheck:
        try:
            return TokenCheck(subject_id=self.validate(token, secret))
        except TokenError as e:
            logger.debug("Token rejected: %s", e.code)
            return TokenCheck(error=e)


def _read_claims(claims: Mapping[str, Any]) -> tuple[UUID, int]:
    if claims.get("iss") != ISSUER:
        raise TokenMalformedError("unexpected issuer")

    exp = claims.get("exp")
    iat = claims.get("iat")
    # bool is an int subclass; reject it explicitly.
    if not isinstance(exp, int) or isinstance(exp, bool):
        raise TokenMalformedError("missing or invalid exp claim")
    if not isinstance(iat, int) or isinstance(iat, bool):
        raise TokenMalformedError("missing or invalid iat claim")

    try:
        subject_id = UUID(str(claims["sub"]))
    except (KeyError, ValueError) as e:
        raise TokenMalformedError("missing or invalid sub claim") from e

    return subject_id, exp


def get_bearer_token(headers: Mapping[str, str]) -> str:
    """Extract the token from an 'Authorization: Bearer <token>' header."""
    auth_header = headers.get("Authorization") or headers.get("authorization")
    if not auth_header:
        raise TokenMalformedError("missing authorization header")
    if not auth_header.startswith(BEARER_PREFIX):
        raise TokenMalformedError("authorization header is not a bearer token")
    token = auth_header[len(BEARER_PREFIX):].strip()
    if not token:
        raise TokenMalformedError("empty bearer token")
    return token
