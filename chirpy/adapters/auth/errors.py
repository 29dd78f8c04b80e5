"""Credential and token errors.

Every failure the password hasher or the token service can report is one of
these. None of them is fatal; callers map them to user-facing responses.
"""


class AuthError(Exception):
    """Base auth error."""

    code = "auth_error"


# --- Credentials ---


class CredentialError(AuthError):
    """Password hashing or verification failed."""

    code = "credential_error"


class HashFailureError(CredentialError):
    """Hashing could not produce a credential (entropy, parameters, input size)."""

    code = "hash_failure"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Password hashing failed: {reason}")


class MalformedHashError(CredentialError):
    """The stored hash is not a valid credential string."""

    code = "malformed_hash"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Malformed password hash: {reason}")


# --- Tokens ---


class TokenError(AuthError):
    """Token minting or validation failed."""

    code = "token_error"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Token error: {reason}")


class TokenMintError(TokenError):
    code = "token_mint_failed"


class TokenMalformedError(TokenError):
    code = "token_malformed"


class TokenBadSignatureError(TokenError):
    code = "token_bad_signature"

    def __init__(self) -> None:
        super().__init__("Signature verification failed")


class TokenExpiredError(TokenError):
    code = "token_expired"

    def __init__(self) -> None:
        super().__init__("Token has expired")
