import logging
from datetime import timedelta

from chirpy.adapters.auth.errors import HashFailureError, MalformedHashError
from chirpy.domain.entities import User
from chirpy.domain.errors import DuplicateEmailError

from .models import (
    AuthenticateInput,
    CreateUserInput,
    IdentityOutput,
    LoginInput,
    LoginOutput,
    UserOutput,
)
from .ports import PasswordHasherPort, TimePort, TokenServicePort, UserRepoPort

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Incorrect email or password"


def run_create_user(
    inp: CreateUserInput,
    user_repo: UserRepoPort,
    hasher: PasswordHasherPort,
    time: TimePort,
) -> UserOutput:
    email = inp.email.strip()
    if not email or "@" not in email:
        return UserOutput(success=False, error="A valid email is required", error_code="invalid_email")

    if user_repo.get_by_email(email):
        return UserOutput(success=False, error="Email already in use", error_code="email_taken")

    try:
        hashed = hasher.hash_password(inp.password)
    except HashFailureError as e:
        logger.warning("Could not hash password for new user: %s", e.reason)
        return UserOutput(success=False, error="Error hashing password", error_code=e.code)

    now = time.now_utc()
    user = User(email=email, hashed_password=hashed, created_at=now, updated_at=now)
    try:
        user_repo.save(user)
    except DuplicateEmailError:
        # Lost a race with a concurrent sign-up for the same email.
        return UserOutput(success=False, error="Email already in use", error_code="email_taken")
    logger.info("Created user %s", user.id)
    return UserOutput(user=user, success=True)


def resolve_token_ttl(requested_seconds: int | None, max_ttl: timedelta) -> timedelta:
    """Requested TTL if positive and within max_ttl, otherwise max_ttl."""
    # Compare as integers first; timedelta overflows on very large values.
    if requested_seconds is None or requested_seconds <= 0:
        return max_ttl
    if requested_seconds >= max_ttl.total_seconds():
        return max_ttl
    return timedelta(seconds=requested_seconds)


def run_login(
    inp: LoginInput,
    user_repo: UserRepoPort,
    hasher: PasswordHasherPort,
    tokens: TokenServicePort,
    secret: str,
    max_ttl: timedelta,
) -> LoginOutput:
    user = user_repo.get_by_email(inp.email.strip())
    if not user:
        return LoginOutput(success=False, error=INVALID_CREDENTIALS, error_code="invalid_credentials")

    try:
        matches = hasher.check_password_hash(inp.password, user.hashed_password)
    except MalformedHashError as e:
        logger.error("Stored password hash for user %s is malformed: %s", user.id, e.reason)
        return LoginOutput(success=False, error=INVALID_CREDENTIALS, error_code=e.code)

    if not matches:
        return LoginOutput(success=False, error=INVALID_CREDENTIALS, error_code="invalid_credentials")

    token = tokens.mint(user.id, secret, resolve_token_ttl(inp.expires_in_seconds, max_ttl))
    return LoginOutput(user=user, token=token, success=True)


def run_authenticate(
    inp: AuthenticateInput,
    tokens: TokenServicePort,
    secret: str,
) -> IdentityOutput:
    result = tokens.check(inp.token, secret)
    if result.error is not None:
        return IdentityOutput(success=False, error=str(result.error), error_code=result.error.code)
    return IdentityOutput(user_id=result.subject_id, success=True)
