"""
Auth component - Registration, login and token authentication.
"""

from .component import (
    resolve_token_ttl,
    run_authenticate,
    run_create_user,
    run_login,
)
from .models import (
    AuthenticateInput,
    CreateUserInput,
    IdentityOutput,
    LoginInput,
    LoginOutput,
    UserOutput,
)
from .ports import PasswordHasherPort, TimePort, TokenServicePort, UserRepoPort

__all__ = [
    # Entry points
    "resolve_token_ttl",
    "run_authenticate",
    "run_create_user",
    "run_login",
    # Models
    "AuthenticateInput",
    "CreateUserInput",
    "IdentityOutput",
    "LoginInput",
    "LoginOutput",
    "UserOutput",
    # Ports
    "PasswordHasherPort",
    "TimePort",
    "TokenServicePort",
    "UserRepoPort",
]
