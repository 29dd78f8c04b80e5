import argparse
import getpass
import logging
import sys

from chirpy.adapters.auth.errors import HashFailureError
from chirpy.adapters.auth.passwords import Argon2PasswordHasher
from chirpy.adapters.sqlite.migrator import SQLiteMigrator
from chirpy.app_shell.config import ConfigError, load_settings, validate_settings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")


def handle_serve(args: argparse.Namespace) -> None:
    import uvicorn

    settings = load_settings()
    try:
        validate_settings(settings)
    except ConfigError as e:
        logger.error("%s", e)
        sys.exit(1)

    uvicorn.run(
        "chirpy.api.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_level="info",
    )


def handle_migrate(args: argparse.Namespace) -> None:
    settings = load_settings()
    applied = SQLiteMigrator(settings.db_path).run_migrations()
    print(f"Applied {len(applied)} migrations to {settings.db_path}.")


def handle_hash_password(args: argparse.Namespace) -> None:
    password = getpass.getpass("Password: ")
    try:
        print(Argon2PasswordHasher().hash_password(password))
    except HashFailureError as e:
        logger.error("%s", e)
        sys.exit(1)


def main() -> None:
    parser = argparse.ArgumentParser(description="Chirpy CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8080)

    # migrate
    subparsers.add_parser("migrate", help="Apply pending database migrations")

    # hash-password
    subparsers.add_parser("hash-password", help="Print an argon2 hash for a password")

    args = parser.parse_args()

    if args.command == "serve":
        handle_serve(args)
    elif args.command == "migrate":
        handle_migrate(args)
    elif args.command == "hash-password":
        handle_hash_password(args)


if __name__ == "__main__":
    main()
