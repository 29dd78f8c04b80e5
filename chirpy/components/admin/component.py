import logging

from chirpy.app_shell.config import DEV_PLATFORM

from .models import MetricsOutput, ResetInput, ResetOutput
from .ports import CounterPort, UserResetPort

logger = logging.getLogger(__name__)


def run_reset(inp: ResetInput, user_repo: UserResetPort, counter: CounterPort) -> ResetOutput:
    """Delete all users and zero the hit counter. Only allowed on the dev platform."""
    if inp.platform != DEV_PLATFORM:
        logger.warning("Reset refused on platform %r", inp.platform)
        return ResetOutput(
            success=False,
            error="Forbidden: only allowed in dev environment",
            error_code="forbidden",
        )

    deleted = user_repo.reset_users()
    counter.reset()
    logger.info("Reset removed %d users", deleted)
    return ResetOutput(users_deleted=deleted, success=True)


def run_metrics(counter: CounterPort) -> MetricsOutput:
    return MetricsOutput(hits=counter.value())
