"""
Admin component - Visit metrics and dev-only data reset.
"""

from .component import run_metrics, run_reset
from .models import MetricsOutput, ResetInput, ResetOutput
from .ports import CounterPort, UserResetPort

__all__ = [
    "run_metrics",
    "run_reset",
    "MetricsOutput",
    "ResetInput",
    "ResetOutput",
    "CounterPort",
    "UserResetPort",
]
