from dataclasses import dataclass


@dataclass
class ResetInput:
    platform: str


@dataclass
class ResetOutput:
    users_deleted: int = 0
    success: bool = False
    error: str | None = None
    error_code: str | None = None


@dataclass
class MetricsOutput:
    hits: int
