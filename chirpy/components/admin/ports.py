from typing import Protocol


class UserResetPort(Protocol):
    def reset_users(self) -> int: ...


class CounterPort(Protocol):
    def value(self) -> int: ...
    def reset(self) -> None: ...
