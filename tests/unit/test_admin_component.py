from chirpy.app_shell.hit_counter import HitCounter
from chirpy.components.admin import ResetInput, run_metrics, run_reset


class MockUserReset:
    def __init__(self, count: int) -> None:
        self.count = count
        self.calls = 0

    def reset_users(self) -> int:
        self.calls += 1
        deleted, self.count = self.count, 0
        return deleted


def _counter_with(hits: int) -> HitCounter:
    counter = HitCounter()
    for _ in range(hits):
        counter.increment()
    return counter


def test_metrics_reports_counter():
    assert run_metrics(_counter_with(7)).hits == 7


def test_reset_on_dev_clears_users_and_counter():
    repo = MockUserReset(count=3)
    counter = _counter_with(5)

    result = run_reset(ResetInput(platform="dev"), repo, counter)

    assert result.success
    assert result.users_deleted == 3
    assert counter.value() == 0


def test_reset_forbidden_outside_dev():
    repo = MockUserReset(count=3)
    counter = _counter_with(5)

    result = run_reset(ResetInput(platform="prod"), repo, counter)

    assert not result.success
    assert result.error_code == "forbidden"
    assert repo.calls == 0
    assert counter.value() == 5
