from __future__ import annotations

import asyncio

import pytest

from pumpboard.application.dto.pump_pools import SOURCE_LIVE, ListPumpPoolsInput, ListPumpPoolsOutput
from pumpboard.domain.exceptions import PumpPoolsUnavailableError
from pumpboard.infrastructure.polling.pools_refresher import PoolsRefresher


class FakeListPumpPoolsUseCase:
    def __init__(self, *, failing_periods: set[str] | None = None):
        self.failing_periods = failing_periods or set()
        self.periods: list[str] = []

    async def execute(self, command: ListPumpPoolsInput) -> ListPumpPoolsOutput:
        self.periods.append(command.period)
        if command.period in self.failing_periods:
            raise PumpPoolsUnavailableError("upstream down")
        return ListPumpPoolsOutput(period=command.period, source=SOURCE_LIVE, data=[])


def test_refresh_once_runs_every_period_and_survives_failures():
    use_case = FakeListPumpPoolsUseCase(failing_periods={"5m"})
    refresher = PoolsRefresher(use_case=use_case, periods=["5m", "1h"], interval_seconds=30)

    asyncio.run(refresher.refresh_once())

    assert use_case.periods == ["5m", "1h"]
    assert refresher.cycles == 1


def test_start_and_stop_cancel_the_polling_task():
    use_case = FakeListPumpPoolsUseCase()

    async def scenario() -> PoolsRefresher:
        refresher = PoolsRefresher(use_case=use_case, periods=["24h"], interval_seconds=0.01)
        refresher.start()
        assert refresher.running is True
        await asyncio.sleep(0.05)
        await refresher.stop()
        return refresher

    refresher = asyncio.run(scenario())

    assert refresher.running is False
    assert refresher.cycles >= 2
    cycles_at_stop = len(use_case.periods)
    assert cycles_at_stop == refresher.cycles


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        PoolsRefresher(use_case=FakeListPumpPoolsUseCase(), periods=["1h"], interval_seconds=0)


class CrashingListPumpPoolsUseCase:
    def __init__(self):
        self.calls = 0

    async def execute(self, command: ListPumpPoolsInput) -> ListPumpPoolsOutput:
        self.calls += 1
        raise RuntimeError("unexpected payload shape")


def test_unexpected_errors_keep_the_loop_running_and_stop_cleanly():
    use_case = CrashingListPumpPoolsUseCase()

    async def scenario() -> PoolsRefresher:
        refresher = PoolsRefresher(use_case=use_case, periods=["1h"], interval_seconds=0.01)
        refresher.start()
        await asyncio.sleep(0.05)
        assert refresher.running is True
        await refresher.stop()
        return refresher

    refresher = asyncio.run(scenario())

    assert refresher.running is False
    assert use_case.calls >= 2
    assert refresher.cycles == use_case.calls
