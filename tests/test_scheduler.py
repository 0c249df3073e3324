import asyncio

import pytest

from conftest import settle
from sitwatch.watchers.scheduler import RepeatingTask


def test_first_run_fires_immediately():
    calls = []

    async def action():
        calls.append(asyncio.get_running_loop().time())

    async def go():
        task = RepeatingTask(action, 60.0, name="t")
        task.start()
        await settle()
        assert len(calls) == 1
        task.cancel()

    asyncio.run(go())


def test_runs_on_cadence_until_cancelled():
    calls = []

    async def action():
        calls.append(1)

    async def go():
        task = RepeatingTask(action, 0.01, name="t")
        task.start()
        await asyncio.sleep(0.1)
        task.cancel()
        count = len(calls)
        await asyncio.sleep(0.05)
        return count

    count = asyncio.run(go())
    assert count >= 3
    assert len(calls) == count


def test_slow_runs_do_not_delay_the_timer():
    gate_holder = {}
    started = []

    async def action():
        started.append(1)
        await gate_holder["gate"].wait()

    async def go():
        gate_holder["gate"] = asyncio.Event()
        task = RepeatingTask(action, 0.01, name="t")
        task.start()
        await asyncio.sleep(0.08)
        pending = task.pending_runs
        task.cancel()
        gate_holder["gate"].set()
        await settle()
        return pending

    pending = asyncio.run(go())
    assert len(started) >= 3
    assert pending >= 3


def test_cancel_before_start_prevents_runs():
    calls = []

    async def action():
        calls.append(1)

    async def go():
        task = RepeatingTask(action, 0.01)
        task.cancel()
        task.start()
        await asyncio.sleep(0.03)
        assert not task.started

    asyncio.run(go())
    assert calls == []


def test_start_requires_event_loop():
    async def action():
        pass

    task = RepeatingTask(action, 1.0)
    with pytest.raises(RuntimeError):
        task.start()


def test_interval_must_be_positive():
    async def action():
        pass

    with pytest.raises(ValueError):
        RepeatingTask(action, 0)


def test_failing_run_is_logged_and_schedule_continues(caplog):
    calls = []

    async def action():
        calls.append(1)
        raise RuntimeError("bad run")

    async def go():
        task = RepeatingTask(action, 0.01, name="failing")
        task.start()
        await asyncio.sleep(0.05)
        task.cancel()

    asyncio.run(go())
    assert len(calls) >= 2
    assert "failing run raised" in caplog.text
