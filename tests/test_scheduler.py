import asyncio

import pytest

from shared_expenses.services.scheduler import JOB_ID, RateRefreshScheduler


def test_start_registers_interval_job_and_shutdown_releases_it():
    calls = []

    async def scenario():
        sched = RateRefreshScheduler(lambda: calls.append(1) or True, interval_seconds=3600)
        sched.start()
        assert sched.running
        job = sched._scheduler.get_job(JOB_ID)
        assert job is not None
        assert job.trigger.interval.total_seconds() == 3600
        # idempotent
        sched.start()
        assert len(sched._scheduler.get_jobs()) == 1
        sched.shutdown()
        await asyncio.sleep(0)
        assert not sched.running
        sched.shutdown()

    asyncio.run(scenario())
    # first run is an hour away; nothing fired
    assert calls == []


def test_job_runs_refresh():
    calls = []

    async def scenario():
        sched = RateRefreshScheduler(lambda: calls.append(1) or True, interval_seconds=60)
        await sched._job()

    asyncio.run(scenario())
    assert calls == [1]


def test_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        RateRefreshScheduler(lambda: True, interval_seconds=0)
