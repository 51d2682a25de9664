from sla.infrastructure import SLAScheduler


async def _noop():
    return None


async def test_start_and_stop():
    scheduler = SLAScheduler(interval_seconds=3600)
    assert scheduler.is_running is False

    await scheduler.start(_noop)
    assert scheduler.is_running is True

    # Second start is ignored
    await scheduler.start(_noop)
    assert scheduler.is_running is True

    await scheduler.stop()
    assert scheduler.is_running is False


async def test_stop_without_start():
    scheduler = SLAScheduler()
    await scheduler.stop()
    assert scheduler.is_running is False
