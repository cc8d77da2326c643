import asyncio
import pytest

from image_dashboard.dashboard.notifications import NotificationCenter


@pytest.mark.asyncio
async def test_notifications_expire_after_timeout():
    center = NotificationCenter(timeout=0.05)
    center.success("done")
    assert [n.message for n in center.items] == ["done"]

    await asyncio.sleep(0.1)
    assert center.items == []


@pytest.mark.asyncio
async def test_dismiss_before_timeout_cancels_timer():
    center = NotificationCenter(timeout=0.05)
    first = center.success("first")
    center.error("second")

    center.dismiss(first.id)
    assert [n.message for n in center.items] == ["second"]
    assert first.id not in center._timers

    # unknown ids are ignored
    center.dismiss("missing")
    await asyncio.sleep(0.1)
    assert center.items == []


@pytest.mark.asyncio
async def test_each_notification_has_its_own_timer():
    center = NotificationCenter(timeout=0.1)
    center.success("early")
    await asyncio.sleep(0.06)
    center.success("late")
    await asyncio.sleep(0.06)
    assert [n.message for n in center.items] == ["late"]
    center.clear()


@pytest.mark.asyncio
async def test_ids_are_unique_and_order_is_fifo():
    center = NotificationCenter()
    created = [center.notify(f"m{i}", "success") for i in range(20)]
    assert len({n.id for n in created}) == 20
    assert [n.message for n in center.items] == [f"m{i}" for i in range(20)]
    center.clear()
    assert center.items == []
