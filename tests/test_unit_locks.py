"""Unit tests for the per-user lock registry."""

import asyncio
import gc
from cadence.core.locks import UserLocks


def test_same_user_shares_lock():
    locks = UserLocks()

    first = locks.lock_for("a")
    assert locks.lock_for("a") is first
    assert locks.lock_for("b") is not first


def test_unused_locks_are_released():
    locks = UserLocks()
    locks.lock_for("a")

    gc.collect()

    assert len(locks) == 0


def test_hold_serializes_same_user():
    locks = UserLocks()
    events = []

    async def worker(name):
        async with locks.hold("a"):
            events.append(f"{name}:start")
            await asyncio.sleep(0.01)
            events.append(f"{name}:end")

    async def scenario():
        await asyncio.gather(worker("one"), worker("two"))

    asyncio.run(scenario())

    assert events == ["one:start", "one:end", "two:start", "two:end"]


def test_hold_does_not_block_other_users():
    locks = UserLocks()
    events = []

    async def worker(user_id):
        async with locks.hold(user_id):
            events.append(f"{user_id}:start")
            await asyncio.sleep(0.01)
            events.append(f"{user_id}:end")

    async def scenario():
        await asyncio.gather(worker("a"), worker("b"))

    asyncio.run(scenario())

    assert events[:2] == ["a:start", "b:start"]
