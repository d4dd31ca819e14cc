"""Tests for ExpiryTimer."""

from __future__ import annotations

import asyncio

import pytest

from taskpad_cli.utils.timers import ExpiryTimer


def test_start_schedules_callback(fake_loop):
    fired = []
    timer = ExpiryTimer(fake_loop)

    timer.start(3.0, lambda: fired.append(True))

    assert timer.active
    fake_loop.advance(2.9)
    assert fired == []
    fake_loop.advance(0.1)
    assert fired == [True]
    assert not timer.active


def test_restart_cancels_previous(fake_loop):
    fired = []
    timer = ExpiryTimer(fake_loop)

    timer.start(3.0, lambda: fired.append("first"))
    fake_loop.advance(2.0)
    timer.start(3.0, lambda: fired.append("second"))
    fake_loop.advance(2.0)

    assert fired == []
    assert len(fake_loop.pending) == 1

    fake_loop.advance(1.0)
    assert fired == ["second"]


def test_cancel(fake_loop):
    fired = []
    timer = ExpiryTimer(fake_loop)
    timer.start(1.0, lambda: fired.append(True))

    timer.cancel()
    fake_loop.advance(5.0)

    assert fired == []
    assert not timer.active


def test_cancel_without_pending_is_noop(fake_loop):
    timer = ExpiryTimer(fake_loop)
    timer.cancel()
    assert not timer.active


def test_now_reads_scheduler_clock(fake_loop):
    fake_loop.advance(12.5)
    assert ExpiryTimer(fake_loop).now() == 12.5


@pytest.mark.asyncio
async def test_defaults_to_running_loop():
    fired = asyncio.Event()
    timer = ExpiryTimer()

    timer.start(0.01, fired.set)

    await asyncio.wait_for(fired.wait(), timeout=1)
    assert not timer.active
