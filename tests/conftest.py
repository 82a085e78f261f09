"""Shared pytest fixtures: manual clock scheduler, fake transport, environment."""
from __future__ import annotations

import asyncio

import pytest

from tracker_core.environment import Environment


class FakeTimer:
    def __init__(self, when, callback):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """call_later() against a clock that only moves when advance() is called."""

    def __init__(self):
        self.now = 0.0
        self._timers = []

    def call_later(self, delay, callback):
        timer = FakeTimer(self.now + delay, callback)
        self._timers.append(timer)
        return timer

    @property
    def pending(self):
        return [t for t in self._timers if not t.cancelled]

    def advance(self, seconds):
        """Fire every due callback in time order, including newly scheduled ones."""
        target = self.now + seconds
        while True:
            due = [t for t in self._timers if not t.cancelled and t.when <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.when)
            self._timers.remove(timer)
            self.now = timer.when
            timer.callback()
        self.now = target


class FakeTransport:
    """Answers createRecord/updateRecord like a collector would."""

    def __init__(self, record_id="abc123"):
        self.record_id = record_id
        self.calls = []
        self.create_error = None
        self.update_error = None
        self.update_gate = None

    @property
    def creates(self):
        return [body for _, body in self.calls if "createRecord" in body["query"]]

    @property
    def updates(self):
        return [body for _, body in self.calls if "updateRecord" in body["query"]]

    async def send(self, url, body):
        self.calls.append((url, body))
        if "createRecord" in body["query"]:
            if self.create_error is not None:
                raise self.create_error
            return {"data": {"createRecord": {"payload": {"id": self.record_id}}}}

        if self.update_gate is not None:
            await self.update_gate.wait()
        if self.update_error is not None:
            raise self.update_error
        return {"data": {"updateRecord": {"success": True}}}


async def _drain():
    """Let spawned tasks run to completion (or to their next real wait)."""
    for _ in range(10):
        await asyncio.sleep(0)


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def drain():
    return _drain


@pytest.fixture
def environment():
    return Environment(
        site_location="https://blog.example/posts/1",
        site_referrer="https://search.example/?q=ackee",
        user_agent="Mozilla/5.0 (X11; Linux x86_64; rv:120.0) Gecko/20100101 Firefox/120.0",
        language="en-US",
        screen_width=1920,
        screen_height=1080,
        screen_color_depth=24,
        browser_width=1280,
        browser_height=800,
        device_name=None,
        device_manufacturer=None,
        os_name="Linux",
        os_version="6.1",
        browser_name="Firefox",
        browser_version="120.0",
    )
