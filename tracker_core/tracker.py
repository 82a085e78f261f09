"""
Tracker: record lifecycle (eligibility, record creation, heartbeat).

Runs on a single asyncio event loop. The heartbeat is a chain of
call_later() ticks on a fixed period; each tick dispatches one refresh as
its own task, so a slow or hung request never delays the next tick.
Only Session.stop() ends the chain.
"""

import asyncio

from .api import RecordApi
from .config import log, validate_options
from .constants import HEARTBEAT_INTERVAL_SEC
from .eligibility import is_localhost, is_bot, is_fake_record_id
from .environment import Environment, collect_attributes
from .http_client import HttpTransport
from .state import Session


def _noop(_record_id):
    pass


class Tracker:
    """
    Tracks visits to one domain on one collector server.

    `scheduler` needs only call_later(delay, callback) returning a handle
    with cancel(); the running event loop is used when none is given.
    Ticks always dispatch refreshes onto the running event loop, so an
    injected scheduler must fire its callbacks from inside that loop.
    """

    def __init__(self, server, domain_id, opts=None, *, environment=None,
                 transport=None, scheduler=None, interval=HEARTBEAT_INTERVAL_SEC):
        self.server = server
        self.domain_id = domain_id
        self.options = validate_options(opts)
        self.environment = environment or Environment()
        self.interval = interval
        self._transport = transport or HttpTransport(user_agent=self.environment.user_agent)
        self._scheduler = scheduler
        self._api = RecordApi(server, domain_id, self._transport)

    def attributes(self):
        """Default visit attributes at the configured detail tier."""
        return collect_attributes(self.environment, self.options.detailed)

    # ─── Public entry points ─────────────────────────────────

    async def record(self, attrs=None, on_create=None, on_update=None) -> Session:
        """
        Create a new record and keep it alive until the session is stopped.

        Transport errors during creation are raised from here; no heartbeat
        is started in that case.
        """
        on_create = on_create or _noop
        on_update = on_update or _noop
        session = Session()

        if self._is_ignored():
            return session

        if attrs is None:
            attrs = self.attributes()

        record_id = await self._api.create_record(attrs)
        session.record_id = record_id

        if is_fake_record_id(record_id):
            log.warning("Visit ignored | reason=own-site | id=%s", record_id)
            return session

        on_create(record_id)
        self._start_heartbeat(session, on_update)
        return session

    def update_record(self, record_id, on_update=None) -> Session:
        """
        Keep an existing record alive without creating a new one.

        A running event loop is required whenever a heartbeat tick fires,
        and also at call time when no scheduler was injected.
        """
        on_update = on_update or _noop
        session = Session(record_id=record_id)

        if self._is_ignored():
            return session

        if is_fake_record_id(record_id):
            log.warning("Visit ignored | reason=own-site | id=%s", record_id)
            return session

        self._start_heartbeat(session, on_update)
        return session

    # ─── Eligibility ─────────────────────────────────────────

    def _is_ignored(self) -> bool:
        env = self.environment
        if self.options.ignore_localhost and is_localhost(env.hostname):
            log.warning("Visit ignored | reason=localhost | host=%r", env.hostname)
            return True
        if is_bot(env.user_agent):
            log.warning("Visit ignored | reason=bot | ua=%s", env.user_agent)
            return True
        return False

    # ─── Heartbeat ───────────────────────────────────────────

    def _start_heartbeat(self, session, on_update):
        scheduler = self._scheduler or asyncio.get_running_loop()

        def tick():
            session.timer = None
            if session.stopped:
                return
            session.timer = scheduler.call_later(self.interval, tick)

            task = asyncio.get_running_loop().create_task(self._refresh(session, on_update))
            session.pending.add(task)
            task.add_done_callback(lambda t: self._on_refresh_done(session, t))

        session.timer = scheduler.call_later(self.interval, tick)
        log.info("Heartbeat started | id=%s | interval=%ss", session.record_id, self.interval)

    async def _refresh(self, session, on_update):
        await self._api.update_record(session.record_id)
        # Stopped while the request was in flight
        if session.stopped:
            return
        on_update(session.record_id)

    @staticmethod
    def _on_refresh_done(session, task):
        session.pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            task.get_loop().call_exception_handler({
                "message": f"Record refresh failed (id={session.record_id})",
                "exception": exc,
                "task": task,
            })
