"""
Session: the handle for one tracked visit.

All mutations happen on the event loop thread. No locks needed.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class Session:
    record_id: Optional[str] = None
    stopped: bool = False

    # ── Heartbeat ─────────────────────────────────────────────
    timer: Any = None                             # at most one pending tick
    pending: set = field(default_factory=set)     # refresh tasks in flight

    @property
    def active(self) -> bool:
        """Whether a heartbeat tick is currently scheduled."""
        return self.timer is not None

    def stop(self):
        """
        Stop refreshing the record. Idempotent, safe on an inert session.
        In-flight refreshes still finish but schedule nothing further.
        """
        self.stopped = True
        if self.timer is not None:
            self.timer.cancel()
            self.timer = None
