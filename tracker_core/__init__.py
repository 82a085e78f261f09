"""
tracker_core - Ackee visit tracker
==================================
Architecture: single asyncio event loop. Zero busy-wait.

  constants.py    → Version, heartbeat period, eligibility markers
  config.py       → Paths, logging, config load/save, Options
  eligibility.py  → localhost / bot / ignored-record checks
  environment.py  → Environment provider + visit attribute collector
  http_client.py  → requests session, JSON transport, transport errors
  api.py          → GraphQL bodies, endpoint, create/update record
  state.py        → Session handle (stop flag + heartbeat timer)
  tracker.py      → Tracker (record lifecycle + heartbeat loop)
  bootstrap.py    → Start tracking from a marked HTML element
  runner.py       → main() entry point
"""

from .config import Options, validate_options
from .environment import Environment, collect_attributes
from .state import Session
from .tracker import Tracker

__all__ = [
    "Environment",
    "Options",
    "Session",
    "Tracker",
    "collect_attributes",
    "validate_options",
]
