"""
Entry point: load config, start a tracking session, run until Ctrl+C.
"""

import asyncio
import sys

from .constants import TRACKER_VERSION, HEARTBEAT_INTERVAL_SEC, API_TIMEOUT
from .config import log, safe_print, load_config, setup_logging, CONFIG_FILE
from .environment import Environment
from .http_client import HttpTransport
from .tracker import Tracker

# siteLocation is required: without a host every visit counts as localhost.
REQUIRED_KEYS = ("server", "domainId", "siteLocation")


def build_tracker(config):
    """Create a Tracker from a loaded config dict."""
    environment = Environment.from_config(config)
    transport = HttpTransport(
        timeout=config.get("requestTimeoutSec", API_TIMEOUT),
        user_agent=environment.user_agent,
    )
    return Tracker(
        config["server"],
        config["domainId"],
        config.get("opts"),
        environment=environment,
        transport=transport,
        interval=config.get("heartbeatIntervalSec", HEARTBEAT_INTERVAL_SEC),
    )


async def run(tracker):
    """Record one visit and keep it alive until cancelled."""
    session = await tracker.record(
        on_create=lambda rid: log.info("Tracking visit | id=%s", rid),
        on_update=lambda rid: log.info("Heartbeat OK | id=%s", rid),
    )
    try:
        if not session.active:
            return session
        await asyncio.Event().wait()
    finally:
        session.stop()
    return session


def main():
    """Primary tracker entry point."""
    safe_print("Ackee tracker v" + TRACKER_VERSION)
    safe_print()

    config = load_config()
    if not config:
        safe_print(f"No config found at {CONFIG_FILE}. Exiting.")
        sys.exit(1)

    missing = [key for key in REQUIRED_KEYS if not config.get(key)]
    if missing:
        safe_print("Config is missing: " + ", ".join(missing))
        sys.exit(1)

    setup_logging()
    log.info("Loaded config for domain %s (server: %s)", config["domainId"], config["server"])

    tracker = build_tracker(config)
    try:
        asyncio.run(run(tracker))
    except KeyboardInterrupt:
        safe_print("\nTracker stopped by user.")
    except Exception as e:
        log.error("Tracker failed: %s", e, exc_info=True)
        sys.exit(1)
    log.info("Tracker shut down.")


if __name__ == "__main__":
    main()
