"""
Eligibility checks: decide whether a visit is tracked at all.

Pure functions, evaluated once per session before any network call.
"""

from .constants import LOCAL_HOSTNAMES, BOT_MARKERS, FAKE_RECORD_ID


def is_localhost(hostname) -> bool:
    """True for an empty host, localhost, 127.0.0.1 and ::1."""
    return hostname in LOCAL_HOSTNAMES


def is_bot(user_agent) -> bool:
    """
    Best-effort crawler detection by user-agent substring.

    Catches most well-behaved bots. Not a security control: any client can
    send whatever user agent it likes.
    """
    ua = (user_agent or "").lower()
    return any(marker in ua for marker in BOT_MARKERS)


def is_fake_record_id(record_id) -> bool:
    """True when the collector answered with its "ignore this visitor" id."""
    return record_id == FAKE_RECORD_ID
