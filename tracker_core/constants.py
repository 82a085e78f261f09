"""
Constants: version, heartbeat period, eligibility markers, wire names.
"""

TRACKER_VERSION = "1.0.0"

# ─── Heartbeat ───────────────────────────────────────────────────
HEARTBEAT_INTERVAL_SEC = 15    # Refresh the record every 15 seconds

# ─── Network ─────────────────────────────────────────────────────
API_SEGMENT = "api"            # GraphQL endpoint lives at <server>/api
API_TIMEOUT = None             # No timeout: a hung request stays pending
CONTENT_TYPE = "application/json;charset=UTF-8"

# ─── Eligibility ─────────────────────────────────────────────────
LOCAL_HOSTNAMES = frozenset({"", "localhost", "127.0.0.1", "::1"})

# Substrings that mark a user agent as a crawler (matched case-insensitively).
BOT_MARKERS = ("bot", "crawler", "spider", "crawling")

# Record id handed out when the collector ignores the visitor on purpose
# (e.g. the site owner's own ignore cookie).
FAKE_RECORD_ID = "88888888-8888-8888-8888-888888888888"

# ─── Declarative bootstrap ───────────────────────────────────────
ATTR_DOMAIN_ID = "data-ackee-domain-id"
ATTR_SERVER = "data-ackee-server"
ATTR_OPTS = "data-ackee-opts"
