"""
Declarative bootstrap: start tracking from a marked HTML element.

    <script data-ackee-server="https://t.example"
            data-ackee-domain-id="..."
            data-ackee-opts='{"detailed": true}'></script>

Fails silently (returns None) when the document has no marked element.
"""

import json
from html.parser import HTMLParser

from .constants import ATTR_DOMAIN_ID, ATTR_SERVER, ATTR_OPTS
from .tracker import Tracker


class _MarkedElementFinder(HTMLParser):
    """Collects the attributes of the first element carrying the domain id."""

    def __init__(self):
        super().__init__()
        self.attrs = None

    def handle_starttag(self, tag, attrs):
        if self.attrs is None:
            found = dict(attrs)
            if ATTR_DOMAIN_ID in found:
                self.attrs = found


def find_config(html):
    """
    Return {"server", "domainId", "opts"} from the marked element, or None.
    Raises ValueError when data-ackee-opts is not valid JSON.
    """
    finder = _MarkedElementFinder()
    finder.feed(html)
    finder.close()

    attrs = finder.attrs
    if attrs is None:
        return None

    return {
        "server": attrs.get(ATTR_SERVER) or "",
        "domainId": attrs.get(ATTR_DOMAIN_ID),
        "opts": json.loads(attrs.get(ATTR_OPTS) or "{}"),
    }


async def detect(html, environment=None, transport=None, scheduler=None):
    """Start a session with default attributes if `html` declares a tracker."""
    config = find_config(html)
    if config is None:
        return None

    tracker = Tracker(
        config["server"],
        config["domainId"],
        config["opts"],
        environment=environment,
        transport=transport,
        scheduler=scheduler,
    )
    return await tracker.record()
