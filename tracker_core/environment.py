"""
Environment provider and attribute collector.

The Environment holds every fact the tracker reads about the visit: page
location, referrer, user agent, locale, screen and window geometry, and the
device/OS/browser identity. Nothing else in the package reads globals, so
tests can hand in a fixed Environment.
"""

import locale
import platform
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional
from urllib.parse import urlsplit

import requests

from .constants import TRACKER_VERSION


@dataclass(frozen=True)
class Environment:
    site_location: str = ""
    site_referrer: str = ""
    user_agent: str = ""
    language: str = ""

    # ── Screen / window ───────────────────────────────────────
    screen_width: Optional[int] = None
    screen_height: Optional[int] = None
    screen_color_depth: Optional[int] = None
    browser_width: Optional[int] = None
    browser_height: Optional[int] = None

    # ── Device / OS / browser identity ────────────────────────
    device_name: Optional[str] = None
    device_manufacturer: Optional[str] = None
    os_name: Optional[str] = None
    os_version: Optional[str] = None
    browser_name: Optional[str] = None
    browser_version: Optional[str] = None

    @property
    def hostname(self) -> str:
        """Host part of site_location ("" when there is none)."""
        return urlsplit(self.site_location).hostname or ""

    @classmethod
    def from_config(cls, config):
        """
        Build an Environment from config overrides, filling the rest from
        this machine. The HTTP client stands in for the browser.
        """
        config = config or {}
        return cls(
            site_location=config.get("siteLocation", ""),
            site_referrer=config.get("siteReferrer", ""),
            user_agent=config.get("userAgent", default_user_agent()),
            language=config.get("language") or _system_language(),
            screen_width=config.get("screenWidth"),
            screen_height=config.get("screenHeight"),
            screen_color_depth=config.get("screenColorDepth"),
            browser_width=config.get("browserWidth"),
            browser_height=config.get("browserHeight"),
            device_name=config.get("deviceName", platform.machine() or None),
            device_manufacturer=config.get("deviceManufacturer"),
            os_name=config.get("osName", platform.system() or None),
            os_version=config.get("osVersion", platform.release() or None),
            browser_name=config.get("browserName", "python-requests"),
            browser_version=config.get("browserVersion", requests.__version__),
        )


def default_user_agent():
    return f"ackee-tracker/{TRACKER_VERSION} {requests.utils.default_user_agent()}"


def _system_language():
    lang, _ = locale.getlocale()
    return lang or ""


# ─── Attribute collection ────────────────────────────────────────

def collect_attributes(env: Environment, detailed=False):
    """
    Gather the visit attributes sent with a new record.

    The minimal tier is location + referrer. `detailed` adds locale, screen,
    device, OS, browser and window facts. Returns a read-only mapping.
    """
    attrs = {
        "siteLocation": env.site_location,
        "siteReferrer": env.site_referrer,
    }

    if detailed is True:
        attrs.update({
            "siteLanguage": (env.language or "")[:2],
            "screenWidth": env.screen_width,
            "screenHeight": env.screen_height,
            "screenColorDepth": env.screen_color_depth,
            "deviceName": env.device_name,
            "deviceManufacturer": env.device_manufacturer,
            "osName": env.os_name,
            "osVersion": env.os_version,
            "browserName": env.browser_name,
            "browserVersion": env.browser_version,
            "browserWidth": env.browser_width,
            "browserHeight": env.browser_height,
        })

    return MappingProxyType(attrs)
