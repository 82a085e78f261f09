"""
HTTP session and transport.

One requests.Session per transport so the collector's cookies (including its
ignore cookie) ride along on every request. No retry adapter: each request is
a single attempt and any failure is raised to the caller.
"""

import asyncio
import os

import requests

from .constants import API_TIMEOUT, CONTENT_TYPE


class TransportError(RuntimeError):
    """A request to the collector did not produce a usable response."""


class BadStatusError(TransportError):
    def __init__(self, status_code):
        super().__init__("Server returned with an unhandled status")
        self.status_code = status_code


class MalformedResponseError(TransportError):
    """Response body was not the JSON document we expected."""


class ServerError(TransportError):
    """Server answered with a GraphQL `errors` list."""


def _get_ca_bundle():
    """CA bundle path: env var → certifi → system default."""
    env_ca = os.environ.get("REQUESTS_CA_BUNDLE") or os.environ.get("SSL_CERT_FILE")
    if env_ca and os.path.isfile(env_ca):
        return env_ca
    try:
        import certifi
        return certifi.where()
    except ImportError:
        return True


def create_session(user_agent=None):
    """Create a requests.Session that posts JSON and keeps cookies."""
    session = requests.Session()
    session.headers.update({"Content-Type": CONTENT_TYPE})
    if user_agent:
        session.headers["User-Agent"] = user_agent
    session.verify = _get_ca_bundle()
    return session


def post_json(session, url, body, timeout=API_TIMEOUT):
    """
    POST `body` as JSON and return the decoded response document.
    Blocking; raises TransportError on any unusable response.
    """
    resp = session.post(url, json=body, timeout=timeout)

    if resp.status_code != 200:
        raise BadStatusError(resp.status_code)

    try:
        data = resp.json()
    except ValueError as e:
        raise MalformedResponseError("Failed to parse response from server") from e

    if not isinstance(data, dict):
        raise MalformedResponseError("Failed to parse response from server")

    errors = data.get("errors")
    if errors is not None:
        try:
            message = errors[0]["message"]
        except (LookupError, TypeError):
            message = "Server returned an error"
        raise ServerError(message)

    return data


class HttpTransport:
    """
    Async transport over a requests.Session.

    The blocking request runs in the loop's default executor; only the
    result (or exception) comes back to the event loop thread.
    """

    def __init__(self, session=None, timeout=API_TIMEOUT, user_agent=None):
        self._session = session or create_session(user_agent)
        self._timeout = timeout

    @property
    def session(self):
        return self._session

    async def send(self, url, body):
        return await asyncio.to_thread(post_json, self._session, url, body, self._timeout)

    def close(self):
        self._session.close()
