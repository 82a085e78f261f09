"""
Collector API: GraphQL bodies, endpoint, create/update record calls.

Single attempt per call. Failures from the transport are not caught here;
they propagate to whoever awaited the call.
"""

from .config import log
from .constants import API_SEGMENT
from .http_client import MalformedResponseError


CREATE_RECORD_QUERY = """
mutation createRecord($domainId: ID!, $input: CreateRecordInput!) {
    createRecord(domainId: $domainId, input: $input) {
        payload {
            id
        }
    }
}
"""

UPDATE_RECORD_QUERY = """
mutation updateRecord($id: ID!) {
    updateRecord(id: $id) {
        success
    }
}
"""


def endpoint(server):
    """URL of the collector's GraphQL endpoint (exactly one slash before `api`)."""
    sep = "" if server.endswith("/") else "/"
    return f"{server}{sep}{API_SEGMENT}"


def create_record_body(domain_id, attrs):
    return {
        "query": CREATE_RECORD_QUERY,
        "variables": {
            "domainId": domain_id,
            "input": dict(attrs),
        },
    }


def update_record_body(record_id):
    return {
        "query": UPDATE_RECORD_QUERY,
        "variables": {
            "id": record_id,
        },
    }


class RecordApi:
    """Record operations against one collector and domain."""

    def __init__(self, server, domain_id, transport):
        self.url = endpoint(server)
        self.domain_id = domain_id
        self._transport = transport

    async def create_record(self, attrs):
        """Create a record for this visit. Returns the new record id."""
        data = await self._transport.send(self.url, create_record_body(self.domain_id, attrs))
        try:
            record_id = data["data"]["createRecord"]["payload"]["id"]
        except (KeyError, TypeError) as e:
            raise MalformedResponseError("Response is missing the created record id") from e
        log.info("Record created | id=%s | domain=%s", record_id, self.domain_id)
        return record_id

    async def update_record(self, record_id):
        """Extend the record's duration. Returns the server's success flag."""
        data = await self._transport.send(self.url, update_record_body(record_id))
        try:
            success = bool(data["data"]["updateRecord"]["success"])
        except (KeyError, TypeError):
            success = False
        log.debug("Record refreshed | id=%s | success=%s", record_id, success)
        return success
