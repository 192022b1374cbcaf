"""Shared test fixtures for odoo-mcp-bridge tests."""

from __future__ import annotations

from typing import Any

import pytest

from odoo_bridge.connection.client import OdooSessionClient
from odoo_bridge.connection.protocol import Credentials, RpcChannel
from odoo_bridge.connection.session_cache import SessionCache
from odoo_bridge.operations import RecordOperations
from odoo_bridge.toolsets.dispatcher import ToolDispatcher


# ---------------------------------------------------------------------------
# Fake RPC channel
# ---------------------------------------------------------------------------

class FakeChannel(RpcChannel):
    """Records every call in order and answers from a response table.

    A response may be a plain value, an exception instance (raised), or a
    callable taking the positional args.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, list[Any]]] = []
        self.responses: dict[tuple[str, str], Any] = {
            ("common", "authenticate"): 2,
            ("object", "execute_kw"): True,
            ("db", "list"): ["odoo"],
        }

    def respond(self, endpoint: str, method: str, value: Any) -> None:
        self.responses[(endpoint, method)] = value

    def calls_to(self, endpoint: str) -> list[tuple[str, str, list[Any]]]:
        return [c for c in self.calls if c[0] == endpoint]

    @property
    def last_execute_kw(self) -> list[Any]:
        return self.calls_to("object")[-1][2]

    async def call(self, endpoint: str, method: str, args: list[Any]) -> Any:
        self.calls.append((endpoint, method, list(args)))
        response = self.responses.get((endpoint, method))
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(args)
        return response


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def channel() -> FakeChannel:
    return FakeChannel()


@pytest.fixture
def credentials() -> Credentials:
    return Credentials("admin", "secret")


@pytest.fixture
def cache() -> SessionCache:
    return SessionCache()


@pytest.fixture
def client(channel, credentials, cache) -> OdooSessionClient:
    return OdooSessionClient(channel, credentials, cache=cache)


@pytest.fixture
def operations(client) -> RecordOperations:
    return RecordOperations(client)


@pytest.fixture
def dispatcher(operations) -> ToolDispatcher:
    return ToolDispatcher(operations, default_database="odoo")
