"""Endpoint types, the abstract RPC channel, and the bridge error taxonomy."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

COMMON = "common"
OBJECT = "object"
DB = "db"

ENDPOINT_PATHS: dict[str, str] = {
    COMMON: "/xmlrpc/2/common",
    OBJECT: "/xmlrpc/2/object",
    DB: "/xmlrpc/2/db",
}


@dataclass(frozen=True)
class EndpointTarget:
    """Where the Odoo server lives, parsed once from the base URL."""

    scheme: str
    host: str
    port: int
    path: str = ""

    @property
    def secure(self) -> bool:
        return self.scheme == "https"

    @classmethod
    def from_url(cls, url: str) -> EndpointTarget:
        parts = urlsplit(url.strip())
        scheme = (parts.scheme or "http").lower()
        if scheme not in ("http", "https"):
            raise ValueError(f"Unsupported URL scheme '{scheme}' in {url!r}")
        if not parts.hostname:
            raise ValueError(f"No host in URL {url!r}")
        port = parts.port or (443 if scheme == "https" else 80)
        return cls(
            scheme=scheme,
            host=parts.hostname,
            port=port,
            path=parts.path.rstrip("/"),
        )

    def url_for(self, endpoint: str) -> str:
        """Full URL of a logical endpoint (``common``, ``object`` or ``db``)."""
        try:
            suffix = ENDPOINT_PATHS[endpoint]
        except KeyError:
            raise ValueError(f"Unknown endpoint: {endpoint}") from None
        return f"{self.scheme}://{self.host}:{self.port}{self.path}{suffix}"


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"


# ---------------------------------------------------------------------------
# Error types
# ---------------------------------------------------------------------------

class OdooBridgeError(Exception):
    """Base class for every failure the bridge reports."""

    kind = "error"

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class TransportError(OdooBridgeError):
    """The remote call could not be completed or the server returned a fault."""

    kind = "transport"

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        fault_code: Any = None,
        error_class: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause)
        self.endpoint = endpoint
        self.fault_code = fault_code
        self.error_class = error_class

    @classmethod
    def from_xmlrpc_fault(cls, fault: Any, endpoint: str | None = None) -> TransportError:
        """Wrap an ``xmlrpc.client.Fault`` keeping the fault string verbatim."""
        fault_string = str(getattr(fault, "faultString", fault))
        lines = fault_string.strip().split("\n")
        last_line = lines[-1] if lines else ""
        match = re.match(r"^([\w.]+(?:Error|Warning|Exception|Denied)):", last_line)
        return cls(
            fault_string,
            endpoint=endpoint,
            fault_code=getattr(fault, "faultCode", None),
            error_class=match.group(1) if match else None,
            cause=fault if isinstance(fault, Exception) else None,
        )


class AuthenticationError(OdooBridgeError):
    """Bad credentials, or the authentication endpoint was unreachable."""

    kind = "authentication"

    def __init__(
        self, message: str, database: str | None = None, cause: Exception | None = None
    ) -> None:
        super().__init__(message, cause)
        self.database = database


class RemoteCallError(OdooBridgeError):
    """An object-operation call failed (including calls made with a stale uid)."""

    kind = "remote_call"

    def __init__(
        self,
        message: str,
        database: str | None = None,
        model: str | None = None,
        method: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause)
        self.database = database
        self.model = model
        self.method = method


class DatabaseListError(OdooBridgeError):
    """The database-management endpoint could not enumerate databases."""

    kind = "database_list"


class UnknownOperationError(OdooBridgeError):
    """The requested tool name is not one the bridge exposes."""

    kind = "unknown_operation"

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class InvalidArgumentsError(OdooBridgeError):
    """Tool arguments are missing or have the wrong shape."""

    kind = "invalid_arguments"


class OperationFailedError(OdooBridgeError):
    """The server answered, but with a falsy result for a write or delete."""

    kind = "operation_failed"


# ---------------------------------------------------------------------------
# Abstract channel
# ---------------------------------------------------------------------------

class RpcChannel(ABC):
    """A synchronous-looking call into one of the Odoo RPC endpoints."""

    @abstractmethod
    async def call(self, endpoint: str, method: str, args: list[Any]) -> Any:
        """Call *method* on *endpoint* with positional *args*.

        Raises :class:`TransportError` on any failure.
        """
        ...
