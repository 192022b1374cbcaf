"""XML-RPC channel to the Odoo ``common``, ``object`` and ``db`` endpoints."""

from __future__ import annotations

import asyncio
import http.client
import logging
import ssl
import xml.parsers.expat
import xmlrpc.client
from typing import Any

from odoo_bridge.connection.protocol import (
    EndpointTarget,
    RpcChannel,
    TransportError,
)

logger = logging.getLogger("odoo_bridge.connection.xmlrpc")


# ---------------------------------------------------------------------------
# Transports
# ---------------------------------------------------------------------------

def make_ssl_context(
    insecure_skip_verify: bool, ca_cert: str | None = None
) -> ssl.SSLContext:
    """Build the TLS context for https endpoints.

    With *insecure_skip_verify* the server certificate is accepted even when
    it fails chain or hostname validation (self-signed internal servers).
    """
    if insecure_skip_verify:
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        return context
    return ssl.create_default_context(cafile=ca_cert)


class SafeTransport(xmlrpc.client.SafeTransport):
    """HTTPS transport with an explicit TLS context and optional timeout."""

    def __init__(
        self,
        timeout: float | None = None,
        insecure_skip_verify: bool = True,
        ca_cert: str | None = None,
    ) -> None:
        super().__init__(context=make_ssl_context(insecure_skip_verify, ca_cert))
        self._timeout = timeout

    def make_connection(self, host: Any) -> Any:
        conn = super().make_connection(host)
        if self._timeout is not None:
            conn.timeout = self._timeout
        return conn


class UnsafeTransport(xmlrpc.client.Transport):
    """Plain HTTP transport (for http:// URLs)."""

    def __init__(self, timeout: float | None = None) -> None:
        super().__init__()
        self._timeout = timeout

    def make_connection(self, host: Any) -> Any:
        conn = super().make_connection(host)
        if self._timeout is not None:
            conn.timeout = self._timeout
        return conn


# ---------------------------------------------------------------------------
# Channel
# ---------------------------------------------------------------------------

class XmlRpcChannel(RpcChannel):
    """Blocking ``ServerProxy`` calls run in a worker thread."""

    def __init__(
        self,
        target: EndpointTarget,
        timeout: float | None = None,
        insecure_skip_verify: bool = True,
        ca_cert: str | None = None,
    ) -> None:
        self._target = target
        self._timeout = timeout
        self._insecure_skip_verify = insecure_skip_verify
        self._ca_cert = ca_cert

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> XmlRpcChannel:
        return cls(EndpointTarget.from_url(url), **kwargs)

    @property
    def target(self) -> EndpointTarget:
        return self._target

    def _make_transport(self) -> xmlrpc.client.Transport:
        if self._target.secure:
            return SafeTransport(
                timeout=self._timeout,
                insecure_skip_verify=self._insecure_skip_verify,
                ca_cert=self._ca_cert,
            )
        return UnsafeTransport(timeout=self._timeout)

    def _make_proxy(self, endpoint: str) -> xmlrpc.client.ServerProxy:
        return xmlrpc.client.ServerProxy(
            self._target.url_for(endpoint),
            transport=self._make_transport(),
            allow_none=True,
        )

    def _call_sync(self, endpoint: str, method: str, args: list[Any]) -> Any:
        # One proxy per call: a proxy keeps its HTTP connection open and
        # calls from concurrent worker threads must not share it.
        with self._make_proxy(endpoint) as proxy:
            return getattr(proxy, method)(*args)

    async def call(self, endpoint: str, method: str, args: list[Any]) -> Any:
        logger.debug("XML-RPC %s.%s", endpoint, method)
        try:
            return await asyncio.to_thread(self._call_sync, endpoint, method, list(args))
        except xmlrpc.client.Fault as e:
            raise TransportError.from_xmlrpc_fault(e, endpoint=endpoint) from e
        except xmlrpc.client.ProtocolError as e:
            raise TransportError(
                f"XML-RPC protocol error: {e.errcode} {e.errmsg}",
                endpoint=endpoint,
                cause=e,
            ) from e
        except (
            xmlrpc.client.ResponseError,
            xml.parsers.expat.ExpatError,
            http.client.HTTPException,
        ) as e:
            raise TransportError(
                f"Invalid response: {e}", endpoint=endpoint, cause=e
            ) from e
        except OSError as e:
            raise TransportError(
                f"Network error: {e}", endpoint=endpoint, cause=e
            ) from e
