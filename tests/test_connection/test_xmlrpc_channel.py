"""Tests for the XML-RPC channel."""

from __future__ import annotations

import http.client
import ssl
import xml.parsers.expat
import xmlrpc.client
from unittest.mock import MagicMock, patch

import pytest

from odoo_bridge.connection.protocol import EndpointTarget, TransportError
from odoo_bridge.connection.xmlrpc_channel import (
    SafeTransport,
    UnsafeTransport,
    XmlRpcChannel,
    make_ssl_context,
)


def _proxy(**methods):
    proxy = MagicMock()
    proxy.__enter__.return_value = proxy
    for name, value in methods.items():
        setattr(proxy, name, value)
    return proxy


@pytest.fixture
def channel():
    return XmlRpcChannel.from_url("https://test.odoo.com")


class TestTransports:

    def test_https_uses_safe_transport(self, channel):
        assert isinstance(channel._make_transport(), SafeTransport)

    def test_http_uses_plain_transport(self):
        channel = XmlRpcChannel.from_url("http://localhost:8069")
        assert isinstance(channel._make_transport(), UnsafeTransport)

    def test_skip_verify_accepts_any_certificate(self):
        context = make_ssl_context(insecure_skip_verify=True)
        assert context.verify_mode == ssl.CERT_NONE
        assert context.check_hostname is False

    def test_verification_enabled(self):
        context = make_ssl_context(insecure_skip_verify=False)
        assert context.verify_mode == ssl.CERT_REQUIRED
        assert context.check_hostname is True

    def test_channel_defaults_to_skip_verify(self, channel):
        transport = channel._make_transport()
        assert transport.context.verify_mode == ssl.CERT_NONE

    def test_channel_with_verification(self):
        channel = XmlRpcChannel.from_url(
            "https://test.odoo.com", insecure_skip_verify=False
        )
        assert channel._make_transport().context.verify_mode == ssl.CERT_REQUIRED

    def test_proxy_points_at_endpoint(self, channel):
        proxy = channel._make_proxy("object")
        assert isinstance(proxy, xmlrpc.client.ServerProxy)
        assert channel.target == EndpointTarget("https", "test.odoo.com", 443, "")


class TestCall:

    @pytest.mark.asyncio
    async def test_call_passes_args(self, channel):
        proxy = _proxy(authenticate=MagicMock(return_value=2))
        with patch.object(channel, "_make_proxy", return_value=proxy) as make_proxy:
            result = await channel.call(
                "common", "authenticate", ["db", "admin", "admin", {}]
            )

        assert result == 2
        make_proxy.assert_called_once_with("common")
        proxy.authenticate.assert_called_once_with("db", "admin", "admin", {})

    @pytest.mark.asyncio
    async def test_call_without_args(self, channel):
        proxy = _proxy(list=MagicMock(return_value=["a", "b"]))
        with patch.object(channel, "_make_proxy", return_value=proxy):
            assert await channel.call("db", "list", []) == ["a", "b"]
        proxy.list.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_fault_is_transport_error(self, channel):
        proxy = _proxy(
            execute_kw=MagicMock(
                side_effect=xmlrpc.client.Fault(
                    1, "odoo.exceptions.ValidationError: Name is required"
                )
            )
        )
        with patch.object(channel, "_make_proxy", return_value=proxy):
            with pytest.raises(TransportError) as exc_info:
                await channel.call("object", "execute_kw", [])

        err = exc_info.value
        assert err.message == "odoo.exceptions.ValidationError: Name is required"
        assert err.error_class == "odoo.exceptions.ValidationError"
        assert err.endpoint == "object"

    @pytest.mark.asyncio
    async def test_protocol_error(self, channel):
        proxy = _proxy(
            execute_kw=MagicMock(
                side_effect=xmlrpc.client.ProtocolError(
                    "https://test.odoo.com/xmlrpc/2/object", 502, "Bad Gateway", {}
                )
            )
        )
        with patch.object(channel, "_make_proxy", return_value=proxy):
            with pytest.raises(TransportError, match="XML-RPC protocol error: 502 Bad Gateway"):
                await channel.call("object", "execute_kw", [])

    @pytest.mark.asyncio
    async def test_os_error(self, channel):
        proxy = _proxy(
            authenticate=MagicMock(side_effect=ConnectionRefusedError("Connection refused"))
        )
        with patch.object(channel, "_make_proxy", return_value=proxy):
            with pytest.raises(TransportError, match="Network error") as exc_info:
                await channel.call("common", "authenticate", [])

        assert exc_info.value.fault_code is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exc",
        [
            xml.parsers.expat.ExpatError("no element found: line 1, column 30"),
            http.client.BadStatusLine("HTTP/1.1 ???"),
            xmlrpc.client.ResponseError("response contained no data"),
        ],
    )
    async def test_malformed_reply_is_transport_error(self, channel, exc):
        proxy = _proxy(authenticate=MagicMock(side_effect=exc))
        with patch.object(channel, "_make_proxy", return_value=proxy):
            with pytest.raises(TransportError, match="Invalid response") as exc_info:
                await channel.call("common", "authenticate", [])

        assert exc_info.value.cause is exc
        assert exc_info.value.endpoint == "common"
        assert exc_info.value.fault_code is None
