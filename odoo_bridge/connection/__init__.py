"""Odoo connection layer — XML-RPC channel, session cache, authenticated client."""

from odoo_bridge.connection.client import OdooSessionClient
from odoo_bridge.connection.protocol import (
    AuthenticationError,
    Credentials,
    DatabaseListError,
    EndpointTarget,
    InvalidArgumentsError,
    OdooBridgeError,
    OperationFailedError,
    RemoteCallError,
    RpcChannel,
    TransportError,
    UnknownOperationError,
)
from odoo_bridge.connection.session_cache import SessionCache
from odoo_bridge.connection.xmlrpc_channel import XmlRpcChannel

__all__ = [
    "AuthenticationError",
    "Credentials",
    "DatabaseListError",
    "EndpointTarget",
    "InvalidArgumentsError",
    "OdooBridgeError",
    "OdooSessionClient",
    "OperationFailedError",
    "RemoteCallError",
    "RpcChannel",
    "SessionCache",
    "TransportError",
    "UnknownOperationError",
    "XmlRpcChannel",
]
