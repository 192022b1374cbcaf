"""Odoo MCP Bridge — exposes Odoo record operations as MCP tools over XML-RPC."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("odoo-mcp-bridge")
except PackageNotFoundError:
    __version__ = "1.0.0"
