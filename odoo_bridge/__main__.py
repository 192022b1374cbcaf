"""CLI entry point for the odoo-mcp-bridge server."""

import argparse
import asyncio
import sys


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="odoo-mcp-bridge",
        description="MCP server exposing Odoo records over XML-RPC",
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default=None,
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to JSON configuration file",
    )
    parser.add_argument(
        "--odoo-url",
        default=None,
        help="Odoo base URL (default: http://localhost:8069)",
    )
    parser.add_argument(
        "--odoo-db",
        default=None,
        help="Database used when a tool call names none (default: odoo)",
    )
    parser.add_argument(
        "--odoo-username",
        default=None,
        help="Odoo username (default: admin)",
    )
    parser.add_argument(
        "--odoo-password",
        default=None,
        help="Odoo password (default: admin)",
    )
    parser.add_argument(
        "--odoo-timeout",
        type=float,
        default=None,
        help="Socket timeout in seconds for Odoo calls (default: none)",
    )
    verify = parser.add_mutually_exclusive_group()
    verify.add_argument(
        "--insecure-skip-verify",
        dest="insecure_skip_verify",
        action="store_true",
        default=None,
        help="Accept TLS certificates that fail validation (default)",
    )
    verify.add_argument(
        "--verify-ssl",
        dest="insecure_skip_verify",
        action="store_false",
        default=None,
        help="Verify the Odoo server's TLS certificate",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind for SSE transport (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind for SSE transport (default: 8080)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        default=None,
        help="Log level (default: info)",
    )
    return parser


def cli_overrides_from_args(args: argparse.Namespace) -> dict:
    """Map parsed CLI flags onto config fields, keeping only supplied ones."""
    mapping = {
        "transport": "transport",
        "config": "_config_path",
        "odoo_url": "odoo_url",
        "odoo_db": "odoo_db",
        "odoo_username": "odoo_username",
        "odoo_password": "odoo_password",
        "odoo_timeout": "odoo_timeout",
        "insecure_skip_verify": "odoo_insecure_skip_verify",
        "host": "host",
        "port": "port",
        "log_level": "log_level",
    }
    return {
        key: getattr(args, attr)
        for attr, key in mapping.items()
        if getattr(args, attr) is not None
    }


def main() -> None:
    parser = build_parser()
    cli_overrides = cli_overrides_from_args(parser.parse_args())

    from odoo_bridge.server import run_server

    try:
        asyncio.run(run_server(cli_overrides))
    except KeyboardInterrupt:
        pass
    except Exception as exc:
        print(f"Fatal: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
