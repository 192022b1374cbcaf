"""Tool naming and MCP annotation helpers shared by the record tools."""

from __future__ import annotations

from typing import Any


def tool_name(action: str) -> str:
    """Build a canonical tool name following ``odoo_{action}``."""
    return f"odoo_{action}"


def make_annotations(
    *,
    title: str,
    read_only: bool = False,
    destructive: bool = False,
    idempotent: bool = False,
    open_world: bool = True,
) -> dict[str, Any]:
    """Return a dict suitable for MCP ``ToolAnnotations``.

    All tools set ``openWorldHint=True`` because they talk to an external
    Odoo server.
    """
    return {
        "title": title,
        "readOnlyHint": read_only,
        "destructiveHint": destructive,
        "idempotentHint": idempotent,
        "openWorldHint": open_world,
    }


ANNOTATIONS_READ_ONLY = dict(read_only=True, destructive=False, idempotent=True, open_world=True)
ANNOTATIONS_WRITE = dict(read_only=False, destructive=False, idempotent=False, open_world=True)
ANNOTATIONS_WRITE_IDEMPOTENT = dict(read_only=False, destructive=False, idempotent=True, open_world=True)
ANNOTATIONS_DESTRUCTIVE = dict(read_only=False, destructive=True, idempotent=True, open_world=True)
