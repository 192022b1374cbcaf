"""Argument models for the record tools.

The MCP input schemas are generated from these models, and incoming
argument maps are validated against them before any remote call.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from odoo_bridge.operations import DEFAULT_LIMIT, DEFAULT_OFFSET

DOMAIN_HELP = (
    'Search domain as array of tuples [["field", "operator", "value"]]. '
    'Example: [["name", "ilike", "John"]]. Empty array matches all records.'
)


class ToolArguments(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ModelArguments(ToolArguments):
    database: str | None = Field(
        default=None,
        description="The Odoo database name to connect to. Defaults to the configured database.",
    )
    model: str = Field(
        description='The Odoo model name (e.g., "res.partner", "sale.order")',
        min_length=1,
    )


class SearchArguments(ModelArguments):
    domain: list[Any] = Field(default_factory=list, description=DOMAIN_HELP)
    limit: int = Field(
        default=DEFAULT_LIMIT, ge=0, description="Maximum number of records to return"
    )
    offset: int = Field(
        default=DEFAULT_OFFSET, ge=0, description="Number of records to skip"
    )
    order: str | None = Field(
        default=None,
        description='Order by field (e.g., "name ASC", "create_date DESC")',
    )


class SearchReadArguments(SearchArguments):
    fields: list[str] = Field(
        default_factory=list,
        description="List of field names to return. Empty array returns all fields.",
    )


class ReadArguments(ModelArguments):
    ids: list[int] = Field(description="Array of record IDs to read")
    fields: list[str] = Field(
        default_factory=list,
        description="List of field names to return. Empty array returns all fields.",
    )


class CreateArguments(ModelArguments):
    values: dict[str, Any] = Field(
        description="Object with field names and values for the new record"
    )


class WriteArguments(ModelArguments):
    ids: list[int] = Field(description="Array of record IDs to update")
    values: dict[str, Any] = Field(description="Object with field names and new values")


class DeleteArguments(ModelArguments):
    ids: list[int] = Field(description="Array of record IDs to delete")


class FieldsGetArguments(ModelArguments):
    fields: list[str] = Field(
        default_factory=list,
        description="List of specific field names to get info for. Empty returns all fields.",
    )
    attributes: list[str] = Field(
        default_factory=list,
        description='List of attributes to return for each field (e.g., ["string", "type", "required"])',
    )


class SearchCountArguments(ModelArguments):
    domain: list[Any] = Field(default_factory=list, description=DOMAIN_HELP)


class ListDatabasesArguments(ToolArguments):
    pass


def input_schema(arguments: type[ToolArguments]) -> dict[str, Any]:
    """JSON schema for a tool's ``inputSchema``."""
    schema = arguments.model_json_schema()
    schema.pop("title", None)
    schema.setdefault("properties", {})
    return schema
