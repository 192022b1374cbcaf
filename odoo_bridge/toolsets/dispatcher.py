"""Tool dispatcher — routes MCP tool calls to the record operations.

Each tool validates its flat argument map with a pydantic model, calls one
:class:`RecordOperations` method, and renders the result as text. Every
failure comes back as an error response; nothing raised here escapes to the
transport, so one failed call never takes the server down.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from pydantic import ValidationError

from odoo_bridge.connection.protocol import (
    InvalidArgumentsError,
    OperationFailedError,
    UnknownOperationError,
)
from odoo_bridge.errors import ErrorResponse
from odoo_bridge.errors.handler import ErrorHandler
from odoo_bridge.operations import RecordOperations
from odoo_bridge.toolsets.arguments import (
    CreateArguments,
    DeleteArguments,
    FieldsGetArguments,
    ListDatabasesArguments,
    ModelArguments,
    ReadArguments,
    SearchArguments,
    SearchCountArguments,
    SearchReadArguments,
    ToolArguments,
    WriteArguments,
    input_schema,
)
from odoo_bridge.toolsets.base import (
    ANNOTATIONS_DESTRUCTIVE,
    ANNOTATIONS_READ_ONLY,
    ANNOTATIONS_WRITE,
    ANNOTATIONS_WRITE_IDEMPOTENT,
    make_annotations,
    tool_name,
)

logger = logging.getLogger("odoo_bridge.toolsets.dispatcher")

Handler = Callable[[Any], Awaitable[str]]


@dataclass
class ToolSpec:
    name: str
    description: str
    arguments: type[ToolArguments]
    handler: Handler
    annotations: dict[str, Any] = field(default_factory=dict)

    def definition(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": input_schema(self.arguments),
            "annotations": self.annotations,
        }


@dataclass
class ToolResponse:
    text: str
    is_error: bool = False

    @classmethod
    def from_error(cls, error: ErrorResponse) -> ToolResponse:
        return cls(text=error.to_json(), is_error=True)


def _to_json(result: Any) -> str:
    return json.dumps(result, indent=2, default=str)


class ToolDispatcher:
    """Declares the record tools and executes calls against them."""

    def __init__(
        self,
        operations: RecordOperations,
        default_database: str,
        error_handler: ErrorHandler | None = None,
    ) -> None:
        self._operations = operations
        self._default_database = default_database
        self._error_handler = error_handler or ErrorHandler()
        self._tools: dict[str, ToolSpec] = {
            spec.name: spec for spec in self._build_specs()
        }

    @property
    def operations(self) -> RecordOperations:
        return self._operations

    @property
    def default_database(self) -> str:
        return self._default_database

    def tool_names(self) -> list[str]:
        return list(self._tools)

    def get_tool(self, name: str) -> ToolSpec | None:
        return self._tools.get(name)

    def list_tools(self) -> list[dict[str, Any]]:
        return [spec.definition() for spec in self._tools.values()]

    async def dispatch(
        self, name: str, arguments: dict[str, Any] | None = None
    ) -> ToolResponse:
        try:
            spec = self._tools.get(name)
            if spec is None:
                raise UnknownOperationError(name)
            args = self._parse_arguments(spec, arguments or {})
            text = await spec.handler(args)
        except Exception as exc:
            return ToolResponse.from_error(
                self._error_handler.from_exception(exc, tool=name)
            )
        logger.debug("Tool %s succeeded", name)
        return ToolResponse(text=text)

    # -- helpers -----------------------------------------------------------

    def _parse_arguments(
        self, spec: ToolSpec, arguments: dict[str, Any]
    ) -> ToolArguments:
        try:
            return spec.arguments.model_validate(arguments)
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'arguments'}: {err['msg']}"
                for err in exc.errors()
            )
            raise InvalidArgumentsError(
                f"Invalid arguments for {spec.name}: {problems}"
            ) from exc

    def _database(self, args: ModelArguments) -> str:
        return args.database or self._default_database

    # -- specs -------------------------------------------------------------

    def _build_specs(self) -> list[ToolSpec]:
        def spec(action, description, arguments, handler, annotations_kw):
            name = tool_name(action)
            return ToolSpec(
                name=name,
                description=description,
                arguments=arguments,
                handler=handler,
                annotations=make_annotations(title=name, **annotations_kw),
            )

        return [
            spec(
                "search",
                "Search for records in an Odoo model using domain filters. "
                "Returns a list of record IDs.",
                SearchArguments,
                self._search,
                ANNOTATIONS_READ_ONLY,
            ),
            spec(
                "search_read",
                "Search and read records from an Odoo model in one call. "
                "Returns full record data.",
                SearchReadArguments,
                self._search_read,
                ANNOTATIONS_READ_ONLY,
            ),
            spec(
                "read",
                "Read specific records by their IDs from an Odoo model.",
                ReadArguments,
                self._read,
                ANNOTATIONS_READ_ONLY,
            ),
            spec(
                "create",
                "Create a new record in an Odoo model.",
                CreateArguments,
                self._create,
                ANNOTATIONS_WRITE,
            ),
            spec(
                "write",
                "Update existing records in an Odoo model.",
                WriteArguments,
                self._write,
                ANNOTATIONS_WRITE_IDEMPOTENT,
            ),
            spec(
                "delete",
                "Delete records from an Odoo model.",
                DeleteArguments,
                self._delete,
                ANNOTATIONS_DESTRUCTIVE,
            ),
            spec(
                "fields_get",
                "Get field definitions for an Odoo model.",
                FieldsGetArguments,
                self._fields_get,
                ANNOTATIONS_READ_ONLY,
            ),
            spec(
                "search_count",
                "Count records matching a domain in an Odoo model.",
                SearchCountArguments,
                self._search_count,
                ANNOTATIONS_READ_ONLY,
            ),
            spec(
                "list_databases",
                "List all available databases on the Odoo server. This helps "
                "discover which databases are available to connect to.",
                ListDatabasesArguments,
                self._list_databases,
                ANNOTATIONS_READ_ONLY,
            ),
        ]

    # -- handlers ----------------------------------------------------------

    async def _search(self, args: SearchArguments) -> str:
        result = await self._operations.search(
            self._database(args),
            args.model,
            args.domain,
            offset=args.offset,
            limit=args.limit,
            order=args.order,
        )
        return _to_json(result)

    async def _search_read(self, args: SearchReadArguments) -> str:
        result = await self._operations.search_read(
            self._database(args),
            args.model,
            args.domain,
            args.fields,
            offset=args.offset,
            limit=args.limit,
            order=args.order,
        )
        return _to_json(result)

    async def _read(self, args: ReadArguments) -> str:
        result = await self._operations.read(
            self._database(args), args.model, args.ids, args.fields
        )
        return _to_json(result)

    async def _create(self, args: CreateArguments) -> str:
        record_id = await self._operations.create(
            self._database(args), args.model, args.values
        )
        return f"Record created successfully with ID: {record_id}"

    async def _write(self, args: WriteArguments) -> str:
        ok = await self._operations.write(
            self._database(args), args.model, args.ids, args.values
        )
        if not ok:
            raise OperationFailedError("Update failed")
        return "Records updated successfully"

    async def _delete(self, args: DeleteArguments) -> str:
        ok = await self._operations.unlink(self._database(args), args.model, args.ids)
        if not ok:
            raise OperationFailedError("Delete failed")
        return "Records deleted successfully"

    async def _fields_get(self, args: FieldsGetArguments) -> str:
        result = await self._operations.fields_get(
            self._database(args), args.model, args.fields, args.attributes
        )
        return _to_json(result)

    async def _search_count(self, args: SearchCountArguments) -> str:
        count = await self._operations.search_count(
            self._database(args), args.model, args.domain
        )
        return f"Count: {count}"

    async def _list_databases(self, args: ListDatabasesArguments) -> str:
        return _to_json(await self._operations.list_databases())
