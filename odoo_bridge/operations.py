"""Named record operations built on :meth:`OdooSessionClient.invoke`.

Each operation fixes the remote method name and shapes its arguments.
Omitted vs. empty matters to Odoo: ``order`` is left out entirely unless
given, and an empty ``fields`` list on ``read``/``fields_get`` is not sent.
A zero ``limit`` means "no limit" to Odoo, so it falls back to the default.
"""

from __future__ import annotations

from typing import Any

from odoo_bridge.connection.client import OdooSessionClient

DEFAULT_LIMIT = 100
DEFAULT_OFFSET = 0


class RecordOperations:
    """Search, read, create, write, unlink and introspect Odoo records."""

    def __init__(self, client: OdooSessionClient) -> None:
        self._client = client

    @property
    def client(self) -> OdooSessionClient:
        return self._client

    async def search(
        self,
        database: str,
        model: str,
        domain: list | None = None,
        offset: int = DEFAULT_OFFSET,
        limit: int = DEFAULT_LIMIT,
        order: str | None = None,
    ) -> list[int]:
        kwargs: dict[str, Any] = {"offset": offset, "limit": limit or DEFAULT_LIMIT}
        if order:
            kwargs["order"] = order
        return await self._client.invoke(
            database, model, "search", [domain or []], kwargs
        )

    async def search_read(
        self,
        database: str,
        model: str,
        domain: list | None = None,
        fields: list[str] | None = None,
        offset: int = DEFAULT_OFFSET,
        limit: int = DEFAULT_LIMIT,
        order: str | None = None,
    ) -> list[dict]:
        kwargs: dict[str, Any] = {
            "fields": list(fields or []),
            "offset": offset,
            "limit": limit or DEFAULT_LIMIT,
        }
        if order:
            kwargs["order"] = order
        return await self._client.invoke(
            database, model, "search_read", [domain or []], kwargs
        )

    async def read(
        self,
        database: str,
        model: str,
        ids: list[int],
        fields: list[str] | None = None,
    ) -> list[dict]:
        kwargs: dict[str, Any] = {"fields": list(fields)} if fields else {}
        return await self._client.invoke(database, model, "read", [ids], kwargs)

    async def create(self, database: str, model: str, values: dict) -> int:
        return await self._client.invoke(database, model, "create", [values], {})

    async def write(
        self, database: str, model: str, ids: list[int], values: dict
    ) -> bool:
        return await self._client.invoke(database, model, "write", [ids, values], {})

    async def unlink(self, database: str, model: str, ids: list[int]) -> bool:
        return await self._client.invoke(database, model, "unlink", [ids], {})

    async def fields_get(
        self,
        database: str,
        model: str,
        fields: list[str] | None = None,
        attributes: list[str] | None = None,
    ) -> dict:
        args: list[Any] = [list(fields)] if fields else []
        kwargs: dict[str, Any] = {"attributes": list(attributes)} if attributes else {}
        return await self._client.invoke(database, model, "fields_get", args, kwargs)

    async def search_count(
        self, database: str, model: str, domain: list | None = None
    ) -> int:
        return await self._client.invoke(
            database, model, "search_count", [domain or []], {}
        )

    async def list_databases(self) -> list[str]:
        return await self._client.list_databases()
