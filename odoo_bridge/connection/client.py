"""Authenticated access to Odoo: session caching and ``execute_kw`` composition."""

from __future__ import annotations

import logging
from typing import Any

from odoo_bridge.connection.protocol import (
    COMMON,
    DB,
    OBJECT,
    AuthenticationError,
    Credentials,
    DatabaseListError,
    RemoteCallError,
    RpcChannel,
    TransportError,
)
from odoo_bridge.connection.session_cache import SessionCache

logger = logging.getLogger("odoo_bridge.connection.client")


class OdooSessionClient:
    """Authenticates per database and issues object-operation calls.

    A uid is cached per database on first success and reused for the rest of
    the process. It is never invalidated: a revoked uid surfaces as
    :class:`RemoteCallError` on the next call, not as a new authentication.
    """

    def __init__(
        self,
        channel: RpcChannel,
        credentials: Credentials,
        cache: SessionCache | None = None,
    ) -> None:
        self._channel = channel
        self._credentials = credentials
        self._cache = cache if cache is not None else SessionCache()

    @property
    def channel(self) -> RpcChannel:
        return self._channel

    @property
    def cache(self) -> SessionCache:
        return self._cache

    @property
    def username(self) -> str:
        return self._credentials.username

    async def authenticate(self, database: str) -> int:
        """Return the uid for *database*, authenticating on first use."""
        uid = self._cache.get(database)
        if uid is not None:
            return uid

        logger.debug(
            "Authenticating %s on database %s", self._credentials.username, database
        )
        try:
            uid = await self._channel.call(
                COMMON,
                "authenticate",
                [database, self._credentials.username, self._credentials.password, {}],
            )
        except TransportError as e:
            logger.warning("Authentication on %s failed: %s", database, e.message)
            raise AuthenticationError(
                f"Authentication failed: {e.message}", database=database, cause=e
            ) from e

        if not uid:
            logger.warning("Authentication on %s rejected: invalid credentials", database)
            raise AuthenticationError(
                "Authentication failed: Invalid credentials", database=database
            )

        self._cache.put(database, uid)
        logger.info(
            "Authenticated %s on database %s (uid=%s)",
            self._credentials.username,
            database,
            uid,
        )
        return uid

    async def invoke(
        self,
        database: str,
        model: str,
        method: str,
        args: list[Any] | None = None,
        kwargs: dict[str, Any] | None = None,
    ) -> Any:
        """Call ``model.method(*args, **kwargs)`` on *database* via ``execute_kw``."""
        uid = await self.authenticate(database)
        call_args = list(args) if args is not None else []
        call_kwargs = dict(kwargs) if kwargs is not None else {}

        logger.debug("execute_kw %s.%s on %s", model, method, database)
        try:
            return await self._channel.call(
                OBJECT,
                "execute_kw",
                [
                    database,
                    uid,
                    self._credentials.password,
                    model,
                    method,
                    call_args,
                    call_kwargs,
                ],
            )
        except TransportError as e:
            logger.warning("%s.%s on %s failed: %s", model, method, database, e.message)
            raise RemoteCallError(
                f"Odoo API error: {e.message}",
                database=database,
                model=model,
                method=method,
                cause=e,
            ) from e

    async def list_databases(self) -> list[str]:
        """Enumerate databases on the server. Needs no authentication."""
        try:
            result = await self._channel.call(DB, "list", [])
        except TransportError as e:
            logger.warning("Database listing failed: %s", e.message)
            raise DatabaseListError(
                f"Failed to list databases: {e.message}", cause=e
            ) from e
        return list(result or [])
