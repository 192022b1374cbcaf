"""
Error classification for the Odoo MCP bridge.

Maps bridge exceptions (and anything unexpected) onto ErrorResponse objects.
"""

from __future__ import annotations

import logging

from odoo_bridge.connection.protocol import (
    AuthenticationError,
    DatabaseListError,
    InvalidArgumentsError,
    OdooBridgeError,
    OperationFailedError,
    RemoteCallError,
    TransportError,
    UnknownOperationError,
)
from odoo_bridge.errors import (
    ErrorCategory,
    ErrorCode,
    ErrorResponse,
    get_retry_for_category,
)

logger = logging.getLogger(__name__)

SUGGESTIONS: dict[str, str] = {
    ErrorCategory.AUTHENTICATION: (
        "Check ODOO_USERNAME/ODOO_PASSWORD and that the database name exists "
        "(odoo_list_databases shows the available ones)."
    ),
    ErrorCategory.REMOTE_CALL: (
        "Odoo rejected the call. Check the model name, field names and domain, "
        "and that the user has access rights."
    ),
    ErrorCategory.DATABASE_LIST: (
        "The server may have database listing disabled (list_db = False)."
    ),
    ErrorCategory.UNKNOWN_OPERATION: "Use one of the tools listed by the server.",
    ErrorCategory.VALIDATION: "Fix the tool arguments and call again.",
    ErrorCategory.OPERATION_FAILED: (
        "Odoo reported no change. Check that the record IDs exist."
    ),
    ErrorCategory.CONNECTION: (
        "The Odoo server is not responding. Check that it is running and "
        "ODOO_URL is correct."
    ),
    ErrorCategory.UNKNOWN: "An unexpected error occurred. Check the server logs.",
}


def _transport_cause(exc: OdooBridgeError) -> TransportError | None:
    cause = exc.cause
    return cause if isinstance(cause, TransportError) else None


def _is_network_failure(transport: TransportError | None) -> bool:
    """True when the server never answered (no XML-RPC fault)."""
    return transport is not None and transport.fault_code is None


class ErrorHandler:
    """Translates bridge exceptions into structured ErrorResponse objects."""

    def from_exception(
        self, exc: BaseException, tool: str | None = None
    ) -> ErrorResponse:
        details: dict[str, str] = {}
        if tool:
            details["tool"] = tool

        if isinstance(exc, AuthenticationError):
            transport = _transport_cause(exc)
            if exc.database:
                details["database"] = exc.database
            if _is_network_failure(transport):
                category, code = ErrorCategory.CONNECTION, ErrorCode.CONNECTION_ERROR
            elif transport is None:
                category, code = ErrorCategory.AUTHENTICATION, ErrorCode.INVALID_CREDENTIALS
            else:
                category, code = ErrorCategory.AUTHENTICATION, ErrorCode.AUTHENTICATION_FAILED
        elif isinstance(exc, RemoteCallError):
            transport = _transport_cause(exc)
            for key in ("database", "model", "method"):
                value = getattr(exc, key)
                if value:
                    details[key] = value
            if transport is not None and transport.error_class:
                details["error_class"] = transport.error_class
            if _is_network_failure(transport):
                category, code = ErrorCategory.CONNECTION, ErrorCode.CONNECTION_ERROR
            elif transport is not None and transport.error_class and (
                "AccessError" in transport.error_class
                or "AccessDenied" in transport.error_class
            ):
                category, code = ErrorCategory.REMOTE_CALL, ErrorCode.ACCESS_DENIED
            else:
                category, code = ErrorCategory.REMOTE_CALL, ErrorCode.REMOTE_ERROR
        elif isinstance(exc, DatabaseListError):
            category, code = ErrorCategory.DATABASE_LIST, ErrorCode.DATABASE_LIST_FAILED
        elif isinstance(exc, UnknownOperationError):
            category, code = ErrorCategory.UNKNOWN_OPERATION, ErrorCode.UNKNOWN_TOOL
        elif isinstance(exc, InvalidArgumentsError):
            category, code = ErrorCategory.VALIDATION, ErrorCode.INVALID_ARGUMENTS
        elif isinstance(exc, OperationFailedError):
            category = ErrorCategory.OPERATION_FAILED
            code = ErrorCode.DELETE_FAILED if tool == "odoo_delete" else ErrorCode.UPDATE_FAILED
        else:
            logger.error("Unexpected error in %s", tool or "tool call", exc_info=exc)
            return ErrorResponse(
                category=ErrorCategory.UNKNOWN,
                code=ErrorCode.UNKNOWN_ERROR,
                message=f"Unexpected error: {exc}",
                suggestion=SUGGESTIONS[ErrorCategory.UNKNOWN],
                retry=False,
                details=details or None,
            )

        response = ErrorResponse(
            category=category,
            code=code,
            message=str(exc),
            suggestion=SUGGESTIONS[category],
            retry=get_retry_for_category(category),
            details=details or None,
        )
        self._log_error(response, tool)
        return response

    def _log_error(self, response: ErrorResponse, tool: str | None) -> None:
        msg = f"[{response.code}] {response.message} | tool={tool or ''}"
        if response.category in (
            ErrorCategory.VALIDATION,
            ErrorCategory.UNKNOWN_OPERATION,
            ErrorCategory.OPERATION_FAILED,
        ):
            logger.info(msg)
        else:
            logger.warning(msg)
