"""
Error payloads for the Odoo MCP bridge.

Turns bridge exceptions into structured, LLM-friendly tool error responses.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error classification categories."""

    AUTHENTICATION = "authentication"
    REMOTE_CALL = "remote_call"
    DATABASE_LIST = "database_list"
    UNKNOWN_OPERATION = "unknown_operation"
    VALIDATION = "validation"
    OPERATION_FAILED = "operation_failed"
    CONNECTION = "connection"
    UNKNOWN = "unknown"


class ErrorCode:
    """Machine-readable error codes."""

    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    REMOTE_ERROR = "REMOTE_ERROR"
    ACCESS_DENIED = "ACCESS_DENIED"
    DATABASE_LIST_FAILED = "DATABASE_LIST_FAILED"
    UNKNOWN_TOOL = "UNKNOWN_TOOL"
    INVALID_ARGUMENTS = "INVALID_ARGUMENTS"
    UPDATE_FAILED = "UPDATE_FAILED"
    DELETE_FAILED = "DELETE_FAILED"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


# Whether repeating the same call can succeed without changing it
RETRY_GUIDANCE: dict[str, bool] = {
    ErrorCategory.AUTHENTICATION: True,
    ErrorCategory.REMOTE_CALL: False,
    ErrorCategory.DATABASE_LIST: True,
    ErrorCategory.UNKNOWN_OPERATION: False,
    ErrorCategory.VALIDATION: False,
    ErrorCategory.OPERATION_FAILED: False,
    ErrorCategory.CONNECTION: True,
    ErrorCategory.UNKNOWN: False,
}


@dataclass
class ErrorResponse:
    """Structured error payload returned to the MCP client.

    Required: error, category, code, message, suggestion, retry.
    Optional: details.
    """

    category: str
    code: str
    message: str
    suggestion: str
    retry: bool
    error: bool = True
    details: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary, omitting details when unset."""
        result: dict[str, Any] = {
            "error": self.error,
            "category": str(getattr(self.category, "value", self.category)),
            "code": self.code,
            "message": self.message,
            "suggestion": self.suggestion,
            "retry": self.retry,
        }
        if self.details is not None:
            result["details"] = self.details
        return result

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


def get_retry_for_category(category: str) -> bool:
    return RETRY_GUIDANCE.get(category, False)
