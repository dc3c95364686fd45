"""Error Hierarchy — typed, categorized exceptions for all tool server failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors (400-level) are the caller's fault; provider errors (500-level) are not
    - to_response() produces REST envelope; to_tool_text() produces the tools/call error text
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ToolServerError base: dispatch and FastAPI handler catch all
      (ADR: uniform error shape across HTTP, Lambda and stdio)
    - JsonRpcError carries its protocol code so the dispatcher never guesses
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFIGURATION = "configuration"
    EXTERNAL_API = "external_api"
    PROTOCOL = "protocol"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    tool_name: str | None = None
    request_id: str | int | None = None
    provider: str | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class ToolServerError(Exception):
    """Base exception for all tool server errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "tool_name": self.context.tool_name,
                    "request_id": self.context.request_id,
                    "provider": self.context.provider,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }

    def to_tool_text(self, tool_name: str) -> str:
        """Text block returned inside an isError tools/call result."""
        return f"Error executing {tool_name}: {self.message}"


# ─── Validation Errors (400-level) ──────────────────────────────

class ToolValidationError(ToolServerError):
    """Tool input validation failed."""
    def __init__(self, message: str, field: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class CalculationError(ToolServerError):
    """Arithmetic expression or math operation could not be evaluated."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CALCULATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class UnknownToolError(ToolServerError):
    """tools/call named a tool that is not in the catalog."""
    def __init__(self, tool_name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unknown tool: {tool_name}",
            "UNKNOWN_TOOL", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.tool_name = tool_name


# ─── Provider Errors (500-level) ────────────────────────────────

class ProviderNotConfiguredError(ToolServerError):
    """GitHub/GitLab tool called without the provider token set."""
    def __init__(self, provider: str, env_var: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.provider = provider
        super().__init__(
            f"{env_var} is not configured. Set it to use the {provider} tools.",
            "PROVIDER_NOT_CONFIGURED", ErrorCategory.CONFIGURATION,
            ErrorSeverity.ERROR, ctx, 503,
        )
        self.provider = provider
        self.env_var = env_var


class ExternalAPIError(ToolServerError):
    """GitHub/GitLab REST call failed."""
    def __init__(
        self,
        provider: str,
        message: str,
        status_code: int | None = None,
        retry_after_ms: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.provider = provider
        ctx.retry_after_ms = retry_after_ms
        status_part = f" (HTTP {status_code})" if status_code else ""
        super().__init__(
            f"{provider} API error{status_part}: {message}",
            "EXTERNAL_API_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx, 502,
        )
        self.provider = provider
        self.status_code = status_code


# ─── Protocol Errors ────────────────────────────────────────────

class JsonRpcError(ToolServerError):
    """Protocol-level failure, reported as a JSON-RPC error object."""
    def __init__(
        self, rpc_code: int, message: str, data: Any = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "JSONRPC_ERROR", ErrorCategory.PROTOCOL,
            ErrorSeverity.WARNING, context, 400,
        )
        self.rpc_code = rpc_code
        self.data = data
