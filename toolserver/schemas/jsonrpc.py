"""JSON-RPC Schemas — Pydantic models for the request envelope and method params.

Invariants:
    - JsonRpcRequest.jsonrpc must be exactly "2.0"; method non-empty
    - A request without an `id` key is a notification (check model_fields_set)
    - ToolCallParams.arguments, when present, must be an object

Design Decisions:
    - extra="allow" on the envelope: clients add fields like _meta, never rejected
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class JsonRpcRequest(BaseModel):
    """Incoming JSON-RPC 2.0 request or notification."""
    model_config = ConfigDict(extra="allow")

    jsonrpc: Literal["2.0"]
    method: str = Field(min_length=1)
    id: str | int | None = None
    params: dict[str, Any] | list[Any] | None = None

    @property
    def is_notification(self) -> bool:
        return "id" not in self.model_fields_set


class ToolCallParams(BaseModel):
    """params of tools/call."""
    model_config = ConfigDict(extra="allow")

    name: str = Field(min_length=1)
    arguments: dict[str, Any] | None = None


class InitializeParams(BaseModel):
    """params of initialize — only protocolVersion is read."""
    model_config = ConfigDict(extra="allow")

    protocolVersion: str | None = None
