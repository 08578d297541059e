from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from mcp.types import CallToolResult


class Operation(str, Enum):
    """Tools exposed by the Postgres MCP server."""

    REGISTER = "register"
    CREATE_TABLE = "create_table"
    INSERT = "insert"
    QUERY = "query"
    LIST_TABLES = "list_tables"
    DESCRIBE = "describe"
    UPDATE = "update"
    DELETE = "delete"
    CREATE_INDEX = "create_index"
    DROP_INDEX = "drop_index"
    DROP_TABLE = "drop_table"
    UNREGISTER = "unregister"

    @property
    def requires_handle(self) -> bool:
        return self is not Operation.REGISTER


@dataclass(frozen=True)
class ToolRequest:
    """A single tool call: operation name plus read-only string arguments."""

    operation: Operation
    arguments: Mapping[str, str]


@dataclass(frozen=True)
class ToolSuccess:
    """Raw result returned by the server, kept untouched for rendering."""

    result: CallToolResult


@dataclass(frozen=True)
class ToolFailure:
    """Human-readable description of a failed invocation."""

    description: str


ToolResponse = ToolSuccess | ToolFailure
