"""Interactive console client for a Postgres MCP server.

The package is split into the stdio channel, the request builder, the
dispatcher, the session state and the menu loop that ties them together.
"""

from .builder import build_request
from .channel import ChannelStartupError, McpChannel
from .console import CommandLoop
from .dispatcher import ToolDispatcher
from .models import Operation, ToolFailure, ToolRequest, ToolResponse, ToolSuccess
from .session import SessionState

__all__ = [
    "ChannelStartupError",
    "CommandLoop",
    "McpChannel",
    "Operation",
    "SessionState",
    "ToolDispatcher",
    "ToolFailure",
    "ToolRequest",
    "ToolResponse",
    "ToolSuccess",
    "build_request",
]
