import logging
import os
from contextlib import AsyncExitStack
from typing import Any, Dict

import anyio
from mcp import StdioServerParameters
from mcp.client.session import ClientSession
from mcp.client.stdio import stdio_client
from mcp.shared.exceptions import McpError
from mcp.types import CallToolResult, Implementation

logger = logging.getLogger(__name__)

TRANSPORT_ERRORS = (
    McpError,
    anyio.BrokenResourceError,
    anyio.ClosedResourceError,
    anyio.EndOfStream,
    OSError,
    ConnectionError,
    TimeoutError,
)

# ClientSession raises pydantic ValidationError (a ValueError) for malformed
# results and RuntimeError for structured content that fails its schema.
INVOCATION_ERRORS = TRANSPORT_ERRORS + (ValueError, RuntimeError)

# The stdio task group reports failures of its reader/writer tasks as a group.
STARTUP_ERRORS = INVOCATION_ERRORS + (ExceptionGroup,)


class ChannelStartupError(RuntimeError):
    """The MCP server could not be started or the handshake failed."""


def server_params_from_command(command: str) -> StdioServerParameters:
    """Split a configured command line into stdio server parameters.

    The child inherits the current environment so the server can find its own
    configuration and executables on PATH.
    """
    cmd_parts = command.split()
    if not cmd_parts:
        raise ChannelStartupError("MCP server command is empty")
    return StdioServerParameters(
        command=cmd_parts[0],
        args=cmd_parts[1:],
        env={**os.environ},
    )


class McpChannel:
    """Stdio connection to one MCP server process, opened once and closed once."""

    def __init__(
        self,
        server_params: StdioServerParameters,
        startup_timeout_seconds: float = 30.0,
    ) -> None:
        self._params = server_params
        self._startup_timeout = startup_timeout_seconds
        self._stack: AsyncExitStack | None = None
        self._session: ClientSession | None = None
        self.server_info: Implementation | None = None

    @property
    def is_open(self) -> bool:
        return self._session is not None

    async def start(self) -> None:
        """Spawn the server and run the MCP initialize handshake.

        Raises:
            ChannelStartupError: if the process cannot be spawned, the
                handshake fails, or it does not finish in time.
        """
        if self._session is not None:
            return
        try:
            # Any failure unwinds the stdio context inside this task, so the
            # child process is reaped and its task group exits where it began.
            async with AsyncExitStack() as stack:
                read, write = await stack.enter_async_context(
                    stdio_client(self._params)
                )
                session = await stack.enter_async_context(ClientSession(read, write))
                with anyio.fail_after(self._startup_timeout):
                    init_result = await session.initialize()
                self._stack = stack.pop_all()
        except STARTUP_ERRORS as e:
            raise ChannelStartupError(
                f"Failed to start MCP server '{self._params.command}': {e}"
            ) from e

        self._session = session
        self.server_info = init_result.serverInfo
        logger.info("Connected to server: %s", self.server_info)

    async def list_tool_names(self) -> list[str]:
        """Return the names of the tools advertised by the server."""
        session = self._require_session()
        tools_result = await session.list_tools()
        return [t.name for t in tools_result.tools]

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> CallToolResult:
        session = self._require_session()
        return await session.call_tool(name, arguments)

    async def close(self) -> None:
        """Shut the session down and terminate the server process. Idempotent."""
        if self._stack is None:
            return
        stack, self._stack = self._stack, None
        self._session = None
        try:
            await stack.aclose()
        except STARTUP_ERRORS as e:
            logger.warning("Error while closing MCP channel: %s", e)
            return
        logger.info("MCP channel closed")

    def _require_session(self) -> ClientSession:
        if self._session is None:
            raise ConnectionError("MCP channel is not open")
        return self._session
