import logging

from mcp.types import CallToolResult, TextContent

from .channel import INVOCATION_ERRORS, McpChannel
from .models import ToolFailure, ToolRequest, ToolResponse, ToolSuccess

logger = logging.getLogger(__name__)


def _error_text(result: CallToolResult) -> str:
    texts = [item.text for item in result.content if isinstance(item, TextContent)]
    return "\n".join(texts) or "tool reported an error"


class ToolDispatcher:
    """Sends one request at a time over the channel and waits for its result.

    Each call is attempted exactly once; failures come back as ToolFailure
    instead of being raised, so the caller's loop keeps running.
    """

    def __init__(self, channel: McpChannel) -> None:
        self._channel = channel

    async def invoke(self, request: ToolRequest) -> ToolResponse:
        name = request.operation.value
        logger.info("Dispatching tool: %s", name)
        try:
            result = await self._channel.call_tool(name, dict(request.arguments))
        except INVOCATION_ERRORS as e:
            logger.error("Tool %s failed: %s", name, e)
            return ToolFailure(f"{name} failed: {e}")

        if result.isError:
            description = _error_text(result)
            logger.warning("Tool %s returned an error: %s", name, description)
            return ToolFailure(description)

        logger.debug("Tool %s completed with %d content item(s)", name, len(result.content))
        return ToolSuccess(result)
