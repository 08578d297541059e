import asyncio
import logging

from .channel import ChannelStartupError, McpChannel, server_params_from_command
from .console import CommandLoop
from .dispatcher import ToolDispatcher
from .logging_setup import setup_client_logging
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


async def run_console(settings: Settings) -> int:
    """Open the MCP channel, run the interactive loop, and always close the channel.

    Raises:
        ChannelStartupError: if the server cannot be started.
    """
    channel = McpChannel(
        server_params_from_command(settings.server_command),
        startup_timeout_seconds=settings.startup_timeout_seconds,
    )
    await channel.start()
    try:
        if settings.list_tools_on_startup:
            tool_names = await channel.list_tool_names()
            logger.info("Available tools: %s", ", ".join(tool_names))
        loop = CommandLoop(ToolDispatcher(channel), channel)
        return await loop.run()
    finally:
        await channel.close()


def main() -> int:
    settings = get_settings()
    setup_client_logging(settings)
    try:
        return asyncio.run(run_console(settings))
    except ChannelStartupError as e:
        logger.error("%s", e)
        return 1
