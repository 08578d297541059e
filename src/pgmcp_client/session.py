import logging
from dataclasses import dataclass

from mcp.types import TextContent

from .models import ToolFailure, ToolResponse, ToolSuccess

logger = logging.getLogger(__name__)


def extract_handle(response: ToolResponse) -> str | None:
    """Return the connection handle from a register response.

    The handle is the text of the first content item. Failures, empty
    content, non-text items and whitespace-only text yield None. The text
    itself is returned unchanged.
    """
    if not isinstance(response, ToolSuccess):
        return None
    content = response.result.content
    if not content or not isinstance(content[0], TextContent):
        return None
    handle = content[0].text
    if not handle.strip():
        return None
    return handle


@dataclass
class SessionState:
    """Connection handle currently held by the operator, if any."""

    current_handle: str | None = None

    @property
    def is_registered(self) -> bool:
        return bool(self.current_handle)

    def apply_register(self, response: ToolResponse) -> str | None:
        """Move to Registered when the response carries a handle.

        A second registration replaces the held handle without unregistering
        it first. On failure the state is left unchanged.

        Returns:
            str | None: The new handle, or None if the state did not change.
        """
        handle = extract_handle(response)
        if handle is None:
            reason = response.description if isinstance(response, ToolFailure) else "no handle in response"
            logger.warning("Registration did not yield a handle: %s", reason)
            return None
        if self.current_handle:
            logger.info("Replacing held connection handle without unregistering it")
        self.current_handle = handle
        logger.info("Connection registered")
        return handle

    def apply_unregister(self) -> None:
        """Return to Unregistered regardless of how the unregister call went."""
        if self.current_handle:
            logger.info("Connection handle released")
        self.current_handle = None
