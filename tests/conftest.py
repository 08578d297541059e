import sys
from pathlib import Path


_root = Path(__file__).resolve().parents[1]
_src = _root / "src"
if _src.exists() and str(_src) not in sys.path:
    sys.path.insert(0, str(_src))

from unittest.mock import AsyncMock, MagicMock

import pytest
from mcp.types import CallToolResult, TextContent

from pgmcp_client.channel import McpChannel


def text_result(*texts: str, is_error: bool = False) -> CallToolResult:
    """Build a CallToolResult with one TextContent item per text."""
    return CallToolResult(
        content=[TextContent(type="text", text=t) for t in texts],
        isError=is_error,
    )


@pytest.fixture
def mock_channel() -> MagicMock:
    """Mock MCP channel with async call_tool/close."""
    m = MagicMock(spec=McpChannel)
    m.call_tool = AsyncMock(return_value=text_result("ok"))
    m.close = AsyncMock(return_value=None)
    return m
