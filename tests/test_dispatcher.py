from unittest.mock import MagicMock

import anyio
import pytest
from mcp.shared.exceptions import McpError
from mcp.types import CallToolResult, ErrorData
from pydantic import ValidationError

from conftest import text_result
from pgmcp_client.builder import build_request
from pgmcp_client.dispatcher import ToolDispatcher
from pgmcp_client.models import Operation, ToolFailure, ToolSuccess


@pytest.mark.asyncio
async def test_invoke_success_returns_raw_result(mock_channel: MagicMock) -> None:
    """Success wraps the untouched CallToolResult."""
    result = text_result("[\"users\", \"orders\"]")
    mock_channel.call_tool.return_value = result
    dispatcher = ToolDispatcher(mock_channel)

    response = await dispatcher.invoke(build_request(Operation.LIST_TABLES, "h1", {"schema": "public"}))

    assert isinstance(response, ToolSuccess)
    assert response.result is result
    mock_channel.call_tool.assert_awaited_once_with(
        "list_tables", {"conn_id": "h1", "schema": "public"}
    )


@pytest.mark.asyncio
async def test_invoke_passes_plain_dict(mock_channel: MagicMock) -> None:
    dispatcher = ToolDispatcher(mock_channel)
    await dispatcher.invoke(build_request(Operation.UNREGISTER, "h1"))
    args = mock_channel.call_tool.call_args[0][1]
    assert type(args) is dict


@pytest.mark.asyncio
async def test_invoke_error_result_becomes_failure(mock_channel: MagicMock) -> None:
    mock_channel.call_tool.return_value = text_result("relation \"t\" does not exist", is_error=True)
    dispatcher = ToolDispatcher(mock_channel)

    response = await dispatcher.invoke(build_request(Operation.QUERY, "h1", {"query": "SELECT * FROM t"}))

    assert response == ToolFailure("relation \"t\" does not exist")


@pytest.mark.asyncio
async def test_invoke_error_result_without_text(mock_channel: MagicMock) -> None:
    mock_channel.call_tool.return_value = text_result(is_error=True)
    response = await ToolDispatcher(mock_channel).invoke(build_request(Operation.UNREGISTER, "h1"))
    assert response == ToolFailure("tool reported an error")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc",
    [
        McpError(ErrorData(code=-32602, message="Unknown connection")),
        anyio.ClosedResourceError(),
        ConnectionError("MCP channel is not open"),
        BrokenPipeError("pipe closed"),
    ],
)
async def test_invoke_transport_error_becomes_failure(mock_channel: MagicMock, exc: Exception) -> None:
    """Transport errors are reported, never raised."""
    mock_channel.call_tool.side_effect = exc
    response = await ToolDispatcher(mock_channel).invoke(build_request(Operation.DROP_TABLE, "h1", {"table": "t"}))
    assert isinstance(response, ToolFailure)
    assert response.description.startswith("drop_table failed:")


@pytest.mark.asyncio
async def test_invoke_never_retries(mock_channel: MagicMock) -> None:
    mock_channel.call_tool.side_effect = TimeoutError("slow")
    await ToolDispatcher(mock_channel).invoke(build_request(Operation.INSERT, "h1", {"query": "INSERT"}))
    assert mock_channel.call_tool.await_count == 1


def _validation_error() -> ValidationError:
    try:
        CallToolResult.model_validate({"content": "not a list"})
    except ValidationError as e:
        return e
    raise AssertionError("expected a ValidationError")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc",
    [
        _validation_error(),
        RuntimeError("Invalid structured content returned by tool query"),
    ],
)
async def test_invoke_malformed_result_becomes_failure(mock_channel: MagicMock, exc: Exception) -> None:
    """Malformed results raised by the MCP session are reported, never raised."""
    mock_channel.call_tool.side_effect = exc
    response = await ToolDispatcher(mock_channel).invoke(build_request(Operation.QUERY, "h1", {"query": "SELECT 1"}))
    assert isinstance(response, ToolFailure)
    assert response.description.startswith("query failed:")
