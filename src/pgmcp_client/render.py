from mcp.types import CallToolResult, TextContent

from .models import ToolFailure, ToolResponse, ToolSuccess


def format_result(result: CallToolResult) -> str:
    """Render every content item: text as-is, anything else as its JSON dump."""
    if not result.content:
        return "(empty response)"
    parts: list[str] = []
    for item in result.content:
        if isinstance(item, TextContent):
            parts.append(item.text)
        else:
            parts.append(item.model_dump_json(indent=2, exclude_none=True))
    return "\n".join(parts)


def render_response(label: str, response: ToolResponse) -> str:
    if isinstance(response, ToolSuccess):
        return f"{label}: {format_result(response.result)}"
    if isinstance(response, ToolFailure):
        return f"Error: {response.description}"
    raise TypeError(f"Unsupported response type: {type(response).__name__}")
