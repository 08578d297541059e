from types import MappingProxyType
from typing import Mapping

from .models import Operation, ToolRequest

HANDLE_FIELD = "conn_id"

# Operator-supplied fields per operation, in prompt order.
OPERATION_FIELDS: dict[Operation, tuple[str, ...]] = {
    Operation.REGISTER: ("conn_str",),
    Operation.CREATE_TABLE: ("query",),
    Operation.INSERT: ("query",),
    Operation.QUERY: ("query",),
    Operation.LIST_TABLES: ("schema",),
    Operation.DESCRIBE: ("table",),
    Operation.UPDATE: ("query",),
    Operation.DELETE: ("query",),
    Operation.CREATE_INDEX: ("query",),
    Operation.DROP_INDEX: ("index",),
    Operation.DROP_TABLE: ("table",),
    Operation.UNREGISTER: (),
}


def build_request(
    operation: Operation,
    handle: str | None,
    fields: Mapping[str, str] | None = None,
) -> ToolRequest:
    """Build the argument mapping for one tool call.

    Every operation except ``register`` carries the connection handle under
    ``conn_id``; a missing handle is sent as an empty string and left for the
    server to reject. Field values are passed through as given.

    Args:
        operation: Tool to call.
        handle: Current connection handle, or None when not registered.
        fields: Operation-specific values keyed by parameter name.

    Returns:
        ToolRequest: Request with a read-only argument mapping.
    """
    arguments: dict[str, str] = {}
    if operation.requires_handle:
        arguments[HANDLE_FIELD] = handle or ""
    if fields:
        arguments.update(fields)
    return ToolRequest(operation=operation, arguments=MappingProxyType(arguments))
