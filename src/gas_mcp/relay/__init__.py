"""Relay of MCP calls to the Apps Script Web App."""

from gas_mcp.relay.dispatcher import RelayDispatcher
from gas_mcp.relay.models import (
    CREDENTIAL_FIELD,
    RelayResult,
    ResultKind,
    RpcMethod,
    build_envelope,
    classify_response,
)

__all__ = [
    "CREDENTIAL_FIELD",
    "RelayDispatcher",
    "RelayResult",
    "ResultKind",
    "RpcMethod",
    "build_envelope",
    "classify_response",
]
