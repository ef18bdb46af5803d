"""Relay request and result models.

Every relayed call produces exactly one RelayResult. Its ``kind`` records
which shape the Web App response was recognised as, and ``payload`` holds
the object handed back to the MCP client.
"""

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

JSONRPC_VERSION = "2.0"
REQUEST_ID = 1
CREDENTIAL_FIELD = "geminiAPIKey"


class RpcMethod(str, Enum):
    """JSON-RPC method tags understood by the Web App."""

    TOOLS_CALL = "tools/call"
    PROMPTS_GET = "prompts/get"


class ResultKind(str, Enum):
    """Shape a Web App response was classified as."""

    TOOL = "tool"
    PROMPT = "prompt"
    RAW_TEXT = "raw_text"
    ERROR = "error"


class RelayResult(BaseModel):
    """Normalized outcome of one relayed call.

    Attributes:
        kind: Which response shape was recognised.
        payload: Tool result (``content``/``isError``) or prompt result
            (``messages``) passed through verbatim, or a text wrapper.
    """

    kind: ResultKind = Field(..., description="Recognised response shape")
    payload: dict[str, Any] = Field(..., description="Result object returned to the caller")

    @classmethod
    def text(cls, text: str, *, is_error: bool) -> "RelayResult":
        """Wrap plain text as a single text content block."""
        return cls(
            kind=ResultKind.ERROR if is_error else ResultKind.RAW_TEXT,
            payload={"content": [{"type": "text", "text": text}], "isError": is_error},
        )

    @property
    def is_error(self) -> bool:
        return self.payload.get("isError") is True


def build_envelope(
    name: str, method: RpcMethod, arguments: dict[str, Any] | None, api_key: str
) -> dict[str, Any]:
    """Build the JSON-RPC request sent to the Web App.

    The credential field is merged last so caller arguments cannot replace it.
    """
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": REQUEST_ID,
        "method": RpcMethod(method).value,
        "params": {
            "name": name,
            "arguments": {**(arguments or {}), CREDENTIAL_FIELD: api_key},
        },
    }


def _present(value: Any) -> bool:
    """Whether a result field counts as set; empty lists and objects do."""
    if value is None or value is False:
        return False
    if isinstance(value, (str, int, float)):
        return bool(value)
    return True


def classify_response(status_code: int, body: str) -> RelayResult:
    """Classify a Web App response body.

    Checked in order: tool result, prompt result, HTTP failure, raw text.
    A structured body wins over a failing status code.

    Args:
        status_code: HTTP status of the final response.
        body: Decoded response text.

    Returns:
        The classified RelayResult.
    """
    try:
        decoded = json.loads(body)
    except ValueError:
        decoded = None

    result = decoded.get("result") if isinstance(decoded, dict) else None
    if isinstance(result, dict):
        if _present(result.get("content")) and "isError" in result:
            return RelayResult(kind=ResultKind.TOOL, payload=result)
        if _present(result.get("messages")):
            return RelayResult(kind=ResultKind.PROMPT, payload=result)

    if not 200 <= status_code < 300:
        return RelayResult.text(f"Response status: {status_code}", is_error=True)

    return RelayResult.text(body, is_error=False)
