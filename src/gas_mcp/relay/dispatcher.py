"""Relay dispatcher: one MCP invocation, one POST to the Web App.

The dispatcher is the only place that talks to the network. It never
raises: HTTP failures, malformed bodies and transport exceptions all come
back as a RelayResult with ``isError`` set where appropriate.
"""

import logging
import traceback
from typing import Any

import httpx

from gas_mcp.config import RelaySettings
from gas_mcp.relay.models import RelayResult, RpcMethod, build_envelope, classify_response

logger = logging.getLogger(__name__)


class RelayDispatcher:
    """Relays tool and prompt calls to an Apps Script Web App.

    Attributes:
        settings: Immutable relay configuration.

    Example:
        ```python
        dispatcher = RelayDispatcher(RelaySettings.from_env())
        result = await dispatcher.relay("get_exchange_rate", RpcMethod.TOOLS_CALL, {})
        print(result.payload)
        await dispatcher.close()
        ```
    """

    def __init__(
        self, settings: RelaySettings, http_client: httpx.AsyncClient | None = None
    ) -> None:
        """Initialize the dispatcher.

        Args:
            settings: Web App URL, API key and timeout.
            http_client: Client to use instead of creating one lazily.
        """
        self.settings = settings
        self._http_client = http_client

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create the shared HTTP client.

        Apps Script answers POSTs with a redirect to the content host, so
        redirects are followed.
        """
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                follow_redirects=True,
                timeout=httpx.Timeout(self.settings.timeout),
            )
        return self._http_client

    async def close(self) -> None:
        """Close the shared HTTP client and release resources."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def relay(
        self, name: str, method: RpcMethod, arguments: dict[str, Any] | None = None
    ) -> RelayResult:
        """Relay one call to the Web App and classify the answer.

        Args:
            name: Operation name understood by the Web App.
            method: JSON-RPC method tag (tools/call or prompts/get).
            arguments: Caller-supplied arguments; may be empty.

        Returns:
            The classified result. Never raises.
        """
        try:
            envelope = build_envelope(name, method, arguments, self.settings.api_key)
            logger.debug(
                "Relaying %s %s to %s", envelope["method"], name, self.settings.redacted_url
            )

            client = await self._get_http_client()
            response = await client.post(self.settings.web_apps_url, json=envelope)

            if not response.is_success:
                logger.warning("Web App returned status %d for %s", response.status_code, name)
            return classify_response(response.status_code, response.text)
        except Exception:
            logger.exception(f"Error relaying {name}")
            return RelayResult.text(traceback.format_exc(), is_error=True)
