"""HTTP verb surface for the WITSML Explorer backend API."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from witsml_client.client.base_url import BaseUrlResolver
from witsml_client.client.dispatcher import RequestDispatcher
from witsml_client.client.headers import HeaderAssembler, TokenProvider
from witsml_client.config import ApiClientSettings
from witsml_client.models.server import Server
from witsml_client.shared.abort import AbortSignal
from witsml_client.shared.authorization_bus import (
    AuthorizationEventBus,
    authorization_bus,
)

logger = logging.getLogger(__name__)

Body = str | dict[str, Any] | list[Any]


class ApiClient:
    """Client for the backend API with per-server reauthorization.

    GET requests default to the selected server as target. POST requests
    default to the selected server as target and the source server as source,
    which is how cross-server copy operations are expressed. PATCH and DELETE
    carry no server identities.

    Every verb returns the backend response, including 401s that could not be
    recovered, or None if the request was aborted through its signal.
    """

    def __init__(
        self,
        settings: ApiClientSettings | None = None,
        token_provider: TokenProvider | None = None,
        bus: AuthorizationEventBus | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the API client.

        Args:
            settings: Configuration; read from the environment when omitted
            token_provider: Bearer token source, required when
                `settings.auth_enabled` is set
            bus: Authorization event bus; the process-wide bus when omitted
            http_client: HTTP client to send through; an owned client with
                cookie persistence and no timeout when omitted

        Raises:
            ValueError: If authorization is enabled without a token provider
        """
        self.settings = settings or ApiClientSettings()
        if self.settings.auth_enabled and token_provider is None:
            raise ValueError("auth_enabled requires a token_provider")

        self.selected_server: Server | None = None
        self.source_server: Server | None = None
        self.bus = bus if bus is not None else authorization_bus

        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(timeout=None)
        self._header_assembler = HeaderAssembler(
            token_provider if self.settings.auth_enabled else None,
            scopes=self.settings.scopes,
        )
        self._base_url_resolver = BaseUrlResolver(
            configured_url=self.settings.api_url,
            page_location=self.settings.page_location,
        )
        self._dispatcher = RequestDispatcher(
            self._http_client,
            self.bus,
            self._base_url_resolver,
            authorization_required=self.settings.auth_enabled,
        )

    @property
    def base_url(self) -> httpx.URL:
        return self._base_url_resolver.resolve()

    async def get_authorization_header(self) -> str | None:
        return await self._header_assembler.authorization_header()

    # ================================
    # Verbs
    # ================================

    async def get(
        self,
        path_name: str,
        abort_signal: AbortSignal | None = None,
        server: Server | None = None,
    ) -> httpx.Response | None:
        if server is None:
            server = self.selected_server
        headers = await self._header_assembler.assemble(server)
        return await self._dispatcher.run_http_request(
            "GET", path_name, headers, abort_signal=abort_signal, target_server=server
        )

    async def post(
        self,
        path_name: str,
        body: Body,
        abort_signal: AbortSignal | None = None,
        target_server: Server | None = None,
        source_server: Server | None = None,
    ) -> httpx.Response | None:
        if target_server is None:
            target_server = self.selected_server
        if source_server is None:
            source_server = self.source_server
        headers = await self._header_assembler.assemble(target_server, source_server)
        return await self._dispatcher.run_http_request(
            "POST",
            path_name,
            headers,
            body=_serialize(body),
            abort_signal=abort_signal,
            target_server=target_server,
            source_server=source_server,
        )

    async def patch(
        self, path_name: str, body: Body, abort_signal: AbortSignal | None = None
    ) -> httpx.Response | None:
        headers = await self._header_assembler.assemble()
        return await self._dispatcher.run_http_request(
            "PATCH", path_name, headers, body=_serialize(body), abort_signal=abort_signal
        )

    async def delete(
        self, path_name: str, abort_signal: AbortSignal | None = None
    ) -> httpx.Response | None:
        headers = await self._header_assembler.assemble()
        return await self._dispatcher.run_http_request(
            "DELETE", path_name, headers, abort_signal=abort_signal
        )

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client and not self._http_client.is_closed:
            await self._http_client.aclose()
            logger.debug("HTTP client closed")


def _serialize(body: Body) -> str:
    return body if isinstance(body, str) else json.dumps(body)
