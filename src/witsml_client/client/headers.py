"""Request header assembly."""

from __future__ import annotations

import logging
from typing import Protocol

from witsml_client.models.server import Server

logger = logging.getLogger(__name__)

CONTENT_TYPE_HEADER = "Content-Type"
AUTHORIZATION_HEADER = "Authorization"
TARGET_SERVER_HEADER = "WitsmlTargetServer"
SOURCE_SERVER_HEADER = "WitsmlSourceServer"
JSON_MEDIA_TYPE = "application/json"


class TokenProvider(Protocol):
    """Protocol for obtaining bearer tokens for the backend API.

    Implementations may perform a network round trip and may raise when no
    token can be obtained.
    """

    async def get_token(self, scopes: list[str]) -> str | None:
        """Return an access token for `scopes`, or None if none is available."""
        ...


class HeaderAssembler:
    """Builds the header set sent with every backend request.

    Bearer tokens are only requested when a token provider is configured.
    """

    def __init__(
        self,
        token_provider: TokenProvider | None = None,
        scopes: list[str] | None = None,
    ) -> None:
        self._token_provider = token_provider
        self._scopes = scopes or []

    @property
    def authorization_enabled(self) -> bool:
        return self._token_provider is not None

    async def assemble(
        self, target_server: Server | None = None, source_server: Server | None = None
    ) -> dict[str, str]:
        """Build headers for a request to the given servers.

        Server headers are always present, empty when the server is absent,
        and always ordered target then source.

        Args:
            target_server: Destination server of the request
            source_server: Origin server of a cross-server operation

        Returns:
            Header dict ready to send
        """
        headers = {CONTENT_TYPE_HEADER: JSON_MEDIA_TYPE}

        authorization_header = await self.authorization_header()
        if authorization_header:
            headers[AUTHORIZATION_HEADER] = authorization_header

        headers[TARGET_SERVER_HEADER] = server_header(target_server)
        headers[SOURCE_SERVER_HEADER] = server_header(source_server)
        return headers

    async def authorization_header(self) -> str | None:
        """Return `Bearer <token>` or None when no token could be obtained."""
        if self._token_provider is None:
            return None

        try:
            token = await self._token_provider.get_token(self._scopes)
        except Exception as e:
            logger.warning(f"Failed to acquire access token: {e}")
            return None

        if not token:
            logger.warning("Token provider returned no access token")
            return None
        return f"Bearer {token}"


def server_header(server: Server | None) -> str:
    return "" if server is None else server.url
