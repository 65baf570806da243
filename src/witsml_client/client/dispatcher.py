"""Request dispatch with suspend/resume around server reauthorization."""

from __future__ import annotations

import asyncio
import logging

import httpx
from pydantic import ValidationError

from witsml_client.client.base_url import BaseUrlResolver
from witsml_client.client.headers import AUTHORIZATION_HEADER
from witsml_client.models.authorization import (
    AuthorizationState,
    AuthorizationStatus,
    ServerSlot,
    UnauthorizedResponse,
)
from witsml_client.models.errors import (
    AuthorizationUnavailableError,
    RequestAbortedError,
    TransportError,
)
from witsml_client.models.requests import PendingCall
from witsml_client.models.server import Server
from witsml_client.shared.abort import AbortSignal
from witsml_client.shared.authorization_bus import AuthorizationEventBus

logger = logging.getLogger(__name__)


class RequestDispatcher:
    """Sends requests and recovers from per-server authorization failures.

    A 401 response names the rejected server slot in its body. The dispatcher
    publishes `Unauthorized` for that server, waits for the interactive flow
    to answer on the bus, and then either resends the identical request once
    or returns the original 401.

    Authorization outcomes are returned as responses. Only transport failures
    and a missing mandatory token raise.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        bus: AuthorizationEventBus,
        base_url_resolver: BaseUrlResolver,
        authorization_required: bool = False,
    ) -> None:
        self._http_client = http_client
        self._bus = bus
        self._base_url_resolver = base_url_resolver
        self._authorization_required = authorization_required

    async def run_http_request(
        self,
        method: str,
        path_name: str,
        headers: dict[str, str],
        body: str | None = None,
        abort_signal: AbortSignal | None = None,
        target_server: Server | None = None,
        source_server: Server | None = None,
        rerun: bool = True,
    ) -> httpx.Response | None:
        """Send a request, reauthorizing and retrying once on a 401.

        Args:
            method: HTTP method
            path_name: Path under the API origin, may include a query string
            headers: Assembled request headers, reused verbatim on retry
            body: Serialized JSON body
            abort_signal: Caller's cancellation handle
            target_server: Server in the target slot
            source_server: Server in the source slot
            rerun: Whether a 401 may trigger reauthorization and a retry

        Returns:
            The final response, or None if the call was aborted.

        Raises:
            AuthorizationUnavailableError: Authorization is required and the
                headers carry no Authorization value
            TransportError: The request failed below the HTTP layer
        """
        if self._authorization_required and AUTHORIZATION_HEADER not in headers:
            raise AuthorizationUnavailableError("Not authorized")

        call = PendingCall(
            method=method,
            url=self._base_url_resolver.url_for(path_name),
            headers=headers,
            body=body,
            abort_signal=abort_signal,
            target_server=target_server,
            source_server=source_server,
        )
        return await self._fetch_with_rerun(call, rerun)

    async def _fetch_with_rerun(
        self, call: PendingCall, rerun: bool
    ) -> httpx.Response | None:
        try:
            response = await self._send(call)
            if response.status_code == 401 and rerun:
                return await self._handle_unauthorized(call, response)
            return response
        except RequestAbortedError:
            logger.debug(f"{call.describe()} aborted by caller")
            return None

    async def _send(self, call: PendingCall) -> httpx.Response:
        """Issue the request once, honouring the call's abort signal."""
        if call.abort_signal is not None:
            call.abort_signal.raise_if_aborted()

        request = self._http_client.build_request(
            call.method, call.url, headers=call.headers, content=call.body
        )
        logger.debug(f"Sending {call.describe()}")

        try:
            if call.abort_signal is None:
                return await self._http_client.send(request)
            return await call.abort_signal.guard(self._http_client.send(request))
        except httpx.RequestError as e:
            raise TransportError(f"{call.describe()} failed: {e}") from e

    async def _handle_unauthorized(
        self, call: PendingCall, original_response: httpx.Response
    ) -> httpx.Response | None:
        """Suspend the call until its rejected server is reauthorized.

        Returns the original response when there is no server to reauthorize
        or the user cancels, otherwise the response to the single retry.
        """
        slot = _rejected_slot(original_response)
        server = call.source_server if slot is ServerSlot.SOURCE else call.target_server
        if server is None:
            logger.warning(
                f"{call.describe()} rejected for {slot.value} server, "
                "but the request has none"
            )
            return original_response

        if not await self._await_reauthorization(server, call.abort_signal):
            logger.info(f"Reauthorization of server '{server.id}' cancelled")
            return original_response

        logger.info(f"Server '{server.id}' reauthorized, resending {call.describe()}")
        return await self._fetch_with_rerun(call, rerun=False)

    async def _await_reauthorization(
        self, server: Server, abort_signal: AbortSignal | None
    ) -> bool:
        """Publish Unauthorized for `server` and wait for the outcome.

        Returns:
            True once `server` is authorized, False if reauthorization is
            cancelled.

        Raises:
            RequestAbortedError: If the abort signal fires while waiting
        """
        outcome: asyncio.Future[bool] = asyncio.get_running_loop().create_future()

        def on_authorization_change(state: AuthorizationState) -> None:
            if outcome.done():
                return
            if state.is_cancel():
                outcome.set_result(False)
            elif state.is_authorized(server):
                outcome.set_result(True)

        # Subscribe first so a synchronous answer from the flow is not missed
        unsubscribe = self._bus.subscribe(on_authorization_change)
        try:
            self._bus.publish(
                AuthorizationState(
                    status=AuthorizationStatus.UNAUTHORIZED, server=server
                )
            )
            if abort_signal is None:
                return await outcome
            return await abort_signal.guard(outcome)
        finally:
            unsubscribe()


def _rejected_slot(response: httpx.Response) -> ServerSlot:
    """Slot named by a 401 body, defaulting to the target."""
    try:
        return UnauthorizedResponse.model_validate(response.json()).slot
    except (ValueError, ValidationError) as e:
        logger.debug(f"Unreadable 401 body, assuming target server: {e}")
        return ServerSlot.TARGET
