"""Process-wide channel for authorization state changes.

The dispatcher publishes `Unauthorized(server)` when a backend rejects a
server's credentials. The interactive reauthorization flow listens for it,
refreshes credentials out of band and answers with `Authorized(server)` or
`Cancel`.
"""

from __future__ import annotations

import logging
from typing import Callable

from witsml_client.models.authorization import AuthorizationState

logger = logging.getLogger(__name__)

AuthorizationHandler = Callable[[AuthorizationState], None]


class AuthorizationEventBus:
    """One-to-many publish/subscribe for AuthorizationState events.

    Delivery is synchronous to the handlers subscribed at publish time.
    There is no replay for late subscribers.
    """

    def __init__(self) -> None:
        self._handlers: list[AuthorizationHandler] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    def subscribe(self, handler: AuthorizationHandler) -> Callable[[], None]:
        """Register a handler and return a function that removes it.

        The returned unsubscribe function is safe to call more than once.
        """
        self._handlers.append(handler)

        def unsubscribe() -> None:
            try:
                self._handlers.remove(handler)
            except ValueError:
                pass

        return unsubscribe

    def publish(self, state: AuthorizationState) -> None:
        """Deliver `state` to every current subscriber.

        A failing handler is logged and does not prevent delivery to the rest.
        """
        server_id = state.server.id if state.server else None
        logger.debug(
            f"Publishing {state.status.value} for server '{server_id}' "
            f"to {len(self._handlers)} subscriber(s)"
        )
        # Handlers may unsubscribe while we iterate
        for handler in list(self._handlers):
            try:
                handler(state)
            except Exception as e:
                logger.error(f"Authorization handler failed: {e}")


authorization_bus = AuthorizationEventBus()
