"""Authorization state models shared by the dispatcher and the event bus."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel

from witsml_client.models.server import Server


class AuthorizationStatus(str, Enum):
    UNAUTHORIZED = "Unauthorized"
    AUTHORIZED = "Authorized"
    CANCEL = "Cancel"


class ServerSlot(str, Enum):
    """Which server header of a request a 401 response refers to."""

    TARGET = "Target"
    SOURCE = "Source"


@dataclass(frozen=True)
class AuthorizationState:
    """An authorization transition broadcast on the event bus.

    `server` is the server whose state changed. A cancellation of the
    interactive flow does not need to name one.
    """

    status: AuthorizationStatus
    server: Server | None = None

    def is_authorized(self, server: Server) -> bool:
        return self.status is AuthorizationStatus.AUTHORIZED and self.server == server

    def is_cancel(self) -> bool:
        return self.status is AuthorizationStatus.CANCEL


class UnauthorizedResponse(BaseModel):
    """Body of a 401 response from the backend.

    A missing `server` field means the target server was rejected.
    """

    server: ServerSlot | None = None

    @property
    def slot(self) -> ServerSlot:
        return self.server or ServerSlot.TARGET
