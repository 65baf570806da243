"""Server identity model."""

from __future__ import annotations

from pydantic import BaseModel


class Server(BaseModel):
    """A WITSML server the backend can talk to on the client's behalf.

    Two servers are the same server iff their ids are equal, regardless of
    the other fields.
    """

    id: str
    url: str
    name: str = ""
    description: str = ""
    current_username: str | None = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Server):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
