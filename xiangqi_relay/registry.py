from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from xiangqi_relay.board import Side

# Playable roles are handed out in this order.
SEAT_ORDER = (Side.RED, Side.BLACK)


class ConnectionState(str, Enum):
    CONNECTED = 'connected'
    CLOSED = 'closed'


@dataclass
class Connection:
    """One connected peer. ``side`` is None for observers."""
    conn_id: str
    side: Optional[Side] = None
    state: ConnectionState = ConnectionState.CONNECTED

    @property
    def is_player(self) -> bool:
        return self.side is not None

    @property
    def is_open(self) -> bool:
        return self.state == ConnectionState.CONNECTED


class SessionRegistry:
    """Tracks live connections and which of them hold the two playable roles.

    A role freed by a disconnect is only claimed by the next *new*
    connection; existing observers are never promoted.
    """

    def __init__(self):
        self._seats: Dict[Side, str] = {}
        self._connections: Dict[str, Connection] = {}

    def register(self, conn_id: str) -> Connection:
        existing = self._connections.get(conn_id)
        if existing is not None:
            return existing
        side = next((s for s in SEAT_ORDER if s not in self._seats), None)
        if side is not None:
            self._seats[side] = conn_id
        connection = Connection(conn_id=conn_id, side=side)
        self._connections[conn_id] = connection
        return connection

    def unregister(self, conn_id: str) -> bool:
        """Drop a connection; True means it held a role and the game must reset."""
        connection = self._connections.pop(conn_id, None)
        if connection is None:
            return False
        connection.state = ConnectionState.CLOSED
        if connection.side is not None and self._seats.get(connection.side) == conn_id:
            del self._seats[connection.side]
            return True
        return False

    def connection(self, conn_id: str) -> Optional[Connection]:
        return self._connections.get(conn_id)

    def holder(self, side: Side) -> Optional[str]:
        return self._seats.get(side)

    def seats(self) -> Dict[Side, str]:
        return dict(self._seats)

    def observers(self) -> List[Connection]:
        return [c for c in self._connections.values() if not c.is_player]

    def __len__(self) -> int:
        return len(self._connections)
