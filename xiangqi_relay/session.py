import logging
import threading
from typing import Any, Dict, Optional

from xiangqi_relay.board import Board, Side
from xiangqi_relay.broadcast import BroadcastChannel, Emitter
from xiangqi_relay.exceptions import ProtocolError
from xiangqi_relay.protocol import AssignMessage, MoveMessage, ResetMessage, parse_inbound
from xiangqi_relay.registry import Connection, SessionRegistry

# Key of the app's GameSession in Flask's app.extensions
SESSION_EXTENSION = 'xiangqi_session'


class GameSession:
    """One shared game: the board, the seat registry and the broadcast channel.

    Socket.IO may run handlers for different clients on different threads.
    Every event holds ``self.lock`` from start to finish, so seat assignment,
    move-then-broadcast and reset-then-broadcast each happen as one step.
    """

    def __init__(self, emitter: Emitter, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.lock = threading.RLock()
        self.board = Board()
        self.registry = SessionRegistry()
        self.channel = BroadcastChannel(emitter, logger=self.logger)

    def connect(self, conn_id: str) -> Connection:
        """Seat a new connection and tell it (and only it) its color."""
        with self.lock:
            connection = self.registry.register(conn_id)
            self.channel.open(conn_id)
            self.channel.send(conn_id, AssignMessage(color=connection.side))
        role = connection.side.value if connection.side else 'observer'
        self.logger.info(f"[assign] conn={conn_id} role={role}")
        return connection

    def receive(self, conn_id: str, raw: Any) -> bool:
        """Handle one inbound payload. Returns True when a move was relayed."""
        try:
            message = parse_inbound(raw)
        except ProtocolError as exc:
            self.logger.warning(f"[invalid] conn={conn_id}: {exc}")
            return False
        if message is None:
            self.logger.debug(f"[ignored] conn={conn_id} unhandled message type")
            return False
        with self.lock:
            connection = self.registry.connection(conn_id)
            if connection is None or not connection.is_open:
                self.logger.debug(f"[ignored] conn={conn_id} is not connected")
                return False
            if isinstance(message, MoveMessage):
                return self._relay_move(conn_id, message)
        return False

    def _relay_move(self, conn_id: str, message: MoveMessage) -> bool:
        if not self.board.apply(message.to_move()):
            self.logger.debug(f"[move-noop] conn={conn_id} from={message.from_} to={message.to}")
            return False
        delivered = self.channel.broadcast(message)
        self.logger.info(
            f"[move] conn={conn_id} from=({message.from_.r},{message.from_.c}) "
            f"to=({message.to.r},{message.to.c}) delivered={delivered}"
        )
        return True

    def disconnect(self, conn_id: str) -> bool:
        """Close a connection. Returns True if the board was reset."""
        with self.lock:
            self.channel.close(conn_id)
            reset_required = self.registry.unregister(conn_id)
            self.logger.info(f"[leave] conn={conn_id} reset={reset_required}")
            if reset_required:
                self.reset()
        return reset_required

    def reset(self) -> None:
        with self.lock:
            self.board.reset()
            delivered = self.channel.broadcast(ResetMessage())
        self.logger.info(f"[reset] delivered={delivered}")

    def state(self) -> Dict[str, Any]:
        with self.lock:
            seats = self.registry.seats()
            return {
                'board': self.board.to_dict(),
                'seats': {side.value: side in seats for side in Side},
                'connections': len(self.registry),
                'observers': len(self.registry.observers()),
            }
