import logging
from typing import Any, Callable, Dict, List, Optional

from xiangqi_relay.protocol import Message

Emitter = Callable[[str, Dict[str, Any]], None]


class BroadcastChannel:
    """Best-effort fan-out of protocol messages to open connections.

    There is no acknowledgment and no retry. Ordering per connection is
    whatever the transport gives.
    """

    def __init__(self, emitter: Emitter, logger: Optional[logging.Logger] = None):
        self._emit = emitter
        self._ready: Dict[str, None] = {}
        self.logger = logger or logging.getLogger(__name__)

    def open(self, conn_id: str) -> None:
        self._ready[conn_id] = None

    def close(self, conn_id: str) -> None:
        self._ready.pop(conn_id, None)

    def is_ready(self, conn_id: str) -> bool:
        return conn_id in self._ready

    def members(self) -> List[str]:
        return list(self._ready)

    def send(self, conn_id: str, message: Message) -> bool:
        """Deliver to a single connection."""
        if not self.is_ready(conn_id):
            return False
        return self._deliver(conn_id, message.to_wire())

    def broadcast(self, message: Message) -> int:
        payload = message.to_wire()
        delivered = 0
        for conn_id in self.members():
            if self._deliver(conn_id, payload):
                delivered += 1
        return delivered

    def _deliver(self, conn_id: str, payload: Dict[str, Any]) -> bool:
        try:
            self._emit(conn_id, payload)
        except Exception as exc:
            self.logger.warning(f"[deliver-fail] conn={conn_id} type={payload.get('type')}: {exc}")
            return False
        return True
