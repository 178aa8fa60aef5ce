"""Wire messages exchanged over the ``message`` Socket.IO event.

Every payload is a JSON object tagged by ``type``. Only ``move`` is accepted
from clients; ``assign``, ``move`` and ``reset`` are sent by the server.
"""

import json
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from xiangqi_relay.board import BOARD_COLS, BOARD_ROWS, Move, Side, Square
from xiangqi_relay.exceptions import ProtocolError

MESSAGE_EVENT = 'message'


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, lt=BOARD_ROWS)
    c: int = Field(ge=0, lt=BOARD_COLS)

    def to_square(self) -> Square:
        return Square(self.r, self.c)


class Message(BaseModel):
    type: str

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode='json', by_alias=True)


class AssignMessage(Message):
    type: Literal['assign'] = 'assign'
    color: Optional[Side] = None


class MoveMessage(Message):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal['move'] = 'move'
    from_: Coordinate = Field(alias='from')
    to: Coordinate

    def to_move(self) -> Move:
        return Move(self.from_.to_square(), self.to.to_square())


class ResetMessage(Message):
    type: Literal['reset'] = 'reset'


INBOUND_MESSAGES = {
    'move': MoveMessage,
}


def parse_inbound(raw: Any) -> Optional[Message]:
    """Validate a client payload.

    Returns None for well-formed payloads whose ``type`` the server does not
    handle. Raises ProtocolError for anything that is not a JSON object or
    that fails validation.
    """
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode('utf-8', errors='replace')
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError as exc:
            raise ProtocolError(f"Payload is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise ProtocolError(f"Payload must be a JSON object, got {type(raw).__name__}")

    message_type = raw.get('type')
    if not isinstance(message_type, str):
        raise ProtocolError("Payload has no string 'type' field")
    message_cls = INBOUND_MESSAGES.get(message_type)
    if message_cls is None:
        return None
    try:
        return message_cls.model_validate(raw)
    except ValidationError as exc:
        raise ProtocolError(f"Invalid {message_type} message: {exc.error_count()} error(s)") from exc
