from flask import current_app, request

from xiangqi_relay import socketio
from xiangqi_relay.protocol import MESSAGE_EVENT
from xiangqi_relay.session import SESSION_EXTENSION, GameSession


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _get_session() -> GameSession:
    return current_app.extensions[SESSION_EXTENSION]


def handle_connect(auth=None):
    _get_session().connect(_get_sid())


def handle_disconnect(reason=None):
    _get_session().disconnect(_get_sid())


def handle_message(data=None):
    _get_session().receive(_get_sid(), data)


def make_emitter(namespace: str):
    """Deliver a payload to a single Socket.IO session on ``namespace``."""
    def _emit_to(sid: str, payload) -> None:
        socketio.emit(MESSAGE_EVENT, payload, to=sid, namespace=namespace)
    return _emit_to


def register_socketio_handlers(namespace: str = '/ws') -> None:
    """Register the relay's Socket.IO event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event(MESSAGE_EVENT, handle_message, namespace=namespace)
