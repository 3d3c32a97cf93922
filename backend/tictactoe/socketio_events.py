from flask import current_app, request
from tictactoe import socketio


class SocketIOChannel:
    """Outbound channel for one Socket.IO connection.

    Each payload is emitted as an event named after its ``type``.
    """

    def __init__(self, sid: str, namespace: str):
        self.sid = sid
        self.namespace = namespace

    def send(self, payload):
        # Use socketio.emit so this works outside the sender's request context
        socketio.emit(payload['type'], payload, to=self.sid, namespace=self.namespace)

    def __repr__(self):
        return f"<SocketIOChannel sid={self.sid} namespace={self.namespace}>"


def _coordinator():
    return current_app.extensions['session_coordinator']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect(auth=None):
    sid = _get_sid()
    namespace = current_app.config.get('SOCKETIO_NAMESPACE', '/ws')
    _coordinator().connect(sid, SocketIOChannel(sid, namespace))


def handle_disconnect(reason=None):
    _coordinator().disconnect(_get_sid())


def handle_message(data):
    _coordinator().handle_message(_get_sid(), data)


def register_socketio_handlers(namespace: str = '/ws') -> None:
    """Register Socket.IO event handlers on ``namespace``.

    Clients send every request as a ``message`` event carrying a JSON
    object (or JSON text) with a ``type`` field.
    """
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('message', handle_message, namespace=namespace)
