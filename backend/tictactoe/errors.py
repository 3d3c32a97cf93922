"""Errors reported back to a single connection.

None of these end the connection; the coordinator turns them into an
``error`` message for the sender, except ``MalformedMessage`` which is
logged and dropped.
"""


class GameError(Exception):
    message = 'Game error'

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class GameNotFound(GameError):
    message = 'Game not found'


class NotYourTurn(GameError):
    message = 'Not your turn'


class InvalidPosition(GameError):
    message = 'Invalid position'


class CellOccupied(GameError):
    message = 'Cell already occupied'


class UnknownMessageType(GameError):
    def __init__(self, kind):
        self.kind = kind
        super().__init__(f"Unknown message type: {kind}")


class MalformedMessage(GameError):
    message = 'Malformed message'
