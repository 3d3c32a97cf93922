import json
import logging
import threading
from typing import Any, Dict

from tictactoe.errors import GameError, MalformedMessage, UnknownMessageType
from tictactoe.models import SYMBOL_O, SYMBOL_X, GameSession, SessionStore
from tictactoe.services.connections import ConnectionRegistry
from tictactoe.services.games import apply_move
from tictactoe.services.matchmaking import MatchmakingQueue

WAITING_MESSAGE = 'Waiting for match, looking for opponent'


class SessionCoordinator:
    """Owns the registry, queue and session store for one server instance.

    Every public entry point runs under a single lock so that queue
    pop/push, move validation plus board update, and disconnect cleanup
    never interleave across connections.
    """

    def __init__(self, logger=None):
        self.connections = ConnectionRegistry()
        self.queue = MatchmakingQueue()
        self.sessions = SessionStore()
        self.logger = logger or logging.getLogger('tictactoe')
        self._lock = threading.RLock()
        self._handlers = {
            'findGame': self._on_find_game,
            'makeMove': self._on_make_move,
            'ping': self._on_ping,
        }

    # ---- Connection lifecycle ----

    def connect(self, handle: str, channel) -> None:
        with self._lock:
            self.connections.register(handle, channel)
            self.logger.info(f"[connect] player={handle} connections={len(self.connections)}")
            self._send(handle, {'type': 'connected', 'id': handle, 'message': 'Connected to game server'})

    def disconnect(self, handle: str) -> None:
        with self._lock:
            self.connections.unregister(handle)
            if self.queue.remove_if_queued(handle):
                self.logger.info(f"[queue] removed disconnected player={handle}")
            self.logger.info(f"[disconnect] player={handle} connections={len(self.connections)}")

    # ---- Inbound dispatch ----

    def handle_message(self, handle: str, raw) -> None:
        """Process one inbound frame from ``handle``.

        ``raw`` may be a decoded object or JSON text. Malformed frames are
        logged and dropped; game errors are reported to the sender only.
        """
        with self._lock:
            try:
                message = self._parse(raw)
            except MalformedMessage as exc:
                self.logger.warning(f"[malformed] player={handle} reason={exc.message} payload={repr(raw)[:200]}")
                return

            self.logger.debug(f"[message] player={handle} payload={message}")
            try:
                handler = self._handlers.get(message['type'])
                if handler is None:
                    raise UnknownMessageType(message['type'])
                handler(handle, message)
            except GameError as exc:
                self.logger.info(f"[rejected] player={handle} type={message['type']} error={exc.message}")
                self._send(handle, {'type': 'error', 'message': exc.message})

    @staticmethod
    def _parse(raw) -> Dict[str, Any]:
        if isinstance(raw, (str, bytes, bytearray)):
            try:
                raw = json.loads(raw)
            except (ValueError, RecursionError) as exc:
                raise MalformedMessage(f"invalid JSON: {exc}") from exc
        if not isinstance(raw, dict):
            raise MalformedMessage('payload is not an object')
        if not isinstance(raw.get('type'), str):
            raise MalformedMessage('missing message type')
        return raw

    def _on_find_game(self, handle, message):
        self.find_game(handle)

    def _on_make_move(self, handle, message):
        self.make_move(handle, message.get('gameId'), message.get('position'))

    def _on_ping(self, handle, message):
        self._send(handle, {'type': 'pong'})

    # ---- Matchmaking ----

    def find_game(self, handle: str) -> None:
        with self._lock:
            self.logger.info(f"[queue] player={handle} looking for a match queue={self.queue.snapshot()}")
            opponent = self.queue.request_match(handle, lambda h: h in self.connections)
            if opponent is None:
                self.logger.info(f"[queue] player={handle} waiting queue={self.queue.snapshot()}")
                self._send(handle, {'type': 'waiting', 'message': WAITING_MESSAGE})
                return
            self.logger.info(f"[match] {opponent} vs {handle}")
            # the player who has waited longest plays X
            self.create_session(opponent, handle)

    def create_session(self, handle_a: str, handle_b: str):
        """Start a game with ``handle_a`` as X (moving first) and ``handle_b`` as O.

        Returns the new session, or None when either player can no longer
        be reached. The pairing is not restored in that case.
        """
        with self._lock:
            for handle in (handle_a, handle_b):
                if self.connections.lookup(handle) is None:
                    self.logger.error(f"[session-abort] player={handle} not found in connections")
                    return None

            session = self.sessions.create(handle_a, handle_b)
            self.logger.info(f"[session] game={session.id} {handle_a} (X) vs {handle_b} (O)")

            self._send(handle_a, {
                'type': 'gameStart',
                'gameId': session.id,
                'id': handle_a,
                'side': SYMBOL_X,
                'opponent': handle_b,
                'message': 'You are X, you go first',
            })
            self._send(handle_b, {
                'type': 'gameStart',
                'gameId': session.id,
                'id': handle_b,
                'side': SYMBOL_O,
                'opponent': handle_a,
                'message': 'You are O, wait for X to play',
            })
            self.broadcast_state(session)
            return session

    # ---- Moves ----

    def make_move(self, handle: str, game_id, position) -> None:
        """Apply a move; raises GameError subclasses for rejected moves."""
        with self._lock:
            session = self.sessions.get(game_id)
            outcome = apply_move(session, handle, position)
            self.logger.info(f"[move] game={session.id} {session.symbol_for(handle)} at {position}")
            self.broadcast_state(session)
            if outcome is not None:
                self.broadcast_end(session, outcome)

    # ---- Broadcast ----

    def broadcast_state(self, session: GameSession) -> None:
        payload = {
            'type': 'gameState',
            'gameId': session.id,
            'board': list(session.board),
            'turn': session.turn,
            'status': session.status,
        }
        for handle in session.players:
            self._send(handle, payload)

    def broadcast_end(self, session: GameSession, outcome: str) -> None:
        payload = {
            'type': 'gameEnd',
            'result': outcome,
            'board': list(session.board),
        }
        for handle in session.players:
            self._send(handle, payload)
        self.logger.info(f"[game-end] game={session.id} result={outcome}")

    def _send(self, handle: str, payload: Dict[str, Any]) -> bool:
        channel = self.connections.lookup(handle)
        if channel is None:
            self.logger.debug(f"[send-skip] player={handle} type={payload.get('type')} not connected")
            return False
        try:
            channel.send(payload)
        except Exception:
            self.logger.exception(f"[send-failed] player={handle} type={payload.get('type')}")
            return False
        return True

    # ---- Diagnostics ----

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                'connections': len(self.connections),
                'queued': len(self.queue),
                'sessions': len(self.sessions),
            }

    def game_snapshot(self, game_id):
        with self._lock:
            session = self.sessions.get(game_id)
            return session.to_dict() if session else None
