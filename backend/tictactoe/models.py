import itertools
from typing import Dict, List, Optional

SYMBOL_X = 'X'
SYMBOL_O = 'O'
DRAW = 'draw'
BOARD_SIZE = 9

STATUS_ACTIVE = 'active'
STATUS_FINISHED = 'finished'


class GameSession:
    """Authoritative state for one game between two handles.

    The first handle plays X and moves first, the second plays O.
    """

    def __init__(self, game_id: str, player_x: str, player_o: str):
        self.id = game_id
        self.player_x = player_x
        self.player_o = player_o
        self.board: List[Optional[str]] = [None] * BOARD_SIZE
        self.turn = player_x
        self.status = STATUS_ACTIVE

    @property
    def players(self):
        return (self.player_x, self.player_o)

    def symbol_for(self, handle: str) -> str:
        return SYMBOL_X if handle == self.player_x else SYMBOL_O

    def opponent_of(self, handle: str) -> str:
        return self.player_o if handle == self.player_x else self.player_x

    @property
    def is_active(self) -> bool:
        return self.status == STATUS_ACTIVE

    def to_dict(self):
        return {
            'id': self.id,
            'player_x': self.player_x,
            'player_o': self.player_o,
            'board': list(self.board),
            'turn': self.turn,
            'status': self.status,
        }


class SessionStore:
    """In-memory game sessions keyed by ``game-<n>`` ids.

    Sessions are never removed; ids are never reused.
    """

    def __init__(self):
        self._sessions: Dict[str, GameSession] = {}
        self._counter = itertools.count(1)

    def create(self, player_x: str, player_o: str) -> GameSession:
        game_id = f"game-{next(self._counter)}"
        session = GameSession(game_id, player_x, player_o)
        self._sessions[game_id] = session
        return session

    def get(self, game_id) -> Optional[GameSession]:
        if not isinstance(game_id, str):
            return None
        return self._sessions.get(game_id)

    def __len__(self):
        return len(self._sessions)

    def __contains__(self, game_id):
        return game_id in self._sessions
