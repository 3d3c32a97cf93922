from typing import List, Optional

from tictactoe.errors import CellOccupied, GameNotFound, InvalidPosition, NotYourTurn
from tictactoe.models import BOARD_SIZE, DRAW, STATUS_FINISHED, GameSession

WIN_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


def check_winner(board: List[Optional[str]]) -> Optional[str]:
    """Return the winning symbol, ``'draw'`` for a full board, else None.

    A full board that also completes a line is a win.
    """
    for a, b, c in WIN_LINES:
        if board[a] is not None and board[a] == board[b] == board[c]:
            return board[a]
    if all(cell is not None for cell in board):
        return DRAW
    return None


def apply_move(session: Optional[GameSession], handle: str, position) -> Optional[str]:
    """Validate and apply a move for ``handle``.

    Checks run in order (existence, turn, bounds, occupancy) and the first
    failure is raised. On success the board is updated and either the turn
    passes to the opponent (returns None) or the session finishes and the
    outcome is returned: the winning symbol or ``'draw'``.
    """
    if session is None:
        raise GameNotFound()
    if not session.is_active or session.turn != handle:
        raise NotYourTurn()
    if isinstance(position, bool) or not isinstance(position, int) or not 0 <= position < BOARD_SIZE:
        raise InvalidPosition()
    if session.board[position] is not None:
        raise CellOccupied()

    session.board[position] = session.symbol_for(handle)

    outcome = check_winner(session.board)
    if outcome is not None:
        # turn is left on the last mover; it carries no meaning once finished
        session.status = STATUS_FINISHED
        return outcome

    session.turn = session.opponent_of(handle)
    return None
