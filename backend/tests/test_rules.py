import pytest

from tictactoe.errors import CellOccupied, GameNotFound, InvalidPosition, NotYourTurn
from tictactoe.models import DRAW, STATUS_ACTIVE, STATUS_FINISHED, GameSession
from tictactoe.services.games import WIN_LINES, apply_move, check_winner


def make_session():
    return GameSession('game-1', 'alice', 'bob')


@pytest.mark.parametrize('line', WIN_LINES)
@pytest.mark.parametrize('symbol', ['X', 'O'])
def test_every_line_wins_for_its_symbol(line, symbol):
    board = [None] * 9
    for idx in line:
        board[idx] = symbol
    assert check_winner(board) == symbol


def test_full_board_without_line_is_draw():
    board = ['X', 'O', 'X',
             'X', 'O', 'O',
             'O', 'X', 'X']
    assert check_winner(board) == DRAW


def test_full_board_with_line_is_a_win_not_draw():
    board = ['X', 'X', 'X',
             'O', 'O', 'X',
             'X', 'O', 'O']
    assert check_winner(board) == 'X'


def test_open_board_has_no_result():
    board = ['X', 'O', None, None, 'X', None, None, None, 'O']
    assert check_winner(board) is None


def test_missing_session_is_reported_first():
    with pytest.raises(GameNotFound):
        apply_move(None, 'bob', 99)


def test_turn_is_checked_before_bounds():
    session = make_session()
    with pytest.raises(NotYourTurn):
        apply_move(session, 'bob', 99)


def test_bounds_are_checked_before_occupancy():
    session = make_session()
    session.board[0] = 'O'
    with pytest.raises(InvalidPosition):
        apply_move(session, 'alice', -1)
    with pytest.raises(CellOccupied):
        apply_move(session, 'alice', 0)


@pytest.mark.parametrize('position', [9, -1, '4', 4.0, None, True])
def test_non_board_positions_are_rejected(position):
    session = make_session()
    with pytest.raises(InvalidPosition):
        apply_move(session, 'alice', position)
    assert session.board == [None] * 9
    assert session.turn == 'alice'


def test_accepted_move_places_symbol_and_passes_turn():
    session = make_session()
    assert apply_move(session, 'alice', 4) is None
    assert session.board[4] == 'X'
    assert session.turn == 'bob'
    assert session.status == STATUS_ACTIVE


def test_turns_alternate_and_cells_never_change():
    session = make_session()
    moves = [('alice', 0), ('bob', 4), ('alice', 8), ('bob', 2), ('alice', 6)]
    seen = {}
    for handle, position in moves:
        assert session.turn == handle
        apply_move(session, handle, position)
        seen[position] = session.board[position]
        for idx, symbol in seen.items():
            assert session.board[idx] == symbol

    with pytest.raises(CellOccupied):
        apply_move(session, 'bob', 0)
    assert session.board[0] == 'X'


def test_winning_move_finishes_and_keeps_turn():
    session = make_session()
    session.board = ['X', 'X', None, None, 'O', None, 'O', None, None]
    assert apply_move(session, 'alice', 2) == 'X'
    assert session.status == STATUS_FINISHED
    assert session.turn == 'alice'


def test_no_moves_after_game_finished():
    session = make_session()
    session.board = ['X', 'X', None, None, 'O', None, 'O', None, None]
    apply_move(session, 'alice', 2)
    with pytest.raises(NotYourTurn):
        apply_move(session, 'alice', 3)
    with pytest.raises(NotYourTurn):
        apply_move(session, 'bob', 3)
    assert session.board[3] is None


def test_last_cell_without_line_is_a_draw():
    session = make_session()
    session.board = ['X', 'O', 'X',
                     'X', 'O', 'O',
                     'O', 'X', None]
    assert apply_move(session, 'alice', 8) == DRAW
    assert session.status == STATUS_FINISHED
