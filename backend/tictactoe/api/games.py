from flask import Blueprint, current_app, jsonify

games = Blueprint('games', __name__)


@games.route('/<string:game_id>/state', methods=['GET'])
def get_game_state(game_id):
    """
    Returns the authoritative snapshot of a game session.
    """
    snapshot = current_app.extensions['session_coordinator'].game_snapshot(game_id)
    if snapshot is None:
        return jsonify({'error': 'Game not found'}), 404
    return jsonify(snapshot)
