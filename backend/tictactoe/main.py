from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the tic-tac-toe game server!'})

@main.route('/health')
def health():
    """Connection, queue and session counters for diagnostics."""
    stats = current_app.extensions['session_coordinator'].stats()
    return jsonify({'status': 'ok', **stats})
