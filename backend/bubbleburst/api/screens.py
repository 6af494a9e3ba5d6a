from flask import Blueprint, jsonify, request, current_app
from bubbleburst.errors import StorageError, ValidationError
from bubbleburst.services.screens import ScreenID, get_coordinator


screens = Blueprint('screens', __name__)


@screens.errorhandler(ValidationError)
def handle_validation_error(exc):
    current_app.logger.info(f"[bad-request] path={request.path} error={exc.message}")
    return jsonify({'error': exc.message, 'details': exc.details}), 400


@screens.errorhandler(StorageError)
def handle_storage_error(exc):
    current_app.logger.error(f"[db-error] path={request.path} error={exc}")
    return jsonify({'error': 'Database error', 'details': str(exc)}), 500


@screens.route('/<any(screen1, screen2):screen>', methods=['POST'])
def submit_to_screen(screen):
    """Occupy a screen with a new player and forward the player data to its display."""
    data = request.get_json(silent=True)
    return jsonify(get_coordinator().submit_to_screen(ScreenID(screen), data))


@screens.route('/<any(screen1, screen2):screen>/score', methods=['POST'])
def submit_score(screen):
    data = request.get_json(silent=True)
    return jsonify(get_coordinator().submit_score(ScreenID(screen), data))


@screens.route('/winner', methods=['GET'])
def get_winner():
    return jsonify(get_coordinator().query_winner())


@screens.route('/resetScreens', methods=['POST'])
def reset_screens():
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    return jsonify(get_coordinator().reset_screens(data))


@screens.route('/status', methods=['GET'])
def get_status():
    return jsonify(get_coordinator().status())


@screens.route('/scores', methods=['GET'])
def list_scores():
    return jsonify(get_coordinator().list_scores())
