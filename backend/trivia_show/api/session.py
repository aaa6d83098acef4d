from flask import Blueprint, jsonify, request, current_app

from trivia_show.services.trivia import TriviaError

session_api = Blueprint('session_api', __name__)


def _engine():
    return current_app.extensions['trivia_engine']


def _error(exc: TriviaError):
    return jsonify({'error': str(exc), 'kind': type(exc).__name__}), exc.status_code


def _round_options():
    data = request.get_json(silent=True) or {}
    return {
        'category_pool': data.get('category_ids'),
        'board_size': data.get('board_size'),
        'clues_per_category': data.get('clues_per_category'),
    }


def _load_round(restart: bool):
    engine = _engine()
    try:
        options = _round_options()
        board = engine.restart(**options) if restart else engine.start_round(**options)
    except TriviaError as exc:
        return _error(exc)
    except (TypeError, ValueError) as exc:
        return jsonify({'error': f'Invalid round options: {exc}'}), 400
    if board is None:
        # A newer round replaced this one while it was loading
        return jsonify({'message': 'superseded', 'state': engine.get_state()}), 409
    return jsonify(engine.get_state()), 201


@session_api.route('/start', methods=['POST'])
def start_round():
    return _load_round(restart=False)


@session_api.route('/restart', methods=['POST'])
def restart_round():
    return _load_round(restart=True)


@session_api.route('/clues/<string:clue_id>/open', methods=['POST'])
def open_clue(clue_id):
    try:
        clue = _engine().open_clue(clue_id)
    except TriviaError as exc:
        return _error(exc)
    return jsonify(clue)


@session_api.route('/answer', methods=['POST'])
def submit_answer():
    data = request.get_json(silent=True) or {}
    answer = data.get('answer')
    if answer is not None and not isinstance(answer, str):
        return jsonify({'error': 'answer must be a string'}), 400
    try:
        result = _engine().submit_answer(answer or '')
    except TriviaError as exc:
        return _error(exc)
    return jsonify(result.to_dict())


@session_api.route('/close', methods=['POST'])
def close_clue():
    engine = _engine()
    closed = engine.close()
    return jsonify({'closed': closed, 'phase': engine.get_state()['phase']})


@session_api.route('/state', methods=['GET'])
def get_state():
    return jsonify(_engine().get_state())


@session_api.route('/score', methods=['GET'])
def get_score():
    return jsonify({'score': _engine().get_score()})


@session_api.route('/board', methods=['GET'])
def get_board():
    return jsonify({'categories': _engine().get_board_snapshot()})


@session_api.route('/clue', methods=['GET'])
def get_open_clue():
    return jsonify({'clue': _engine().get_open_clue()})
