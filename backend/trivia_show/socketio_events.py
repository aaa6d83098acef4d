from flask import current_app
from flask_socketio import emit
from typing import Any, Dict

from trivia_show import socketio
from trivia_show.services.trivia import TriviaError


def _engine():
    return current_app.extensions['trivia_engine']


def broadcast_engine_event(event: str, payload: Dict[str, Any]) -> None:
    """Forward an engine event to every client on /ws, followed by a state nudge."""
    # socketio.emit since this may be called from the reveal timer's background task
    socketio.emit(event, payload, namespace='/ws')
    socketio.emit('state_update', {'event': event}, namespace='/ws')


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_get_state(data=None):
    emit('state', _engine().get_state())


def handle_open_clue(data):
    clue_id = (data or {}).get('clue_id')
    if not clue_id:
        emit('error', {'message': 'clue_id is required'})
        return
    try:
        _engine().open_clue(clue_id)
    except TriviaError as exc:
        emit('error', {'message': str(exc), 'kind': type(exc).__name__})


def handle_submit_answer(data):
    answer = (data or {}).get('answer') or ''
    if not isinstance(answer, str):
        emit('error', {'message': 'answer must be a string'})
        return
    try:
        _engine().submit_answer(answer)
    except TriviaError as exc:
        emit('error', {'message': str(exc), 'kind': type(exc).__name__})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    handlers = {
        'connect': handle_connect,
        'get_state': handle_get_state,
        'open_clue': handle_open_clue,
        'submit_answer': handle_submit_answer,
        'ping': handle_ping,
    }
    namespaces = ['/ws', '/'] if testing else ['/ws']
    for namespace in namespaces:
        for name, handler in handlers.items():
            socketio.on_event(name, handler, namespace=namespace)
