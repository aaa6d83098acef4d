import os
import random
import sys
import pytest

# Ensure the backend root (containing the `trivia_show` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from trivia_show import create_app, socketio
from trivia_show.content import StaticContentProvider
from trivia_show.services.trivia import RevealTimer, SessionEngine


def make_content(num_categories=6, clues_per_category=6):
    """Categories keyed 1..N, each with clues whose answer encodes its position."""
    content = {}
    for c in range(1, num_categories + 1):
        content[c] = {
            'title': f'Category {c}',
            'clues': [
                {'question': f'Question {c}.{i}', 'answer': f'answer {c}.{i}'}
                for i in range(clues_per_category)
            ],
        }
    return content


class ManualSpawner:
    """Collects timer runs instead of starting threads; tests fire them by hand."""

    def __init__(self):
        self.calls = []

    def __call__(self, target, *args):
        self.calls.append((target, args))

    def fire_all(self):
        calls, self.calls = self.calls, []
        for target, args in calls:
            target(*args)


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CATEGORY_IDS = [1, 2, 3, 4, 5, 6]
    BOARD_SIZE = 5
    CLUES_PER_CATEGORY = 5
    REVEAL_DURATION_SEC = 0


@pytest.fixture()
def content():
    return make_content()


@pytest.fixture()
def provider(content):
    return StaticContentProvider(content)


@pytest.fixture()
def spawner():
    return ManualSpawner()


@pytest.fixture()
def engine(provider, spawner):
    return SessionEngine(
        provider,
        category_pool=provider.category_ids,
        reveal_duration=0,
        timer=RevealTimer(spawn=spawner, sleep=lambda _: None),
        rng=random.Random(1234),
    )


@pytest.fixture()
def events(engine):
    received = []
    engine.subscribe(lambda name, payload: received.append((name, payload)))
    return received


@pytest.fixture()
def flask_app(provider):
    application = create_app(TestConfig, content_provider=provider)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
