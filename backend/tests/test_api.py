def _start(client, **options):
    res = client.post('/api/session/start', json=options or None)
    assert res.status_code == 201
    return res.get_json()


def test_health(client):
    res = client.get('/health')
    assert res.status_code == 200
    assert res.get_json()['status'] == 'ok'


def test_initial_state_is_idle(client):
    state = client.get('/api/session/state').get_json()
    assert state['phase'] == 'idle'
    assert state['score'] == 0
    assert state['categories'] == []
    assert state['current_clue'] is None


def test_start_round_returns_board(client):
    state = _start(client)
    assert state['phase'] == 'board_ready'
    assert len(state['categories']) == 5
    for category in state['categories']:
        assert [c['value'] for c in category['clues']] == [100, 200, 300, 400, 500]
        # Answers are not leaked on the board
        assert all('answer' not in c for c in category['clues'])
    board = client.get('/api/session/board').get_json()['categories']
    assert board == state['categories']


def test_start_round_with_custom_pool_and_size(client):
    state = _start(client, category_ids=[2, 4, 6], board_size=3, clues_per_category=2)
    assert sorted(c['id'] for c in state['categories']) == [2, 4, 6]
    assert all(len(c['clues']) == 2 for c in state['categories'])


def test_start_round_pool_too_small(client):
    res = client.post('/api/session/start', json={'category_ids': [1, 2], 'board_size': 5})
    assert res.status_code == 400
    assert res.get_json()['kind'] == 'InsufficientPoolError'
    assert client.get('/api/session/state').get_json()['phase'] == 'idle'


def test_start_round_unknown_category_is_fetch_error(client):
    res = client.post('/api/session/start', json={'category_ids': [1, 2, 3, 4, 99]})
    assert res.status_code == 502
    assert res.get_json()['kind'] == 'ContentFetchError'
    state = client.get('/api/session/state').get_json()
    assert state['phase'] == 'idle'
    assert state['categories'] == []


def test_invalid_round_options(client):
    res = client.post('/api/session/start', json={'board_size': 'lots'})
    assert res.status_code == 400


def test_open_answer_close_flow(client, flask_app):
    _start(client)
    engine = flask_app.extensions['trivia_engine']
    answer = engine.session.clues['1-2'].answer

    opened = client.post('/api/session/clues/1-2/open')
    assert opened.status_code == 200
    assert opened.get_json()['value'] == 300
    assert opened.get_json()['question']

    clue = client.get('/api/session/clue').get_json()['clue']
    assert clue['id'] == '1-2'
    assert 'answer' not in clue

    res = client.post('/api/session/answer', json={'answer': answer.upper()})
    assert res.status_code == 200
    result = res.get_json()
    assert result['correct'] is True
    assert result['points_awarded'] == 300
    assert client.get('/api/session/score').get_json() == {'score': 300}
    assert client.get('/api/session/clue').get_json()['clue']['answer'] == answer

    closed = client.post('/api/session/close').get_json()
    assert closed == {'closed': True, 'phase': 'board_ready'}
    again = client.post('/api/session/close').get_json()
    assert again == {'closed': False, 'phase': 'board_ready'}


def test_wrong_answer_keeps_score(client):
    _start(client)
    client.post('/api/session/clues/0-0/open')
    result = client.post('/api/session/answer', json={'answer': 'no idea'}).get_json()
    assert result['correct'] is False
    assert result['score'] == 0
    assert client.get('/api/session/state').get_json()['phase'] == 'revealed'


def test_error_statuses(client):
    _start(client)
    assert client.post('/api/session/clues/9-9/open').status_code == 404
    assert client.post('/api/session/answer', json={'answer': 'x'}).status_code == 400

    assert client.post('/api/session/clues/0-0/open').status_code == 200
    assert client.post('/api/session/clues/0-1/open').status_code == 409
    client.post('/api/session/answer', json={'answer': 'x'})
    client.post('/api/session/close')
    res = client.post('/api/session/clues/0-0/open')
    assert res.status_code == 409
    assert res.get_json()['kind'] == 'AlreadyUsedError'


def test_answer_must_be_text(client):
    _start(client)
    client.post('/api/session/clues/0-0/open')
    assert client.post('/api/session/answer', json={'answer': 42}).status_code == 400
    assert client.get('/api/session/state').get_json()['phase'] == 'clue_open'


def test_restart_resets_score(client, flask_app):
    _start(client)
    engine = flask_app.extensions['trivia_engine']
    client.post('/api/session/clues/0-0/open')
    client.post('/api/session/answer', json={'answer': engine.session.clues['0-0'].answer})
    assert client.get('/api/session/score').get_json()['score'] == 100

    res = client.post('/api/session/restart')
    assert res.status_code == 201
    state = res.get_json()
    assert state['score'] == 0
    assert state['generation'] == 2
    assert all(c['status'] == 'unused' for cat in state['categories'] for c in cat['clues'])


def test_preview_board_command(flask_app):
    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=['preview-board', '--seed', '3'])
    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert len(lines) == 5
    assert all(line.endswith('100 200 300 400 500') for line in lines)


def test_bad_clue_count_on_restart_leaves_round_untouched(client, flask_app):
    _start(client)
    engine = flask_app.extensions['trivia_engine']
    client.post('/api/session/clues/0-0/open')
    client.post('/api/session/answer', json={'answer': engine.session.clues['0-0'].answer})
    before = client.get('/api/session/state').get_json()
    assert before['score'] == 100

    res = client.post('/api/session/restart', json={'clues_per_category': -1})
    assert res.status_code == 400
    after = client.get('/api/session/state').get_json()
    assert after == before
    assert after['phase'] == 'revealed'
    assert after['generation'] == 1
    assert len(after['categories']) == 5
