import os


def _id_list(raw):
    ids = []
    for part in (raw or '').split(','):
        part = part.strip()
        if part:
            ids.append(int(part) if part.isdigit() else part)
    return ids


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Category pool to draw each board from; empty uses the built-in default ids
    CATEGORY_IDS = _id_list(os.environ.get('CATEGORY_IDS'))
    BOARD_SIZE = int(os.environ.get('BOARD_SIZE', '5'))
    CLUES_PER_CATEGORY = int(os.environ.get('CLUES_PER_CATEGORY', '5'))
    # Seconds the revealed answer stays up before the clue closes itself
    REVEAL_DURATION_SEC = float(os.environ.get('REVEAL_DURATION_SEC', '3'))
    # Content source: jService-style API, or a local JSON file when CONTENT_FILE is set
    CONTENT_BASE_URL = os.environ.get('CONTENT_BASE_URL', 'https://jservice.io/api')
    CONTENT_TIMEOUT_SEC = float(os.environ.get('CONTENT_TIMEOUT_SEC', '10'))
    CONTENT_MAX_RETRIES = int(os.environ.get('CONTENT_MAX_RETRIES', '3'))
    CONTENT_FILE = os.environ.get('CONTENT_FILE')
