from .engine import SessionEngine
from .errors import (
    TriviaError, InsufficientPoolError, ContentFetchError, UnknownClueError,
    AlreadyUsedError, NoOpenClueError, InvalidPhaseError,
)
from .matching import is_correct, normalize_answer
from .scheduler import RevealTimer
from .scoring import ScoreKeeper
from .selector import select_categories, select_clues, shuffle
from .session import SessionModel

__all__ = [
    "SessionEngine", "SessionModel", "ScoreKeeper", "RevealTimer",
    "is_correct", "normalize_answer", "select_categories", "select_clues", "shuffle",
    "TriviaError", "InsufficientPoolError", "ContentFetchError", "UnknownClueError",
    "AlreadyUsedError", "NoOpenClueError", "InvalidPhaseError",
]
