class TriviaError(Exception):
    """Base class for recoverable session errors."""

    status_code = 400


class InsufficientPoolError(TriviaError):
    def __init__(self, available: int, requested: int):
        super().__init__(f"Pool has {available} distinct entries, {requested} requested")
        self.available = available
        self.requested = requested


class ContentFetchError(TriviaError):
    status_code = 502

    def __init__(self, message: str, category_id=None):
        super().__init__(message)
        self.category_id = category_id


class UnknownClueError(TriviaError):
    status_code = 404

    def __init__(self, clue_id):
        super().__init__(f"Unknown clue: {clue_id}")
        self.clue_id = clue_id


class AlreadyUsedError(TriviaError):
    status_code = 409

    def __init__(self, clue_id):
        super().__init__(f"Clue {clue_id} has already been played")
        self.clue_id = clue_id


class NoOpenClueError(TriviaError):
    def __init__(self):
        super().__init__("No clue is waiting for an answer")


class InvalidPhaseError(TriviaError):
    status_code = 409

    def __init__(self, action: str, phase: str):
        super().__init__(f"Cannot {action} while session is {phase}")
        self.action = action
        self.phase = phase
