from typing import Any, Dict, List, Optional

from trivia_show.models import (
    AnswerResult, Category, Clue,
    PHASE_IDLE, PHASE_BOARD_LOADING, PHASE_BOARD_READY, PHASE_CLUE_OPEN, PHASE_REVEALED,
    STATUS_USED,
)
from .errors import AlreadyUsedError, InvalidPhaseError, NoOpenClueError, UnknownClueError
from .matching import is_correct
from .scoring import ScoreKeeper


class SessionModel:
    """State of the single live trivia session.

    Phases move idle -> board_loading -> board_ready -> clue_open ->
    revealed -> board_ready, and back to board_loading on a new round.
    ``current_clue`` is set exactly while the phase is clue_open or
    revealed. Guards raise before anything is mutated.
    """

    def __init__(self) -> None:
        self.categories: List[Category] = []
        self.clues: Dict[str, Clue] = {}
        self.score_keeper = ScoreKeeper()
        self.current_clue: Optional[str] = None
        self.phase = PHASE_IDLE
        self.generation = 0

    @property
    def score(self) -> int:
        return self.score_keeper.total

    @property
    def is_complete(self) -> bool:
        return bool(self.clues) and all(c.is_used for c in self.clues.values())

    def begin_loading(self, reset_score: bool = False) -> int:
        """Drop the current board and enter board_loading; returns the new generation."""
        self.categories = []
        self.clues = {}
        self.current_clue = None
        if reset_score:
            self.score_keeper.reset()
        self.phase = PHASE_BOARD_LOADING
        self.generation += 1
        return self.generation

    def populate(self, categories: List[Category], clues: Dict[str, Clue]) -> None:
        if self.phase != PHASE_BOARD_LOADING:
            raise InvalidPhaseError('populate the board', self.phase)
        referenced = [cid for c in categories for cid in c.clue_ids]
        if len(referenced) != len(set(referenced)) or set(referenced) != set(clues):
            raise ValueError('Every clue must belong to exactly one category')
        self.categories = list(categories)
        self.clues = dict(clues)
        self.phase = PHASE_BOARD_READY

    def abort_loading(self) -> None:
        if self.phase == PHASE_BOARD_LOADING:
            self.phase = PHASE_IDLE

    def open_clue(self, clue_id: str) -> Clue:
        clue = self.clues.get(clue_id)
        if clue is None:
            raise UnknownClueError(clue_id)
        if clue.is_used:
            raise AlreadyUsedError(clue_id)
        if self.phase == PHASE_REVEALED:
            self.close()
        if self.phase != PHASE_BOARD_READY:
            raise InvalidPhaseError('open a clue', self.phase)
        clue.status = STATUS_USED
        self.current_clue = clue_id
        self.phase = PHASE_CLUE_OPEN
        return clue

    def submit_answer(self, text: Optional[str]) -> AnswerResult:
        if self.phase != PHASE_CLUE_OPEN or self.current_clue is None:
            raise NoOpenClueError()
        clue = self.clues[self.current_clue]
        correct = is_correct(text, clue.answer)
        points = clue.value if correct else 0
        if correct:
            self.score_keeper.apply(points)
        self.phase = PHASE_REVEALED
        return AnswerResult(
            clue_id=clue.id,
            correct=correct,
            answer=clue.answer,
            points_awarded=points,
            score=self.score,
        )

    def close(self) -> bool:
        """Return to the board after a reveal. No-op (False) in any other phase."""
        if self.phase != PHASE_REVEALED:
            return False
        self.current_clue = None
        self.phase = PHASE_BOARD_READY
        return True

    def open_clue_dict(self) -> Optional[Dict[str, Any]]:
        if self.current_clue is None:
            return None
        clue = self.clues[self.current_clue]
        data = clue.to_dict()
        data['question'] = clue.question
        # Canonical answer stays hidden until revealed
        if self.phase == PHASE_REVEALED:
            data['answer'] = clue.answer
        return data

    def board_dict(self) -> List[Dict[str, Any]]:
        return [c.to_dict(self.clues) for c in self.categories]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'phase': self.phase,
            'generation': self.generation,
            'score': self.score,
            'current_clue': self.open_clue_dict(),
            'categories': self.board_dict(),
            'is_complete': self.is_complete,
        }
