from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Session phases
PHASE_IDLE = 'idle'
PHASE_BOARD_LOADING = 'board_loading'
PHASE_BOARD_READY = 'board_ready'
PHASE_CLUE_OPEN = 'clue_open'
PHASE_REVEALED = 'revealed'

# Clue status
STATUS_UNUSED = 'unused'
STATUS_USED = 'used'

POINTS_PER_SLOT = 100


def make_clue_id(category_index: int, slot_index: int) -> str:
    return f"{category_index}-{slot_index}"


def slot_value(slot_index: int) -> int:
    """Point value of a clue by its 0-indexed slot within its category."""
    return (slot_index + 1) * POINTS_PER_SLOT


@dataclass(frozen=True)
class RawClue:
    """A question/answer pair as delivered by a content provider."""
    question: str
    answer: str


@dataclass(frozen=True)
class RawCategory:
    title: str
    clues: List[RawClue]


@dataclass
class Clue:
    id: str
    question: str
    answer: str
    value: int
    status: str = STATUS_UNUSED

    @property
    def is_used(self) -> bool:
        return self.status == STATUS_USED

    def to_dict(self, include_answer: bool = False) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'value': self.value,
            'status': self.status,
        }
        if include_answer:
            data['question'] = self.question
            data['answer'] = self.answer
        return data


@dataclass
class Category:
    id: Any
    title: str
    clue_ids: List[str] = field(default_factory=list)

    def to_dict(self, clues: Optional[Dict[str, Clue]] = None) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'title': self.title,
            'clue_ids': list(self.clue_ids),
        }
        if clues is not None:
            data['clues'] = [clues[cid].to_dict() for cid in self.clue_ids]
        return data


@dataclass(frozen=True)
class AnswerResult:
    """Outcome of a submitted answer, reported back to the presentation layer."""
    clue_id: str
    correct: bool
    answer: str
    points_awarded: int
    score: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'clue_id': self.clue_id,
            'correct': self.correct,
            'answer': self.answer,
            'points_awarded': self.points_awarded,
            'score': self.score,
        }
