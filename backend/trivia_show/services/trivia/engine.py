"""Session orchestration: round setup, clue play and the reveal timer.

The engine owns the single live ``SessionModel``. Presentation code calls
its methods and listens for events via ``subscribe``; it never touches the
model directly.
"""
import logging
import random
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Any, Callable, Dict, List, Optional, Sequence

from trivia_show.models import (
    AnswerResult, Category, Clue, PHASE_BOARD_READY, PHASE_REVEALED, make_clue_id, slot_value,
)
from .errors import ContentFetchError
from .scheduler import RevealTimer
from .selector import select_categories, select_clues
from .session import SessionModel

# Category ids used by the original board when none are configured
DEFAULT_CATEGORY_IDS = [1382, 114, 67, 218, 2091, 392, 722, 64, 202, 2639]
DEFAULT_BOARD_SIZE = 5
DEFAULT_CLUES_PER_CATEGORY = 5
DEFAULT_REVEAL_DURATION_SEC = 3.0

Listener = Callable[[str, Dict[str, Any]], None]


class SessionEngine:
    def __init__(
        self,
        provider,
        category_pool: Optional[Sequence[Any]] = None,
        board_size: int = DEFAULT_BOARD_SIZE,
        clues_per_category: int = DEFAULT_CLUES_PER_CATEGORY,
        reveal_duration: float = DEFAULT_REVEAL_DURATION_SEC,
        timer: Optional[RevealTimer] = None,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.provider = provider
        self.category_pool = list(category_pool) if category_pool else list(DEFAULT_CATEGORY_IDS)
        self.board_size = board_size
        self.clues_per_category = clues_per_category
        self.reveal_duration = reveal_duration
        self.logger = logger or logging.getLogger(__name__)
        self.timer = timer or RevealTimer(logger=self.logger)
        self.rng = rng
        self.session = SessionModel()
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()

    # ---- events ----

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _emit(self, event: str, payload: Dict[str, Any]) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, payload)
            except Exception:
                self.logger.exception(f"[event-fail] listener raised for {event}")

    # ---- rounds ----

    def start_round(self, category_pool=None, board_size=None, clues_per_category=None) -> Optional[List[Dict[str, Any]]]:
        """Pick categories, fetch them concurrently and install a fresh board.

        Returns the board snapshot, or None if a newer round was started
        while this one was still fetching.
        """
        return self._load_round(category_pool, board_size, clues_per_category, reset_score=False)

    def restart(self, category_pool=None, board_size=None, clues_per_category=None) -> Optional[List[Dict[str, Any]]]:
        """Like ``start_round`` but the score goes back to 0."""
        return self._load_round(category_pool, board_size, clues_per_category, reset_score=True)

    def _load_round(self, category_pool, board_size, clues_per_category, reset_score: bool):
        pool = list(category_pool) if category_pool else self.category_pool
        board_size = self.board_size if board_size is None else int(board_size)
        clues_per_category = self.clues_per_category if clues_per_category is None else int(clues_per_category)

        if clues_per_category < 0:
            raise ValueError(f"clues_per_category must be non-negative, got {clues_per_category}")

        # Raises InsufficientPoolError before any state changes
        selected = select_categories(pool, board_size, self.rng)

        with self._lock:
            self.timer.cancel()
            had_score = self.session.score
            generation = self.session.begin_loading(reset_score=reset_score)
        self.logger.info(f"[round-start] generation={generation} categories={selected} reset_score={reset_score}")
        if reset_score and had_score:
            self._emit('score_changed', {'score': 0, 'delta': -had_score})

        try:
            raw_categories = self._fetch_all(selected)
            categories, clues = self._build_board(selected, raw_categories, clues_per_category)
        except Exception as exc:
            with self._lock:
                stale = generation != self.session.generation
                if not stale:
                    self.session.abort_loading()
            if stale:
                self.logger.info(f"[round-stale] generation={generation} failure discarded: {exc}")
                return None
            self.logger.warning(f"[round-fail] generation={generation} {exc}")
            self._emit('round_failed', {'generation': generation, 'error': str(exc)})
            raise

        with self._lock:
            if generation != self.session.generation:
                self.logger.info(
                    f"[round-stale] generation={generation} superseded by {self.session.generation}, board discarded"
                )
                return None
            self.session.populate(categories, clues)
            board = self.session.board_dict()
        self.logger.info(f"[round-ready] generation={generation} clues={len(clues)}")
        self._emit('board_populated', {'generation': generation, 'categories': board})
        return board

    def _fetch_all(self, category_ids: List[Any]) -> list:
        """Fetch every category concurrently; fail only once all have settled."""
        if not category_ids:
            return []
        with ThreadPoolExecutor(max_workers=len(category_ids)) as pool:
            futures = [pool.submit(self.provider.fetch_category, cid) for cid in category_ids]
            wait(futures)
        failures = [(cid, f.exception()) for cid, f in zip(category_ids, futures) if f.exception() is not None]
        for cid, exc in failures:
            self.logger.warning(f"[fetch-fail] category={cid} {exc}")
        if failures:
            cid, exc = failures[0]
            if isinstance(exc, ContentFetchError):
                raise exc
            raise ContentFetchError(f"Fetching category {cid!r} failed: {exc}", cid) from exc
        return [f.result() for f in futures]

    def _build_board(self, category_ids, raw_categories, clues_per_category):
        categories: List[Category] = []
        clues: Dict[str, Clue] = {}
        for category_index, (cid, raw) in enumerate(zip(category_ids, raw_categories)):
            category = Category(id=cid, title=raw.title)
            picked = select_clues(raw.clues, clues_per_category, self.rng)
            for slot_index, raw_clue in enumerate(picked):
                clue_id = make_clue_id(category_index, slot_index)
                clues[clue_id] = Clue(
                    id=clue_id,
                    question=raw_clue.question,
                    answer=raw_clue.answer,
                    value=slot_value(slot_index),
                )
                category.clue_ids.append(clue_id)
            categories.append(category)
        return categories, clues

    # ---- play ----

    def open_clue(self, clue_id: str) -> Dict[str, Any]:
        with self._lock:
            was_revealed = self.session.phase == PHASE_REVEALED
            clue = self.session.open_clue(clue_id)
            self.timer.cancel()
            payload = {'clue_id': clue.id, 'question': clue.question, 'value': clue.value}
        self.logger.info(f"[clue-open] clue={clue.id} value={clue.value}")
        if was_revealed:
            self._emit('clue_closed', {'phase': PHASE_BOARD_READY})
        self._emit('clue_opened', payload)
        return payload

    def submit_answer(self, text: Optional[str]) -> AnswerResult:
        with self._lock:
            result = self.session.submit_answer(text)
            self.timer.start(self.reveal_duration, self._auto_close)
        self.logger.info(f"[answer] clue={result.clue_id} correct={result.correct} score={result.score}")
        self._emit('answer_revealed', result.to_dict())
        if result.points_awarded:
            self._emit('score_changed', {'score': result.score, 'delta': result.points_awarded})
        return result

    def close(self) -> bool:
        with self._lock:
            self.timer.cancel()
            closed = self.session.close()
        if closed:
            self._emit('clue_closed', {'phase': self.session.phase})
        return closed

    def _auto_close(self, token: int) -> None:
        with self._lock:
            if not self.timer.claim(token):
                return
            closed = self.session.close()
        if closed:
            self._emit('clue_closed', {'phase': self.session.phase})

    # ---- queries ----

    def get_score(self) -> int:
        return self.session.score

    def get_board_snapshot(self) -> List[Dict[str, Any]]:
        with self._lock:
            return self.session.board_dict()

    def get_open_clue(self) -> Optional[Dict[str, Any]]:
        with self._lock:
            return self.session.open_clue_dict()

    def get_state(self) -> Dict[str, Any]:
        with self._lock:
            state = self.session.to_dict()
        state['reveal_duration'] = self.reveal_duration
        return state
