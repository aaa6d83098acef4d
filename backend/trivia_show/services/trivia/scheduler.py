import itertools
import logging
import threading
import time
from typing import Callable, Optional


def _thread_spawn(target, *args):
    worker = threading.Thread(target=target, args=args, daemon=True)
    worker.start()
    return worker


class RevealTimer:
    """One-shot, cancellable timer for the post-reveal auto close.

    Each ``start`` issues a fresh token; the background runner only fires
    its callback if that token is still the pending one when the delay is
    over, so a cancelled or superseded timer wakes up and does nothing.

    ``spawn`` runs ``target(*args)`` in the background. The app passes
    ``socketio.start_background_task``.
    """

    def __init__(
        self,
        spawn: Optional[Callable] = None,
        sleep: Callable[[float], None] = time.sleep,
        logger: Optional[logging.Logger] = None,
    ):
        self._spawn = spawn or _thread_spawn
        self._sleep = sleep
        self._logger = logger or logging.getLogger(__name__)
        self._tokens = itertools.count(1)
        self._pending: Optional[int] = None
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def start(self, delay: float, callback: Callable[[int], None]) -> int:
        """Schedule ``callback(token)`` after ``delay`` seconds, replacing any pending timer."""
        with self._lock:
            token = next(self._tokens)
            self._pending = token
        self._logger.info(f"[timer-set] token={token} delay={delay}s")
        self._spawn(self._run, token, delay, callback)
        return token

    def cancel(self) -> bool:
        with self._lock:
            had_pending = self._pending is not None
            self._pending = None
        if had_pending:
            self._logger.info("[timer-cancel] pending close dropped")
        return had_pending

    def claim(self, token: int) -> bool:
        """Consume ``token`` if it is still pending. Returns False for stale tokens."""
        with self._lock:
            if self._pending != token:
                return False
            self._pending = None
            return True

    def _run(self, token: int, delay: float, callback: Callable[[int], None]) -> None:
        if delay > 0:
            self._sleep(delay)
        if self._pending != token:
            self._logger.info(f"[timer-abort] token={token} superseded")
            return
        self._logger.info(f"[timer-fire] token={token}")
        callback(token)
