class ScoreKeeper:
    """Running total for the live session.

    Only correct answers add points (the clue's value); wrong answers
    cost nothing.
    """

    def __init__(self) -> None:
        self.total = 0

    def apply(self, delta: int) -> int:
        if not isinstance(delta, int) or isinstance(delta, bool) or delta < 0:
            raise ValueError(f"Score delta must be a non-negative integer, got {delta!r}")
        self.total += delta
        return self.total

    def reset(self) -> None:
        self.total = 0
