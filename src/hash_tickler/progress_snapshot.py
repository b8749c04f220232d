from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ProgressSnapshot:
    """Immutable view of the cracker's progress at one reporting boundary."""

    last: str
    tried: int
    remaining: int
    elapsed: float
    total: int
    # Counter value the run resumed at. `tried` is an absolute counter position.
    start: int = 0

    @property
    def rate(self) -> float:
        """Candidates tested per second in this run."""
        if self.elapsed <= 0:
            return 0.0
        return (self.tried - self.start) / self.elapsed

    @property
    def percent(self) -> float:
        if not self.total:
            return 100.0
        return self.tried / self.total * 100
