import time
from typing import Callable, Optional

import structlog

from hash_tickler.algorithm.enumerator import produce
from hash_tickler.models.match_result import Exhausted, Found, MatchResult
from hash_tickler.models.password_spec import ConfigurationError, PasswordSpec
from hash_tickler.models.target import Target
from hash_tickler.progress_snapshot import ProgressSnapshot

TestFn = Callable[[str], bool]
ProgressFn = Callable[[ProgressSnapshot], None]

DEFAULT_PROGRESS_EVERY = 10_000_000

log = structlog.get_logger()


class CrackInterrupted(RuntimeError):
    """Raised from a progress callback to stop the run at a reporting boundary."""


def run(
    spec: PasswordSpec,
    target: Optional[Target],
    test_fn: TestFn,
    progress_fn: Optional[ProgressFn] = None,
    *,
    progress_every: int = DEFAULT_PROGRESS_EVERY,
    start: int = 0,
    clock: Callable[[], float] = time.monotonic,
) -> MatchResult:
    """
    Try every candidate password, in counter order, until test_fn accepts one.
    - progress_fn receives a snapshot every `progress_every` candidates, counted
      from the start of the space, before that candidate is tested.
    - start resumes a previous run at a recorded counter value.
    Errors raised by test_fn or progress_fn end the run unchanged.
    """
    if progress_every < 1:
        raise ConfigurationError(f"progress_every must be at least 1, got {progress_every}")
    if not 0 <= start <= spec.total:
        raise ConfigurationError(f"start {start} out of range [0, {spec.total}]")

    total = spec.total
    log.info(
        "crack started",
        target_id=target.id if target is not None else None,
        alphabet_size=spec.base,
        length=spec.length,
        total=total,
        start=start,
    )

    started_at = clock()
    for state in range(start, total):
        candidate = produce(spec, state)

        tried = state + 1
        if progress_fn is not None and tried % progress_every == 0:
            progress_fn(ProgressSnapshot(
                last=candidate,
                tried=tried,
                remaining=total - tried,
                elapsed=clock() - started_at,
                total=total,
                start=start,
            ))

        if test_fn(candidate):
            log.info("valid password found", password=candidate, state=state, elapsed=clock() - started_at)
            return Found(candidate=candidate, tries=tried - start)

    log.warning("search space exhausted", total=total, elapsed=clock() - started_at)
    return Exhausted(tries=total - start)
