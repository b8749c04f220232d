from dataclasses import dataclass

EXIT_FOUND = 0
EXIT_EXHAUSTED = 1
# 2 is taken by click for usage errors.
EXIT_ERROR = 3


@dataclass(frozen=True, slots=True)
class Found:
    candidate: str
    tries: int


@dataclass(frozen=True, slots=True)
class Exhausted:
    tries: int


type MatchResult = Found | Exhausted


def exit_code(result: MatchResult) -> int:
    """Map a crack result to the process exit status."""
    match result:
        case Found():
            return EXIT_FOUND
        case Exhausted():
            return EXIT_EXHAUSTED
        case _:
            raise TypeError(f"Not a match result: {result!r}")
