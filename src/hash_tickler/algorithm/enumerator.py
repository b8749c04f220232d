from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator

from hash_tickler.models.password_spec import ConfigurationError, PasswordSpec


def produce(spec: PasswordSpec, state: int) -> str:
    """
    Decode a counter value into its candidate password.

    The counter is written in base len(alphabet) with exactly `length` digits,
    least significant digit first: output position 0 is the lowest digit, and
    the first alphabet symbol plays the role of zero.
    """
    if not 0 <= state < spec.total:
        raise IndexError(f"state {state} out of range [0, {spec.total})")

    symbols = spec.alphabet.symbols
    base = len(symbols)
    password = []
    for _ in range(spec.length):
        state, digit = divmod(state, base)
        password.append(symbols[digit])
    return "".join(password)


def candidates(spec: PasswordSpec, start: int = 0) -> Iterator[str]:
    """Lazily yield every candidate from `start` up to the end of the space."""
    for state in range(start, spec.total):
        yield produce(spec, state)


@dataclass(frozen=True, slots=True)
class EnumerationCursor:
    """How many candidates of a spec have been produced so far."""

    spec: PasswordSpec
    state: int = 0

    def __post_init__(self):
        if not 0 <= self.state <= self.spec.total:
            raise ConfigurationError(f"cursor state {self.state} out of range [0, {self.spec.total}]")

    @property
    def remaining(self) -> int:
        return self.spec.total - self.state

    @property
    def exhausted(self) -> bool:
        return self.state == self.spec.total

    def candidate(self) -> str:
        return produce(self.spec, self.state)

    def advance(self) -> EnumerationCursor:
        if self.exhausted:
            raise IndexError("cursor is exhausted")
        return EnumerationCursor(self.spec, self.state + 1)
