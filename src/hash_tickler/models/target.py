from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class Target:
    """A salted digest to crack, as handed out by the challenge service."""

    digest: bytes
    salt: bytes
    id: str

    def __post_init__(self):
        for name in ("digest", "salt"):
            value = getattr(self, name)
            if not isinstance(value, (bytes, bytearray, memoryview)):
                raise TypeError(f"Target {name} must be bytes, got {type(value).__name__}")
        object.__setattr__(self, "digest", bytes(self.digest))
        object.__setattr__(self, "salt", bytes(self.salt))
        object.__setattr__(self, "id", str(self.id))

    @classmethod
    def from_hex(cls, hash_hex: str, salt_hex: str = "", id: str = "local") -> Target:
        return cls(
            digest=_parse_hex("hash", hash_hex),
            salt=_parse_hex("salt", salt_hex),
            id=id,
        )

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Target:
        """Build a target from a challenge record with hex encoded `hash` and `salt`."""
        if not isinstance(record, Mapping):
            raise ValueError(f"Challenge record must be an object, got {type(record).__name__}")
        missing = [name for name in ("id", "hash", "salt") if name not in record]
        if missing:
            raise ValueError(f"Challenge record is missing fields: {', '.join(missing)}")
        return cls.from_hex(record["hash"], record["salt"], id=record["id"])

    def describe(self) -> dict:
        return {
            "id": self.id,
            "hash": self.digest.hex(),
            "hash_len": len(self.digest),
            "salt": self.salt.hex(),
            "salt_len": len(self.salt),
        }


def _parse_hex(name: str, value: Any) -> bytes:
    if not isinstance(value, str):
        raise ValueError(f"Challenge {name} must be a hex string, got {type(value).__name__}")
    try:
        return bytes.fromhex(value)
    except ValueError as e:
        raise ValueError(f"Challenge {name} is not valid hex: {e}") from e
