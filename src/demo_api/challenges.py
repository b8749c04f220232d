import os
import secrets
import string
import threading
import uuid
from dataclasses import dataclass

from cryptography.hazmat.primitives import hashes
import structlog


log = structlog.get_logger()

PASSWORD_ALPHABET = string.ascii_lowercase
DEFAULT_LENGTH = 6
MAX_LENGTH = 8
SALT_SIZE = 16


@dataclass(frozen=True, slots=True)
class Challenge:
    id: uuid.UUID
    password: str
    salt: bytes
    hash: bytes
    flag: str


def salted_sha256(salt: bytes, password: str) -> bytes:
    """ SHA-256(salt || password) """
    digest = hashes.Hash(hashes.SHA256())
    digest.update(salt)
    digest.update(password.encode("utf-8"))
    return digest.finalize()


def new_challenge(length: int = DEFAULT_LENGTH) -> Challenge:
    """ Pick a random lowercase password and salt it. """
    if not 1 <= length <= MAX_LENGTH:
        raise ValueError(f"length must be between 1 and {MAX_LENGTH}")
    password = "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))
    salt = os.urandom(SALT_SIZE)
    return Challenge(
        id=uuid.uuid4(),
        password=password,
        salt=salt,
        hash=salted_sha256(salt, password),
        flag=f"FLAG{{{secrets.token_hex(8)}}}",
    )


class ChallengeStore:
    """In-memory challenges, keyed by id."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._challenges: dict[uuid.UUID, Challenge] = {}

    def create(self, length: int = DEFAULT_LENGTH) -> Challenge:
        challenge = new_challenge(length)
        with self._lock:
            self._challenges[challenge.id] = challenge
        log.info("challenge created", id=str(challenge.id), length=length, hash_hex=challenge.hash.hex())
        return challenge

    def get(self, challenge_id: uuid.UUID) -> Challenge | None:
        with self._lock:
            return self._challenges.get(challenge_id)

    def answer(self, challenge_id: uuid.UUID, answer: str) -> bool:
        challenge = self.get(challenge_id)
        if challenge is None:
            raise KeyError(challenge_id)
        correct = salted_sha256(challenge.salt, answer) == challenge.hash
        log.info("challenge answered", id=str(challenge_id), answer=answer, correct=correct)
        return correct
