from enum import Enum

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
import structlog

from hash_tickler.models.password_spec import ConfigurationError
from hash_tickler.models.target import Target


log = structlog.get_logger()


class HashSuite(str, Enum):
    SHA_256 = "SHA-256"
    SHA_1 = "SHA-1"
    SHA_224 = "SHA-224"
    SHA_384 = "SHA-384"
    SHA_512 = "SHA-512"
    SHA3_256 = "SHA3-256"
    SHA3_512 = "SHA3-512"
    MD5 = "MD5"
    BLAKE2B = "BLAKE2b"

    def __str__(self):
        return self.value


class HashBackendError(RuntimeError):
    pass


def get_algorithm(algorithm: HashSuite | str) -> hashes.HashAlgorithm:
    """Returns the hash algorithm instance for the given suite name."""
    match algorithm:
        case HashSuite.SHA_256.value:
            return hashes.SHA256()
        case HashSuite.SHA_1.value:
            return hashes.SHA1()
        case HashSuite.SHA_224.value:
            return hashes.SHA224()
        case HashSuite.SHA_384.value:
            return hashes.SHA384()
        case HashSuite.SHA_512.value:
            return hashes.SHA512()
        case HashSuite.SHA3_256.value:
            return hashes.SHA3_256()
        case HashSuite.SHA3_512.value:
            return hashes.SHA3_512()
        case HashSuite.MD5.value:
            return hashes.MD5()
        case HashSuite.BLAKE2B.value:
            return hashes.BLAKE2b(64)
        case _:
            raise ConfigurationError(f"Invalid hash algorithm: {algorithm}")


def _new_context(algorithm: hashes.HashAlgorithm) -> hashes.Hash:
    try:
        return hashes.Hash(algorithm)
    except UnsupportedAlgorithm as e:
        log.error("hash backend unavailable", algorithm=algorithm.name, error=str(e))
        raise HashBackendError(f"Hash backend does not support {algorithm.name}: {e}") from e


def digest(salt: bytes, candidate: str, algorithm: HashSuite | str = HashSuite.SHA_256) -> bytes:
    """ Hash(salt || candidate), salt first. """
    context = _new_context(get_algorithm(algorithm))
    context.update(salt)
    context.update(candidate.encode("utf-8"))
    return context.finalize()


def matches(target: Target, candidate: str, algorithm: HashSuite | str = HashSuite.SHA_256) -> bool:
    """ True when the candidate is the preimage of the target's salted digest. """
    return digest(target.salt, candidate, algorithm) == target.digest


class Matcher:
    """
    Match predicate bound to one target, for the hot loop.
    The salt is hashed once into a prefix context that is copied for each
    candidate, so calls do not affect each other.
    """

    def __init__(self, target: Target, algorithm: HashSuite | str = HashSuite.SHA_256):
        self.target = target
        hash_algorithm = get_algorithm(algorithm)
        self.algorithm = HashSuite(algorithm)

        if len(target.digest) != hash_algorithm.digest_size:
            raise ConfigurationError(
                f"Target digest is {len(target.digest)} bytes, {self.algorithm} produces {hash_algorithm.digest_size}"
            )

        self._prefix = _new_context(hash_algorithm)
        self._prefix.update(target.salt)
        self._digest = target.digest

    def __call__(self, candidate: str) -> bool:
        context = self._prefix.copy()
        context.update(candidate.encode("utf-8"))
        return context.finalize() == self._digest
