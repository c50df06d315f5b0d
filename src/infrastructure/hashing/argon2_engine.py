"""
Password hashing using Argon2id.

Argon2id is the recommended password hashing algorithm for new applications
(OWASP 2023+). It combines the side-channel resistance of Argon2i with the
GPU-cracking resistance of Argon2d.

The raw digest comes from *argon2-cffi*'s low-level binding; salt generation,
the PHC string and the digest comparison are handled here so that every piece
of the verify path is explicit.
"""

from __future__ import annotations

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw

from domain.exceptions import ComputationError
from domain.models.hashing import (
    ARGON2_DEFAULT_HASH_LEN,
    ARGON2_DEFAULT_SALT_LEN,
    ARGON2_VERSION,
    Algorithm,
    Argon2Params,
)
from domain.services.digest_compare import digests_match
from infrastructure.hashing import codec
from infrastructure.hashing.salt import SaltFactory, system_salt

ARGON2_MIN_SALT_LEN = 16
DEFAULT_VARIANT = "argon2id"

_TYPES: dict[str, Type] = {
    "argon2i": Type.I,
    "argon2d": Type.D,
    "argon2id": Type.ID,
}


class Argon2Engine:
    """
    Hash and verify passwords with Argon2.

    New hashes are always Argon2id, version 1.3.  Verification accepts any
    variant and version the codec can parse and always recomputes with the
    parameters recovered from the stored hash, never the current defaults.
    """

    algorithm = Algorithm.ARGON2

    def __init__(
        self,
        *,
        hash_len: int = ARGON2_DEFAULT_HASH_LEN,
        salt_len: int = ARGON2_DEFAULT_SALT_LEN,
        salt_factory: SaltFactory = system_salt,
    ) -> None:
        if salt_len < ARGON2_MIN_SALT_LEN:
            raise ValueError(f"salt_len must be at least {ARGON2_MIN_SALT_LEN} bytes")
        if hash_len < codec.ARGON2_MIN_DIGEST_LEN:
            raise ValueError(f"hash_len must be at least {codec.ARGON2_MIN_DIGEST_LEN} bytes")
        self._hash_len = hash_len
        self._salt_len = salt_len
        self._salt_factory = salt_factory

    def hash(self, password: str, params: Argon2Params) -> str:
        """
        Hash *password* and return the encoded Argon2id string.

        The returned string includes algorithm parameters and a fresh random
        salt, making it safe to store directly.
        """
        secret = codec.encode_password(password)
        salt = self._salt_factory(self._salt_len)
        digest = self._compute(
            secret, salt, params, variant=DEFAULT_VARIANT, version=ARGON2_VERSION,
            hash_len=self._hash_len,
        )
        return codec.encode(DEFAULT_VARIANT, params, salt, digest, version=ARGON2_VERSION)

    def verify(self, password: str, encoded: str) -> bool:
        """
        Verify *password* against *encoded*.

        Returns ``True`` on match and ``False`` on mismatch.  A malformed or
        non-Argon2 hash raises :class:`~domain.exceptions.DecodeError`.
        """
        decoded = codec.decode(encoded, expected=Algorithm.ARGON2)
        candidate = self._compute(
            codec.encode_password(password),
            decoded.salt,
            decoded.params,  # type: ignore[arg-type]
            variant=decoded.algorithm_id,
            version=decoded.version or ARGON2_VERSION,
            hash_len=len(decoded.digest),
        )
        return digests_match(decoded.digest, candidate)

    def needs_rehash(self, encoded: str, params: Argon2Params) -> bool:
        decoded = codec.decode(encoded, expected=Algorithm.ARGON2)
        return (
            decoded.algorithm_id != DEFAULT_VARIANT
            or decoded.version != ARGON2_VERSION
            or decoded.params != params
            or len(decoded.salt) != self._salt_len
            or len(decoded.digest) != self._hash_len
        )

    @staticmethod
    def _compute(
        secret: bytes,
        salt: bytes,
        params: Argon2Params,
        *,
        variant: str,
        version: int,
        hash_len: int,
    ) -> bytes:
        try:
            return hash_secret_raw(
                secret=secret,
                salt=salt,
                time_cost=params.time_cost,
                memory_cost=params.memory_cost,
                parallelism=params.parallelism,
                hash_len=hash_len,
                type=_TYPES[variant],
                version=version,
            )
        except (HashingError, MemoryError) as exc:
            raise ComputationError("argon2", str(exc) or type(exc).__name__) from exc
