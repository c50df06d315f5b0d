"""Bcrypt password hashing adapter.

Only the first 72 bytes of the UTF-8 encoded password take part in the hash.
Classic bcrypt silently ignores the rest and every stored bcrypt hash relies
on that, so the engine truncates explicitly instead of letting newer
``bcrypt`` releases reject long passwords.
"""

from __future__ import annotations

import bcrypt

from domain.exceptions import ComputationError
from domain.models.hashing import (
    BCRYPT_MAX_PASSWORD_BYTES,
    BCRYPT_SALT_LEN,
    Algorithm,
    BcryptParams,
)
from domain.services.digest_compare import digests_match
from infrastructure.hashing import codec
from infrastructure.hashing.salt import SaltFactory, system_salt

DEFAULT_PREFIX = "2b"


class BcryptEngine:
    """Password hashing adapter using bcrypt."""

    algorithm = Algorithm.BCRYPT

    def __init__(self, *, salt_factory: SaltFactory = system_salt) -> None:
        self._salt_factory = salt_factory

    def hash(self, password: str, params: BcryptParams) -> str:
        salt = self._salt_factory(BCRYPT_SALT_LEN)
        digest = self._compute(password, DEFAULT_PREFIX, params.work_factor, salt)
        return codec.encode(DEFAULT_PREFIX, params, salt, digest)

    def verify(self, password: str, encoded: str) -> bool:
        decoded = codec.decode(encoded, expected=Algorithm.BCRYPT)
        candidate = self._compute(
            password,
            decoded.algorithm_id,
            decoded.params.work_factor,  # type: ignore[union-attr]
            decoded.salt,
        )
        return digests_match(decoded.digest, candidate)

    def needs_rehash(self, encoded: str, params: BcryptParams) -> bool:
        decoded = codec.decode(encoded, expected=Algorithm.BCRYPT)
        return decoded.algorithm_id != DEFAULT_PREFIX or decoded.params != params

    @staticmethod
    def _compute(password: str, prefix: str, work_factor: int, salt: bytes) -> bytes:
        secret = codec.encode_password(password)[:BCRYPT_MAX_PASSWORD_BYTES]
        setting = codec.bcrypt_salt(prefix, work_factor, salt)
        try:
            raw = bcrypt.hashpw(secret, setting)
        except ValueError as exc:
            raise ComputationError("bcrypt", str(exc)) from exc
        return codec.decode(raw.decode("ascii"), expected=Algorithm.BCRYPT).digest
