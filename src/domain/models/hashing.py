from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional, Union

ARGON2_DEFAULT_TIME_COST = 2
ARGON2_DEFAULT_MEMORY_COST = 19456  # KiB
ARGON2_DEFAULT_PARALLELISM = 1
ARGON2_DEFAULT_HASH_LEN = 32
ARGON2_DEFAULT_SALT_LEN = 16
ARGON2_VERSION = 0x13

BCRYPT_DEFAULT_WORK_FACTOR = 12
BCRYPT_MIN_WORK_FACTOR = 4
BCRYPT_MAX_WORK_FACTOR = 31
BCRYPT_MAX_PASSWORD_BYTES = 72
BCRYPT_SALT_LEN = 16


class Algorithm(enum.Enum):
    ARGON2 = "argon2"
    BCRYPT = "bcrypt"


@dataclass(frozen=True)
class Argon2Params:
    time_cost: int = ARGON2_DEFAULT_TIME_COST
    memory_cost: int = ARGON2_DEFAULT_MEMORY_COST
    parallelism: int = ARGON2_DEFAULT_PARALLELISM


@dataclass(frozen=True)
class BcryptParams:
    work_factor: int = BCRYPT_DEFAULT_WORK_FACTOR


HashParams = Union[Argon2Params, BcryptParams]


@dataclass(frozen=True)
class HashRequest:
    password: str
    algorithm: Algorithm
    options: Optional[dict[str, Any]] = None


@dataclass(frozen=True)
class VerifyRequest:
    hash: str
    password: str


@dataclass(frozen=True)
class DecodedHash:
    """Parts recovered from an encoded hash string.

    ``algorithm_id`` is the literal tag found in the string (``argon2id``,
    ``2b``...), ``version`` is only meaningful for Argon2.
    """

    algorithm_id: str
    params: HashParams
    salt: bytes = field(repr=False)
    digest: bytes = field(repr=False)
    version: Optional[int] = None

    @property
    def algorithm(self) -> Algorithm:
        if isinstance(self.params, Argon2Params):
            return Algorithm.ARGON2
        return Algorithm.BCRYPT
