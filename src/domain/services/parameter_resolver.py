"""Merge caller-supplied hash options with defaults and validate them.

Options arrive as a sparse, untrusted mapping (usually decoded JSON).  Missing
fields fall back to the configured defaults, present fields must be plain
integers inside the algorithm's bounds, and unknown keys are ignored so older
services keep accepting requests from newer clients.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import fields
from typing import Any

from domain.exceptions import OutOfRangeError, WrongTypeError
from domain.models.hashing import (
    BCRYPT_MAX_WORK_FACTOR,
    BCRYPT_MIN_WORK_FACTOR,
    Algorithm,
    Argon2Params,
    BcryptParams,
    HashParams,
)

logger = logging.getLogger(__name__)

# Argon2 reference implementation limits.
ARGON2_MAX_TIME_COST = 2**32 - 1
ARGON2_MAX_MEMORY_COST = 2**32 - 1
ARGON2_MAX_PARALLELISM = 2**24 - 1
ARGON2_MIN_MEMORY_PER_LANE = 8


def _check_range(name: str, value: int, low: int, high: int) -> None:
    if not low <= value <= high:
        raise OutOfRangeError(name, value, f"{low}..{high}")


def validate_argon2(params: Argon2Params) -> Argon2Params:
    _check_range("time_cost", params.time_cost, 1, ARGON2_MAX_TIME_COST)
    _check_range("parallelism", params.parallelism, 1, ARGON2_MAX_PARALLELISM)
    min_memory = ARGON2_MIN_MEMORY_PER_LANE * params.parallelism
    _check_range("memory_cost", params.memory_cost, min_memory, ARGON2_MAX_MEMORY_COST)
    return params


def validate_bcrypt(params: BcryptParams) -> BcryptParams:
    _check_range(
        "work_factor", params.work_factor, BCRYPT_MIN_WORK_FACTOR, BCRYPT_MAX_WORK_FACTOR
    )
    return params


class ParameterResolver:
    """Produce validated :class:`Argon2Params` / :class:`BcryptParams`."""

    def __init__(
        self,
        argon2_defaults: Argon2Params | None = None,
        bcrypt_defaults: BcryptParams | None = None,
    ) -> None:
        self._defaults: dict[Algorithm, HashParams] = {
            Algorithm.ARGON2: validate_argon2(argon2_defaults or Argon2Params()),
            Algorithm.BCRYPT: validate_bcrypt(bcrypt_defaults or BcryptParams()),
        }

    def defaults(self, algorithm: Algorithm) -> HashParams:
        return self._defaults[algorithm]

    def resolve(self, algorithm: Algorithm, raw_options: Any = None) -> HashParams:
        defaults = self._defaults[algorithm]
        if raw_options is None:
            return defaults
        if not isinstance(raw_options, Mapping):
            raise WrongTypeError("options", raw_options, expected="object")

        known = [f.name for f in fields(defaults)]
        ignored = sorted(str(key) for key in raw_options if key not in known)
        if ignored:
            logger.debug("Ignoring unknown %s options: %s", algorithm.value, ", ".join(ignored))

        merged: dict[str, int] = {}
        for name in known:
            value = raw_options.get(name, getattr(defaults, name))
            # bool is an int subclass but never a meaningful cost.
            if isinstance(value, bool) or not isinstance(value, int):
                raise WrongTypeError(name, value)
            merged[name] = value

        if algorithm is Algorithm.ARGON2:
            return validate_argon2(Argon2Params(**merged))
        return validate_bcrypt(BcryptParams(**merged))
