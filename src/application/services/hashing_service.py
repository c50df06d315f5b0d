"""Password hashing application service.

Resolves caller options into validated cost parameters, dispatches to the
engine registered for the requested algorithm and logs every operation.
Uses *argon2-cffi* and *bcrypt* through the engine adapters; the set of
algorithms is fixed by the :class:`~domain.models.hashing.Algorithm` enum.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Protocol

import structlog

from domain.exceptions import DecodeError, DomainError, ParameterError
from domain.models.hashing import Algorithm, HashParams, HashRequest, VerifyRequest
from domain.services.parameter_resolver import ParameterResolver

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Engine port
# ---------------------------------------------------------------------------


class HashEngine(Protocol):
    """Port: one password hashing algorithm."""

    algorithm: Algorithm

    def hash(self, password: str, params: Any) -> str: ...

    def verify(self, password: str, encoded: str) -> bool: ...

    def needs_rehash(self, encoded: str, params: Any) -> bool: ...


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class HashingService:
    """Orchestrates parameter resolution and the algorithm engines."""

    def __init__(
        self,
        *,
        resolver: ParameterResolver,
        argon2_engine: HashEngine,
        bcrypt_engine: HashEngine,
    ) -> None:
        self._resolver = resolver
        self._engines: dict[Algorithm, HashEngine] = {
            Algorithm.ARGON2: argon2_engine,
            Algorithm.BCRYPT: bcrypt_engine,
        }
        for algorithm, engine in self._engines.items():
            if engine.algorithm is not algorithm:
                raise ValueError(f"{type(engine).__name__} cannot serve {algorithm.value}")

    # ------------------------------------------------------------------
    # Hashing
    # ------------------------------------------------------------------

    def hash_password(self, request: HashRequest) -> str:
        """Return a freshly salted encoded hash for ``request.password``."""
        if not request.password:
            raise ParameterError("password", "must not be empty")

        try:
            params = self._resolver.resolve(request.algorithm, request.options)
        except ParameterError as exc:
            logger.warning(
                "hash_rejected",
                algorithm=request.algorithm.value,
                field=exc.field,
                reason=exc.reason,
            )
            raise

        encoded = self._engines[request.algorithm].hash(request.password, params)
        logger.info("password_hashed", algorithm=request.algorithm.value, **asdict(params))
        return encoded

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    def verify_password(self, algorithm: Algorithm, request: VerifyRequest) -> bool:
        """Check ``request.password`` against ``request.hash``.

        A mismatch is ``False``; a hash that cannot be decoded, or belongs to
        another algorithm, raises :class:`DecodeError`.
        """
        engine = self._engines[algorithm]
        try:
            result = engine.verify(request.password, request.hash)
        except DecodeError as exc:
            logger.warning("decode_failed", algorithm=algorithm.value, reason=exc.reason)
            raise
        logger.info("password_verified", algorithm=algorithm.value, result=result)
        return result

    def needs_rehash(
        self,
        algorithm: Algorithm,
        encoded: str,
        options: dict[str, Any] | None = None,
    ) -> bool:
        """Whether *encoded* was produced with something other than the current target."""
        params: HashParams = self._resolver.resolve(algorithm, options)
        try:
            return self._engines[algorithm].needs_rehash(encoded, params)
        except DomainError as exc:
            logger.warning("decode_failed", algorithm=algorithm.value, reason=exc.detail)
            raise
