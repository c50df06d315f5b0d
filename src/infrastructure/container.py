"""Dependency injection container for the password hashing service.

Wires the parameter resolver, both hashing engines and the application
service, exposing factory functions suitable for FastAPI's ``Depends()``.
"""

from __future__ import annotations

from application.services.hashing_service import HashingService
from domain.models.hashing import Argon2Params, BcryptParams
from domain.services.parameter_resolver import ParameterResolver
from infrastructure.hashing.argon2_engine import Argon2Engine
from infrastructure.hashing.bcrypt_engine import BcryptEngine
from infrastructure.hashing.salt import SaltFactory, system_salt
from infrastructure.observability.logging_config import get_logger
from infrastructure.settings import AppSettings, get_settings

logger = get_logger(__name__)


class ServiceContainer:
    """Central DI container that owns all service instances.

    Building the container validates the configured hash defaults, so a bad
    deployment fails at startup rather than on the first request.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        salt_factory: SaltFactory = system_salt,
    ) -> None:
        self._settings = settings or get_settings()

        self.resolver = ParameterResolver(
            argon2_defaults=Argon2Params(
                time_cost=self._settings.argon2_time_cost,
                memory_cost=self._settings.argon2_memory_cost,
                parallelism=self._settings.argon2_parallelism,
            ),
            bcrypt_defaults=BcryptParams(work_factor=self._settings.bcrypt_work_factor),
        )

        self.argon2_engine = Argon2Engine(
            hash_len=self._settings.argon2_hash_len,
            salt_len=self._settings.argon2_salt_len,
            salt_factory=salt_factory,
        )
        self.bcrypt_engine = BcryptEngine(salt_factory=salt_factory)

        self.hashing_service = HashingService(
            resolver=self.resolver,
            argon2_engine=self.argon2_engine,
            bcrypt_engine=self.bcrypt_engine,
        )

        logger.info(
            "service_container_initialized",
            argon2_time_cost=self._settings.argon2_time_cost,
            argon2_memory_cost=self._settings.argon2_memory_cost,
            argon2_parallelism=self._settings.argon2_parallelism,
            bcrypt_work_factor=self._settings.bcrypt_work_factor,
        )

    @property
    def settings(self) -> AppSettings:
        return self._settings


# Module-level singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Return the global container singleton."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """Reset the global container (for testing)."""
    global _container
    _container = None


# ---------------------------------------------------------------------------
# FastAPI dependency factories
# ---------------------------------------------------------------------------


def get_hashing_service() -> HashingService:
    return get_container().hashing_service
