"""Shared fixtures for unit tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure src is importable
sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from application.services.hashing_service import HashingService
from domain.models.hashing import Argon2Params, BcryptParams
from domain.services.parameter_resolver import ParameterResolver
from infrastructure.hashing.argon2_engine import Argon2Engine
from infrastructure.hashing.bcrypt_engine import BcryptEngine

# Low costs keep the suite fast; they are still valid parameter sets.
FAST_ARGON2 = Argon2Params(time_cost=1, memory_cost=1024, parallelism=1)
FAST_BCRYPT = BcryptParams(work_factor=4)


@pytest.fixture
def argon2_engine() -> Argon2Engine:
    return Argon2Engine()


@pytest.fixture
def bcrypt_engine() -> BcryptEngine:
    return BcryptEngine()


@pytest.fixture
def resolver() -> ParameterResolver:
    return ParameterResolver(argon2_defaults=FAST_ARGON2, bcrypt_defaults=FAST_BCRYPT)


@pytest.fixture
def hashing_service(
    resolver: ParameterResolver,
    argon2_engine: Argon2Engine,
    bcrypt_engine: BcryptEngine,
) -> HashingService:
    return HashingService(
        resolver=resolver,
        argon2_engine=argon2_engine,
        bcrypt_engine=bcrypt_engine,
    )
