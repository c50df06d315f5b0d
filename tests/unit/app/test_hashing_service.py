"""Unit tests for HashingService: dispatch, resolution, verification, rehash."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from application.services.hashing_service import HashingService
from domain.exceptions import (
    AlgorithmMismatchError,
    MalformedHashError,
    OutOfRangeError,
    ParameterError,
    WrongTypeError,
)
from domain.models.hashing import Algorithm, Argon2Params, HashRequest, VerifyRequest
from domain.services.parameter_resolver import ParameterResolver
from infrastructure.hashing.argon2_engine import Argon2Engine
from infrastructure.hashing.bcrypt_engine import BcryptEngine

FAST_ARGON2_OPTIONS = {"time_cost": 1, "memory_cost": 1024, "parallelism": 1}


class TestConstruction:
    def test_engines_must_match_their_slot(self, resolver: ParameterResolver) -> None:
        with pytest.raises(ValueError):
            HashingService(
                resolver=resolver,
                argon2_engine=BcryptEngine(),
                bcrypt_engine=Argon2Engine(),
            )


class TestHashPassword:
    def test_argon2_example(self, hashing_service: HashingService) -> None:
        encoded = hashing_service.hash_password(
            HashRequest(
                password="S3cret!",
                algorithm=Algorithm.ARGON2,
                options={"time_cost": 2, "memory_cost": 19456, "parallelism": 1},
            )
        )
        assert encoded.startswith("$argon2id$v=19$m=19456,t=2,p=1$")
        verify = lambda pw: hashing_service.verify_password(  # noqa: E731
            Algorithm.ARGON2, VerifyRequest(hash=encoded, password=pw)
        )
        assert verify("S3cret!") is True
        assert verify("wrong") is False

    def test_bcrypt_example(self, hashing_service: HashingService) -> None:
        encoded = hashing_service.hash_password(
            HashRequest(password="abc", algorithm=Algorithm.BCRYPT, options={"work_factor": 12})
        )
        assert encoded.startswith("$2b$12$")
        assert hashing_service.verify_password(
            Algorithm.BCRYPT, VerifyRequest(hash=encoded, password="abc")
        )

    def test_defaults_come_from_resolver(self, hashing_service: HashingService) -> None:
        encoded = hashing_service.hash_password(
            HashRequest(password="abc", algorithm=Algorithm.BCRYPT)
        )
        assert encoded.startswith("$2b$04$")

    def test_empty_password_rejected(self, hashing_service: HashingService) -> None:
        with pytest.raises(ParameterError) as exc_info:
            hashing_service.hash_password(HashRequest(password="", algorithm=Algorithm.ARGON2))
        assert exc_info.value.field == "password"

    def test_out_of_range_is_not_clamped(self, hashing_service: HashingService) -> None:
        with pytest.raises(OutOfRangeError):
            hashing_service.hash_password(
                HashRequest(password="abc", algorithm=Algorithm.BCRYPT, options={"work_factor": 40})
            )

    def test_parallelism_zero(self, hashing_service: HashingService) -> None:
        with pytest.raises(OutOfRangeError) as exc_info:
            hashing_service.hash_password(
                HashRequest(password="abc", algorithm=Algorithm.ARGON2, options={"parallelism": 0})
            )
        assert exc_info.value.field == "parallelism"

    def test_wrong_type(self, hashing_service: HashingService) -> None:
        with pytest.raises(WrongTypeError):
            hashing_service.hash_password(
                HashRequest(password="abc", algorithm=Algorithm.ARGON2, options={"time_cost": "2"})
            )

    def test_logs_parameters_but_not_secrets(self, hashing_service: HashingService) -> None:
        with capture_logs() as logs:
            encoded = hashing_service.hash_password(
                HashRequest(
                    password="hunter2", algorithm=Algorithm.ARGON2, options=FAST_ARGON2_OPTIONS
                )
            )
        event = next(e for e in logs if e["event"] == "password_hashed")
        assert event["algorithm"] == "argon2"
        assert event["time_cost"] == 1
        assert "hunter2" not in str(logs)
        assert encoded not in str(logs)

    def test_rejection_is_logged(self, hashing_service: HashingService) -> None:
        with capture_logs() as logs:
            with pytest.raises(OutOfRangeError):
                hashing_service.hash_password(
                    HashRequest(
                        password="abc", algorithm=Algorithm.BCRYPT, options={"work_factor": 3}
                    )
                )
        assert logs[-1]["event"] == "hash_rejected"
        assert logs[-1]["field"] == "work_factor"


class TestVerifyPassword:
    def test_cross_algorithm_isolation(self, hashing_service: HashingService) -> None:
        bcrypt_hash = hashing_service.hash_password(
            HashRequest(password="abc", algorithm=Algorithm.BCRYPT)
        )
        with pytest.raises(AlgorithmMismatchError):
            hashing_service.verify_password(
                Algorithm.ARGON2, VerifyRequest(hash=bcrypt_hash, password="abc")
            )

    def test_malformed_hash_is_error_not_false(self, hashing_service: HashingService) -> None:
        with capture_logs() as logs:
            with pytest.raises(MalformedHashError):
                hashing_service.verify_password(
                    Algorithm.BCRYPT, VerifyRequest(hash="garbage", password="abc")
                )
        assert logs[-1]["event"] == "decode_failed"

    def test_verification_survives_default_changes(
        self, argon2_engine: Argon2Engine, bcrypt_engine: BcryptEngine
    ) -> None:
        old = HashingService(
            resolver=ParameterResolver(),
            argon2_engine=argon2_engine,
            bcrypt_engine=bcrypt_engine,
        )
        encoded = old.hash_password(
            HashRequest(password="pw", algorithm=Algorithm.ARGON2, options=FAST_ARGON2_OPTIONS)
        )
        new = HashingService(
            resolver=ParameterResolver(argon2_defaults=Argon2Params(time_cost=4)),
            argon2_engine=argon2_engine,
            bcrypt_engine=bcrypt_engine,
        )
        assert new.verify_password(Algorithm.ARGON2, VerifyRequest(hash=encoded, password="pw"))


class TestNeedsRehash:
    def test_current_hash(self, hashing_service: HashingService) -> None:
        encoded = hashing_service.hash_password(
            HashRequest(password="pw", algorithm=Algorithm.BCRYPT)
        )
        assert hashing_service.needs_rehash(Algorithm.BCRYPT, encoded) is False

    def test_stronger_target(self, hashing_service: HashingService) -> None:
        encoded = hashing_service.hash_password(
            HashRequest(password="pw", algorithm=Algorithm.BCRYPT)
        )
        assert hashing_service.needs_rehash(Algorithm.BCRYPT, encoded, {"work_factor": 5}) is True

    def test_foreign_hash(self, hashing_service: HashingService) -> None:
        encoded = hashing_service.hash_password(
            HashRequest(password="pw", algorithm=Algorithm.BCRYPT)
        )
        with pytest.raises(AlgorithmMismatchError):
            hashing_service.needs_rehash(Algorithm.ARGON2, encoded)
