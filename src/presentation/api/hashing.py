"""Hash and verify endpoints, one set per supported algorithm.

Handlers are plain ``def`` functions: FastAPI runs them in its worker thread
pool, so a CPU-bound hash never blocks the event loop.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from application.services.hashing_service import HashingService
from domain.models.hashing import Algorithm, HashRequest, VerifyRequest
from infrastructure.container import get_hashing_service
from infrastructure.observability.metrics import observe_operation

from .schemas import ErrorResponse, HashBody, HashResponse, RehashBody, ResultResponse, VerifyBody

router = APIRouter(tags=["Hashing"])

_HASH_RESPONSES = {
    400: {"description": "Invalid option.", "model": ErrorResponse},
    422: {"description": "Validation error.", "model": ErrorResponse},
    500: {"description": "Hash computation failed.", "model": ErrorResponse},
}
_VERIFY_RESPONSES = {
    400: {"description": "Malformed or foreign hash.", "model": ErrorResponse},
    422: {"description": "Validation error.", "model": ErrorResponse},
}


def _hash(algorithm: Algorithm, body: HashBody, service: HashingService) -> HashResponse:
    request = HashRequest(
        password=body.password.get_secret_value(),
        algorithm=algorithm,
        options=body.options,
    )
    with observe_operation(algorithm.value, "hash"):
        encoded = service.hash_password(request)
    return HashResponse(hash=encoded)


def _verify(algorithm: Algorithm, body: VerifyBody, service: HashingService) -> ResultResponse:
    request = VerifyRequest(hash=body.hash, password=body.password.get_secret_value())
    with observe_operation(algorithm.value, "verify") as labels:
        result = service.verify_password(algorithm, request)
        if not result:
            labels["outcome"] = "mismatch"
    return ResultResponse(result=result)


def _needs_rehash(
    algorithm: Algorithm, body: RehashBody, service: HashingService
) -> ResultResponse:
    with observe_operation(algorithm.value, "needs_rehash"):
        result = service.needs_rehash(algorithm, body.hash, body.options)
    return ResultResponse(result=result)


# ---------------------------------------------------------------------------
# Argon2 (new hashes are always Argon2id)
# ---------------------------------------------------------------------------


@router.post(
    "/argon2/hash",
    response_model=HashResponse,
    summary="Hash a password with Argon2id",
    responses=_HASH_RESPONSES,
)
def argon2_hash(
    body: HashBody,
    service: HashingService = Depends(get_hashing_service),
) -> HashResponse:
    return _hash(Algorithm.ARGON2, body, service)


@router.post(
    "/argon2/verify",
    response_model=ResultResponse,
    summary="Verify a password against an Argon2 hash",
    responses=_VERIFY_RESPONSES,
)
def argon2_verify(
    body: VerifyBody,
    service: HashingService = Depends(get_hashing_service),
) -> ResultResponse:
    return _verify(Algorithm.ARGON2, body, service)


@router.post(
    "/argon2/needs-rehash",
    response_model=ResultResponse,
    summary="Check whether an Argon2 hash uses outdated parameters",
    responses=_VERIFY_RESPONSES,
)
def argon2_needs_rehash(
    body: RehashBody,
    service: HashingService = Depends(get_hashing_service),
) -> ResultResponse:
    return _needs_rehash(Algorithm.ARGON2, body, service)


# ---------------------------------------------------------------------------
# Bcrypt
# ---------------------------------------------------------------------------


@router.post(
    "/bcrypt/hash",
    response_model=HashResponse,
    summary="Hash a password with bcrypt",
    responses=_HASH_RESPONSES,
)
def bcrypt_hash(
    body: HashBody,
    service: HashingService = Depends(get_hashing_service),
) -> HashResponse:
    return _hash(Algorithm.BCRYPT, body, service)


@router.post(
    "/bcrypt/verify",
    response_model=ResultResponse,
    summary="Verify a password against a bcrypt hash",
    responses=_VERIFY_RESPONSES,
)
def bcrypt_verify(
    body: VerifyBody,
    service: HashingService = Depends(get_hashing_service),
) -> ResultResponse:
    return _verify(Algorithm.BCRYPT, body, service)


@router.post(
    "/bcrypt/needs-rehash",
    response_model=ResultResponse,
    summary="Check whether a bcrypt hash uses an outdated work factor",
    responses=_VERIFY_RESPONSES,
)
def bcrypt_needs_rehash(
    body: RehashBody,
    service: HashingService = Depends(get_hashing_service),
) -> ResultResponse:
    return _needs_rehash(Algorithm.BCRYPT, body, service)
