from domain.models.hashing import (
    Algorithm,
    Argon2Params,
    BcryptParams,
    DecodedHash,
    HashParams,
    HashRequest,
    VerifyRequest,
)

__all__ = [
    "Algorithm",
    "Argon2Params",
    "BcryptParams",
    "DecodedHash",
    "HashParams",
    "HashRequest",
    "VerifyRequest",
]
