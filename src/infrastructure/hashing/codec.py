"""
Canonical text encodings for password hashes.

Argon2 hashes use the PHC string format::

    $argon2id$v=19$m=19456,t=2,p=1$<salt>$<digest>

with standard base64 (no padding) for salt and digest.  bcrypt hashes use the
Modular Crypt Format::

    $2b$12$<22 char salt><31 char digest>

with bcrypt's own base64 alphabet.  Both are the formats produced by the
reference implementations, so hashes issued here stay verifiable by any
conforming library and vice versa.
"""

from __future__ import annotations

import base64
import binascii
import re

from domain.exceptions import (
    AlgorithmMismatchError,
    MalformedHashError,
    ParameterError,
)
from domain.models.hashing import (
    ARGON2_VERSION,
    BCRYPT_SALT_LEN,
    Algorithm,
    Argon2Params,
    BcryptParams,
    DecodedHash,
    HashParams,
)
from domain.services.parameter_resolver import validate_argon2, validate_bcrypt

ARGON2_VARIANTS = frozenset({"argon2i", "argon2d", "argon2id"})
ARGON2_VERSIONS = frozenset({0x10, 0x13})
ARGON2_MIN_SALT_LEN = 8
ARGON2_MIN_DIGEST_LEN = 4

BCRYPT_PREFIXES = frozenset({"2a", "2b", "2y"})
BCRYPT_DIGEST_LEN = 23

_ARGON2_PARAMS_RE = re.compile(r"^m=(\d+),t=(\d+),p=(\d+)$")
_ARGON2_VERSION_RE = re.compile(r"^v=(\d+)$")
_STD_B64_RE = re.compile(r"^[A-Za-z0-9+/]+$")
_BCRYPT_RE = re.compile(r"^\$(2[a-z])\$(\d{2})\$([./A-Za-z0-9]{22})([./A-Za-z0-9]{31})$")
_BCRYPT_TAG_RE = re.compile(r"^2[a-z]?$")

_STD_ALPHABET = b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_BCRYPT_ALPHABET = b"./ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
_TO_BCRYPT = bytes.maketrans(_STD_ALPHABET, _BCRYPT_ALPHABET)
_FROM_BCRYPT = bytes.maketrans(_BCRYPT_ALPHABET, _STD_ALPHABET)


# ======================================================================
# base64 helpers
# ======================================================================


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).rstrip(b"=").decode("ascii")


def _b64decode(text: str, what: str) -> bytes:
    if not _STD_B64_RE.match(text) or len(text) % 4 == 1:
        raise MalformedHashError(f"{what} is not valid base64")
    try:
        return base64.b64decode(text + "=" * (-len(text) % 4), validate=True)
    except binascii.Error as exc:
        raise MalformedHashError(f"{what} is not valid base64") from exc


def _bcrypt_b64encode(data: bytes) -> str:
    return base64.b64encode(data).rstrip(b"=").translate(_TO_BCRYPT).decode("ascii")


def _bcrypt_b64decode(text: str) -> bytes:
    raw = text.encode("ascii").translate(_FROM_BCRYPT)
    return base64.b64decode(raw + b"=" * (-len(raw) % 4))


# ======================================================================
# Encoding
# ======================================================================


def encode_password(password: str) -> bytes:
    """Return the UTF-8 bytes every engine hashes."""
    try:
        return password.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ParameterError("password", "must be valid UTF-8 text") from exc


def encode(
    algorithm_id: str,
    params: HashParams,
    salt: bytes,
    digest: bytes,
    *,
    version: int = ARGON2_VERSION,
) -> str:
    """Serialize hash parts into the canonical string for their algorithm."""
    if isinstance(params, Argon2Params):
        if algorithm_id not in ARGON2_VARIANTS:
            raise ValueError(f"not an argon2 variant: {algorithm_id!r}")
        return (
            f"${algorithm_id}$v={version}"
            f"$m={params.memory_cost},t={params.time_cost},p={params.parallelism}"
            f"${_b64encode(salt)}${_b64encode(digest)}"
        )

    if algorithm_id not in BCRYPT_PREFIXES:
        raise ValueError(f"not a bcrypt prefix: {algorithm_id!r}")
    if len(digest) != BCRYPT_DIGEST_LEN:
        raise ValueError(f"bcrypt digest must be {BCRYPT_DIGEST_LEN} bytes")
    return bcrypt_salt(algorithm_id, params.work_factor, salt).decode("ascii") + (
        _bcrypt_b64encode(digest)
    )


def bcrypt_salt(prefix: str, work_factor: int, salt: bytes) -> bytes:
    """Build the ``$2b$12$<salt>`` setting string ``bcrypt.hashpw`` expects."""
    if len(salt) != BCRYPT_SALT_LEN:
        raise ValueError(f"bcrypt salt must be {BCRYPT_SALT_LEN} bytes")
    return f"${prefix}${work_factor:02d}${_bcrypt_b64encode(salt)}".encode("ascii")


# ======================================================================
# Decoding
# ======================================================================


def detect_algorithm(encoded: str) -> Algorithm | None:
    """Return the algorithm family named by the leading tag, if any."""
    parts = encoded.split("$")
    if len(parts) < 2 or parts[0] != "":
        return None
    tag = parts[1]
    if tag.startswith("argon2"):
        return Algorithm.ARGON2
    if _BCRYPT_TAG_RE.match(tag):
        return Algorithm.BCRYPT
    return None


def decode(encoded: str, expected: Algorithm | None = None) -> DecodedHash:
    """Parse *encoded* back into its parts.

    When *expected* is given, a hash of another algorithm family raises
    :class:`AlgorithmMismatchError` instead of being parsed.
    """
    if not isinstance(encoded, str) or not encoded.isascii():
        raise MalformedHashError("hash must be an ASCII string")

    family = detect_algorithm(encoded)
    if family is None:
        raise MalformedHashError("unrecognised hash format")
    if expected is not None and family is not expected:
        raise AlgorithmMismatchError(expected.value, encoded.split("$")[1])

    if family is Algorithm.ARGON2:
        return _decode_argon2(encoded)
    return _decode_bcrypt(encoded)


def _decode_argon2(encoded: str) -> DecodedHash:
    parts = encoded.split("$")
    if len(parts) == 6:
        _, variant, version_part, params_part, salt_part, digest_part = parts
        match = _ARGON2_VERSION_RE.match(version_part)
        if not match:
            raise MalformedHashError("bad argon2 version segment")
        version = int(match.group(1))
    elif len(parts) == 5:
        # Hashes from before version 1.3 omit the version segment.
        _, variant, params_part, salt_part, digest_part = parts
        version = 0x10
    else:
        raise MalformedHashError("wrong number of argon2 segments")

    if variant not in ARGON2_VARIANTS:
        raise MalformedHashError(f"unsupported argon2 variant '{variant}'")
    if version not in ARGON2_VERSIONS:
        raise MalformedHashError(f"unsupported argon2 version {version}")

    match = _ARGON2_PARAMS_RE.match(params_part)
    if not match:
        raise MalformedHashError("bad argon2 parameter segment")
    memory_cost, time_cost, parallelism = (int(g) for g in match.groups())
    try:
        params = validate_argon2(
            Argon2Params(time_cost=time_cost, memory_cost=memory_cost, parallelism=parallelism)
        )
    except ParameterError as exc:
        raise MalformedHashError(f"stored parameter {exc.reason}") from exc

    salt = _b64decode(salt_part, "salt")
    digest = _b64decode(digest_part, "digest")
    if len(salt) < ARGON2_MIN_SALT_LEN:
        raise MalformedHashError("salt too short")
    if len(digest) < ARGON2_MIN_DIGEST_LEN:
        raise MalformedHashError("digest too short")

    return DecodedHash(
        algorithm_id=variant, params=params, salt=salt, digest=digest, version=version
    )


def _decode_bcrypt(encoded: str) -> DecodedHash:
    match = _BCRYPT_RE.match(encoded)
    if not match:
        raise MalformedHashError("bad bcrypt hash layout")
    prefix, cost, salt_part, digest_part = match.groups()
    if prefix not in BCRYPT_PREFIXES:
        raise MalformedHashError(f"unsupported bcrypt prefix '{prefix}'")
    try:
        params = validate_bcrypt(BcryptParams(work_factor=int(cost)))
    except ParameterError as exc:
        raise MalformedHashError(f"stored parameter {exc.reason}") from exc

    return DecodedHash(
        algorithm_id=prefix,
        params=params,
        salt=_bcrypt_b64decode(salt_part),
        digest=_bcrypt_b64decode(digest_part),
    )
