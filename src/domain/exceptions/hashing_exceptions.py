from __future__ import annotations

from typing import Any

PROBLEM_BASE = "https://passhash.example/problems"


class DomainError(Exception):
    """Base class for all domain-layer exceptions.

    Carries HTTP-mapping metadata so the presentation layer can produce
    RFC 9457 Problem Details without knowing exception internals.
    """

    def __init__(
        self,
        detail: str = "",
        *,
        title: str = "Domain Error",
        status_code: int = 400,
        error_type: str = "about:blank",
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.title = title
        self.status_code = status_code
        self.error_type = error_type


class ParameterError(DomainError):
    def __init__(self, field: str = "", reason: str = "invalid value") -> None:
        self.field = field
        self.reason = reason
        super().__init__(
            detail=f"Invalid option '{field}': {reason}",
            title="Invalid Hash Option",
            status_code=400,
            error_type=f"{PROBLEM_BASE}/invalid-option",
        )


class OutOfRangeError(ParameterError):
    def __init__(self, field: str = "", value: Any = None, bounds: str = "") -> None:
        self.value = value
        self.bounds = bounds
        super().__init__(field, f"{value!r} is out of range ({bounds})")


class WrongTypeError(ParameterError):
    def __init__(self, field: str = "", value: Any = None, expected: str = "integer") -> None:
        self.value = value
        self.expected = expected
        super().__init__(field, f"expected {expected}, got {type(value).__name__}")


class DecodeError(DomainError):
    def __init__(self, reason: str = "") -> None:
        self.reason = reason
        super().__init__(
            detail=f"Invalid hash: {reason}",
            title="Invalid Hash",
            status_code=400,
            error_type=f"{PROBLEM_BASE}/invalid-hash",
        )


class MalformedHashError(DecodeError):
    pass


class AlgorithmMismatchError(MalformedHashError):
    def __init__(self, expected: str = "", found: str = "") -> None:
        self.expected = expected
        self.found = found
        super().__init__(f"expected a {expected} hash, found '{found}'")


class ComputationError(DomainError):
    def __init__(self, algorithm: str = "", reason: str = "") -> None:
        self.algorithm = algorithm
        self.reason = reason
        super().__init__(
            detail=f"{algorithm} hash computation failed: {reason}",
            title="Hash Failed",
            status_code=500,
            error_type=f"{PROBLEM_BASE}/hash-failed",
        )
