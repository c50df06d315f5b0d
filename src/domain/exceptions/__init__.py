from domain.exceptions.hashing_exceptions import (
    AlgorithmMismatchError,
    ComputationError,
    DecodeError,
    DomainError,
    MalformedHashError,
    OutOfRangeError,
    ParameterError,
    WrongTypeError,
)

__all__ = [
    "AlgorithmMismatchError",
    "ComputationError",
    "DecodeError",
    "DomainError",
    "MalformedHashError",
    "OutOfRangeError",
    "ParameterError",
    "WrongTypeError",
]
