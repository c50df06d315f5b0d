"""Tests for src/domain/exceptions/hashing_exceptions.py"""

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


class TestDomainError:
    def test_default_attributes(self):
        exc = DomainError("something went wrong")
        assert exc.detail == "something went wrong"
        assert exc.title == "Domain Error"
        assert exc.status_code == 400
        assert exc.error_type == "about:blank"

    def test_custom_attributes(self):
        exc = DomainError(
            "custom",
            title="Custom",
            status_code=422,
            error_type="urn:custom",
        )
        assert exc.title == "Custom"
        assert exc.status_code == 422
        assert exc.error_type == "urn:custom"

    def test_is_exception(self):
        assert issubclass(DomainError, Exception)


class TestParameterErrors:
    def test_out_of_range_attributes(self):
        exc = OutOfRangeError("work_factor", 40, "4..31")
        assert exc.field == "work_factor"
        assert exc.value == 40
        assert exc.status_code == 400
        assert exc.title == "Invalid Hash Option"
        assert "work_factor" in exc.detail
        assert "40" in exc.detail

    def test_wrong_type_names_received_type(self):
        exc = WrongTypeError("time_cost", "2")
        assert exc.field == "time_cost"
        assert "expected integer, got str" in exc.detail

    def test_hierarchy(self):
        assert issubclass(OutOfRangeError, ParameterError)
        assert issubclass(WrongTypeError, ParameterError)
        assert issubclass(ParameterError, DomainError)


class TestDecodeErrors:
    def test_malformed_is_decode_error(self):
        exc = MalformedHashError("bad base64")
        assert isinstance(exc, DecodeError)
        assert exc.reason == "bad base64"
        assert exc.status_code == 400
        assert exc.title == "Invalid Hash"

    def test_algorithm_mismatch_names_both_sides(self):
        exc = AlgorithmMismatchError("argon2", "2b")
        assert isinstance(exc, MalformedHashError)
        assert exc.expected == "argon2"
        assert exc.found == "2b"
        assert "argon2" in exc.detail
        assert "2b" in exc.detail

    def test_decode_error_is_not_parameter_error(self):
        assert not issubclass(DecodeError, ParameterError)


class TestComputationError:
    def test_attributes(self):
        exc = ComputationError("argon2", "Memory allocation error")
        assert exc.algorithm == "argon2"
        assert exc.status_code == 500
        assert exc.title == "Hash Failed"
        assert "Memory allocation error" in exc.detail
