"""
Pydantic v2 request/response schemas for the password hashing API.

Passwords are ``SecretStr`` so they never show up in reprs or validation
error payloads.  ``options`` is passed through untyped: the parameter
resolver owns type and range checks so that bad options surface as the same
400 problem regardless of the entry point.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class _ApiModel(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"$schema": "https://json-schema.org/draft/2020-12/schema"},
    )


# ---------------------------------------------------------------------------
# RFC 9457 Problem Details error response
# ---------------------------------------------------------------------------


class ErrorResponse(_ApiModel):
    """Error response following RFC 9457 Problem Details for HTTP APIs.

    See https://www.rfc-editor.org/rfc/rfc9457
    """

    type: str = Field(
        default="about:blank",
        description="A URI reference that identifies the problem type.",
        examples=["https://passhash.example/problems/invalid-option"],
    )
    title: str = Field(
        ...,
        description="A short, human-readable summary of the problem type.",
        examples=["Invalid Hash Option"],
    )
    status: int = Field(..., description="The HTTP status code.", examples=[400])
    detail: str = Field(
        ...,
        description="A human-readable explanation specific to this occurrence.",
        examples=["Invalid option 'parallelism': 0 is out of range (1..16777215)"],
    )
    instance: str | None = Field(
        default=None,
        description="The request path that produced the problem.",
        examples=["/argon2/hash"],
    )
    errors: list[dict[str, Any]] | None = Field(
        default=None,
        description="Validation error details (when status is 422).",
    )


# ---------------------------------------------------------------------------
# Hashing
# ---------------------------------------------------------------------------


class HashBody(_ApiModel):
    """Request body for ``POST /{algorithm}/hash``."""

    password: SecretStr = Field(..., min_length=1, description="Plaintext password.")
    options: dict[str, Any] | None = Field(
        default=None,
        description=(
            "Sparse cost parameters. Argon2: time_cost, memory_cost (KiB), "
            "parallelism. Bcrypt: work_factor. Unknown keys are ignored."
        ),
        examples=[{"time_cost": 2, "memory_cost": 19456, "parallelism": 1}],
    )


class HashResponse(_ApiModel):
    hash: str = Field(
        ...,
        description="Self-describing encoded hash.",
        examples=["$argon2id$v=19$m=19456,t=2,p=1$c2FsdHNhbHRzYWx0c2FsdA$..."],
    )


class VerifyBody(_ApiModel):
    """Request body for ``POST /{algorithm}/verify``."""

    hash: str = Field(..., description="Encoded hash previously issued by /hash.")
    password: SecretStr = Field(..., description="Plaintext password to check.")


class RehashBody(_ApiModel):
    """Request body for ``POST /{algorithm}/needs-rehash``."""

    hash: str = Field(..., description="Encoded hash to inspect.")
    options: dict[str, Any] | None = Field(
        default=None,
        description="Target parameters; omitted fields use the service defaults.",
    )


class ResultResponse(_ApiModel):
    result: bool = Field(..., description="Outcome of the check.")
