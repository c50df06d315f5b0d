from __future__ import annotations

import secrets
from typing import Callable

# Returns *n* unpredictable bytes.  Tests inject deterministic factories.
SaltFactory = Callable[[int], bytes]


def system_salt(length: int) -> bytes:
    """Draw *length* bytes from the operating system CSPRNG."""
    return secrets.token_bytes(length)
