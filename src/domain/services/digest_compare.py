from __future__ import annotations

import hmac


def digests_match(expected: bytes, actual: bytes) -> bool:
    """Compare two digests in constant time.

    Running time does not depend on the position of the first differing
    byte.  Never replace with ``==``.
    """
    return hmac.compare_digest(expected, actual)
