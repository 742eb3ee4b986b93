"""
Signature matcher: does topic 0 identify the target event kind?
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


def matches_signature(topics: Sequence[Any], signature: bytes) -> bool:
    """
    Compare topic 0 against the 32-byte event signature hash.

    Empty topic lists (anonymous events) and non-bytes topics are non-matches.
    """
    if not topics:
        return False
    topic0 = topics[0]
    if not isinstance(topic0, (bytes, bytearray)):
        return False
    return bytes(topic0) == signature
