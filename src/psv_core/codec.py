"""PSV Strip - Sidecar payload codec.

Payloads are stored as lowercase hex, grouped in 30-byte runs separated by
``|``. That is ``xxd -p`` output with its line breaks folded into pipes, so
sidecars produced by the older shell tooling decode unchanged.
"""
from __future__ import annotations

import string

GROUP_BYTES = 30
GROUP_SEP = "|"

_HEX_DIGITS = frozenset(string.hexdigits)


def encode_payload(payload: bytes) -> str:
    """Encode bytes as a single-line text token."""
    h = bytes(payload).hex()
    step = GROUP_BYTES * 2
    return GROUP_SEP.join(h[i:i + step] for i in range(0, len(h), step))


def decode_payload(token: str) -> bytes:
    """Decode a token produced by encode_payload (or by xxd -p | tr '\\n' '|')."""
    digits = "".join(token.replace(GROUP_SEP, " ").split())
    bad = set(digits) - _HEX_DIGITS
    if bad:
        raise ValueError(f"non-hex characters in payload: {''.join(sorted(bad))!r}")
    if len(digits) % 2:
        raise ValueError(f"odd number of hex digits in payload ({len(digits)})")
    return bytes.fromhex(digits)
