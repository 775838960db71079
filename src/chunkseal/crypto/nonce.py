"""Per-chunk nonce derivation."""

from __future__ import annotations

NONCE_SCHEME_VERSION = 1
COUNTER_LEN = 8
MAX_CHUNK_INDEX = 2 ** (COUNTER_LEN * 8) - 1


def derive_nonce(base_nonce: bytes, index: int) -> bytes:
    """Mix a chunk index into the base nonce.

    The big-endian 64-bit ``index`` is XORed into the trailing eight bytes of
    ``base_nonce``. For a fixed base nonce this is a bijection over the index
    range, so no two chunks of one stream share a nonce.
    """

    if len(base_nonce) < COUNTER_LEN:
        raise ValueError(f"Base nonce must be at least {COUNTER_LEN} bytes, got {len(base_nonce)}")
    if not 0 <= index <= MAX_CHUNK_INDEX:
        raise ValueError(f"Chunk index {index} out of range")

    prefix_len = len(base_nonce) - COUNTER_LEN
    tail = int.from_bytes(base_nonce[prefix_len:], "big") ^ index
    return bytes(base_nonce[:prefix_len]) + tail.to_bytes(COUNTER_LEN, "big")


__all__ = ["COUNTER_LEN", "MAX_CHUNK_INDEX", "NONCE_SCHEME_VERSION", "derive_nonce"]
