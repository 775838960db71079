"""Stream parameters shared by the encryptor and decryptor."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from chunkseal.crypto.aead import AeadAlgorithm, AeadKey
from chunkseal.crypto.nonce import COUNTER_LEN
from chunkseal.errors import InvalidKeyTypeError, InvalidParametersError

DEFAULT_CHUNK_SIZE = 64 * 1024
MIN_CHUNK_SIZE = 1
MAX_CHUNK_SIZE = 2**32 - 1
STREAM_READ_SIZE = 64 * 1024


def resolve_chunk_size(chunk_size: int | None = None) -> int:
    """Return a validated chunk size, falling back to the default."""
    if chunk_size is None:
        return DEFAULT_CHUNK_SIZE
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int):
        raise InvalidParametersError("Chunk size must be an integer")
    if not (MIN_CHUNK_SIZE <= chunk_size <= MAX_CHUNK_SIZE):
        raise InvalidParametersError(
            f"Chunk size must be between {MIN_CHUNK_SIZE} and {MAX_CHUNK_SIZE} bytes",
        )
    return chunk_size


@dataclass(frozen=True)
class StreamParameters:
    """Framing parameters fixed for the lifetime of one stream.

    ``base_nonce`` must never be reused with the same key: every chunk nonce
    is derived from it.
    """

    algorithm: AeadAlgorithm
    chunk_size: int
    base_nonce: bytes
    aad: Optional[bytes] = None

    def __post_init__(self) -> None:
        if not isinstance(self.algorithm, AeadAlgorithm):
            raise InvalidParametersError("Unknown stream algorithm")
        resolve_chunk_size(self.chunk_size)
        if not isinstance(self.base_nonce, bytes):
            raise InvalidParametersError("Base nonce must be bytes")
        if len(self.base_nonce) != self.algorithm.nonce_size:
            raise InvalidParametersError(
                f"Base nonce must be {self.algorithm.nonce_size} bytes for "
                f"{self.algorithm.value}, got {len(self.base_nonce)}"
            )
        if len(self.base_nonce) < COUNTER_LEN:  # pragma: no cover - all algorithms use 12 bytes
            raise InvalidParametersError("Base nonce too short for chunk counter")
        if self.aad is not None and not isinstance(self.aad, bytes):
            raise InvalidParametersError("Associated data must be bytes")

    @classmethod
    def generate(
        cls,
        algorithm: AeadAlgorithm,
        *,
        chunk_size: int | None = None,
        aad: bytes | None = None,
    ) -> StreamParameters:
        """Build parameters with a fresh random base nonce."""
        return cls(
            algorithm=algorithm,
            chunk_size=resolve_chunk_size(chunk_size),
            base_nonce=os.urandom(algorithm.nonce_size),
            aad=aad,
        )

    def check_key(self, key: AeadKey) -> None:
        if not isinstance(key, AeadKey):
            raise InvalidKeyTypeError("Stream key must be an AeadKey")
        if key.algorithm is not self.algorithm:
            raise InvalidKeyTypeError(
                f"Key is for {key.algorithm.value}, stream uses {self.algorithm.value}",
            )

    @property
    def tag_size(self) -> int:
        return self.algorithm.tag_size

    @property
    def frame_size(self) -> int:
        return self.chunk_size + self.algorithm.tag_size

    def chunk_count(self, plaintext_length: int) -> int:
        if plaintext_length < 0:
            raise ValueError("Plaintext length must be non-negative")
        return -(-plaintext_length // self.chunk_size)

    def ciphertext_length(self, plaintext_length: int) -> int:
        """Exact size of the framed output for ``plaintext_length`` bytes."""
        return plaintext_length + self.chunk_count(plaintext_length) * self.algorithm.tag_size


__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "MAX_CHUNK_SIZE",
    "MIN_CHUNK_SIZE",
    "STREAM_READ_SIZE",
    "StreamParameters",
    "resolve_chunk_size",
]
