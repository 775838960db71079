"""AEAD algorithms and typed keys backed by ``cryptography``.

Every algorithm here uses a 12-byte nonce and a 16-byte tag, and produces
``ciphertext || tag`` as a single byte string.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from cryptography.hazmat.primitives.ciphers.aead import AESGCM, ChaCha20Poly1305

from chunkseal.errors import InvalidParametersError, UnsupportedFeatureError

TAG_LEN = 16
NONCE_LEN = 12

BytesLike = Union[bytes, bytearray, memoryview]


class AeadAlgorithm(Enum):
    AES_128_GCM = "aes-128-gcm"
    AES_256_GCM = "aes-256-gcm"
    CHACHA20_POLY1305 = "chacha20-poly1305"

    @property
    def key_size(self) -> int:
        return _KEY_SIZES[self]

    @property
    def nonce_size(self) -> int:
        return NONCE_LEN

    @property
    def tag_size(self) -> int:
        return TAG_LEN

    @classmethod
    def from_name(cls, name: str) -> AeadAlgorithm:
        """Resolve an algorithm from its canonical name (case-insensitive)."""

        normalized = name.strip().lower().replace("_", "-")
        for algorithm in cls:
            if algorithm.value == normalized:
                return algorithm
        raise UnsupportedFeatureError(f"Unsupported AEAD algorithm: {name!r}")

    def cipher(self, key: bytes) -> Union[AESGCM, ChaCha20Poly1305]:
        if self is AeadAlgorithm.CHACHA20_POLY1305:
            return ChaCha20Poly1305(key)
        return AESGCM(key)


_KEY_SIZES = {
    AeadAlgorithm.AES_128_GCM: 16,
    AeadAlgorithm.AES_256_GCM: 32,
    AeadAlgorithm.CHACHA20_POLY1305: 32,
}


@dataclass(frozen=True)
class AeadKey:
    """Symmetric key bound to the algorithm it was generated for."""

    algorithm: AeadAlgorithm
    material: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if len(self.material) != self.algorithm.key_size:
            raise InvalidParametersError(
                f"{self.algorithm.value} requires a {self.algorithm.key_size}-byte key, "
                f"got {len(self.material)}"
            )

    @classmethod
    def generate(cls, algorithm: AeadAlgorithm) -> AeadKey:
        return cls(algorithm, os.urandom(algorithm.key_size))


class AeadCipher:
    """Keyed AEAD instance reused for every chunk of one stream.

    ``decrypt`` raises :class:`cryptography.exceptions.InvalidTag` on
    authentication failure; callers translate it into their own error.
    """

    def __init__(self, key: AeadKey) -> None:
        self.algorithm = key.algorithm
        self._cipher = key.algorithm.cipher(key.material)

    @property
    def tag_size(self) -> int:
        return self.algorithm.tag_size

    @property
    def nonce_size(self) -> int:
        return self.algorithm.nonce_size

    def encrypt(self, plaintext: BytesLike, nonce: bytes, aad: Optional[bytes]) -> bytes:
        return self._cipher.encrypt(nonce, plaintext, aad)

    def decrypt(self, ciphertext: BytesLike, nonce: bytes, aad: Optional[bytes]) -> bytes:
        return self._cipher.decrypt(nonce, ciphertext, aad)


__all__ = [
    "AeadAlgorithm",
    "AeadCipher",
    "AeadKey",
    "NONCE_LEN",
    "TAG_LEN",
]
