from __future__ import annotations

import os

import pytest
from cryptography.exceptions import InvalidTag

from chunkseal.crypto.aead import TAG_LEN, AeadAlgorithm, AeadCipher, AeadKey
from chunkseal.errors import InvalidParametersError, UnsupportedFeatureError


@pytest.mark.parametrize(
    ("algorithm", "key_size"),
    [
        (AeadAlgorithm.AES_128_GCM, 16),
        (AeadAlgorithm.AES_256_GCM, 32),
        (AeadAlgorithm.CHACHA20_POLY1305, 32),
    ],
)
def test_algorithm_sizes(algorithm: AeadAlgorithm, key_size: int) -> None:
    assert algorithm.key_size == key_size
    assert algorithm.nonce_size == 12
    assert algorithm.tag_size == TAG_LEN


@pytest.mark.parametrize("name", ["aes-256-gcm", "AES_256_GCM", " Aes-256-Gcm "])
def test_from_name(name: str) -> None:
    assert AeadAlgorithm.from_name(name) is AeadAlgorithm.AES_256_GCM


def test_from_name_rejects_unknown() -> None:
    with pytest.raises(UnsupportedFeatureError):
        AeadAlgorithm.from_name("xchacha20-poly1305")


def test_key_length_validated() -> None:
    with pytest.raises(InvalidParametersError):
        AeadKey(AeadAlgorithm.AES_256_GCM, os.urandom(16))


def test_key_repr_hides_material() -> None:
    key = AeadKey(AeadAlgorithm.AES_128_GCM, b"k" * 16)
    assert "kkkk" not in repr(key)
    assert "aes-128-gcm" in repr(key) or "AES_128_GCM" in repr(key)


def test_cipher_appends_tag(key: AeadKey) -> None:
    cipher = AeadCipher(key)
    nonce = os.urandom(cipher.nonce_size)
    sealed = cipher.encrypt(b"hello", nonce, b"aad")
    assert len(sealed) == 5 + cipher.tag_size
    assert cipher.decrypt(sealed, nonce, b"aad") == b"hello"


def test_cipher_accepts_memoryview(key: AeadKey) -> None:
    cipher = AeadCipher(key)
    nonce = os.urandom(cipher.nonce_size)
    data = bytearray(b"0123456789")
    sealed = cipher.encrypt(memoryview(data)[2:6], nonce, None)
    assert cipher.decrypt(sealed, nonce, None) == b"2345"


def test_cipher_rejects_wrong_aad(key: AeadKey) -> None:
    cipher = AeadCipher(key)
    nonce = os.urandom(cipher.nonce_size)
    sealed = cipher.encrypt(b"payload", nonce, b"one")
    with pytest.raises(InvalidTag):
        cipher.decrypt(sealed, nonce, b"two")
