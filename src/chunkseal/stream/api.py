"""Whole-stream helpers built on the chunk encryptor and decryptor."""
from __future__ import annotations

import io
from typing import IO

from chunkseal.crypto.aead import AeadKey
from chunkseal.stream.decryptor import StreamingDecryptorSetup
from chunkseal.stream.encryptor import StreamingEncryptorSetup
from chunkseal.stream.params import STREAM_READ_SIZE, StreamParameters
from chunkseal.stream.sinks import write_all


def encrypt_stream(
    in_file: IO[bytes],
    out_file: IO[bytes],
    key: AeadKey,
    params: StreamParameters,
    *,
    read_size: int = STREAM_READ_SIZE,
) -> int:
    """Encrypt everything readable from ``in_file`` into ``out_file``.

    Returns the number of plaintext bytes consumed.
    """

    if read_size <= 0:
        raise ValueError("read_size must be positive")

    encryptor = StreamingEncryptorSetup(params).start(out_file, key)
    total = 0
    while True:
        chunk = in_file.read(read_size)
        if chunk is None:
            raise BlockingIOError("Source has no data available; a blocking source is required")
        if not chunk:
            break
        total += encryptor.write(chunk)
    encryptor.finish()
    return total


def decrypt_stream(
    in_file: IO[bytes],
    out_file: IO[bytes],
    key: AeadKey,
    params: StreamParameters,
    *,
    read_size: int = STREAM_READ_SIZE,
) -> int:
    """Decrypt a framed stream from ``in_file`` into ``out_file``.

    Plaintext reaches ``out_file`` chunk by chunk, each one only after it has
    been authenticated. On error, earlier chunks may already have been written.
    Returns the number of plaintext bytes produced.
    """

    if read_size <= 0:
        raise ValueError("read_size must be positive")

    decryptor = StreamingDecryptorSetup(params).start(in_file, key)
    total = 0
    with decryptor:
        while True:
            chunk = decryptor.read(read_size)
            if not chunk:
                break
            write_all(out_file, chunk)
            total += len(chunk)
    out_file.flush()
    return total


def encrypt_bytes(data: bytes, key: AeadKey, params: StreamParameters) -> bytes:
    out = io.BytesIO()
    encryptor = StreamingEncryptorSetup(params).start(out, key)
    encryptor.write(data)
    encryptor.finish()
    return out.getvalue()


def decrypt_bytes(data: bytes, key: AeadKey, params: StreamParameters) -> bytes:
    with StreamingDecryptorSetup(params).start(io.BytesIO(data), key) as decryptor:
        return decryptor.readall()


__all__ = [
    "decrypt_bytes",
    "decrypt_stream",
    "encrypt_bytes",
    "encrypt_stream",
]
