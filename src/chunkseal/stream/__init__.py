"""Public streaming API re-exported for external users.

The objects listed in ``__all__`` form the supported public surface.
Everything else in :mod:`chunkseal.stream` is considered internal and may
change without notice.
"""
from __future__ import annotations

from chunkseal.stream.api import decrypt_bytes, decrypt_stream, encrypt_bytes, encrypt_stream
from chunkseal.stream.decryptor import BinarySource, StreamingDecryptor, StreamingDecryptorSetup
from chunkseal.stream.encryptor import StreamingEncryptor, StreamingEncryptorSetup
from chunkseal.stream.params import (
    DEFAULT_CHUNK_SIZE,
    MAX_CHUNK_SIZE,
    MIN_CHUNK_SIZE,
    STREAM_READ_SIZE,
    StreamParameters,
    resolve_chunk_size,
)
from chunkseal.stream.sinks import BinarySink, write_all

__all__ = [
    "BinarySink",
    "BinarySource",
    "DEFAULT_CHUNK_SIZE",
    "MAX_CHUNK_SIZE",
    "MIN_CHUNK_SIZE",
    "STREAM_READ_SIZE",
    "StreamParameters",
    "StreamingDecryptor",
    "StreamingDecryptorSetup",
    "StreamingEncryptor",
    "StreamingEncryptorSetup",
    "decrypt_bytes",
    "decrypt_stream",
    "encrypt_bytes",
    "encrypt_stream",
    "resolve_chunk_size",
    "write_all",
]
