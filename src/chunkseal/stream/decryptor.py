"""Chunked streaming decryption (decrypt-on-read)."""
from __future__ import annotations

import io
import logging
from typing import Optional, Protocol

from cryptography.exceptions import InvalidTag

from chunkseal.crypto.aead import AeadCipher, AeadKey
from chunkseal.crypto.nonce import MAX_CHUNK_INDEX, derive_nonce
from chunkseal.errors import (
    IntegrityError,
    NonceExhaustedError,
    StreamFailedError,
    TruncatedStreamError,
)
from chunkseal.stream.params import StreamParameters

logger = logging.getLogger(__name__)


class BinarySource(Protocol):
    def read(self, size: int, /) -> Optional[bytes]: ...


class StreamingDecryptorSetup:
    """Validated configuration waiting for a source and a key."""

    def __init__(self, params: StreamParameters) -> None:
        self.params = params

    def start(self, source: BinarySource, key: AeadKey) -> StreamingDecryptor:
        self.params.check_key(key)
        return StreamingDecryptor(source, key, self.params)


class StreamingDecryptor(io.RawIOBase):
    """Read-only file object yielding the plaintext of a framed stream.

    Frames are pulled from ``source`` one at a time and authenticated before
    any of their bytes are handed out. A frame shorter than the full frame
    size is only accepted as the last one. Authentication, framing and
    transport errors are fatal: the decryptor refuses further reads.

    Closing the decryptor does not close ``source``.
    """

    def __init__(self, source: BinarySource, key: AeadKey, params: StreamParameters) -> None:
        super().__init__()
        params.check_key(key)
        self._source = source
        self._params = params
        self._cipher = AeadCipher(key)
        self._frame_size = params.frame_size
        self._tag_size = params.tag_size
        self._plaintext = b""
        self._pos = 0
        self._index = 0
        self._eof = False
        self._failure: Optional[Exception] = None

    @property
    def params(self) -> StreamParameters:
        return self._params

    @property
    def chunks_read(self) -> int:
        return self._index

    @property
    def eof(self) -> bool:
        """True once the source is exhausted and every chunk has been served."""
        return self._eof and self._pos >= len(self._plaintext)

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:  # type: ignore[override]
        if self.closed:
            raise ValueError("I/O operation on closed file.")
        out = memoryview(buffer).cast("B")
        if not out:
            return 0

        while self._pos >= len(self._plaintext):
            if self._failure is not None:
                raise StreamFailedError("Decryptor is unusable after an earlier error") from self._failure
            if self._eof:
                return 0
            self._next_chunk()

        count = min(len(out), len(self._plaintext) - self._pos)
        out[:count] = self._plaintext[self._pos : self._pos + count]
        self._pos += count
        return count

    def close(self) -> None:
        self._plaintext = b""
        self._pos = 0
        super().close()

    def _read_frame(self) -> bytearray:
        frame = bytearray()
        while len(frame) < self._frame_size:
            try:
                data = self._source.read(self._frame_size - len(frame))
            except InterruptedError:
                continue
            if data is None:
                raise BlockingIOError("Source has no data available; a blocking source is required")
            if not data:
                break
            frame += data
        return frame

    def _next_chunk(self) -> None:
        try:
            frame = self._read_frame()
            if not frame:
                self._eof = True
                self._plaintext = b""
                self._pos = 0
                logger.debug("Streaming decryption reached end of stream (%d chunks)", self._index)
                return
            final = len(frame) < self._frame_size
            plaintext = self._open_frame(frame, final=final)
        except Exception as exc:
            self._failure = exc
            self._plaintext = b""
            self._pos = 0
            raise

        self._plaintext = plaintext
        self._pos = 0
        self._index += 1
        if final:
            self._eof = True
            logger.debug("Streaming decryption consumed short final chunk %d", self._index - 1)

    def _open_frame(self, frame: bytearray, *, final: bool) -> bytes:
        index = self._index
        if len(frame) <= self._tag_size:
            raise TruncatedStreamError(
                f"Chunk {index} truncated: {len(frame)} bytes cannot hold a {self._tag_size}-byte tag",
            )
        if index > MAX_CHUNK_INDEX:
            raise NonceExhaustedError("Chunk counter exhausted for this base nonce")

        nonce = derive_nonce(self._params.base_nonce, index)
        try:
            return self._cipher.decrypt(frame, nonce, self._params.aad)
        except InvalidTag as exc:
            logger.debug("Authentication failed for chunk %d (final=%s)", index, final)
            if final:
                raise TruncatedStreamError(
                    f"Final chunk {index} failed authentication; stream truncated or corrupted",
                ) from exc
            raise IntegrityError(f"Chunk {index} failed integrity check") from exc


__all__ = [
    "BinarySource",
    "StreamingDecryptor",
    "StreamingDecryptorSetup",
]
