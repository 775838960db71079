"""Chunked streaming encryption (encrypt-on-write)."""
from __future__ import annotations

import logging
from types import TracebackType
from typing import Literal, Optional, Type

from chunkseal.crypto.aead import AeadCipher, AeadKey
from chunkseal.crypto.nonce import MAX_CHUNK_INDEX, derive_nonce
from chunkseal.errors import NonceExhaustedError, StreamFinishedError
from chunkseal.stream.params import StreamParameters
from chunkseal.stream.sinks import BinarySink, BytesLike, write_all

logger = logging.getLogger(__name__)


def _zeroize(buffer: bytearray) -> None:
    for idx in range(len(buffer)):
        buffer[idx] = 0
    buffer.clear()


class StreamingEncryptorSetup:
    """Validated configuration waiting for a sink and a key."""

    def __init__(self, params: StreamParameters) -> None:
        self.params = params

    def start(self, sink: BinarySink, key: AeadKey) -> StreamingEncryptor:
        self.params.check_key(key)
        return StreamingEncryptor(sink, key, self.params)


class StreamingEncryptor:
    """Buffers plaintext and emits one ``ciphertext || tag`` frame per chunk.

    Full chunks are sealed as soon as they are available. The trailing partial
    chunk is only sealed by :meth:`finish`; an encryptor dropped without it
    silently loses that tail, in the same way an unclosed file may lose
    buffered writes. Using the encryptor as a context manager calls
    :meth:`finish` when the block exits cleanly.
    """

    def __init__(self, sink: BinarySink, key: AeadKey, params: StreamParameters) -> None:
        params.check_key(key)
        self._sink = sink
        self._params = params
        self._cipher = AeadCipher(key)
        self._chunk_size = params.chunk_size
        self._buffer = bytearray()
        self._index = 0
        self._finished = False
        logger.debug(
            "Streaming encryption started (algorithm=%s, chunk_size=%d)",
            params.algorithm.value,
            params.chunk_size,
        )

    @property
    def params(self) -> StreamParameters:
        return self._params

    @property
    def chunks_written(self) -> int:
        return self._index

    @property
    def bytes_buffered(self) -> int:
        return len(self._buffer)

    @property
    def finished(self) -> bool:
        return self._finished

    def writable(self) -> bool:
        return not self._finished

    def _ensure_open(self) -> None:
        if self._finished:
            raise StreamFinishedError("Encryptor already finished")

    def _seal(self, chunk: BytesLike) -> None:
        if self._index > MAX_CHUNK_INDEX:
            raise NonceExhaustedError("Chunk counter exhausted for this base nonce")
        nonce = derive_nonce(self._params.base_nonce, self._index)
        frame = self._cipher.encrypt(chunk, nonce, self._params.aad)
        write_all(self._sink, frame)
        self._index += 1

    def write(self, data: BytesLike) -> int:
        """Consume all of ``data``, emitting a frame for every completed chunk."""
        self._ensure_open()
        view = memoryview(data).cast("B")
        total = len(view)

        if self._buffer:
            fill = min(self._chunk_size - len(self._buffer), len(view))
            self._buffer += view[:fill]
            view = view[fill:]
        if len(self._buffer) == self._chunk_size:
            self._seal(self._buffer)
            self._buffer.clear()

        while len(view) >= self._chunk_size:
            self._seal(view[: self._chunk_size])
            view = view[self._chunk_size :]

        if view:
            self._buffer += view
        return total

    def flush(self) -> None:
        """Flush the sink. Buffered plaintext stays buffered until :meth:`finish`."""
        self._ensure_open()
        self._sink.flush()

    def finish(self) -> None:
        """Seal the trailing partial chunk, flush the sink and close the stream."""
        self._ensure_open()
        try:
            if self._buffer:
                self._seal(self._buffer)
            self._sink.flush()
        finally:
            _zeroize(self._buffer)
            self._finished = True
        logger.debug("Streaming encryption finished (%d chunks)", self._index)

    def __enter__(self) -> StreamingEncryptor:
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> Literal[False]:
        if self._finished:
            return False
        if exc_type is None:
            self.finish()
        else:
            _zeroize(self._buffer)
            self._finished = True
        return False


__all__ = [
    "StreamingEncryptor",
    "StreamingEncryptorSetup",
]
