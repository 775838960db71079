"""Blocking byte sinks shared by the stream writers."""
from __future__ import annotations

from typing import Optional, Protocol, Union

BytesLike = Union[bytes, bytearray, memoryview]


class BinarySink(Protocol):
    def write(self, data: bytes, /) -> Optional[int]: ...

    def flush(self) -> None: ...


def write_all(sink: BinarySink, data: BytesLike) -> None:
    """Write every byte of ``data``, retrying short writes."""
    view = memoryview(data).cast("B")
    while view:
        written = sink.write(view)
        if written is None:
            # sink reports no count; it took the whole buffer
            return
        if written <= 0:
            raise OSError("Sink accepted no bytes")
        view = view[written:]


__all__ = ["BinarySink", "BytesLike", "write_all"]
