"""Writing RIFF/WAVE files chunk by chunk."""

from __future__ import annotations

import struct
from os import PathLike
from typing import BinaryIO

from splib.wavefile import WaveError, WaveFormat

_U32 = struct.Struct("<I")
_FACT_PLACEHOLDER = 0xFFFFFFFF


def _chunk(chunk_id: bytes, body: bytes) -> bytes:
    """A complete chunk, padded to an even length."""
    pad = b"\x00" if len(body) & 1 else b""
    return chunk_id + _U32.pack(len(body)) + body + pad


class WaveWriter:
    """Writes a wave file with 'fmt ', 'fact' and 'data' chunks.

    The chunk sizes and the sample count of the 'fact' chunk are filled in
    when the writer is closed.
    """

    def __init__(self, path: str | PathLike, fmt: WaveFormat) -> None:
        self.fmt = fmt
        self.size = 0
        try:
            self._file: BinaryIO | None = open(path, "w+b")
        except OSError as exc:
            raise WaveError(f"cannot create wave file: {path}") from exc
        try:
            handle = self._file
            handle.write(b"RIFF" + _U32.pack(0) + b"WAVE")
            handle.write(_chunk(b"fmt ", fmt.to_bytes()))
            self._fact_offset = handle.tell() + 8
            handle.write(_chunk(b"fact", _U32.pack(_FACT_PLACEHOLDER)))
            self._data_offset = handle.tell() + 8
            handle.write(b"data" + _U32.pack(0))
        except BaseException:
            self._file.close()
            self._file = None
            raise

    @property
    def closed(self) -> bool:
        return self._file is None

    def write(self, data: bytes) -> int:
        """Append sample bytes and return how many were written."""
        if self._file is None:
            raise WaveError("wave file is closed")
        payload = bytes(data)
        self._file.write(payload)
        self.size += len(payload)
        return len(payload)

    def close(self) -> None:
        """Finish the chunk sizes and close the file; closing twice does nothing."""
        handle = self._file
        if handle is None:
            return
        self._file = None
        try:
            if self.size & 1:
                handle.write(b"\x00")
            total = handle.tell()
            handle.seek(self._data_offset - 4)
            handle.write(_U32.pack(self.size))
            handle.seek(self._fact_offset)
            handle.write(_U32.pack(0))
            handle.seek(4)
            handle.write(_U32.pack(total - 8))
        finally:
            handle.close()

    def __enter__(self) -> WaveWriter:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()