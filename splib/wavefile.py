"""Reading RIFF/WAVE files and in-memory sample data."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from os import PathLike
from typing import BinaryIO

WAVE_FORMAT_PCM = 1

_PCM_FORMAT = struct.Struct("<HHIIHH")
_CHUNK_HEADER = struct.Struct("<4sI")


class WaveError(Exception):
    """Raised when a wave file is malformed or cannot be read."""


@dataclass(frozen=True)
class WaveFormat:
    """The contents of a wave 'fmt ' chunk."""

    format_tag: int
    channels: int
    sample_rate: int
    avg_bytes_per_sec: int
    block_align: int
    bits_per_sample: int
    extra: bytes = b""

    @classmethod
    def pcm(cls, channels: int, sample_rate: int, bits_per_sample: int) -> WaveFormat:
        """A PCM format with block alignment and byte rate derived from the rest."""
        block_align = bits_per_sample // 8 * channels
        return cls(
            WAVE_FORMAT_PCM,
            channels,
            sample_rate,
            sample_rate * block_align,
            block_align,
            bits_per_sample,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> WaveFormat:
        """Parse a format chunk; non-PCM formats carry a size-prefixed extra block."""
        if len(data) < _PCM_FORMAT.size:
            raise WaveError("format chunk is shorter than a PCM format")
        fields = _PCM_FORMAT.unpack_from(data)
        if fields[0] == WAVE_FORMAT_PCM:
            return cls(*fields)
        if len(data) < _PCM_FORMAT.size + 2:
            raise WaveError("format chunk has no extra-size field")
        (extra_size,) = struct.unpack_from("<H", data, _PCM_FORMAT.size)
        start = _PCM_FORMAT.size + 2
        extra = bytes(data[start : start + extra_size])
        if len(extra) != extra_size:
            raise WaveError("format chunk extra bytes are truncated")
        return cls(*fields, extra=extra)

    def to_bytes(self) -> bytes:
        """Serialise as a format chunk body."""
        base = _PCM_FORMAT.pack(
            self.format_tag,
            self.channels,
            self.sample_rate,
            self.avg_bytes_per_sec,
            self.block_align,
            self.bits_per_sample,
        )
        if self.format_tag == WAVE_FORMAT_PCM:
            return base
        return base + struct.pack("<H", len(self.extra)) + self.extra

    def silence_byte(self) -> int:
        """The byte value of silence: unsigned 8-bit centres on 128."""
        return 128 if self.bits_per_sample == 8 else 0


def _parse_riff(handle: BinaryIO) -> tuple[WaveFormat, int, int]:
    """Return the format, data offset and data size of an open wave file."""
    header = handle.read(12)
    if len(header) < 12 or header[:4] != b"RIFF" or header[8:12] != b"WAVE":
        raise WaveError("not a RIFF/WAVE file")
    (riff_size,) = struct.unpack_from("<I", header, 4)
    end = 8 + riff_size

    fmt: WaveFormat | None = None
    data: tuple[int, int] | None = None
    position = 12
    while position + _CHUNK_HEADER.size <= end:
        handle.seek(position)
        raw = handle.read(_CHUNK_HEADER.size)
        if len(raw) < _CHUNK_HEADER.size:
            break
        chunk_id, chunk_size = _CHUNK_HEADER.unpack(raw)
        body = position + _CHUNK_HEADER.size
        if chunk_id == b"fmt " and fmt is None:
            if chunk_size < _PCM_FORMAT.size:
                raise WaveError("format chunk is shorter than a PCM format")
            fmt = WaveFormat.from_bytes(handle.read(chunk_size))
        elif chunk_id == b"data" and data is None:
            data = (body, chunk_size)
        position = body + chunk_size + (chunk_size & 1)

    if fmt is None:
        raise WaveError("no 'fmt ' chunk")
    if data is None:
        raise WaveError("no 'data' chunk")
    return fmt, data[0], data[1]


class WaveReader:
    """Sequential reader of the sample data of a wave file or memory block."""

    fmt: WaveFormat
    size: int

    def __init__(self, path: str | PathLike) -> None:
        try:
            self._file: BinaryIO | None = open(path, "rb")
        except OSError as exc:
            raise WaveError(f"cannot open wave file: {path}") from exc
        try:
            self.fmt, self._data_offset, self.size = _parse_riff(self._file)
        except BaseException:
            self._file.close()
            raise
        self._memory: bytes | None = None
        self._remaining = 0
        self._cursor = 0
        self.reset()

    @classmethod
    def from_memory(cls, data: bytes, fmt: WaveFormat) -> WaveReader:
        """A reader over raw sample bytes in the given format."""
        reader = cls.__new__(cls)
        reader._file = None
        reader._memory = bytes(data)
        reader._data_offset = 0
        reader._remaining = 0
        reader._cursor = 0
        reader.fmt = fmt
        reader.size = len(reader._memory)
        return reader

    def read(self, size: int) -> bytes:
        """Read up to size bytes of sample data from the current position."""
        if size < 0:
            raise ValueError("size must not be negative")
        if self._memory is not None:
            chunk = self._memory[self._cursor : self._cursor + size]
            self._cursor += len(chunk)
            return chunk
        if self._file is None:
            raise WaveError("wave file is closed")
        wanted = min(size, self._remaining)
        self._remaining -= wanted
        chunk = self._file.read(wanted)
        if len(chunk) < wanted:
            raise WaveError("wave data is truncated")
        return chunk

    def reset(self) -> None:
        """Rewind to the start of the sample data."""
        if self._memory is not None:
            self._cursor = 0
            return
        if self._file is None:
            raise WaveError("wave file is closed")
        self._file.seek(self._data_offset)
        self._remaining = self.size

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> WaveReader:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()