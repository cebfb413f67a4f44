"""In-memory sound buffers and sounds played from a pool of them."""

from __future__ import annotations

import random
from enum import IntFlag
from typing import Iterable

from splib.wavefile import WaveFormat, WaveReader

PLAY_LOOPING = 0x1


class Caps(IntFlag):
    """Creation flags of a sound buffer."""

    NONE = 0
    PRIMARYBUFFER = 0x1
    STATIC = 0x2
    LOCHARDWARE = 0x4
    LOCSOFTWARE = 0x8
    CTRL3D = 0x10
    CTRLFREQUENCY = 0x20
    CTRLPAN = 0x40
    CTRLVOLUME = 0x80
    CTRLPOSITIONNOTIFY = 0x100
    CTRLFX = 0x200
    GETCURRENTPOSITION2 = 0x10000


class SoundBufferError(Exception):
    """Raised on invalid sound buffer operations."""


class SoundBuffer:
    """A block of sample memory with a play cursor and playback controls."""

    def __init__(self, size: int, fmt: WaveFormat) -> None:
        if size <= 0:
            raise SoundBufferError("buffer size must be positive")
        self.fmt = fmt
        self.data = bytearray(size)
        self.position = 0
        self.playing = False
        self.looping = False
        self.lost = False
        self.priority = 0
        self.volume = 0
        self.frequency = fmt.sample_rate
        self.pan = 0

    def __len__(self) -> int:
        return len(self.data)

    def play(self, looping: bool = False) -> None:
        self.playing = True
        self.looping = bool(looping)

    def stop(self) -> None:
        self.playing = False

    def set_position(self, position: int) -> None:
        if not 0 <= position < len(self.data):
            raise SoundBufferError(f"position {position} outside buffer of {len(self.data)}")
        self.position = position

    def advance(self, nbytes: int) -> None:
        """Move the play cursor as if nbytes had been played.

        A looping buffer wraps around; any other buffer stops and rewinds at its end.
        """
        if nbytes < 0:
            raise ValueError("nbytes must not be negative")
        if not self.playing:
            return
        target = self.position + nbytes
        if self.looping:
            self.position = target % len(self.data)
        elif target >= len(self.data):
            self.playing = False
            self.position = 0
        else:
            self.position = target

    def restore(self) -> bool:
        """Recover a lost buffer; return whether it had been lost."""
        was_lost = self.lost
        self.lost = False
        return was_lost

    def duplicate(self) -> SoundBuffer:
        """A new buffer sharing this buffer's sample memory."""
        copy = SoundBuffer(len(self.data), self.fmt)
        copy.data = self.data
        copy.volume = self.volume
        copy.frequency = self.frequency
        copy.pan = self.pan
        return copy


class BufferedSound:
    """A sound loaded from a wave reader and played on the first free buffer."""

    def __init__(
        self,
        buffers: Iterable[SoundBuffer],
        reader: WaveReader,
        flags: int = Caps.NONE,
    ) -> None:
        self._buffers = list(buffers)
        if not self._buffers:
            raise SoundBufferError("at least one buffer is required")
        self.reader = reader
        self.flags = Caps(flags)
        self.size = len(self._buffers[0])
        self.fill_buffer(self._buffers[0], False)

    @property
    def buffers(self) -> tuple[SoundBuffer, ...]:
        return tuple(self._buffers)

    def fill_buffer(self, buffer: SoundBuffer, repeat: bool = False) -> None:
        """Load the wave data into buffer, repeating it or padding with silence."""
        buffer.restore()
        size = len(buffer)
        silence = self.reader.fmt.silence_byte()
        self.reader.reset()
        chunk = self.reader.read(size)
        if not chunk:
            content = bytes([silence]) * size
        elif len(chunk) < size and repeat:
            parts = [chunk]
            filled = len(chunk)
            while filled < size:
                self.reader.reset()
                more = self.reader.read(size - filled)
                if not more:
                    raise SoundBufferError("wave data ran out while repeating")
                parts.append(more)
                filled += len(more)
            content = b"".join(parts)
        else:
            content = chunk + bytes([silence]) * (size - len(chunk))
        buffer.data[:size] = content

    def free_buffer(self) -> SoundBuffer:
        """The first buffer not playing, or a random one when all are busy."""
        idle = next((b for b in self._buffers if not b.playing), None)
        return idle if idle is not None else random.choice(self._buffers)

    def buffer(self, index: int) -> SoundBuffer:
        if not 0 <= index < len(self._buffers):
            raise IndexError(f"buffer {index} out of range 0..{len(self._buffers) - 1}")
        return self._buffers[index]

    def play(
        self,
        priority: int = 0,
        flags: int = 0,
        volume: int = 0,
        frequency: int = -1,
        pan: int = 0,
    ) -> SoundBuffer:
        """Start playback on a free buffer and return that buffer."""
        target = self.free_buffer()
        if target.restore():
            self.fill_buffer(target, False)
        if self.flags & Caps.CTRLVOLUME:
            target.volume = volume
        if frequency != -1 and self.flags & Caps.CTRLFREQUENCY:
            target.frequency = frequency
        if self.flags & Caps.CTRLPAN:
            target.pan = pan
        target.priority = priority
        target.play(bool(flags & PLAY_LOOPING))
        return target

    def stop(self) -> None:
        for buffer in self._buffers:
            buffer.stop()

    def reset(self) -> None:
        for buffer in self._buffers:
            buffer.set_position(0)

    def is_playing(self) -> bool:
        return any(buffer.playing for buffer in self._buffers)