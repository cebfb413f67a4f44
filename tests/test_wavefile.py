import struct
import wave

import pytest

from splib.wavefile import WAVE_FORMAT_PCM, WaveError, WaveFormat, WaveReader


def _write_wav(path, channels, width, rate, frames):
    with wave.open(str(path), "wb") as out:
        out.setnchannels(channels)
        out.setsampwidth(width)
        out.setframerate(rate)
        out.writeframes(frames)
    return path


def _chunk(chunk_id, body):
    pad = b"\x00" if len(body) % 2 else b""
    return chunk_id + struct.pack("<I", len(body)) + body + pad


def _riff(*chunks):
    body = b"WAVE" + b"".join(chunks)
    return b"RIFF" + struct.pack("<I", len(body)) + body


def test_pcm_format_matches_standard_header(tmp_path):
    path = _write_wav(tmp_path / "a.wav", 2, 2, 22050, b"\x00" * 8)
    raw = path.read_bytes()
    assert raw[12:16] == b"fmt "
    assert WaveFormat.pcm(2, 22050, 16).to_bytes() == raw[20:36]


def test_reader_reads_format_and_samples(tmp_path):
    samples = bytes(range(40))
    path = _write_wav(tmp_path / "a.wav", 1, 1, 8000, samples)
    with WaveReader(path) as reader:
        assert reader.fmt == WaveFormat.pcm(1, 8000, 8)
        assert reader.size == len(samples)
        assert reader.read(15) + reader.read(100) == samples
        assert reader.read(10) == b""


def test_reset_rewinds(tmp_path):
    samples = bytes(range(20))
    path = _write_wav(tmp_path / "a.wav", 1, 1, 8000, samples)
    with WaveReader(path) as reader:
        first = reader.read(7)
        reader.reset()
        assert reader.read(7) == first == samples[:7]


def test_chunks_found_after_odd_sized_chunk(tmp_path):
    fmt = WaveFormat.pcm(1, 11025, 8)
    data = b"\x01\x02\x03\x04"
    path = tmp_path / "b.wav"
    path.write_bytes(_riff(_chunk(b"junk", b"abc"), _chunk(b"fmt ", fmt.to_bytes()), _chunk(b"data", data)))
    with WaveReader(path) as reader:
        assert reader.fmt == fmt
        assert reader.read(10) == data


def test_not_a_wave_file_raises(tmp_path):
    path = tmp_path / "c.wav"
    path.write_bytes(b"RIFX" + b"\x00" * 20)
    with pytest.raises(WaveError):
        WaveReader(path)


def test_missing_data_chunk_raises(tmp_path):
    path = tmp_path / "d.wav"
    path.write_bytes(_riff(_chunk(b"fmt ", WaveFormat.pcm(1, 8000, 8).to_bytes())))
    with pytest.raises(WaveError):
        WaveReader(path)


def test_short_fmt_chunk_raises(tmp_path):
    path = tmp_path / "e.wav"
    path.write_bytes(_riff(_chunk(b"fmt ", b"\x01\x00\x01\x00"), _chunk(b"data", b"\x00\x00")))
    with pytest.raises(WaveError):
        WaveReader(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(WaveError):
        WaveReader(tmp_path / "absent.wav")


def test_truncated_data_raises_on_read(tmp_path):
    fmt = WaveFormat.pcm(1, 8000, 8).to_bytes()
    raw = _riff(_chunk(b"fmt ", fmt)) + b"data" + struct.pack("<I", 100) + b"\x00" * 10
    path = tmp_path / "f.wav"
    path.write_bytes(raw)
    with WaveReader(path) as reader:
        with pytest.raises(WaveError):
            reader.read(100)


def test_read_after_close_raises(tmp_path):
    path = _write_wav(tmp_path / "a.wav", 1, 1, 8000, b"\x00" * 4)
    reader = WaveReader(path)
    reader.close()
    with pytest.raises(WaveError):
        reader.read(1)


def test_non_pcm_format_round_trip():
    fmt = WaveFormat(3, 2, 44100, 352800, 8, 32, extra=b"\x01\x02")
    raw = fmt.to_bytes()
    assert struct.unpack_from("<H", raw, 16)[0] == len(fmt.extra)
    assert WaveFormat.from_bytes(raw) == fmt


def test_pcm_from_bytes_ignores_trailing_bytes():
    fmt = WaveFormat.pcm(2, 44100, 16)
    parsed = WaveFormat.from_bytes(fmt.to_bytes() + b"\x00\x00")
    assert parsed == fmt
    assert parsed.format_tag == WAVE_FORMAT_PCM


def test_from_bytes_rejects_truncated_data():
    fmt = WaveFormat(3, 1, 8000, 32000, 4, 32, extra=b"\x01\x02\x03")
    with pytest.raises(WaveError):
        WaveFormat.from_bytes(fmt.to_bytes()[:-1])
    with pytest.raises(WaveError):
        WaveFormat.from_bytes(fmt.to_bytes()[:16])
    with pytest.raises(WaveError):
        WaveFormat.from_bytes(b"\x01\x00")


def test_silence_byte():
    assert WaveFormat.pcm(1, 8000, 8).silence_byte() == 128
    assert WaveFormat.pcm(1, 8000, 16).silence_byte() == 0


def test_memory_reader_reads_sequentially_and_resets():
    data = bytes(range(10))
    reader = WaveReader.from_memory(data, WaveFormat.pcm(1, 8000, 8))
    assert reader.size == len(data)
    assert reader.read(4) == data[:4]
    assert reader.read(100) == data[4:]
    assert reader.read(1) == b""
    reader.reset()
    assert reader.read(3) == data[:3]


def test_negative_read_size_raises():
    reader = WaveReader.from_memory(b"\x00", WaveFormat.pcm(1, 8000, 8))
    with pytest.raises(ValueError):
        reader.read(-1)