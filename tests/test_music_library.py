import io
import struct

import pytest

from deskpet.music_library import (
    TrackType,
    WavError,
    has_audio_extension,
    parse_wav,
    scan_music_dir,
)


def _chunk(chunk_id, payload):
    pad = b"\0" if len(payload) % 2 else b""
    return chunk_id + struct.pack("<I", len(payload)) + payload + pad


def _fmt(audio_format=1, channels=2, rate=44100, bits=16):
    block = channels * bits // 8
    return _chunk(b"fmt ", struct.pack("<HHIIHH", audio_format, channels, rate, rate * block, block, bits))


def _wav(*chunks):
    body = b"WAVE" + b"".join(chunks)
    return b"RIFF" + struct.pack("<I", len(body)) + body


def test_parse_canonical_wav():
    payload = b"\x01\x02\x03\x04" * 8
    fmt = _fmt(channels=2, rate=44100, bits=16)
    stream = io.BytesIO(_wav(fmt, _chunk(b"data", payload)))
    info = parse_wav(stream)
    assert info.channels == 2
    assert info.sample_rate == 44100
    assert info.bits_per_sample == 16
    assert info.block_align == 4
    assert info.data_size == len(payload)
    assert info.data_offset == 12 + len(fmt) + 8
    stream.seek(info.data_offset)
    assert stream.read(info.data_size) == payload


def test_parse_skips_odd_sized_chunk_and_data_first():
    payload = b"\x80" * 10
    stream = io.BytesIO(_wav(_chunk(b"data", payload), _chunk(b"LIST", b"abc"), _fmt(channels=1, rate=8000, bits=8)))
    info = parse_wav(stream)
    assert (info.channels, info.sample_rate, info.bits_per_sample) == (1, 8000, 8)
    stream.seek(info.data_offset)
    assert stream.read(info.data_size) == payload


def test_parse_fmt_with_extra_bytes():
    extra_fmt = _chunk(b"fmt ", struct.pack("<HHIIHHH", 1, 1, 16000, 32000, 2, 16, 0))
    payload = b"\x00\x01" * 4
    stream = io.BytesIO(_wav(extra_fmt, _chunk(b"data", payload)))
    info = parse_wav(stream)
    stream.seek(info.data_offset)
    assert stream.read(info.data_size) == payload


def test_not_riff():
    with pytest.raises(WavError, match="Not a WAV file"):
        parse_wav(io.BytesIO(b"ID3\x03" + b"\0" * 20))


def test_too_short_is_not_wav():
    with pytest.raises(WavError, match="Not a WAV file"):
        parse_wav(io.BytesIO(b"RIFF"))


@pytest.mark.parametrize(
    "fmt_chunk",
    [
        _fmt(audio_format=3),
        _fmt(bits=24),
        _fmt(channels=3),
        _fmt(rate=0),
    ],
)
def test_unsupported_format(fmt_chunk):
    with pytest.raises(WavError, match="Unsupported WAV"):
        parse_wav(io.BytesIO(_wav(fmt_chunk, _chunk(b"data", b"\0\0"))))


def test_truncated_fmt():
    broken = b"fmt " + struct.pack("<I", 16) + b"\x01\x00\x02\x00"
    with pytest.raises(WavError, match="Bad WAV header"):
        parse_wav(io.BytesIO(_wav(broken)))


def test_missing_data():
    with pytest.raises(WavError, match="WAV data missing"):
        parse_wav(io.BytesIO(_wav(_fmt())))


@pytest.mark.parametrize(
    "name, expected",
    [("a.wav", True), ("B.MP3", True), ("c.Wav", True), ("d.ogg", False), ("wav", False)],
)
def test_has_audio_extension(name, expected):
    assert has_audio_extension(name) is expected


def test_scan_sorts_and_filters(tmp_path):
    for name in ["b.mp3", "a.WAV", "c.txt"]:
        (tmp_path / name).write_bytes(b"x")
    (tmp_path / "d.wav").mkdir()
    tracks = scan_music_dir(tmp_path)
    assert [t.name for t in tracks] == ["a.WAV", "b.mp3"]
    assert [t.type for t in tracks] == [TrackType.WAV, TrackType.MP3]
    assert tracks[0].path == str(tmp_path / "a.WAV")


def test_scan_respects_limit(tmp_path):
    for i in range(5):
        (tmp_path / f"t{i}.wav").write_bytes(b"x")
    tracks = scan_music_dir(tmp_path, 2)
    assert len(tracks) == 2
    names = [t.name for t in tracks]
    assert names == sorted(names)


def test_scan_empty_folder(tmp_path):
    assert scan_music_dir(tmp_path) == []


def test_scan_missing_folder(tmp_path):
    with pytest.raises(FileNotFoundError):
        scan_music_dir(tmp_path / "music")


def test_scan_not_a_folder(tmp_path):
    target = tmp_path / "music"
    target.write_bytes(b"x")
    with pytest.raises(NotADirectoryError):
        scan_music_dir(target)