"""Finding audio tracks on disk and reading WAV headers."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import BinaryIO

MAX_TRACKS = 16

_FMT_LAYOUT = struct.Struct("<HHIIHH")


class TrackType(Enum):
    WAV = auto()
    MP3 = auto()


@dataclass(frozen=True)
class Track:
    path: str
    name: str
    type: TrackType


@dataclass(frozen=True)
class WavInfo:
    channels: int
    sample_rate: int
    bits_per_sample: int
    block_align: int
    data_offset: int
    data_size: int


class WavError(ValueError):
    """The stream is not a playable PCM WAV file."""


def _is_wav(name: str) -> bool:
    return name.lower().endswith(".wav")


def _is_mp3(name: str) -> bool:
    return name.lower().endswith(".mp3")


def has_audio_extension(name: str) -> bool:
    return _is_wav(name) or _is_mp3(name)


def scan_music_dir(path: str | os.PathLike[str], max_tracks: int = MAX_TRACKS) -> list[Track]:
    """Collect up to max_tracks WAV/MP3 files directly in path, sorted by name.

    Raises FileNotFoundError if the folder is missing and NotADirectoryError
    if it is not a folder.
    """
    folder = Path(path)
    if not folder.exists():
        raise FileNotFoundError(f"No music folder: {folder}")
    if not folder.is_dir():
        raise NotADirectoryError(f"Music folder error: {folder}")

    tracks: list[Track] = []
    with os.scandir(folder) as entries:
        for entry in entries:
            if len(tracks) >= max_tracks:
                break
            if entry.is_dir() or not has_audio_extension(entry.name):
                continue
            track_type = TrackType.MP3 if _is_mp3(entry.name) else TrackType.WAV
            tracks.append(Track(path=os.path.join(folder, entry.name), name=entry.name, type=track_type))
    tracks.sort(key=lambda track: track.name)
    return tracks


def parse_wav(stream: BinaryIO) -> WavInfo:
    """Read the RIFF header of a seekable binary stream.

    Only 8- or 16-bit PCM with one or two channels is accepted.
    """
    stream.seek(0)
    header = stream.read(12)
    if len(header) < 12 or header[:4] != b"RIFF" or header[8:12] != b"WAVE":
        raise WavError("Not a WAV file")

    fmt: tuple[int, int, int, int] | None = None
    data: tuple[int, int] | None = None
    while True:
        chunk_header = stream.read(8)
        if len(chunk_header) < 8:
            break
        chunk_id = chunk_header[:4]
        (chunk_size,) = struct.unpack("<I", chunk_header[4:])
        chunk_start = stream.tell()
        next_chunk = chunk_start + chunk_size + (chunk_size & 1)

        if chunk_id == b"fmt ":
            raw = stream.read(_FMT_LAYOUT.size)
            if len(raw) < _FMT_LAYOUT.size:
                raise WavError("Bad WAV header")
            audio_format, channels, sample_rate, _byte_rate, block_align, bits = _FMT_LAYOUT.unpack(raw)
            if (
                audio_format != 1
                or bits not in (8, 16)
                or not 1 <= channels <= 2
                or sample_rate == 0
            ):
                raise WavError("Unsupported WAV")
            fmt = (channels, sample_rate, bits, block_align)
        elif chunk_id == b"data":
            data = (chunk_start, chunk_size)

        if fmt is not None and data is not None:
            channels, sample_rate, bits, block_align = fmt
            return WavInfo(
                channels=channels,
                sample_rate=sample_rate,
                bits_per_sample=bits,
                block_align=block_align,
                data_offset=data[0],
                data_size=data[1],
            )
        stream.seek(next_chunk)

    raise WavError("WAV data missing")