# finch/assets/importers/wave.py
from __future__ import annotations

import os
import struct
from pathlib import Path
from typing import BinaryIO, Tuple, Union

from finch.assets.errors import (
    FormatTooLarge,
    MalformedContainer,
    MissingFile,
    TruncatedData,
)
from finch.assets.importers.base import AssetImporter
from finch.assets.types import AudioClip, AudioStreamFormat

# 4-byte ASCII tag + little-endian uint32 size
CHUNK_HEADER = struct.Struct("<4sI")
RIFF_HEADER = struct.Struct("<4sI4s")


def load_wave(path: Union[str, os.PathLike]) -> AudioClip:
    """
    Decode a RIFF/WAVE file into an AudioClip.

    Layout accepted, strictly in this order:
      RIFF header ("RIFF", size, "WAVE")
      "fmt " chunk (at most 18 bytes of waveform-format record)
      optional "JUNK" chunk, skipped
      "data" chunk

    Raises:
        MissingFile: the file cannot be opened.
        MalformedContainer: a tag does not match, or a header is cut short.
        FormatTooLarge: the `fmt ` chunk exceeds the format record.
        TruncatedData: a chunk body is shorter than its declared size.
    """
    name = os.fspath(path)
    try:
        f = open(name, "rb")
    except OSError as e:
        raise MissingFile(f"Cannot open audio file: {e.strerror}", path=name) from e

    with f:
        riff_tag, _riff_size, form_type = _read_struct(f, RIFF_HEADER, name)
        if riff_tag != b"RIFF":
            raise MalformedContainer(
                f"Expected 'RIFF' tag, found {riff_tag!r}", path=name
            )
        if form_type != b"WAVE":
            raise MalformedContainer(
                f"Expected 'WAVE' form type, found {form_type!r}", path=name
            )

        fmt_tag, fmt_size = _read_chunk_header(f, name)
        if fmt_tag != b"fmt ":
            raise MalformedContainer(
                f"Expected 'fmt ' chunk, found {fmt_tag!r}", path=name
            )
        if fmt_size > AudioStreamFormat.RECORD_SIZE:
            raise FormatTooLarge(
                f"'fmt ' chunk declares {fmt_size} bytes, "
                f"format record holds {AudioStreamFormat.RECORD_SIZE}",
                path=name,
            )
        fmt = AudioStreamFormat.from_bytes(_read_exact(f, fmt_size, "fmt ", name))

        tag, size = _read_chunk_header(f, name)
        if tag == b"JUNK":
            f.seek(size, os.SEEK_CUR)
            tag, size = _read_chunk_header(f, name)

        if tag != b"data":
            raise MalformedContainer(
                f"Expected 'data' chunk, found {tag!r}", path=name
            )

        remaining = os.fstat(f.fileno()).st_size - f.tell()
        if size > remaining:
            raise TruncatedData(
                f"'data' chunk declares {size} bytes, only {max(remaining, 0)} available",
                path=name,
            )

        buffer = bytearray(size)
        read = f.readinto(buffer)
        if read != size:
            raise TruncatedData(
                f"'data' chunk declares {size} bytes, only {read} available",
                path=name,
            )

    return AudioClip(fmt, buffer)


def _read_struct(f: BinaryIO, layout: struct.Struct, name: str) -> Tuple:
    raw = f.read(layout.size)
    if len(raw) != layout.size:
        raise MalformedContainer(
            f"Header cut short: wanted {layout.size} bytes, got {len(raw)}",
            path=name,
        )
    return layout.unpack(raw)


def _read_chunk_header(f: BinaryIO, name: str) -> Tuple[bytes, int]:
    tag, size = _read_struct(f, CHUNK_HEADER, name)
    return tag, size


def _read_exact(f: BinaryIO, size: int, tag: str, name: str) -> bytes:
    raw = f.read(size)
    if len(raw) != size:
        raise TruncatedData(
            f"'{tag}' chunk declares {size} bytes, only {len(raw)} available",
            path=name,
        )
    return raw


class WaveImporter(AssetImporter[AudioClip]):
    extensions = (".wav", ".wave")

    def import_file(self, path: Path) -> AudioClip:
        return load_wave(path)
