import struct

import pytest

PCM_STEREO_16 = struct.pack("<HHIIHH", 1, 2, 44100, 176400, 4, 16)


def chunk(tag: bytes, payload: bytes, declared: int | None = None) -> bytes:
    """One RIFF chunk; `declared` overrides the size field."""
    size = len(payload) if declared is None else declared
    return struct.pack("<4sI", tag, size) + payload


def riff(body: bytes, *, tag: bytes = b"RIFF", form: bytes = b"WAVE") -> bytes:
    return struct.pack("<4sI4s", tag, len(body) + 4, form) + body


@pytest.fixture
def wave_file(tmp_path):
    """Writes raw RIFF bytes to disk and returns the path."""

    def _write(data: bytes, name: str = "clip.wav"):
        f = tmp_path / name
        f.write_bytes(data)
        return f

    return _write


@pytest.fixture
def pcm_wave(wave_file):
    """Builds a well-formed PCM file from a data payload."""

    def _build(samples: bytes, fmt: bytes = PCM_STEREO_16, junk: bytes | None = None,
               name: str = "clip.wav"):
        body = chunk(b"fmt ", fmt)
        if junk is not None:
            body += chunk(b"JUNK", junk)
        body += chunk(b"data", samples)
        return wave_file(riff(body), name)

    return _build


@pytest.fixture
def text_asset(tmp_path):
    """Writes a text asset under tmp_path; returns (directory, filename)."""

    def _write(name: str, content: str):
        (tmp_path / name).write_text(content)
        return tmp_path.as_posix(), name

    return _write
