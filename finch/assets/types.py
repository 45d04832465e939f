# finch/assets/types.py
from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence, Tuple

import numpy as np

from finch.assets.errors import ReleasedClip, UnsupportedSampleFormat

WAVE_FORMAT_PCM = 1
WAVE_FORMAT_IEEE_FLOAT = 3

Bounds = Tuple[Tuple[float, float, float], Tuple[float, float, float]]


@dataclass(frozen=True, slots=True)
class AudioStreamFormat:
    """Waveform-format record as stored in a `fmt ` chunk."""

    format_tag: int = 0
    channels: int = 0
    samples_per_sec: int = 0
    avg_bytes_per_sec: int = 0
    block_align: int = 0
    bits_per_sample: int = 0
    cb_size: int = 0

    STRUCT = struct.Struct("<HHIIHHH")
    RECORD_SIZE = STRUCT.size  # 18

    @classmethod
    def from_bytes(cls, raw: bytes) -> AudioStreamFormat:
        """
        Decode a possibly short record; fields past the end of `raw` are zero.
        """
        if len(raw) > cls.RECORD_SIZE:
            raise ValueError(
                f"Format record is {len(raw)} bytes, capacity is {cls.RECORD_SIZE}"
            )
        padded = raw + b"\x00" * (cls.RECORD_SIZE - len(raw))
        return cls(*cls.STRUCT.unpack(padded))

    def to_bytes(self) -> bytes:
        return self.STRUCT.pack(
            self.format_tag,
            self.channels,
            self.samples_per_sec,
            self.avg_bytes_per_sec,
            self.block_align,
            self.bits_per_sample,
            self.cb_size,
        )

    @property
    def is_float(self) -> bool:
        return self.format_tag == WAVE_FORMAT_IEEE_FLOAT


class AudioClip:
    """
    Decoded audio: a stream format plus the raw sample bytes of the
    `data` chunk.

    The clip owns its buffer exclusively. Call `release()` exactly once
    when done (or use the clip as a context manager); any later access
    raises `ReleasedClip`.
    """

    __slots__ = ("_format", "_buffer", "_size")

    def __init__(self, fmt: AudioStreamFormat, buffer: bytearray) -> None:
        self._format = fmt
        self._buffer: Optional[bytearray] = buffer
        self._size = len(buffer)

    @property
    def format(self) -> AudioStreamFormat:
        return self._format

    @property
    def size(self) -> int:
        return self._size

    @property
    def released(self) -> bool:
        return self._buffer is None

    @property
    def buffer(self) -> memoryview:
        return memoryview(self._require_buffer()).toreadonly()

    @property
    def duration(self) -> float:
        """Playback length in seconds, 0.0 if the format cannot say."""
        if self._format.avg_bytes_per_sec == 0:
            return 0.0
        return self._size / self._format.avg_bytes_per_sec

    def samples(self) -> np.ndarray:
        """
        Interpret the buffer as a (frames, channels) sample array.

        8-bit data is unsigned, 16/32-bit integer data is signed, 24-bit
        packed data is widened to int32 and IEEE float data is float32.
        """
        data = self._require_buffer()
        fmt = self._format
        channels = max(fmt.channels, 1)
        bits = fmt.bits_per_sample

        if bits == 8:
            arr = np.frombuffer(data, dtype=np.uint8)
        elif bits == 16:
            arr = np.frombuffer(data, dtype="<i2", count=len(data) // 2)
        elif bits == 24:
            raw = np.frombuffer(data, dtype=np.uint8, count=len(data) // 3 * 3)
            triplets = raw.reshape(-1, 3).astype(np.int32)
            arr = triplets[:, 0] | (triplets[:, 1] << 8) | (triplets[:, 2] << 16)
            arr = np.where(arr & 0x800000, arr - 0x1000000, arr).astype(np.int32)
        elif bits == 32:
            dtype = "<f4" if fmt.is_float else "<i4"
            arr = np.frombuffer(data, dtype=dtype, count=len(data) // 4)
        else:
            raise UnsupportedSampleFormat(
                f"Cannot view {bits}-bit samples (format tag {fmt.format_tag})"
            )

        frames = len(arr) // channels
        view = arr[: frames * channels].reshape(frames, channels)
        view.flags.writeable = False
        return view

    def release(self) -> None:
        """Free the sample buffer. Must be called exactly once."""
        self._require_buffer()
        self._buffer = None
        self._size = 0

    def _require_buffer(self) -> bytearray:
        if self._buffer is None:
            raise ReleasedClip("Audio clip used after release")
        return self._buffer

    def __enter__(self) -> AudioClip:
        return self

    def __exit__(self, *exc) -> None:
        if not self.released:
            self.release()

    def __repr__(self) -> str:
        state = "released" if self.released else f"{self._size} bytes"
        return f"AudioClip({self._format!r}, {state})"


@dataclass(frozen=True, slots=True)
class Position3D:
    x: float
    y: float
    z: float
    w: float = 1.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w


@dataclass(frozen=True, slots=True)
class Normal3D:
    x: float
    y: float
    z: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z


@dataclass(frozen=True, slots=True)
class TexCoord2D:
    u: float
    v: float

    def __iter__(self) -> Iterator[float]:
        yield self.u
        yield self.v


@dataclass(frozen=True, slots=True)
class Vertex:
    """A fully resolved triangle corner."""

    position: Position3D
    texcoord: TexCoord2D
    normal: Normal3D

    def __iter__(self) -> Iterator[float]:
        yield from self.position
        yield from self.texcoord
        yield from self.normal


@dataclass(frozen=True, slots=True)
class VertexLayout:
    """Describes vertex attributes for VAO creation."""

    attributes: Sequence[str]  # e.g. ["in_pos", "in_uv", "in_normal"]
    format: str  # buffer format string e.g. "4f 2f 3f"
    stride_bytes: int


VERTEX_LAYOUT = VertexLayout(
    attributes=("in_pos", "in_uv", "in_normal"),
    format="4f 2f 3f",
    stride_bytes=struct.calcsize("<4f2f3f"),
)


@dataclass(frozen=True, slots=True)
class MaterialDescriptor:
    texture_path: Optional[str] = None

    @property
    def has_texture(self) -> bool:
        return self.texture_path is not None


@dataclass(frozen=True, slots=True)
class MeshRecord:
    """
    Flat triangle list ready for vertex-buffer upload.
    Every consecutive triple of `vertices` is one triangle.
    """

    vertices: Tuple[Vertex, ...] = ()
    material: MaterialDescriptor = field(default_factory=MaterialDescriptor)
    vertex_layout: VertexLayout = VERTEX_LAYOUT

    def __post_init__(self) -> None:
        if len(self.vertices) % 3 != 0:
            raise ValueError(
                f"Vertex count {len(self.vertices)} is not a multiple of 3"
            )

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.vertices) // 3

    def triangles(self) -> Iterator[Tuple[Vertex, Vertex, Vertex]]:
        v = self.vertices
        for i in range(0, len(v), 3):
            yield v[i], v[i + 1], v[i + 2]

    def to_array(self) -> np.ndarray:
        """Interleaved (n, 9) float32 array in `vertex_layout` order."""
        if not self.vertices:
            return np.empty((0, 9), dtype=np.float32)
        return np.array([tuple(v) for v in self.vertices], dtype=np.float32)

    def to_bytes(self) -> bytes:
        return self.to_array().astype("<f4", copy=False).tobytes()

    def bounds(self) -> Optional[Bounds]:
        if not self.vertices:
            return None
        xyz = self.to_array()[:, 0:3]
        lo = xyz.min(axis=0)
        hi = xyz.max(axis=0)
        return (
            (float(lo[0]), float(lo[1]), float(lo[2])),
            (float(hi[0]), float(hi[1]), float(hi[2])),
        )
