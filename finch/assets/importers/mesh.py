# finch/assets/importers/mesh.py
from __future__ import annotations

import re
from pathlib import Path
from typing import Generic, List, Sequence, Tuple, TypeVar

from finch.assets.errors import (
    IndexOutOfRange,
    MalformedDirective,
    MalformedFace,
    UnsupportedFaceArity,
)
from finch.assets.importers.base import AssetImporter
from finch.assets.importers.material import (
    PathLike,
    join_asset_path,
    load_mtl,
    open_text_asset,
)
from finch.assets.types import (
    MaterialDescriptor,
    MeshRecord,
    Normal3D,
    Position3D,
    TexCoord2D,
    Vertex,
)

T = TypeVar("T")

FaceCorner = Tuple[int, int, int]  # 1-based position / texcoord / normal

# ASCII decimal only; rejects "1_0", "+1" and non-ASCII digits.
_INDEX_RE = re.compile(r"-?[0-9]+")


class AttributePool(Generic[T]):
    """
    Append-only attribute list addressed with OBJ's 1-based indices.
    Only entries appended so far can be resolved.
    """

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._items: List[T] = []

    def append(self, item: T) -> None:
        self._items.append(item)

    def resolve(self, index: int, *, path: str, line: int) -> T:
        if index < 1 or index > len(self._items):
            raise IndexOutOfRange(
                f"{self.kind} index {index} outside 1..{len(self._items)}",
                path=path,
                line=line,
            )
        return self._items[index - 1]

    def __len__(self) -> int:
        return len(self._items)


def load_obj(directory: PathLike, filename: str) -> MeshRecord:
    """
    Load a Wavefront OBJ file into a flat triangle list.

    Supported:
      - v, vt, vn
      - triangular faces written as v/vt/vn
      - a single mtllib reference (resolved against `directory`)

    Positions and normals have X negated, texture V is flipped to 1 - v
    and each triangle is emitted in reverse order so front faces survive
    the handedness change.

    Raises:
        MissingFile: the OBJ (or its material library) cannot be opened.
        MalformedDirective: a v/vt/vn/mtllib line is missing fields.
        UnsupportedFaceArity: a face does not have exactly three corners.
        MalformedFace: a face corner is not three `/`-separated integers.
        IndexOutOfRange: a face corner points outside its pool.
    """
    path = join_asset_path(directory, filename)

    positions: AttributePool[Position3D] = AttributePool("position")
    texcoords: AttributePool[TexCoord2D] = AttributePool("texcoord")
    normals: AttributePool[Normal3D] = AttributePool("normal")

    vertices: List[Vertex] = []
    material = MaterialDescriptor()

    with open_text_asset(directory, filename) as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            parts = line.split()
            tag = parts[0]

            if tag == "v":
                x, y, z = _parse_floats(parts, 3, path, line_no)
                positions.append(Position3D(-x, y, z, 1.0))

            elif tag == "vt":
                u, v = _parse_floats(parts, 2, path, line_no)
                texcoords.append(TexCoord2D(u, 1.0 - v))

            elif tag == "vn":
                x, y, z = _parse_floats(parts, 3, path, line_no)
                normals.append(Normal3D(-x, y, z))

            elif tag == "f":
                if len(parts) != 4:
                    raise UnsupportedFaceArity(
                        f"Only triangular faces are supported, got "
                        f"{len(parts) - 1} corners",
                        path=path,
                        line=line_no,
                    )

                triangle = []
                for token in parts[1:4]:
                    v_idx, vt_idx, vn_idx = _parse_face_vertex(token, path, line_no)
                    triangle.append(
                        Vertex(
                            position=positions.resolve(v_idx, path=path, line=line_no),
                            texcoord=texcoords.resolve(vt_idx, path=path, line=line_no),
                            normal=normals.resolve(vn_idx, path=path, line=line_no),
                        )
                    )

                # Reverse winding to match the mirrored X axis.
                vertices.extend(reversed(triangle))

            elif tag == "mtllib":
                if len(parts) < 2:
                    raise MalformedDirective(
                        "mtllib without a filename", path=path, line=line_no
                    )
                material = load_mtl(directory, parts[1])

    return MeshRecord(vertices=tuple(vertices), material=material)


def _parse_floats(
    parts: Sequence[str], count: int, path: str, line_no: int
) -> Tuple[float, ...]:
    fields = parts[1 : 1 + count]
    if len(fields) != count:
        raise MalformedDirective(
            f"'{parts[0]}' needs {count} values, got {len(fields)}",
            path=path,
            line=line_no,
        )
    try:
        return tuple(float(value) for value in fields)
    except ValueError as e:
        raise MalformedDirective(
            f"'{parts[0]}' has a non-numeric value: {e}", path=path, line=line_no
        ) from e


def _parse_face_vertex(token: str, path: str, line_no: int) -> FaceCorner:
    """
    Parse a face corner token: v/vt/vn, all three required.
    Indices stay 1-based; the pools check the range.
    """
    fields = token.split("/")
    if len(fields) != 3:
        raise MalformedFace(
            f"Face corner {token!r} must be position/texcoord/normal",
            path=path,
            line=line_no,
        )
    if not all(_INDEX_RE.fullmatch(field) for field in fields):
        raise MalformedFace(
            f"Face corner {token!r} has a non-integer index",
            path=path,
            line=line_no,
        )
    v, vt, vn = (int(field) for field in fields)
    return v, vt, vn


class ObjImporter(AssetImporter[MeshRecord]):
    extensions = (".obj",)

    def import_file(self, path: Path) -> MeshRecord:
        return load_obj(path.parent.as_posix(), path.name)
