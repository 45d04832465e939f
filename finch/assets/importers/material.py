# finch/assets/importers/material.py
from __future__ import annotations

from pathlib import Path
from typing import TextIO, Union

from finch.assets.errors import MissingFile
from finch.assets.importers.base import AssetImporter
from finch.assets.types import MaterialDescriptor

PathLike = Union[str, Path]


def join_asset_path(directory: PathLike, filename: str) -> str:
    """Plain `directory/filename` join; no normalization."""
    return f"{directory}/{filename}"


def open_text_asset(directory: PathLike, filename: str) -> TextIO:
    path = join_asset_path(directory, filename)
    try:
        # Undecodable bytes survive as surrogates; they only matter inside comments.
        return open(path, "r", encoding="utf-8", errors="surrogateescape")
    except OSError as e:
        raise MissingFile(f"Cannot open {filename}: {e.strerror}", path=path) from e


def load_mtl(directory: PathLike, filename: str) -> MaterialDescriptor:
    """
    Read a material library and return the diffuse texture it names.

    Only `map_Kd` is understood; the first one carrying a filename wins.
    A library without one yields an empty MaterialDescriptor.
    """
    with open_text_asset(directory, filename) as f:
        for line in f:
            parts = line.split()
            if len(parts) < 2 or parts[0] != "map_Kd":
                continue

            return MaterialDescriptor(
                texture_path=join_asset_path(directory, parts[1])
            )

    return MaterialDescriptor()


class MtlImporter(AssetImporter[MaterialDescriptor]):
    extensions = (".mtl",)

    def import_file(self, path: Path) -> MaterialDescriptor:
        return load_mtl(path.parent.as_posix(), path.name)
