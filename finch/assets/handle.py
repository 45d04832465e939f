# finch/assets/handle.py
import hashlib
from dataclasses import dataclass
from typing import Generic, NewType, TypeVar

AssetId = NewType("AssetId", int)  # 64-bit integer GUID
T = TypeVar("T")  # Type of data (MeshRecord, AudioClip, MaterialDescriptor)


def asset_id_for(path: str) -> AssetId:
    """Stable id derived from the asset's root-relative path."""
    digest = hashlib.sha256(path.encode("utf-8")).digest()
    return AssetId(int.from_bytes(digest[:8], "little"))


@dataclass(frozen=True)
class AssetHandle(Generic[T]):
    """
    Lightweight reference to an asset.
    Holding this does not guarantee that the asset is loaded.
    """

    id: AssetId
    path: str

    @classmethod
    def for_path(cls, path: str) -> "AssetHandle[T]":
        return cls(asset_id_for(path), path)
