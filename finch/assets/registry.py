# finch/assets/registry.py
from typing import Any, Dict, Iterator, Optional

from finch.assets.handle import AssetId
from finch.assets.types import AudioClip


class AssetRegistry:
    """
    Stores decoded asset data (CPU side) mapped by AssetId.
    Audio clips stored here are owned by the registry until removed.
    """

    def __init__(self) -> None:
        self._storage: Dict[AssetId, Any] = {}

    def store(self, asset_id: AssetId, data: Any) -> None:
        """Register a decoded asset, releasing any clip it replaces."""
        previous = self._storage.get(asset_id)
        if previous is not None and previous is not data:
            _release(previous)
        self._storage[asset_id] = data

    def get(self, asset_id: AssetId) -> Optional[Any]:
        """Retrieve asset data if available."""
        return self._storage.get(asset_id)

    def remove(self, asset_id: AssetId) -> Optional[Any]:
        """Forget an asset and hand ownership of its data back to the caller."""
        return self._storage.pop(asset_id, None)

    def __contains__(self, asset_id: AssetId) -> bool:
        return asset_id in self._storage

    def __len__(self) -> int:
        return len(self._storage)

    def __iter__(self) -> Iterator[AssetId]:
        return iter(list(self._storage))

    def clear(self) -> None:
        """Drop all assets, releasing any audio buffers still held."""
        for data in self._storage.values():
            _release(data)
        self._storage.clear()


def _release(data: Any) -> None:
    if isinstance(data, AudioClip) and not data.released:
        data.release()
