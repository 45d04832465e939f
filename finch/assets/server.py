# finch/assets/server.py
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from queue import Empty, Queue
from typing import Any, Dict, Iterable, List, Optional, Tuple

from finch.assets.debug import describe_asset
from finch.assets.errors import UnsupportedAsset
from finch.assets.handle import AssetHandle, AssetId
from finch.assets.importers.base import AssetImporter
from finch.assets.importers.material import MtlImporter
from finch.assets.importers.mesh import ObjImporter
from finch.assets.importers.wave import WaveImporter
from finch.assets.registry import AssetRegistry
from finch.assets.settings import AssetServerSettings
from finch.assets.types import AudioClip
from finch.log import get_logger

logger = get_logger(__name__)


def default_importers() -> Tuple[AssetImporter, ...]:
    return (WaveImporter(), ObjImporter(), MtlImporter())


class AssetServer:
    def __init__(
        self,
        asset_root: Path,
        settings: Optional[AssetServerSettings] = None,
        importers: Optional[Iterable[AssetImporter]] = None,
    ) -> None:
        self.root = Path(asset_root)
        self.settings = settings or AssetServerSettings()
        self.registry = AssetRegistry()

        self._executor = ThreadPoolExecutor(
            max_workers=self.settings.max_workers,
            thread_name_prefix=self.settings.thread_name_prefix,
        )
        # (asset_id, data, error); exactly one of data / error is set
        self._done_queue: "Queue[Tuple[AssetId, Any, Optional[Exception]]]" = Queue()

        self._handles: Dict[str, AssetHandle] = {}  # Path -> Handle
        self.failures: Dict[AssetId, Exception] = {}

        self._importers: Dict[str, AssetImporter] = {}
        for importer in importers if importers is not None else default_importers():
            for ext in importer.extensions:
                self._importers[ext.lower()] = importer

    def load(self, path: str) -> AssetHandle:
        """
        Non-blocking load request. Return handle instantly.
        """
        if path in self._handles:
            return self._handles[path]

        handle: AssetHandle = AssetHandle.for_path(path)
        self._handles[path] = handle

        full_path = self.root / path
        logger.info("Queued %s", path)
        self._executor.submit(self._worker_load, handle.id, full_path)

        return handle

    def _worker_load(self, asset_id: AssetId, full_path: Path) -> None:
        """
        Decode asset on background thread.
        """
        try:
            ext = full_path.suffix.lower()
            importer = self._importers.get(ext)
            if importer is None:
                raise UnsupportedAsset(
                    f"No importer for '{ext}'", path=full_path.as_posix()
                )

            data = importer.import_file(full_path)
        except Exception as e:
            self._done_queue.put((asset_id, None, e))
            return

        self._done_queue.put((asset_id, data, None))

    def update(self) -> List[AssetId]:
        """
        Called on the Main Thread every frame.
        Return list of newly loaded AssetIds (so Renderer can upload them).
        Failed loads land in `failures` instead.
        """
        loaded_ids = []
        while True:
            try:
                asset_id, data, error = self._done_queue.get_nowait()
            except Empty:
                break

            if not self._is_live(asset_id):
                # Unloaded while the decode was in flight.
                if isinstance(data, AudioClip) and not data.released:
                    data.release()
                logger.info("Dropped result for unloaded asset %d", asset_id)
                continue

            if error is not None:
                logger.error("Failed to load %s: %s", self._path_of(asset_id), error)
                self.failures[asset_id] = error
                continue

            self.failures.pop(asset_id, None)
            self.registry.store(asset_id, data)
            loaded_ids.append(asset_id)

            if self.settings.log_summaries:
                for line in describe_asset(data, self._path_of(asset_id)):
                    logger.debug(line)

        return loaded_ids

    def unload(self, handle: AssetHandle) -> None:
        """
        Forget an asset so the next load() decodes it again.
        Audio buffers are released here; callers must drop their references.
        """
        self._handles.pop(handle.path, None)
        self.failures.pop(handle.id, None)

        data = self.registry.remove(handle.id)
        if isinstance(data, AudioClip) and not data.released:
            data.release()
        logger.info("Unloaded %s", handle.path)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _is_live(self, asset_id: AssetId) -> bool:
        return any(h.id == asset_id for h in self._handles.values())

    def _path_of(self, asset_id: AssetId) -> str:
        for path, handle in self._handles.items():
            if handle.id == asset_id:
                return path
        return str(asset_id)
