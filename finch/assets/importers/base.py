# finch/assets/importers/base.py
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, Tuple, TypeVar

T = TypeVar("T")


class AssetImporter(ABC, Generic[T]):
    # Lower-case file suffixes this importer is registered for.
    extensions: Tuple[str, ...] = ()

    @abstractmethod
    def import_file(self, path: Path) -> T:
        """
        Decode one file into a plain data record.
        Holds no state between calls, so it is safe to share across threads.
        """
