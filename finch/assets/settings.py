# finch/assets/settings.py
from dataclasses import dataclass


@dataclass(slots=True)
class AssetServerSettings:
    """
    Configuration for background asset loading.
    """

    max_workers: int = 2
    thread_name_prefix: str = "AssetWorker"
    log_summaries: bool = True  # DEBUG-level summary of every decoded asset

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
