"""Main scanner implementation."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from direnum.config import ScannerConfig
from direnum.scanner.coordinator import Coordinator
from direnum.scanner.errors import ErrorPolicy
from direnum.scanner.filesystem import FileSystemEntry, describe_entry
from direnum.scanner.progress import ProgressReporter, ProgressSink
from direnum.scanner.store import EntryStore
from direnum.scanner.walker import Walker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanResult:
    """Inventory produced by a completed traversal."""

    root: str
    entries: tuple[FileSystemEntry, ...]
    directories: int
    files: int
    reparse_points: int
    units: int
    elapsed_seconds: float

    @property
    def total(self) -> int:
        return len(self.entries)


def normalize_root(raw: str | Path) -> str:
    """Strip quotes and surrounding whitespace, and make the path absolute."""
    text = str(raw).strip().replace('"', "")
    return str(Path(text).absolute())


class Scanner:
    """Walks a directory tree concurrently and collects every node beneath it."""

    def __init__(self, config: ScannerConfig | None = None, on_progress: ProgressSink | None = None):
        self.config = config or ScannerConfig()
        self.on_progress = on_progress

    def scan(self, root: str | Path) -> ScanResult:
        root_path = normalize_root(root)
        root_entry = describe_entry(root_path, self.config.max_path_length)

        store = EntryStore()
        progress = ProgressReporter(self.on_progress, interval=self.config.progress_interval)
        policy = ErrorPolicy(
            continue_on_permission_denied=self.config.continue_on_permission_denied,
            continue_on_path_too_long=self.config.continue_on_path_too_long,
        )

        logger.info("Getting directories and files for path: %s", root_path)

        with ThreadPoolExecutor(
            max_workers=self.config.max_workers, thread_name_prefix="direnum"
        ) as executor:
            coordinator = Coordinator(executor, settle_interval=self.config.settle_interval)
            walker = Walker(store, coordinator, self.config, policy, progress)
            coordinator.spawn(walker.enumerate, root_entry)
            try:
                coordinator.wait()
            except KeyboardInterrupt:
                coordinator.interrupt()
                raise

        counts = store.counts()
        return ScanResult(
            root=root_path,
            entries=store.snapshot(),
            directories=counts.directories,
            files=counts.files,
            reparse_points=counts.reparse_points,
            units=coordinator.units_created,
            elapsed_seconds=progress.elapsed_seconds,
        )
