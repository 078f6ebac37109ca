"""Recursive, concurrent directory traversal."""

import logging

from direnum.config import ScannerConfig
from direnum.scanner.coordinator import Coordinator
from direnum.scanner.errors import ErrorPolicy
from direnum.scanner.exclusions import is_excluded
from direnum.scanner.filesystem import FileSystemEntry, describe_entry, list_directory
from direnum.scanner.progress import ProgressReporter
from direnum.scanner.store import EntryStore

logger = logging.getLogger(__name__)


class Walker:
    """Enumerates one directory per unit and spawns a unit per subdirectory.

    Every unit shares the same store, coordinator, config and policy.
    """

    def __init__(
        self,
        store: EntryStore,
        coordinator: Coordinator,
        config: ScannerConfig,
        policy: ErrorPolicy,
        progress: ProgressReporter,
    ):
        self.store = store
        self.coordinator = coordinator
        self.config = config
        self.policy = policy
        self.progress = progress

    def enumerate(self, directory: FileSystemEntry) -> None:
        if self.progress.enabled:
            self.progress.report_if_needed(
                self.store.count(),
                directory.path,
                self.coordinator.units_created,
                self.coordinator.units_completed,
            )

        if not directory.is_directory:
            raise NotADirectoryError(f"Path is not a directory: {directory.path}")

        try:
            children = list_directory(directory.path)
        except Exception as e:
            self.policy.handle(e, "Walker.enumerate", directory.path)
            return

        for child_path in children:
            try:
                self._process_child(child_path)
            except Exception as e:
                self.policy.handle(e, "Walker.enumerate", child_path)

    def _process_child(self, path: str) -> None:
        child = describe_entry(path, self.config.max_path_length)
        self.store.insert_or_ignore(child)

        if not child.is_directory or child.is_reparse_point:
            return

        if is_excluded(child.path, self.config.exclusions):
            logger.debug("Excluded from traversal: %s", child.path)
            return

        self.coordinator.spawn(self.enumerate, child)
