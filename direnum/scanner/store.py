"""Shared, case-insensitive store of discovered entries."""

import threading
from dataclasses import dataclass

from direnum.scanner.filesystem import FileSystemEntry


@dataclass(frozen=True)
class EntryCounts:
    directories: int = 0
    files: int = 0
    reparse_points: int = 0


class EntryStore:
    """Concurrent path to entry map with insert-or-ignore semantics.

    Keys are case-folded paths. Writers serialize on a lock; ``count`` reads
    the dict length without it and may be momentarily stale.
    """

    def __init__(self):
        self._entries: dict[str, FileSystemEntry] = {}
        self._lock = threading.Lock()

    def insert_or_ignore(self, entry: FileSystemEntry) -> bool:
        key = entry.path.casefold()
        with self._lock:
            if key in self._entries:
                return False
            self._entries[key] = entry
            return True

    def count(self) -> int:
        return len(self._entries)

    def snapshot(self) -> tuple[FileSystemEntry, ...]:
        with self._lock:
            entries = list(self._entries.values())
        return tuple(sorted(entries, key=lambda e: e.path))

    def counts(self) -> EntryCounts:
        directories = files = reparse_points = 0
        for entry in self.snapshot():
            if entry.is_reparse_point:
                reparse_points += 1
            elif entry.is_directory:
                directories += 1
            else:
                files += 1
        return EntryCounts(directories=directories, files=files, reparse_points=reparse_points)
