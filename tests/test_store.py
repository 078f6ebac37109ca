"""Tests for the shared entry store."""

import threading
from datetime import datetime, timezone

from direnum.scanner.filesystem import FileAttributes, FileSystemEntry
from direnum.scanner.store import EntryStore


def make_entry(path: str, size: int = 0, attributes=FileAttributes.NORMAL) -> FileSystemEntry:
    now = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    return FileSystemEntry(
        path=path,
        directory_path=path.rsplit("/", 1)[0] or "/",
        created_at=now,
        modified_at=now,
        size=size,
        attributes=attributes,
    )


class TestEntryStore:
    """Tests for EntryStore class."""

    def test_insert_new_entry(self):
        store = EntryStore()
        assert store.insert_or_ignore(make_entry("/r/a")) is True
        assert store.count() == 1

    def test_first_writer_wins(self):
        store = EntryStore()
        first = make_entry("/r/a", size=1)
        second = make_entry("/r/a", size=2)

        store.insert_or_ignore(first)
        assert store.insert_or_ignore(second) is False

        assert store.count() == 1
        assert store.snapshot() == (first,)

    def test_keys_are_case_insensitive(self):
        store = EntryStore()
        store.insert_or_ignore(make_entry("/r/Photos"))
        store.insert_or_ignore(make_entry("/r/PHOTOS"))

        assert store.count() == 1
        assert [e.path for e in store.snapshot()] == ["/r/Photos"]

    def test_snapshot_is_sorted_tuple(self):
        store = EntryStore()
        for path in ["/r/c", "/r/a", "/r/b"]:
            store.insert_or_ignore(make_entry(path))

        snapshot = store.snapshot()
        assert isinstance(snapshot, tuple)
        assert [e.path for e in snapshot] == ["/r/a", "/r/b", "/r/c"]

    def test_counts_by_kind(self):
        store = EntryStore()
        store.insert_or_ignore(make_entry("/r/dir", attributes=FileAttributes.DIRECTORY))
        store.insert_or_ignore(make_entry("/r/file"))
        store.insert_or_ignore(
            make_entry("/r/link", attributes=FileAttributes.DIRECTORY | FileAttributes.REPARSE_POINT)
        )

        counts = store.counts()
        assert counts.directories == 1
        assert counts.files == 1
        assert counts.reparse_points == 1

    def test_concurrent_inserts_converge(self):
        store = EntryStore()
        winners: list[bool] = []
        lock = threading.Lock()

        def insert(worker: int) -> None:
            for i in range(200):
                inserted = store.insert_or_ignore(make_entry(f"/r/{i}", size=worker))
                if inserted:
                    with lock:
                        winners.append(inserted)

        threads = [threading.Thread(target=insert, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert store.count() == 200
        assert len(winners) == 200
