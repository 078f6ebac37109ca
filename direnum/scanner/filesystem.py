"""Filesystem node description and directory listing."""

import logging
import os
import stat
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import IntFlag
from pathlib import Path

from direnum.scanner.errors import PathTooLongError

logger = logging.getLogger(__name__)


class FileAttributes(IntFlag):
    """Node attribute bits, numbered like the Windows file attributes."""

    READONLY = 0x1
    HIDDEN = 0x2
    SYSTEM = 0x4
    DIRECTORY = 0x10
    ARCHIVE = 0x20
    NORMAL = 0x80
    REPARSE_POINT = 0x400


_KNOWN_ATTRIBUTES = sum(flag.value for flag in FileAttributes)

_ATTRIBUTE_NAMES = {
    FileAttributes.READONLY: "ReadOnly",
    FileAttributes.HIDDEN: "Hidden",
    FileAttributes.SYSTEM: "System",
    FileAttributes.DIRECTORY: "Directory",
    FileAttributes.ARCHIVE: "Archive",
    FileAttributes.NORMAL: "Normal",
    FileAttributes.REPARSE_POINT: "ReparsePoint",
}


@dataclass(frozen=True)
class FileSystemEntry:
    path: str
    directory_path: str
    created_at: datetime | None
    modified_at: datetime | None
    size: int
    attributes: FileAttributes

    @property
    def is_directory(self) -> bool:
        return bool(self.attributes & FileAttributes.DIRECTORY)

    @property
    def is_reparse_point(self) -> bool:
        return bool(self.attributes & FileAttributes.REPARSE_POINT)


def format_attributes(attributes: FileAttributes) -> str:
    """Comma separated attribute names, e.g. ``Directory, ReparsePoint``.

    Bits without a name are appended as one hexadecimal value.
    """
    names = [name for flag, name in _ATTRIBUTE_NAMES.items() if attributes & flag]
    unnamed = int(attributes) & ~_KNOWN_ATTRIBUTES
    if unnamed:
        names.append(f"0x{unnamed:x}")
    return ", ".join(names) if names else str(int(attributes))


def list_directory(directory: str) -> list[str]:
    """Return the full paths of the immediate children of ``directory``."""
    with os.scandir(directory) as entries:
        return [entry.path for entry in entries]


def describe_entry(path: str, max_path_length: int = 4096) -> FileSystemEntry:
    """Build the entry for ``path`` without following symlinks.

    A node that vanished between listing and ``lstat`` is still described,
    with size ``-1`` and no timestamps.
    """
    if len(path) > max_path_length:
        raise PathTooLongError(path, max_path_length)

    directory_path = str(Path(path).parent)

    try:
        stat_result = os.lstat(path)
    except FileNotFoundError:
        logger.debug("Node disappeared during scan: %s", path)
        return FileSystemEntry(
            path=path,
            directory_path=directory_path,
            created_at=None,
            modified_at=None,
            size=-1,
            attributes=FileAttributes(0),
        )

    return FileSystemEntry(
        path=path,
        directory_path=directory_path,
        created_at=_to_utc(_get_birthtime(stat_result)),
        modified_at=_to_utc(stat_result.st_mtime),
        size=stat_result.st_size,
        attributes=attributes_from_stat(path, stat_result),
    )


def attributes_from_stat(path: str, stat_result: os.stat_result) -> FileAttributes:
    native = getattr(stat_result, "st_file_attributes", None)
    if native is not None:
        return FileAttributes(native)

    attributes = FileAttributes(0)
    mode = stat_result.st_mode

    if stat.S_ISLNK(mode):
        attributes |= FileAttributes.REPARSE_POINT
        if os.path.isdir(path):
            attributes |= FileAttributes.DIRECTORY
    elif stat.S_ISDIR(mode):
        attributes |= FileAttributes.DIRECTORY

    if os.path.basename(path).startswith("."):
        attributes |= FileAttributes.HIDDEN
    if not mode & (stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH):
        attributes |= FileAttributes.READONLY

    if not attributes:
        attributes = FileAttributes.NORMAL
    return attributes


def _get_birthtime(stat_result: os.stat_result) -> float:
    try:
        return stat_result.st_birthtime
    except AttributeError:
        return stat_result.st_ctime


def _to_utc(timestamp: float) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)
