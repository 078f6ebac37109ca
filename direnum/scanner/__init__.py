"""Scanner module for concurrent filesystem traversal."""

from .coordinator import Coordinator, CoordinatorState
from .errors import ErrorClass, ErrorPolicy, PathTooLongError, TraversalError, classify
from .exclusions import is_excluded
from .filesystem import FileAttributes, FileSystemEntry, describe_entry, list_directory
from .progress import ProgressReporter, ProgressSnapshot
from .scanner import Scanner, ScanResult
from .store import EntryStore
from .walker import Walker

__all__ = [
    "Scanner",
    "ScanResult",
    "Walker",
    "Coordinator",
    "CoordinatorState",
    "EntryStore",
    "ErrorClass",
    "ErrorPolicy",
    "PathTooLongError",
    "TraversalError",
    "classify",
    "is_excluded",
    "FileAttributes",
    "FileSystemEntry",
    "describe_entry",
    "list_directory",
    "ProgressReporter",
    "ProgressSnapshot",
]
