"""Classification of filesystem errors into continue-or-abort policies."""

import errno
import logging
import threading
from enum import Enum

from direnum.diagnostics import verbose_exception_string

logger = logging.getLogger(__name__)

_PERMISSION_ERRNOS = frozenset({errno.EACCES, errno.EPERM})


class ErrorClass(Enum):
    """Kind of failure raised while listing or describing a node."""

    PERMISSION_DENIED = "permission_denied"
    PATH_TOO_LONG = "path_too_long"
    OTHER = "other"


class PathTooLongError(OSError):
    """Raised when a path exceeds the configured maximum length."""

    def __init__(self, path: str, limit: int):
        super().__init__(errno.ENAMETOOLONG, f"Path longer than {limit} characters", path)


class TraversalError(Exception):
    """Raised when a fatal failure aborts the whole traversal."""

    def __init__(self, path: str, cause: BaseException):
        super().__init__(f"Traversal aborted at {path}: {cause}")
        self.path = path
        self.__cause__ = cause


def classify(exc: BaseException) -> ErrorClass:
    if isinstance(exc, PermissionError):
        return ErrorClass.PERMISSION_DENIED
    if isinstance(exc, OSError):
        if exc.errno in _PERMISSION_ERRNOS:
            return ErrorClass.PERMISSION_DENIED
        if exc.errno == errno.ENAMETOOLONG:
            return ErrorClass.PATH_TOO_LONG
    return ErrorClass.OTHER


class ErrorPolicy:
    """Decides whether a classified failure is skipped or propagated.

    ``handle`` always logs before re-raising, so the offending path and the
    thread it failed on are never lost when a run aborts.
    """

    def __init__(
        self,
        continue_on_permission_denied: bool = True,
        continue_on_path_too_long: bool = True,
    ):
        self.continue_on_permission_denied = continue_on_permission_denied
        self.continue_on_path_too_long = continue_on_path_too_long

    def should_continue(self, exc: BaseException) -> bool:
        error_class = classify(exc)
        if error_class is ErrorClass.PERMISSION_DENIED:
            return self.continue_on_permission_denied
        if error_class is ErrorClass.PATH_TOO_LONG:
            return self.continue_on_path_too_long
        return False

    def handle(self, exc: Exception, method: str, path: str) -> None:
        """Log ``exc`` and return to continue, or re-raise it to abort."""
        error_class = classify(exc)
        thread_name = threading.current_thread().name

        if error_class is ErrorClass.OTHER:
            logger.error(
                "[%s] %s path: %s error: %s\n%s",
                thread_name,
                method,
                path,
                error_class.value,
                verbose_exception_string(exc),
            )
            raise exc

        logger.warning(
            "[%s] %s path: %s error: %s message: %s",
            thread_name,
            method,
            path,
            error_class.value,
            exc,
        )
        if not self.should_continue(exc):
            raise exc
