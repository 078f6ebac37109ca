"""Tests for error classification and continuation policy."""

import errno
import logging

import pytest

from direnum.scanner.errors import (
    ErrorClass,
    ErrorPolicy,
    PathTooLongError,
    TraversalError,
    classify,
)


class TestClassify:
    """Tests for classify function."""

    def test_permission_error(self):
        assert classify(PermissionError(errno.EACCES, "denied")) is ErrorClass.PERMISSION_DENIED

    def test_oserror_with_eperm(self):
        assert classify(OSError(errno.EPERM, "not permitted")) is ErrorClass.PERMISSION_DENIED

    def test_path_too_long_error(self):
        assert classify(PathTooLongError("/x" * 10, 5)) is ErrorClass.PATH_TOO_LONG

    def test_oserror_with_enametoolong(self):
        assert classify(OSError(errno.ENAMETOOLONG, "too long")) is ErrorClass.PATH_TOO_LONG

    def test_not_a_directory_is_other(self):
        assert classify(NotADirectoryError("/r/f")) is ErrorClass.OTHER

    def test_unrelated_exception_is_other(self):
        assert classify(ValueError("boom")) is ErrorClass.OTHER


class TestErrorPolicy:
    """Tests for ErrorPolicy class."""

    def test_continues_on_permission_denied_by_default(self):
        policy = ErrorPolicy()
        policy.handle(PermissionError(errno.EACCES, "denied"), "test", "/r/a")

    def test_reraises_permission_denied_when_disabled(self):
        policy = ErrorPolicy(continue_on_permission_denied=False)
        with pytest.raises(PermissionError):
            policy.handle(PermissionError(errno.EACCES, "denied"), "test", "/r/a")

    def test_flags_are_independent(self):
        policy = ErrorPolicy(continue_on_permission_denied=False, continue_on_path_too_long=True)
        policy.handle(PathTooLongError("/r/long", 3), "test", "/r/long")
        assert policy.should_continue(PermissionError()) is False

    def test_reraises_path_too_long_when_disabled(self):
        policy = ErrorPolicy(continue_on_path_too_long=False)
        with pytest.raises(PathTooLongError):
            policy.handle(PathTooLongError("/r/long", 3), "test", "/r/long")

    def test_other_always_propagates(self):
        policy = ErrorPolicy(continue_on_permission_denied=True, continue_on_path_too_long=True)
        with pytest.raises(ValueError):
            policy.handle(ValueError("boom"), "test", "/r/a")

    def test_logs_before_reraise(self, caplog):
        policy = ErrorPolicy(continue_on_permission_denied=False)
        with caplog.at_level(logging.WARNING, logger="direnum.scanner.errors"):
            with pytest.raises(PermissionError):
                policy.handle(PermissionError(errno.EACCES, "denied"), "Walker.enumerate", "/r/a")

        assert "/r/a" in caplog.text
        assert "Walker.enumerate" in caplog.text
        assert "permission_denied" in caplog.text

    def test_other_logged_with_exception_chain(self, caplog):
        policy = ErrorPolicy()
        with caplog.at_level(logging.ERROR, logger="direnum.scanner.errors"):
            with pytest.raises(ValueError):
                policy.handle(ValueError("boom"), "Walker.enumerate", "/r/a")

        assert "Exception: ValueError Message: boom" in caplog.text


class TestTraversalError:
    """Tests for TraversalError class."""

    def test_keeps_path_and_cause(self):
        cause = NotADirectoryError("/r/f")
        error = TraversalError("/r/f", cause)
        assert error.path == "/r/f"
        assert error.__cause__ is cause
        assert "/r/f" in str(error)
