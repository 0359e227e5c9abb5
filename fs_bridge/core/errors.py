# fs_bridge/core/errors.py - Error kinds and OS error classification

import errno
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Closed set of failure categories a caller can branch on."""
    NOT_FOUND = "NotFound"
    PERMISSION_DENIED = "PermissionDenied"
    INVALID_ENCODING = "InvalidEncoding"
    ALREADY_EXISTS = "AlreadyExists"
    CROSS_DEVICE = "CrossDevice"
    OTHER = "Other"


class FsOperationError(Exception):
    """Raised by every facade operation that fails.

    The message is meant for display only; use ``kind`` to decide what to do.
    """

    def __init__(self, kind: ErrorKind, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.path = path

    def __repr__(self) -> str:
        return f"FsOperationError(kind={self.kind.value!r}, message={self.message!r}, path={self.path!r})"


def classify_os_error(exc: OSError) -> ErrorKind:
    """Maps an OSError (or subclass) onto an ErrorKind."""
    if isinstance(exc, FileNotFoundError):
        return ErrorKind.NOT_FOUND
    if isinstance(exc, PermissionError):
        return ErrorKind.PERMISSION_DENIED
    if isinstance(exc, FileExistsError) or exc.errno == errno.ENOTEMPTY:
        return ErrorKind.ALREADY_EXISTS
    if exc.errno == errno.EXDEV:
        return ErrorKind.CROSS_DEVICE
    return ErrorKind.OTHER


def from_os_error(exc: OSError, path: Optional[str] = None) -> FsOperationError:
    return FsOperationError(classify_os_error(exc), str(exc), path=path)
