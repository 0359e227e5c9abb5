# fs_bridge/core/filesystem.py - Stateless filesystem operations exposed to the shell
#
# Every operation either returns a plain value or raises FsOperationError.
# Nothing here keeps state between calls.

import os
import stat
import shutil
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Optional, Tuple

from .. import config
from ..models.files import DirectoryEntry, FileMetadata
from .encoding import decode_bytes, encode_text
from .errors import ErrorKind, FsOperationError, from_os_error

logger = logging.getLogger(__name__)


@contextmanager
def translate_os_errors(action: str, path: str):
    """Turns OSError and invalid-path ValueError raised inside the block into FsOperationError."""
    try:
        yield
    except OSError as e:
        logger.warning(f"{action} failed for '{path}': {e}")
        raise from_os_error(e, path=path) from e
    except ValueError as e:
        # Strings the OS cannot take as a path at all, e.g. with an embedded NUL.
        logger.warning(f"{action} rejected invalid path {path!r}: {e}")
        raise FsOperationError(ErrorKind.OTHER, str(e), path=path) from e


# --- Directory listing ---

def list_tree(root_path: str, max_depth: Optional[int] = None) -> DirectoryEntry:
    """
    Recursively lists root_path, returning an entry for the root and every descendant.

    Children keep the order the OS lists them in. Any unreadable node aborts the
    whole walk. A directory already on the current ancestor chain (a symlink
    loop) is returned without children instead of being entered again.

    Args:
        root_path: Directory (or file) to list.
        max_depth: Deepest level allowed below the root. Defaults to config.MAX_TREE_DEPTH.

    Raises:
        FsOperationError: If the root is missing, a node cannot be read, or max_depth is exceeded.
    """
    if max_depth is None:
        max_depth = config.MAX_TREE_DEPTH

    with translate_os_errors("List tree", root_path):
        os.stat(root_path)

    logger.debug(f"Listing tree at '{root_path}' (max depth {max_depth})")
    return _walk(root_path, os.path.isdir(root_path), 0, (), max_depth)


def entry_name(path: str) -> str:
    """Final component of path, or "" when there is none ("/", ".", "..", "a/..")."""
    name = os.path.basename(os.path.normpath(path))
    if name in (os.curdir, os.pardir):
        return ""
    return name


def _walk(path: str, is_directory: bool, depth: int, ancestors: Tuple[str, ...], max_depth: int) -> DirectoryEntry:
    if depth > max_depth:
        raise FsOperationError(
            ErrorKind.OTHER,
            f"Maximum listing depth of {max_depth} exceeded at '{path}'",
            path=path,
        )

    entry = DirectoryEntry(name=entry_name(path), path=path, is_directory=is_directory)
    if not is_directory:
        return entry

    canonical = os.path.realpath(path)
    if canonical in ancestors:
        logger.warning(f"Skipping '{path}': directory loop back to '{canonical}'")
        return entry

    with translate_os_errors("List tree", path):
        with os.scandir(path) as it:
            children = [(child.path, child.is_dir()) for child in it]

    for child_path, child_is_dir in children:
        entry.children.append(
            _walk(child_path, child_is_dir, depth + 1, ancestors + (canonical,), max_depth)
        )
    return entry


# --- File content ---

def read_text_with_encoding(file_path: str, encoding_label: Optional[str] = None) -> Tuple[str, str]:
    """Reads and strictly decodes a file. Returns (text, encoding actually used)."""
    with translate_os_errors("Read file", file_path):
        with open(file_path, "rb") as f:
            data = f.read()
    text, encoding = decode_bytes(data, encoding_label)
    logger.debug(f"Read {len(data)} bytes from '{file_path}' as {encoding}")
    return text, encoding


def read_text(file_path: str, encoding_label: Optional[str] = None) -> str:
    text, _ = read_text_with_encoding(file_path, encoding_label)
    return text


def write_text(file_path: str, content: str, encoding_label: Optional[str] = None) -> None:
    """
    Encodes content and overwrites file_path with it (creating the file if needed).

    Encoding happens before the file is opened, so an unencodable character
    leaves any existing file untouched. The write itself is not atomic.
    """
    data, encoding = encode_text(content, encoding_label)
    with translate_os_errors("Write file", file_path):
        with open(file_path, "wb") as f:
            f.write(data)
    logger.info(f"Wrote {len(data)} bytes to '{file_path}' as {encoding}")


# --- Create / delete / rename ---

def make_directory(dir_path: str) -> None:
    """Creates dir_path and any missing parents. Existing directories are fine."""
    with translate_os_errors("Create directory", dir_path):
        os.makedirs(dir_path, exist_ok=True)
    logger.info(f"Ensured directory '{dir_path}'")


def delete_file(file_path: str) -> None:
    with translate_os_errors("Delete file", file_path):
        os.remove(file_path)
    logger.info(f"Deleted file '{file_path}'")


def delete_directory(dir_path: str) -> None:
    """Removes dir_path and everything under it. A failure midway is not rolled back."""
    with translate_os_errors("Delete directory", dir_path):
        shutil.rmtree(dir_path)
    logger.info(f"Deleted directory '{dir_path}'")


def rename_path(old_path: str, new_path: str) -> None:
    with translate_os_errors("Rename", old_path):
        os.rename(old_path, new_path)
    logger.info(f"Renamed '{old_path}' -> '{new_path}'")


# --- Paths ---

def resolve_path(path: str) -> str:
    """Returns the canonical absolute form of an existing path."""
    if not path:
        # Path("") would silently mean the working directory.
        raise FsOperationError(ErrorKind.NOT_FOUND, "No such file or directory: ''", path=path)
    with translate_os_errors("Resolve path", path):
        try:
            return str(Path(path).resolve(strict=True))
        except RuntimeError as e:
            # Symlink loops surface as RuntimeError on older interpreters.
            raise FsOperationError(ErrorKind.OTHER, str(e), path=path) from e


def join_paths(base_path: str, segments: Iterable[str]) -> str:
    """Appends each segment to base_path with the native join rules. Never fails."""
    return os.path.join(base_path, *segments)


def path_exists(path: str) -> bool:
    """True if the OS reports path as present. Errors count as 'does not exist'."""
    try:
        os.stat(path)
    except (OSError, ValueError):
        return False
    return True


def get_metadata(path: str) -> FileMetadata:
    with translate_os_errors("Get metadata", path):
        st = os.stat(path)
    return FileMetadata(
        is_file=stat.S_ISREG(st.st_mode),
        is_dir=stat.S_ISDIR(st.st_mode),
        size_bytes=st.st_size,
    )
