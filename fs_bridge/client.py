# fs_bridge/client.py - HTTP client for the filesystem bridge
#
# Mirrors the shell's two call groups: ``client.fs`` for file and directory
# operations, ``client.path`` for path helpers.

import logging
from types import SimpleNamespace
from typing import Dict, List, Optional

import httpx

from . import config
from .core.errors import ErrorKind, FsOperationError
from .models.files import DirectoryEntry, FileMetadata

logger = logging.getLogger(__name__)


class FsBridgeClient:
    """Calls a running fs_bridge service. Failed operations raise FsOperationError."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 http_client: Optional[httpx.Client] = None):
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(
            base_url=base_url or config.API_BASE_URL,
            timeout=timeout if timeout is not None else config.CLIENT_TIMEOUT,
        )
        self.fs = SimpleNamespace(
            list_tree=self.list_tree,
            read_text=self.read_text,
            write_text=self.write_text,
            make_directory=self.make_directory,
            delete_file=self.delete_file,
            delete_directory=self.delete_directory,
            get_metadata=self.get_metadata,
        )
        self.path = SimpleNamespace(
            resolve=self.resolve_path,
            join=self.join_paths,
            exists=self.path_exists,
            rename=self.rename_path,
        )

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def _call_api(self, method: str, endpoint: str, **kwargs) -> Dict:
        response = self._http.request(method, f"/fs{endpoint}", **kwargs)
        logger.debug(f"API Call {method} {endpoint} -> Status {response.status_code}")
        if response.is_success:
            if response.status_code == 204 or not response.content:
                return {}
            return response.json()
        raise self._to_error(response)

    @staticmethod
    def _to_error(response: httpx.Response) -> FsOperationError:
        try:
            detail = response.json().get("detail")
        except ValueError:
            detail = None
        if isinstance(detail, dict) and "kind" in detail:
            try:
                kind = ErrorKind(detail["kind"])
            except ValueError:
                kind = ErrorKind.OTHER
            return FsOperationError(kind, detail.get("message", ""))
        # Request validation errors and anything not produced by the router.
        return FsOperationError(ErrorKind.OTHER, f"Status {response.status_code}: {response.text[:200]}")

    # --- fs group ---

    def list_tree(self, root_path: str) -> DirectoryEntry:
        return DirectoryEntry.model_validate(self._call_api("GET", "/tree", params={"path": root_path}))

    def read_text(self, file_path: str, encoding: Optional[str] = None) -> str:
        params = {"path": file_path}
        if encoding is not None:
            params["encoding"] = encoding
        return self._call_api("GET", "/content", params=params)["content"]

    def write_text(self, file_path: str, content: str, encoding: Optional[str] = None) -> None:
        self._call_api("PUT", "/content", params={"path": file_path},
                       json={"content": content, "encoding": encoding})

    def make_directory(self, dir_path: str) -> None:
        self._call_api("POST", "/directories", params={"path": dir_path})

    def delete_file(self, file_path: str) -> None:
        self._call_api("DELETE", "/files", params={"path": file_path})

    def delete_directory(self, dir_path: str) -> None:
        self._call_api("DELETE", "/directories", params={"path": dir_path})

    def get_metadata(self, path: str) -> FileMetadata:
        return FileMetadata.model_validate(self._call_api("GET", "/metadata", params={"path": path}))

    # --- path group ---

    def resolve_path(self, path: str) -> str:
        return self._call_api("GET", "/resolve", params={"path": path})["path"]

    def join_paths(self, base_path: str, segments: List[str]) -> str:
        return self._call_api("POST", "/join", json={"base_path": base_path, "segments": list(segments)})["path"]

    def path_exists(self, path: str) -> bool:
        return self._call_api("GET", "/exists", params={"path": path})["exists"]

    def rename_path(self, old_path: str, new_path: str) -> None:
        self._call_api("POST", "/rename", json={"old_path": old_path, "new_path": new_path})
