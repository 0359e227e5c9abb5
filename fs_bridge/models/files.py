# fs_bridge/models/files.py - Pydantic models for File System API operations

from pydantic import BaseModel, Field
from typing import List, Optional

from ..core.errors import ErrorKind

class DirectoryEntry(BaseModel):
    """One filesystem node; directories carry their fully expanded contents."""
    name: str = Field(..., description="Final path component (empty for a filesystem root).")
    path: str = Field(..., description="Path of the node as reached from the listing root.")
    is_directory: bool = Field(..., description="Whether the node is a directory (symlinks followed).")
    children: List["DirectoryEntry"] = Field(default_factory=list, description="Child nodes in OS listing order.")

DirectoryEntry.model_rebuild()

class FileMetadata(BaseModel):
    """Snapshot of a path's OS metadata at call time."""
    is_file: bool
    is_dir: bool
    size_bytes: int = Field(..., ge=0, description="Size in bytes as reported by stat.")

class ReadTextResponse(BaseModel):
    """Response model for reading file content."""
    path: str = Field(..., description="The path that was read.")
    content: str = Field(..., description="The decoded content of the file.")
    encoding: str = Field(..., description="The codec actually used to decode the file.")

class WriteTextRequest(BaseModel):
    """Request model for writing file content."""
    content: str = Field(..., description="The content to write to the file.")
    encoding: Optional[str] = Field(None, description="Encoding label, e.g. 'gbk'. Unknown labels fall back to UTF-8.")

class JoinPathsRequest(BaseModel):
    base_path: str = Field(..., description="Path the segments are appended to.")
    segments: List[str] = Field(default_factory=list, description="Segments appended left to right.")

class RenamePathRequest(BaseModel):
    old_path: str
    new_path: str

class PathResponse(BaseModel):
    path: str

class PathExistsResponse(BaseModel):
    path: str
    exists: bool

class ErrorResponse(BaseModel):
    """Body carried in the 'detail' of every failed File System request."""
    kind: ErrorKind = Field(..., description="Error category callers can branch on.")
    message: str = Field(..., description="Human-readable description, for diagnostics only.")
