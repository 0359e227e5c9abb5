# fs_bridge/api/files.py - API Router for File System Operations

import logging
from typing import NoReturn, Optional

from fastapi import APIRouter, HTTPException, Query, Response, status

# Import models and the filesystem facade
from ..models.files import (
    DirectoryEntry, FileMetadata, ReadTextResponse, WriteTextRequest,
    JoinPathsRequest, RenamePathRequest, PathResponse, PathExistsResponse, ErrorResponse
)
from ..core import filesystem
from ..core.errors import ErrorKind, FsOperationError

logger = logging.getLogger(__name__)

# Create an API router
router = APIRouter(
    prefix="/fs", # Prefix for all routes in this file
    tags=["File System"], # Tag for OpenAPI documentation
)

# --- Error Translation ---

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorKind.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.CROSS_DEVICE: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_ENCODING: 422,
    ErrorKind.OTHER: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

ERROR_RESPONSES = {
    403: {"model": ErrorResponse, "description": "Permission denied."},
    404: {"model": ErrorResponse, "description": "Path not found."},
    409: {"model": ErrorResponse, "description": "Conflicting entry or cross-device move."},
    500: {"model": ErrorResponse, "description": "Any other OS failure."},
}

def raise_http_error(operation: str, error: Exception) -> NoReturn:
    """
    Converts an exception raised by the facade into an HTTPException.

    The detail is always {"kind": ..., "message": ...} so callers can branch on
    the kind without parsing the message.
    """
    if isinstance(error, FsOperationError):
        logger.warning(f"{operation} failed ({error.kind.value}): {error.message}")
        detail = ErrorResponse(kind=error.kind, message=error.message)
        raise HTTPException(status_code=STATUS_BY_KIND[error.kind], detail=detail.model_dump(mode="json"))

    logger.error(f"Unexpected error during {operation}: {error}", exc_info=True)
    detail = ErrorResponse(kind=ErrorKind.OTHER, message=f"An unexpected server error occurred during {operation}.")
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail.model_dump(mode="json"))

# --- API Endpoints ---

@router.get(
    "/tree",
    response_model=DirectoryEntry,
    responses=ERROR_RESPONSES,
    summary="List directory tree",
    description="Recursively lists a directory. Children appear in the order the OS returns them."
)
def list_tree(
    path: str = Query(..., description="Root directory of the listing.")
):
    try:
        return filesystem.list_tree(path)
    except Exception as e:
        raise_http_error("list tree", e)


@router.get(
    "/content",
    response_model=ReadTextResponse,
    responses={**ERROR_RESPONSES, 422: {"model": ErrorResponse, "description": "Content is invalid for the encoding."}},
    summary="Read file content",
    description="Reads and strictly decodes a file. Unknown encoding labels fall back to UTF-8."
)
def read_file(
    path: str = Query(..., description="File to read."),
    encoding: Optional[str] = Query(None, description="Encoding label, e.g. 'gbk'.")
):
    try:
        content, used_encoding = filesystem.read_text_with_encoding(path, encoding)
    except Exception as e:
        raise_http_error("read file", e)
    return ReadTextResponse(path=path, content=content, encoding=used_encoding)


@router.put(
    "/content",
    status_code=status.HTTP_204_NO_CONTENT, # Return 204 No Content on success
    responses={**ERROR_RESPONSES, 422: {"model": ErrorResponse, "description": "Content cannot be represented in the encoding."}},
    summary="Write file content",
    description="Creates or truncates the file and writes the encoded content. Parent directories are not created."
)
def write_file(
    payload: WriteTextRequest, # Content is in the request body
    path: str = Query(..., description="File to write.")
):
    try:
        filesystem.write_text(path, payload.content, payload.encoding)
    except Exception as e:
        raise_http_error("write file", e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/directories",
    status_code=status.HTTP_201_CREATED, # Return 201 Created on success
    responses=ERROR_RESPONSES,
    summary="Create directory",
    description="Creates a directory and any missing parents. Succeeds if it already exists."
)
def create_directory(
    path: str = Query(..., description="Directory to create.")
):
    try:
        filesystem.make_directory(path)
    except Exception as e:
        raise_http_error("create directory", e)
    return {"message": "Directory created successfully", "path": path}


@router.delete(
    "/files",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=ERROR_RESPONSES,
    summary="Delete file",
    description="Removes a single file. Directories are rejected."
)
def delete_file(
    path: str = Query(..., description="File to delete.")
):
    try:
        filesystem.delete_file(path)
    except Exception as e:
        raise_http_error("delete file", e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/directories",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=ERROR_RESPONSES,
    summary="Delete directory",
    description="Removes a directory and all of its contents. A failure may leave the tree partially deleted."
)
def delete_directory(
    path: str = Query(..., description="Directory to delete recursively.")
):
    try:
        filesystem.delete_directory(path)
    except Exception as e:
        raise_http_error("delete directory", e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/resolve",
    response_model=PathResponse,
    responses=ERROR_RESPONSES,
    summary="Resolve path",
    description="Returns the canonical absolute path. The path must exist."
)
def resolve_path(
    path: str = Query(..., description="Path to canonicalize.")
):
    try:
        return PathResponse(path=filesystem.resolve_path(path))
    except Exception as e:
        raise_http_error("resolve path", e)


@router.post(
    "/join",
    response_model=PathResponse,
    summary="Join paths",
    description="Appends segments to a base path using the host's separator rules. No existence check."
)
def join_paths(payload: JoinPathsRequest):
    return PathResponse(path=filesystem.join_paths(payload.base_path, payload.segments))


@router.get(
    "/exists",
    response_model=PathExistsResponse,
    summary="Check path existence",
    description="True if the path exists. Errors while checking count as 'does not exist'."
)
def path_exists(
    path: str = Query(..., description="Path to check.")
):
    return PathExistsResponse(path=path, exists=filesystem.path_exists(path))


@router.get(
    "/metadata",
    response_model=FileMetadata,
    responses=ERROR_RESPONSES,
    summary="Get metadata",
    description="Returns whether the path is a file or directory and its size in bytes."
)
def get_metadata(
    path: str = Query(..., description="Path to inspect.")
):
    try:
        return filesystem.get_metadata(path)
    except Exception as e:
        raise_http_error("get metadata", e)


@router.post(
    "/rename",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=ERROR_RESPONSES,
    summary="Rename or move path",
    description="Renames old_path to new_path. Fails across volumes."
)
def rename_path(payload: RenamePathRequest):
    try:
        filesystem.rename_path(payload.old_path, payload.new_path)
    except Exception as e:
        raise_http_error("rename", e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
