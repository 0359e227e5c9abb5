# tests/test_api.py - Pytest tests for the File System API

import os

import pytest
from fastapi.testclient import TestClient

# Import the FastAPI app instance
from fs_bridge.main import app

# Create a TestClient instance
client = TestClient(app)

# --- Fixtures ---

@pytest.fixture
def workspace(tmp_path):
    """A directory holding 'a.txt' and an empty 'sub' directory."""
    (tmp_path / "a.txt").write_text("hello")
    (tmp_path / "sub").mkdir()
    return tmp_path

# --- Service ---

def test_health_check():
    """Test the /health endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    json_response = response.json()
    assert json_response["status"] == "ok"
    assert json_response["default_encoding"] == "utf-8"

# --- Listing ---

def test_list_tree(workspace):
    response = client.get("/fs/tree", params={"path": str(workspace)})
    assert response.status_code == 200
    json_response = response.json()
    assert json_response["is_directory"] is True
    children = {child["name"]: child for child in json_response["children"]}
    assert set(children) == {"a.txt", "sub"}
    assert children["a.txt"]["is_directory"] is False
    assert children["sub"]["children"] == []

def test_list_tree_not_found(tmp_path):
    response = client.get("/fs/tree", params={"path": str(tmp_path / "missing")})
    assert response.status_code == 404
    assert response.json()["detail"]["kind"] == "NotFound"

def test_list_tree_missing_path_param():
    response = client.get("/fs/tree")
    assert response.status_code == 422

# --- Content ---

def test_write_and_read_with_encoding(workspace):
    target = str(workspace / "gbk.txt")
    response_write = client.put("/fs/content", params={"path": target}, json={"content": "你好", "encoding": "gbk"})
    assert response_write.status_code == 204
    assert (workspace / "gbk.txt").read_bytes() == "你好".encode("gbk")

    response_read = client.get("/fs/content", params={"path": target, "encoding": "GBK"})
    assert response_read.status_code == 200
    assert response_read.json() == {"path": target, "content": "你好", "encoding": "gbk"}

def test_read_defaults_to_utf8(workspace):
    response = client.get("/fs/content", params={"path": str(workspace / "a.txt")})
    assert response.status_code == 200
    assert response.json()["content"] == "hello"
    assert response.json()["encoding"] == "utf-8"

def test_read_invalid_bytes(workspace):
    (workspace / "bad.bin").write_bytes(b"\xc3\x28")
    response = client.get("/fs/content", params={"path": str(workspace / "bad.bin")})
    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["kind"] == "InvalidEncoding"
    assert "Decoding file content" in detail["message"]

def test_write_unencodable(workspace):
    response = client.put("/fs/content", params={"path": str(workspace / "a.txt")}, json={"content": "你好", "encoding": "ascii"})
    assert response.status_code == 422
    assert response.json()["detail"]["kind"] == "InvalidEncoding"
    assert (workspace / "a.txt").read_text() == "hello"

@pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="needs POSIX permission bits enforced (not root)")
def test_read_permission_denied(workspace):
    """An unreadable file maps to 403 with kind PermissionDenied."""
    target = workspace / "a.txt"
    target.chmod(0o000)
    try:
        response = client.get("/fs/content", params={"path": str(target)})
    finally:
        target.chmod(0o644)
    assert response.status_code == 403
    assert response.json()["detail"]["kind"] == "PermissionDenied"

def test_read_invalid_path_string():
    """A path with an embedded NUL is reported as an operation error, not a crash."""
    response = client.get("/fs/content", params={"path": "a\x00b"})
    assert response.status_code == 500
    detail = response.json()["detail"]
    assert detail["kind"] == "Other"
    assert "null" in detail["message"]

def test_read_with_web_encoding_label(workspace):
    (workspace / "euro.txt").write_bytes(b"\x80")
    response = client.get("/fs/content", params={"path": str(workspace / "euro.txt"), "encoding": "latin1"})
    assert response.status_code == 200
    assert response.json()["content"] == "€"
    assert response.json()["encoding"] == "windows-1252"

def test_write_missing_content_field(workspace):
    response = client.put("/fs/content", params={"path": str(workspace / "a.txt")}, json={})
    assert response.status_code == 422

# --- Directories and files ---

def test_create_directory(workspace):
    target = str(workspace / "new" / "nested")
    response = client.post("/fs/directories", params={"path": target})
    assert response.status_code == 201
    assert response.json() == {"message": "Directory created successfully", "path": target}
    assert os.path.isdir(target)

def test_create_directory_conflict(workspace):
    response = client.post("/fs/directories", params={"path": str(workspace / "a.txt")})
    assert response.status_code == 409
    assert response.json()["detail"]["kind"] == "AlreadyExists"

def test_delete_file(workspace):
    response = client.delete("/fs/files", params={"path": str(workspace / "a.txt")})
    assert response.status_code == 204
    exists = client.get("/fs/exists", params={"path": str(workspace / "a.txt")})
    assert exists.json() == {"path": str(workspace / "a.txt"), "exists": False}

def test_delete_file_missing(workspace):
    response = client.delete("/fs/files", params={"path": str(workspace / "nope.txt")})
    assert response.status_code == 404

def test_delete_directory(workspace):
    (workspace / "sub" / "inner.txt").write_text("x")
    response = client.delete("/fs/directories", params={"path": str(workspace / "sub")})
    assert response.status_code == 204
    assert not (workspace / "sub").exists()

# --- Paths ---

def test_resolve_path(workspace):
    messy = os.path.join(str(workspace), "sub", "..", "a.txt")
    response = client.get("/fs/resolve", params={"path": messy})
    assert response.status_code == 200
    assert response.json()["path"] == os.path.realpath(str(workspace / "a.txt"))

def test_resolve_path_missing(workspace):
    response = client.get("/fs/resolve", params={"path": str(workspace / "missing")})
    assert response.status_code == 404

def test_join_paths():
    response = client.post("/fs/join", json={"base_path": "/base", "segments": ["a", "b"]})
    assert response.status_code == 200
    assert response.json()["path"] == os.path.join("/base", "a", "b")

def test_path_exists(workspace):
    response = client.get("/fs/exists", params={"path": str(workspace / "sub")})
    assert response.status_code == 200
    assert response.json()["exists"] is True

def test_get_metadata(workspace):
    response = client.get("/fs/metadata", params={"path": str(workspace / "a.txt")})
    assert response.status_code == 200
    assert response.json() == {"is_file": True, "is_dir": False, "size_bytes": 5}

def test_get_metadata_missing(workspace):
    response = client.get("/fs/metadata", params={"path": str(workspace / "gone")})
    assert response.status_code == 404
    assert response.json()["detail"]["kind"] == "NotFound"

def test_rename_path(workspace):
    old, new = str(workspace / "a.txt"), str(workspace / "b.txt")
    response = client.post("/fs/rename", json={"old_path": old, "new_path": new})
    assert response.status_code == 204
    assert not os.path.exists(old)
    assert (workspace / "b.txt").read_text() == "hello"

def test_rename_onto_non_empty_directory(workspace):
    (workspace / "other").mkdir()
    (workspace / "sub" / "x.txt").write_text("x")
    response = client.post("/fs/rename", json={"old_path": str(workspace / "other"), "new_path": str(workspace / "sub")})
    assert response.status_code == 409
    assert response.json()["detail"]["kind"] == "AlreadyExists"
