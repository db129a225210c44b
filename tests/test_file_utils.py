"""Tests for file utilities."""

import io
from pathlib import Path

import pytest

from arc_updater.file_utils import (
    FileError,
    FileWriteError,
    compute_checksum,
    delete_file,
    ensure_directory,
    get_valid_file_paths,
    is_valid_file_name,
    recycle_file,
    remove_file,
    write_stream_atomic,
)

from conftest import md5


@pytest.mark.parametrize(
    "name,expected",
    [
        ("d3d11.dll", True),
        ("D3D11.DLL", True),
        ("dxgi.dll", True),
        ("d3d9.dll", True),
        ("gw2addon_arcdps.dll", True),
        ("d3d11", False),
        ("d3d12.dll", False),
        ("", False),
    ],
)
def test_is_valid_file_name(name: str, expected: bool):
    assert is_valid_file_name(name) is expected


def test_get_valid_file_paths(tmp_path: Path):
    paths = list(get_valid_file_paths(str(tmp_path)))

    assert str(tmp_path / "d3d11.dll") in paths
    assert len(paths) == 4


def test_compute_checksum():
    content = b"test content" * 20_000
    assert compute_checksum(io.BytesIO(content)) == md5(content)


def test_compute_checksum_closed_stream():
    stream = io.BytesIO(b"content")
    stream.close()

    with pytest.raises(FileError):
        compute_checksum(stream)


def test_ensure_directory(tmp_path: Path):
    path = tmp_path / "a" / "b"
    ensure_directory(path)
    ensure_directory(path)
    assert path.is_dir()


def test_ensure_directory_blocked_by_file(tmp_path: Path):
    blocker = tmp_path / "blocker"
    blocker.write_text("content")

    with pytest.raises(FileWriteError):
        ensure_directory(blocker / "child")


def test_write_stream_atomic(tmp_path: Path):
    target = tmp_path / "d3d11.dll"
    target.write_bytes(b"old")

    write_stream_atomic(target, io.BytesIO(b"new content"))

    assert target.read_bytes() == b"new content"
    assert list(tmp_path.iterdir()) == [target]


def test_write_stream_atomic_failure_keeps_target(tmp_path: Path):
    target = tmp_path / "d3d11.dll"
    target.write_bytes(b"old")
    source = io.BytesIO(b"new content")
    source.close()

    with pytest.raises(FileWriteError):
        write_stream_atomic(target, source)

    assert target.read_bytes() == b"old"
    assert not (tmp_path / "d3d11.dll.tmp").exists()


def test_delete_file(tmp_path: Path):
    target = tmp_path / "d3d11.dll"
    target.write_bytes(b"content")

    delete_file(target)
    assert not target.exists()

    with pytest.raises(FileWriteError):
        delete_file(target)


def test_recycle_file(tmp_path: Path):
    target = tmp_path / "d3d11.dll"
    target.write_bytes(b"content")
    recycle_dir = tmp_path / "recycle"

    recycled = recycle_file(target, recycle_dir)

    assert not target.exists()
    assert recycled.parent == recycle_dir
    assert recycled.name.startswith("d3d11-")
    assert recycled.suffix == ".dll"
    assert recycled.read_bytes() == b"content"


def test_recycle_missing_file(tmp_path: Path):
    with pytest.raises(FileWriteError):
        recycle_file(tmp_path / "d3d11.dll", tmp_path / "recycle")


@pytest.mark.parametrize("delete", [True, False])
def test_remove_file(tmp_path: Path, delete: bool):
    target = tmp_path / "dxgi.dll"
    target.write_bytes(b"content")
    recycle_dir = tmp_path / "recycle"

    remove_file(target, delete, recycle_dir)

    assert not target.exists()
    assert recycle_dir.exists() is not delete
