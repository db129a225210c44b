"""Utilities for file operations."""

import hashlib
import os
import shutil
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Iterator, Union

from loguru import logger

VALID_FILE_NAMES = ("d3d11.dll", "dxgi.dll", "d3d9.dll", "gw2addon_arcdps.dll")

CHUNK_SIZE = 64 * 1024

PathLike = Union[str, Path]


class FileError(Exception):
    """Base exception for file operations."""

    pass


class FileWriteError(FileError):
    """Raised when writing, moving or deleting a file fails."""

    pass


def is_valid_file_name(file_name: str) -> bool:
    """Check a file name against the assembly whitelist, ignoring case."""
    if not file_name:
        return False
    lowered = file_name.lower()
    return any(lowered == name for name in VALID_FILE_NAMES)


def get_valid_file_paths(directory: str) -> Iterator[str]:
    """
    Yield every whitelisted file name joined to ``directory``.

    The files are not checked for existence; that is left to the caller.
    """
    if directory is None:
        raise ValueError("directory cannot be None")
    for name in VALID_FILE_NAMES:
        yield os.path.join(directory, name)


def compute_checksum(stream: BinaryIO) -> str:
    """
    Compute the MD5 checksum of a binary stream from its current position.

    Args:
        stream: Readable binary stream

    Returns:
        Lowercase MD5 hex digest

    Raises:
        FileError: If the stream cannot be read
    """
    md5 = hashlib.md5()
    try:
        while chunk := stream.read(CHUNK_SIZE):
            md5.update(chunk)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to compute checksum: {e}")
        raise FileError(f"Failed to compute checksum: {e}") from e
    return md5.hexdigest()


def ensure_directory(path: Path) -> None:
    """
    Ensure directory exists, creating if necessary.

    Args:
        path: Directory path to ensure

    Raises:
        FileWriteError: If directory creation fails
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Failed to create directory: {path}: {e}")
        raise FileWriteError(f"Failed to create directory {path}: {e}") from e


def write_stream_atomic(path: Path, source: BinaryIO) -> None:
    """
    Copy ``source`` into ``path`` through a temporary sibling file.

    The destination only ever holds either its previous content or the
    complete new content.

    Args:
        path: Target file path
        source: Readable binary stream, consumed from its current position

    Raises:
        FileWriteError: If the write fails
    """
    temp_path = path.with_name(path.name + ".tmp")
    try:
        with open(temp_path, "wb") as destination:
            shutil.copyfileobj(source, destination, CHUNK_SIZE)
        os.replace(temp_path, path)
    except (OSError, ValueError) as e:
        temp_path.unlink(missing_ok=True)
        logger.error(f"Failed to write file: {path}: {e}")
        raise FileWriteError(f"Failed to write file {path}: {e}") from e


def delete_file(path: PathLike) -> None:
    """
    Permanently delete a file.

    Raises:
        FileWriteError: If deletion fails
    """
    try:
        Path(path).unlink()
    except OSError as e:
        logger.error(f"Failed to delete file {path}: {e}")
        raise FileWriteError(f"Failed to delete file {path}: {e}") from e


def recycle_file(path: PathLike, recycle_dir: Path) -> Path:
    """
    Move a file into the recycle holding area so it can be restored later.

    The recycled copy keeps the original name with a timestamp inserted
    before the extension, e.g. ``d3d11-20240101T120000123456.dll``.

    Args:
        path: File to move
        recycle_dir: Holding area, created when missing

    Returns:
        Path of the recycled copy

    Raises:
        FileWriteError: If the move fails
    """
    source = Path(path)
    stamp = datetime.now().strftime("%Y%m%dT%H%M%S%f")
    destination = recycle_dir / f"{source.stem}-{stamp}{source.suffix}"

    ensure_directory(recycle_dir)
    try:
        shutil.move(str(source), str(destination))
    except OSError as e:
        logger.error(f"Failed to recycle file {source}: {e}")
        raise FileWriteError(f"Failed to recycle file {source}: {e}") from e

    logger.debug(f"Recycled {source} -> {destination}")
    return destination


def remove_file(path: PathLike, delete: bool, recycle_dir: Path) -> None:
    """
    Remove a file permanently or reversibly.

    Args:
        path: File to remove
        delete: Delete permanently instead of moving to ``recycle_dir``
        recycle_dir: Holding area for reversible removal

    Raises:
        FileWriteError: If removal fails
    """
    if delete:
        delete_file(path)
    else:
        recycle_file(path, recycle_dir)
