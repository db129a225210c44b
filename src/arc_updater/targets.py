"""Resolution of user-supplied paths into target paths."""

import os
import sys
from dataclasses import dataclass
from typing import Iterable, List

from loguru import logger

from arc_updater.file_utils import VALID_FILE_NAMES, is_valid_file_name
from arc_updater.services.exceptions import PathResolutionError

DEFAULT_EXTENSION = ".dll"

if sys.platform == "win32":
    INVALID_PATH_CHARS = frozenset('"<>|' + "".join(chr(i) for i in range(32)))
else:
    INVALID_PATH_CHARS = frozenset("\0")

_SEPARATORS = tuple(sep for sep in (os.sep, os.altsep) if sep)


@dataclass(frozen=True)
class TargetPath:
    """A fully-qualified path and whether it is treated as a directory.

    Directory paths always end with a path separator.
    """

    full_path: str
    is_directory: bool


def current_directory() -> TargetPath:
    """Get the current working directory as a directory target."""
    return TargetPath(_with_separator(os.getcwd()), True)


def resolve(path: str) -> TargetPath:
    """
    Resolve a user-supplied path into a TargetPath.

    Environment variables are expanded and relative paths are taken against
    the current working directory. A file name without an extension gets
    ``.dll`` appended.

    Args:
        path: The path to resolve

    Returns:
        The resolved TargetPath

    Raises:
        PathResolutionError: If the path contains an invalid character or
            names a file that is not an appropriate assembly name
    """
    if path is None:
        raise ValueError("path cannot be None")

    expanded = os.path.expandvars(path)

    if any(c in INVALID_PATH_CHARS for c in expanded):
        raise PathResolutionError(expanded, f"Invalid character in path: {expanded!r}")

    full_path = os.path.abspath(os.path.join(os.getcwd(), expanded))
    file_name = "" if expanded.endswith(_SEPARATORS) else os.path.basename(full_path)

    if not file_name or os.path.isdir(full_path):
        return TargetPath(_with_separator(full_path), True)

    _, extension = os.path.splitext(file_name)
    if not extension:
        file_name += DEFAULT_EXTENSION
        full_path += DEFAULT_EXTENSION

    if not is_valid_file_name(file_name):
        valid = ", ".join(f"'{name}'" for name in VALID_FILE_NAMES)
        raise PathResolutionError(
            full_path,
            f"Invalid file name for assembly in path: {full_path}\nValid names are {valid}.",
        )

    return TargetPath(full_path, False)


def resolve_all(paths: Iterable[str]) -> List[TargetPath]:
    """
    Resolve several paths, reporting every failure before giving up.

    Exact duplicates are dropped, keeping the first occurrence. With no paths
    the current working directory is the only target.

    Raises:
        PathResolutionError: If any path failed to resolve
    """
    paths = list(paths)
    if not paths:
        return [current_directory()]

    targets: List[TargetPath] = []
    seen = set()
    errors: List[PathResolutionError] = []

    for raw in paths:
        try:
            target = resolve(raw)
        except PathResolutionError as e:
            logger.error(str(e))
            errors.append(e)
            continue

        if target.full_path in seen:
            logger.debug(f"Ignoring repeated target: {target.full_path}")
            continue
        seen.add(target.full_path)
        targets.append(target)

    if errors:
        raise PathResolutionError(
            errors[0].path,
            "\n".join(str(e) for e in errors),
        )

    return targets


def _with_separator(path: str) -> str:
    if path.endswith(_SEPARATORS):
        return path
    return path + os.sep
