"""Traversal of target files and directories."""

import os
from typing import Callable, Iterable, List

from loguru import logger

from arc_updater.file_utils import get_valid_file_paths
from arc_updater.services.exceptions import DirectoryQueryError
from arc_updater.sync.state import ExecutionContext, OperationState
from arc_updater.sync.visitor import FileSystemVisitor
from arc_updater.targets import TargetPath

DirectoryQuery = Callable[[str], Iterable[str]]


class TargetPathOperation:
    """
    Runs a visitor over target paths and the files queried from target directories.

    Targets are processed strictly in order. With ``ignore_repeats`` a path
    handled once, whether given explicitly or found by a directory query, is
    skipped for the rest of the call.
    """

    def __init__(
        self,
        visitor: FileSystemVisitor,
        directory_query: DirectoryQuery = get_valid_file_paths,
    ):
        if visitor is None:
            raise ValueError("visitor cannot be None")
        if directory_query is None:
            raise ValueError("directory_query cannot be None")
        self.visitor = visitor
        self.directory_query = directory_query

    def execute_one(self, target: TargetPath, ignore_repeats: bool = True) -> bool:
        """Execute the operation on a single target."""
        return self.execute([target], ignore_repeats=ignore_repeats)

    def execute(self, targets: Iterable[TargetPath], ignore_repeats: bool = True) -> bool:
        """
        Execute the operation on every target.

        Args:
            targets: Resolved targets, processed in order
            ignore_repeats: Skip paths already handled during this call

        Returns:
            True if every target succeeded and nothing cancelled the run
        """
        context = ExecutionContext.create(ignore_repeats)
        success = True

        for target in targets:
            if context.should_ignore_else_add(target.full_path):
                logger.debug(f"Skipping repeated target: {target.full_path}")
                continue

            state = OperationState(target.full_path, context)

            if target.is_directory:
                result = self._target_directory(state)
            else:
                result = self._target_file(state)

            if not result:
                success = False

            if context.cancel:
                logger.warning("Operation cancelled, remaining targets skipped")
                return False

        return success

    def _target_file(self, state: OperationState) -> bool:
        if os.path.isfile(state.full_path):
            return self.visitor.on_file_found(state)
        return self.visitor.on_file_not_found(state)

    def _target_directory(self, state: OperationState) -> bool:
        if os.path.isdir(state.full_path):
            if not self.visitor.on_directory_found(state):
                return False
        elif not self.visitor.on_directory_not_found(state):
            return False

        if state.cancel:
            return False

        return self._query_directory(state)

    def _query_directory(self, state: OperationState) -> bool:
        try:
            # force evaluation so a lazy query fails here
            file_paths: List[str] = list(self.directory_query(state.full_path))
        except Exception as e:
            error = DirectoryQueryError(state.full_path, f"Could not query directory: {e}")
            logger.error(f"{error} ({state.full_path})")
            return False

        files_found = 0
        success = True

        for file_path in file_paths:
            should_ignore = state.context.should_ignore_else_add(file_path)

            if not os.path.isfile(file_path):
                continue

            # counted even when ignored so a directory whose files were all
            # handled already is not treated as empty
            files_found += 1
            if should_ignore:
                continue

            substate = state.derive(file_path)
            if not self.visitor.on_file_found_in_directory(substate):
                success = False

            if state.cancel:
                return False

        if files_found == 0:
            logger.debug(f"No queried files found in directory: {state.full_path}")
            return self.visitor.on_directory_empty(state)

        return success
