"""Callbacks invoked by the traversal engine."""

from typing import Protocol

from arc_updater.sync.state import OperationState


class FileSystemVisitor(Protocol):
    """Decides what happens at each point of a traversal.

    Every callback returns True if the operation on the path succeeded and
    False otherwise. Setting ``state.cancel`` aborts all remaining targets.
    """

    def on_directory_empty(self, state: OperationState) -> bool:
        """A target directory holds none of the queried files."""
        ...

    def on_directory_found(self, state: OperationState) -> bool:
        """A target directory exists. Returning False skips its scan."""
        ...

    def on_directory_not_found(self, state: OperationState) -> bool:
        """A target directory does not exist. Returning True scans it anyway."""
        ...

    def on_file_found(self, state: OperationState) -> bool:
        """An explicitly targeted file exists."""
        ...

    def on_file_not_found(self, state: OperationState) -> bool:
        """An explicitly targeted file does not exist."""
        ...

    def on_file_found_in_directory(self, state: OperationState) -> bool:
        """A queried file exists in a target directory."""
        ...
