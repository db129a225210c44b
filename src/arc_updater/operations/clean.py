"""Operation that removes assemblies."""

from pathlib import Path

from loguru import logger

from arc_updater import file_utils
from arc_updater.file_utils import FileWriteError
from arc_updater.operations.report import OperationReport
from arc_updater.sync.state import OperationState

FILE_WRITE_HINT = (
    "Ensure you have permission to access and write to this file "
    "and that it is not currently in use."
)


class CleanOperation:
    """Removes found assemblies. Anything already absent counts as clean."""

    def __init__(self, delete: bool, recycle_dir: Path):
        self.delete = delete
        self.recycle_dir = recycle_dir
        self.report = OperationReport()

    def on_directory_empty(self, state: OperationState) -> bool:
        return True

    def on_directory_found(self, state: OperationState) -> bool:
        return True

    def on_directory_not_found(self, state: OperationState) -> bool:
        return True

    def on_file_found(self, state: OperationState) -> bool:
        return self._clean_file(state.full_path)

    def on_file_not_found(self, state: OperationState) -> bool:
        return True

    def on_file_found_in_directory(self, state: OperationState) -> bool:
        return self._clean_file(state.full_path)

    def _clean_file(self, file_path: str) -> bool:
        try:
            file_utils.remove_file(file_path, self.delete, self.recycle_dir)
        except FileWriteError:
            action = "delete file" if self.delete else "move file to recycle area"
            logger.error(f"Could not {action}: {file_path}. {FILE_WRITE_HINT}")
            self.report.failed.add(file_path)
            return False

        if self.delete:
            logger.info(f"Deleted file: {file_path}")
        else:
            logger.info(f"Moved file to recycle area: {file_path}")
        self.report.removed.add(file_path)
        return True
