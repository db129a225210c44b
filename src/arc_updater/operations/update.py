"""Operation that installs or updates assemblies."""

import os
from pathlib import Path

from loguru import logger

from arc_updater import file_utils
from arc_updater.config import ASSEMBLY_FILE_NAME
from arc_updater.file_utils import FileWriteError
from arc_updater.operations.report import OperationReport
from arc_updater.services.assembly_service import AssemblyHandle, AssemblyService
from arc_updater.services.checksum_service import ChecksumService, VerificationOutcome
from arc_updater.sync.state import OperationState

FILE_ACCESS_HINT = (
    "Ensure you have permission to access this file and that it is not currently in use."
)


class UpdateOperation:
    """
    Installs missing assemblies and replaces outdated or corrupt ones.

    For every file the reference checksum is made available first. An
    existing file matching it is left untouched. Otherwise the reference
    assembly is retrieved, from the local cache when that copy verifies and
    from the network when not, and written over the target. Failing to get
    the checksum or a verified assembly cancels the whole run since no other
    target could succeed either.
    """

    def __init__(
        self,
        checksum_service: ChecksumService,
        assembly_service: AssemblyService,
        delete: bool,
        recycle_dir: Path,
        default_file_name: str = ASSEMBLY_FILE_NAME,
    ):
        if checksum_service is None:
            raise ValueError("checksum_service cannot be None")
        if assembly_service is None:
            raise ValueError("assembly_service cannot be None")
        self.checksum_service = checksum_service
        self.assembly_service = assembly_service
        self.delete = delete
        self.recycle_dir = recycle_dir
        self.default_file_name = default_file_name
        self.report = OperationReport()

    def on_directory_empty(self, state: OperationState) -> bool:
        return self._install_to_directory(state)

    def on_directory_found(self, state: OperationState) -> bool:
        return True

    def on_directory_not_found(self, state: OperationState) -> bool:
        try:
            file_utils.ensure_directory(Path(state.full_path))
        except FileWriteError:
            logger.error(f"Could not create directory: {state.full_path}")
            self.report.failed.add(state.full_path)
            return False
        logger.info(f"Created directory: {state.full_path}")
        return True

    def on_file_found(self, state: OperationState) -> bool:
        return self._update_file(state)

    def on_file_not_found(self, state: OperationState) -> bool:
        return self._install_file(state)

    def on_file_found_in_directory(self, state: OperationState) -> bool:
        return self._update_file(state)

    def _install_to_directory(self, state: OperationState) -> bool:
        file_path = os.path.join(state.full_path, self.default_file_name)
        return self._install_file(state.derive(file_path))

    def _install_file(self, state: OperationState) -> bool:
        # the file is expected not to exist
        file_path = state.full_path

        if not self._ensure_checksum_downloaded() or not self._ensure_latest_assembly_retrieved():
            self._cancel(state)
            return False

        if self._write_file(file_path, displace=False):
            logger.info(f"Assembly installed: {file_path}")
            self.report.installed.add(file_path)
            return True

        logger.error(f"Could not install assembly to file path: {file_path}. {FILE_ACCESS_HINT}")
        self.report.failed.add(file_path)
        return False

    def _update_file(self, state: OperationState) -> bool:
        # the file is expected to exist
        file_path = state.full_path

        if not self._ensure_checksum_downloaded():
            self._cancel(state)
            return False

        outcome = self._verify_file(file_path)

        if outcome is VerificationOutcome.INDETERMINATE:
            logger.error(f"Could not verify assembly at file path: {file_path}. {FILE_ACCESS_HINT}")
            self.report.failed.add(file_path)
            return False

        if outcome is VerificationOutcome.VALID:
            logger.info(f"Assembly is current at file path: {file_path}")
            self.report.current.add(file_path)
            return True

        if not self._ensure_latest_assembly_retrieved():
            self._cancel(state)
            return False

        if self._write_file(file_path, displace=True):
            logger.info(f"Assembly updated: {file_path}")
            self.report.updated.add(file_path)
            return True

        logger.error(f"Could not update assembly at file path: {file_path}. {FILE_ACCESS_HINT}")
        self.report.failed.add(file_path)
        return False

    def _verify_file(self, file_path: str) -> VerificationOutcome:
        try:
            with AssemblyHandle(open(file_path, "rb")) as assembly:
                return self.checksum_service.verify(assembly)
        except OSError as e:
            logger.warning(f"Could not open {file_path}: {e}")
            return VerificationOutcome.INDETERMINATE

    def _write_file(self, file_path: str, displace: bool) -> bool:
        if displace:
            try:
                file_utils.remove_file(file_path, self.delete, self.recycle_dir)
            except FileWriteError:
                return False
            if self.delete:
                logger.info(f"Deleted file: {file_path}")
            else:
                logger.info(f"Moved file to recycle area: {file_path}")

        path = Path(file_path)
        try:
            file_utils.ensure_directory(path.parent)
        except FileWriteError:
            return False
        return self.assembly_service.copy_current_to(path)

    def _ensure_checksum_downloaded(self) -> bool:
        if self.checksum_service.downloaded:
            return True
        return self.checksum_service.try_download()

    def _ensure_latest_assembly_retrieved(self) -> bool:
        # assumes the checksum has been downloaded
        service = self.assembly_service

        if service.retrieved:
            return True

        if service.try_load_cached_copy():
            if self.checksum_service.verify(service.assembly) is VerificationOutcome.VALID:
                logger.debug("Using cached assembly")
                return True
            logger.debug("Cached assembly is outdated or corrupt")
            service.release()

        if not service.try_fetch_remote():
            logger.error("Could not download the assembly file.")
            return False

        outcome = self.checksum_service.verify(service.assembly)
        if outcome is VerificationOutcome.VALID:
            return True

        if outcome is VerificationOutcome.INVALID:
            logger.error("The downloaded assembly file is corrupt.")
        else:
            logger.error("Could not verify the integrity of the downloaded assembly file.")
        service.release()
        return False

    def _cancel(self, state: OperationState) -> None:
        state.cancel = True
        self.report.cancelled = True
        self.report.failed.add(state.full_path)
