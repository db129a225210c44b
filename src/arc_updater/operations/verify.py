"""Operation that checks assemblies against the reference checksum."""

from loguru import logger

from arc_updater.operations.report import OperationReport
from arc_updater.services.assembly_service import AssemblyHandle
from arc_updater.services.checksum_service import ChecksumService, VerificationOutcome
from arc_updater.sync.state import OperationState


class VerifyOperation:
    """Reports whether found assemblies are current. Never writes anything."""

    def __init__(self, checksum_service: ChecksumService):
        if checksum_service is None:
            raise ValueError("checksum_service cannot be None")
        self.checksum_service = checksum_service
        self.report = OperationReport()

    def on_directory_empty(self, state: OperationState) -> bool:
        logger.info(f"No appropriately-named assemblies found in directory: {state.full_path}")
        return True

    def on_directory_found(self, state: OperationState) -> bool:
        return True

    def on_directory_not_found(self, state: OperationState) -> bool:
        logger.error(f"Could not find directory: {state.full_path}")
        self.report.failed.add(state.full_path)
        return False

    def on_file_found(self, state: OperationState) -> bool:
        return self._verify_file(state)

    def on_file_not_found(self, state: OperationState) -> bool:
        logger.error(f"Could not find file: {state.full_path}")
        self.report.failed.add(state.full_path)
        return False

    def on_file_found_in_directory(self, state: OperationState) -> bool:
        return self._verify_file(state)

    def _verify_file(self, state: OperationState) -> bool:
        file_path = state.full_path

        if not self.checksum_service.downloaded and not self.checksum_service.try_download():
            state.cancel = True
            self.report.cancelled = True
            self.report.failed.add(file_path)
            return False

        try:
            with AssemblyHandle(open(file_path, "rb")) as assembly:
                outcome = self.checksum_service.verify(assembly)
        except OSError as e:
            logger.warning(f"Could not open {file_path}: {e}")
            outcome = VerificationOutcome.INDETERMINATE

        if outcome is VerificationOutcome.VALID:
            logger.info(f"Assembly is current: {file_path}")
            self.report.current.add(file_path)
            return True

        if outcome is VerificationOutcome.INVALID:
            logger.info(f"Assembly is outdated or corrupt: {file_path}")
            self.report.outdated.add(file_path)
            return True

        logger.error(f"Could not verify assembly: {file_path}")
        self.report.failed.add(file_path)
        return False
