"""Service for the reference checksum and assembly verification."""

import re
from enum import Enum, auto
from typing import Optional

from loguru import logger

from arc_updater.file_utils import FileError
from arc_updater.services.assembly_service import AssemblyHandle
from arc_updater.services.download_client import DownloadClient
from arc_updater.services.exceptions import DownloadError

CHECKSUM_LENGTH = 32
_HEX_CHECKSUM = re.compile(rf"[0-9a-fA-F]{{{CHECKSUM_LENGTH}}}")


class VerificationOutcome(Enum):
    """Result of comparing an assembly against the reference checksum."""

    VALID = auto()
    INVALID = auto()
    INDETERMINATE = auto()


class ChecksumService:
    """
    Downloads the reference md5sum and verifies assemblies against it.

    The checksum is kept for the lifetime of the service once downloaded and
    is only fetched again after ``reset``.
    """

    def __init__(self, download_client: DownloadClient, checksum_url: str):
        if download_client is None:
            raise ValueError("download_client cannot be None")
        self.download_client = download_client
        self.checksum_url = checksum_url
        self._checksum: Optional[str] = None

    @property
    def downloaded(self) -> bool:
        return self._checksum is not None

    @property
    def checksum(self) -> Optional[str]:
        """The cached reference checksum, lowercase."""
        return self._checksum

    def reset(self) -> None:
        """Forget the cached checksum."""
        self._checksum = None

    def try_download(self) -> bool:
        """
        Download the reference checksum.

        The payload must start with a 32 character hex MD5 digest. On any
        failure the previously cached checksum, if any, is kept.

        Returns:
            True if a checksum was downloaded
        """
        try:
            payload = self.download_client.fetch_bytes(self.checksum_url)
        except DownloadError as e:
            logger.error(f"Could not download the md5sum file: {e}")
            return False

        checksum = payload[:CHECKSUM_LENGTH].decode("utf-8", errors="replace")
        if not _HEX_CHECKSUM.fullmatch(checksum):
            logger.error(f"Malformed md5sum file from {self.checksum_url}: {checksum!r}")
            return False

        self._checksum = checksum.lower()
        logger.debug(f"Reference checksum: {self._checksum}")
        return True

    def verify(self, assembly: AssemblyHandle) -> VerificationOutcome:
        """
        Compare an assembly's checksum with the reference checksum.

        Returns:
            VALID or INVALID, or INDETERMINATE when no reference checksum is
            available or the assembly cannot be read
        """
        if self._checksum is None:
            return VerificationOutcome.INDETERMINATE

        try:
            checksum = assembly.compute_checksum()
        except FileError as e:
            logger.warning(f"Could not verify assembly: {e}")
            return VerificationOutcome.INDETERMINATE

        if checksum.lower() == self._checksum:
            return VerificationOutcome.VALID
        logger.debug(f"Checksum mismatch: {checksum} != {self._checksum}")
        return VerificationOutcome.INVALID
