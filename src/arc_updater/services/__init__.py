"""Services package."""

from .assembly_service import AssemblyHandle, AssemblyService
from .checksum_service import ChecksumService, VerificationOutcome
from .download_client import DownloadClient

__all__ = [
    "AssemblyHandle",
    "AssemblyService",
    "ChecksumService",
    "DownloadClient",
    "VerificationOutcome",
]
