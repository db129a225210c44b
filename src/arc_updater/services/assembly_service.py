"""Service for retrieving the reference assembly."""

import io
import os
import shutil
from pathlib import Path
from typing import BinaryIO, Optional

from loguru import logger

from arc_updater import file_utils
from arc_updater.file_utils import FileError
from arc_updater.services.download_client import DownloadClient
from arc_updater.services.exceptions import DownloadError


class AssemblyHandle:
    """
    Wraps a seekable binary stream holding an assembly.

    Every read starts from the beginning of the stream, so a handle can be
    hashed and copied any number of times.
    """

    def __init__(self, stream: BinaryIO):
        if stream is None:
            raise ValueError("stream cannot be None")
        self._stream: Optional[BinaryIO] = stream

    @property
    def closed(self) -> bool:
        return self._stream is None

    def _rewound(self) -> BinaryIO:
        if self._stream is None:
            raise FileError("Assembly handle is closed")
        try:
            self._stream.seek(0)
        except (OSError, ValueError) as e:
            raise FileError(f"Could not rewind assembly stream: {e}") from e
        return self._stream

    def compute_checksum(self) -> str:
        """
        Compute the MD5 checksum of the whole assembly.

        Raises:
            FileError: If the stream is closed or cannot be read
        """
        return file_utils.compute_checksum(self._rewound())

    def copy_to(self, path: Path) -> None:
        """
        Create or overwrite ``path`` with the assembly's content.

        Raises:
            FileError: If the stream cannot be read or the file written
        """
        file_utils.write_stream_atomic(Path(path), self._rewound())

    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    def __enter__(self) -> "AssemblyHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class AssemblyService:
    """
    Holds the current reference assembly, from the local cache or the network.

    Exactly one handle is current at a time. Acquiring a new one closes the
    previous one.
    """

    def __init__(
        self,
        download_client: DownloadClient,
        assembly_url: str,
        cache_file_path: Optional[Path],
    ):
        if download_client is None:
            raise ValueError("download_client cannot be None")
        self.download_client = download_client
        self.assembly_url = assembly_url
        self.cache_file_path = cache_file_path
        self._assembly: Optional[AssemblyHandle] = None

    @property
    def retrieved(self) -> bool:
        """Whether an assembly has been loaded or downloaded."""
        return self._assembly is not None

    @property
    def assembly(self) -> Optional[AssemblyHandle]:
        return self._assembly

    def release(self) -> None:
        """Close and forget the current assembly."""
        if self._assembly is not None:
            self._assembly.close()
            self._assembly = None

    def close(self) -> None:
        self.release()

    def __enter__(self) -> "AssemblyService":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def try_load_cached_copy(self) -> bool:
        """
        Open the locally cached assembly as the current assembly.

        Returns:
            True if the cache file exists and was opened
        """
        self.release()

        path = self.cache_file_path
        if path is None or not path.is_file():
            logger.debug(f"No cached assembly at {path}")
            return False

        try:
            stream = open(path, "rb")
        except OSError as e:
            logger.warning(f"Could not open cached assembly {path}: {e}")
            return False

        self._assembly = AssemblyHandle(stream)
        logger.debug(f"Loaded cached assembly: {path}")
        return True

    def try_fetch_remote(self) -> bool:
        """
        Download the reference assembly and make it the current assembly.

        The download lands next to the cache file and replaces it only once
        complete. If the cache location is unusable it is kept in memory.

        Returns:
            True if the download completed in time
        """
        self.release()

        temp_path = self._open_download_target()
        stream: BinaryIO = io.BytesIO()

        try:
            if temp_path is not None:
                stream = open(temp_path, "w+b")
            size = self.download_client.download_to(self.assembly_url, stream)
        except (DownloadError, OSError) as e:
            logger.error(f"Could not download the assembly file: {e}")
            stream.close()
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            return False

        logger.debug(f"Downloaded assembly ({size} bytes)")

        if temp_path is None:
            self._assembly = AssemblyHandle(stream)
            return True

        stream.close()
        try:
            self._assembly = AssemblyHandle(self._store_download(temp_path))
        except OSError as e:
            logger.error(f"Could not read the downloaded assembly file: {e}")
            temp_path.unlink(missing_ok=True)
            return False
        return True

    def copy_current_to(self, path: Path) -> bool:
        """
        Write the current assembly to ``path``.

        Returns:
            True if the file was written, False if nothing is retrieved or
            the write failed
        """
        if self._assembly is None:
            return False
        try:
            self._assembly.copy_to(path)
        except FileError as e:
            logger.error(f"Could not write assembly to {path}: {e}")
            return False
        return True

    def _open_download_target(self) -> Optional[Path]:
        """Get a writable temporary path beside the cache file, if possible."""
        if self.cache_file_path is None:
            return None
        temp_path = self.cache_file_path.with_name(self.cache_file_path.name + ".part")
        try:
            file_utils.ensure_directory(temp_path.parent)
            temp_path.touch()
        except (FileError, OSError) as e:
            logger.warning(f"Could not cache download at {temp_path}, keeping it in memory: {e}")
            return None
        return temp_path

    def _store_download(self, temp_path: Path) -> BinaryIO:
        """Move a completed download into the cache and open it."""
        source_path = temp_path
        try:
            os.replace(temp_path, self.cache_file_path)
            source_path = self.cache_file_path
            return open(source_path, "rb")
        except OSError as e:
            logger.warning(f"Could not update cached assembly {self.cache_file_path}: {e}")

        # cache not usable, keep the download in memory instead
        buffer = io.BytesIO()
        with open(source_path, "rb") as source:
            shutil.copyfileobj(source, buffer)
        if source_path == temp_path:
            temp_path.unlink(missing_ok=True)
        return buffer
