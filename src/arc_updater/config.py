"""Configuration management for arc-updater."""

from pathlib import Path

from platformdirs import user_data_dir
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_NAME = "ArcUpdater"
ASSEMBLY_FILE_NAME = "d3d11.dll"
RECYCLE_DIR_NAME = "recycle"
LOG_FILE_NAME = "arc-updater.log"

CHECKSUM_URL = "https://www.deltaconnected.com/arcdps/x64/d3d11.dll.md5sum"
ASSEMBLY_URL = "https://www.deltaconnected.com/arcdps/x64/d3d11.dll"


class UpdaterConfig(BaseSettings):
    """Configuration for arc-updater.

    Built once at startup and handed to the services that need it.
    """

    # Per-user application data, overridable with ARC_UPDATER_DATA_DIR
    data_dir: Path = Field(
        default_factory=lambda: Path(user_data_dir(APP_NAME, appauthor=False)),
        description="Directory holding the cached assembly, recycled files and logs",
    )
    checksum_url: str = Field(default=CHECKSUM_URL, description="Reference md5sum location")
    assembly_url: str = Field(default=ASSEMBLY_URL, description="Reference assembly location")
    download_timeout: float = Field(
        default=10.0, gt=0, description="Upper bound in seconds for each download"
    )
    default_file_name: str = Field(
        default=ASSEMBLY_FILE_NAME,
        description="File name used when installing into a directory",
    )

    model_config = SettingsConfigDict(
        env_prefix="ARC_UPDATER_",
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @property
    def cache_file_path(self) -> Path:
        """Get the locally cached copy of the reference assembly."""
        return self.data_dir / ASSEMBLY_FILE_NAME

    @property
    def recycle_dir(self) -> Path:
        """Get the holding area for displaced files."""
        return self.data_dir / RECYCLE_DIR_NAME

    @property
    def log_file_path(self) -> Path:
        return self.data_dir / LOG_FILE_NAME

    @field_validator("data_dir")
    @classmethod
    def expand_home(cls, v: Path) -> Path:
        """Expand a leading ~ in the data directory."""
        return v.expanduser()
