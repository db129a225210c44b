"""Common test fixtures."""

import hashlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Union

import httpx
import pytest

from arc_updater.config import UpdaterConfig
from arc_updater.services.assembly_service import AssemblyService
from arc_updater.services.checksum_service import ChecksumService
from arc_updater.services.download_client import DownloadClient

CHECKSUM_URL = "https://downloads.test/arcdps/x64/d3d11.dll.md5sum"
ASSEMBLY_URL = "https://downloads.test/arcdps/x64/d3d11.dll"

Route = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


@dataclass
class FakeRemote:
    """Serves canned responses through httpx.MockTransport and records requests."""

    routes: Dict[str, Route] = field(default_factory=dict)
    requests: List[str] = field(default_factory=list)

    def handle(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        route = self.routes.get(url)
        if route is None:
            return httpx.Response(404)
        if callable(route):
            return route(request)
        return route

    def count(self, url: str) -> int:
        return self.requests.count(url)

    def serve_checksum(self, checksum: str) -> None:
        payload = f"{checksum}  d3d11.dll\n".encode()
        self.routes[CHECKSUM_URL] = lambda request: httpx.Response(200, content=payload)

    def serve_assembly(self, content: bytes) -> None:
        self.routes[ASSEMBLY_URL] = lambda request: httpx.Response(200, content=content)

    def fail(self, url: str) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        self.routes[url] = refuse


def md5(content: bytes) -> str:
    return hashlib.md5(content).hexdigest()


@pytest.fixture
def assembly_content() -> bytes:
    return b"MZ" + b"\x90\x00arcdps reference build\x00" * 512


@pytest.fixture
def reference_checksum(assembly_content: bytes) -> str:
    return md5(assembly_content)


@pytest.fixture
def outdated_content() -> bytes:
    return b"MZ" + b"\x90\x00arcdps older build\x00" * 256


@pytest.fixture
def remote(assembly_content: bytes, reference_checksum: str) -> FakeRemote:
    """A remote serving a consistent checksum and assembly."""
    fake = FakeRemote()
    fake.serve_checksum(reference_checksum)
    fake.serve_assembly(assembly_content)
    return fake


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "appdata"


@pytest.fixture
def config(data_dir: Path) -> UpdaterConfig:
    return UpdaterConfig(
        data_dir=data_dir,
        checksum_url=CHECKSUM_URL,
        assembly_url=ASSEMBLY_URL,
    )


@pytest.fixture
def download_client(remote: FakeRemote) -> DownloadClient:
    return DownloadClient(timeout=10.0, transport=httpx.MockTransport(remote.handle))


@pytest.fixture
def checksum_service(download_client: DownloadClient, config: UpdaterConfig) -> ChecksumService:
    return ChecksumService(download_client, config.checksum_url)


@pytest.fixture
def assembly_service(download_client: DownloadClient, config: UpdaterConfig):
    with AssemblyService(
        download_client, config.assembly_url, config.cache_file_path
    ) as service:
        yield service


@pytest.fixture
def game_dir(tmp_path: Path, monkeypatch) -> Path:
    """A game directory used as the current working directory."""
    path = tmp_path / "Guild Wars 2"
    path.mkdir()
    path = path.resolve()
    monkeypatch.chdir(path)
    return path
