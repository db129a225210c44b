"""Tests for bounded downloads."""

import io
import itertools

import httpx
import pytest

from arc_updater.services.download_client import DownloadClient
from arc_updater.services.exceptions import DownloadError

URL = "https://downloads.test/file"


def client_for(handler, **kwargs) -> DownloadClient:
    return DownloadClient(transport=httpx.MockTransport(handler), **kwargs)


def test_fetch_bytes():
    client = client_for(lambda request: httpx.Response(200, content=b"payload"))
    assert client.fetch_bytes(URL) == b"payload"


def test_download_to_stream():
    content = b"x" * 100_000
    client = client_for(lambda request: httpx.Response(200, content=content))
    destination = io.BytesIO()

    written = client.download_to(URL, destination)

    assert written == len(content)
    assert destination.getvalue() == content


def test_error_status_raises():
    client = client_for(lambda request: httpx.Response(503))
    with pytest.raises(DownloadError):
        client.fetch_bytes(URL)


def test_transport_error_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(DownloadError):
        client_for(handler).fetch_bytes(URL)


def test_timeout_raises():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(DownloadError):
        client_for(handler).download_to(URL, io.BytesIO())


def test_overall_deadline_enforced():
    """A download trickling in past the bound is abandoned."""

    def handler(request):
        return httpx.Response(200, content=iter([b"a", b"b", b"c", b"d"]))

    # every clock reading advances four seconds
    ticks = itertools.count(step=4.0)
    client = client_for(handler, timeout=10.0, clock=lambda: next(ticks))
    destination = io.BytesIO()

    with pytest.raises(DownloadError) as exc_info:
        client.download_to(URL, destination)

    assert "exceeded" in str(exc_info.value)
    assert destination.getvalue() == b"a"


def test_deadline_checked_when_headers_arrive():
    """A server slow to answer is abandoned before any body is read."""

    def handler(request):
        return httpx.Response(200, content=b"payload")

    # headers arrive twelve seconds after the request starts
    ticks = iter([0.0, 12.0])
    client = client_for(handler, timeout=10.0, clock=lambda: next(ticks))
    destination = io.BytesIO()

    with pytest.raises(DownloadError):
        client.download_to(URL, destination)

    assert destination.getvalue() == b""
