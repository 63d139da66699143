import httpx
import pytest

from apiservice.core.http.client import HTTPClient
from apiservice.services.api_service import APIService


@pytest.fixture
def download_dir(tmp_path):
    path = tmp_path / "downloads-tmp"
    path.mkdir()
    return path


@pytest.fixture
def make_service(download_dir):
    """Build an APIService whose HTTPClient is wired to an httpx.MockTransport handler."""

    def _make(handler) -> APIService:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return APIService(transport=HTTPClient(client=client, download_dir=str(download_dir)))

    return _make
