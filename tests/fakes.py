from typing import List, Optional

from pydantic import BaseModel

from apiservice.core.http.base import DownloadResponse, HTTPTransport


class User(BaseModel):
    id: int
    name: str


class FakeTransport(HTTPTransport):
    """Transport that hands back canned objects instead of touching the network."""

    def __init__(self, response=None, temp_path=None, error: Optional[Exception] = None):
        self.response = response
        self.temp_path = temp_path
        self.error = error
        self.calls: List[tuple] = []

    async def send(self, method, url, headers, content=None):
        self.calls.append((method, url, dict(headers), content))
        if self.error:
            raise self.error
        return self.response

    async def download(self, method, url, headers):
        self.calls.append((method, url, dict(headers), None))
        if self.error:
            raise self.error
        return DownloadResponse(response=self.response, temp_path=self.temp_path)
