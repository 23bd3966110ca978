"""
测试公共组件
用假的会话和响应替代网络请求
"""

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from m3u8_fetch.core.config import DownloadConfig

PLAYLIST_URL = "http://host/dir/playlist.m3u8"


class FakeResponse:
    """模拟 requests.Response"""

    def __init__(self, body=b"", headers=None, status_code=200, chunks=None, error=None):
        self.content = body
        self.text = body.decode("utf-8") if isinstance(body, bytes) else body
        self.headers = CaseInsensitiveDict(headers or {})
        self.status_code = status_code
        self.chunks = chunks if chunks is not None else [body]
        self.error = error
        self.closed = False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def iter_content(self, chunk_size=1):
        for chunk in self.chunks:
            yield chunk
        if self.error is not None:
            raise self.error

    def close(self):
        self.closed = True


class FakeSession:
    """按URL返回预设响应，记录请求顺序"""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []
        self.kwargs = []

    def get(self, url, **kwargs):
        self.calls.append(url)
        self.kwargs.append(kwargs)
        route = self.routes.get(url)
        if route is None:
            raise requests.ConnectionError(f"connection refused: {url}")
        if isinstance(route, Exception):
            raise route
        return route


def segment_response(data: bytes, chunk_size: int = 2, with_length: bool = True) -> FakeResponse:
    """构造分块返回的片段响应"""
    chunks = [data[i:i + chunk_size] for i in range(0, len(data), chunk_size)]
    headers = {"Content-Length": str(len(data))} if with_length else {}
    return FakeResponse(body=data, headers=headers, chunks=chunks)


@pytest.fixture
def playlist_url():
    return PLAYLIST_URL


@pytest.fixture
def config(tmp_path):
    return DownloadConfig(
        url=PLAYLIST_URL,
        download_dir=str(tmp_path / "download"),
        chunk_delay=0,
        show_progress=False,
    )


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def make_segment():
    return segment_response
