import os

import pytest
import requests

from m3u8_fetch.core import download_handler
from m3u8_fetch.core.download_handler import DownloadHandler
from m3u8_fetch.core.errors import FilesystemError, NetworkError, PreconditionError

SEGMENT_URL = "http://host/dir/seg1.ts"


def target(config, path="/dir/seg1.ts"):
    return config.download_dir + path


def test_download_file_stream(config, fake_session, make_segment, capsys):
    response = make_segment(b"abcdefg")
    handler = DownloadHandler(config, fake_session({SEGMENT_URL: response}))

    filepath = handler.download_file_stream(SEGMENT_URL)

    assert filepath == target(config)
    with open(filepath, "rb") as f:
        assert f.read() == b"abcdefg"
    assert response.closed

    out = capsys.readouterr().out
    assert "content length: 7" in out
    assert f"下载成功, {filepath}" in out


def test_download_appends_to_existing_file(config, fake_session, make_segment):
    os.makedirs(os.path.dirname(target(config)))
    with open(target(config), "wb") as f:
        f.write(b"old")

    handler = DownloadHandler(config, fake_session({SEGMENT_URL: make_segment(b"new")}))
    handler.download_file_stream(SEGMENT_URL)

    with open(target(config), "rb") as f:
        assert f.read() == b"oldnew"


def test_download_overwrite(config, fake_session, make_segment):
    os.makedirs(os.path.dirname(target(config)))
    with open(target(config), "wb") as f:
        f.write(b"old")

    config.overwrite = True
    handler = DownloadHandler(config, fake_session({SEGMENT_URL: make_segment(b"new")}))
    handler.download_file_stream(SEGMENT_URL)

    with open(target(config), "rb") as f:
        assert f.read() == b"new"


def test_missing_content_length(config, fake_session, make_segment):
    response = make_segment(b"abc", with_length=False)
    handler = DownloadHandler(config, fake_session({SEGMENT_URL: response}))

    with pytest.raises(PreconditionError) as excinfo:
        handler.download_file_stream(SEGMENT_URL)

    assert excinfo.value.url == SEGMENT_URL
    assert not os.path.exists(target(config))
    assert response.closed


def test_missing_content_length_keeps_previous_file(config, fake_session, make_segment):
    os.makedirs(os.path.dirname(target(config)))
    with open(target(config), "wb") as f:
        f.write(b"partial")

    handler = DownloadHandler(config, fake_session({SEGMENT_URL: make_segment(b"abc", with_length=False)}))
    with pytest.raises(PreconditionError):
        handler.download_file_stream(SEGMENT_URL)

    with open(target(config), "rb") as f:
        assert f.read() == b"partial"


def test_invalid_content_length(config, fake_session, fake_response):
    response = fake_response(body=b"abc", headers={"Content-Length": "abc"})
    handler = DownloadHandler(config, fake_session({SEGMENT_URL: response}))

    with pytest.raises(PreconditionError):
        handler.download_file_stream(SEGMENT_URL)


def test_http_error_status(config, fake_session, fake_response):
    handler = DownloadHandler(config, fake_session({SEGMENT_URL: fake_response(status_code=404)}))

    with pytest.raises(NetworkError):
        handler.download_file_stream(SEGMENT_URL)
    assert not os.path.exists(target(config))


def test_connection_error(config, fake_session):
    handler = DownloadHandler(config, fake_session({}))

    with pytest.raises(NetworkError) as excinfo:
        handler.download_file_stream(SEGMENT_URL)
    assert isinstance(excinfo.value.cause, requests.ConnectionError)


def test_error_mid_stream(config, fake_session, fake_response):
    response = fake_response(
        headers={"Content-Length": "10"},
        chunks=[b"ab", b"cd"],
        error=requests.exceptions.ChunkedEncodingError("connection broken"),
    )
    handler = DownloadHandler(config, fake_session({SEGMENT_URL: response}))

    with pytest.raises(NetworkError):
        handler.download_file_stream(SEGMENT_URL)

    assert response.closed
    with open(target(config), "rb") as f:
        assert f.read() == b"abcd"


def test_delay_after_each_chunk(config, fake_session, make_segment, monkeypatch):
    delays = []
    monkeypatch.setattr(download_handler.time, "sleep", delays.append)

    config.chunk_delay = 0.01
    handler = DownloadHandler(config, fake_session({SEGMENT_URL: make_segment(b"abcdef", chunk_size=2)}))
    handler.download_file_stream(SEGMENT_URL)

    assert delays == [0.01, 0.01, 0.01]


def test_path_outside_download_dir(config, fake_session, make_segment):
    url = "http://host/../../escape.ts"
    handler = DownloadHandler(config, fake_session({url: make_segment(b"abc")}))

    with pytest.raises(FilesystemError):
        handler.download_file_stream(url)


def test_filesystem_error(config, fake_session, make_segment):
    # 下载目录位置被普通文件占用
    with open(config.download_dir, "wb") as f:
        f.write(b"")

    handler = DownloadHandler(config, fake_session({SEGMENT_URL: make_segment(b"abc")}))
    with pytest.raises(FilesystemError):
        handler.download_file_stream(SEGMENT_URL)


def test_request_uses_stream_and_timeout(config, fake_session, make_segment):
    config.timeout = 5
    session = fake_session({SEGMENT_URL: make_segment(b"abc")})
    DownloadHandler(config, session).download_file_stream(SEGMENT_URL)

    assert session.kwargs == [{"timeout": 5, "stream": True}]
