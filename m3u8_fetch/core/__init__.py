"""
M3U8 Fetch Core Module
核心下载功能模块
"""

from .parser import M3U8Parser, M3U8Info
from .downloader import M3U8Downloader, DownloadState
from .download_handler import DownloadHandler
from .config import DownloadConfig
from .crypto import EncryptionInfo, KeyManager, parse_key_info
from .errors import (
    DownloadError,
    NetworkError,
    UrlParseError,
    PreconditionError,
    FilesystemError,
    InvalidPlaylistError
)
from .utils import URLProcessor, setup_logger, create_session

__all__ = [
    # 解析
    "M3U8Parser",
    "M3U8Info",
    "URLProcessor",

    # 下载
    "M3U8Downloader",
    "DownloadState",
    "DownloadHandler",

    # 配置
    "DownloadConfig",

    # 加密信息
    "EncryptionInfo",
    "KeyManager",
    "parse_key_info",

    # 异常
    "DownloadError",
    "NetworkError",
    "UrlParseError",
    "PreconditionError",
    "FilesystemError",
    "InvalidPlaylistError",

    # 工具函数
    "setup_logger",
    "create_session"
]
