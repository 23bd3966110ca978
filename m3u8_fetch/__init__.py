"""
M3U8 Fetch
顺序下载M3U8播放列表中的全部TS片段
"""

import logging

from .core.downloader import M3U8Downloader, DownloadState
from .core.parser import M3U8Parser
from .core.config import DownloadConfig
from .core.errors import DownloadError

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "M3U8Downloader",
    "DownloadState",
    "M3U8Parser",
    "DownloadConfig",
    "DownloadError",
    "__version__",
]
