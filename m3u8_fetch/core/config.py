"""
配置模块
定义下载器的各种配置参数
"""

import os
from dataclasses import dataclass
from typing import Optional

from .errors import FilesystemError

DEFAULT_PLAYLIST_URL = "http://localhost:8000/playlist.m3u8"
DEFAULT_DOWNLOAD_DIR = "download"


@dataclass
class DownloadConfig:
    """下载配置类"""

    # 播放列表地址
    url: str = DEFAULT_PLAYLIST_URL

    # 路径配置（相对于当前工作目录）
    download_dir: str = DEFAULT_DOWNLOAD_DIR

    # 下载配置
    chunk_size: int = 8192  # 下载块大小
    chunk_delay: float = 0.01  # 每写入一块后的等待时间（秒）

    # 已存在的文件默认追加写入，开启后改为覆盖
    overwrite: bool = False

    # 超时配置，None 表示不设超时
    timeout: Optional[float] = None

    # 其他配置
    verify_ssl: bool = True
    show_progress: bool = True
    enable_logging: bool = True

    def ensure_download_dir(self) -> str:
        """确保下载目录存在，返回目录路径"""
        try:
            os.makedirs(self.download_dir, exist_ok=True)
        except OSError as e:
            raise FilesystemError("无法创建下载目录", url=self.download_dir, cause=e) from e
        return self.download_dir

    def to_dict(self):
        """转换为字典"""
        return {
            'url': self.url,
            'download_dir': self.download_dir,
            'chunk_size': self.chunk_size,
            'chunk_delay': self.chunk_delay,
            'overwrite': self.overwrite,
            'timeout': self.timeout,
            'verify_ssl': self.verify_ssl,
            'show_progress': self.show_progress,
            'enable_logging': self.enable_logging,
        }
