"""
下载处理器模块
处理单个TS文件的流式下载
"""

import os
import time
import logging
from typing import Optional

import requests
from tqdm import tqdm

from .config import DownloadConfig
from .errors import FilesystemError, NetworkError, PreconditionError
from .utils import URLProcessor, create_session

logger = logging.getLogger(__name__)


class DownloadHandler:
    """下载处理器 - 专门处理单个文件的下载逻辑"""

    def __init__(self, config: Optional[DownloadConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or DownloadConfig()
        self.session = session or create_session(self.config.verify_ssl)

    def get_target_path(self, url: str) -> str:
        """
        计算保存路径: 下载目录 + URL路径（保留开头的 /）

        Raises:
            FilesystemError: 路径超出下载目录
        """
        filepath = self.config.download_dir + URLProcessor.extract_path(url)

        root = os.path.abspath(self.config.download_dir)
        target = os.path.abspath(filepath)
        if target != root and not target.startswith(root + os.sep):
            raise FilesystemError("保存路径超出下载目录", url=url)
        return filepath

    def _request(self, url: str) -> requests.Response:
        """发起流式GET请求"""
        try:
            response = self.session.get(url, timeout=self.config.timeout, stream=True)
            response.raise_for_status()
        except requests.RequestException as e:
            raise NetworkError("请求失败", url=url, cause=e) from e
        return response

    @staticmethod
    def _content_length(response: requests.Response, url: str) -> int:
        """读取响应长度，缺失时抛出 PreconditionError"""
        value = response.headers.get('content-length')
        if value is None:
            raise PreconditionError("响应缺少 Content-Length", url=url)
        try:
            return int(value)
        except ValueError as e:
            raise PreconditionError("Content-Length 无效", url=url, cause=e) from e

    def download_file_stream(self, url: str) -> str:
        """
        下载单个文件（流式，实时更新进度）

        文件默认以追加方式打开，已有内容不会被清空；
        config.overwrite 为 True 时改为覆盖写入。
        每写入一块后等待 config.chunk_delay 秒。

        Args:
            url: 文件URL（绝对地址）

        Returns:
            str: 保存路径

        Raises:
            NetworkError: 请求或传输失败
            PreconditionError: 响应缺少 Content-Length
            FilesystemError: 文件读写失败
        """
        response = self._request(url)
        try:
            total_size = self._content_length(response, url)
            print(f"content length: {total_size}")

            filepath = self.get_target_path(url)
            self._write_stream(response, url, filepath, total_size)
        finally:
            response.close()

        tqdm.write(f"下载成功, {filepath}")
        logger.info(f"成功下载: {url} -> {filepath}")
        return filepath

    def _write_stream(self, response: requests.Response, url: str, filepath: str, total_size: int):
        """分块写入文件"""
        mode = 'wb' if self.config.overwrite else 'ab'

        try:
            parent = os.path.dirname(filepath)
            if parent:
                os.makedirs(parent, exist_ok=True)

            with tqdm(
                total=total_size,
                unit='B',
                unit_scale=True,
                unit_divisor=1024,
                leave=False,
                disable=not self.config.show_progress,
            ) as pbar, open(filepath, mode) as f:
                for chunk in response.iter_content(chunk_size=self.config.chunk_size):
                    if not chunk:
                        continue
                    f.write(chunk)
                    pbar.update(len(chunk))
                    time.sleep(self.config.chunk_delay)

        # RequestException 继承自 OSError，必须先捕获
        except requests.RequestException as e:
            raise NetworkError("下载中断", url=url, cause=e) from e
        except OSError as e:
            raise FilesystemError("写入文件失败", url=filepath, cause=e) from e
