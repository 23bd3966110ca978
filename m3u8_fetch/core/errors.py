"""
异常模块
下载流程中各类错误的统一定义
"""

from typing import Optional


class DownloadError(Exception):
    """下载流程错误基类"""

    def __init__(self, message: str, url: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.url = url
        self.cause = cause

    def __str__(self):
        message = super().__str__()
        if self.url:
            message = f"{message} [{self.url}]"
        if self.cause is not None:
            message = f"{message}: {self.cause}"
        return message


class NetworkError(DownloadError):
    """请求失败、连接中断或HTTP错误状态"""


class UrlParseError(DownloadError):
    """URL格式无效"""


class PreconditionError(DownloadError):
    """前置条件不满足，例如响应缺少 Content-Length"""


class FilesystemError(DownloadError):
    """目录或文件的创建、写入失败"""


class InvalidPlaylistError(DownloadError):
    """内容不是M3U8播放列表"""
