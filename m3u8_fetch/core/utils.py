"""
工具模块
日志、HTTP会话与URL处理
"""

import logging
import warnings
from typing import Optional
from urllib.parse import urljoin, urlsplit

import requests
from urllib3.exceptions import InsecureRequestWarning

from .errors import UrlParseError

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logger(name: str, log_file: Optional[str] = None, console_output: bool = True,
                 level: int = logging.INFO) -> logging.Logger:
    """
    配置并返回日志记录器

    Args:
        name: 日志记录器名称
        log_file: 日志文件路径，None 表示不写文件
        console_output: 是否输出到控制台
        level: 日志级别

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # 避免重复添加 handler
    if any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        return logger

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    if console_output:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)

    return logger


def create_session(verify_ssl: bool = True) -> requests.Session:
    """
    创建配置好的 HTTP 会话

    Args:
        verify_ssl: 是否验证 SSL 证书

    Returns:
        requests.Session: 配置好的会话对象
    """
    session = requests.Session()
    session.verify = verify_ssl

    if not verify_ssl:
        warnings.filterwarnings('ignore', category=InsecureRequestWarning)

    return session


class URLProcessor:
    """URL处理器"""

    @staticmethod
    def validate_url(url: str) -> bool:
        """验证URL格式"""
        try:
            URLProcessor.check_url(url)
            return True
        except UrlParseError:
            return False

    @staticmethod
    def check_url(url: str) -> str:
        """检查URL是否为带协议和主机的绝对地址，不合法时抛出 UrlParseError"""
        try:
            parsed = urlsplit(url)
            # 访问 port 会校验端口号
            parsed.port
        except (ValueError, TypeError, AttributeError) as e:
            raise UrlParseError("URL解析失败", url=str(url), cause=e) from e

        if not parsed.scheme or not parsed.netloc or not parsed.hostname:
            raise UrlParseError("URL缺少协议或主机", url=url)
        return url

    @staticmethod
    def resolve(base: str, reference: str) -> str:
        """
        以 base 为基准解析相对地址

        Args:
            base: 基准URL（播放列表自身的地址）
            reference: 播放列表中的片段引用

        Returns:
            str: 绝对URL

        Raises:
            UrlParseError: base 或拼接结果不是合法URL
        """
        URLProcessor.check_url(base)
        try:
            joined = urljoin(base, reference.strip())
        except (ValueError, AttributeError) as e:
            raise UrlParseError("URL拼接失败", url=f"{base} + {reference}", cause=e) from e
        return URLProcessor.check_url(joined)

    @staticmethod
    def extract_path(url: str) -> str:
        """提取URL的路径部分"""
        return urlsplit(url).path
