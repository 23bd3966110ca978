"""
加密信息模块
解析 #EXT-X-KEY 标签，提供密钥获取入口

注意: 目前不支持解密，加密片段会按原样保存
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

import requests

from .errors import NetworkError

M3U8_EXT_KEY = "#EXT-X-KEY:"
M3U8_EXT_KEY_METHOD = "METHOD="
M3U8_EXT_KEY_URI = "URI="
M3U8_EXT_KEY_IV = "IV="

# 属性前缀 -> 字段名
KEY_ATTRIBUTES = (
    (M3U8_EXT_KEY_METHOD, "method"),
    (M3U8_EXT_KEY_IV, "iv"),
    (M3U8_EXT_KEY_URI, "uri"),
)

# 密钥获取的占位返回值
KEY_PLACEHOLDER = "key"

logger = logging.getLogger(__name__)


def parse_key_info(content: str) -> Dict[str, str]:
    """
    解析所有 #EXT-X-KEY 标签

    格式示例:
    #EXT-X-KEY:METHOD=AES-128,URI="https://example.com/key.key",IV=0x12345678...

    多个标签时后出现的值覆盖先出现的值，无法识别的属性直接忽略。

    Args:
        content: M3U8 文件内容

    Returns:
        Dict[str, str]: 可能包含 method、iv、uri 三个字段，未加密时为空
    """
    key_info: Dict[str, str] = {}

    for line in content.splitlines():
        if not line.startswith(M3U8_EXT_KEY):
            continue

        data = line[len(M3U8_EXT_KEY):].replace('"', '')
        for attr in data.split(','):
            for prefix, field_name in KEY_ATTRIBUTES:
                if attr.startswith(prefix):
                    key_info[field_name] = attr[len(prefix):]

    return key_info


@dataclass
class EncryptionInfo:
    """加密信息数据类"""
    method: str = ""  # 加密方法: AES-128, SAMPLE-AES, 空表示未加密
    uri: str = ""  # 密钥 URI
    iv: str = ""  # 初始向量（原始字符串）

    @classmethod
    def from_dict(cls, key_info: Dict[str, str]) -> 'EncryptionInfo':
        return cls(
            method=key_info.get('method', ''),
            uri=key_info.get('uri', ''),
            iv=key_info.get('iv', ''),
        )

    def is_encrypted(self) -> bool:
        """判断是否加密"""
        return bool(self.method)

    def to_dict(self) -> Dict:
        """转换为字典"""
        return {
            'method': self.method,
            'uri': self.uri,
            'iv': self.iv,
        }


class KeyManager:
    """
    密钥管理器

    只请求一次密钥地址以确认可访问，返回固定占位值，不保存密钥内容。
    """

    def __init__(self, session: requests.Session, timeout: Optional[float] = None):
        self.session = session
        self.timeout = timeout

    def get_key(self, uri: str) -> str:
        """
        获取密钥

        Args:
            uri: 密钥 URI

        Returns:
            str: 占位值 KEY_PLACEHOLDER

        Raises:
            NetworkError: 请求失败
        """
        try:
            response = self.session.get(uri, timeout=self.timeout)
            response.raise_for_status()
            logger.debug(f"密钥响应 {len(response.content)} bytes: {uri}")
        except requests.RequestException as e:
            raise NetworkError("下载密钥失败", url=uri, cause=e) from e

        return KEY_PLACEHOLDER
