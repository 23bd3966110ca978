"""
M3U8解析器模块
负责校验M3U8内容，提取TS文件URL列表
"""

from typing import Dict, List

from .crypto import EncryptionInfo, parse_key_info
from .errors import InvalidPlaylistError
from .utils import URLProcessor

M3U8_EXT_HEADER = "#EXTM3U"
M3U8_EXT_INF = "#EXTINF"
M3U8_EXT_ENDLIST = "#EXT-X-ENDLIST"


class M3U8Parser:
    """M3U8文件解析器"""

    @staticmethod
    def validate_m3u8_content(content: str) -> bool:
        """验证M3U8内容格式：必须以 #EXTM3U 开头"""
        return content.startswith(M3U8_EXT_HEADER)

    @staticmethod
    def get_ts_list(base_url: str, content: str) -> List[str]:
        """
        提取TS文件URL列表

        #EXTINF 的下一行即为片段地址，遇到 #EXT-X-ENDLIST 停止。
        每个地址立即以播放列表URL为基准转换为绝对地址。

        Args:
            base_url: 播放列表URL
            content: M3U8 文件内容

        Returns:
            List[str]: 按文件顺序排列的TS文件URL

        Raises:
            UrlParseError: 任一地址无法解析
        """
        ts_files = []
        expect_segment = False

        for line in content.splitlines():
            if line.startswith(M3U8_EXT_ENDLIST):
                break

            if line.startswith(M3U8_EXT_INF):
                expect_segment = True
                continue

            if expect_segment:
                ts_files.append(URLProcessor.resolve(base_url, line))
                expect_segment = False

        return ts_files

    def parse(self, url: str, content: str) -> 'M3U8Info':
        """
        校验并解析播放列表

        Raises:
            InvalidPlaylistError: 内容不是M3U8
            UrlParseError: 片段地址无法解析
        """
        if not self.validate_m3u8_content(content):
            raise InvalidPlaylistError("错误的m3u8", url=url)

        ts_files = self.get_ts_list(url, content)
        return M3U8Info(url, ts_files, parse_key_info(content))


class M3U8Info:
    """M3U8信息容器"""

    def __init__(self, url: str, ts_files: List[str], key_info: Dict[str, str]):
        self.url = url
        self.ts_files = ts_files
        self.key_info = key_info
        self.total_segments = len(ts_files)

    @property
    def encryption(self) -> EncryptionInfo:
        return EncryptionInfo.from_dict(self.key_info)

    @property
    def is_encrypted(self) -> bool:
        return self.encryption.is_encrypted()

    def __str__(self):
        encryption_status = self.key_info.get('method') or "未加密"
        return f"""M3U8 Information:
    URL: {self.url}
    Total Segments: {self.total_segments}
    Encryption: {encryption_status}"""

    def to_dict(self):
        """转换为字典"""
        return {
            'url': self.url,
            'total_segments': self.total_segments,
            'ts_files': self.ts_files[:10],  # 只显示前10个
            'is_encrypted': self.is_encrypted,
            'encryption': self.key_info,
        }
