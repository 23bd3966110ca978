"""
下载器核心模块
串联播放列表获取、校验、解析、密钥检查与逐个下载
"""

import logging
from enum import Enum
from typing import Dict, List, Optional

import requests

from .config import DownloadConfig
from .crypto import EncryptionInfo, KeyManager
from .download_handler import DownloadHandler
from .errors import NetworkError
from .parser import M3U8Parser
from .utils import URLProcessor, create_session

logger = logging.getLogger(__name__)


class DownloadState(Enum):
    """下载状态枚举"""
    PENDING = "pending"
    FETCHING = "fetching"
    VALIDATING = "validating"
    INVALID = "invalid"
    PARSING = "parsing"
    KEY_CHECK = "key_check"
    DOWNLOADING = "downloading"
    DONE = "done"
    FAILED = "failed"


class M3U8Downloader:
    """M3U8下载器主类"""

    def __init__(self, config: Optional[DownloadConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or DownloadConfig()
        self.session = session or create_session(self.config.verify_ssl)
        self.parser = M3U8Parser()
        self.handler = DownloadHandler(self.config, self.session)
        self.key_manager = KeyManager(self.session, timeout=self.config.timeout)

        # 下载状态
        self.state = DownloadState.PENDING
        self.ts_list: List[str] = []
        self.key_info: Dict[str, str] = {}
        self.downloaded: List[str] = []

    @property
    def url(self) -> str:
        return self.config.url

    def fetch_playlist(self) -> str:
        """
        获取播放列表内容

        Raises:
            NetworkError: 请求失败
        """
        try:
            response = self.session.get(self.url, timeout=self.config.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise NetworkError("无法获取m3u8信息", url=self.url, cause=e) from e
        return response.text

    def download(self) -> bool:
        """
        主下载流程

        Returns:
            bool: 全部片段下载完成返回 True；内容不是M3U8时返回 False

        Raises:
            DownloadError: 获取、解析或任一片段下载失败
        """
        try:
            self.state = DownloadState.FETCHING
            content = self.fetch_playlist()

            self.state = DownloadState.VALIDATING
            if not self.parser.validate_m3u8_content(content):
                self.state = DownloadState.INVALID
                print("错误的m3u8...")
                logger.warning(f"内容不是M3U8: {self.url}")
                return False

            self.state = DownloadState.PARSING
            info = self.parser.parse(self.url, content)
            self.ts_list = info.ts_files
            self.key_info = info.key_info
            logger.info(f"解析到 {info.total_segments} 个片段")

            self.state = DownloadState.KEY_CHECK
            self._check_key(info.encryption)

            self.state = DownloadState.DOWNLOADING
            self.download_all(self.ts_list)

            self.state = DownloadState.DONE
            return True

        except Exception:
            self.state = DownloadState.FAILED
            raise

    def _check_key(self, encryption: EncryptionInfo):
        """检查加密信息，有密钥地址时请求一次"""
        if not encryption.is_encrypted():
            return

        logger.info(f"加密方法: {encryption.method}, IV: {encryption.iv or 'N/A'}")
        if encryption.uri:
            # 相对地址以播放列表URL为基准
            self.key_manager.get_key(URLProcessor.resolve(self.url, encryption.uri))
        logger.warning(f"不支持解密 {encryption.method}，片段将按原样保存")

    def download_all(self, ts_list: List[str]):
        """
        按顺序逐个下载，任一片段失败即停止

        Args:
            ts_list: TS文件URL列表
        """
        print(f"总共{len(ts_list)}个ts文件...")

        self.config.ensure_download_dir()
        for url in ts_list:
            self.downloaded.append(self.handler.download_file_stream(url))

    def get_status(self) -> Dict:
        """获取下载状态"""
        return {
            'state': self.state.value,
            'url': self.url,
            'total_segments': len(self.ts_list),
            'downloaded': list(self.downloaded),
            'is_encrypted': EncryptionInfo.from_dict(self.key_info).is_encrypted(),
        }
