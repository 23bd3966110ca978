"""
命令行接口模块
"""

import argparse
import logging
import sys
from typing import List, Optional

from .. import __version__
from ..core.config import DownloadConfig, DEFAULT_DOWNLOAD_DIR, DEFAULT_PLAYLIST_URL
from ..core.downloader import M3U8Downloader
from ..core.errors import DownloadError
from ..core.utils import setup_logger

logger = logging.getLogger(__name__)


class M3U8CLI:
    """M3U8命令行界面"""

    def __init__(self):
        self.downloader: Optional[M3U8Downloader] = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="m3u8-fetch",
            description="按顺序下载M3U8播放列表中的全部TS片段",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
使用示例:
  m3u8-fetch -u https://example.com/video/playlist.m3u8
  m3u8-fetch -u https://example.com/video/playlist.m3u8 -d segments --overwrite
  python -m m3u8_fetch --url http://localhost:8000/playlist.m3u8 --no-progress
            """
        )

        # 基本参数
        parser.add_argument('-u', '--url', default=DEFAULT_PLAYLIST_URL, help='M3U8文件URL')
        parser.add_argument('-d', '--download-dir', default=DEFAULT_DOWNLOAD_DIR, help='下载目录')

        # 下载参数
        parser.add_argument('--overwrite', action='store_true', help='覆盖已存在的文件（默认追加写入）')
        parser.add_argument('--chunk-size', type=int, help='下载块大小(字节)')
        parser.add_argument('--chunk-delay', type=float, help='每块写入后的等待时间(秒)')
        parser.add_argument('--timeout', type=float, help='请求超时(秒)，默认不超时')

        # 功能参数
        parser.add_argument('--no-ssl-verify', action='store_true', help='禁用SSL验证')
        parser.add_argument('--no-progress', action='store_true', help='禁用进度条')
        parser.add_argument('--no-logging', action='store_true', help='禁用日志')
        parser.add_argument('--log-file', help='日志文件路径')
        parser.add_argument('-v', '--verbose', action='store_true', help='输出详细日志')
        parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")

        return parser

    def parse_arguments(self, argv: Optional[List[str]] = None):
        """解析命令行参数"""
        return self.build_parser().parse_args(argv)

    def create_config_from_args(self, args) -> DownloadConfig:
        """从参数创建配置"""
        config = DownloadConfig(url=args.url, download_dir=args.download_dir)

        if args.overwrite:
            config.overwrite = True
        if args.chunk_size:
            config.chunk_size = args.chunk_size
        if args.chunk_delay is not None:
            config.chunk_delay = args.chunk_delay
        if args.timeout:
            config.timeout = args.timeout
        if args.no_ssl_verify:
            config.verify_ssl = False
        if args.no_progress:
            config.show_progress = False
        if args.no_logging:
            config.enable_logging = False

        return config

    def setup_logging(self, args, config: DownloadConfig):
        if not config.enable_logging:
            return
        level = logging.INFO if args.verbose else logging.WARNING
        setup_logger("m3u8_fetch", log_file=args.log_file, level=level)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        主运行函数

        Returns:
            int: 退出码，成功或内容不是M3U8时为 0，下载出错为 1
        """
        args = self.parse_arguments(argv)
        config = self.create_config_from_args(args)
        self.setup_logging(args, config)

        self.downloader = M3U8Downloader(config)
        try:
            self.downloader.download()
        except KeyboardInterrupt:
            print("\n下载被用户中断")
            return 130
        except DownloadError as e:
            logger.error(f"下载失败: {e}")
            print(f"❌ 下载失败: {e}", file=sys.stderr)
            return 1

        return 0


def main():
    """主入口"""
    cli = M3U8CLI()
    sys.exit(cli.run())


if __name__ == '__main__':
    main()
