"""
M3U8 Fetch CLI Module
命令行接口模块
"""

from .cli import M3U8CLI, main

__all__ = ["M3U8CLI", "main"]
