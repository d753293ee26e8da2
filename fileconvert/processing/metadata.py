"""
文件元数据格式化：可读文件大小、修改时间、基础信息行
供图片元数据与二进制文件分析共用。
"""

from __future__ import annotations

import math
from datetime import datetime

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def format_file_size(size: int) -> str:
    """
    字节数 → 可读大小（1024 进制，保留 2 位小数，去掉末尾 0）。
    0 字节固定输出 "0 Bytes"。
    """
    if size <= 0:
        return "0 Bytes"
    i = min(int(math.floor(math.log(size, 1024))), len(_SIZE_UNITS) - 1)
    # log 浮点误差可能让 1024**n 落到上一档
    if i + 1 < len(_SIZE_UNITS) and size >= 1024 ** (i + 1):
        i += 1
    value = f"{size / 1024 ** i:.2f}".rstrip("0").rstrip(".")
    return f"{value} {_SIZE_UNITS[i]}"


def format_timestamp(last_modified_ms: int) -> str:
    """毫秒时间戳 → 本地时间字符串"""
    return datetime.fromtimestamp(last_modified_ms / 1000).strftime("%Y-%m-%d %H:%M:%S")


def basic_info_lines(file, type_fallback: str = "") -> list[str]:
    """文件名 / 类型 / 大小 / 修改时间 四行基础信息"""
    return [
        f"File: {file.name}",
        f"Type: {file.declared_type or type_fallback}",
        f"Size: {format_file_size(file.size)}",
        f"Last Modified: {format_timestamp(file.last_modified)}",
    ]
