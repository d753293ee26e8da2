"""
兜底处理器：未识别格式的字节级探测
前 1000 字节含 0 字节视为二进制，输出基础信息、十六进制头、签名与内嵌字符串；
否则按文本读取。
"""

from __future__ import annotations

import logging
import re

from .metadata import basic_info_lines
from .text import read_text

logger = logging.getLogger("fileconvert.binary")

BINARY_SNIFF_BYTES = 1000
MAX_STRINGS = 100
SHOWN_STRINGS = 20

# 文件头魔数（前 4 字节，大写十六进制）→ 格式名
FILE_SIGNATURES: dict[str, str] = {
    "89504E47": "PNG Image",
    "FFD8FFE0": "JPEG Image",
    "47494638": "GIF Image",
    "25504446": "PDF Document",
    "504B0304": "ZIP Archive",
    "52617221": "RAR Archive",
    "7F454C46": "ELF Executable",
    "4D5A9000": "Windows Executable",
}

# 连续 ≥4 个可打印 ASCII 字节
_PRINTABLE_RUN = re.compile(rb"[\x20-\x7e]{4,}")


def is_binary(content: bytes) -> bool:
    return b"\x00" in content[:BINARY_SNIFF_BYTES]


def extract_fallback(file) -> str:
    if is_binary(file.content):
        return extract_binary_info(file)
    return read_text(file.content)


def extract_binary_info(file) -> str:
    data = file.content
    info = basic_info_lines(file, type_fallback="Binary file")
    info += [
        "",
        "File Analysis:",
        f"- Binary file with {len(data)} bytes",
        f"- First 16 bytes (hex): {data[:16].hex(' ')}",
    ]

    signature = detect_file_signature(data)
    if signature:
        info.append(f"- Detected format: {signature}")

    strings = extract_strings(data)
    if strings:
        info += ["", "Embedded Strings:"]
        info += [f"- {s}" for s in strings[:SHOWN_STRINGS]]
        if len(strings) > SHOWN_STRINGS:
            info.append(f"... and {len(strings) - SHOWN_STRINGS} more")

    logger.info(f"二进制文件分析完成: {file.name} ({signature or '未知格式'})")
    return "\n".join(info)


def detect_file_signature(data: bytes) -> str | None:
    return FILE_SIGNATURES.get(data[:4].hex().upper())


def extract_strings(data: bytes, limit: int = MAX_STRINGS) -> list[str]:
    strings = []
    for match in _PRINTABLE_RUN.finditer(data):
        strings.append(match.group().decode("ascii"))
        if len(strings) >= limit:
            break
    return strings
