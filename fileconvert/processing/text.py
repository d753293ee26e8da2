"""
文本类处理器：纯文本 / JSON / 标记与脚本源码
原样读取文本；JSON 解析成功则以 2 空格缩进重新输出。
"""

from __future__ import annotations

import json
import logging

logger = logging.getLogger("fileconvert.text")


def read_text(content: bytes) -> str:
    """按 UTF-8 解码（非法字节替换，去掉 BOM），不做其他转换"""
    text = content.decode("utf-8", errors="replace")
    if text.startswith("\ufeff"):
        text = text[1:]
    return text


def extract_json(content: bytes) -> str:
    """JSON → 格式化文本；解析失败时原样返回"""
    text = read_text(content)
    try:
        data = json.loads(text)
    except ValueError:
        logger.debug("JSON 解析失败，按原文输出")
        return text
    return json.dumps(data, indent=2, ensure_ascii=False)


def extract_plain(file) -> str:
    """纯文本 / 标记 / 脚本源码"""
    return read_text(file.content)


def extract_json_file(file) -> str:
    return extract_json(file.content)
