"""
内容处理层：按类别分发到对应提取器，统一返回纯文本
类别由 ingestion.router.classify 给出；未识别的类别走字节级兜底。
"""

from __future__ import annotations

import logging

from .exceptions import ConversionError, ExtractionFailedError, UnsupportedFormatError
from .metadata import format_file_size

logger = logging.getLogger("fileconvert.processing")

__all__ = [
    "ConversionError",
    "ExtractionFailedError",
    "UnsupportedFormatError",
    "classify_and_extract",
    "extract_text",
]


def extract_text(file, category: str | None) -> str:
    """
    统一文本提取入口。
    根据 category 分发到对应处理器。
    """
    if category in ("text", "markup"):
        from .text import extract_plain
        return extract_plain(file)
    elif category == "json":
        from .text import extract_json_file
        return extract_json_file(file)
    elif category == "docx":
        from .document import extract_docx
        return extract_docx(file)
    elif category == "spreadsheet":
        from .document import extract_spreadsheet
        return extract_spreadsheet(file)
    elif category == "pdf":
        from .document import extract_pdf
        return extract_pdf(file)
    elif category == "image":
        from .ocr import extract_text_from_image
        return extract_text_from_image(file)
    elif category == "archive":
        from .archive import extract_archive_listing
        return extract_archive_listing(file)
    elif category is None:
        return _extract_unknown(file)
    else:
        raise ValueError(f"未知类别: {category}")


def classify_and_extract(file) -> str:
    """识别格式并提取文本（Dispatcher 入口）"""
    from ..config import cfg
    from ..ingestion.router import classify

    if file.size > cfg.LARGE_FILE_THRESHOLD:
        logger.info(f"处理大文件: {file.name} ({format_file_size(file.size)})")

    category = classify(file.name, file.declared_type)
    logger.debug(f"{file.name} → {category or 'fallback'}")
    return extract_text(file, category)


def _extract_unknown(file) -> str:
    from .binary import extract_fallback

    try:
        return extract_fallback(file)
    except Exception as e:
        raise UnsupportedFormatError(
            f"Unsupported file type: {file.declared_type or 'unknown'}"
        ) from e
