"""
OCR 处理器：图片 → 文本
默认使用 Tesseract，可切换 EasyOCR；识别为空或失败时只输出图片元数据。

依赖：pytesseract（EasyOCR 需 pip install fileconvert[ocr]）
"""

from __future__ import annotations

import io
import logging

from .metadata import basic_info_lines

logger = logging.getLogger("fileconvert.ocr")


def extract_text_from_image(file) -> str:
    """图片 → OCR 文字 + 元数据"""
    try:
        text = recognize(file.content)
    except Exception as e:
        logger.warning(f"OCR 失败，仅输出元数据: {file.name}: {e}")
        return extract_image_metadata(file)

    if not text.strip():
        return extract_image_metadata(file)

    return f"OCR Text Content:\n{text}\n\n{extract_image_metadata(file)}"


def recognize(content: bytes) -> str:
    """按配置的引擎识别图片文字"""
    from ..config import cfg

    engine = cfg.OCR_ENGINE.lower()

    if engine == "tesseract":
        return _tesseract_extract(content, cfg.OCR_LANGUAGES)
    elif engine == "easyocr":
        return _easyocr_extract(content, cfg.OCR_LANGUAGES)
    else:
        raise ValueError(f"不支持的 OCR 引擎: {engine}")


def extract_image_metadata(file) -> str:
    """图片元数据：名称 / 类型 / 大小 / 修改时间 / 尺寸（尽力而为）"""
    metadata = basic_info_lines(file)

    dimensions = get_image_dimensions(file.content)
    if dimensions:
        width, height = dimensions
        metadata.append(f"Dimensions: {width}x{height}px")

    return "Image Metadata:\n" + "\n".join(metadata)


def get_image_dimensions(content: bytes) -> tuple[int, int] | None:
    """读取图片像素尺寸，无法解析时返回 None"""
    from PIL import Image, UnidentifiedImageError

    try:
        with Image.open(io.BytesIO(content)) as img:
            return img.size
    except (UnidentifiedImageError, OSError, ValueError) as e:
        logger.debug(f"无法读取图片尺寸: {e}")
        return None


def _tesseract_extract(content: bytes, languages: list[str]) -> str:
    """使用 Tesseract 提取文字"""
    import pytesseract
    from PIL import Image

    lang = "+".join(languages) if languages else "eng"
    logger.info(f"Tesseract 识别 (语言: {lang})")
    with Image.open(io.BytesIO(content)) as img:
        text = pytesseract.image_to_string(img, lang=lang)

    logger.info(f"OCR 完成: {len(text)} 字符")
    return text


def _easyocr_extract(content: bytes, languages: list[str]) -> str:
    """使用 EasyOCR 提取文字"""
    import easyocr

    logger.info(f"EasyOCR 识别 (语言: {languages})")
    reader = easyocr.Reader(languages, gpu=False)

    results = reader.readtext(content)

    # 按位置排序（从上到下，从左到右）
    results.sort(key=lambda r: (r[0][0][1], r[0][0][0]))

    texts = [text for _, text, conf in results if conf > 0.3]
    full_text = "\n".join(texts)

    logger.info(f"OCR 完成: {len(texts)} 个文本块, {len(full_text)} 字符")
    return full_text
