"""
压缩包处理器：列出 .zip / .jar 中的条目
"""

from __future__ import annotations

import io
import logging
import zipfile

from .exceptions import ExtractionFailedError
from .metadata import format_file_size

logger = logging.getLogger("fileconvert.archive")


def extract_archive_listing(file) -> str:
    """压缩包 → 条目清单（目录标注 directory，文件标注大小）"""
    try:
        with zipfile.ZipFile(io.BytesIO(file.content)) as zf:
            entries = zf.infolist()
    except (zipfile.BadZipFile, OSError, ValueError) as e:
        logger.error(f"压缩包读取失败: {file.name}: {e}")
        raise ExtractionFailedError("Failed to read archive file") from e

    lines = []
    for info in entries:
        if info.is_dir():
            lines.append(f"{info.filename} (directory)")
        else:
            lines.append(f"{info.filename} ({format_file_size(info.file_size)})")

    logger.info(f"压缩包列出完成: {file.name}, {len(entries)} 个条目")
    return f"Archive Contents ({file.name}):\n" + "=" * 50 + "\n" + "\n".join(lines)
