"""
打包输出：把会话中所有转换结果写入一个 zip
单独上传的文件放在根目录，目录上传的文件按原相对路径存放；
已分析的文件旁附带 _analysis.txt。
"""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path
from typing import Iterable

from . import analysis_filename, txt_filename
from .formatters.text_fmt import format_analysis_report

logger = logging.getLogger("fileconvert.bundle")


def bundle_entries(files: Iterable) -> list[tuple[str, str]]:
    """计算 (压缩包内路径, 内容) 列表：先放单独上传的文件，再放目录上传的文件"""
    files = list(files)
    entries = []
    for converted in [f for f in files if not f.is_from_folder]:
        entries.extend(_entries_for(converted, folder=""))

    for converted in [f for f in files if f.is_from_folder]:
        folder, _, _ = converted.relative_path.rpartition("/")
        entries.extend(_entries_for(converted, folder=folder))
    return entries


def build_bundle(files: Iterable) -> bytes:
    """生成 zip 字节（只读取已有结果，不重新提取）"""
    buf = io.BytesIO()
    entries = bundle_entries(files)
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for arcname, content in entries:
            zf.writestr(arcname, content)
    logger.info(f"打包完成: {len(entries)} 个条目")
    return buf.getvalue()


def write_bundle(files: Iterable, output_path: Path) -> str:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(build_bundle(files))
    logger.info(f"压缩包输出: {output_path}")
    return str(output_path)


def _entries_for(converted, folder: str) -> list[tuple[str, str]]:
    prefix = f"{folder}/" if folder else ""

    entries = [(prefix + txt_filename(converted.name), converted.text_content)]
    if converted.analysis:
        entries.append(
            (prefix + analysis_filename(converted.name), format_analysis_report(converted))
        )
    return entries
