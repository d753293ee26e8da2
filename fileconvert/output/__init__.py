"""
输出层：单文件 .txt 下载与整体打包
原扩展名替换为 .txt；分析结果另存为 <名称>_analysis.txt。
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

logger = logging.getLogger("fileconvert.output")

_EXTENSION = re.compile(r"\.[^/.]+$")


def strip_extension(name: str) -> str:
    """去掉最后一个扩展名（无扩展名时原样返回）"""
    return _EXTENSION.sub("", name)


def txt_filename(name: str) -> str:
    return f"{strip_extension(name)}.txt"


def analysis_filename(name: str) -> str:
    return f"{strip_extension(name)}_analysis.txt"


def target_dir(converted, output_dir: Path) -> Path:
    """目录上传的文件保留原相对目录，单独上传的文件直接放在输出目录"""
    if converted.is_from_folder:
        folder = converted.relative_path.rpartition("/")[0]
        if folder:
            return output_dir / folder
    return output_dir


def write_text_file(converted, output_dir: Path) -> str:
    """将单个转换结果写为 .txt 文件，返回输出路径"""
    directory = target_dir(converted, output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    output_path = directory / txt_filename(converted.name)
    output_path.write_text(converted.text_content, encoding="utf-8")
    logger.info(f"文本输出: {output_path}")
    return str(output_path)


def write_analysis_file(converted, output_dir: Path) -> str | None:
    """写出 _analysis.txt（未分析时跳过）"""
    if not converted.analysis:
        return None
    from .formatters.text_fmt import format_analysis_report

    directory = target_dir(converted, output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    output_path = directory / analysis_filename(converted.name)
    output_path.write_text(format_analysis_report(converted), encoding="utf-8")
    logger.info(f"分析报告输出: {output_path}")
    return str(output_path)
