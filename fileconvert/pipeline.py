"""
fileconvert 主管线编排
逐个文件：格式识别 → 文本提取 → 汇总结果；文本分析按需对单个文件触发。

核心设计：
- 批量文件严格顺序处理，进度按 (i+0.5)/n、(i+1)/n 报告
- 单个文件失败只记录错误信息，不中断同批其他文件
- ConversionSession 保存已转换结果，供预览 / 下载 / 打包使用
"""

from __future__ import annotations

import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from .ai_analysis.analyzer import AnalysisResult, analyze
from .ingestion.source import SourceFile
from .processing import classify_and_extract

logger = logging.getLogger("fileconvert.pipeline")

ProgressCallback = Callable[[float, str], None]

ANALYSIS_FAILED_MESSAGE = "AI analysis failed. Please try again."


@dataclass
class ConvertedFile:
    """单个文件的转换结果"""
    id: str
    name: str
    original_type: str
    text_content: str
    size: int
    relative_path: str
    is_from_folder: bool = False

    # 按需分析结果
    analysis: AnalysisResult | None = None
    is_analyzing: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "original_type": self.original_type,
            "text_content": self.text_content,
            "text_length": len(self.text_content),
            "size": self.size,
            "relative_path": self.relative_path,
            "is_from_folder": self.is_from_folder,
            "analysis": self.analysis.to_dict() if self.analysis else None,
        }


@dataclass
class BatchResult:
    """一批文件的处理结果"""
    converted: list[ConvertedFile] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def all_failed(self) -> bool:
        return bool(self.errors) and not self.converted


class Pipeline:
    """批量转换管线：顺序提取，逐文件隔离失败"""

    def __init__(
        self,
        progress_callback: Optional[ProgressCallback] = None,
        extractor: Callable[[SourceFile], str] = classify_and_extract,
    ):
        self._progress_cb = progress_callback  # 进度回调：(percent, label) -> None
        self._extract = extractor
        # 序号跨批次递增，同一管线内 id 唯一
        self._seq = itertools.count()

    def _report_progress(self, percent: float, label: str):
        if not self._progress_cb:
            return
        try:
            self._progress_cb(percent, label)
        except Exception as e:
            logger.debug(f"进度回调失败（忽略）: {e}")

    def process_files(
        self,
        files: Iterable[SourceFile],
        is_from_folder: bool = False,
    ) -> BatchResult:
        """顺序处理一批文件"""
        files = list(files)
        total = len(files)
        batch = BatchResult()
        batch_stamp = int(time.time() * 1000)

        logger.info(f"🔄 开始处理 {total} 个文件 (目录上传={is_from_folder})")

        for i, file in enumerate(files):
            self._report_progress((i + 0.5) / total * 100, file.name)
            try:
                text = self._extract(file)
            except Exception as e:
                message = f"Failed to convert {file.name}: {str(e) or 'Unknown error'}"
                logger.error(f"  ❌ {message}")
                batch.errors.append(message)
                continue

            batch.converted.append(ConvertedFile(
                id=f"{batch_stamp}-{next(self._seq)}",
                name=file.name,
                original_type=file.declared_type or "unknown",
                text_content=text,
                size=file.size,
                relative_path=file.relative_path if is_from_folder else file.name,
                is_from_folder=is_from_folder,
            ))
            logger.info(f"  📝 {file.name}: {len(text)} 字符")
            self._report_progress((i + 1) / total * 100, file.name)

        logger.info(f"✅ 完成: {len(batch.converted)}/{total} 个文件")
        return batch


class ConversionSession:
    """会话内的转换结果集合（仅内存，不持久化）"""

    def __init__(
        self,
        pipeline: Pipeline | None = None,
        analyzer: Callable[[str], AnalysisResult] | None = None,
    ):
        self.pipeline = pipeline or Pipeline()
        self._analyze = analyzer or analyze
        self.files: list[ConvertedFile] = []
        self.last_error: str | None = None

    def add_files(self, files: Iterable[SourceFile], is_from_folder: bool = False) -> BatchResult:
        """转换并追加到会话；最后一条错误保留在 last_error"""
        self.last_error = None
        batch = self.pipeline.process_files(files, is_from_folder=is_from_folder)
        self.files.extend(batch.converted)
        if batch.errors:
            self.last_error = batch.errors[-1]
        return batch

    def get(self, file_id: str) -> ConvertedFile:
        for f in self.files:
            if f.id == file_id:
                return f
        raise KeyError(file_id)

    def analyze(self, file_id: str) -> AnalysisResult | None:
        """对单个文件做文本分析；失败时保留原文本并记录通用错误"""
        converted = self.get(file_id)
        converted.is_analyzing = True
        try:
            converted.analysis = self._analyze(converted.text_content)
        except Exception as e:
            logger.error(f"  ❌ 文本分析失败: {converted.name}: {e}")
            self.last_error = ANALYSIS_FAILED_MESSAGE
            return None
        finally:
            converted.is_analyzing = False
        return converted.analysis

    def remove(self, file_id: str) -> None:
        self.files = [f for f in self.files if f.id != file_id]

    def clear(self) -> None:
        self.files = []
        self.last_error = None
