"""
fileconvert 配置管理
从 .env + YAML 配置文件读取所有配置，提供统一访问入口。
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv

# 项目根目录
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
CONFIG_DIR = PROJECT_ROOT / "config"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "default.yaml"

# 加载 .env
_env_path = PROJECT_ROOT / ".env"
if _env_path.exists():
    load_dotenv(dotenv_path=_env_path)


def _load_yaml_config() -> dict:
    """加载 YAML 配置文件"""
    if DEFAULT_CONFIG_PATH.exists():
        with open(DEFAULT_CONFIG_PATH, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    return {}


class Config:
    """应用配置（.env 环境变量 + YAML 文件配置）"""

    # ── 日志级别 ──
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # ── 数据路径 ──
    DATA_DIR: Path = DATA_DIR
    OUTPUT_DIR: Path = Path(os.getenv("FILECONVERT_OUTPUT_DIR", str(DATA_DIR / "output")))

    # ── YAML 配置（OCR 引擎、分析参数等） ──
    _yaml: dict = _load_yaml_config()

    # OCR 配置
    OCR_ENGINE: str = _yaml.get("ocr", {}).get("engine", "tesseract")
    OCR_LANGUAGES: list[str] = _yaml.get("ocr", {}).get("languages", ["eng"])

    # 文本分析配置（模拟异步服务调用的延迟）
    ANALYSIS_DELAY_SEC: float = float(
        os.getenv("ANALYSIS_DELAY_SEC", _yaml.get("analysis", {}).get("delay_sec", 2.0))
    )
    SUMMARY_DELAY_SEC: float = float(
        os.getenv("SUMMARY_DELAY_SEC", _yaml.get("analysis", {}).get("summary_delay_sec", 1.5))
    )

    # 转换配置
    LARGE_FILE_THRESHOLD: int = int(
        _yaml.get("conversion", {}).get("large_file_threshold", 10 * 1024 * 1024)
    )

    # 输出配置
    BUNDLE_NAME: str = _yaml.get("output", {}).get("bundle_name", "converted_files_with_analysis.zip")

    @classmethod
    def validate(cls) -> list[str]:
        """验证配置，返回警告列表（非致命）"""
        warnings = []
        if cls.OCR_ENGINE.lower() not in ("tesseract", "easyocr"):
            warnings.append(f"未知 OCR 引擎 {cls.OCR_ENGINE}，图片将只输出元数据")
        if cls.ANALYSIS_DELAY_SEC < 0 or cls.SUMMARY_DELAY_SEC < 0:
            warnings.append("分析延迟为负数，将按 0 处理")
        return warnings

    @classmethod
    def ensure_dirs(cls):
        """确保数据目录存在"""
        cls.DATA_DIR.mkdir(parents=True, exist_ok=True)
        cls.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    @classmethod
    def to_dict(cls) -> dict:
        """导出当前配置为字典"""
        return {
            "log_level": cls.LOG_LEVEL,
            "ocr": {"engine": cls.OCR_ENGINE, "languages": cls.OCR_LANGUAGES},
            "analysis": {
                "delay_sec": cls.ANALYSIS_DELAY_SEC,
                "summary_delay_sec": cls.SUMMARY_DELAY_SEC,
            },
            "conversion": {"large_file_threshold": cls.LARGE_FILE_THRESHOLD},
            "output": {"bundle_name": cls.BUNDLE_NAME},
            "paths": {
                "data": str(cls.DATA_DIR),
                "output": str(cls.OUTPUT_DIR),
            },
        }


# 全局配置单例
cfg = Config()
