"""
输入层：文件格式识别与路由
根据 MIME 类型和文件扩展名，按固定顺序选择提取策略（先命中先用）。
"""

from __future__ import annotations

from typing import Callable, Optional

# 各类别的扩展名
_TEXT_EXTS = (".txt", ".md", ".csv", ".log", ".cfg", ".ini", ".svg")
_JSON_EXTS = (".json",)
_MARKUP_EXTS = (".xml", ".html", ".htm", ".js", ".css", ".ts", ".tsx", ".jsx")
_DOCX_EXTS = (".docx",)
_SPREADSHEET_EXTS = (".xlsx", ".xls")
_PDF_EXTS = (".pdf",)
_IMAGE_EXTS = (".png", ".jpg", ".jpeg", ".gif", ".bmp")
_ARCHIVE_EXTS = (".zip", ".jar")

# 各类别的 MIME 类型
_DOCX_TYPES = ("application/vnd.openxmlformats-officedocument.wordprocessingml.document",)
_SPREADSHEET_TYPES = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel",
)
_MARKUP_TYPES = ("application/xml", "application/javascript")


def _rule(
    exts: tuple[str, ...],
    types: tuple[str, ...] = (),
    type_prefixes: tuple[str, ...] = (),
) -> Callable[[str, str], bool]:
    def match(name: str, mime: str) -> bool:
        return (
            mime in types
            or (bool(type_prefixes) and mime.startswith(type_prefixes))
            or name.endswith(exts)
        )
    return match


# 分发顺序（先命中先用）
_DISPATCH_RULES: list[tuple[str, Callable[[str, str], bool]]] = [
    ("text", _rule(_TEXT_EXTS, types=("image/svg+xml",), type_prefixes=("text/",))),
    ("json", _rule(_JSON_EXTS, types=("application/json",))),
    ("markup", _rule(_MARKUP_EXTS, types=_MARKUP_TYPES)),
    ("docx", _rule(_DOCX_EXTS, types=_DOCX_TYPES)),
    ("spreadsheet", _rule(_SPREADSHEET_EXTS, types=_SPREADSHEET_TYPES)),
    ("pdf", _rule(_PDF_EXTS, types=("application/pdf",))),
    ("image", _rule(_IMAGE_EXTS, type_prefixes=("image/",))),
    ("archive", _rule(_ARCHIVE_EXTS)),
]


def classify(name: str, declared_type: str = "") -> Optional[str]:
    """
    识别文件类别。
    返回值：text / json / markup / docx / spreadsheet / pdf / image / archive / None（走二进制兜底）
    """
    name = (name or "").lower()
    mime = (declared_type or "").lower()
    for category, match in _DISPATCH_RULES:
        if match(name, mime):
            return category
    return None


def get_supported_extensions() -> list[str]:
    """返回按扩展名可识别的所有格式"""
    return sorted(set(
        _TEXT_EXTS + _JSON_EXTS + _MARKUP_EXTS + _DOCX_EXTS
        + _SPREADSHEET_EXTS + _PDF_EXTS + _IMAGE_EXTS + _ARCHIVE_EXTS
    ))
