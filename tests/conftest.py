"""
fileconvert 测试配置
提供共享 fixtures 和测试环境设置
"""

import os
import sys
from pathlib import Path

import pytest

# 确保项目根目录在 Python 路径中
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# 关闭模拟分析延迟（避免测试等待）
os.environ.setdefault("ANALYSIS_DELAY_SEC", "0")
os.environ.setdefault("SUMMARY_DELAY_SEC", "0")

from fileconvert.ingestion.source import SourceFile  # noqa: E402


@pytest.fixture()
def make_file():
    """按名称 / 内容 / MIME 类型构造 SourceFile"""
    def _make(name: str, content: bytes = b"", declared_type: str = "", **kwargs) -> SourceFile:
        return SourceFile.from_bytes(name, content, declared_type=declared_type, **kwargs)
    return _make


@pytest.fixture()
def xlsx_bytes() -> bytes:
    """两个工作表（Sheet1 / Sheet2）的 xlsx"""
    import io

    from openpyxl import Workbook

    wb = Workbook()
    ws1 = wb.active
    ws1.title = "Sheet1"
    ws1.append(["name", "qty"])
    ws1.append(["apple", 3])
    ws2 = wb.create_sheet("Sheet2")
    ws2.append(["city", "note"])
    ws2.append(["Paris", "a, b"])

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


@pytest.fixture()
def docx_bytes() -> bytes:
    """两段文字的 docx"""
    import io

    from docx import Document

    doc = Document()
    doc.add_paragraph("First paragraph of the report.")
    doc.add_paragraph("Second paragraph with details.")

    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


@pytest.fixture()
def xls_bytes() -> bytes:
    """单个工作表（Legacy）的旧版 .xls"""
    import io

    import xlwt

    wb = xlwt.Workbook()
    ws = wb.add_sheet("Legacy")
    ws.write(0, 0, "name")
    ws.write(0, 1, "qty")
    ws.write(1, 0, "pear")
    ws.write(1, 1, 7)

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


@pytest.fixture()
def docx_with_table_bytes() -> bytes:
    """段落 - 表格 - 段落 的 docx"""
    import io

    from docx import Document

    doc = Document()
    doc.add_paragraph("Before the table.")
    table = doc.add_table(rows=1, cols=2)
    table.cell(0, 0).text = "left cell"
    table.cell(0, 1).text = "right cell"
    doc.add_paragraph("After the table.")

    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    """32x16 的空白 PNG"""
    import io

    from PIL import Image

    buf = io.BytesIO()
    Image.new("RGB", (32, 16), "white").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def zip_bytes() -> bytes:
    """包含 a.txt 与 dir/b.txt 的 zip"""
    import io
    import zipfile

    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr("a.txt", "hello")
        zf.writestr("dir/", "")
        zf.writestr("dir/b.txt", "x" * 2048)
    return buf.getvalue()
