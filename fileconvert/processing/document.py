"""
文档处理器：Word / Excel / PDF → 文本
第三方解码失败统一包装为 ExtractionFailedError。

依赖：python-docx / openpyxl / xlrd / PyPDF2
"""

from __future__ import annotations

import csv
import io
import logging
from typing import Iterable

from .exceptions import ExtractionFailedError

logger = logging.getLogger("fileconvert.document")

SEPARATOR = "=" * 50

# 工作簿格式按内容识别：xlsx 为 zip 容器，xls 为 OLE2 复合文档
XLSX_MAGIC = b"PK\x03\x04"
XLS_MAGIC = b"\xd0\xcf\x11\xe0"


def extract_docx(file) -> str:
    """Word (.docx) → 文本，段落之间空一行"""
    try:
        return _extract_docx(file.content)
    except Exception as e:
        logger.error(f"Word 提取失败: {file.name}: {e}")
        raise ExtractionFailedError("Failed to convert DOCX file") from e


def extract_spreadsheet(file) -> str:
    """Excel (.xlsx / .xls) → 每个工作表一段 CSV"""
    try:
        sheets = _read_workbook(file.name, file.content)
        text = render_sheets(sheets)
    except Exception as e:
        logger.error(f"Excel 提取失败: {file.name}: {e}")
        raise ExtractionFailedError("Failed to convert Excel file") from e
    logger.info(f"Excel 提取完成: {file.name}, {len(text)} 字符")
    return text


def extract_pdf(file) -> str:
    """PDF → 逐页文本，每页以 "Page N:" 开头"""
    try:
        pages = _read_pdf_pages(file.content)
    except Exception as e:
        logger.error(f"PDF 提取失败: {file.name}: {e}")
        raise ExtractionFailedError("Failed to convert PDF file") from e

    full_text = "".join(
        f"Page {i}:\n{page_text}\n\n" for i, page_text in enumerate(pages, start=1)
    ).strip()
    logger.info(f"PDF 提取完成: {len(pages)} 页, {len(full_text)} 字符")
    return full_text


def render_sheets(sheets: Iterable[tuple[str, list[list]]]) -> str:
    """(工作表名, 行) 序列 → "Sheet: 名称" + 分隔线 + CSV，按工作簿顺序拼接"""
    text = ""
    for sheet_name, rows in sheets:
        text += f"Sheet: {sheet_name}\n"
        text += SEPARATOR + "\n"
        text += rows_to_csv(rows) + "\n\n"
    return text


def rows_to_csv(rows: list[list]) -> str:
    """行数据 → CSV 文本（去掉末尾空行，行间以 \\n 分隔）"""
    cells = [[_cell_to_str(c) for c in row] for row in rows]
    while cells and not any(cells[-1]):
        cells.pop()

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerows(cells)
    return buf.getvalue().rstrip("\n")


def _cell_to_str(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _extract_docx(content: bytes) -> str:
    from docx import Document
    from docx.table import Table

    doc = Document(io.BytesIO(content))
    texts = []
    # 段落与表格按正文顺序输出，表格取非空单元格
    for block in doc.iter_inner_content():
        if isinstance(block, Table):
            for row in block.rows:
                for cell in row.cells:
                    if cell.text.strip():
                        texts.append(cell.text)
        else:
            texts.append(block.text)

    full_text = "\n\n".join(texts)
    logger.info(f"Word 提取完成: {len(texts)} 段, {len(full_text)} 字符")
    return full_text


def _read_workbook(name: str, content: bytes) -> list[tuple[str, list[list]]]:
    """按文件头选择解码器，无法识别时再看扩展名"""
    if content.startswith(XLSX_MAGIC):
        return _read_xlsx(content)
    if content.startswith(XLS_MAGIC):
        return _read_xls(content)
    if name.lower().endswith(".xls"):
        return _read_xls(content)
    return _read_xlsx(content)


def _read_xlsx(content: bytes) -> list[tuple[str, list[list]]]:
    from openpyxl import load_workbook

    wb = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    try:
        return [
            (ws.title, [list(row) for row in ws.iter_rows(values_only=True)])
            for ws in wb.worksheets
        ]
    finally:
        wb.close()


def _read_xls(content: bytes) -> list[tuple[str, list[list]]]:
    import xlrd

    wb = xlrd.open_workbook(file_contents=content)
    return [
        (sheet.name, [sheet.row_values(i) for i in range(sheet.nrows)])
        for sheet in wb.sheets()
    ]


def _read_pdf_pages(content: bytes) -> list[str]:
    from PyPDF2 import PdfReader

    reader = PdfReader(io.BytesIO(content))
    return [page.extract_text() or "" for page in reader.pages]
