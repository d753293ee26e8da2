"""
内容处理层测试：各提取策略与统一分发入口
文档 / 表格 / 压缩包使用测试内生成的真实文件；OCR 与 PDF 解析通过 monkeypatch 替换
"""

import json

import pytest

from fileconvert.processing import (
    ExtractionFailedError,
    UnsupportedFormatError,
    classify_and_extract,
    extract_text,
)
from fileconvert.processing import binary, document, ocr
from fileconvert.processing.metadata import format_file_size, format_timestamp


class TestFormatFileSize:
    """可读文件大小测试"""

    @pytest.mark.parametrize("size,expected", [
        (0, "0 Bytes"),
        (1, "1 Bytes"),
        (1023, "1023 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (1024 * 1024, "1 MB"),
        (int(2.25 * 1024 ** 3), "2.25 GB"),
        (5 * 1024 ** 4, "5120 GB"),
    ])
    def test_sizes(self, size: int, expected: str):
        assert format_file_size(size) == expected

    def test_two_decimal_rounding(self):
        """保留 2 位小数"""
        assert format_file_size(1234) == "1.21 KB"


class TestTextStrategies:
    """文本 / JSON / 标记类提取测试"""

    def test_plain_text_verbatim(self, make_file):
        """纯文本原样返回"""
        f = make_file("notes.txt", "héllo\n  world\n".encode("utf-8"))
        assert classify_and_extract(f) == "héllo\n  world\n"

    def test_bom_stripped(self, make_file):
        """UTF-8 BOM 被去掉"""
        f = make_file("notes.txt", b"\xef\xbb\xbfabc")
        assert classify_and_extract(f) == "abc"

    def test_invalid_utf8_does_not_raise(self, make_file):
        """非法字节替换而非报错"""
        f = make_file("notes.txt", b"ok \xff\xfe end")
        text = classify_and_extract(f)
        assert text.startswith("ok ") and text.endswith(" end")

    def test_json_pretty_printed(self, make_file):
        """合法 JSON 以 2 空格缩进重新输出"""
        f = make_file("data.json", b'{"a":1,"b":[1,2]}')
        text = classify_and_extract(f)
        assert text == json.dumps({"a": 1, "b": [1, 2]}, indent=2)
        assert '\n  "a": 1' in text

    def test_malformed_json_falls_back(self, make_file):
        """非法 JSON 原样返回，不报错"""
        raw = b'{"a": 1,, oops'
        f = make_file("broken.json", raw, "application/json")
        assert classify_and_extract(f) == raw.decode()

    def test_markup_verbatim(self, make_file):
        """HTML 原样返回（不去标签）"""
        html = b"<html><body><p>Hi</p></body></html>"
        assert classify_and_extract(make_file("page.html", html)) == html.decode()

    def test_unknown_category_rejected(self, make_file):
        with pytest.raises(ValueError):
            extract_text(make_file("a.txt", b"a"), "video")


class TestBinaryFallback:
    """字节级兜底测试"""

    def test_zero_byte_is_binary(self):
        assert binary.is_binary(b"abc\x00def")

    def test_no_zero_byte_is_text(self):
        assert not binary.is_binary(b"plain text only")

    def test_zero_byte_after_sniff_window_is_text(self):
        """只检查前 1000 字节"""
        assert not binary.is_binary(b"a" * 1000 + b"\x00")
        assert binary.is_binary(b"a" * 999 + b"\x00")

    def test_unknown_text_read_as_text(self, make_file):
        f = make_file("README", b"just some words")
        assert classify_and_extract(f) == "just some words"

    def test_binary_report(self, make_file):
        """二进制报告包含基础信息、十六进制头、签名与内嵌字符串"""
        data = b"\x7fELF\x02\x01\x01\x00" + b"\x00" * 8 + b"GLIBC_2.34\x00libc.so\x00ab\x00"
        f = make_file("tool", data, last_modified=0)
        text = classify_and_extract(f)
        lines = text.split("\n")

        assert lines[0] == "File: tool"
        assert lines[1] == "Type: Binary file"
        assert lines[2] == f"Size: {len(data)} Bytes"
        assert lines[3] == f"Last Modified: {format_timestamp(0)}"
        assert "File Analysis:" in lines
        assert f"- Binary file with {len(data)} bytes" in lines
        assert "- First 16 bytes (hex): 7f 45 4c 46 02 01 01 00 00 00 00 00 00 00 00 00" in lines
        assert "- Detected format: ELF Executable" in lines
        assert "Embedded Strings:" in lines
        assert "- GLIBC_2.34" in lines
        assert "- libc.so" in lines
        # 长度 <4 的片段不计入
        assert "- ab" not in lines

    def test_declared_type_shown(self, make_file):
        f = make_file("x.bin", b"\x00\x01", "application/octet-stream")
        assert "Type: application/octet-stream" in classify_and_extract(f)

    def test_strings_capped(self, make_file):
        """最多展示 20 个字符串，其余计数（总共最多收集 100 个）"""
        data = b"\x00".join(f"str{i:04d}".encode() for i in range(150))
        f = make_file("many.bin", data)
        text = classify_and_extract(f)
        assert "- str0019" in text
        assert "- str0020" not in text
        assert text.endswith("... and 80 more")

    @pytest.mark.parametrize("head,expected", [
        (b"\x89PNG", "PNG Image"),
        (b"\xff\xd8\xff\xe0", "JPEG Image"),
        (b"GIF8", "GIF Image"),
        (b"%PDF", "PDF Document"),
        (b"PK\x03\x04", "ZIP Archive"),
        (b"Rar!", "RAR Archive"),
        (b"MZ\x90\x00", "Windows Executable"),
        (b"\x00\x00\x00\x00", None),
    ])
    def test_detect_signature(self, head: bytes, expected):
        assert binary.detect_file_signature(head + b"\x00rest") == expected

    def test_fallback_failure_is_unsupported(self, make_file, monkeypatch):
        """兜底过程出错时抛出 UnsupportedFormatError"""
        def boom(_file):
            raise RuntimeError("read error")

        monkeypatch.setattr(binary, "extract_fallback", boom)
        with pytest.raises(UnsupportedFormatError, match="Unsupported file type: unknown"):
            classify_and_extract(make_file("mystery", b"\x00"))


class TestDocumentStrategies:
    """Word / Excel / PDF 提取测试"""

    def test_docx_paragraphs(self, make_file, docx_bytes):
        text = classify_and_extract(make_file("report.docx", docx_bytes))
        assert text == "First paragraph of the report.\n\nSecond paragraph with details."

    def test_docx_table_in_place(self, make_file, docx_with_table_bytes):
        """表格文字保持在正文中的原位置"""
        text = classify_and_extract(make_file("report.docx", docx_with_table_bytes))
        assert text == "Before the table.\n\nleft cell\n\nright cell\n\nAfter the table."

    def test_corrupt_docx_fails(self, make_file):
        with pytest.raises(ExtractionFailedError, match="Failed to convert DOCX file"):
            classify_and_extract(make_file("report.docx", b"not a zip"))

    def test_spreadsheet_two_sheets(self, make_file, xlsx_bytes):
        """每个工作表输出标题 + 分隔线 + CSV，按工作簿顺序"""
        text = classify_and_extract(make_file("book.xlsx", xlsx_bytes))
        sep = "=" * 50
        assert text == (
            f"Sheet: Sheet1\n{sep}\nname,qty\napple,3\n\n"
            f"Sheet: Sheet2\n{sep}\ncity,note\nParis,\"a, b\"\n\n"
        )
        assert text.index("Sheet: Sheet1") < text.index("Sheet: Sheet2")

    def test_legacy_xls(self, make_file, xls_bytes):
        """旧版 .xls 经 xlrd 读取"""
        text = classify_and_extract(make_file("legacy.xls", xls_bytes))
        assert text == f"Sheet: Legacy\n{'=' * 50}\nname,qty\npear,7\n\n"

    def test_xls_by_mime_only(self, make_file, xls_bytes):
        """无扩展名时按 MIME 分发，按文件头选解码器"""
        f = make_file("upload", xls_bytes, "application/vnd.ms-excel")
        assert classify_and_extract(f).startswith("Sheet: Legacy\n")

    def test_xlsx_content_with_xls_name(self, make_file, xlsx_bytes):
        """扩展名与内容不符时以内容为准"""
        text = classify_and_extract(make_file("book.xls", xlsx_bytes))
        assert text.startswith("Sheet: Sheet1\n")
        assert "Sheet: Sheet2\n" in text

    def test_corrupt_spreadsheet_fails(self, make_file):
        with pytest.raises(ExtractionFailedError, match="Failed to convert Excel file"):
            classify_and_extract(make_file("book.xlsx", b"garbage"))

    def test_rows_to_csv(self):
        """空单元格、布尔值、整数浮点的 CSV 表示；末尾空行去掉"""
        rows = [["a", None, 1.0, True], [2.5, "x", None, False], [None, None, None, None]]
        assert document.rows_to_csv(rows) == "a,,1,TRUE\n2.5,x,,FALSE"

    def test_empty_sheet(self):
        assert document.render_sheets([("Empty", [])]) == f"Sheet: Empty\n{'=' * 50}\n\n\n"

    def test_pdf_pages(self, make_file, monkeypatch):
        """逐页输出 Page N:，整体去掉首尾空白"""
        monkeypatch.setattr(document, "_read_pdf_pages", lambda _c: ["first page", "", "third  "])
        text = classify_and_extract(make_file("paper.pdf", b"%PDF-1.4"))
        assert text == "Page 1:\nfirst page\n\nPage 2:\n\n\nPage 3:\nthird"

    def test_corrupt_pdf_fails(self, make_file):
        with pytest.raises(ExtractionFailedError, match="Failed to convert PDF file"):
            classify_and_extract(make_file("paper.pdf", b"definitely not a pdf"))


class TestImageStrategy:
    """图片 OCR 与元数据测试"""

    def test_ocr_text_with_metadata(self, make_file, png_bytes, monkeypatch):
        monkeypatch.setattr(ocr, "recognize", lambda _c: "Hello OCR\n")
        f = make_file("scan.png", png_bytes, "image/png", last_modified=0)
        text = classify_and_extract(f)

        assert text.startswith("OCR Text Content:\nHello OCR\n\n\nImage Metadata:\n")
        assert "File: scan.png" in text
        assert "Type: image/png" in text
        assert f"Size: {format_file_size(len(png_bytes))}" in text
        assert "Dimensions: 32x16px" in text

    def test_blank_ocr_metadata_only(self, make_file, png_bytes, monkeypatch):
        monkeypatch.setattr(ocr, "recognize", lambda _c: "  \n ")
        text = classify_and_extract(make_file("blank.png", png_bytes, "image/png"))
        assert text.startswith("Image Metadata:\n")
        assert "OCR Text Content" not in text

    def test_ocr_failure_metadata_only(self, make_file, png_bytes, monkeypatch):
        """OCR 出错不视为转换失败"""
        def boom(_content):
            raise RuntimeError("tesseract not installed")

        monkeypatch.setattr(ocr, "recognize", boom)
        text = classify_and_extract(make_file("scan.png", png_bytes))
        assert text.startswith("Image Metadata:\n")

    def test_dimensions_optional(self, make_file, monkeypatch):
        """无法解析的图片省略尺寸行"""
        monkeypatch.setattr(ocr, "recognize", lambda _c: "")
        text = classify_and_extract(make_file("broken.jpg", b"\xff\xd8 not really"))
        assert "Dimensions" not in text
        assert "File: broken.jpg" in text

    def test_unknown_engine(self, monkeypatch):
        from fileconvert.config import Config

        monkeypatch.setattr(Config, "OCR_ENGINE", "nope")
        with pytest.raises(ValueError):
            ocr.recognize(b"")


class TestArchiveStrategy:
    """压缩包清单测试"""

    def test_listing(self, make_file, zip_bytes):
        text = classify_and_extract(make_file("bundle.zip", zip_bytes))
        lines = text.split("\n")
        assert lines[0] == "Archive Contents (bundle.zip):"
        assert lines[1] == "=" * 50
        assert lines[2:] == ["a.txt (5 Bytes)", "dir/ (directory)", "dir/b.txt (2 KB)"]

    def test_jar_is_archive(self, make_file, zip_bytes):
        assert classify_and_extract(make_file("lib.jar", zip_bytes)).startswith("Archive Contents (lib.jar):")

    def test_corrupt_archive_fails(self, make_file):
        with pytest.raises(ExtractionFailedError, match="Failed to read archive file"):
            classify_and_extract(make_file("bundle.zip", b"PK but broken"))


class TestLargeFileNotice:
    """大文件提示日志"""

    def test_logs_large_file(self, make_file, monkeypatch, caplog):
        from fileconvert.config import Config

        monkeypatch.setattr(Config, "LARGE_FILE_THRESHOLD", 4)
        with caplog.at_level("INFO", logger="fileconvert.processing"):
            classify_and_extract(make_file("big.txt", b"0123456789"))
        assert any("big.txt" in r.getMessage() for r in caplog.records)
