"""
输入层：用户提供的源文件
单个文件或整个目录树，目录上传时保留相对路径用于打包还原。
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SourceFile:
    """一个待转换的文件（只读）"""
    name: str
    declared_type: str  # MIME 类型，可能为空
    size: int
    last_modified: int  # 毫秒时间戳
    content: bytes
    relative_path: str = ""

    def __post_init__(self):
        if not self.relative_path:
            object.__setattr__(self, "relative_path", self.name)

    @classmethod
    def from_path(cls, path: Path, root: Path | None = None) -> "SourceFile":
        """
        从磁盘读取文件。
        root 不为空时按目录上传处理：relative_path = <root 目录名>/<相对路径>。
        """
        path = Path(path)
        stat = path.stat()
        declared_type, _ = mimetypes.guess_type(path.name)

        relative_path = path.name
        if root is not None:
            root = Path(root)
            relative_path = (Path(root.name) / path.relative_to(root)).as_posix()

        return cls(
            name=path.name,
            declared_type=declared_type or "",
            size=stat.st_size,
            last_modified=int(stat.st_mtime * 1000),
            content=path.read_bytes(),
            relative_path=relative_path,
        )

    @classmethod
    def from_bytes(
        cls,
        name: str,
        content: bytes,
        declared_type: str = "",
        last_modified: int = 0,
        relative_path: str = "",
    ) -> "SourceFile":
        """从内存字节构造（测试 / 嵌入调用）"""
        return cls(
            name=name,
            declared_type=declared_type,
            size=len(content),
            last_modified=last_modified,
            content=content,
            relative_path=relative_path,
        )


def collect_files(directory: Path) -> list[SourceFile]:
    """收集目录树中的所有文件（按路径排序），作为目录上传"""
    directory = Path(directory)
    return [
        SourceFile.from_path(f, root=directory)
        for f in sorted(directory.rglob("*"))
        if f.is_file()
    ]
