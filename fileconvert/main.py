"""
fileconvert 入口文件
配置日志并启动命令行。

启动方式：
  fileconvert convert <path>
  或
  python -m fileconvert convert <path>
"""

from __future__ import annotations

import logging
import sys

from .config import cfg


def setup_logging() -> None:
    """配置日志格式"""
    logging.basicConfig(
        level=getattr(logging, cfg.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def main() -> None:
    from .__main__ import cli

    cli()


if __name__ == "__main__":
    main()
