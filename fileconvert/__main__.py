"""
fileconvert CLI 入口
转换文件 / 目录为纯文本，可选文本分析与打包。

用法：
  python -m fileconvert convert <file|dir>...      # 转换并写出 .txt
  python -m fileconvert convert <dir> --analyze --zip
  python -m fileconvert analyze <file>             # 转换后输出分析结果
  python -m fileconvert config                     # 查看当前配置
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from .config import cfg
from .main import setup_logging


@click.group()
def cli():
    """fileconvert：任意文件转纯文本"""
    setup_logging()
    for w in cfg.validate():
        logging.getLogger("fileconvert.cli").warning(f"⚠️  {w}")


@cli.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.option("--output", "-o", type=click.Path(), default=None, help="输出目录")
@click.option("--analyze", "run_analysis", is_flag=True, help="对每个文件做文本分析")
@click.option("--zip", "as_zip", is_flag=True, help="打包为一个 zip")
@click.option("--preview", is_flag=True, help="在终端打印转换结果")
def convert(paths: tuple[str, ...], output: str | None, run_analysis: bool, as_zip: bool, preview: bool):
    """转换文件或目录（目录按原结构输出）"""
    from .ingestion.source import SourceFile, collect_files
    from .output import write_analysis_file, write_text_file
    from .output.bundle import write_bundle
    from .pipeline import ConversionSession, Pipeline

    logger = logging.getLogger("fileconvert.cli")
    if output:
        output_dir = Path(output)
    else:
        cfg.ensure_dirs()
        output_dir = cfg.OUTPUT_DIR

    session = ConversionSession(pipeline=Pipeline(progress_callback=_log_progress))
    errors: list[str] = []

    singles = [Path(p) for p in paths if Path(p).is_file()]
    if singles:
        batch = session.add_files([SourceFile.from_path(p) for p in singles])
        errors.extend(batch.errors)
    for directory in (Path(p) for p in paths if Path(p).is_dir()):
        files = collect_files(directory)
        logger.info(f"📁 {directory}: 发现 {len(files)} 个文件")
        batch = session.add_files(files, is_from_folder=True)
        errors.extend(batch.errors)

    if run_analysis:
        for converted in session.files:
            if session.analyze(converted.id) is None:
                errors.append(session.last_error)

    if preview:
        for converted in session.files:
            click.echo(f"===== {converted.relative_path} ({converted.original_type}) =====")
            click.echo(converted.text_content)
            click.echo("")

    if as_zip:
        write_bundle(session.files, output_dir / cfg.BUNDLE_NAME)
    else:
        for converted in session.files:
            write_text_file(converted, output_dir)
            write_analysis_file(converted, output_dir)

    for message in errors:
        click.echo(f"❌ {message}", err=True)

    click.echo(f"转换完成: {len(session.files)} 个文件, 失败 {len(errors)} 个 → {output_dir}")
    if errors and not session.files:
        sys.exit(1)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--delay", type=float, default=None, help="模拟分析延迟（秒），默认取配置")
def analyze(path: str, delay: float | None):
    """转换单个文件并输出文本分析结果（JSON）"""
    from .ai_analysis.analyzer import analyze as analyze_text
    from .ingestion.source import SourceFile
    from .processing import ConversionError, classify_and_extract

    source = SourceFile.from_path(Path(path))
    try:
        text = classify_and_extract(source)
    except ConversionError as e:
        click.echo(f"❌ Failed to convert {source.name}: {e}", err=True)
        sys.exit(1)

    result = analyze_text(text, delay=delay)
    click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))


@cli.command()
def config():
    """查看当前配置"""
    click.echo(json.dumps(cfg.to_dict(), indent=2, ensure_ascii=False))


def _log_progress(percent: float, label: str):
    logging.getLogger("fileconvert.cli").debug(f"进度 {percent:.0f}%: {label}")


if __name__ == "__main__":
    cli()
