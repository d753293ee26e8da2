"""
分析报告格式化：生成与转换文本并列的 _analysis.txt 内容
"""

from __future__ import annotations


def format_analysis_report(converted) -> str:
    """ConvertedFile 的分析结果 → 纯文本报告"""
    analysis = converted.analysis
    lines = [
        f"AI Analysis for: {converted.name}",
        "=" * 50,
        "",
        "Summary:",
        analysis.summary,
        "",
        f"Keywords: {', '.join(analysis.keywords)}",
        f"Sentiment: {analysis.sentiment}",
        f"Language: {analysis.language}",
    ]
    return "\n".join(lines).strip()
