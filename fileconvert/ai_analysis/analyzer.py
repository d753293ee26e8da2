"""
启发式文本分析器
对提取出的文本生成摘要、关键词、情感倾向和语言判断。
全部为固定规则（非模型推理），相同输入总是得到相同结果；
延迟参数仅用于模拟异步分析服务的响应时间。
"""

from __future__ import annotations

import logging
import re
import time
from collections import Counter
from dataclasses import asdict, dataclass, field

logger = logging.getLogger("fileconvert.analyzer")

SUMMARY_MAX_CHARS = 200
SUMMARY_SENTENCES = 3
SUMMARY_MIN_SENTENCE_CHARS = 10
KEYWORD_LIMIT = 8
LANGUAGE_SAMPLE_WORDS = 100

SUMMARY_PLACEHOLDER = (
    "This document contains structured data or content that requires specialized analysis."
)

STOP_WORDS = frozenset({
    "this", "that", "with", "have", "will", "from", "they", "know",
    "want", "been", "good", "much", "some", "time", "very", "when",
    "come", "here", "just", "like", "long", "make", "many", "over",
    "such", "take", "than", "them", "well", "were", "what", "your",
    "about", "after", "again", "before", "being", "could", "every",
    "first", "found", "great", "group", "large", "last", "little",
    "most", "never", "only", "other", "place", "right", "same",
    "should", "small", "still", "those", "through", "under", "where",
    "while", "work", "world", "would", "years", "young",
})

POSITIVE_WORDS = frozenset({
    "good", "great", "excellent", "amazing", "wonderful", "fantastic",
    "love", "like", "enjoy", "happy", "pleased", "satisfied", "success",
    "successful", "perfect", "best", "awesome", "brilliant", "outstanding",
})

NEGATIVE_WORDS = frozenset({
    "bad", "terrible", "awful", "horrible", "hate", "dislike", "angry",
    "sad", "disappointed", "frustrated", "problem", "issue", "error",
    "fail", "failure", "worst", "difficult", "hard", "impossible",
})

# 常用词表（按语言）
LANGUAGE_WORDS: dict[str, frozenset[str]] = {
    "English": frozenset({
        "the", "and", "for", "are", "but", "not", "you", "all", "can", "had",
        "her", "was", "one", "our", "out", "day", "get", "has", "him", "his",
        "how", "man", "new", "now", "old", "see", "two", "way", "who", "boy",
        "did", "its", "let", "put", "say", "she", "too", "use",
    }),
    "Spanish": frozenset({
        "que", "de", "no", "a", "la", "el", "es", "y", "en", "lo", "un", "por",
        "qué", "me", "una", "te", "los", "se", "con", "para", "mi", "está", "si",
        "bien", "pero", "yo", "eso", "las", "sí", "su", "tu", "aquí", "del", "al",
        "como", "le", "más", "esto", "ya", "todo",
    }),
    "French": frozenset({
        "le", "de", "et", "à", "un", "il", "être", "en", "avoir", "que", "pour",
        "dans", "ce", "son", "une", "sur", "avec", "ne", "se", "pas", "tout",
        "plus", "par", "grand",
    }),
}

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_NON_WORD = re.compile(r"[^\w\s]")
_WORD_SPLIT = re.compile(r"\W+")


@dataclass(frozen=True)
class AnalysisResult:
    """分析结果（摘要 / 关键词 / 情感 / 语言）"""
    summary: str
    keywords: list[str] = field(default_factory=list)
    sentiment: str = "neutral"  # positive / negative / neutral
    language: str = "Unknown"   # English / Spanish / French / Unknown

    def to_dict(self) -> dict:
        return asdict(self)


def analyze(text: str, delay: float | None = None) -> AnalysisResult:
    """
    对文本做完整的启发式分析。
    delay 为 None 时使用配置中的模拟延迟。
    """
    from ..config import cfg

    _simulate_latency(cfg.ANALYSIS_DELAY_SEC if delay is None else delay)

    text = text or ""
    result = AnalysisResult(
        summary=generate_summary(text),
        keywords=extract_keywords(text),
        sentiment=analyze_sentiment(text),
        language=detect_language(text),
    )
    logger.info(
        f"文本分析完成: {len(text)} 字符, 情感={result.sentiment}, 语言={result.language}"
    )
    return result


def summarize_text(text: str, delay: float | None = None) -> str:
    """只生成摘要"""
    from ..config import cfg

    _simulate_latency(cfg.SUMMARY_DELAY_SEC if delay is None else delay)
    return generate_summary(text or "")


def generate_summary(text: str) -> str:
    """取前 3 个有效句子（去空白后 >10 字符），超过 200 字符截断并加省略号"""
    sentences = [s for s in _SENTENCE_SPLIT.split(text) if len(s.strip()) > SUMMARY_MIN_SENTENCE_CHARS]
    summary = ". ".join(sentences[:SUMMARY_SENTENCES])

    if len(summary) > SUMMARY_MAX_CHARS:
        return summary[:SUMMARY_MAX_CHARS] + "..."

    return summary or SUMMARY_PLACEHOLDER


def extract_keywords(text: str, limit: int = KEYWORD_LIMIT) -> list[str]:
    """词频关键词：去标点、去停用词、去掉 ≤3 字符的词，按出现次数降序（同频按首次出现顺序）"""
    words = _NON_WORD.sub(" ", text.lower()).split()
    counts = Counter(w for w in words if len(w) > 3 and w not in STOP_WORDS)
    return [word for word, _ in counts.most_common(limit)]


def analyze_sentiment(text: str) -> str:
    """正负面词计数比较"""
    words = _WORD_SPLIT.split(text.lower())
    positive = sum(1 for w in words if w in POSITIVE_WORDS)
    negative = sum(1 for w in words if w in NEGATIVE_WORDS)

    if positive > negative:
        return "positive"
    if negative > positive:
        return "negative"
    return "neutral"


def detect_language(text: str) -> str:
    """前 100 个词与各语言常用词表的重合数"""
    words = _WORD_SPLIT.split(text.lower())[:LANGUAGE_SAMPLE_WORDS]
    scores = {
        lang: sum(1 for w in words if w in vocab)
        for lang, vocab in LANGUAGE_WORDS.items()
    }
    english, spanish, french = scores["English"], scores["Spanish"], scores["French"]

    if english >= spanish and english >= french:
        return "English"
    if spanish >= french:
        return "Spanish"
    if french > 0:
        return "French"
    return "Unknown"


def _simulate_latency(seconds: float) -> None:
    if seconds > 0:
        time.sleep(seconds)
