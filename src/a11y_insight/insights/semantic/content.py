"""Text extraction and readability arithmetic shared by semantic detectors."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from ...document.adapter import DocumentAdapter, Node

MAIN_CONTENT_SELECTOR = 'main, [role="main"], .main-content, #main-content'
PERIPHERAL_SELECTOR = (
    'nav, aside, footer, [role="navigation"], [role="complementary"], [role="contentinfo"]'
)
TEXT_BLOCK_SELECTOR = "p, div, li, td, th"

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_VOWEL_GROUPS = re.compile(r"[aeiouy]+")


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def extract_main_content(doc: DocumentAdapter) -> str:
    """Text of the main content region.

    The first ``main``-like element wins; otherwise the body text with
    navigation, complementary and footer regions removed.
    """
    mains = doc.select(MAIN_CONTENT_SELECTOR)
    if mains:
        return doc.text(mains[0])
    body = doc.body()
    if body is None:
        return ""
    return doc.text_without(body, PERIPHERAL_SELECTOR)


def text_blocks(doc: DocumentAdapter, min_chars: int) -> list[tuple[Node, str]]:
    blocks = []
    for el in doc.select(TEXT_BLOCK_SELECTOR):
        text = doc.text(el).strip()
        if len(text) >= min_chars:
            blocks.append((el, text))
    return blocks


def count_syllables(word: str) -> int:
    word = word.lower()
    if len(word) <= 3:
        return 1
    count = len(_VOWEL_GROUPS.findall(word)) or 1
    if word.endswith("e"):
        count -= 1
    return max(count, 1)


def reading_level(flesch: float) -> str:
    if flesch >= 90:
        return "Elementary School"
    if flesch >= 80:
        return "Middle School"
    if flesch >= 70:
        return "High School"
    if flesch >= 60:
        return "College Level"
    if flesch >= 50:
        return "Graduate Level"
    return "Post-Graduate Level"


@dataclass(frozen=True)
class ReadabilityMetrics:
    score: float  # Flesch Reading Ease clamped to [0, 100]
    complex_word_ratio: float
    reading_level: str
    issues: tuple[str, ...]

    @property
    def cognitive_load(self) -> int:
        return min(10, max(1, round_half_up((100 - self.score) / 10)))


def readability_metrics(text: str) -> ReadabilityMetrics:
    sentences = [s for s in _SENTENCE_SPLIT.split(text) if s.strip()]
    words = text.split()
    if not words:
        return ReadabilityMetrics(100.0, 0.0, reading_level(100.0), ())

    syllables = [count_syllables(w) for w in words]
    avg_sentence = len(words) / max(len(sentences), 1)
    avg_syllables = sum(syllables) / len(words)
    flesch = 206.835 - 1.015 * avg_sentence - 84.6 * avg_syllables

    complex_ratio = sum(1 for s in syllables if s > 2) / len(words)
    issues = []
    if avg_sentence > 25:
        issues.append("Sentences are too long (average > 25 words)")
    if complex_ratio > 0.2:
        issues.append("Too many complex words (> 20% have 3+ syllables)")

    return ReadabilityMetrics(
        score=max(0.0, min(100.0, flesch)),
        complex_word_ratio=complex_ratio,
        reading_level=reading_level(flesch),
        issues=tuple(issues),
    )
