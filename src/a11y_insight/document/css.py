"""Minimal CSS parsing: rule blocks, declarations, lengths, specificity.

Only what the analyzers need to resolve computed styles from ``<style>``
blocks and inline ``style`` attributes. Malformed input never raises; the
unparseable part is dropped.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Optional

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_ID_RE = re.compile(r"#[\w-]+")
_CLASS_LIKE_RE = re.compile(r"\.[\w-]+|\[[^\]]*\]|:(?!:)[\w-]+(?:\([^)]*\))?")
_TYPE_RE = re.compile(r"(?:^|[\s>+~(])([a-zA-Z][\w-]*)")
_LENGTH_RE = re.compile(r"^(-?\d*\.?\d+)(px|em|rem|pt|%)?$")

FONT_SIZE_KEYWORDS = {
    "xx-small": 9.0,
    "x-small": 10.0,
    "small": 13.0,
    "medium": 16.0,
    "large": 18.0,
    "x-large": 24.0,
    "xx-large": 32.0,
    "xxx-large": 48.0,
}


@dataclass(frozen=True)
class Declaration:
    value: str
    important: bool = False


@dataclass(frozen=True)
class StyleRule:
    """One rule of a stylesheet.

    At-rules (``@media``, ``@keyframes``...) appear as their own entry with
    ``at_rule=True`` and the prelude as ``selector``; rules nested in a
    ``@media`` block carry the media condition in ``media``.
    """

    selector: str
    declarations: dict[str, Declaration] = field(default_factory=dict)
    media: Optional[str] = None
    at_rule: bool = False
    css_text: str = ""


def strip_comments(text: str) -> str:
    return _COMMENT_RE.sub("", text)


def parse_declarations(body: str) -> dict[str, Declaration]:
    """Parse ``prop: value; ...`` into a dict, later declarations winning.

    An ``!important`` declaration is only overridden by another important one.
    """
    result: dict[str, Declaration] = {}
    for chunk in strip_comments(body).split(";"):
        prop, sep, value = chunk.partition(":")
        if not sep:
            continue
        prop = prop.strip().lower()
        value = value.strip()
        if not prop or not value:
            continue
        important = False
        lowered = value.lower()
        if lowered.endswith("!important"):
            important = True
            value = value[: -len("!important")].strip()
        previous = result.get(prop)
        if previous is not None and previous.important and not important:
            continue
        result[prop] = Declaration(value, important)
    return result


def _matching_brace(text: str, open_index: int) -> int:
    depth = 0
    for i in range(open_index, len(text)):
        ch = text[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return -1


def parse_stylesheet(text: str) -> list[StyleRule]:
    """Parse stylesheet text into a flat list of rules in source order."""
    return _parse_block(strip_comments(text), media=None)


def _parse_block(text: str, media: Optional[str]) -> list[StyleRule]:
    rules: list[StyleRule] = []
    i = 0
    while i < len(text):
        brace = text.find("{", i)
        if brace == -1:
            break
        prelude = text[i:brace]
        # Statement at-rules (@import, @charset) end with ';' before the block
        if ";" in prelude:
            prelude = prelude.rsplit(";", 1)[1]
        prelude = prelude.strip()
        end = _matching_brace(text, brace)
        if end == -1:
            break
        body = text[brace + 1 : end]
        css_text = f"{prelude} {{{body}}}"
        lowered = prelude.lower()
        if lowered.startswith("@media") or lowered.startswith("@supports"):
            condition = prelude.split(None, 1)[1] if " " in prelude else ""
            rules.append(StyleRule(selector=prelude, media=media, at_rule=True, css_text=css_text))
            nested_media = condition if lowered.startswith("@media") else media
            rules.extend(_parse_block(body, media=nested_media))
        elif prelude.startswith("@"):
            rules.append(StyleRule(selector=prelude, media=media, at_rule=True, css_text=css_text))
        elif prelude:
            rules.append(
                StyleRule(
                    selector=prelude,
                    declarations=parse_declarations(body),
                    media=media,
                    css_text=css_text,
                )
            )
        i = end + 1
    return rules


def media_applies(media: Optional[str]) -> bool:
    """Whether rules under this media condition apply to a default screen.

    User-preference and print queries never apply; width queries are
    assumed to match.
    """
    if media is None:
        return True
    lowered = media.lower()
    if "print" in lowered or "speech" in lowered or "prefers-" in lowered:
        return False
    if lowered.startswith("not "):
        return False
    return True


def split_selector_list(selector: str) -> list[str]:
    """Split a selector list on top-level commas."""
    parts: list[str] = []
    depth = 0
    current = []
    for ch in selector:
        if ch in "([":
            depth += 1
        elif ch in ")]":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
    parts.append("".join(current).strip())
    return [p for p in parts if p]


def specificity(selector: str) -> tuple[int, int, int]:
    """Approximate (ids, classes, types) specificity of a single selector."""
    ids = len(_ID_RE.findall(selector))
    without_ids = _ID_RE.sub(" ", selector)
    classes = len(_CLASS_LIKE_RE.findall(without_ids))
    without_classes = _CLASS_LIKE_RE.sub(" ", without_ids)
    types = len([t for t in _TYPE_RE.findall(without_classes) if t != "not"])
    return ids, classes, types


def parse_length(value: Optional[str], font_size: float = 16.0, root_size: float = 16.0) -> Optional[float]:
    """Resolve a CSS length to pixels; None for ``auto``, percentages, or junk."""
    if value is None:
        return None
    text = value.strip().lower()
    match = _LENGTH_RE.match(text)
    if not match:
        return None
    number = float(match.group(1))
    if not math.isfinite(number):
        return None
    unit = match.group(2) or "px"
    if unit == "px":
        return number
    if unit == "em":
        return number * font_size
    if unit == "rem":
        return number * root_size
    if unit == "pt":
        return number * 4 / 3
    return None


def parse_font_size(value: str, parent_px: float, root_px: float = 16.0) -> Optional[float]:
    """Resolve a font-size declaration against the parent's size."""
    text = value.strip().lower()
    if text in FONT_SIZE_KEYWORDS:
        return FONT_SIZE_KEYWORDS[text]
    if text == "smaller":
        return parent_px / 1.2
    if text == "larger":
        return parent_px * 1.2
    if text.endswith("%"):
        try:
            percent = float(text[:-1])
        except ValueError:
            return None
        return parent_px * percent / 100 if math.isfinite(percent) else None
    return parse_length(text, font_size=parent_px, root_size=root_px)


def parse_font_weight(value: str, parent_weight: int) -> Optional[int]:
    text = value.strip().lower()
    if text == "normal":
        return 400
    if text == "bold":
        return 700
    if text == "bolder":
        return 700 if parent_weight < 600 else 900
    if text == "lighter":
        return 100 if parent_weight < 600 else 400
    try:
        weight = float(text)
    except ValueError:
        return None
    if not math.isfinite(weight):
        return None
    return int(weight)
