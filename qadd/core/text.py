"""Text normalization and heading detection for plain-text documents."""

from __future__ import annotations

import re

MAX_HEADING_CHARS = 90

_HYPHEN_WRAP = re.compile(r"(\w)-\n(\w)", re.ASCII)
_EXCESS_NEWLINES = re.compile(r"\n{3,}")
_TRAILING_SPACE = re.compile(r"[ \t]+\n")

_NUMBERED_OUTLINE = re.compile(r"^[0-9]+(\.[0-9]+)*(\s+|:|$)")
_NON_LETTERS = re.compile(r"[^A-Za-z]")
_CAPITALIZED_WORD = re.compile(r"^[A-Z][a-z]+")
_PUNCTUATION = re.compile(r"[.,:;!?]")


def normalize_text(raw: str) -> str:
    """Canonicalize extracted text before segmentation.

    Removes carriage returns, joins words hyphenated across a line wrap,
    turns page breaks into paragraph breaks, collapses runs of blank lines,
    drops trailing horizontal whitespace and trims the document.
    """
    text = raw.replace("\r", "")
    text = _HYPHEN_WRAP.sub(r"\1\2", text)
    text = text.replace("\f", "\n\n")
    text = _EXCESS_NEWLINES.sub("\n\n", text)
    text = _TRAILING_SPACE.sub("\n", text)
    return text.strip()


def is_heading(paragraph: str) -> bool:
    """Heuristically decide whether a paragraph is a section heading.

    Short paragraphs qualify when they look like a numbered outline entry
    (``1.2 Introduction``), are written in all caps, or are mostly
    Capitalized Words with at most one punctuation mark.
    """
    if len(paragraph) > MAX_HEADING_CHARS:
        return False
    if _NUMBERED_OUTLINE.match(paragraph):
        return True

    letters = _NON_LETTERS.sub("", paragraph)
    if letters and letters == letters.upper():
        return True

    words = paragraph.split()
    capitalized = sum(1 for w in words if _CAPITALIZED_WORD.match(w))
    cap_ratio = capitalized / max(len(words), 1)
    punctuation = len(_PUNCTUATION.findall(paragraph))
    return cap_ratio > 0.6 and punctuation <= 1
