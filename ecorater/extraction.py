# ecorater/extraction.py
"""
Pull structured fields out of the model's free-form answers.

The prompts ask for `Label: value` lines (e.g. `Rating: 4/5`, `Brand: Nike`),
but the model is a best-effort text source, so nothing here raises: a field
that cannot be found resolves to a sentinel (`UNAVAILABLE` or None).
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from ecorater.models import ExtractedIdentity, ExtractedRating

logger = logging.getLogger(__name__)

UNAVAILABLE = "unavailable"

# ========= Patterns =========
# label must not be glued to a preceding word ("SubBrand") and must be followed
# by a colon ("Brandname" is not "Brand"); "**Label:**" / "**Label**:" allowed.
# values end at any line break, Unicode separators included
_LABEL_PREFIX = r"(?<!\w)(?:\*\*)?"
_LABEL_SUFFIX = r"(?:\*\*)?[ \t]*:[ \t]*(?:\*\*)?[ \t]*"
_VALUE = r"([^\r\n\u2028\u2029\x85]*)"

RATING_RE = re.compile(
    _LABEL_PREFIX + r"rating" + _LABEL_SUFFIX + r"(\d)[ \t]*/[ \t]*5(?!\d)(?:\*\*)?",
    re.IGNORECASE,
)
BLANK_LINES = re.compile(r"\n{3,}")


def _field_pattern(label: str) -> re.Pattern:
    return re.compile(_LABEL_PREFIX + re.escape(label) + _LABEL_SUFFIX + _VALUE, re.IGNORECASE)


CATEGORY_RE = _field_pattern("category")


def _clean_value(raw: str) -> str:
    return raw.strip().strip("*").strip()


# ========= Field extractor =========
def extract(text: Optional[str], label: str) -> str:
    """Value after the first `label:` up to end of line, lower-cased, or UNAVAILABLE."""
    if not isinstance(text, str) or not isinstance(label, str) or not label.strip():
        return UNAVAILABLE
    m = _field_pattern(label.strip()).search(text)
    if not m:
        logger.debug("field %r not found", label)
        return UNAVAILABLE
    value = _clean_value(m.group(1))
    return value.lower() if value else UNAVAILABLE


def extract_identity(text: Optional[str]) -> ExtractedIdentity:
    return ExtractedIdentity(
        brand=extract(text, "Brand"),
        product=extract(text, "Product"),
        details=extract(text, "Details"),
    )


# ========= Rating / category parser =========
def _remove_spans(text: str, spans: List[Tuple[int, int]]) -> str:
    merged: List[List[int]] = []
    for start, end in sorted(spans):
        if merged and start <= merged[-1][1]:
            merged[-1][1] = max(merged[-1][1], end)
        else:
            merged.append([start, end])
    out, pos = [], 0
    for start, end in merged:
        out.append(text[pos:start])
        pos = end
    out.append(text[pos:])
    return "".join(out)


def parse_rating(text: Optional[str]) -> ExtractedRating:
    """
    Split a rating answer into rating digit, category and the remaining prose.

    The description is the input minus the spans actually matched for the
    rating and the category, so an echoed label elsewhere in the prose is kept.
    """
    t = text if isinstance(text, str) else ""
    spans: List[Tuple[int, int]] = []

    rating = None
    rm = RATING_RE.search(t)
    if rm:
        rating = int(rm.group(1))
        spans.append(rm.span())

    category = None
    cm = CATEGORY_RE.search(t)
    if cm:
        category = _clean_value(cm.group(1)) or None
        spans.append(cm.span())

    if rating is None:
        logger.debug("no rating found in model response")

    description = BLANK_LINES.sub("\n\n", _remove_spans(t, spans)).strip()
    return ExtractedRating(rating=rating, description=description, category=category)
