from __future__ import annotations

import re

from atlassian_proxy.services.types import ContentDocument, NormalizedContent

# ECMAScript \s: includes the BOM, excludes \x1c-\x1f and \x85.
_WHITESPACE = "".join(
    chr(code)
    for code in (
        0x09, 0x0A, 0x0B, 0x0C, 0x0D, 0x20, 0xA0, 0x1680,
        *range(0x2000, 0x200B),
        0x2028, 0x2029, 0x202F, 0x205F, 0x3000, 0xFEFF,
    )
)

_TAG_PATTERN = re.compile(r"<[^>]+>")
_WHITESPACE_PATTERN = re.compile(f"[{re.escape(_WHITESPACE)}]+")


def strip_markup(raw: str) -> str:
    """Replace tags with spaces, collapse whitespace runs and trim; entities are kept."""
    text = _TAG_PATTERN.sub(" ", raw)
    text = _WHITESPACE_PATTERN.sub(" ", text)
    return text.strip(_WHITESPACE)


def normalize_document(document: ContentDocument) -> NormalizedContent:
    return NormalizedContent(title=document.title, text=strip_markup(document.raw_body))
