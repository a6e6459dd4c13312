"""
Text normalization for bilingual catalog search.

Arabic shoppers type the same word many ways (with or without hamza,
with ta marbuta or ha, with or without tashkeel). Both the query and the
product text go through normalize_text() before matching.
"""

import re

# Tashkeel (fathatan .. sukun, madda/hamza marks) and superscript alef
_ARABIC_DIACRITICS = re.compile(r'[\u064B-\u065F\u0670]')
_TATWEEL = '\u0640'

_LETTER_MAP = str.maketrans({
    'أ': 'ا',
    'إ': 'ا',
    'آ': 'ا',
    'ٱ': 'ا',
    'ى': 'ي',
    'ئ': 'ي',
    'ة': 'ه',
})


def normalize_text(text: str | None) -> str:
    """
    Example:
        >>> normalize_text("العُطُور الفاخِرة")
        'العطور الفاخره'
    """
    if not text:
        return ""
    text = text.lower()
    text = _ARABIC_DIACRITICS.sub("", text)
    text = text.replace(_TATWEEL, "")
    return text.translate(_LETTER_MAP)


def split_words(query: str | None) -> list[str]:
    return normalize_text(query).split()


def matches_all_words(words: list[str], *fields: str) -> bool:
    """True when every word occurs in at least one of the (normalized) fields."""
    haystack = [normalize_text(field) for field in fields]
    return all(any(word in field for field in haystack) for word in words)
