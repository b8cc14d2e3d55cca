"""
Unicode block and script category lookup.

Python's unicodedata module exposes character categories and names but not
Unicode blocks. Character normalization needs the block (several rules are
"every character of block X becomes Y"), and n-gram extraction needs a
coarser script category so that no gram mixes two writing systems.

Functions:
    unicode_block(ch): Name of the Unicode block containing ``ch``
    script_category(ch): Script category of ``ch``; None for the space

Only the blocks that matter for language identification are listed.
Characters outside them have no block and the category "other".
"""

from bisect import bisect_right
from functools import lru_cache
from typing import Optional

BASIC_LATIN = "BASIC_LATIN"
LATIN_1_SUPPLEMENT = "LATIN_1_SUPPLEMENT"
LATIN_EXTENDED_A = "LATIN_EXTENDED_A"
LATIN_EXTENDED_B = "LATIN_EXTENDED_B"
ARABIC = "ARABIC"
LATIN_EXTENDED_ADDITIONAL = "LATIN_EXTENDED_ADDITIONAL"
GENERAL_PUNCTUATION = "GENERAL_PUNCTUATION"
HIRAGANA = "HIRAGANA"
KATAKANA = "KATAKANA"
BOPOMOFO = "BOPOMOFO"
BOPOMOFO_EXTENDED = "BOPOMOFO_EXTENDED"
CJK_UNIFIED_IDEOGRAPHS = "CJK_UNIFIED_IDEOGRAPHS"
HANGUL_SYLLABLES = "HANGUL_SYLLABLES"

OTHER = "other"

# (first code point, last code point, block, script category), sorted
_BLOCKS = [
    (0x0000, 0x007F, BASIC_LATIN, "latin"),
    (0x0080, 0x00FF, LATIN_1_SUPPLEMENT, "latin"),
    (0x0100, 0x017F, LATIN_EXTENDED_A, "latin"),
    (0x0180, 0x024F, LATIN_EXTENDED_B, "latin"),
    (0x0250, 0x02AF, "IPA_EXTENSIONS", "latin"),
    (0x0300, 0x036F, "COMBINING_DIACRITICAL_MARKS", "latin"),
    (0x0370, 0x03FF, "GREEK", "greek"),
    (0x0400, 0x04FF, "CYRILLIC", "cyrillic"),
    (0x0500, 0x052F, "CYRILLIC_SUPPLEMENT", "cyrillic"),
    (0x0530, 0x058F, "ARMENIAN", "armenian"),
    (0x0590, 0x05FF, "HEBREW", "hebrew"),
    (0x0600, 0x06FF, ARABIC, "arabic"),
    (0x0700, 0x074F, "SYRIAC", "syriac"),
    (0x0750, 0x077F, "ARABIC_SUPPLEMENT", "arabic"),
    (0x0780, 0x07BF, "THAANA", "thaana"),
    (0x0900, 0x097F, "DEVANAGARI", "devanagari"),
    (0x0980, 0x09FF, "BENGALI", "bengali"),
    (0x0A00, 0x0A7F, "GURMUKHI", "gurmukhi"),
    (0x0A80, 0x0AFF, "GUJARATI", "gujarati"),
    (0x0B00, 0x0B7F, "ORIYA", "oriya"),
    (0x0B80, 0x0BFF, "TAMIL", "tamil"),
    (0x0C00, 0x0C7F, "TELUGU", "telugu"),
    (0x0C80, 0x0CFF, "KANNADA", "kannada"),
    (0x0D00, 0x0D7F, "MALAYALAM", "malayalam"),
    (0x0D80, 0x0DFF, "SINHALA", "sinhala"),
    (0x0E00, 0x0E7F, "THAI", "thai"),
    (0x0E80, 0x0EFF, "LAO", "lao"),
    (0x0F00, 0x0FFF, "TIBETAN", "tibetan"),
    (0x1000, 0x109F, "MYANMAR", "myanmar"),
    (0x10A0, 0x10FF, "GEORGIAN", "georgian"),
    (0x1100, 0x11FF, "HANGUL_JAMO", "hangul"),
    (0x1200, 0x137F, "ETHIOPIC", "ethiopic"),
    (0x1780, 0x17FF, "KHMER", "khmer"),
    (0x1E00, 0x1EFF, LATIN_EXTENDED_ADDITIONAL, "latin"),
    (0x1F00, 0x1FFF, "GREEK_EXTENDED", "greek"),
    (0x2000, 0x206F, GENERAL_PUNCTUATION, OTHER),
    (0x3000, 0x303F, "CJK_SYMBOLS_AND_PUNCTUATION", "cjk"),
    (0x3040, 0x309F, HIRAGANA, "cjk"),
    (0x30A0, 0x30FF, KATAKANA, "cjk"),
    (0x3100, 0x312F, BOPOMOFO, "cjk"),
    (0x3130, 0x318F, "HANGUL_COMPATIBILITY_JAMO", "hangul"),
    (0x31A0, 0x31BF, BOPOMOFO_EXTENDED, "cjk"),
    (0x3400, 0x4DBF, "CJK_UNIFIED_IDEOGRAPHS_EXTENSION_A", "cjk"),
    (0x4E00, 0x9FFF, CJK_UNIFIED_IDEOGRAPHS, "cjk"),
    (0xAC00, 0xD7AF, HANGUL_SYLLABLES, "hangul"),
    (0xF900, 0xFAFF, "CJK_COMPATIBILITY_IDEOGRAPHS", "cjk"),
    (0xFB50, 0xFDFF, "ARABIC_PRESENTATION_FORMS_A", "arabic"),
    (0xFE70, 0xFEFF, "ARABIC_PRESENTATION_FORMS_B", "arabic"),
    (0xFF00, 0xFFEF, "HALFWIDTH_AND_FULLWIDTH_FORMS", OTHER),
]

_STARTS = [start for start, _, _, _ in _BLOCKS]


@lru_cache(maxsize=8192)
def _lookup(code: int):
    i = bisect_right(_STARTS, code) - 1
    if i >= 0:
        start, end, block, category = _BLOCKS[i]
        if code <= end:
            return block, category
    return None, OTHER


def unicode_block(ch: str) -> Optional[str]:
    """Return the Unicode block name of ``ch``, or None if it is not listed."""
    return _lookup(ord(ch))[0]


def script_category(ch: str) -> Optional[str]:
    """
    Return the script category of ``ch``.

    The space separates words and belongs to no category, so it returns
    None. Two adjacent characters with different categories never share
    an n-gram.
    """
    if ch == " ":
        return None
    return _lookup(ord(ch))[1]
