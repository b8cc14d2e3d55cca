"""
LinguaSync Text Preprocessing Components

Cleaning, character normalization and n-gram extraction for language
detection.

Available Preprocessors:
    - LinkCleaner: Removes URLs and e-mail addresses
    - UnicodeComposer: Applies canonical composition (NFC)
    - MinorityLatinFilter: Drops Latin letters dominated by another script
    - HTMLCleaner: Removes HTML tags and artifacts
    - WhitespaceNormalizer: Normalizes whitespace and removes extra spaces

Available Functions:
    - normalize_char: Canonical form of one character
    - extract_ngrams: Grams of length 1-3 from normalized text
    - unicode_block / script_category: Character classification
"""

from .cleaners import (
    HTMLCleaner,
    LinkCleaner,
    MinorityLatinFilter,
    UnicodeComposer,
    WhitespaceNormalizer,
)
from .ngram import NGramWindow, TextNormalizer, extract_ngrams, normalize_char
from .unicode_blocks import script_category, unicode_block

__all__ = [
    "HTMLCleaner",
    "LinkCleaner",
    "MinorityLatinFilter",
    "NGramWindow",
    "TextNormalizer",
    "UnicodeComposer",
    "WhitespaceNormalizer",
    "extract_ngrams",
    "normalize_char",
    "script_category",
    "unicode_block",
]
