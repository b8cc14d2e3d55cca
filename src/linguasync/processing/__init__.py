"""
LinguaSync Processing Module - Text preparation for language detection.

Raw text goes through three stages before it can be scored against
language profiles:
    1. Cleaning: links, mail addresses and markup are removed and
       decomposed characters are composed (NFC)
    2. Normalization: every character is mapped to its canonical form,
       punctuation and digits become spaces, runs are capped
    3. Extraction: a sliding window turns normalized text into grams of
       length 1 to 3 that never span two scripts

Core Components:
    - BasePreprocessor: Abstract interface for text cleaning operations
    - PreprocessingPipeline: Ordered chain of preprocessors
    - preprocessing: Concrete cleaners, normalizer and n-gram extractor
"""

from .base import BasePreprocessor, PreprocessingPipeline

__all__ = [
    "BasePreprocessor",
    "PreprocessingPipeline",
]
