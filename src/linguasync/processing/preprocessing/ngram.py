"""
Character normalization and n-gram extraction.

Language profiles count character grams of length 1 to 3 over normalized
text. To look those grams up, input text has to be normalized the same way
and cut into grams with the same sliding window. This module provides both
halves.

Normalization Rules (normalize_char):
    - Basic Latin: everything except A-Z and a-z becomes a space
    - Any other character that is neither a letter nor a combining mark
      (punctuation, digits, symbols, separators) becomes a space
    - Romanian comma-below letters map to their cedilla forms
    - Farsi yeh maps to Arabic yeh
    - Vietnamese letters of Latin Extended Additional collapse into one
      representative, as do all Hiragana, all Katakana and all Bopomofo
    - CJK ideographs map to the representative of their frequency cluster
    - Hangul syllables collapse into one representative

Gram Extraction (extract_ngrams):
    Every word is prefixed with a space, then a window of width 3 slides
    over it. After each character the window yields the last 1, 2 and 3
    characters; the lone space is never a unigram. Words written entirely
    in capitals (acronyms) yield nothing, and a change of script category
    ends the current word.

Example:
    >>> normalizer = TextNormalizer()
    >>> normalizer.normalize("Hello,   world!!!")
    'Hello world '
    >>> list(extract_ngrams("ab c"))
    ['a', ' a', 'b', 'ab', ' ab', 'b ', 'ab ', 'c', ' c']
"""

import unicodedata
from functools import lru_cache
from typing import Iterator, List, Optional

from langdetect.utils.ngram import NGram as _ClusterSource

from linguasync.processing.preprocessing.unicode_blocks import (
    ARABIC,
    BASIC_LATIN,
    BOPOMOFO,
    BOPOMOFO_EXTENDED,
    CJK_UNIFIED_IDEOGRAPHS,
    HANGUL_SYLLABLES,
    HIRAGANA,
    KATAKANA,
    LATIN_EXTENDED_ADDITIONAL,
    LATIN_EXTENDED_B,
    script_category,
    unicode_block,
)

N_GRAM = 3

# Ideograph -> representative of its frequency cluster. The cluster table
# ships with the langdetect distribution and matches its bundled profiles.
CJK_CLUSTERS = dict(_ClusterSource.CJK_MAP)

_ROMANIAN = {
    "\u0219": "\u015f",  # s with comma below -> s with cedilla
    "\u021b": "\u0163",  # t with comma below -> t with cedilla
}


@lru_cache(maxsize=65536)
def normalize_char(ch: str) -> str:
    """Map one character to its canonical form, or to a space."""
    block = unicode_block(ch)

    if block == BASIC_LATIN:
        if ch < "A" or ("Z" < ch < "a") or ch > "z":
            return " "
        return ch

    if unicodedata.category(ch)[0] not in ("L", "M"):
        return " "

    if block == LATIN_EXTENDED_B:
        return _ROMANIAN.get(ch, ch)
    if block == ARABIC:
        return "\u064a" if ch == "\u06cc" else ch
    if block == LATIN_EXTENDED_ADDITIONAL:
        return "\u1ec3" if ch >= "\u1ea0" else ch
    if block == HIRAGANA:
        return "\u3042"
    if block == KATAKANA:
        return "\u30a2"
    if block in (BOPOMOFO, BOPOMOFO_EXTENDED):
        return "\u3105"
    if block == CJK_UNIFIED_IDEOGRAPHS:
        return CJK_CLUSTERS.get(ch, ch)
    if block == HANGUL_SYLLABLES:
        return "\uac00"
    return ch


class TextNormalizer:
    """
    Stateful text normalizer for incrementally appended text.

    Besides mapping every character through normalize_char(), the
    normalizer
        - drops leading spaces and collapses runs of spaces into one, and
        - keeps at most ``max_repeat`` consecutive copies of an identical
          input character, so that input such as "aaaaaaaa" or "!!!!!!"
          cannot dominate gram counts.

    The repeat cap is applied to the raw characters, before normalization:
    distinct kana all normalize to one representative and must not be
    mistaken for a repetition.

    State carries over between calls, so appending a text in pieces gives
    the same result as appending it at once.
    """

    def __init__(self, max_repeat: int = 3):
        if max_repeat < 1:
            raise ValueError("max_repeat must be >= 1")
        self.max_repeat = max_repeat
        self.reset()

    def reset(self) -> None:
        self._last_raw = ""
        self._raw_run = 0
        self._last = " "

    def normalize(self, text: str) -> str:
        out: List[str] = []
        for raw in text:
            if raw == self._last_raw:
                self._raw_run += 1
                if self._raw_run > self.max_repeat:
                    continue
            else:
                self._last_raw = raw
                self._raw_run = 1

            ch = normalize_char(raw)
            if ch == " " and self._last == " ":
                continue
            out.append(ch)
            self._last = ch
        return "".join(out)


class NGramWindow:
    """Sliding window over normalized characters"""

    def __init__(self):
        self._grams = " "
        self._capital_word = False
        self._category: Optional[str] = None

    def breaks_script(self, ch: str) -> bool:
        """True when ``ch`` cannot continue the current word's script."""
        if ch == " " or self._grams[-1] == " ":
            return False
        return script_category(ch) != self._category

    def add_char(self, ch: str) -> None:
        last_char = self._grams[-1]
        if last_char == " ":
            self._grams = " "
            self._capital_word = False
            if ch == " ":
                return
        elif len(self._grams) >= N_GRAM:
            self._grams = self._grams[1:]
        self._grams += ch

        if ch != " ":
            self._category = script_category(ch)
        if ch.isupper():
            if last_char.isupper():
                self._capital_word = True
        else:
            self._capital_word = False

    def get(self, n: int) -> Optional[str]:
        """Return the last ``n`` characters as a gram, or None."""
        if self._capital_word:
            return None
        if n < 1 or n > N_GRAM or len(self._grams) < n:
            return None
        if n == 1:
            ch = self._grams[-1]
            return None if ch == " " else ch
        return self._grams[-n:]

    def push(self, ch: str) -> List[str]:
        """Add a character and return the grams it completes."""
        self.add_char(ch)
        grams = []
        for n in range(1, N_GRAM + 1):
            gram = self.get(n)
            if gram is not None:
                grams.append(gram)
        return grams


def extract_ngrams(text: str) -> Iterator[str]:
    """
    Yield the grams of already normalized text.

    The generator holds no state outside itself; calling it again on the
    same text yields the same sequence.
    """
    window = NGramWindow()
    for ch in text:
        if window.breaks_script(ch):
            yield from window.push(" ")
        yield from window.push(ch)
