"""
Text cleaning preprocessors applied before language detection.

Language detection only benefits from natural-language letters. Links,
mail addresses, markup and stray characters of a foreign script add grams
that no language profile explains well, so they are removed before the
text is normalized and split into n-grams.

Key Preprocessors:
    - LinkCleaner: Removes URLs and e-mail addresses
    - UnicodeComposer: Composes combining sequences into canonical
      precomposed characters (NFC)
    - MinorityLatinFilter: Drops Latin letters that are a small minority
      next to another script
    - HTMLCleaner: Removes HTML tags and extracts clean text
    - WhitespaceNormalizer: Standardizes spacing and line breaks

Example:
    >>> cleaner = LinkCleaner()
    >>> cleaner.process("mail me at someone@example.com")
    'mail me at  '
    >>>
    >>> # Chain processors
    >>> pipeline = [HTMLCleaner(), WhitespaceNormalizer()]
    >>> result = "<p>Bonjour   <b>tout</b> le monde</p>"
    >>> for processor in pipeline:
    ...     result = processor.process(result)
    >>> result
    'Bonjour\\ntout\\nle monde'
"""

import re
import unicodedata

from bs4 import BeautifulSoup

from linguasync.processing.base import BasePreprocessor
from linguasync.processing.preprocessing.unicode_blocks import (
    LATIN_EXTENDED_ADDITIONAL,
    unicode_block,
)

URL_PATTERN = re.compile(r"https?://[-_.?&~;+=/#0-9A-Za-z]{1,2076}")
MAIL_PATTERN = re.compile(
    r"[-_.0-9A-Za-z]{1,64}@[-_0-9A-Za-z]{1,255}[-_.0-9A-Za-z]{1,255}"
)


class LinkCleaner(BasePreprocessor):
    """
    Removes URLs and e-mail addresses.

    Each match is replaced by a single space so that the words around it
    stay separated.
    """

    def process(self, content: str) -> str:
        content = URL_PATTERN.sub(" ", content)
        return MAIL_PATTERN.sub(" ", content)


class UnicodeComposer(BasePreprocessor):
    """
    Composes decomposed character sequences (NFC).

    Vietnamese and other diacritic-heavy text is frequently typed as a base
    letter followed by combining marks. Profiles are built from the
    precomposed forms, so both spellings must map to one canonical form.
    """

    def process(self, content: str) -> str:
        return unicodedata.normalize("NFC", content)


class MinorityLatinFilter(BasePreprocessor):
    """
    Drops Basic Latin letters when another script clearly dominates.

    Japanese, Russian or Arabic text often embeds product names and
    abbreviations in Latin letters. When Latin letters are less than half
    as frequent as letters from other scripts they are removed, because
    their grams would otherwise pull the estimate towards Latin-script
    languages.

    The filter runs on normalized text, where the only Basic Latin
    characters left are the letters A-Z and a-z and the space.
    """

    def process(self, content: str) -> str:
        latin_count = 0
        non_latin_count = 0
        for ch in content:
            if "A" <= ch <= "z":
                latin_count += 1
            elif ch >= "\u0300" and unicode_block(ch) != LATIN_EXTENDED_ADDITIONAL:
                non_latin_count += 1

        if latin_count * 2 >= non_latin_count:
            return content
        return "".join(ch for ch in content if not "A" <= ch <= "z")


class HTMLCleaner(BasePreprocessor):
    """
    HTML content cleaner and text extractor.

    Removes script and style elements, extracts the text of the remaining
    elements and drops blank lines. Used when the input to detect is a web
    page rather than plain text.

    Example:
        >>> cleaner = HTMLCleaner()
        >>> cleaner.process("<h1>Titre</h1><script>x()</script><p>Texte</p>")
        'Titre\\nTexte'
    """

    def process(self, content: str) -> str:
        soup = BeautifulSoup(content, "html.parser")

        for script_or_style in soup(["script", "style"]):
            script_or_style.decompose()

        text = soup.get_text(separator="\n")

        lines = (line.strip() for line in text.splitlines())
        chunks = (phrase.strip() for line in lines for phrase in line.split("  "))
        return "\n".join(chunk for chunk in chunks if chunk)


class WhitespaceNormalizer(BasePreprocessor):
    """
    Whitespace and line break normalizer.

    Normalization Rules:
        - Multiple line breaks reduced to a single line break
        - Runs of spaces and tabs reduced to a single space
        - Leading and trailing whitespace removed
    """

    def process(self, content: str) -> str:
        # Replace multiple newlines with a single one
        content = re.sub(r"\n\s*\n", "\n", content)
        # Replace runs of spaces and tabs with a single space
        content = re.sub(r"[ \t]+", " ", content)
        return content.strip()
