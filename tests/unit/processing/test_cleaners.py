"""
Unit tests for text cleaning preprocessors
"""

from linguasync.processing.base import PreprocessingPipeline
from linguasync.processing.preprocessing.cleaners import (
    HTMLCleaner,
    LinkCleaner,
    MinorityLatinFilter,
    UnicodeComposer,
    WhitespaceNormalizer,
)


class TestLinkCleaner:
    """Test URL and e-mail removal"""

    def test_removes_urls(self):
        cleaner = LinkCleaner()
        result = cleaner.process("read https://example.com/a?b=1#top today")
        assert "example" not in result
        assert result.startswith("read ")
        assert result.endswith(" today")

    def test_removes_mail_addresses(self):
        result = LinkCleaner()("write to jane.doe@example.org please")
        assert "@" not in result
        assert "jane" not in result
        assert "please" in result

    def test_plain_text_is_unchanged(self):
        assert LinkCleaner()("nothing to remove") == "nothing to remove"


class TestUnicodeComposer:
    """Test canonical composition"""

    def test_composes_combining_marks(self):
        assert UnicodeComposer()("cafe\u0301") == "caf\u00e9"

    def test_vietnamese_decomposed_input(self):
        decomposed = "Vie\u0323\u0302t"
        assert UnicodeComposer()(decomposed) == "Vi\u1ec7t"


class TestMinorityLatinFilter:
    """Test removal of minority Latin letters"""

    def test_keeps_latin_text(self):
        text = "hello world "
        assert MinorityLatinFilter()(text) == text

    def test_drops_latin_next_to_dominant_script(self):
        text = "あああああ a"
        assert MinorityLatinFilter()(text) == "あああああ "

    def test_balanced_mix_is_kept(self):
        text = "прив ab"
        assert MinorityLatinFilter()(text) == text

    def test_vietnamese_letters_do_not_count_as_foreign(self):
        text = "\u1ec3" * 5 + " a"
        assert MinorityLatinFilter()(text) == text


class TestHTMLCleaner:
    """Test HTML text extraction"""

    def test_strips_markup_scripts_and_styles(self):
        html = (
            "<html><head><style>p {color: red}</style></head>"
            "<body><h1>Titre</h1><script>alert(1)</script><p>Texte</p></body></html>"
        )
        assert HTMLCleaner().process(html) == "Titre\nTexte"

    def test_pipeline_with_whitespace_normalizer(self):
        pipeline = PreprocessingPipeline([HTMLCleaner(), WhitespaceNormalizer()])
        result = pipeline("<p>Bonjour   <b>tout</b> le monde</p>")
        assert result == "Bonjour\ntout\nle monde"


class TestWhitespaceNormalizer:
    """Test whitespace normalization"""

    def test_collapses_spaces_and_blank_lines(self):
        text = "  one \t two\n\n\nthree  "
        assert WhitespaceNormalizer()(text) == "one two\nthree"
