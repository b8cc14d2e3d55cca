"""
Unit tests for character normalization and n-gram extraction
"""

import pytest

from linguasync.processing.preprocessing.ngram import (
    CJK_CLUSTERS,
    NGramWindow,
    TextNormalizer,
    extract_ngrams,
    normalize_char,
)
from linguasync.processing.preprocessing.unicode_blocks import (
    BASIC_LATIN,
    CJK_UNIFIED_IDEOGRAPHS,
    OTHER,
    script_category,
    unicode_block,
)


class TestUnicodeBlocks:
    """Test block and script lookup"""

    def test_block_lookup(self):
        assert unicode_block("a") == BASIC_LATIN
        assert unicode_block("一") == CJK_UNIFIED_IDEOGRAPHS
        assert unicode_block("Ж") == "CYRILLIC"

    def test_unlisted_character(self):
        assert unicode_block("\U0001f600") is None
        assert script_category("\U0001f600") == OTHER

    def test_script_categories(self):
        assert script_category(" ") is None
        assert script_category("a") == script_category("é") == "latin"
        assert script_category("あ") == script_category("一") == "cjk"
        assert script_category("Ж") == "cyrillic"


class TestNormalizeChar:
    """Test single character normalization"""

    @pytest.mark.parametrize(
        "ch,expected",
        [
            ("a", "a"),
            ("Z", "Z"),
            ("1", " "),
            ("!", " "),
            ("\n", " "),
            ("é", "é"),
            ("¿", " "),
            ("’", " "),
            ("ș", "ş"),
            ("ț", "ţ"),
            ("ی", "ي"),
            ("ệ", "ể"),
            ("Ḁ", "Ḁ"),
            ("い", "あ"),
            ("カ", "ア"),
            ("ㄆ", "ㄅ"),
            ("한", "가"),
        ],
    )
    def test_character_rules(self, ch, expected):
        assert normalize_char(ch) == expected

    def test_cjk_clusters(self):
        unified = [
            (ideograph, representative)
            for ideograph, representative in CJK_CLUSTERS.items()
            if unicode_block(ideograph) == CJK_UNIFIED_IDEOGRAPHS
        ]
        assert unified
        for ideograph, representative in unified[:50]:
            assert normalize_char(ideograph) == representative


class TestTextNormalizer:
    """Test stateful text normalization"""

    def test_punctuation_and_space_runs(self):
        assert TextNormalizer().normalize("Hello,   world!!!") == "Hello world "

    def test_leading_spaces_are_dropped(self):
        assert TextNormalizer().normalize("  ...abc") == "abc"

    def test_repeat_cap(self):
        assert TextNormalizer().normalize("aaaaaaaab") == "aaab"
        assert TextNormalizer(max_repeat=1).normalize("aaab") == "ab"

    def test_repeat_cap_carries_across_calls(self):
        normalizer = TextNormalizer()
        assert normalizer.normalize("aa") == "aa"
        assert normalizer.normalize("aaaa") == "a"

    def test_reset(self):
        normalizer = TextNormalizer()
        normalizer.normalize("aaa")
        normalizer.reset()
        assert normalizer.normalize("aaa") == "aaa"

    def test_repeat_cap_uses_raw_characters(self):
        # Five distinct kana all normalize to the same representative.
        text = "あいうえお"
        assert TextNormalizer().normalize(text) == "あ" * 5

    def test_invalid_max_repeat(self):
        with pytest.raises(ValueError):
            TextNormalizer(max_repeat=0)


class TestExtractNgrams:
    """Test sliding window gram extraction"""

    def test_word_grams(self):
        assert list(extract_ngrams("ab c")) == [
            "a",
            " a",
            "b",
            "ab",
            " ab",
            "b ",
            "ab ",
            "c",
            " c",
        ]

    def test_capital_words_are_skipped(self):
        assert list(extract_ngrams("ABC")) == ["A", " A"]

    def test_capitalized_word_is_kept(self):
        assert list(extract_ngrams("Ab")) == ["A", " A", "b", "Ab", " Ab"]

    def test_script_change_ends_word(self):
        grams = list(extract_ngrams("abц"))
        assert grams == ["a", " a", "b", "ab", " ab", "b ", "ab ", "ц", " ц"]
        assert not any("bц" in gram for gram in grams)

    def test_extraction_is_repeatable(self):
        text = "the quick fox"
        assert list(extract_ngrams(text)) == list(extract_ngrams(text))

    def test_empty_text(self):
        assert list(extract_ngrams("")) == []

    def test_window_get_bounds(self):
        window = NGramWindow()
        window.add_char("a")
        assert window.get(0) is None
        assert window.get(3) is None
        assert window.get(4) is None
        assert window.get(2) == " a"
