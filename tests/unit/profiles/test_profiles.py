"""
Unit tests for language profile records and loaders
"""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from linguasync.core.exceptions.custom_exceptions import (
    FormatError,
    ProfileLoadError,
    SourceUnavailableError,
)
from linguasync.profiles import loader
from linguasync.profiles.loader import (
    ProfileSet,
    bundled_profile_dir,
    iter_profile_files,
    parse_profile,
    read_profile,
)
from linguasync.profiles.model import LangProfile


class TestLangProfile:
    """Test the profile model"""

    def test_probability(self):
        profile = LangProfile(
            name="en", freq={"t": 120, "th": 40, "the": 25}, n_words=[1000, 800, 600]
        )
        assert profile.probability("t") == pytest.approx(0.12)
        assert profile.probability("th") == pytest.approx(0.05)
        assert profile.probability("the") == pytest.approx(25 / 600)

    def test_probability_of_unseen_and_out_of_range_grams(self):
        profile = LangProfile(name="en", freq={"a": 1}, n_words=[1, 0, 0])
        assert profile.probability("b") == 0.0
        assert profile.probability("") is None
        assert profile.probability("abcd") is None

    def test_long_grams_are_accepted(self):
        profile = LangProfile(name="en", freq={"a": 1, "abcd": 3}, n_words=[1, 0, 0])
        assert profile.freq["abcd"] == 3

    @pytest.mark.parametrize(
        "data",
        [
            {"name": "", "freq": {"a": 1}, "n_words": [1, 0, 0]},
            {"name": "en", "freq": {"a": -1}, "n_words": [1, 0, 0]},
            {"name": "en", "freq": {"": 1}, "n_words": [1, 0, 0]},
            {"name": "en", "freq": {"a": 1}, "n_words": [1, -2, 0]},
            {"name": "en", "freq": {"a": 1}, "n_words": [1, 0]},
            {"name": "en", "freq": {"ab": 1}, "n_words": [1, 0, 0]},
            {"name": "en", "n_words": [1, 0, 0]},
        ],
    )
    def test_invalid_profiles(self, data):
        with pytest.raises(ValidationError):
            LangProfile.model_validate(data)

    def test_profile_is_frozen(self):
        profile = LangProfile(name="en", freq={"a": 1}, n_words=[1, 0, 0])
        with pytest.raises(ValidationError):
            profile.name = "fr"


class TestParseProfile:
    """Test JSON profile decoding"""

    def test_parse_valid_document(self, profile_records):
        profile = parse_profile(json.dumps(profile_records[0]))
        assert profile.name == "xx"
        assert profile.n_words == (60, 40, 30)

    def test_parse_bytes(self, profile_records):
        profile = parse_profile(json.dumps(profile_records[1]).encode("utf-8"))
        assert profile.name == "yy"

    def test_invalid_json(self):
        with pytest.raises(FormatError) as exc_info:
            parse_profile("{not json", source="broken")
        assert exc_info.value.error_code == "PROFILE_JSON_ERROR"
        assert exc_info.value.details["source"] == "broken"

    def test_non_object_document(self):
        with pytest.raises(FormatError) as exc_info:
            parse_profile("[1, 2, 3]")
        assert exc_info.value.error_code == "PROFILE_SCHEMA_ERROR"

    def test_schema_violation(self):
        document = json.dumps({"name": "en", "freq": {"a": -5}, "n_words": [1, 1, 1]})
        with pytest.raises(FormatError) as exc_info:
            parse_profile(document, source="en")
        assert exc_info.value.error_code == "PROFILE_SCHEMA_ERROR"
        assert exc_info.value.details["errors"]

    def test_format_error_is_a_load_error(self):
        with pytest.raises(ProfileLoadError):
            parse_profile("")


class TestProfileFiles:
    """Test profile file access"""

    def test_read_profile(self, profile_dir):
        profile = read_profile(profile_dir / "xx")
        assert profile.name == "xx"

    def test_read_missing_profile(self, tmp_path):
        with pytest.raises(SourceUnavailableError) as exc_info:
            read_profile(tmp_path / "missing")
        assert exc_info.value.error_code == "PROFILE_FILE_ERROR"

    def test_iter_profile_files_skips_hidden_files_and_directories(self, profile_dir):
        (profile_dir / ".DS_Store").write_text("junk")
        (profile_dir / "nested").mkdir()

        names = sorted(path.name for path in iter_profile_files(profile_dir))
        assert names == ["xx", "yy"]

    def test_iter_missing_directory(self, tmp_path):
        with pytest.raises(SourceUnavailableError) as exc_info:
            iter_profile_files(tmp_path / "missing")
        assert exc_info.value.error_code == "PROFILE_DIRECTORY_ERROR"


class TestBundledProfiles:
    """Test bundled profile set lookup"""

    def test_standard_set_ships_with_langdetect(self, monkeypatch):
        monkeypatch.setattr(loader.settings, "DEFAULT_PROFILE_DIR", None)
        directory = bundled_profile_dir(ProfileSet.STANDARD)
        assert directory.name == "profiles"
        assert (directory / "en").is_file()

    def test_short_text_set_falls_back_to_standard(self, monkeypatch):
        monkeypatch.setattr(loader.settings, "DEFAULT_PROFILE_DIR", None)
        monkeypatch.setattr(loader.settings, "SHORT_PROFILE_DIR", None)
        assert bundled_profile_dir(ProfileSet.SHORT_TEXT) == bundled_profile_dir(
            ProfileSet.STANDARD
        )

    def test_configured_directories(self, monkeypatch, tmp_path):
        monkeypatch.setattr(loader.settings, "DEFAULT_PROFILE_DIR", str(tmp_path))
        monkeypatch.setattr(loader.settings, "SHORT_PROFILE_DIR", "/srv/short")
        assert bundled_profile_dir(ProfileSet.STANDARD) == Path(tmp_path)
        assert bundled_profile_dir(ProfileSet.SHORT_TEXT) == Path("/srv/short")
