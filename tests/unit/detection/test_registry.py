"""
Unit tests for the language profile registry
"""

import json
import threading

import numpy as np
import pytest

from linguasync.core.exceptions.custom_exceptions import (
    ConfigurationError,
    DuplicateLanguageError,
    FormatError,
    InsufficientProfilesError,
    NotReadyError,
    SourceUnavailableError,
)
from linguasync.detection.detector import Detector
from linguasync.detection.registry import Registry
from linguasync.profiles.model import LangProfile


class TestRegistryLoading:
    """Test the profile loading operations"""

    def test_load_from_records(self, registry):
        assert registry.languages == ("xx", "yy")
        assert len(registry) == 2
        assert not registry.is_empty

    def test_gram_probabilities(self, registry):
        table = registry.snapshot()
        # "abc" occurs 10 times among 30 trigrams of xx and never in yy
        assert table.row("abc")[0] == pytest.approx(10 / 30)
        assert table.row("abc")[1] == 0.0
        assert table.row("a")[0] == pytest.approx(20 / 60)
        assert table.row("xy")[1] == pytest.approx(10 / 40)
        assert np.array_equal(table.row("qqq"), np.zeros(2))

    def test_records_may_be_profile_models(self, profile_records):
        registry = Registry()
        registry.load_from_records(
            [LangProfile.model_validate(record) for record in profile_records]
        )
        assert registry.languages == ("xx", "yy")

    def test_single_record_is_rejected(self, profile_records):
        registry = Registry()
        with pytest.raises(InsufficientProfilesError):
            registry.load_from_records(profile_records[:1])
        assert registry.is_empty

    def test_invalid_record(self, profile_records):
        registry = Registry()
        broken = {"name": "zz", "freq": {"a": 1}}
        with pytest.raises(FormatError) as exc_info:
            registry.load_from_records([profile_records[0], broken])
        assert exc_info.value.details["position"] == 1

    def test_load_from_json(self, profile_records):
        registry = Registry()
        registry.load_from_json([json.dumps(record) for record in profile_records])
        assert registry.languages == ("xx", "yy")

    def test_load_from_json_needs_two_documents(self, profile_records):
        with pytest.raises(InsufficientProfilesError):
            Registry().load_from_json([json.dumps(profile_records[0])])

    def test_load_from_directory(self, profile_dir):
        registry = Registry()
        registry.load_from_directory(profile_dir)
        assert sorted(registry.languages) == ["xx", "yy"]

    def test_load_from_missing_directory(self, tmp_path):
        with pytest.raises(SourceUnavailableError):
            Registry().load_from_directory(tmp_path / "missing")

    def test_load_from_empty_directory(self, tmp_path):
        registry = Registry()
        registry.load_from_directory(tmp_path)
        assert registry.is_empty

    def test_broken_profile_file(self, profile_dir):
        (profile_dir / "zz").write_text("{broken", encoding="utf-8")
        with pytest.raises(FormatError):
            Registry().load_from_directory(profile_dir)

    def test_duplicate_language_keeps_earlier_profiles(
        self, registry, profile_factory
    ):
        batch = [profile_factory("zz", "klm"), profile_factory("xx", "abc")]
        with pytest.raises(DuplicateLanguageError) as exc_info:
            registry.load_from_records(batch)

        assert exc_info.value.details["language"] == "xx"
        assert registry.languages == ("xx", "yy", "zz")

    def test_second_batch_widens_existing_rows(self, registry, profile_factory):
        registry.load_from_records(
            [profile_factory("zz", "abq"), profile_factory("ww", "rst")]
        )
        table = registry.snapshot()
        assert table.languages == ("xx", "yy", "zz", "ww")
        row = table.row("ab")
        assert row.shape == (4,)
        assert row[0] == pytest.approx(0.25)
        assert row[2] == pytest.approx(0.25)
        assert row[3] == 0.0

    def test_add_profile_requires_next_column(self, registry, profile_factory):
        profile = LangProfile.model_validate(profile_factory("zz", "klm"))
        with pytest.raises(ValueError):
            registry.add_profile(profile, index=5)
        registry.add_profile(profile, index=2)
        assert registry.languages[2] == "zz"

    def test_long_grams_are_ignored(self, profile_records):
        record = dict(profile_records[0])
        record["freq"] = {**record["freq"], "abcd": 7}
        registry = Registry()
        registry.load_from_records([record, profile_records[1]])
        assert "abcd" not in registry.snapshot()

    def test_clear_and_reload(self, registry, profile_records):
        registry.clear()
        assert registry.is_empty
        assert registry.languages == ()

        registry.load_from_records(profile_records)
        assert registry.languages == ("xx", "yy")

    def test_concurrent_loads(self, profile_factory):
        registry = Registry("concurrent")
        words = ["abc", "def", "ghi", "jkl", "mno", "pqr", "stu", "vwx"]

        def load(i):
            registry.load_from_records(
                [
                    profile_factory(f"l{2 * i}", words[2 * i]),
                    profile_factory(f"l{2 * i + 1}", words[2 * i + 1]),
                ]
            )

        threads = [threading.Thread(target=load, args=(i,)) for i in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sorted(registry.languages) == sorted(f"l{i}" for i in range(8))
        table = registry.snapshot()
        for column, lang in enumerate(table.languages):
            word = words[int(lang[1:])]
            assert table.row(word)[column] == pytest.approx(10 / 30)


class TestRegistrySnapshots:
    """Test table compilation and detector creation"""

    def test_empty_registry_is_not_ready(self):
        registry = Registry("empty")
        with pytest.raises(NotReadyError) as exc_info:
            registry.create()
        assert exc_info.value.error_code == "NEED_LOAD_PROFILE"

    def test_snapshot_is_cached_until_mutation(self, registry, profile_factory):
        first = registry.snapshot()
        assert registry.snapshot() is first

        registry.load_from_records(
            [profile_factory("zz", "klm"), profile_factory("ww", "rst")]
        )
        second = registry.snapshot()
        assert second is not first
        assert first.languages == ("xx", "yy")
        assert second.num_languages == 4

    def test_table_is_read_only(self, registry):
        table = registry.snapshot()
        with pytest.raises(ValueError):
            table.matrix[0, 0] = 1.0
        with pytest.raises(TypeError):
            table._index["new"] = 0

    def test_create_returns_detector(self, registry):
        detector = registry.create()
        assert isinstance(detector, Detector)
        assert detector.languages == ("xx", "yy")

    def test_create_with_alpha_and_options(self, registry):
        detector = registry.create(alpha=0.2, n_trial=3)
        assert detector.config.alpha == 0.2
        assert detector.config.n_trial == 3

    def test_existing_detectors_keep_their_table(
        self, registry, profile_factory, sample_text
    ):
        detector = registry.create(seed=3)
        registry.load_from_records(
            [profile_factory("zz", "klm"), profile_factory("ww", "rst")]
        )
        detector.append(sample_text)
        assert detector.languages == ("xx", "yy")
        assert len(detector.distribution()) == 2

    def test_registry_seed(self, registry, sample_text):
        registry.set_seed(11)
        assert registry.seed == 11

        first = registry.create()
        second = registry.create()
        assert first.config.seed == 11
        for detector in (first, second):
            detector.append(sample_text)
        assert np.array_equal(
            first.get_probability_vector(), second.get_probability_vector()
        )

    def test_explicit_seed_overrides_registry_seed(self, registry):
        registry.set_seed(11)
        assert registry.create(seed=5).config.seed == 5

    def test_explicit_none_seed_skips_registry_seed(self, registry):
        registry.set_seed(11)
        assert registry.create(seed=None).config.seed is None

    def test_negative_seed_is_a_configuration_error(self, registry):
        with pytest.raises(ConfigurationError):
            registry.create(seed=-1)

    def test_repr(self, registry):
        assert repr(registry) == "Registry(name='test', languages=2)"
