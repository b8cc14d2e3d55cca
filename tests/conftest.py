"""
Pytest configuration and fixtures for LinguaSync tests
"""

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest

from linguasync.detection.registry import Registry


def make_profile(name: str, word: str, weight: int = 10) -> Dict[str, Any]:
    """
    Profile record whose grams are exactly those of ``word`` (3 letters).

    Every gram of the word gets ``weight`` occurrences (unigrams twice as
    many), so P(gram | language) is the same for all grams of one length.
    """
    a, b, c = word
    freq = {
        a: 2 * weight,
        b: 2 * weight,
        c: 2 * weight,
        f" {a}": weight,
        f"{a}{b}": weight,
        f"{b}{c}": weight,
        f"{c} ": weight,
        f" {a}{b}": weight,
        f"{a}{b}{c}": weight,
        f"{b}{c} ": weight,
    }
    return {"name": name, "freq": freq, "n_words": [6 * weight, 4 * weight, 3 * weight]}


@pytest.fixture
def profile_factory():
    """Builder for synthetic profile records"""
    return make_profile


@pytest.fixture
def profile_records() -> List[Dict[str, Any]]:
    """Two synthetic languages with disjoint alphabets"""
    return [make_profile("xx", "abc"), make_profile("yy", "xyz")]


@pytest.fixture
def registry(profile_records) -> Registry:
    """Registry loaded with the synthetic languages"""
    registry = Registry("test")
    registry.load_from_records(profile_records)
    return registry


@pytest.fixture
def profile_dir(tmp_path, profile_records) -> Path:
    """Directory holding one JSON profile file per synthetic language"""
    directory = tmp_path / "profiles"
    directory.mkdir()
    for record in profile_records:
        (directory / record["name"]).write_text(json.dumps(record), encoding="utf-8")
    return directory


@pytest.fixture
def sample_text() -> str:
    """Sample text written in the synthetic language xx"""
    return "abc abc cab bca abc"
