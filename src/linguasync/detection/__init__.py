"""
LinguaSync Detection Module - Registries and detection sessions.

Core Components:
    - Registry: Compiles language profiles into a probability table
    - RegistryManager: Named registries, including the self-populating
      DEFAULT and SHORT registries
    - ProbabilityTable: Read-only gram x language probability matrix
    - Detector: Per-request detection session
    - Language: Language code with its estimated probability

Example:
    >>> from linguasync.detection import RegistryManager
    >>> manager = RegistryManager()
    >>> detector = manager.get_default().create()
    >>> detector.append("Dies ist ein kurzer deutscher Text.")
    >>> detector.detect()
    'de'
"""

from .detector import UNKNOWN_LANG, Detector, DetectorState, Language
from .manager import DEFAULT_REGISTRY, SHORT_TEXT_REGISTRY, RegistryManager
from .registry import Registry
from .table import ProbabilityTable

__all__ = [
    "DEFAULT_REGISTRY",
    "Detector",
    "DetectorState",
    "Language",
    "ProbabilityTable",
    "Registry",
    "RegistryManager",
    "SHORT_TEXT_REGISTRY",
    "UNKNOWN_LANG",
]
