"""
LinguaSync Profiles - Language profile records and their loaders.

Available Components:
    - LangProfile: Immutable per-language n-gram frequency record
    - ProfileSet: Bundled default profile sets
    - parse_profile / read_profile: JSON profile decoding
    - iter_profile_files: Profile file enumeration for a directory
    - bundled_profile_dir: Location of a bundled profile set
"""

from .loader import (
    ProfileSet,
    bundled_profile_dir,
    iter_profile_files,
    parse_profile,
    read_profile,
)
from .model import LangProfile

__all__ = [
    "LangProfile",
    "ProfileSet",
    "bundled_profile_dir",
    "iter_profile_files",
    "parse_profile",
    "read_profile",
]
