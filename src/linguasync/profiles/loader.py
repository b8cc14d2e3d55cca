"""
Profile loading for language registries.

This module turns serialized profiles into LangProfile records and locates
the profile sets a registry can be populated from. Profiles use the
langdetect JSON layout:

    {"name": "en", "freq": {"a": 1234, "th": 567, ...}, "n_words": [u, b, t]}

Functions:
    parse_profile(): Decode one JSON document into a LangProfile
    read_profile(): Read and decode one profile file
    iter_profile_files(): List the profile files of a directory
    bundled_profile_dir(): Locate a bundled default profile set

Bundled Profile Sets:
    STANDARD: The profile directory distributed with the ``langdetect``
        package, unless DEFAULT_PROFILE_DIR points elsewhere
    SHORT_TEXT: The directory named by SHORT_PROFILE_DIR. No short-text set
        is distributed with langdetect, so without that setting the
        standard set is used and a warning is logged

Error Handling:
    - Invalid JSON or schema violations raise FormatError
    - Missing or unreadable files and directories raise
      SourceUnavailableError
"""

import json
import os
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from linguasync.core.config.settings import settings
from linguasync.core.exceptions.custom_exceptions import (
    FormatError,
    SourceUnavailableError,
)
from linguasync.core.logging.logger import get_logger
from linguasync.profiles.model import LangProfile

logger = get_logger(__name__)


class ProfileSet(str, Enum):
    """Bundled default profile sets"""

    STANDARD = "standard"
    SHORT_TEXT = "short_text"


def parse_profile(
    document: Union[str, bytes], source: Optional[str] = None
) -> LangProfile:
    """
    Decode a JSON profile document.

    Args:
        document: JSON text (or UTF-8 bytes) of one profile
        source: Name of the origin, used in error details only

    Returns:
        LangProfile: The validated profile

    Raises:
        FormatError: If the document is not JSON or fails validation
    """
    details = {"source": source} if source else {}
    try:
        data = json.loads(document)
    except (ValueError, UnicodeDecodeError) as e:
        raise FormatError(
            f"profile format error in '{source or '<string>'}'",
            error_code="PROFILE_JSON_ERROR",
            details=details,
        ) from e

    if not isinstance(data, dict):
        raise FormatError(
            f"profile format error in '{source or '<string>'}'",
            error_code="PROFILE_SCHEMA_ERROR",
            details=details,
        )

    try:
        return LangProfile.model_validate(data)
    except ValidationError as e:
        raise FormatError(
            f"profile format error in '{source or '<string>'}': "
            f"{e.error_count()} invalid field(s)",
            error_code="PROFILE_SCHEMA_ERROR",
            details={**details, "errors": e.errors(include_url=False)},
        ) from e


def read_profile(path: Union[str, Path]) -> LangProfile:
    """Read a single profile file"""
    path = Path(path)
    try:
        document = path.read_bytes()
    except OSError as e:
        raise SourceUnavailableError(
            f"can't open '{path.name}'",
            error_code="PROFILE_FILE_ERROR",
            details={"path": str(path)},
        ) from e
    return parse_profile(document, source=path.name)


def iter_profile_files(directory: Union[str, Path]) -> List[Path]:
    """
    List the profile files of a directory.

    Only regular files whose names do not start with a dot are returned,
    in the order the operating system iterates the directory. That order
    becomes the registry's column order.

    Raises:
        SourceUnavailableError: If the directory cannot be listed
    """
    directory = Path(directory)
    try:
        with os.scandir(directory) as entries:
            return [
                Path(entry.path)
                for entry in entries
                if not entry.name.startswith(".") and entry.is_file()
            ]
    except OSError as e:
        raise SourceUnavailableError(
            f"Not found profile: {directory}",
            error_code="PROFILE_DIRECTORY_ERROR",
            details={"path": str(directory)},
        ) from e


def _langdetect_profile_dir() -> Path:
    import langdetect

    return Path(langdetect.__file__).resolve().parent / "profiles"


def bundled_profile_dir(profile_set: ProfileSet) -> Path:
    """
    Locate the directory of a bundled default profile set.

    Args:
        profile_set: STANDARD or SHORT_TEXT

    Returns:
        Path: Directory holding one JSON profile per language
    """
    if profile_set == ProfileSet.SHORT_TEXT:
        if settings.SHORT_PROFILE_DIR:
            return Path(settings.SHORT_PROFILE_DIR)
        logger.warning(
            "No short-text profile set configured, using the standard set",
            setting="SHORT_PROFILE_DIR",
        )

    if settings.DEFAULT_PROFILE_DIR:
        return Path(settings.DEFAULT_PROFILE_DIR)
    return _langdetect_profile_dir()
