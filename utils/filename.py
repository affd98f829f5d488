"""
Stored filename assignment - turns a title and an upload name into a unique file name
"""

import random
import re
from datetime import datetime, timezone
from pathlib import PurePath
from typing import Callable, Optional

from config.settings import (
    FALLBACK_BASENAME,
    MAX_BASENAME_BYTES,
    MAX_EXTENSION_LENGTH,
    RANDOM_SUFFIX_DIGITS,
)

Clock = Callable[[], datetime]

_WHITESPACE = re.compile(r"\s+")
_NON_SLUG = re.compile(r"[^A-Za-z0-9_-]")
_PATH_HOSTILE = re.compile(r"[/\\\x00-\x1f\x7f]")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def epoch_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def slugify(value: str) -> str:
    """Collapse whitespace to hyphens, drop anything outside [A-Za-z0-9_-], lowercase"""
    value = _WHITESPACE.sub("-", value)
    return _NON_SLUG.sub("", value).lower()


def harden(value: str) -> str:
    """Strip path separators, control characters and leading dots, keep everything else"""
    return _PATH_HOSTILE.sub("", value).lstrip(".")


def split_extension(filename: str) -> str:
    """Extension with its leading dot, control characters and backslashes removed"""
    # PurePath.suffix treats ".hidden" as having no extension
    suffix = PurePath(filename).suffix if filename else ""
    suffix = _PATH_HOSTILE.sub("", suffix)
    if len(suffix.encode("utf-8")) > MAX_EXTENSION_LENGTH:
        return ""
    return suffix if suffix != "." else ""


def truncate_utf8(value: str, max_bytes: int) -> str:
    """Cut a string to at most max_bytes of UTF-8 without splitting a character"""
    return value.encode("utf-8")[:max_bytes].decode("utf-8", errors="ignore")


class FilenameAssigner:
    """Builds `<base>-<millis>-<digits><ext>` names for uploaded files"""

    def __init__(
        self,
        sanitize: bool = True,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
    ):
        self.sanitize = sanitize
        self.clock = clock or utc_now
        self.rng = rng or random.Random()

    def title_for(self, title: Optional[str], original_filename: str) -> str:
        """
        Display title of a record

        Args:
            title: Client supplied title
            original_filename: Name of the uploaded file

        Returns:
            The title, or a label derived from the upload name
        """
        if title and title.strip():
            return title
        if self.sanitize:
            return PurePath(original_filename).stem if original_filename else ""
        return original_filename or ""

    def base_name(self, title: Optional[str], original_filename: str) -> str:
        base = self.title_for(title, original_filename)
        base = slugify(base) if self.sanitize else harden(base)
        # Leave room for the suffix and extension under the 255 byte name limit
        base = truncate_utf8(base, MAX_BASENAME_BYTES)
        return base or FALLBACK_BASENAME

    def unique_suffix(self) -> str:
        millis = epoch_millis(self.clock())
        digits = str(round(self.rng.random() * 1e9))[:RANDOM_SUFFIX_DIGITS]
        return f"{millis}-{digits}"

    def assign(self, title: Optional[str], original_filename: str) -> str:
        """
        Produce the stored filename for an upload

        Uniqueness rests on the millisecond timestamp plus the random digits;
        no directory lookup is done here.

        Args:
            title: Client supplied title (optional)
            original_filename: Name of the uploaded file

        Returns:
            Filesystem-safe stored filename
        """
        base = self.base_name(title, original_filename)
        ext = split_extension(original_filename)
        return f"{base}-{self.unique_suffix()}{ext}"
