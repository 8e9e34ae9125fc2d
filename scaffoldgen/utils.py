# File: scaffoldgen/utils.py
"""
Scaffoldgen - Utility Functions & Helpers
==========================================
Case-splitting helpers, indentation helpers, the atomic batch writer and a
small ``Timer`` used to log step durations.

Performance strategy:
- Pure string helpers are decorated with ``@lru_cache(maxsize=None)``; the
  same identifiers are split once per block and once per role.
- File writes go to a temporary file first and are renamed into place.
"""

from __future__ import annotations

import functools
import logging
import os
import re
import shutil
import tempfile
import time
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("scaffoldgen.utils")

# ---------------------------------------------------------------------------
# Pre-compiled regex patterns (compiled once at module load)
# ---------------------------------------------------------------------------

_CASE_BOUNDARY_RE: re.Pattern[str] = re.compile(r"(?<=[a-z])(?=[A-Z])")
_SEPARATOR_RE: re.Pattern[str] = re.compile(r"[_\-\s]+")


# ---------------------------------------------------------------------------
# Cached string transformation functions
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=None)
def split_case_words(name: str) -> Tuple[str, ...]:
    """
    Split an identifier into words on ``_``/``-``/space separators and on
    every lowercase→uppercase boundary.  Word casing is kept as-is.

    Examples:
        >>> split_case_words("blogPost")
        ('blog', 'Post')
        >>> split_case_words("published_on")
        ('published', 'on')
    """
    words: List[str] = []
    for chunk in _SEPARATOR_RE.split(name):
        if chunk:
            words.extend(w for w in _CASE_BOUNDARY_RE.split(chunk) if w)
    return tuple(words)


def upper_first(word: str) -> str:
    return word[:1].upper() + word[1:]


def lower_first(word: str) -> str:
    return word[:1].lower() + word[1:]


@functools.lru_cache(maxsize=None)
def to_title_words(name: str) -> str:
    """
    Convert an identifier to a human title, capitalising the first letter of
    every word and leaving the rest of each word untouched.

    Examples:
        >>> to_title_words("blogPosts")
        'Blog Posts'
        >>> to_title_words("created_at")
        'Created At'
    """
    return " ".join(upper_first(w) for w in split_case_words(name))


@functools.lru_cache(maxsize=None)
def to_kebab_case(name: str) -> str:
    """
    Replace each lowercase→uppercase boundary with ``-`` and lower-case.

    Examples:
        >>> to_kebab_case("BlogPost")
        'blog-post'
    """
    return _CASE_BOUNDARY_RE.sub("-", name).lower()


# ---------------------------------------------------------------------------
# Indentation helpers
# ---------------------------------------------------------------------------


def indent_lines(lines: Sequence[str], width: int) -> List[str]:
    """Indent every non-blank line by *width* spaces."""
    prefix: str = " " * width
    return [prefix + line if line.strip() else line for line in lines]


# ---------------------------------------------------------------------------
# File I/O helpers
# ---------------------------------------------------------------------------


def ensure_directory(path: Path) -> None:
    """Create directory (and parents) if it doesn't exist."""
    path.mkdir(parents=True, exist_ok=True)
    logger.debug("Ensured directory exists: %s", path)


def write_file(path: Path, content: str, atomic: bool = True) -> int:
    """
    Write *content* to *path*.

    When *atomic* is True, writes to a temporary file first then renames;
    a crash never leaves a half-written view on disk.

    Returns the number of bytes written.
    """
    if not atomic:
        ensure_directory(path.parent)
        encoded: bytes = content.encode("utf-8")
        path.write_bytes(encoded)
        logger.debug("Wrote %d bytes to %s", len(encoded), path)
        return len(encoded)

    tmp_path, size = _stage_file(path, content)
    _commit_file(tmp_path, path)
    return size


def _stage_file(path: Path, content: str) -> Tuple[str, int]:
    """Write *content* to a temporary file beside *path*; return (temp path, bytes)."""
    ensure_directory(path.parent)

    encoded: bytes = content.encode("utf-8")
    fd, tmp_path = tempfile.mkstemp(
        dir=str(path.parent),
        prefix=f".{path.name}.",
        suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(encoded)
    except Exception:
        _discard(tmp_path)
        raise
    return tmp_path, len(encoded)


def _commit_file(tmp_path: str, path: Path) -> None:
    try:
        shutil.move(tmp_path, str(path))
    except Exception:
        _discard(tmp_path)
        raise
    logger.debug("Wrote %s", path)


def _discard(tmp_path: str) -> None:
    if os.path.exists(tmp_path):
        os.unlink(tmp_path)


def write_files_batch(files: Dict[str, str], base_dir: Path) -> Tuple[int, int]:
    """
    Write multiple files at once, all or nothing.

    Every file is first staged as a temporary file beside its target.  If any
    staging write fails, the staged files are removed and the error is
    re-raised, so no target path is touched.  Staged files are then moved
    into place.

    Args:
        files: Mapping of relative path → content.
        base_dir: Root output directory.

    Returns:
        Tuple of (total_files_written, total_bytes_written).
    """
    staged: List[Tuple[str, Path]] = []
    total_bytes: int = 0

    try:
        for rel_path, content in files.items():
            target: Path = base_dir / rel_path
            tmp_path, size = _stage_file(target, content)
            staged.append((tmp_path, target))
            total_bytes += size
    except Exception:
        for tmp_path, _ in staged:
            _discard(tmp_path)
        logger.error("Batch write to %s aborted; %d staged files removed.", base_dir, len(staged))
        raise

    for tmp_path, target in staged:
        _commit_file(tmp_path, target)
    total_files: int = len(staged)

    logger.info(
        "Batch write complete: %d files, %d bytes to %s",
        total_files,
        total_bytes,
        base_dir,
    )
    return total_files, total_bytes


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------


def count_lines(content: str) -> int:
    if not content:
        return 0
    return content.count("\n") + (1 if not content.endswith("\n") else 0)


# ---------------------------------------------------------------------------
# Timer context manager
# ---------------------------------------------------------------------------


class Timer:
    """
    Simple context-manager timer for profiling generation steps.

    Usage:
        with Timer("render form") as t:
            ...
        print(t.elapsed)
    """

    __slots__ = ("label", "start_time", "end_time", "elapsed")

    def __init__(self, label: str = "operation") -> None:
        self.label: str = label
        self.start_time: float = 0.0
        self.end_time: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self.end_time = time.perf_counter()
        self.elapsed = self.end_time - self.start_time
        logger.info("Timer [%s]: %.4f seconds", self.label, self.elapsed)

    def __repr__(self) -> str:
        return f"<Timer {self.label}: {self.elapsed:.4f}s>"


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "split_case_words",
    "upper_first",
    "lower_first",
    "to_title_words",
    "to_kebab_case",
    "indent_lines",
    "ensure_directory",
    "write_file",
    "write_files_batch",
    "count_lines",
    "Timer",
]

logger.debug("scaffoldgen.utils loaded: %d public symbols.", len(__all__))
