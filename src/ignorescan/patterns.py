"""Ignore-file pattern compilation built on pathspec's regex patterns."""

from __future__ import annotations

import logging
import os
import posixpath
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Final

from pathspec.pattern import RegexPattern

from ignorescan import CompilationError

logger = logging.getLogger(__name__)

# Names skipped at any depth, regardless of the ignore file.
DEFAULT_NAMES: Final[tuple[str, ...]] = (".git", "vendor", "node_modules")

INVERT_PREFIX: Final[str] = "!"
COMMENT_PREFIX: Final[str] = "#"
UTF8_BOM: Final[str] = "\ufeff"


def _is_comment(line: str, legacy: bool) -> bool:
    if legacy:
        # Only a bare "#" counts as a comment in the legacy reading.
        return COMMENT_PREFIX.startswith(line)
    return line.startswith(COMMENT_PREFIX)


def _clean(text: str) -> str:
    """Collapse ``.``/``..`` segments and duplicate separators to slash form."""
    if os.sep != "/":
        text = text.replace(os.sep, "/")
    text = posixpath.normpath(text)
    # normpath keeps a leading "//" on POSIX.
    if text.startswith("//"):
        text = "/" + text.lstrip("/")
    if len(text) > 1 and text.startswith("/"):
        text = text[1:]
    return text


def normalize_lines(
    lines: Iterable[str], *, legacy_comments: bool = False
) -> list[tuple[str, str]]:
    """Normalize raw ignore-file lines into pattern texts.

    Args:
        lines: Raw lines in file order.
        legacy_comments: Only skip lines that are exactly ``#`` instead of
            every line starting with ``#``.

    Returns:
        list[tuple[str, str]]: ``(raw_line, pattern_text)`` pairs. Inverted
        patterns keep their ``!`` prefix in front of the cleaned body.
    """
    normalized: list[tuple[str, str]] = []
    for line_no, raw in enumerate(lines):
        text = raw
        if line_no == 0 and text.startswith(UTF8_BOM):
            text = text[len(UTF8_BOM) :]
        text = text.strip()
        if not text or _is_comment(text, legacy_comments):
            continue

        invert = text.startswith(INVERT_PREFIX)
        if invert:
            text = text[len(INVERT_PREFIX) :]
            if not text:
                logger.debug("Skipping empty inversion on line %d", line_no + 1)
                continue

        text = _clean(text)
        if invert:
            text = INVERT_PREFIX + text
        normalized.append((raw, text))
    return normalized


class DockerIgnorePattern(RegexPattern):
    """A dockerignore-style pattern anchored to the whole relative path.

    Unlike gitignore, ``*`` also crosses directory separators, so ``*.md``
    matches ``README.md`` as well as ``docs/guide.md``.

    Attributes:
        raw: Line the pattern was read from.
        parent_chain: Segments before the last one, e.g. ``("target",)`` for
            ``target/*-runner.jar``. Empty for single-segment patterns.
    """

    __slots__ = ("raw", "parent_chain")

    def __init__(self, pattern: str, raw: str | None = None) -> None:
        super().__init__(pattern)
        self.raw = raw if raw is not None else pattern
        body = pattern[len(INVERT_PREFIX) :] if self.invert else pattern
        self.parent_chain: tuple[str, ...] = tuple(body.split("/")[:-1])

    @property
    def invert(self) -> bool:
        """Whether a match re-includes the entry."""
        return self.include is False

    @property
    def parent_path(self) -> str:
        """Relative path of the directory named by :attr:`parent_chain`."""
        return "/".join(self.parent_chain)

    def matches(self, rel_path: str) -> bool:
        """Return whether *rel_path* (slash-separated, relative to root) matches."""
        return self.match_file(rel_path) is not None

    @classmethod
    def pattern_to_regex(cls, pattern: str) -> tuple[str | None, bool | None]:
        """Convert a normalized pattern into a full-path regular expression.

        Args:
            pattern: Normalized pattern, optionally prefixed with ``!``.

        Returns:
            tuple: ``(regex, include)``. ``include`` is ``False`` for
            inverted patterns; both are ``None`` for an empty pattern.
        """
        include = True
        if pattern.startswith(INVERT_PREFIX):
            include = False
            pattern = pattern[len(INVERT_PREFIX) :]
        if not pattern:
            return None, None

        parts = ["^"]
        i = 0
        end = len(pattern)
        while i < end:
            ch = pattern[i]
            i += 1
            if ch == "*":
                if i < end and pattern[i] == "*":
                    i += 1
                    if i < end and pattern[i] == "/":
                        i += 1
                    if i >= end:
                        parts.append(".*")
                    else:
                        parts.append("(.*/)?")
                else:
                    parts.append(".*")
            elif ch == "?":
                parts.append("[^/]")
            elif ch in ".$":
                parts.append("\\" + ch)
            else:
                parts.append(ch)
        parts.append("\\Z")
        return "".join(parts), include


@dataclass(frozen=True, slots=True)
class PatternSet:
    """Ordered compiled patterns plus the default names.

    Attributes:
        patterns: Default patterns first, then file patterns in file order.
        default_names: Names whose whole subtree is always skipped.
    """

    patterns: tuple[DockerIgnorePattern, ...] = ()
    default_names: frozenset[str] = field(default_factory=lambda: frozenset(DEFAULT_NAMES))

    def __len__(self) -> int:
        return len(self.patterns)

    @property
    def inversions(self) -> tuple[DockerIgnorePattern, ...]:
        return tuple(p for p in self.patterns if p.invert)


def compile_pattern(text: str, raw: str | None = None) -> DockerIgnorePattern:
    """Compile one normalized pattern.

    Raises:
        CompilationError: If the translated expression is not a valid regex.
    """
    try:
        return DockerIgnorePattern(text, raw=raw)
    except re.error as exc:
        raise CompilationError(raw if raw is not None else text, exc) from exc


def build_pattern_set(
    lines: Iterable[str] | None = None,
    *,
    legacy_comments: bool = False,
    default_names: Iterable[str] = DEFAULT_NAMES,
) -> PatternSet:
    """Build a :class:`PatternSet` from ignore-file lines.

    Args:
        lines: Raw ignore-file lines, or ``None`` when there is no ignore
            file; only the defaults apply then.
        legacy_comments: See :func:`normalize_lines`.
        default_names: Built-in names, compiled ahead of the file patterns.

    Returns:
        PatternSet: The compiled set.

    Raises:
        CompilationError: On the first line that cannot be compiled. No
            partial set is returned.
    """
    names = tuple(default_names)
    compiled = [compile_pattern(name) for name in names]
    if lines is not None:
        for raw, text in normalize_lines(lines, legacy_comments=legacy_comments):
            compiled.append(compile_pattern(text, raw=raw))
    return PatternSet(patterns=tuple(compiled), default_names=frozenset(names))
