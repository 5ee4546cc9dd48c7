"""Directory scanner applying ignore patterns with an explicit stack (DFS)."""

from __future__ import annotations

import enum
import logging
import os
import posixpath
import threading
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from ignorescan import ScanCancelledError, WalkError
from ignorescan.ignorefile import DEFAULT_IGNORE_FILE, load_ignore_lines
from ignorescan.patterns import PatternSet, build_pattern_set

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Entry:
    """A single filesystem entry reached during the walk.

    Attributes:
        path: Absolute path of the entry.
        name: Basename of the entry.
        is_dir: Whether the entry is a directory.
    """

    path: Path
    name: str
    is_dir: bool


@dataclass(frozen=True, slots=True)
class ScanOptions:
    """Options controlling :func:`scan_directory`.

    Attributes:
        ignore_file: Name of the ignore file looked up in the base directory.
        legacy_comments: Treat only a bare ``#`` line as a comment.
    """

    ignore_file: str = DEFAULT_IGNORE_FILE
    legacy_comments: bool = False


class EntryProvider(Protocol):
    """Protocol for listing the direct children of a directory.

    Keeps the walker independent of the real filesystem.
    """

    def list_entries(self, directory: Path) -> Iterable[Entry]: ...


class OsEntryProvider:
    """Entry provider backed by ``os.scandir``, sorted by name."""

    def list_entries(self, directory: Path) -> list[Entry]:
        entries: list[Entry] = []
        with os.scandir(directory) as it:
            for dir_entry in it:
                entries.append(
                    Entry(
                        path=Path(dir_entry.path),
                        name=dir_entry.name,
                        is_dir=dir_entry.is_dir(follow_symlinks=False),
                    )
                )
        entries.sort(key=lambda e: e.name)
        return entries


class WalkDecision(enum.Enum):
    """Whether the walker should visit a directory's children."""

    DESCEND = "descend"
    SKIP = "skip"


class IncludeSet:
    """Insertion-ordered set of included relative paths."""

    def __init__(self) -> None:
        self._paths: dict[str, None] = {}

    def add(self, rel_path: str) -> None:
        self._paths.setdefault(rel_path, None)

    def __contains__(self, rel_path: object) -> bool:
        return rel_path in self._paths

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def to_list(self) -> list[str]:
        return list(self._paths)


@dataclass
class WalkState:
    """Mutable state of one scan. Never shared between scans.

    Attributes:
        base_dir: Absolute scan root.
        excluded_dirs: Relative paths of directories matched by a pattern.
        includes: Relative paths accepted so far, in discovery order.
    """

    base_dir: Path
    excluded_dirs: set[str] = field(default_factory=set)
    includes: IncludeSet = field(default_factory=IncludeSet)

    def relative(self, path: Path) -> str:
        return path.relative_to(self.base_dir).as_posix()


class TreeWalker:
    """Walk a directory tree and collect entries not excluded by a pattern set.

    Entries are evaluated in pre-order: a directory is decided before any
    of its children are listed, and a skipped directory is never listed.
    """

    def __init__(
        self,
        patterns: PatternSet,
        provider: EntryProvider | None = None,
        cancel: threading.Event | None = None,
    ) -> None:
        """Initialize the walker.

        Args:
            patterns: Compiled pattern set to apply.
            provider: Directory listing implementation. Defaults to
                :class:`OsEntryProvider`.
            cancel: Optional event; once set, the walk stops at the next entry.
        """
        self._patterns = patterns
        self._provider = provider or OsEntryProvider()
        self._cancel = cancel

    def evaluate(self, state: WalkState, entry: Entry) -> WalkDecision:
        """Apply the pattern set to one entry and update *state*.

        Args:
            state: State of the running scan.
            entry: Entry to decide. Must not be the base directory.

        Returns:
            WalkDecision: ``SKIP`` when a directory's subtree must not be
            visited. Files always yield ``DESCEND``, which has no effect.
        """
        if entry.name in self._patterns.default_names:
            logger.debug("Skipping default-ignored %s", entry.path)
            return WalkDecision.SKIP

        rel = state.relative(entry.path)
        parent_excluded = posixpath.dirname(rel) in state.excluded_dirs
        excluded = False
        # A transitive directory is excluded itself but holds a deeper
        # inversion, e.g. "target" for "!target/*-runner.jar".
        transitive = False

        for pattern in self._patterns.patterns:
            if not pattern.invert and parent_excluded:
                excluded = True
                continue

            if pattern.matches(rel):
                excluded = True
                if pattern.invert:
                    state.includes.add(rel)

            if (
                entry.is_dir
                and pattern.invert
                and pattern.parent_chain
                and rel == pattern.parent_path
            ):
                transitive = True

        if not excluded:
            state.includes.add(rel)
            return WalkDecision.DESCEND

        if not entry.is_dir:
            return WalkDecision.DESCEND

        state.excluded_dirs.add(rel)
        if transitive:
            logger.debug("Directory %s is excluded but will be descended", entry.path)
            return WalkDecision.DESCEND
        logger.debug("Directory %s will be skipped from further iteration", entry.path)
        return WalkDecision.SKIP

    def walk(self, base_dir: Path) -> list[str]:
        """Scan *base_dir* and return included relative paths.

        Args:
            base_dir: Root directory. It is never emitted itself.

        Returns:
            list[str]: Forward-slash paths relative to *base_dir*, in
            discovery order, without duplicates.

        Raises:
            WalkError: If a directory cannot be listed.
            ScanCancelledError: If the cancel event was set during the walk.
        """
        state = WalkState(base_dir=Path(os.path.abspath(base_dir)))

        # Children are pushed in reverse so the first listed is popped first.
        stack: list[Entry] = list(reversed(self._list(state.base_dir)))
        while stack:
            entry = stack.pop()
            if self._cancel is not None and self._cancel.is_set():
                raise ScanCancelledError(entry.path)

            decision = self.evaluate(state, entry)
            if entry.is_dir and decision is WalkDecision.DESCEND:
                stack.extend(reversed(self._list(entry.path)))

        return state.includes.to_list()

    def _list(self, directory: Path) -> list[Entry]:
        try:
            return list(self._provider.list_entries(directory))
        except OSError as exc:
            raise WalkError(directory, exc) from exc


def scan(
    base_dir: Path,
    patterns: PatternSet,
    *,
    provider: EntryProvider | None = None,
    cancel: threading.Event | None = None,
) -> list[str]:
    """Return the relative paths under *base_dir* not excluded by *patterns*.

    Raises:
        WalkError: On any filesystem access failure during the walk.
    """
    return TreeWalker(patterns, provider, cancel).walk(base_dir)


def scan_directory(
    base_dir: Path,
    options: ScanOptions | None = None,
    *,
    cancel: threading.Event | None = None,
) -> list[str]:
    """Load the ignore file from *base_dir*, compile it and scan.

    A missing ignore file is not an error; only the default patterns apply.

    Args:
        base_dir: Root directory to scan.
        options: Scan options. Defaults to ``ScanOptions()``.
        cancel: Optional cancellation event.

    Returns:
        list[str]: Included relative paths in discovery order.

    Raises:
        IgnoreFileError: If the ignore file exists but is unreadable.
        CompilationError: If a pattern cannot be compiled.
        WalkError: On any filesystem access failure during the walk.
    """
    scan_options = options or ScanOptions()
    base = Path(base_dir)
    lines = load_ignore_lines(base, scan_options.ignore_file)
    patterns = build_pattern_set(lines, legacy_comments=scan_options.legacy_comments)
    return scan(base, patterns, cancel=cancel)
