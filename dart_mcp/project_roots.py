"""
Registry of directories believed to hold Dart/Flutter projects.

The registry is append-only. It is populated once at startup by
``detect_project_roots`` and only read afterwards, by the optional
project-root fallback of the path resolver.
"""

import logging
import os
import threading
from typing import Iterable, Iterator, List, Optional

logger = logging.getLogger(__name__)

PUBSPEC_FILE = "pubspec.yaml"

# Directories under $HOME commonly used to keep checkouts.
COMMON_PROJECT_DIRS = ("dev", "projects", "workspace", "Documents", "src")


class ProjectRootRegistry:
    """Insertion-ordered, duplicate-free set of project root paths."""

    def __init__(self, roots: Optional[Iterable[str]] = None):
        self._lock = threading.Lock()
        self._roots: List[str] = []
        for root in roots or ():
            self.register(root)

    def register(self, root: Optional[str]) -> bool:
        """
        Add ``root`` unless it is empty or already present.

        Returns:
            True if the root was added. Never raises.
        """
        if not root:
            return False
        with self._lock:
            if root in self._roots:
                return False
            self._roots.append(root)
        logger.debug("Adding project root: %s", root)
        return True

    def list(self) -> List[str]:
        """Copy of the registered roots in insertion order."""
        with self._lock:
            return list(self._roots)

    def snapshot(self) -> tuple:
        with self._lock:
            return tuple(self._roots)

    def __len__(self) -> int:
        with self._lock:
            return len(self._roots)

    def __contains__(self, root: object) -> bool:
        with self._lock:
            return root in self._roots

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    def __repr__(self) -> str:
        return f"ProjectRootRegistry({self.list()!r})"


_default_registry = ProjectRootRegistry()


def default_registry() -> ProjectRootRegistry:
    """The process-wide registry populated at server startup."""
    return _default_registry


def _is_dart_project(directory: str) -> bool:
    return os.path.isfile(os.path.join(directory, PUBSPEC_FILE))


def detect_project_roots(
    registry: ProjectRootRegistry,
    cwd: Optional[str] = None,
    home: Optional[str] = None,
    search_dirs: Optional[Iterable[str]] = None,
) -> List[str]:
    """
    Register likely project roots.

    The working directory is always registered. Then each candidate directory
    (the working directory, the common checkout folders under ``home`` and any
    ``search_dirs``) is registered if it holds a ``pubspec.yaml``, and so is
    every immediate subdirectory that holds one. Unreadable directories are
    skipped.

    Returns:
        The registry contents after detection.
    """
    cwd = cwd or os.getcwd()
    home = home or os.path.expanduser("~")
    registry.register(cwd)

    candidates = [cwd]
    candidates.extend(os.path.join(home, name) for name in COMMON_PROJECT_DIRS)
    candidates.extend(os.path.abspath(d) for d in search_dirs or ())

    logger.debug("Detecting project roots in %d candidate directories", len(candidates))
    for directory in candidates:
        if not os.path.isdir(directory):
            continue
        try:
            if _is_dart_project(directory):
                registry.register(directory)
            with os.scandir(directory) as entries:
                subdirs = sorted(entry.path for entry in entries if entry.is_dir())
        except OSError as e:
            logger.debug("Skipping %s while detecting project roots: %s", directory, e)
            continue
        for subdir in subdirs:
            if _is_dart_project(subdir):
                registry.register(subdir)

    roots = registry.list()
    logger.info("Detected %d project root(s)", len(roots))
    return roots
