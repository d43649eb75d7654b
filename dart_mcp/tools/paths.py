"""
Path resolution for tool parameters.

Callers may send relative paths; the ``dart`` binary is always given absolute
ones. Resolution never fails and never checks that the target exists: a path
that points nowhere is reported later by the toolchain itself.

Resolution runs an ordered tuple of strategies, each a pure function
``(path, context) -> Optional[str]``; the first non-None answer wins. The
default chain returns absolute input unchanged and joins anything else onto
the base directory. ``search_project_roots`` is an opt-in fallback that looks
for an existing match under the registered project roots before falling back
to the base directory.
"""

import logging
import os
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from ..config import get_config
from ..project_roots import ProjectRootRegistry, default_registry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionContext:
    """Inputs shared by all strategies for one ``resolve`` call."""
    base_dir: str
    roots: Tuple[str, ...] = ()


Strategy = Callable[[str, ResolutionContext], Optional[str]]


def absolute_as_is(path: str, context: ResolutionContext) -> Optional[str]:
    """Absolute input is returned unchanged, existing or not."""
    if os.path.isabs(path):
        return path
    return None


def search_project_roots(path: str, context: ResolutionContext) -> Optional[str]:
    """
    Optional fallback: ``root/path`` for the first registered root where it exists.

    Only consulted when the base-directory candidate does not exist. Order
    sensitive: the first matching root wins.
    """
    if os.path.exists(os.path.join(context.base_dir, path)):
        return None
    for root in context.roots:
        candidate = os.path.abspath(os.path.join(root, path))
        if os.path.exists(candidate):
            logger.debug("Found %s under project root %s", path, root)
            return candidate
    return None


def join_with_base_dir(path: str, context: ResolutionContext) -> Optional[str]:
    """Join onto the base directory, normalising ``.`` and ``..``."""
    return os.path.abspath(os.path.join(context.base_dir, path))


DEFAULT_STRATEGIES: Tuple[Strategy, ...] = (absolute_as_is, join_with_base_dir)
ROOT_SEARCH_STRATEGIES: Tuple[Strategy, ...] = (absolute_as_is, search_project_roots, join_with_base_dir)


class PathResolver:
    """Turns caller-supplied paths into absolute filesystem paths."""

    def __init__(
        self,
        registry: Optional[ProjectRootRegistry] = None,
        search_roots: bool = False,
        strategies: Optional[Sequence[Strategy]] = None,
    ):
        self.registry = registry if registry is not None else default_registry()
        if strategies is not None:
            self.strategies = tuple(strategies)
        else:
            self.strategies = ROOT_SEARCH_STRATEGIES if search_roots else DEFAULT_STRATEGIES

    def _context(self, working_dir: Optional[str]) -> ResolutionContext:
        base_dir = os.path.abspath(working_dir) if working_dir else os.getcwd()
        roots = self.registry.snapshot() if search_project_roots in self.strategies else ()
        return ResolutionContext(base_dir=base_dir, roots=roots)

    def resolve(self, path: Optional[str], working_dir: Optional[str] = None) -> Optional[str]:
        """
        Resolve ``path`` against ``working_dir`` (default: the process cwd).

        Empty or None input is returned unchanged.
        """
        if not path:
            return path

        context = self._context(working_dir)
        for strategy in self.strategies:
            resolved = strategy(path, context)
            if resolved is not None:
                logger.debug("Resolved %s -> %s (%s)", path, resolved, getattr(strategy, "__name__", strategy))
                return resolved

        # Custom chains without a terminal strategy still get an absolute path.
        return join_with_base_dir(path, context)

    def resolve_all(self, paths: Iterable[str], working_dir: Optional[str] = None) -> List[str]:
        """Resolve each path in order."""
        return [self.resolve(p, working_dir) for p in paths]


def get_resolver() -> PathResolver:
    """Resolver configured from the active server configuration."""
    return PathResolver(search_roots=get_config().search_roots)


def to_absolute_path(path: Optional[str], working_dir: Optional[str] = None) -> Optional[str]:
    return get_resolver().resolve(path, working_dir)


def to_absolute_paths(paths: Iterable[str], working_dir: Optional[str] = None) -> List[str]:
    return get_resolver().resolve_all(paths, working_dir)
