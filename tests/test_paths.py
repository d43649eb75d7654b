"""
Tests for dart_mcp.tools.paths.

Resolution must always produce an absolute path for non-empty input, without
requiring the target to exist.
"""

import os
from unittest.mock import patch

import pytest

from dart_mcp.config import ServerConfig, set_config
from dart_mcp.project_roots import ProjectRootRegistry
from dart_mcp.tools.paths import (
    DEFAULT_STRATEGIES,
    ROOT_SEARCH_STRATEGIES,
    PathResolver,
    ResolutionContext,
    absolute_as_is,
    join_with_base_dir,
    search_project_roots,
    to_absolute_path,
    to_absolute_paths,
)


@pytest.fixture
def resolver():
    return PathResolver(registry=ProjectRootRegistry())


# ============================================================================
# Strategies
# ============================================================================

def test_absolute_as_is_only_answers_for_absolute_paths():
    context = ResolutionContext(base_dir="/proj")
    assert absolute_as_is("/etc/hosts", context) == "/etc/hosts"
    assert absolute_as_is("lib/main.dart", context) is None


def test_join_with_base_dir_normalises_segments():
    context = ResolutionContext(base_dir="/proj/app")
    assert join_with_base_dir("./lib/../bin/main.dart", context) == "/proj/app/bin/main.dart"
    assert join_with_base_dir("../shared", context) == "/proj/shared"


def test_search_project_roots_skips_when_base_candidate_exists(tmp_path):
    (tmp_path / "base" / "lib").mkdir(parents=True)
    (tmp_path / "root" / "lib").mkdir(parents=True)
    context = ResolutionContext(base_dir=str(tmp_path / "base"), roots=(str(tmp_path / "root"),))
    assert search_project_roots("lib", context) is None


def test_search_project_roots_returns_first_existing_root(tmp_path):
    for name in ("first", "second"):
        (tmp_path / name / "apps" / "web").mkdir(parents=True)
    context = ResolutionContext(
        base_dir=str(tmp_path / "elsewhere"),
        roots=(str(tmp_path / "missing"), str(tmp_path / "first"), str(tmp_path / "second")),
    )
    assert search_project_roots("apps/web", context) == str(tmp_path / "first" / "apps" / "web")


def test_search_project_roots_gives_up_quietly(tmp_path):
    context = ResolutionContext(base_dir=str(tmp_path), roots=(str(tmp_path),))
    assert search_project_roots("nope.dart", context) is None


# ============================================================================
# PathResolver.resolve
# ============================================================================

class TestResolve:

    @pytest.mark.parametrize("path", ["", None])
    def test_empty_input_passes_through(self, resolver, path):
        assert resolver.resolve(path) is path
        assert resolver.resolve(path, "/proj") is path

    def test_empty_input_does_not_read_registry(self):
        class ExplodingRegistry(ProjectRootRegistry):
            def snapshot(self):
                raise AssertionError("registry consulted")

        resolver = PathResolver(registry=ExplodingRegistry(), search_roots=True)
        assert resolver.resolve("") == ""

    def test_missing_relative_file_still_resolves(self, resolver):
        assert resolver.resolve("lib/main.dart", "/proj") == "/proj/lib/main.dart"

    def test_relative_path_uses_process_cwd_by_default(self, resolver, project_dir):
        assert resolver.resolve("lib/main.dart") == os.path.join(project_dir, "lib", "main.dart")

    def test_relative_working_dir_is_made_absolute(self, resolver, project_dir):
        assert resolver.resolve("main.dart", "app") == os.path.join(project_dir, "app", "main.dart")

    @pytest.mark.parametrize("working_dir", [None, "/proj", "relative/dir"])
    def test_absolute_input_is_returned_unchanged(self, resolver, working_dir):
        assert resolver.resolve("/does/not/exist.dart", working_dir) == "/does/not/exist.dart"

    @pytest.mark.parametrize("path", ["a", "a/b.dart", "../up", ".", "./x/../y", "with space/file.dart"])
    def test_result_is_always_absolute(self, resolver, path):
        assert os.path.isabs(resolver.resolve(path, "/proj/app"))

    def test_resolution_is_idempotent(self, resolver):
        first = resolver.resolve("lib/../bin/tool.dart", "/proj")
        second = resolver.resolve("lib/../bin/tool.dart", "/proj")
        assert first == second == "/proj/bin/tool.dart"

    def test_custom_chain_without_terminal_strategy_still_absolute(self):
        resolver = PathResolver(registry=ProjectRootRegistry(), strategies=[lambda p, c: None])
        assert resolver.resolve("lib", "/proj") == "/proj/lib"

    def test_default_chain_ignores_project_roots(self, tmp_path):
        (tmp_path / "root" / "lib").mkdir(parents=True)
        resolver = PathResolver(registry=ProjectRootRegistry([str(tmp_path / "root")]))
        assert resolver.strategies == DEFAULT_STRATEGIES
        assert resolver.resolve("lib", "/proj") == "/proj/lib"


class TestRootSearchFallback:

    def test_enabled_resolver_finds_path_under_root(self, tmp_path):
        root = tmp_path / "root"
        (root / "apps" / "mobile").mkdir(parents=True)
        resolver = PathResolver(registry=ProjectRootRegistry([str(root)]), search_roots=True)

        assert resolver.strategies == ROOT_SEARCH_STRATEGIES
        assert resolver.resolve("apps/mobile", str(tmp_path / "other")) == str(root / "apps" / "mobile")

    def test_existing_base_candidate_wins(self, tmp_path):
        base = tmp_path / "base"
        root = tmp_path / "root"
        (base / "lib").mkdir(parents=True)
        (root / "lib").mkdir(parents=True)
        resolver = PathResolver(registry=ProjectRootRegistry([str(root)]), search_roots=True)

        assert resolver.resolve("lib", str(base)) == str(base / "lib")

    def test_falls_back_to_base_dir_when_nothing_exists(self, tmp_path):
        resolver = PathResolver(registry=ProjectRootRegistry([str(tmp_path)]), search_roots=True)
        assert resolver.resolve("ghost.dart", "/proj") == "/proj/ghost.dart"

    def test_absolute_input_is_never_reinterpreted(self, tmp_path):
        root = tmp_path / "root"
        (root / "lib").mkdir(parents=True)
        resolver = PathResolver(registry=ProjectRootRegistry([str(root)]), search_roots=True)

        assert resolver.resolve("/lib") == "/lib"

    def test_roots_registered_later_are_seen(self, tmp_path):
        registry = ProjectRootRegistry()
        resolver = PathResolver(registry=registry, search_roots=True)
        (tmp_path / "late" / "pkg").mkdir(parents=True)

        assert resolver.resolve("pkg", "/proj") == "/proj/pkg"
        registry.register(str(tmp_path / "late"))
        assert resolver.resolve("pkg", "/proj") == str(tmp_path / "late" / "pkg")


# ============================================================================
# resolve_all and module helpers
# ============================================================================

def test_resolve_all_maps_element_wise(resolver):
    paths = ["a", "b/c.dart", "/abs/d"]
    assert resolver.resolve_all(paths, "/proj") == [resolver.resolve(p, "/proj") for p in paths]
    assert resolver.resolve_all(paths, "/proj") == ["/proj/a", "/proj/b/c.dart", "/abs/d"]


def test_resolve_all_of_nothing_is_empty(resolver):
    assert resolver.resolve_all([], "/proj") == []


def test_module_helpers_follow_active_config(tmp_path):
    root = tmp_path / "root"
    (root / "lib").mkdir(parents=True)

    with patch("dart_mcp.tools.paths.default_registry", return_value=ProjectRootRegistry([str(root)])):
        assert to_absolute_path("lib", "/proj") == "/proj/lib"
        assert to_absolute_paths(["x", "/y"], "/proj") == ["/proj/x", "/y"]

        set_config(ServerConfig(search_roots=True))
        assert to_absolute_path("lib", "/proj") == str(root / "lib")
