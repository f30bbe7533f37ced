"""Tests for POSIX path helpers."""

import pytest

from commonjs_resolver.paths import has_extension
from commonjs_resolver.paths import node_modules_paths
from commonjs_resolver.paths import posix_resolve
from commonjs_resolver.paths import replace_back_slashes
from commonjs_resolver.paths import to_module_id


class TestReplaceBackSlashes:
    def test_converts_windows_separators(self):
        assert replace_back_slashes("lib\\helpers\\index.js") == "lib/helpers/index.js"

    def test_leaves_posix_paths_alone(self):
        assert replace_back_slashes("lib/util.js") == "lib/util.js"

    def test_extended_length_path_passes_through(self):
        path = "\\\\?\\C:\\projects\\app\\index.js"
        assert replace_back_slashes(path) == path

    def test_non_ascii_path_passes_through(self):
        path = "lib\\café\\index.js"
        assert replace_back_slashes(path) == path


class TestPosixResolve:
    @pytest.mark.parametrize(
        "segments,expected",
        [
            (("/project/sub", "../util"), "/project/util"),
            (("/project", "./util"), "/project/util"),
            (("/a", "/b/c"), "/b/c"),
            (("/", ".."), "/"),
            (("lib", "./x"), "/lib/x"),
            (("/a/", "./b/"), "/a/b"),
            (("/pkg", "."), "/pkg"),
            ((), "/"),
        ],
    )
    def test_resolves_like_node(self, segments, expected):
        assert posix_resolve(*segments) == expected

    def test_collapses_leading_double_slash(self):
        assert posix_resolve("//node_modules", "x") == "/node_modules/x"


class TestHasExtension:
    @pytest.mark.parametrize(
        "request_,expected",
        [
            ("./util", False),
            ("./util.js", True),
            (".", False),
            ("..", False),
            ("../lib", False),
            ("lodash", False),
            ("./jquery.min", True),
        ],
    )
    def test_detects_extension(self, request_, expected):
        assert has_extension(request_) is expected


class TestToModuleId:
    @pytest.mark.parametrize(
        "resolved,expected",
        [
            ("/lib/util.js", "/lib/util"),
            ("/lib/data.json", "/lib/data"),
            ("/vendor/jquery.min.js", "/vendor/jquery.min"),
            ("/index.js", "/index"),
            ("/lib/.hidden", "/lib/.hidden"),
            ("/lib/util", "/lib/util"),
            ("alloy/backbone.js", "alloy/backbone"),
        ],
    )
    def test_strips_extension(self, resolved, expected):
        assert to_module_id(resolved) == expected


class TestNodeModulesPaths:
    def test_nearest_first(self):
        assert node_modules_paths("/project/sub") == [
            "/project/sub/node_modules",
            "/project/node_modules",
            "/node_modules",
        ]

    def test_root(self):
        assert node_modules_paths("/") == ["/node_modules"]

    def test_skips_node_modules_segments(self):
        assert node_modules_paths("/a/node_modules/b") == [
            "/a/node_modules/b/node_modules",
            "/a/node_modules",
            "/node_modules",
        ]

    def test_never_nests_node_modules(self):
        for candidate in node_modules_paths("/a/node_modules/node_modules/b"):
            assert not candidate.endswith("node_modules/node_modules")

    def test_relative_start_is_rooted(self):
        assert node_modules_paths("project") == ["/project/node_modules", "/node_modules"]
