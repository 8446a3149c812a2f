"""ReferenceResolver 测试"""

from __future__ import annotations

import pytest

from repoget.core.exceptions import GetError, GetErrorKind
from repoget.core.resolver import ReferenceResolver


class TestGuessRelative:
    def test_prefers_nearest_root(self) -> None:
        resolver = ReferenceResolver(["/a", "/a/b"], getcwd=lambda: "/a/b/c")
        assert resolver.guess_relative("./d") == "https://c/d"

    def test_parent_segment(self) -> None:
        resolver = ReferenceResolver(["/r"], getcwd=lambda: "/r/github.com/example/repo")
        assert resolver.guess_relative("../other") == "https://github.com/example/other"

    def test_no_matching_root(self) -> None:
        resolver = ReferenceResolver(["/r"], getcwd=lambda: "/home/u")
        assert resolver.guess_relative("./x") is None

    def test_not_relative(self) -> None:
        resolver = ReferenceResolver(["/r"], getcwd=lambda: "/r/github.com")
        assert resolver.guess_relative("example/repo") is None

    def test_getcwd_failure_ignored(self) -> None:
        def boom() -> str:
            raise FileNotFoundError("cwd removed")

        resolver = ReferenceResolver(["/r"], getcwd=boom)
        assert resolver.guess_relative("./x") is None


class TestResolve:
    def test_relative_guess_becomes_https(self) -> None:
        resolver = ReferenceResolver(["/r"], getcwd=lambda: "/r/github.com/example")
        assert str(resolver.resolve("./repo")) == "https://github.com/example/repo"

    def test_unresolved_relative_is_parse_error(self) -> None:
        resolver = ReferenceResolver(["/r"], getcwd=lambda: "/tmp")
        with pytest.raises(GetError) as exc:
            resolver.resolve("./repo")
        assert exc.value.kind is GetErrorKind.PARSE
        assert exc.value.target == "./repo"
        assert "./repo" in str(exc.value)

    def test_ssh_preference(self) -> None:
        resolver = ReferenceResolver(["/r"], ssh=True)
        assert str(resolver.resolve("example/repo")) == "ssh://git@github.com/example/repo"

    def test_ssh_conversion_failure(self) -> None:
        resolver = ReferenceResolver(["/r"], ssh=True)
        with pytest.raises(GetError) as exc:
            resolver.resolve("svn://svn.example.org/proj")
        assert exc.value.kind is GetErrorKind.SSH_CONVERT
        assert exc.value.code == "SSH_CONVERT"

    def test_default_user(self) -> None:
        resolver = ReferenceResolver(["/r"], default_user="octocat")
        assert str(resolver.resolve("dotfiles")) == "https://github.com/octocat/dotfiles"
