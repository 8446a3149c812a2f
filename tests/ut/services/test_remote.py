"""远程仓库适配测试"""

from __future__ import annotations

import pytest

from repoget.core.url import parse_repo_url
from repoget.services.remote import (
    BitbucketRepository,
    GitHubRepository,
    OtherRepository,
    new_remote_repository,
)
from repoget.services.vcs import VCSKind


class TestFactory:
    @pytest.mark.parametrize("ref, cls", [
        ("github.com/a/b", GitHubRepository),
        ("https://www.github.com/a/b", GitHubRepository),
        ("git@github.com:a/b.git", GitHubRepository),
        ("bitbucket.org/a/b", BitbucketRepository),
        ("example.org/a/b", OtherRepository),
    ])
    def test_selects_by_host(self, ref, cls) -> None:
        assert isinstance(new_remote_repository(parse_repo_url(ref)), cls)


class TestGitHubRepository:
    def test_valid(self) -> None:
        assert GitHubRepository(parse_repo_url("example/repo")).is_valid()

    @pytest.mark.parametrize("ref", [
        "https://github.com/example",
        "https://github.com/settings/profile",
        "https://github.com/explore/repos",
    ])
    def test_invalid(self, ref: str) -> None:
        assert not GitHubRepository(parse_repo_url(ref)).is_valid()

    def test_vcs_trims_subpath(self) -> None:
        remote = GitHubRepository(parse_repo_url("https://github.com/example/repo/tree/main/docs"))
        backend, fetch = remote.vcs()
        assert backend is not None and backend.kind is VCSKind.GIT
        assert str(fetch) == "https://github.com/example/repo"

    def test_vcs_keeps_ssh(self) -> None:
        remote = GitHubRepository(parse_repo_url("git@github.com:example/repo.git"))
        _, fetch = remote.vcs()
        assert str(fetch) == "ssh://git@github.com/example/repo.git"


class TestBitbucketRepository:
    def test_git(self) -> None:
        remote = BitbucketRepository(parse_repo_url("bitbucket.org/team/proj"))
        assert remote.is_valid()
        backend, fetch = remote.vcs()
        assert backend is not None and backend.kind is VCSKind.GIT
        assert fetch == remote.url()

    def test_invalid(self) -> None:
        assert not BitbucketRepository(parse_repo_url("https://bitbucket.org/team")).is_valid()


class TestOtherRepository:
    @pytest.mark.parametrize("ref, kind", [
        ("svn://svn.example.org/proj", VCSKind.SUBVERSION),
        ("svn+ssh://svn.example.org/proj", VCSKind.SUBVERSION),
        ("git://example.org/proj", VCSKind.GIT),
        ("example.org/team/proj.git", VCSKind.GIT),
        ("example.org/team/proj.hg", VCSKind.MERCURIAL),
    ])
    def test_guess_without_probe(self, fake_executor, ref, kind) -> None:
        backend, _ = OtherRepository(parse_repo_url(ref), fake_executor).vcs()
        assert backend is not None and backend.kind is kind
        assert fake_executor.calls == []

    def test_probe_git(self, fake_executor) -> None:
        remote = OtherRepository(parse_repo_url("example.org/team/proj"), fake_executor)
        backend, fetch = remote.vcs()
        assert backend is not None and backend.kind is VCSKind.GIT
        assert fetch == remote.url()
        assert fake_executor.commands() == [["git", "ls-remote", "https://example.org/team/proj"]]

    def test_probe_falls_through_to_hg(self, make_executor) -> None:
        ex = make_executor(fail=("git ls-remote",))
        backend, _ = OtherRepository(parse_repo_url("example.org/team/proj"), ex).vcs()
        assert backend is not None and backend.kind is VCSKind.MERCURIAL

    def test_probe_nothing(self, make_executor) -> None:
        ex = make_executor(fail=("git ls-remote", "hg identify", "svn info"))
        remote = OtherRepository(parse_repo_url("example.org/team/proj"), ex)
        backend, fetch = remote.vcs()
        assert backend is None
        assert fetch == remote.url()

    def test_always_valid(self) -> None:
        assert OtherRepository(parse_repo_url("example.org/x")).is_valid()
