"""Shared fixtures and an in-memory stand-in for git."""

import os

from typing import Optional

import pytest

from tagbump.git import GitLookupError, VersionControl
from tagbump.params import Params
from tagbump.utils import tag_to_semver


class FakeVersionControl(VersionControl):
    """A VersionControl answering from canned values."""

    def __init__(
        self,
        branch: str = "develop",
        source: str = "feature/some",
        latest: Optional[str] = None,
        ancestors: Optional[dict[str, str]] = None,
        repo: bool = True,
        root: str = "",
    ):
        self.branch = branch
        self.source = source
        self.latest = latest
        # Maps the include glob to the tag `git describe` would find
        self.ancestors = ancestors or {}
        self.repo = repo
        self.root = root

        self.ancestor_calls: list[tuple[str, str, str]] = []
        self.ancestor_error: Optional[Exception] = None

    def is_repo(self) -> bool:
        return self.repo

    def current_branch(self) -> str:
        if not self.branch:
            raise GitLookupError("could not get current branch: error")
        return self.branch

    def source_branch(self, commit: str) -> str:
        if not self.source:
            raise GitLookupError("no source branch found")
        return self.source

    def latest_tag(self, prefix: str):
        if self.latest is None:
            return None
        return tag_to_semver(self.latest, prefix)

    def ancestor_tag(self, include: str, exclude: str, branch: str, prefix: str = ""):
        self.ancestor_calls.append((include, exclude, branch))

        if self.ancestor_error is not None:
            raise self.ancestor_error

        if tag := self.ancestors.get(include):
            return tag_to_semver(tag, prefix)
        return None

    def root_commit(self, branch: str) -> str:
        if not self.root:
            raise GitLookupError(f"could not get root commit: `{branch}` is empty")
        return self.root


@pytest.fixture(name="params")
def dry_run_params() -> Params:
    """Default parameters for a dry run."""
    return Params(dry_run=True)


@pytest.fixture(name="clean_env")
def clean_environment(monkeypatch):
    """Remove any GitHub Actions inputs inherited from the environment."""
    for key in list(os.environ):
        if key.startswith(("INPUT_", "GITHUB_")):
            monkeypatch.delenv(key)

    return monkeypatch


@pytest.fixture(name="make_vcs")
def vcs_factory():
    """Return the FakeVersionControl class for building git stand-ins."""
    return FakeVersionControl
