"""Read-only queries against the git history."""

import abc
import re
import subprocess

from pathlib import Path
from typing import Optional

import semver

from .logging import LoggingMixin
from .utils import tag_to_semver


MERGE_PR_PATTERN = re.compile(r"Merge pull request #\d+ from (?P<source>.*)")

# What `git describe` says when there is simply no matching tag
NO_TAG_PATTERN = re.compile(
    r"No names found|No tags can describe|cannot describe anything",
    flags=re.IGNORECASE,
)


class GitLookupError(LookupError):
    """Exception indicating that a version-control query failed."""


def clean_output(output: str) -> str:
    """Strip surrounding whitespace and single quotes from git output."""
    return output.strip().strip("'")


def parse_source_branch(message: str) -> str:
    """
    Return the source branch named by a pull request merge commit message.

    The expected format is `Merge pull request #<n> from <owner>/<branch>`,
    and the branch is everything after the owner.
    """
    match = MERGE_PR_PATTERN.search(message)

    if not match or not (source := match["source"].strip()):
        raise GitLookupError("no source branch found")

    _, sep, branch = source.partition("/")

    if not sep or not branch:
        raise GitLookupError(
            f"commit message does not contain expected format: {source}"
        )

    return branch


class VersionControl(abc.ABC):
    """The queries needed to compute the next version."""

    @abc.abstractmethod
    def is_repo(self) -> bool:
        """Return True if the working directory is a repository."""

    @abc.abstractmethod
    def current_branch(self) -> str:
        """Return the name of the checked-out branch."""

    @abc.abstractmethod
    def source_branch(self, commit: str) -> str:
        """Return the branch merged by the given commit."""

    @abc.abstractmethod
    def latest_tag(self, prefix: str) -> Optional[semver.version.Version]:
        """Return the most recent tag reachable from HEAD, if any."""

    @abc.abstractmethod
    def ancestor_tag(
        self, include: str, exclude: str, branch: str, prefix: str = ""
    ) -> Optional[semver.version.Version]:
        """Return the nearest tag on `branch` matching the glob patterns, if any."""

    @abc.abstractmethod
    def root_commit(self, branch: str) -> str:
        """Return the hash of the first commit of `branch`."""


class Git(VersionControl, LoggingMixin):
    """VersionControl implementation calling the git executable."""

    def __init__(self, repo_dir: Path):
        super().__init__()
        self.repo_dir = repo_dir

    def run(self, *args: str) -> str:
        """Run a git command and return its cleaned output."""
        self.logger.debug("Running `git %s`", " ".join(args))

        try:
            output = subprocess.run(
                ["git", *args],
                cwd=self.repo_dir,
                capture_output=True,
                check=True,
            ).stdout.decode("utf-8")
        except subprocess.CalledProcessError as err:
            stderr = (err.stderr or b"").decode("utf-8").strip()
            raise GitLookupError(stderr or str(err)) from err
        except OSError as err:
            raise GitLookupError(f"could not run git: {err}") from err

        return clean_output(output)

    def _first_line(self, *args: str) -> str:
        """
        Return the first line of output.

        An empty string means git found no tag. Any other failure raises
        GitLookupError.
        """
        try:
            output = self.run(*args)
        except GitLookupError as err:
            if not NO_TAG_PATTERN.search(str(err)):
                raise
            self.logger.debug("`git %s` found nothing: %s", " ".join(args), err)
            return ""

        return output.partition("\n")[0].strip()

    def is_repo(self) -> bool:
        try:
            return self.run("rev-parse", "--is-inside-work-tree") == "true"
        except GitLookupError:
            return False

    def current_branch(self) -> str:
        try:
            branch = self.run("rev-parse", "--abbrev-ref", "HEAD", "--quiet")
        except GitLookupError as err:
            raise GitLookupError(f"could not get current branch: {err}") from err

        if not branch or branch == "HEAD":
            raise GitLookupError("could not get current branch: HEAD is detached")

        return branch

    def source_branch(self, commit: str) -> str:
        try:
            message = self.run("log", "-1", "--pretty=%B", commit)
        except GitLookupError as err:
            raise GitLookupError(f"could not get message from commit: {err}") from err

        return parse_source_branch(message)

    def latest_tag(self, prefix: str) -> Optional[semver.version.Version]:
        # Prefer a tag on HEAD itself, then the closest ancestor tag
        for args in (
            ("tag", "--points-at", "HEAD", "--sort", "-version:creatordate"),
            ("describe", "--tags", "--abbrev=0"),
        ):
            try:
                tag = self._first_line(*args)
            except GitLookupError as err:
                raise GitLookupError(f"could not get latest tag: {err}") from err

            if tag:
                self.logger.debug("Latest tag is `%s`", tag)
                return tag_to_semver(tag, prefix)

        self.logger.info("No tags found")
        return None

    def root_commit(self, branch: str) -> str:
        try:
            output = self.run("rev-list", "--max-parents=0", branch)
        except GitLookupError as err:
            raise GitLookupError(f"could not get root commit: {err}") from err

        if not (root := output.partition("\n")[0].strip()):
            raise GitLookupError(f"could not get root commit: `{branch}` is empty")

        return root

    def ancestor_tag(
        self, include: str, exclude: str, branch: str, prefix: str = ""
    ) -> Optional[semver.version.Version]:
        patterns = ["--match", include]
        if exclude:
            patterns.extend(["--exclude", exclude])

        tag = self._first_line("describe", "--tags", "--abbrev=0", *patterns, branch)

        if not tag:
            self.logger.debug("No tag on `%s` matches `%s`", branch, include)
            return None

        return tag_to_semver(tag, prefix)
