"""Load the generate parameters from the GitHub Actions environment."""

import argparse
import os
import re

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import semver

from .branches import CONVENTION_SETS
from .strategy import AUTO, parse_bump
from .utils import ConfigurationError, TagParseError, str_to_bool, tag_to_semver


COMMIT_SHA_PATTERN = re.compile(r"^[0-9a-f]{5,40}$")
PRERELEASE_ID_PATTERN = re.compile(r"^[0-9A-Za-z-]+$")


def get_input(name: str) -> str:
    """Return the stripped value of the named action input, or ""."""
    env_name = "INPUT_" + name.replace(" ", "_").upper()
    return os.environ.get(env_name, "").strip()


def get_bool_input(name: str, default: bool = False) -> bool:
    """Return the named action input as a boolean."""
    if not (value := get_input(name)):
        return default

    try:
        return str_to_bool(value)
    except argparse.ArgumentTypeError as err:
        raise ConfigurationError(f"invalid {name} argument: {value}") from err


@dataclass
class Params:
    """Parameters of a single generate run."""

    # pylint: disable=too-many-instance-attributes
    commit_sha: str = "HEAD"
    bump: str = AUTO
    base_version: Optional[semver.version.Version] = None
    prefix: str = "v"
    prerelease_id: str = "pre"
    main_branch_name: str = "master"
    develop_branch_name: str = "develop"
    branch_conventions: str = "default"
    tag_message: str = "auto tag"
    auth_token: str = ""
    owner_repo: str = ""
    repo_dir: Path = Path(".")
    dry_run: bool = False
    debug: bool = False

    def __post_init__(self):
        if self.commit_sha != "HEAD" and not COMMIT_SHA_PATTERN.match(self.commit_sha):
            raise ConfigurationError(f"invalid commit-sha format: {self.commit_sha}")

        parse_bump(self.bump)

        if not PRERELEASE_ID_PATTERN.match(self.prerelease_id):
            raise ConfigurationError(
                f"invalid prerelease_id format: {self.prerelease_id}"
            )

        if self.branch_conventions not in CONVENTION_SETS:
            raise ConfigurationError(
                f"invalid branch_conventions value: {self.branch_conventions}"
            )

        if not self.dry_run:
            if not self.auth_token:
                raise ConfigurationError("auth_token is required when dry_run is false")

            if self.commit_sha == "HEAD":
                raise ConfigurationError("GITHUB_SHA is required when dry_run is false")

            if not re.match(r"^[^/]+/[^/]+$", self.owner_repo):
                raise ConfigurationError(
                    f"invalid repository `{self.owner_repo}`, expected owner/repo"
                )

    @classmethod
    def from_environment(cls, repo_dir: Optional[Path] = None):
        """Parse the Params from the environment."""
        kwargs = {
            "bump": get_input("bump") or AUTO,
            "prefix": get_input("prefix") or "v",
            "prerelease_id": get_input("prerelease_id") or "pre",
            "main_branch_name": get_input("main_branch_name") or "master",
            "develop_branch_name": get_input("develop_branch_name") or "develop",
            "branch_conventions": get_input("branch_conventions") or "default",
            "tag_message": get_input("tag_message") or "auto tag",
            "auth_token": get_input("auth_token"),
            "owner_repo": os.environ.get("GITHUB_REPOSITORY", "").strip(),
            "repo_dir": repo_dir or Path(get_input("repo_dir") or "."),
            "dry_run": get_bool_input("dry_run"),
            "debug": get_bool_input("debug"),
        }

        if commit_sha := os.environ.get("GITHUB_SHA", "").strip():
            kwargs["commit_sha"] = commit_sha

        if base_version_str := get_input("base_version"):
            try:
                kwargs["base_version"] = tag_to_semver(
                    base_version_str, kwargs["prefix"]
                )
            except TagParseError as err:
                raise ConfigurationError(
                    f"invalid base_version format: {base_version_str}"
                ) from err

        return cls(**kwargs)

    def __str__(self):
        return (
            f"commit sha: {self.commit_sha!r}, bump: {self.bump!r},"
            f" base version: {str(self.base_version or '')!r},"
            f" prefix: {self.prefix!r}, prerelease id: {self.prerelease_id!r},"
            f" main branch: {self.main_branch_name!r},"
            f" develop branch: {self.develop_branch_name!r},"
            f" branch conventions: {self.branch_conventions!r},"
            f" tag message: {self.tag_message!r}, repository: {self.owner_repo},"
            f" repo dir: {self.repo_dir}, dry run: {self.dry_run},"
            f" debug: {self.debug}"
        )
