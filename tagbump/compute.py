"""Compute the next semantic version tag."""

from dataclasses import dataclass
from logging import getLogger
from typing import Optional

import semver

from .branches import DEFAULT_CLASSIFIER, BranchClassifier, Category
from .git import GitLookupError, VersionControl
from .logging import NOTICE
from .params import Params
from .strategy import BumpDecision, Component, Method
from .utils import TagParseError, version_to_final_tag_str, version_to_tag_str


@dataclass(frozen=True)
class TagRecord:
    """The result of a run."""

    previous_tag: str
    ancestor_tag: str
    semver_tag: str
    is_prerelease: bool

    def outputs(self) -> dict[str, str]:
        """Return the named step outputs."""
        return {
            "PREVIOUS_TAG": self.previous_tag,
            "ANCESTOR_TAG": self.ancestor_tag,
            "SEMVER_TAG": self.semver_tag,
            "IS_PRERELEASE": str(self.is_prerelease).lower(),
        }


def prerelease_glob(prefix: str, prerelease_id: str) -> str:
    """Return the glob matching prerelease tags."""
    return f"{prefix}[0-9]*-{prerelease_id}*"


def find_ancestor_tag(
    vcs: VersionControl, include: str, exclude: str, branch: str, prefix: str
) -> Optional[semver.version.Version]:
    """Return the ancestor tag, logging and returning None on failure."""
    try:
        return vcs.ancestor_tag(include, exclude, branch, prefix)
    except (GitLookupError, TagParseError) as err:
        getLogger(__name__).warning("failed to get ancestor tag: %s", err)
        return None


def find_ancestor_reference(
    vcs: VersionControl, include: str, exclude: str, branch: str, prefix: str
) -> str:
    """Return the ancestor tag, else the root commit of `branch`, else ""."""
    ancestor = find_ancestor_tag(vcs, include, exclude, branch, prefix)
    if ancestor is not None:
        return version_to_tag_str(ancestor, prefix)

    try:
        root = vcs.root_commit(branch)
    except GitLookupError as err:
        getLogger(__name__).warning("failed to get root commit: %s", err)
        return ""

    getLogger(__name__).info("No ancestor tag, using root commit %s", root)
    return root


def increment(
    version: semver.version.Version, decision: BumpDecision
) -> tuple[semver.version.Version, bool]:
    """Apply the numeric bump, returning the new version and whether it changed."""
    if decision.component == Component.MAJOR or decision.method == Method.MAJOR:
        return version.bump_major(), True

    if decision.component == Component.MINOR or decision.method == Method.MINOR:
        return version.bump_minor(), True

    if decision.component == Component.PATCH or decision.method in (
        Method.PATCH,
        Method.HOTFIX,
    ):
        return version.bump_patch(), True

    return version, False


def next_build_number(version: semver.version.Version, bumped: bool) -> int:
    """Return the build counter of the next prerelease."""
    parts = version.prerelease.split(".") if version.prerelease else []

    if not bumped and len(parts) > 1 and parts[1].isdigit():
        return int(parts[1]) + 1

    return 1


def compute_tag(
    decision: BumpDecision,
    base_version: semver.version.Version,
    source_branch: str,
    dest_branch: str,
    params: Params,
    vcs: VersionControl,
    classifier: Optional[BranchClassifier] = None,
) -> TagRecord:
    """Apply the bump decision to the base version."""
    logger = getLogger(__name__)
    prefix = params.prefix

    previous_tag = version_to_tag_str(base_version, prefix)

    version = base_version
    if params.base_version is not None:
        logger.info(
            "Using base version %s instead of %s", params.base_version, version
        )
        version = params.base_version

    version, bumped = increment(version, decision)
    logger.debug("%s -> %s (%s)", previous_tag, version, decision)

    pre_glob = prerelease_glob(prefix, params.prerelease_id)

    # Merging docs or misc changes must not restart a prerelease series that
    # was already tagged on develop
    category = (classifier or DEFAULT_CLASSIFIER).classify(source_branch)
    if (
        category in (Category.DOCS, Category.MISC)
        and dest_branch == params.develop_branch_name
    ):
        ancestor = find_ancestor_tag(vcs, pre_glob, "", dest_branch, prefix)
        if (
            ancestor is not None
            and ancestor.finalize_version() == version.finalize_version()
        ):
            logger.info("Continuing from prerelease ancestor %s", ancestor)
            version = ancestor

    if decision.method in (Method.BUILD, Method.MAJOR, Method.MINOR, Method.PATCH):
        build_number = next_build_number(version, bumped)
        version = version.replace(
            prerelease=f"{params.prerelease_id}.{build_number}"
        )
        semver_tag = version_to_tag_str(version, prefix)
        is_prerelease = bool(version.prerelease)
    else:
        semver_tag = version_to_final_tag_str(version, prefix)
        is_prerelease = False

    if is_prerelease:
        include, exclude = pre_glob, ""
    else:
        include, exclude = f"{prefix}[0-9]*", pre_glob

    ancestor_tag = find_ancestor_reference(vcs, include, exclude, dest_branch, prefix)

    logger.log(NOTICE, "New tag: %s (previous: %s)", semver_tag, previous_tag)

    return TagRecord(
        previous_tag=previous_tag,
        ancestor_tag=ancestor_tag,
        semver_tag=semver_tag,
        is_prerelease=is_prerelease,
    )
