"""Generate the next semantic version tag for a merge."""

import argparse
import logging
import os
import sys

from pathlib import Path
from typing import Optional

import semver

from .branches import CONVENTION_SETS, BranchClassifier
from .compute import TagRecord, compute_tag
from .git import Git, GitLookupError, VersionControl
from .logging import setup_logging
from .params import Params
from .strategy import determine_bump_strategy
from .tag import RemoteError, create_remote_tag
from .utils import ConfigurationError, TagParseError


DEFAULT_VERSION = semver.Version(0, 0, 0)


def run(params: Params, vcs: Optional[VersionControl] = None) -> TagRecord:
    """Compute the next tag and, unless this is a dry run, create it."""
    logger = logging.getLogger(__name__)
    logger.debug(str(params))

    if vcs is None:
        vcs = Git(params.repo_dir)

    if not vcs.is_repo():
        raise GitLookupError("current folder is not a git repository")

    dest = vcs.current_branch()
    source = vcs.source_branch(params.commit_sha)
    logger.debug("source branch: %r, dest branch: %r", source, dest)

    classifier = BranchClassifier(CONVENTION_SETS[params.branch_conventions])

    decision = determine_bump_strategy(
        params.bump,
        source,
        dest,
        params.main_branch_name,
        params.develop_branch_name,
        classifier,
    )
    logger.debug("method: %r, version: %r", decision.method, decision.component)

    base_version = vcs.latest_tag(params.prefix)
    if base_version is None:
        logger.info("No previous tag, starting from %s", DEFAULT_VERSION)
        base_version = DEFAULT_VERSION

    record = compute_tag(decision, base_version, source, dest, params, vcs, classifier)

    if not params.dry_run:
        create_remote_tag(
            params.owner_repo,
            params.commit_sha,
            record.semver_tag,
            params.tag_message,
            params.auth_token,
        )

    return record


def write_outputs(record: TagRecord, output_file: Optional[Path] = None):
    """Append the step outputs to the GitHub output file, or print them."""
    logger = logging.getLogger(__name__)

    lines = []
    for key, value in record.outputs().items():
        logger.info("%s: %s", key, value)
        lines.append(f"{key}={value}\n")

    if output_file is None:
        sys.stdout.writelines(lines)
        return

    with output_file.open(mode="a", encoding="utf-8") as outfile:
        outfile.writelines(lines)


def entrypoint():
    """Main entrypoint for this module."""
    setup_logging()

    parser = argparse.ArgumentParser()
    parser.add_argument("repo_dir", type=Path, nargs="?")

    args = parser.parse_args()

    try:
        params = Params.from_environment(args.repo_dir)
        setup_logging(params.debug)

        record = run(params)
    except (ConfigurationError, GitLookupError, TagParseError, RemoteError) as err:
        logging.getLogger(__name__).error("failed to generate semver version: %s", err)
        sys.exit(1)

    github_output = os.environ.get("GITHUB_OUTPUT")
    try:
        write_outputs(record, Path(github_output) if github_output else None)
    except OSError as err:
        logging.getLogger(__name__).error("failed to write outputs: %s", err)
        sys.exit(1)


if __name__ == "__main__":
    entrypoint()
