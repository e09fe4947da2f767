"""Create a tag on GitHub."""

import json
import os
import subprocess

from logging import getLogger

from .logging import NOTICE


class RemoteError(Exception):
    """Exception indicating that the tag could not be created on GitHub."""


def gh_api(endpoint: str, fields: dict[str, str], auth_token: str) -> dict:
    """POST the fields to the GitHub API and return the decoded response."""
    args = ["gh", "api", "--method", "POST", endpoint]
    for key, value in fields.items():
        args.extend(["-f", f"{key}={value}"])

    getLogger(__name__).debug("Calling %s", " ".join(args))

    output = subprocess.check_output(
        args,
        env={**os.environ, "GH_TOKEN": auth_token},
        stderr=subprocess.PIPE,
    )
    return json.loads(output)


def _describe(err: Exception) -> str:
    """Return a short description of a failed gh call."""
    if isinstance(err, subprocess.CalledProcessError) and err.stderr:
        return err.stderr.decode("utf-8").strip()
    return str(err)


def create_remote_tag(
    owner_repo: str, commit_sha: str, tag: str, message: str, auth_token: str
):
    """
    Create an annotated tag object and its `refs/tags/` reference.

    Both steps must succeed; a tag object without a reference is still a
    failure.
    """
    logger = getLogger(__name__)

    try:
        tag_object = gh_api(
            f"repos/{owner_repo}/git/tags",
            {"tag": tag, "message": message, "object": commit_sha, "type": "commit"},
            auth_token,
        )
    except (subprocess.CalledProcessError, OSError, ValueError) as err:
        raise RemoteError(f"failed to create tag {tag!r}: {_describe(err)}") from err

    logger.debug("Created tag object %s for %s", tag_object.get("sha"), tag)

    try:
        gh_api(
            f"repos/{owner_repo}/git/refs",
            {"ref": f"refs/tags/{tag}", "sha": tag_object["sha"]},
            auth_token,
        )
    except (subprocess.CalledProcessError, OSError, ValueError, KeyError) as err:
        raise RemoteError(f"failed to push tag {tag!r}: {_describe(err)}") from err

    logger.log(NOTICE, "Tag %s created at %s", tag, commit_sha)
