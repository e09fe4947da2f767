"""Utility functions."""

import argparse

import semver


class ConfigurationError(Exception):
    """Exception indicating invalid inputs, raised before touching git."""


class TagParseError(ValueError):
    """Exception indicating that a tag is not a semantic version."""


def tag_to_semver(tag: str, prefix: str = "v") -> semver.version.Version:
    """
    Return the Version associated with this git tag.

    The prefix is optional: tags without it are parsed as-is. Raises
    TagParseError for invalid tags.
    """
    version_str = tag.removeprefix(prefix) if prefix else tag

    try:
        return semver.Version.parse(version_str)
    except (ValueError, TypeError) as err:
        raise TagParseError(
            f'failed to parse tag "{version_str}" or not valid semantic version: {err}'
        ) from err


def version_to_tag_str(version: semver.version.Version, prefix: str = "v") -> str:
    """Return the git tag associated with this version."""
    return f"{prefix}{version}"


def version_to_final_tag_str(version: semver.version.Version, prefix: str = "v") -> str:
    """Return the git tag of this version without prerelease or build parts."""
    return version_to_tag_str(version.finalize_version(), prefix)


def str_to_bool(value: str) -> bool:
    """Convert a string to a boolean (case-insensitive)."""
    truthy_values = {"true", "t", "yes", "y", "1"}
    falsey_values = {"false", "f", "no", "n", "0"}

    # Normalize input to lowercase
    value = value.lower()

    if value in truthy_values:
        return True

    if value in falsey_values:
        return False

    raise argparse.ArgumentTypeError(f"Invalid boolean value: '{value}'")
