"""Tests for the tag formatting helpers."""

import argparse
import contextlib

import pytest
from semver import Version

from tagbump.utils import (
    TagParseError,
    str_to_bool,
    tag_to_semver,
    version_to_final_tag_str,
    version_to_tag_str,
)


@pytest.mark.parametrize(
    "version,prefix,tag",
    [
        (Version(1, 2, 3), "v", "v1.2.3"),
        (Version.parse("1.2.3-pre.1"), "v", "v1.2.3-pre.1"),
        (Version.parse("1.2.3-pre.1+build.7"), "", "1.2.3-pre.1+build.7"),
        (Version(0, 0, 0), "release-", "release-0.0.0"),
    ],
)
def test_version_to_tag_str(version, prefix, tag):
    """Test rendering a version as a tag."""
    assert version_to_tag_str(version, prefix) == tag


@pytest.mark.parametrize(
    "version,tag",
    [
        ("1.2.3", "v1.2.3"),
        ("1.2.3-pre.1", "v1.2.3"),
        ("1.2.3+build.7", "v1.2.3"),
        ("1.2.3-rc.2+build.7", "v1.2.3"),
    ],
)
def test_version_to_final_tag_str(version, tag):
    """Test that finalized tags drop the prerelease and build metadata."""
    assert version_to_final_tag_str(Version.parse(version)) == tag


@pytest.mark.parametrize(
    "tag,prefix,expectation",
    [
        ("v1.2.3", "v", contextlib.nullcontext(Version(1, 2, 3))),
        ("1.2.3", "v", contextlib.nullcontext(Version(1, 2, 3))),
        ("release-1.0.0-pre.2", "release-", contextlib.nullcontext(Version.parse("1.0.0-pre.2"))),
        ("v2", "v", pytest.raises(TagParseError)),
        ("vnext", "v", pytest.raises(TagParseError)),
        ("v1.2.3", "", pytest.raises(TagParseError)),
    ],
)
def test_tag_to_semver(tag, prefix, expectation):
    """Test parsing tags into versions."""
    with expectation as expected:
        assert tag_to_semver(tag, prefix) == expected


@pytest.mark.parametrize(
    "version", ["0.0.0", "1.0.0-pre.1", "2.10.3-alpha.12", "1.0.0-rc.1+sha.5114f85"]
)
@pytest.mark.parametrize("prefix", ["v", "", "release/"])
def test_round_trip(version, prefix):
    """Test that a rendered tag parses back into the same version."""
    parsed = Version.parse(version)

    assert tag_to_semver(version_to_tag_str(parsed, prefix), prefix) == parsed


def test_parse_error_is_value_error():
    """Test that TagParseError can be handled as a ValueError."""
    with pytest.raises(ValueError):
        tag_to_semver("v1")


@pytest.mark.parametrize(
    "value,expectation",
    [
        ("true", contextlib.nullcontext(True)),
        ("YES", contextlib.nullcontext(True)),
        ("1", contextlib.nullcontext(True)),
        ("False", contextlib.nullcontext(False)),
        ("n", contextlib.nullcontext(False)),
        ("maybe", pytest.raises(argparse.ArgumentTypeError)),
    ],
)
def test_str_to_bool(value, expectation):
    """Test the boolean conversion."""
    with expectation as expected:
        assert str_to_bool(value) is expected
