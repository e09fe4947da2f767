"""Tests for branch name classification."""

import pytest

from tagbump.branches import (
    STRICT_CONVENTIONS,
    BranchClassifier,
    Category,
    classify,
)


@pytest.mark.parametrize(
    "branch,category",
    [
        ("bugfix/some", Category.BUGFIX),
        ("bugfixes/some", Category.BUGFIX),
        ("feature/some", Category.FEATURE),
        ("features/some", Category.FEATURE),
        ("major/some", Category.MAJOR),
        ("hotfix/some", Category.HOTFIX),
        ("hotfixes/some", Category.HOTFIX),
        ("docs/readme", Category.DOCS),
        ("doc/readme", Category.DOCS),
        ("misc/ci", Category.MISC),
        ("resync/master", Category.RESYNC),
        ("feature/nested/name", Category.FEATURE),
        ("develop", Category.NONE),
        ("some-branch", Category.NONE),
        ("feature", Category.NONE),
        ("feature/", Category.NONE),
        ("my-feature/some", Category.NONE),
        ("featurex/some", Category.NONE),
    ],
)
def test_classify(branch, category):
    """Test that branch prefixes map to the expected categories."""
    assert classify(branch) == category
    # Classification is pure
    assert classify(branch) == classify(branch)


@pytest.mark.parametrize(
    "branch", ["Feature/x", "FEATURE/x", "fEaTuRe/x", "Features/x"]
)
def test_classify_ignores_case(branch):
    """Test that prefixes match regardless of case."""
    assert classify(branch) == classify("feature/x") == Category.FEATURE


@pytest.mark.parametrize(
    "branch,category",
    [
        ("feature/x", Category.FEATURE),
        ("features/x", Category.NONE),
        ("hotfix/x", Category.HOTFIX),
        ("hotfixes/x", Category.NONE),
        ("bugfixes/x", Category.NONE),
        ("docs/x", Category.DOCS),
        ("doc/x", Category.NONE),
    ],
)
def test_strict_conventions(branch, category):
    """Test that the strict convention set only accepts singular prefixes."""
    assert BranchClassifier(STRICT_CONVENTIONS).classify(branch) == category


def test_custom_conventions():
    """Test that any convention set can be supplied."""
    classifier = BranchClassifier(
        {Category.FEATURE: ("feat",), Category.HOTFIX: ("fix", "urgent")}
    )

    assert classifier.classify("feat/x") == Category.FEATURE
    assert classifier.classify("urgent/x") == Category.HOTFIX
    assert classifier.classify("feature/x") == Category.NONE
    assert classifier.classify("bugfix/x") == Category.NONE
