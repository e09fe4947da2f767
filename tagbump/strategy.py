"""Decide how to bump the version from the branches being merged."""

import enum

from dataclasses import dataclass
from typing import Optional

from .branches import DEFAULT_CLASSIFIER, BranchClassifier, Category
from .utils import ConfigurationError


AUTO = "auto"


class Method(str, enum.Enum):
    """The coarse action applied to a version."""

    BUILD = "build"
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    HOTFIX = "hotfix"
    FINAL = "final"


class Component(str, enum.Enum):
    """The numeric field of a version to increment."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


@dataclass(frozen=True)
class BumpDecision:
    """The bump method and the optional component to increment."""

    method: Method
    component: Optional[Component] = None


# (source category, destination, decision) - the first match wins. The
# destination is either "develop" or "main" and resolves to the configured
# branch name.
RULES = (
    (Category.BUGFIX, "develop", BumpDecision(Method.BUILD, Component.PATCH)),
    (Category.DOCS, "develop", BumpDecision(Method.BUILD)),
    (Category.FEATURE, "develop", BumpDecision(Method.BUILD, Component.MINOR)),
    (Category.MAJOR, "develop", BumpDecision(Method.BUILD, Component.MAJOR)),
    (Category.MISC, "develop", BumpDecision(Method.BUILD)),
    (Category.HOTFIX, "main", BumpDecision(Method.HOTFIX)),
    (Category.RESYNC, "develop", BumpDecision(Method.BUILD, Component.PATCH)),
)


def parse_bump(bump: str) -> str:
    """Validate an explicit bump value, returning it unchanged."""
    if bump != AUTO and bump not in {method.value for method in Method}:
        raise ConfigurationError(f"invalid bump value: {bump}")

    return bump


def determine_bump_strategy(
    bump: str,
    source_branch: str,
    dest_branch: str,
    main_branch_name: str,
    develop_branch_name: str,
    classifier: Optional[BranchClassifier] = None,
) -> BumpDecision:
    """
    Return the strategy for bumping the version.

    Any bump other than `auto` is used directly without looking at the
    branches. Otherwise the source branch name and the destination branch
    select the strategy.
    """
    if bump != AUTO:
        return BumpDecision(Method(parse_bump(bump)))

    category = (classifier or DEFAULT_CLASSIFIER).classify(source_branch)
    targets = {"develop": develop_branch_name, "main": main_branch_name}

    for rule_category, target, decision in RULES:
        if category == rule_category and dest_branch == targets[target]:
            return decision

    if source_branch == develop_branch_name and dest_branch == main_branch_name:
        return BumpDecision(Method.FINAL)

    return BumpDecision(Method.BUILD)
