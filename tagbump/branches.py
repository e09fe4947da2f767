"""Classify branch names by their naming convention."""

import enum
import re

from typing import Mapping, Optional, Sequence


class Category(str, enum.Enum):
    """The intent of a branch, as encoded in its name."""

    BUGFIX = "bugfix"
    FEATURE = "feature"
    MAJOR = "major"
    HOTFIX = "hotfix"
    DOCS = "docs"
    MISC = "misc"
    RESYNC = "resync"
    NONE = "none"


# Accepts the historical pluralized prefixes as well (`hotfixes/`, ...)
DEFAULT_CONVENTIONS: Mapping[Category, Sequence[str]] = {
    Category.BUGFIX: ("bugfix", "bugfixes"),
    Category.DOCS: ("doc", "docs"),
    Category.FEATURE: ("feature", "features"),
    Category.MAJOR: ("major",),
    Category.MISC: ("misc",),
    Category.HOTFIX: ("hotfix", "hotfixes"),
    Category.RESYNC: ("resync",),
}

STRICT_CONVENTIONS: Mapping[Category, Sequence[str]] = {
    Category.BUGFIX: ("bugfix",),
    Category.DOCS: ("docs",),
    Category.FEATURE: ("feature",),
    Category.MAJOR: ("major",),
    Category.MISC: ("misc",),
    Category.HOTFIX: ("hotfix",),
    Category.RESYNC: ("resync",),
}

CONVENTION_SETS = {
    "default": DEFAULT_CONVENTIONS,
    "strict": STRICT_CONVENTIONS,
}


class BranchClassifier:
    """Match branch names against a fixed set of prefix patterns."""

    def __init__(
        self, conventions: Optional[Mapping[Category, Sequence[str]]] = None
    ):
        if conventions is None:
            conventions = DEFAULT_CONVENTIONS

        self.patterns: tuple[tuple[Category, re.Pattern], ...] = tuple(
            (
                category,
                re.compile(
                    rf"^(?:{'|'.join(re.escape(kw) for kw in keywords)})/.+",
                    flags=re.IGNORECASE,
                ),
            )
            for category, keywords in conventions.items()
            if keywords
        )

    def classify(self, branch_name: str) -> Category:
        """Return the category of the branch, or Category.NONE."""
        for category, pattern in self.patterns:
            if pattern.match(branch_name):
                return category

        return Category.NONE


DEFAULT_CLASSIFIER = BranchClassifier()


def classify(branch_name: str) -> Category:
    """Classify a branch name with the default conventions."""
    return DEFAULT_CLASSIFIER.classify(branch_name)
