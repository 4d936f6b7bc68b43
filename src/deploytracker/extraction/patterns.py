"""Identifier extraction from commit messages and branch names.

Each convention is a named :class:`ExtractionPattern`. Patterns hold no state
and never raise on odd input: an empty, missing or unrecognised text simply
yields nothing. Callers combine the results by unioning.
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Pattern, Sequence

from deploytracker.models.config import DEFAULT_REMOTES


@dataclass(frozen=True)
class ExtractionPattern:
    """A named text-matching rule.

    Attributes:
        name: Identifier used in logs and the ``inspect`` command
        regex: Pattern whose ``group`` holds the captured value
        group: Capture group to return
        items: Optional sub-pattern applied to the captured text; every
            match of it is returned instead of the captured text itself
        first_only: Stop after the first match
    """

    name: str
    regex: Pattern[str]
    group: int = 1
    items: Optional[Pattern[str]] = None
    first_only: bool = False

    def extract(self, text: Optional[str]) -> List[str]:
        """Return every value this rule finds in ``text``, in order of appearance."""
        if not text:
            return []

        values: List[str] = []
        for match in self.regex.finditer(text):
            captured = match.group(self.group)
            if self.items is not None:
                values.extend(self.items.findall(captured))
            else:
                values.append(captured)
            if self.first_only:
                break
        return values


# "Related work items: #4350, #4351" as appended by Azure DevOps on PR completion
RELATED_WORK_ITEMS = ExtractionPattern(
    name="related_work_items",
    regex=re.compile(r"Related work items:\s*(#\d+(?:[\s,]*#\d+)*)"),
    items=re.compile(r"#(\d+)"),
)

# Azure Boards mentions anywhere in the text
AZURE_BOARDS_MENTION = ExtractionPattern(
    name="azure_boards_mention",
    regex=re.compile(r"AB#(\d+)"),
)

MERGED_PR = ExtractionPattern(
    name="merged_pr",
    regex=re.compile(r"Merged PR (\d+):", re.IGNORECASE),
    first_only=True,
)

# hotfix/4350/shop-checkout, feature/12
BRANCH_WORK_ITEM = ExtractionPattern(
    name="branch_work_item",
    regex=re.compile(r"(?:^|/)(?:hotfix|fix|chore|feat|feature)/(\d+)(?:/|$)"),
    first_only=True,
)

MERGE_BRANCH = ExtractionPattern(
    name="merge_branch",
    regex=re.compile(r"Merge (?:remote-tracking )?branch ['\"]([^'\"]+)['\"]"),
)

# "Merged PR 12: from origin/feature/login"
FROM_BRANCH = ExtractionPattern(
    name="from_branch",
    regex=re.compile(r"\bfrom\s+([^/\s]+/[^\s'\"]+)"),
)

PROVENANCE_BRANCH_RE = re.compile(r"^(feature|fix|hotfix|chore|feat)/")

WORK_ITEM_PATTERNS = (RELATED_WORK_ITEMS, AZURE_BOARDS_MENTION)
BRANCH_PATTERNS = (MERGE_BRANCH, FROM_BRANCH)
ALL_PATTERNS = (*WORK_ITEM_PATTERNS, MERGED_PR, BRANCH_WORK_ITEM, *BRANCH_PATTERNS)


def unique(values: Iterable[str]) -> List[str]:
    """Deduplicate by exact string equality, keeping first-seen order."""
    return list(dict.fromkeys(values))


def strip_remote(name: str, remotes: Sequence[str] = DEFAULT_REMOTES) -> str:
    """Drop a leading ``<remote>/`` from a branch name."""
    for remote in remotes:
        prefix = f"{remote}/"
        if name.startswith(prefix):
            return name[len(prefix):]
    return name


def extract_work_items(message: Optional[str]) -> List[str]:
    """Work item IDs referenced in a commit message."""
    found: List[str] = []
    for pattern in WORK_ITEM_PATTERNS:
        found.extend(pattern.extract(message))
    return unique(found)


def extract_pull_request(message: Optional[str]) -> Optional[str]:
    """Pull request ID from a ``Merged PR <n>:`` message, first match only."""
    matches = MERGED_PR.extract(message)
    return matches[0] if matches else None


def extract_branch_work_items(branch: Optional[str]) -> List[str]:
    """Work item ID encoded in a branch name such as ``fix/123/login``."""
    return BRANCH_WORK_ITEM.extract(branch)


def extract_merge_branches(
    message: Optional[str], remotes: Sequence[str] = DEFAULT_REMOTES
) -> List[str]:
    """Source branch names mentioned in a merge commit message.

    Results are concatenated across conventions and may contain duplicates.
    """
    branches: List[str] = []
    for pattern in BRANCH_PATTERNS:
        branches.extend(strip_remote(name, remotes) for name in pattern.extract(message))
    return branches


def is_provenance_branch(name: str) -> bool:
    """Whether a branch name follows a work-branch convention (feature/, fix/, ...)."""
    return bool(PROVENANCE_BRANCH_RE.match(name))


def filter_provenance_branches(names: Iterable[str]) -> List[str]:
    """Keep only work branches, preserving order."""
    return [name for name in names if is_provenance_branch(name)]
