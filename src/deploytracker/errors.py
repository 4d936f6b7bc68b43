"""Error taxonomy for provenance collection."""


class DeployTrackerError(Exception):
    """Base class for all deploytracker errors."""


class TagParseError(DeployTrackerError, ValueError):
    """A tag did not have the expected ``[v]MAJOR.MINOR.PATCH`` shape."""

    def __init__(self, tag: str, reason: str = "not a MAJOR.MINOR.PATCH version") -> None:
        self.tag = tag
        self.reason = reason
        super().__init__(f"Cannot parse tag {tag!r}: {reason}")


class SourceQueryError(DeployTrackerError):
    """The version source failed to answer a query for a specific ref or range."""

    def __init__(self, query: str, ref: str, detail: str = "") -> None:
        self.query = query
        self.ref = ref
        message = f"{query} failed for {ref!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class RepositoryError(DeployTrackerError, ValueError):
    """The repository itself is unusable (missing path, not a git repository)."""
