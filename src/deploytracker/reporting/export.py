"""CSV and JSON export of release provenance."""

import csv
import json
from pathlib import Path
from typing import List

from deploytracker.models import Release
from deploytracker.reporting.console import chunk_lines

CSV_HEADER = ["Tag", "Date", "Mainline", "Work Items", "PR", "Branches", "Commit Message"]


def release_row(release: Release) -> List[str]:
    """Flatten a release into CSV cells."""
    return [
        release.tag,
        release.release_date.isoformat(),
        "yes" if release.is_mainline_commit else "no",
        chunk_lines(release.work_item_ids, separator="\r\n"),
        release.pull_request_id or "",
        "\n".join(release.branches),
        release.commit_message,
    ]


def write_csv(releases: List[Release], output: Path) -> Path:
    """Write releases to a CSV file with every field quoted.

    Args:
        releases: Release records, newest first
        output: Destination file

    Returns:
        The path written
    """
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, quoting=csv.QUOTE_ALL)
        writer.writerow(CSV_HEADER)
        for release in releases:
            writer.writerow(release_row(release))
    return output


def write_json(releases: List[Release], output: Path) -> Path:
    """Write releases to a JSON file."""
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        json.dump([release.model_dump(mode="json") for release in releases], f, indent=2)
    return output
