"""Standalone HTML report with in-page search."""

from html import escape
from pathlib import Path
from typing import List, Optional, Sequence

from deploytracker.models import Release

NOT_AVAILABLE = "N/A"

_STYLE = """
    body { font-family: Arial, sans-serif; margin: 20px; }
    table { border-collapse: collapse; width: 100%; margin-top: 20px; }
    th, td { border: 1px solid #ddd; padding: 8px; text-align: left; vertical-align: top; }
    th { background-color: #f2f2f2; position: sticky; top: 0; }
    tr:nth-child(even) { background-color: #f9f9f9; }
    .summary { margin: 20px 0; background: #f8f8f8; padding: 15px; border-radius: 5px; }
    .summary p { margin: 5px 0; }
    .search-input { padding: 8px; width: 300px; }
    .work-item-link { color: #0066cc; text-decoration: none; font-weight: bold; }
    .work-item-link:hover { text-decoration: underline; }
"""

_SCRIPT = """
    function searchTable() {
      const input = document.getElementById('searchInput').value.toLowerCase();
      const rows = document.querySelectorAll('#releaseTable tbody tr');
      rows.forEach(row => {
        row.style.display = row.textContent.toLowerCase().includes(input) ? '' : 'none';
      });
    }

    function resetSearch() {
      document.getElementById('searchInput').value = '';
      document.querySelectorAll('#releaseTable tbody tr').forEach(row => { row.style.display = ''; });
    }
"""


def link_ids(ids: Sequence[str], base_url: Optional[str], per_line: int = 5) -> str:
    """Render IDs as escaped text, or as links when a base URL is configured."""
    if not ids:
        return NOT_AVAILABLE

    def render(item_id: str) -> str:
        text = escape(item_id)
        if not base_url:
            return text
        href = escape(f"{base_url.rstrip('/')}/{item_id}", quote=True)
        return f'<a href="{href}" target="_blank" class="work-item-link">{text}</a>'

    lines = [
        ", ".join(render(item_id) for item_id in ids[i : i + per_line])
        for i in range(0, len(ids), per_line)
    ]
    return "<br>".join(lines)


def release_row(release: Release, base_url: Optional[str]) -> str:
    """One table row for a release."""
    pull_request = [release.pull_request_id] if release.pull_request_id else []
    branches = "<br>".join(escape(branch) for branch in release.branches) or NOT_AVAILABLE
    return (
        "<tr>"
        f"<td>{escape(release.tag)}</td>"
        f"<td>{escape(release.release_date.isoformat())}</td>"
        f"<td>{'yes' if release.is_mainline_commit else 'no'}</td>"
        f"<td>{link_ids(release.work_item_ids, base_url)}</td>"
        f"<td>{link_ids(pull_request, base_url)}</td>"
        f"<td>{branches}</td>"
        "</tr>"
    )


def render_html(releases: List[Release], base_url: Optional[str] = None) -> str:
    """Render the full HTML document.

    Args:
        releases: Release records, newest first
        base_url: Work item URL prefix; IDs are appended to it to build links

    Returns:
        HTML document as a string
    """
    if releases:
        period = f"{releases[-1].release_date.isoformat()} to {releases[0].release_date.isoformat()}"
    else:
        period = NOT_AVAILABLE

    rows = "\n".join(release_row(release, base_url) for release in releases)

    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <title>Release Provenance</title>
  <style>{_STYLE}</style>
</head>
<body>
  <h1>Release Provenance</h1>
  <div class="summary">
    <p><strong>Releases:</strong> {len(releases)}</p>
    <p><strong>Period:</strong> {escape(period)}</p>
  </div>
  <div class="search-container">
    <input type="text" id="searchInput" class="search-input" placeholder="Search by work item, branch or tag...">
    <button onclick="searchTable()">Search</button>
    <button onclick="resetSearch()">Clear</button>
  </div>
  <table id="releaseTable">
    <thead>
      <tr><th>Tag</th><th>Date</th><th>Mainline</th><th>Work Items</th><th>PR</th><th>Branches</th></tr>
    </thead>
    <tbody>
{rows}
    </tbody>
  </table>
  <script>{_SCRIPT}</script>
</body>
</html>
"""


def write_html(releases: List[Release], output: Path, base_url: Optional[str] = None) -> Path:
    """Write the HTML report to ``output``."""
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(render_html(releases, base_url), encoding="utf-8")
    return output
