"""HTML page template for match suggestion reports."""
from __future__ import annotations
import json
from typing import Optional

DATATABLES_VERSION = "1.13.7"

REPORT_CSS = """
body { font-family: -apple-system, 'Segoe UI', Roboto, sans-serif; color: #263238; margin: 0; }
main { max-width: 1400px; margin: 0 auto; padding: 24px; }
header { display: flex; justify-content: space-between; align-items: baseline; }
h1 { color: #c75b12; font-size: 26px; }
header a { background: #c75b12; color: #fff; padding: 6px 14px; border-radius: 4px; text-decoration: none; }
.description { color: #546e7a; font-size: 14px; margin-bottom: 16px; }
.description ul, ul.reasons { margin: 6px 0 0 18px; padding: 0; }
ul.reasons { font-size: 13px; }
#dataTable thead th { background: #37474f; color: #fff; }
#dataTable tbody td { vertical-align: top; }
.badge { padding: 3px 7px; border-radius: 4px; font-size: 11px; font-weight: 600; color: #fff; white-space: nowrap; }
.badge-success { background: #2e7d32; }
.badge-primary { background: #1565c0; }
.badge-danger { background: #c62828; }
.badge-secondary { background: #78909c; }
footer { margin-top: 24px; color: #90a4ae; font-size: 12px; text-align: center; }
"""


def get_html_template(
    title: str,
    columns: list[str],
    rows: list[list],
    description: str = "",
    default_order: Optional[list[list[int | str]]] = None,
    csv_filename: Optional[str] = None,
) -> str:
    """Render a sortable, searchable DataTables page.

    Cells are inserted as-is so callers may pass pre-rendered badges; escape
    user-provided text before handing it over.

    Args:
        title: Page and heading title
        columns: Column headers
        rows: Row cell values
        description: Optional HTML shown above the table
        default_order: Initial sort as [[col_idx, 'asc'/'desc'], ...]
        csv_filename: CSV sibling to link for download

    Returns:
        Complete HTML document as string
    """
    header_cells = "".join(f"<th>{col}</th>" for col in columns)
    body_rows = "\n".join(
        "<tr>" + "".join(f"<td>{'' if cell is None else cell}</td>" for cell in row) + "</tr>"
        for row in rows
    )
    order = json.dumps(default_order or [[0, "asc"]])
    download = f'<a href="{csv_filename}" download>Download CSV</a>' if csv_filename else ""
    intro = f'<div class="description">{description}</div>' if description else ""
    cdn = f"https://cdn.datatables.net/{DATATABLES_VERSION}"

    return f'''<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<title>{title}</title>
<script src="https://code.jquery.com/jquery-3.7.1.min.js"></script>
<link rel="stylesheet" href="{cdn}/css/jquery.dataTables.min.css">
<script src="{cdn}/js/jquery.dataTables.min.js"></script>
<style>{REPORT_CSS}</style>
</head>
<body>
<main>
<header><h1>{title}</h1>{download}</header>
{intro}
<table id="dataTable" class="display">
<thead><tr>{header_cells}</tr></thead>
<tbody>
{body_rows}
</tbody>
</table>
<footer>Generated by Rally Matchmaker</footer>
</main>
<script>
$(function() {{
    $('#dataTable').DataTable({{order: {order}, pageLength: 25}});
}});
</script>
</body>
</html>
'''


__all__ = ["get_html_template"]
