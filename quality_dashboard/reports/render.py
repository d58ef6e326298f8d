"""HTML rendering of the dashboard table."""

from html import escape

from quality_dashboard.config import Config
from quality_dashboard.loader import ReportLoader
from quality_dashboard.models import ResultRow, StaticLink, Status
from quality_dashboard.reports.dashboard import build_rows, link_href

DEFAULT_TITLE = "Code quality reports"

#: Row background per status; unknown rows stay neutral
_STATUS_COLOURS = {
    Status.GOOD: "#ccffcc",
    Status.BAD: "#ffcccc",
}

_PAGE = """\
<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
table.dashboard {{ border-collapse: collapse; }}
table.dashboard th, table.dashboard td {{ border: 1px solid #999; padding: 4px 8px; text-align: left; }}
{status_styles}
</style>
</head>
<body>
<h1>{title}</h1>
<table class="dashboard">
<tr><th>Tool</th><th>Information</th><th>Results</th></tr>
{rows}
</table>
{links}
</body>
</html>
"""


def _status_styles() -> str:
    return "\n".join(
        f"tr.{status.value} td {{ background-color: {colour}; }}"
        for status, colour in _STATUS_COLOURS.items()
    )


def _render_row(row: ResultRow, link_base: str) -> str:
    href = escape(link_href(row.source.link, link_base))
    return (
        f'<tr class="{row.status.value}">'
        f'<td><a href="{href}">{escape(row.source.name)}</a></td>'
        f"<td>{escape(row.source.description)}</td>"
        f"<td>{escape(row.metric_text)}</td>"
        "</tr>"
    )


def _render_links(links: list[StaticLink], link_base: str) -> str:
    if not links:
        return ""
    items = "\n".join(
        f'<li><a href="{escape(link_href(link.link, link_base))}">{escape(link.name)}</a>'
        + (f": {escape(link.description)}" if link.description else "")
        + "</li>"
        for link in links
    )
    return f'<ul class="links">\n{items}\n</ul>'


def render_page(
    rows: list[ResultRow],
    links: list[StaticLink],
    *,
    link_base: str = "",
    title: str = DEFAULT_TITLE,
) -> str:
    """Return the dashboard as a standalone HTML document.

    One table row per result (CSS class = status), followed by the static
    report links. All text is escaped.
    """
    return _PAGE.format(
        title=escape(title),
        status_styles=_status_styles(),
        rows="\n".join(_render_row(row, link_base) for row in rows),
        links=_render_links(links, link_base),
    )


def render_dashboard(
    config: Config,
    loader: ReportLoader | None = None,
    *,
    title: str = DEFAULT_TITLE,
) -> str:
    """Build every row from *config* and render the full page."""
    loader = loader or ReportLoader(root=config.root, timeout=config.timeout)
    rows = build_rows(config.sources, loader)
    return render_page(rows, config.links, link_base=config.link_base, title=title)
