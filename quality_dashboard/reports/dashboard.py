"""Report aggregation: one result row per configured report source.

Functions:
    load_report(loader, path)          -> str | None
    classify(summary, threshold)       -> Status
    build_row(source, loader)          -> ResultRow
    build_rows(sources, loader)        -> list[ResultRow]
    summarize(rows, links, link_base)  -> dict

A missing or malformed report only degrades its own row to ``unknown``;
``build_row`` never raises.
"""

import logging
from collections import Counter
from datetime import datetime, timezone
from urllib.parse import urljoin

from quality_dashboard.loader import ReportError, ReportLoader
from quality_dashboard.models import ReportSource, ResultRow, StaticLink, Status, Threshold
from quality_dashboard.reports.extractors import Summary, extract

logger = logging.getLogger(__name__)

NO_DATA = "No data available"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def load_report(loader: ReportLoader, path: str) -> str | None:
    """Return the text of the report at *path*, or None if it cannot be read."""
    return loader.load(path)


def classify(summary: Summary | None, threshold: Threshold) -> Status:
    """Evaluate *threshold* against the extracted fields.

    Unknown when nothing was extracted or the threshold field is missing.
    """
    if summary is None:
        return Status.UNKNOWN
    value = summary.fields().get(threshold.field)
    if value is None:
        return Status.UNKNOWN
    return Status.BAD if threshold.is_bad(value) else Status.GOOD


def build_row(source: ReportSource, loader: ReportLoader) -> ResultRow:
    logger.debug("Reading %s report from %s", source.id, loader.resolve(source.report))
    try:
        summary = extract(load_report(loader, source.report), source.parser)
    except ReportError as exc:
        logger.warning("Report %s degraded: %s", source.id, exc)
        summary = None

    status = classify(summary, source.threshold)
    metric_text = summary.describe() if summary is not None else NO_DATA
    logger.debug("%s: %s (%s)", source.id, metric_text, status.value)
    return ResultRow(source=source, metric_text=metric_text, status=status)


def build_rows(sources: list[ReportSource], loader: ReportLoader) -> list[ResultRow]:
    """One row per source, in the configured order."""
    return [build_row(source, loader) for source in sources]


def link_href(link: str, link_base: str) -> str:
    """Join *link* onto the *link_base* directory; URLs and empty bases leave it unchanged."""
    if not link_base:
        return link
    return urljoin(link_base.rstrip("/") + "/", link)


def summarize(rows: list[ResultRow], links: list[StaticLink], link_base: str = "") -> dict:
    """Build a JSON-ready report of the dashboard rows.

    Links are joined onto *link_base* the same way the HTML page joins them.
    """
    counts = Counter(row.status for row in rows)
    return {
        "report_type":  "quality_dashboard",
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "summary":      {status.value: counts.get(status, 0) for status in Status},
        "rows":         [
            {**row.to_dict(), "link": link_href(row.source.link, link_base)} for row in rows
        ],
        "links":        [
            {**link.to_dict(), "link": link_href(link.link, link_base)} for link in links
        ],
    }
