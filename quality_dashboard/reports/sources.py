"""Report source definitions.

The built-in table lists the tools in display order. Entries use the same
shape as the ``sources`` / ``links`` sections of the YAML config, so a config
file can replace the table without touching the aggregation code.

Functions:
    build_source(entry)    -> ReportSource
    build_link(entry)      -> StaticLink
    default_sources()      -> list[ReportSource]
    default_links()        -> list[StaticLink]
"""

from typing import Any

from quality_dashboard.config import ConfigError
from quality_dashboard.models import COMPARISONS, ReportSource, StaticLink, Threshold
from quality_dashboard.reports.extractors import PARSER_FIELDS, PARSERS

_SOURCE_KEYS = ("id", "name", "parser", "report", "link", "threshold")
_THRESHOLD_KEYS = ("field", "bad_when", "limit")
_LINK_KEYS = ("name", "link")


def _checkstyle(scope_id: str, scope: str, report: str, limit: int) -> dict[str, Any]:
    return {
        "id":          f"checkstyle-{scope_id}",
        "name":        f"Checkstyle ({scope})",
        "description": f"Coding style errors in the {scope} code",
        "parser":      "checkstyle",
        "report":      f"checkstyle/{report}",
        "link":        f"checkstyle/{report}",
        "threshold":   {"field": "errors", "bad_when": ">", "limit": limit},
    }


DEFAULT_SOURCES: list[dict[str, Any]] = [
    {
        "id":          "junit",
        "name":        "JUnit",
        "description": "Unit test results",
        "parser":      "junit",
        "report":      "junit/overview-summary.html",
        "link":        "junit/index.html",
        "threshold":   {"field": "problems", "bad_when": "!=", "limit": 0},
    },
    {
        "id":          "clover",
        "name":        "Clover",
        "description": "Code coverage of the unit tests",
        "parser":      "clover",
        "report":      "clover/dashboard.html",
        "link":        "clover/index.html",
        "threshold":   {"field": "percent", "bad_when": "<", "limit": 25},
    },
    {
        "id":          "cpd",
        "name":        "CPD",
        "description": "Copy/paste detection",
        "parser":      "cpd",
        "report":      "cpd/cpd.html",
        "link":        "cpd/cpd.html",
        "threshold":   {"field": "duplications", "bad_when": ">", "limit": 100},
    },
    {
        "id":          "pmd",
        "name":        "PMD",
        "description": "Static analysis rule violations",
        "parser":      "pmd",
        "report":      "pmd/pmd.html",
        "link":        "pmd/pmd.html",
        "threshold":   {"field": "violations", "bad_when": ">", "limit": 2600},
    },
    {
        "id":          "checkstyle",
        "name":        "Checkstyle",
        "description": "Coding style errors in the whole project",
        "parser":      "checkstyle",
        "report":      "checkstyle/report.html",
        "link":        "checkstyle/report.html",
        "threshold":   {"field": "errors", "bad_when": ">", "limit": 750},
    },
    _checkstyle("actions",       "actions",        "actions.html",       100),
    _checkstyle("commandparser", "command parser", "commandparser.html", 100),
    _checkstyle("core",          "core",           "core.html",          100),
    _checkstyle("config",        "config",         "config.html",        100),
    _checkstyle("logger",        "logger",         "logger.html",        100),
    _checkstyle("ircparser",     "IRC parser",     "parser.html",        100),
    _checkstyle("plugins",       "plugins",        "plugins.html",       100),
    _checkstyle("ui",            "UI",             "ui.html",            100),
]

DEFAULT_LINKS: list[dict[str, Any]] = [
    {
        "name":        "FindBugs",
        "description": "Bug patterns found by static bytecode analysis",
        "link":        "findbugs/findbugs.html",
    },
    {
        "name":        "DocCheck",
        "description": "Missing or incomplete documentation comments",
        "link":        "doccheck/index.html",
    },
]


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def _require(entry: Any, keys: tuple[str, ...], what: str) -> None:
    if not isinstance(entry, dict):
        raise ConfigError(f"{what} must be a mapping, got {type(entry).__name__}")
    missing = [k for k in keys if entry.get(k) in (None, "")]
    if missing:
        raise ConfigError(f"{what} is missing: {', '.join(missing)}")


def build_threshold(entry: Any, source_id: str) -> Threshold:
    what = f"Threshold of source '{source_id}'"
    _require(entry, _THRESHOLD_KEYS, what)
    comparison = str(entry["bad_when"]).strip()
    if comparison not in COMPARISONS:
        allowed = ", ".join(COMPARISONS)
        raise ConfigError(f"{what}: unknown comparison '{comparison}' (use one of {allowed})")
    try:
        limit = float(entry["limit"])
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{what}: limit must be a number") from exc
    return Threshold(field=str(entry["field"]), comparison=comparison, limit=limit)


def build_source(entry: Any) -> ReportSource:
    """Turn one ``sources`` mapping into a ReportSource. Raises ConfigError."""
    source_id = entry.get("id", "?") if isinstance(entry, dict) else "?"
    _require(entry, _SOURCE_KEYS, f"Source '{source_id}'")
    parser = str(entry["parser"])
    if parser not in PARSERS:
        available = ", ".join(PARSERS)
        raise ConfigError(f"Source '{source_id}': unknown parser '{parser}' (use one of {available})")
    threshold = build_threshold(entry["threshold"], source_id)
    if threshold.field not in PARSER_FIELDS[parser]:
        available = ", ".join(PARSER_FIELDS[parser])
        raise ConfigError(
            f"Source '{source_id}': parser '{parser}' has no field '{threshold.field}' "
            f"(use one of {available})"
        )
    return ReportSource(
        id=str(entry["id"]),
        name=str(entry["name"]),
        description=str(entry.get("description") or ""),
        parser=parser,
        report=str(entry["report"]),
        link=str(entry["link"]),
        threshold=threshold,
    )


def build_link(entry: Any) -> StaticLink:
    _require(entry, _LINK_KEYS, "Link")
    return StaticLink(
        name=str(entry["name"]),
        description=str(entry.get("description") or ""),
        link=str(entry["link"]),
    )


def build_sources(entries: Any) -> list[ReportSource]:
    """Build and check a list of sources: non-empty, unique ids."""
    if not isinstance(entries, list) or not entries:
        raise ConfigError("'sources' must be a non-empty list")
    sources = [build_source(e) for e in entries]
    seen: set[str] = set()
    for source in sources:
        if source.id in seen:
            raise ConfigError(f"Duplicate source id '{source.id}'")
        seen.add(source.id)
    return sources


def build_links(entries: Any) -> list[StaticLink]:
    if not isinstance(entries, list):
        raise ConfigError("'links' must be a list")
    return [build_link(e) for e in entries]


def default_sources() -> list[ReportSource]:
    return build_sources(DEFAULT_SOURCES)


def default_links() -> list[StaticLink]:
    return build_links(DEFAULT_LINKS)
