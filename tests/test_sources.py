"""Tests for quality_dashboard/reports/sources.py"""

import pytest

from quality_dashboard.config import ConfigError
from quality_dashboard.models import Threshold
from quality_dashboard.reports.sources import (
    build_links,
    build_source,
    build_sources,
    default_links,
    default_sources,
)


def _entry(**overrides) -> dict:
    entry = {
        "id": "junit", "name": "JUnit", "description": "Unit tests", "parser": "junit",
        "report": "junit/overview-summary.html", "link": "junit/index.html",
        "threshold": {"field": "problems", "bad_when": "!=", "limit": 0},
    }
    entry.update(overrides)
    return entry


# ---------------------------------------------------------------------------
# Default table
# ---------------------------------------------------------------------------

def test_default_source_order():
    assert [s.id for s in default_sources()] == [
        "junit", "clover", "cpd", "pmd", "checkstyle",
        "checkstyle-actions", "checkstyle-commandparser", "checkstyle-core",
        "checkstyle-config", "checkstyle-logger", "checkstyle-ircparser",
        "checkstyle-plugins", "checkstyle-ui",
    ]


def test_default_thresholds():
    thresholds = {s.id: s.threshold for s in default_sources()}
    assert thresholds["junit"] == Threshold("problems", "!=", 0)
    assert thresholds["clover"] == Threshold("percent", "<", 25)
    assert thresholds["cpd"] == Threshold("duplications", ">", 100)
    assert thresholds["pmd"] == Threshold("violations", ">", 2600)
    assert thresholds["checkstyle"] == Threshold("errors", ">", 750)
    scoped = [t for sid, t in thresholds.items() if sid.startswith("checkstyle-")]
    assert len(scoped) == 8
    assert all(t == Threshold("errors", ">", 100) for t in scoped)


def test_default_links():
    assert [link.name for link in default_links()] == ["FindBugs", "DocCheck"]


def test_extractor_resolves_parser():
    source = default_sources()[0]
    assert source.extractor.__name__ == "parse_junit"


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def test_build_source_valid():
    source = build_source(_entry())
    assert source.id == "junit"
    assert source.threshold.describe() == "bad when problems != 0"


def test_build_source_missing_keys():
    entry = _entry()
    del entry["report"]
    with pytest.raises(ConfigError, match="report"):
        build_source(entry)


def test_build_source_unknown_parser():
    with pytest.raises(ConfigError, match="unknown parser 'findbugs'"):
        build_source(_entry(parser="findbugs"))


def test_build_source_unknown_comparison():
    with pytest.raises(ConfigError, match="unknown comparison"):
        build_source(_entry(threshold={"field": "errors", "bad_when": "=>", "limit": 1}))


def test_build_source_unknown_threshold_field():
    entry = _entry(parser="checkstyle", threshold={"field": "error", "bad_when": ">", "limit": 100})
    with pytest.raises(ConfigError, match="no field 'error'"):
        build_source(entry)


def test_build_source_non_numeric_limit():
    with pytest.raises(ConfigError, match="limit must be a number"):
        build_source(_entry(threshold={"field": "errors", "bad_when": ">", "limit": "many"}))


def test_build_source_zero_limit_is_allowed():
    assert build_source(_entry()).threshold.limit == 0


def test_build_sources_rejects_duplicates():
    with pytest.raises(ConfigError, match="Duplicate source id 'junit'"):
        build_sources([_entry(), _entry()])


def test_build_sources_rejects_empty_list():
    with pytest.raises(ConfigError, match="non-empty"):
        build_sources([])


def test_build_links_requires_mappings():
    with pytest.raises(ConfigError, match="mapping"):
        build_links(["findbugs.html"])
