"""Configuration loading and validation.

Usage:
    config = load("dashboard.yaml")          # raises ConfigError on bad config
    config = load(None)                      # built-in sources and defaults
    generate_template("dashboard.yaml")      # writes example file to disk
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from quality_dashboard.loader import DEFAULT_TIMEOUT

DEFAULT_ROOT = "report"
DEFAULT_LINK_BASE = "report/"
ROOT_ENV_VAR = "DASHBOARD_REPORT_ROOT"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ConfigError(Exception):
    """Raised when the configuration is missing or invalid."""


# ---------------------------------------------------------------------------
# Config dataclass
# ---------------------------------------------------------------------------

@dataclass
class Config:
    root: str = DEFAULT_ROOT
    link_base: str = DEFAULT_LINK_BASE
    timeout: float = DEFAULT_TIMEOUT
    sources: list = field(default_factory=list)
    links: list = field(default_factory=list)


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

def load(config_path: str | None = None) -> Config:
    """Load and validate configuration from a YAML file.

    With no path, returns the built-in source table. The environment variable
    DASHBOARD_REPORT_ROOT overrides ``reports.root``.

    Raises:
        ConfigError: if the file is missing, malformed, or holds invalid
                     sources, links or settings.
    """
    from quality_dashboard.reports import sources as defaults

    raw: dict = {}
    if config_path is not None:
        raw = _read_yaml(config_path)

    reports = raw.get("reports") or {}
    if not isinstance(reports, dict):
        raise ConfigError("'reports' must be a mapping.")

    root = os.environ.get(ROOT_ENV_VAR) or reports.get("root") or DEFAULT_ROOT
    link_base = reports.get("link_base", DEFAULT_LINK_BASE)
    timeout = reports.get("timeout", DEFAULT_TIMEOUT)

    source_entries = raw.get("sources")
    link_entries = raw.get("links")

    config = Config(
        root=str(root).strip(),
        link_base="" if link_base is None else str(link_base).strip(),
        timeout=_validate_timeout(timeout),
        sources=defaults.build_sources(
            defaults.DEFAULT_SOURCES if source_entries is None else source_entries
        ),
        links=defaults.build_links(
            defaults.DEFAULT_LINKS if link_entries is None else link_entries
        ),
    )
    return config


def _read_yaml(config_path: str) -> dict:
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(
            f"Config file not found: '{config_path}'\n"
            "Run `python -m quality_dashboard init` to generate a template."
        )

    try:
        with path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse '{config_path}': {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"'{config_path}' must be a YAML mapping at the top level.")
    return raw


def _validate_timeout(value) -> float:
    """Raise ConfigError unless *value* is a positive number of seconds."""
    try:
        timeout = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"'reports.timeout' must be a number, got {value!r}") from exc
    if timeout <= 0:
        raise ConfigError("'reports.timeout' must be greater than zero")
    return timeout


# ---------------------------------------------------------------------------
# Template generator (used by `init` command)
# ---------------------------------------------------------------------------

TEMPLATE = """\
reports:
  root: "report"            # Directory or http(s) URL holding the tool reports
  link_base: "report/"      # Prefix for the links shown on the page
  timeout: 10               # Seconds to wait for each report over HTTP

# Omit 'sources' to use the built-in JUnit / Clover / CPD / PMD / Checkstyle table.
sources:
  - id: junit
    name: JUnit
    description: Unit test results
    parser: junit           # junit, clover, cpd, pmd or checkstyle
    report: junit/overview-summary.html
    link: junit/index.html
    threshold: {field: problems, bad_when: "!=", limit: 0}

  - id: checkstyle
    name: Checkstyle
    description: Coding style errors in the whole project
    parser: checkstyle
    report: checkstyle/report.html
    link: checkstyle/report.html
    threshold: {field: errors, bad_when: ">", limit: 750}

links:
  - name: FindBugs
    description: Bug patterns found by static bytecode analysis
    link: findbugs/findbugs.html
"""


def generate_template(output_path: str = "dashboard.yaml") -> None:
    """Write a template dashboard.yaml to *output_path*.

    Raises:
        ConfigError: if the file already exists.
    """
    path = Path(output_path)
    if path.exists():
        raise ConfigError(
            f"'{output_path}' already exists. Remove it first or choose a different path."
        )
    path.write_text(TEMPLATE, encoding="utf-8")
