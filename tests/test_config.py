"""Tests for quality_dashboard/config.py"""

import textwrap
from pathlib import Path

import pytest

from quality_dashboard.config import (
    DEFAULT_ROOT,
    Config,
    ConfigError,
    generate_template,
    load,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def write_config(tmp_path: Path, content: str) -> Path:
    p = tmp_path / "dashboard.yaml"
    p.write_text(textwrap.dedent(content), encoding="utf-8")
    return p


VALID_YAML = """\
    reports:
      root: "https://ci.example.com/report"
      link_base: "https://ci.example.com/report/"
      timeout: 5
    sources:
      - id: cpd
        name: CPD
        parser: cpd
        report: cpd/cpd.html
        link: cpd/cpd.html
        threshold: {field: duplications, bad_when: ">", limit: 50}
    links: []
    """


@pytest.fixture(autouse=True)
def _clear_root_env(monkeypatch):
    monkeypatch.delenv("DASHBOARD_REPORT_ROOT", raising=False)


# ---------------------------------------------------------------------------
# load() — happy path
# ---------------------------------------------------------------------------

def test_load_valid_config(tmp_path):
    config = load(str(write_config(tmp_path, VALID_YAML)))
    assert config.root == "https://ci.example.com/report"
    assert config.link_base == "https://ci.example.com/report/"
    assert config.timeout == 5
    assert [s.id for s in config.sources] == ["cpd"]
    assert config.sources[0].threshold.limit == 50
    assert config.links == []


def test_load_without_path_uses_defaults():
    config = load(None)
    assert isinstance(config, Config)
    assert config.root == DEFAULT_ROOT
    assert len(config.sources) == 13
    assert len(config.links) == 2


def test_omitted_sections_fall_back_to_defaults(tmp_path):
    p = write_config(tmp_path, """\
        reports:
          root: build/reports
        """)
    config = load(str(p))
    assert config.root == "build/reports"
    assert config.sources[0].id == "junit"
    assert [link.name for link in config.links] == ["FindBugs", "DocCheck"]


def test_empty_file_uses_defaults(tmp_path):
    config = load(str(write_config(tmp_path, "")))
    assert len(config.sources) == 13


# ---------------------------------------------------------------------------
# load() — errors
# ---------------------------------------------------------------------------

def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load(str(tmp_path / "no-such-file.yaml"))


def test_load_malformed_yaml(tmp_path):
    p = write_config(tmp_path, "reports: [unclosed\n")
    with pytest.raises(ConfigError, match="Failed to parse"):
        load(str(p))


def test_load_top_level_list(tmp_path):
    p = write_config(tmp_path, "- a\n- b\n")
    with pytest.raises(ConfigError, match="mapping"):
        load(str(p))


@pytest.mark.parametrize("timeout", ["0", "-3", "soon"])
def test_load_bad_timeout(tmp_path, timeout):
    p = write_config(tmp_path, f"reports:\n  timeout: {timeout}\n")
    with pytest.raises(ConfigError, match="timeout"):
        load(str(p))


def test_load_invalid_source(tmp_path):
    p = write_config(tmp_path, """\
        sources:
          - id: lint
            name: Lint
            parser: pylint
            report: lint.html
            link: lint.html
            threshold: {field: errors, bad_when: ">", limit: 0}
        """)
    with pytest.raises(ConfigError, match="unknown parser"):
        load(str(p))


# ---------------------------------------------------------------------------
# load() — environment variable override
# ---------------------------------------------------------------------------

def test_env_root_overrides_config(tmp_path, monkeypatch):
    p = write_config(tmp_path, VALID_YAML)
    monkeypatch.setenv("DASHBOARD_REPORT_ROOT", "/srv/reports")
    assert load(str(p)).root == "/srv/reports"


def test_env_root_applies_to_defaults(monkeypatch):
    monkeypatch.setenv("DASHBOARD_REPORT_ROOT", "/srv/reports")
    assert load(None).root == "/srv/reports"


# ---------------------------------------------------------------------------
# generate_template()
# ---------------------------------------------------------------------------

def test_generate_template_creates_loadable_file(tmp_path):
    out = tmp_path / "dashboard.yaml"
    generate_template(str(out))
    content = out.read_text()
    assert "reports:" in content
    assert "sources:" in content
    config = load(str(out))
    assert [s.id for s in config.sources] == ["junit", "checkstyle"]


def test_generate_template_refuses_to_overwrite(tmp_path):
    out = tmp_path / "dashboard.yaml"
    out.write_text("existing content")
    with pytest.raises(ConfigError, match="already exists"):
        generate_template(str(out))
