"""Shared report fixtures: minimal HTML in the shape each tool produces."""

from pathlib import Path

import pytest


class ReportHtml:
    """Builders for report artifacts."""

    @staticmethod
    def junit(tests, failures, errors) -> str:
        return f"""\
<h2>Summary</h2>
<table class="details" border="0" cellpadding="5" cellspacing="2" width="95%">
<tr valign="top"><th>Tests</th><th>Failures</th><th>Errors</th><th>Success rate</th></tr>
<tr valign="top" class="Failure">
<td><a href="all-tests.html">{tests}</a></td>
<td><a href="alltests-fails.html">{failures}</a></td>
<td><a href="alltests-errors.html">{errors}</a></td>
<td>83.33%</td>
</tr>
</table>
"""

    @staticmethod
    def clover(percent) -> str:
        return f"""\
<table class="summary">
<tr><th>Project</th><th>Coverage</th></tr>
<tr><td class="name">dmdirc</td><td class="pcnt">{percent}%</td></tr>
</table>
"""

    @staticmethod
    def cpd(count) -> str:
        return f"""\
<table>
<tr><td class="SummaryTitle">Duplications</td><td class="SummaryNumber">{count}</td></tr>
<tr><td class="SummaryTitle">Duplicated lines</td><td class="SummaryNumber">9999</td></tr>
</table>
"""

    @staticmethod
    def two_columns(files, count, header="Errors") -> str:
        return f"""\
<h3>Summary</h3>
<table class="log" border="0" cellpadding="5" cellspacing="2" width="100%">
<tr><th>Files</th><th>{header}</th></tr>
<tr class="a"><td>{files}</td><td>{count}</td></tr>
</table>
"""


@pytest.fixture
def html() -> ReportHtml:
    return ReportHtml()


@pytest.fixture
def report_dir(tmp_path):
    """Return a ``write(relative_path, text)`` helper rooted at a temp directory."""
    root = tmp_path / "report"
    root.mkdir()

    def write(relative: str, text: str) -> Path:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    write.root = root
    return write
