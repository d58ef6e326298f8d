"""Metric extraction from tool report artifacts.

Functions:
    parse_junit(text)       -> UnitTestSummary    Ant JUnit overview-summary.html
    parse_clover(text)      -> CoverageSummary    Clover dashboard.html
    parse_cpd(text)         -> DuplicationSummary CPD html report
    parse_pmd(text)         -> ViolationSummary   PMD html report
    parse_checkstyle(text)  -> StyleSummary       Checkstyle noframes html report
    extract(text, parser)   -> summary | None

Each parser raises ``ExtractionMismatch`` when nothing it looks for is found.
A partial match returns a summary whose missing fields are None.
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Callable

from quality_dashboard.loader import ExtractionMismatch

logger = logging.getLogger(__name__)

Number = int | float


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #

def _parse_number(raw: str | None) -> Number | None:
    """Return a number from a captured string, or None if absent.

    Whole numbers come back as int (``"30.0"`` -> 30).
    """
    if raw is None:
        return None
    try:
        f = float(raw.replace(",", "").strip())
    except ValueError:
        return None
    if math.isinf(f):
        return None
    return int(f) if f == int(f) else f


def _show(value: Number | None) -> str:
    if value is None:
        return "?"
    return f"{value:g}" if isinstance(value, float) else str(value)


def _search(pattern: re.Pattern, text: str) -> str | None:
    match = pattern.search(text)
    return match.group(1) if match else None


def _numeric_pair(text: str) -> tuple[Number, Number] | None:
    match = _NUMERIC_PAIR_RE.search(text)
    if match is None:
        return None
    return _parse_number(match.group(1)), _parse_number(match.group(2))


# --------------------------------------------------------------------------- #
# Summaries
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class UnitTestSummary:
    tests: Number | None
    failures: Number | None
    errors: Number | None

    @property
    def problems(self) -> Number | None:
        if self.failures is None or self.errors is None:
            return None
        return self.failures + self.errors

    def fields(self) -> dict[str, Number | None]:
        return {
            "tests": self.tests,
            "failures": self.failures,
            "errors": self.errors,
            "problems": self.problems,
        }

    def describe(self) -> str:
        return (
            f"{_show(self.tests)} tests, {_show(self.failures)} failure(s), "
            f"{_show(self.errors)} error(s)"
        )


@dataclass(frozen=True)
class CoverageSummary:
    percent: Number | None

    def fields(self) -> dict[str, Number | None]:
        return {"percent": self.percent}

    def describe(self) -> str:
        return f"{_show(self.percent)}% coverage"


@dataclass(frozen=True)
class DuplicationSummary:
    duplications: Number | None

    def fields(self) -> dict[str, Number | None]:
        return {"duplications": self.duplications}

    def describe(self) -> str:
        return f"{_show(self.duplications)} duplication(s)"


@dataclass(frozen=True)
class ViolationSummary:
    files: Number | None
    violations: Number | None

    def fields(self) -> dict[str, Number | None]:
        return {"files": self.files, "violations": self.violations}

    def describe(self) -> str:
        return f"{_show(self.violations)} violation(s) in {_show(self.files)} file(s)"


@dataclass(frozen=True)
class StyleSummary:
    files: Number | None
    errors: Number | None

    def fields(self) -> dict[str, Number | None]:
        return {"files": self.files, "errors": self.errors}

    def describe(self) -> str:
        return f"{_show(self.errors)} error(s) in {_show(self.files)} file(s)"


Summary = UnitTestSummary | CoverageSummary | DuplicationSummary | ViolationSummary | StyleSummary


# --------------------------------------------------------------------------- #
# Patterns
# --------------------------------------------------------------------------- #

def _anchor(href: str) -> re.Pattern:
    return re.compile(rf'<a\s+href="{re.escape(href)}"\s*>\s*([\d,]+)\s*</a>', re.IGNORECASE)


_JUNIT_TESTS_RE    = _anchor("all-tests.html")
_JUNIT_FAILURES_RE = _anchor("alltests-fails.html")
_JUNIT_ERRORS_RE   = _anchor("alltests-errors.html")

_PERCENT_CELL_RE = re.compile(r"<td[^>]*>\s*(\d+(?:\.\d+)?)\s*%\s*</td>", re.IGNORECASE)

_SUMMARY_NUMBER_RE = re.compile(
    r'<td[^>]*class="[^"]*\bSummaryNumber\b[^"]*"[^>]*>\s*([\d,]+)\s*</td>',
    re.IGNORECASE,
)

_NUMERIC_PAIR_RE = re.compile(
    r"<tr[^>]*>\s*<td[^>]*>\s*([\d,]+)\s*</td>\s*<td[^>]*>\s*([\d,]+)\s*</td>\s*</tr>",
    re.IGNORECASE,
)


# --------------------------------------------------------------------------- #
# Parsers
# --------------------------------------------------------------------------- #

def parse_junit(text: str) -> UnitTestSummary:
    summary = UnitTestSummary(
        tests=_parse_number(_search(_JUNIT_TESTS_RE, text)),
        failures=_parse_number(_search(_JUNIT_FAILURES_RE, text)),
        errors=_parse_number(_search(_JUNIT_ERRORS_RE, text)),
    )
    if summary.tests is None and summary.failures is None and summary.errors is None:
        raise ExtractionMismatch("no test, failure or error counts found")
    return summary


def parse_clover(text: str) -> CoverageSummary:
    percent = _parse_number(_search(_PERCENT_CELL_RE, text))
    if percent is None:
        raise ExtractionMismatch("no coverage percentage cell found")
    return CoverageSummary(percent=percent)


def parse_cpd(text: str) -> DuplicationSummary:
    count = _parse_number(_search(_SUMMARY_NUMBER_RE, text))
    if count is None:
        raise ExtractionMismatch("no SummaryNumber cell found")
    return DuplicationSummary(duplications=count)


def parse_pmd(text: str) -> ViolationSummary:
    pair = _numeric_pair(text)
    if pair is None:
        raise ExtractionMismatch("no [files, violations] summary row found")
    return ViolationSummary(files=pair[0], violations=pair[1])


def parse_checkstyle(text: str) -> StyleSummary:
    pair = _numeric_pair(text)
    if pair is None:
        raise ExtractionMismatch("no [files, errors] summary row found")
    return StyleSummary(files=pair[0], errors=pair[1])


PARSERS: dict[str, Callable[[str], Summary]] = {
    "junit":      parse_junit,
    "clover":     parse_clover,
    "cpd":        parse_cpd,
    "pmd":        parse_pmd,
    "checkstyle": parse_checkstyle,
}

#: Fields each parser can report, for checking configured thresholds
PARSER_FIELDS: dict[str, tuple[str, ...]] = {
    "junit":      ("tests", "failures", "errors", "problems"),
    "clover":     ("percent",),
    "cpd":        ("duplications",),
    "pmd":        ("files", "violations"),
    "checkstyle": ("files", "errors"),
}


# --------------------------------------------------------------------------- #
# Public API
# --------------------------------------------------------------------------- #

def extract(text: str | None, parser: str) -> Summary | None:
    """Run the parser registered as *parser* over *text*.

    Returns None when *text* is None or the report does not match.
    Raises KeyError for an unregistered parser name.
    """
    parse = PARSERS[parser]
    if text is None:
        return None
    try:
        return parse(text)
    except ExtractionMismatch as exc:
        logger.warning("Could not extract %s metrics: %s", parser, exc)
        return None
