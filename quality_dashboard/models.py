"""Data models for the quality dashboard.

Contains the records that describe a dashboard and its output:
    - Status        good / bad / unknown
    - Threshold     bad-when rule attached to a report source
    - ReportSource  one quality tool and where its report lives
    - StaticLink    a report linked without an extracted metric
    - ResultRow     one rendered table row
"""

import operator
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Status(str, Enum):
    GOOD = "good"
    BAD = "bad"
    UNKNOWN = "unknown"


#: Comparison operators accepted in ``Threshold.comparison``
COMPARISONS = {
    "<":  operator.lt,
    "<=": operator.le,
    ">":  operator.gt,
    ">=": operator.ge,
    "==": operator.eq,
    "!=": operator.ne,
}


@dataclass(frozen=True)
class Threshold:
    """Row is bad when ``fields[field] <comparison> limit`` holds."""

    field: str
    comparison: str
    limit: float

    def is_bad(self, value: float) -> bool:
        return COMPARISONS[self.comparison](value, self.limit)

    def describe(self) -> str:
        return f"bad when {self.field} {self.comparison} {self.limit:g}"


@dataclass(frozen=True)
class ReportSource:
    id: str
    name: str
    description: str
    parser: str
    report: str
    link: str
    threshold: Threshold

    @property
    def extractor(self):
        """The parser function registered under ``self.parser``."""
        from quality_dashboard.reports.extractors import PARSERS
        return PARSERS[self.parser]


@dataclass(frozen=True)
class StaticLink:
    name: str
    description: str
    link: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description, "link": self.link}


@dataclass
class ResultRow:
    source: ReportSource
    metric_text: str
    status: Status

    def to_dict(self) -> dict[str, Any]:
        return {
            "id":          self.source.id,
            "name":        self.source.name,
            "description": self.source.description,
            "link":        self.source.link,
            "metric":      self.metric_text,
            "status":      self.status.value,
        }
