"""
Data model for ecoindex-audit.

PageMetrics are the raw measurements collected for one URL. The scoring
system turns them into an immutable PageReport; the aggregator derives a
GlobalReport from the ordered PageReports.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from ecoindex_audit.config import DEFAULT_PASS, DEFAULT_FAIL


class Status(str, Enum):
    """Classification of a value against the pass/fail thresholds."""
    PASS = "pass"
    WARNING = "warning"
    ERROR = "error"
    NOT_APPLICABLE = "not-applicable"


@dataclass(frozen=True)
class Thresholds:
    """Pass/fail bounds shared by every score (0-100 scale)."""
    pass_value: float = DEFAULT_PASS
    fail_value: float = DEFAULT_FAIL

    def __post_init__(self):
        if self.fail_value > self.pass_value:
            raise ValueError(
                f"fail threshold ({self.fail_value}) must not exceed "
                f"pass threshold ({self.pass_value})"
            )


@dataclass(frozen=True)
class AuditFinding:
    """A Lighthouse audit that scored 0 on a page."""
    category: str
    audit_id: str
    title: str
    description: str = ""


@dataclass(frozen=True)
class PageMetrics:
    """Raw measurements for one audited URL."""
    url: str
    requests: int
    size_kb: float
    dom_size: int
    performance: Optional[int] = None
    accessibility: Optional[int] = None
    best_practices: Optional[int] = None
    failed_audits: Tuple[AuditFinding, ...] = ()
    lighthouse_report: Optional[str] = None


@dataclass(frozen=True)
class Metric:
    """GreenIT page metric with its status and recommendation."""
    name: str
    value: float
    status: Status
    recommendation: str

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "value": self.value,
            "status": self.status.value,
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class PageReport:
    """Scored page. Never mutated once computed."""
    metrics: PageMetrics
    eco_index: float
    grade: str
    greenhouse_gases: float
    water: float
    greenhouse_gases_km: float = 0.0
    water_shower: float = 0.0
    page_metrics: Tuple[Metric, ...] = ()
    statuses: Mapping[str, Status] = field(default_factory=dict, hash=False, compare=False)
    recommendation: str = ""

    def __post_init__(self):
        object.__setattr__(self, "statuses", MappingProxyType(dict(self.statuses)))

    @property
    def url(self) -> str:
        return self.metrics.url

    @property
    def performance(self) -> Optional[int]:
        return self.metrics.performance

    @property
    def accessibility(self) -> Optional[int]:
        return self.metrics.accessibility

    @property
    def best_practices(self) -> Optional[int]:
        return self.metrics.best_practices

    def metric(self, name: str) -> Optional[Metric]:
        for m in self.page_metrics:
            if m.name == name:
                return m
        return None

    def to_dict(self) -> Dict:
        return {
            "url": self.url,
            "ecoIndex": self.eco_index,
            "grade": self.grade,
            "greenhouseGases": self.greenhouse_gases,
            "water": self.water,
            "greenhouseGasesKm": self.greenhouse_gases_km,
            "waterShower": self.water_shower,
            "performance": self.performance,
            "accessibility": self.accessibility,
            "bestPractices": self.best_practices,
            "requests": self.metrics.requests,
            "sizeKb": self.metrics.size_kb,
            "domSize": self.metrics.dom_size,
            "metrics": [m.to_dict() for m in self.page_metrics],
            "statuses": {name: status.value for name, status in self.statuses.items()},
            "recommendation": self.recommendation,
            "lighthouseReport": self.metrics.lighthouse_report,
            "failedAudits": [
                {
                    "category": a.category,
                    "id": a.audit_id,
                    "title": a.title,
                    "description": a.description,
                }
                for a in self.metrics.failed_audits
            ],
        }


@dataclass(frozen=True)
class GlobalReport:
    """Aggregation of every PageReport, in audit order."""
    eco_index: float
    grade: str
    performance: Optional[float]
    accessibility: Optional[float]
    best_practices: Optional[float]
    global_note: float
    greenhouse_gases: float
    water: float
    visits: int
    greenhouse_gases_km: float
    water_shower: float
    thresholds: Thresholds = field(default_factory=Thresholds)
    pages: Tuple[PageReport, ...] = ()

    def to_dict(self) -> Dict:
        """Convert to dictionary for serialization."""
        return {
            "ecoIndex": self.eco_index,
            "grade": self.grade,
            "performance": self.performance,
            "accessibility": self.accessibility,
            "bestPractices": self.best_practices,
            "globalNote": self.global_note,
            "greenhouseGases": self.greenhouse_gases,
            "water": self.water,
            "visits": self.visits,
            "greenhouseGasesKm": self.greenhouse_gases_km,
            "waterShower": self.water_shower,
            "thresholds": {
                "pass": self.thresholds.pass_value,
                "fail": self.thresholds.fail_value,
            },
            "perPages": [page.to_dict() for page in self.pages],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "GlobalReport":
        """Rebuild a report from the output of ``to_dict``."""
        thresholds = Thresholds(
            data.get("thresholds", {}).get("pass", DEFAULT_PASS),
            data.get("thresholds", {}).get("fail", DEFAULT_FAIL),
        )
        pages: List[PageReport] = []
        for page in data.get("perPages", []):
            metrics = PageMetrics(
                url=page["url"],
                requests=page.get("requests", 0),
                size_kb=page.get("sizeKb", 0.0),
                dom_size=page.get("domSize", 0),
                performance=page.get("performance"),
                accessibility=page.get("accessibility"),
                best_practices=page.get("bestPractices"),
                failed_audits=tuple(
                    AuditFinding(a["category"], a["id"], a["title"], a.get("description", ""))
                    for a in page.get("failedAudits", [])
                ),
                lighthouse_report=page.get("lighthouseReport"),
            )
            pages.append(PageReport(
                metrics=metrics,
                eco_index=page["ecoIndex"],
                grade=page["grade"],
                greenhouse_gases=page["greenhouseGases"],
                water=page["water"],
                greenhouse_gases_km=page.get("greenhouseGasesKm", 0.0),
                water_shower=page.get("waterShower", 0.0),
                page_metrics=tuple(
                    Metric(m["name"], m["value"], Status(m["status"]), m["recommendation"])
                    for m in page.get("metrics", [])
                ),
                statuses={name: Status(s) for name, s in page.get("statuses", {}).items()},
                recommendation=page.get("recommendation", ""),
            ))

        return cls(
            eco_index=data["ecoIndex"],
            grade=data["grade"],
            performance=data.get("performance"),
            accessibility=data.get("accessibility"),
            best_practices=data.get("bestPractices"),
            global_note=data["globalNote"],
            greenhouse_gases=data["greenhouseGases"],
            water=data["water"],
            visits=data["visits"],
            greenhouse_gases_km=data["greenhouseGasesKm"],
            water_shower=data["waterShower"],
            thresholds=thresholds,
            pages=tuple(pages),
        )
