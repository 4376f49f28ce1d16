"""Scoring system for ecoindex-audit"""

from typing import Dict, List, Optional, Sequence
import logging

from ecoindex_audit import ecoindex
from ecoindex_audit.config import DEFAULT_VISITS, get_metric_limits
from ecoindex_audit.models import GlobalReport, PageMetrics, PageReport, Status, Thresholds
from ecoindex_audit.thresholds import classify

logger = logging.getLogger(__name__)

NO_RECOMMENDATION = "No recommendation, all GreenIT metrics are within their limits"


def _avg(values: Sequence[Optional[float]]) -> Optional[float]:
    """Mean of the present values, None when every value is missing"""
    present = [v for v in values if v is not None]
    return round(sum(present) / len(present), 2) if present else None


class ScoringSystem:
    """Turn raw page metrics into PageReports and aggregate them"""

    def __init__(self, thresholds: Optional[Thresholds] = None, visits: int = DEFAULT_VISITS,
                 metric_limits: Optional[Dict[str, Dict]] = None):
        self.thresholds = thresholds or Thresholds()
        self.visits = visits
        self.metric_limits = metric_limits or get_metric_limits()

    def score_page(self, metrics: PageMetrics) -> PageReport:
        """
        Score a single page.

        Args:
            metrics: Raw measurements collected for the URL

        Returns:
            PageReport with eco-index, grade, environmental estimates and statuses
        """
        eco_index = ecoindex.compute_ecoindex(metrics.dom_size, metrics.requests, metrics.size_kb)
        greenit = ecoindex.page_metrics(
            metrics.requests, metrics.size_kb, metrics.dom_size, self.metric_limits
        )

        statuses = {
            "ecoIndex": classify(eco_index, self.thresholds),
            "performance": classify(metrics.performance, self.thresholds),
            "accessibility": classify(metrics.accessibility, self.thresholds),
            "bestPractices": classify(metrics.best_practices, self.thresholds),
        }
        for metric in greenit:
            statuses[metric.name] = metric.status

        recommendations = [m.recommendation for m in greenit if m.status != Status.PASS]
        gases = ecoindex.greenhouse_gases(eco_index)
        water = ecoindex.water(eco_index)

        report = PageReport(
            metrics=metrics,
            eco_index=eco_index,
            grade=ecoindex.grade(eco_index),
            greenhouse_gases=gases,
            water=water,
            greenhouse_gases_km=ecoindex.greenhouse_gases_km(gases, self.visits),
            water_shower=ecoindex.water_shower(water, self.visits),
            page_metrics=greenit,
            statuses=statuses,
            recommendation="; ".join(recommendations) if recommendations else NO_RECOMMENDATION,
        )

        logger.info(f"{metrics.url}: EcoIndex {eco_index:.2f} ({report.grade})")
        return report

    def aggregate(self, pages: Sequence[PageReport]) -> GlobalReport:
        """
        Aggregate page reports into the global report.

        Page order is preserved. A Lighthouse category no page reported is
        None and left out of the global note. With no pages every score is
        0.0 and the grade is "N/A".
        """
        pages = tuple(pages)

        if pages:
            eco_index = _avg([p.eco_index for p in pages])
            performance = _avg([p.performance for p in pages])
            accessibility = _avg([p.accessibility for p in pages])
            best_practices = _avg([p.best_practices for p in pages])
            greenhouse_gases = _avg([p.greenhouse_gases for p in pages])
            water = _avg([p.water for p in pages])
            global_note = _avg([eco_index, performance, accessibility, best_practices])
            grade = ecoindex.grade(eco_index)
        else:
            eco_index = performance = accessibility = best_practices = 0.0
            greenhouse_gases = water = global_note = 0.0
            grade = "N/A"

        report = GlobalReport(
            eco_index=eco_index,
            grade=grade,
            performance=performance,
            accessibility=accessibility,
            best_practices=best_practices,
            global_note=global_note,
            greenhouse_gases=greenhouse_gases,
            water=water,
            visits=self.visits,
            greenhouse_gases_km=ecoindex.greenhouse_gases_km(greenhouse_gases, self.visits),
            water_shower=ecoindex.water_shower(water, self.visits),
            thresholds=self.thresholds,
            pages=pages,
        )

        logger.info(f"Aggregated {len(pages)} page(s): EcoIndex {eco_index:.2f} ({grade}), "
                    f"global note {global_note:.2f}")
        return report

    def score(self, metrics: List[PageMetrics]) -> GlobalReport:
        """Score every page, in order, then aggregate"""
        return self.aggregate([self.score_page(m) for m in metrics])
