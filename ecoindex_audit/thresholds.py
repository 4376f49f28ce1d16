"""Classification of scores and metrics against the pass/fail thresholds"""

from typing import Iterable, Optional

from ecoindex_audit.models import Metric, PageReport, Status, Thresholds

CSS_CLASSES = {
    Status.PASS: "lh-gauge__wrapper--pass",
    Status.WARNING: "lh-gauge__wrapper--average",
    Status.ERROR: "lh-gauge__wrapper--fail",
    Status.NOT_APPLICABLE: "lh-gauge__wrapper--not-applicable",
}

METRIC_CSS_CLASSES = {
    Status.PASS: "",
    Status.WARNING: "warning",
    Status.ERROR: "error",
    Status.NOT_APPLICABLE: "",
}

# Higher rank = worse
_SEVERITY = {
    Status.NOT_APPLICABLE: 0,
    Status.PASS: 1,
    Status.WARNING: 2,
    Status.ERROR: 3,
}


def classify(value: Optional[float], thresholds: Thresholds) -> Status:
    """
    Classify a 0-100 score.

    value >= pass           -> PASS
    fail <= value < pass    -> WARNING
    value < fail            -> ERROR
    missing value           -> NOT_APPLICABLE
    """
    if value is None:
        return Status.NOT_APPLICABLE
    if value >= thresholds.pass_value:
        return Status.PASS
    if value >= thresholds.fail_value:
        return Status.WARNING
    return Status.ERROR


def css_class(value: Optional[float], thresholds: Thresholds) -> str:
    """Gauge CSS class for a score"""
    return CSS_CLASSES[classify(value, thresholds)]


def metric_css_class(metric: Optional[Metric]) -> str:
    if metric is None:
        return ""
    return METRIC_CSS_CLASSES[metric.status]


def worst(statuses: Iterable[Status]) -> Status:
    result = Status.NOT_APPLICABLE
    for status in statuses:
        if _SEVERITY[status] > _SEVERITY[result]:
            result = status
    return result


def page_status(page: PageReport, thresholds: Thresholds) -> Status:
    """Worst status across the page scores and its GreenIT metrics"""
    scores = [page.eco_index, page.performance, page.accessibility, page.best_practices]
    statuses = [classify(score, thresholds) for score in scores]
    statuses.extend(metric.status for metric in page.page_metrics)
    return worst(statuses)


def global_status(note: Optional[float], thresholds: Thresholds) -> Status:
    return classify(note, thresholds)
