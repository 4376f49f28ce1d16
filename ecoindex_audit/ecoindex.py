"""
EcoIndex computation

EcoIndex = 100 - 5 x (3 x Q_dom + 2 x Q_req + Q_size) / 6

Each Q is the position of the page measurement within the quantile tables
published by the GreenIT eco-index project (HTTP Archive reference sample).
"""

from typing import Dict, List, Optional, Sequence, Tuple
import logging

from ecoindex_audit.config import CAR_GCO2E_PER_KM, METRIC_LIMITS, SHOWER_LITRES
from ecoindex_audit.models import Metric, Status

logger = logging.getLogger(__name__)


QUANTILES_DOM = [
    0, 47, 75, 159, 233, 298, 358, 417, 476, 537, 603, 674, 753, 843, 949,
    1076, 1237, 1459, 1801, 2479, 594601,
]
QUANTILES_REQ = [
    0, 2, 15, 25, 34, 42, 49, 56, 63, 70, 78, 86, 95, 105, 117, 130, 147,
    170, 205, 281, 3920,
]
QUANTILES_SIZE = [
    0, 1.37, 144.7, 319.53, 479.46, 631.97, 783.38, 937.91, 1098.62, 1265.47,
    1448.32, 1648.27, 1876.08, 2142.06, 2465.37, 2866.31, 3401.59, 4155.73,
    5400.08, 8037.54, 223212.26,
]

# Lower bound (exclusive) for each grade
GRADES: List[Tuple[str, float]] = [
    ("A", 80),
    ("B", 70),
    ("C", 55),
    ("D", 40),
    ("E", 25),
    ("F", 10),
]

RECOMMENDATIONS = {
    "number_requests": "Reduce the number of HTTP requests (< {good} {unit})",
    "page_size": "Reduce the size of the page (< {good} {unit})",
    "Page_complexity": "Reduce the number of DOM elements (< {good} {unit})",
}


def compute_quantile(quantiles: Sequence[float], value: float) -> float:
    """Interpolated position of value within the quantile table"""
    for i in range(1, len(quantiles)):
        if value < quantiles[i]:
            return i - 1 + (value - quantiles[i - 1]) / (quantiles[i] - quantiles[i - 1])
    return float(len(quantiles) - 1)


def compute_ecoindex(dom: float, requests: float, size_kb: float) -> float:
    """EcoIndex (0-100, two decimals) from DOM size, request count and KB transferred"""
    q_dom = compute_quantile(QUANTILES_DOM, max(dom, 0))
    q_req = compute_quantile(QUANTILES_REQ, max(requests, 0))
    q_size = compute_quantile(QUANTILES_SIZE, max(size_kb, 0))

    score = 100 - 5 * (3 * q_dom + 2 * q_req + q_size) / 6
    score = max(0.0, min(100.0, score))

    logger.debug(f"EcoIndex: {score:.2f} (dom={dom}, requests={requests}, size={size_kb}KB)")
    return round(score, 2)


def grade(eco_index: float) -> str:
    for letter, lower_bound in GRADES:
        if eco_index > lower_bound:
            return letter
    return "G"


def greenhouse_gases(eco_index: float) -> float:
    """gCO2e emitted per page visit"""
    return round(2 + 2 * (50 * (100 - eco_index)) / 100, 2)


def water(eco_index: float) -> float:
    """Centilitres of water consumed per page visit"""
    return round(3 + 3 * (50 * (100 - eco_index)) / 100, 2)


def greenhouse_gases_km(gases: float, visits: int) -> float:
    """Kilometres driven by car emitting as much as ``visits`` page visits"""
    return round(gases * visits / CAR_GCO2E_PER_KM, 2)


def water_shower(water_cl: float, visits: int) -> float:
    """Showers using as much water as ``visits`` page visits"""
    return round(water_cl * visits / 100 / SHOWER_LITRES, 2)


def _metric_status(value: float, good: float, bad: float) -> Status:
    if value < good:
        return Status.PASS
    if value <= bad:
        return Status.WARNING
    return Status.ERROR


def page_metrics(requests: int, size_kb: float, dom_size: int,
                 limits: Optional[Dict[str, Dict]] = None) -> Tuple[Metric, ...]:
    """
    GreenIT metrics for a page.

    Args:
        requests: Number of HTTP requests
        size_kb: Transferred size in KB
        dom_size: Number of DOM elements
        limits: Per-metric {"good", "bad", "unit"} limits (defaults to METRIC_LIMITS)

    Returns:
        Tuple of Metric in a stable order: requests, size, complexity
    """
    limits = limits or METRIC_LIMITS
    values = {
        "number_requests": requests,
        "page_size": round(size_kb, 2),
        "Page_complexity": dom_size,
    }

    metrics = []
    for name, value in values.items():
        limit = limits[name]
        metrics.append(Metric(
            name=name,
            value=value,
            status=_metric_status(value, limit["good"], limit["bad"]),
            recommendation=RECOMMENDATIONS[name].format(
                good=limit["good"], unit=limit.get("unit", "")
            ).replace(" )", ")"),
        ))
    return tuple(metrics)
