"""Test the EcoIndex computation"""

import pytest

from ecoindex_audit import ecoindex
from ecoindex_audit.config import get_metric_limits
from ecoindex_audit.models import Status


def test_quantile_on_table_values():
    assert ecoindex.compute_quantile(ecoindex.QUANTILES_DOM, 0) == 0
    assert ecoindex.compute_quantile(ecoindex.QUANTILES_DOM, 47) == 1
    assert ecoindex.compute_quantile(ecoindex.QUANTILES_REQ, 49) == 6


def test_quantile_interpolates():
    # halfway between 47 (q=1) and 75 (q=2)
    assert ecoindex.compute_quantile(ecoindex.QUANTILES_DOM, 61) == pytest.approx(1.5)


def test_quantile_beyond_table():
    assert ecoindex.compute_quantile(ecoindex.QUANTILES_REQ, 10_000) == 20


def test_empty_page_scores_100():
    assert ecoindex.compute_ecoindex(0, 0, 0) == 100


def test_huge_page_scores_0():
    assert ecoindex.compute_ecoindex(10_000_000, 100_000, 1_000_000) == 0


def test_sixth_quantile_everywhere():
    """q=6 on every axis: 100 - 5 * (18 + 12 + 6) / 6 = 70"""
    assert ecoindex.compute_ecoindex(358, 49, 783.38) == 70.0


def test_ecoindex_stays_in_range():
    for dom, req, size in [(0, 0, 0), (500, 60, 1500), (3000, 400, 9000), (-5, -1, -1)]:
        score = ecoindex.compute_ecoindex(dom, req, size)
        assert 0 <= score <= 100


@pytest.mark.parametrize("score,expected", [
    (100, "A"), (80.01, "A"), (80, "B"), (70.5, "B"), (70, "C"), (55, "D"),
    (40, "E"), (25, "F"), (10.5, "F"), (10, "G"), (0, "G"),
])
def test_grade(score, expected):
    assert ecoindex.grade(score) == expected


def test_environmental_estimates():
    assert ecoindex.greenhouse_gases(100) == 2
    assert ecoindex.water(100) == 3
    assert ecoindex.greenhouse_gases(0) == 102
    assert ecoindex.water(0) == 153
    assert ecoindex.greenhouse_gases(70) == 32
    assert ecoindex.water(70) == 48


class TestPageMetrics:
    """GreenIT metrics with default limits"""

    def test_order_and_names(self):
        metrics = ecoindex.page_metrics(10, 100, 100)
        assert [m.name for m in metrics] == ["number_requests", "page_size", "Page_complexity"]

    def test_statuses(self):
        requests, size, dom = ecoindex.page_metrics(39, 1000, 1501)

        assert requests.status == Status.PASS
        assert size.status == Status.WARNING
        assert dom.status == Status.ERROR

    def test_upper_limit_is_still_warning(self):
        requests, _, _ = ecoindex.page_metrics(80, 10, 10)
        assert requests.status == Status.WARNING

        requests, _, _ = ecoindex.page_metrics(81, 10, 10)
        assert requests.status == Status.ERROR

    def test_recommendation_text(self):
        requests, size, dom = ecoindex.page_metrics(10, 100, 100)

        assert requests.recommendation == "Reduce the number of HTTP requests (< 40 requests)"
        assert size.recommendation == "Reduce the size of the page (< 1000 KB)"
        assert dom.recommendation == "Reduce the number of DOM elements (< 600 nodes)"

    def test_custom_limits(self):
        limits = get_metric_limits({"number_requests": {"good": 5, "bad": 8}})
        requests, _, _ = ecoindex.page_metrics(10, 100, 100, limits)

        assert requests.status == Status.ERROR
        assert "< 5 requests" in requests.recommendation
