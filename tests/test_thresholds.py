"""Test the threshold classifier

value >= pass -> pass, fail <= value < pass -> warning, value < fail -> error.
"""

import pytest

from ecoindex_audit.models import Metric, Status, Thresholds
from ecoindex_audit.thresholds import (
    classify,
    css_class,
    metric_css_class,
    page_status,
    worst,
)

from conftest import make_page


@pytest.mark.parametrize("value,expected", [
    (100, Status.PASS),
    (90, Status.PASS),
    (89.99, Status.WARNING),
    (30, Status.WARNING),
    (29.99, Status.ERROR),
    (0, Status.ERROR),
    (None, Status.NOT_APPLICABLE),
])
def test_classify_boundaries(value, expected):
    """Partition at v == pass and v == fail with the default 90/30"""
    assert classify(value, Thresholds()) == expected


def test_classify_custom_thresholds():
    thresholds = Thresholds(pass_value=70, fail_value=50)

    assert classify(70, thresholds) == Status.PASS
    assert classify(69, thresholds) == Status.WARNING
    assert classify(50, thresholds) == Status.WARNING
    assert classify(49, thresholds) == Status.ERROR


def test_equal_thresholds_leave_no_warning_band():
    thresholds = Thresholds(pass_value=50, fail_value=50)

    assert classify(50, thresholds) == Status.PASS
    assert classify(49.9, thresholds) == Status.ERROR


def test_fail_above_pass_is_rejected():
    with pytest.raises(ValueError):
        Thresholds(pass_value=30, fail_value=90)


def test_css_class():
    thresholds = Thresholds()

    assert css_class(95, thresholds) == "lh-gauge__wrapper--pass"
    assert css_class(50, thresholds) == "lh-gauge__wrapper--average"
    assert css_class(10, thresholds) == "lh-gauge__wrapper--fail"
    assert css_class(None, thresholds) == "lh-gauge__wrapper--not-applicable"


def test_metric_css_class():
    assert metric_css_class(Metric("page_size", 3000, Status.ERROR, "")) == "error"
    assert metric_css_class(Metric("page_size", 1500, Status.WARNING, "")) == "warning"
    assert metric_css_class(Metric("page_size", 10, Status.PASS, "")) == ""
    assert metric_css_class(None) == ""


class TestPageStatus:
    """Worst status across scores and GreenIT metrics"""

    def test_all_passing(self):
        page = make_page(95, performance=100, accessibility=92, best_practices=90)
        assert page_status(page, Thresholds()) == Status.PASS

    def test_one_warning_score(self):
        page = make_page(95, performance=50, accessibility=100, best_practices=100)
        assert page_status(page, Thresholds()) == Status.WARNING

    def test_metric_error_wins(self):
        page = make_page(
            95, performance=100, accessibility=100, best_practices=100,
            page_metrics=[Metric("Page_complexity", 5000, Status.ERROR, "")],
        )
        assert page_status(page, Thresholds()) == Status.ERROR

    def test_missing_lighthouse_scores_are_ignored(self):
        page = make_page(95)
        assert page_status(page, Thresholds()) == Status.PASS


def test_worst_of_nothing_is_not_applicable():
    assert worst([]) == Status.NOT_APPLICABLE
