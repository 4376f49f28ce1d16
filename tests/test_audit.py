"""Test the audit orchestration with a fake Lighthouse runner"""

import json

import pytest

from ecoindex_audit.audit import EcoIndexAudit, check_gate
from ecoindex_audit.exceptions import ConfigurationError
from ecoindex_audit.lighthouse import extract_metrics
from ecoindex_audit.scoring import ScoringSystem

from conftest import make_lighthouse_report, make_page


class FakeRunner:
    """Stands in for LighthouseRunner, records the audited URLs"""

    def __init__(self):
        self.urls = []

    def collect(self, url, index=1):
        self.urls.append((index, url))
        return extract_metrics(make_lighthouse_report(url=url))


def test_pages_are_audited_in_order(options):
    options.urls = ["https://example.com/", "https://example.com/a", "https://example.com/b"]
    runner = FakeRunner()

    report = EcoIndexAudit(options, runner=runner).run()

    assert runner.urls == [(1, "https://example.com/"), (2, "https://example.com/a"),
                           (3, "https://example.com/b")]
    assert [p.url for p in report.pages] == options.urls
    assert report.eco_index == 70.0


def test_results_written(options):
    EcoIndexAudit(options, runner=FakeRunner()).run()

    data = json.loads((options.output_dir / "results.json").read_text(encoding="utf-8"))
    assert data["perPages"][0]["url"] == "https://example.com/"


def test_saved_reports_come_first(options, lighthouse_report_file):
    options.urls = ["https://example.com/live"]
    options.lighthouse_reports = [str(lighthouse_report_file)]

    report = EcoIndexAudit(options, runner=FakeRunner()).run()

    assert [p.url for p in report.pages] == ["https://example.com/", "https://example.com/live"]
    assert report.pages[0].metrics.lighthouse_report == str(lighthouse_report_file)


def test_nothing_to_audit(options):
    options.urls = []

    with pytest.raises(ConfigurationError, match="No URL"):
        EcoIndexAudit(options, runner=FakeRunner()).run()


def test_sonar_misconfiguration_fails_before_auditing(options):
    options.outputs = ["sonar"]
    options.sonar_file_path = None
    runner = FakeRunner()

    with pytest.raises(ConfigurationError):
        EcoIndexAudit(options, runner=runner).run()
    assert runner.urls == []


def test_thresholds_and_visits_reach_the_scorer(options):
    options.pass_value = 60
    options.fail_value = 50
    options.visits = 10

    audit = EcoIndexAudit(options, runner=FakeRunner())
    report = audit.run()

    assert report.thresholds.pass_value == 60
    assert report.visits == 10
    assert report.pages[0].statuses["ecoIndex"].value == "pass"


class TestGate:

    def test_no_threshold(self):
        assert check_gate(ScoringSystem().aggregate([make_page(10)]), None)

    def test_above_threshold(self):
        assert check_gate(ScoringSystem().aggregate([make_page(60)]), 50)

    def test_at_threshold(self):
        assert check_gate(ScoringSystem().aggregate([make_page(50)]), 50)

    def test_below_threshold(self):
        assert not check_gate(ScoringSystem().aggregate([make_page(49.99)]), 50)
