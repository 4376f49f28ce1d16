"""Shared fixtures: Lighthouse reports and scored pages"""

import json
from pathlib import Path
import sys

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from ecoindex_audit.lighthouse import extract_metrics
from ecoindex_audit.models import PageMetrics, PageReport, Thresholds
from ecoindex_audit.options import AuditOptions
from ecoindex_audit.scoring import ScoringSystem
from ecoindex_audit.thresholds import classify


def make_lighthouse_report(url="https://example.com/", requests=49, size_kb=783.38, dom=358,
                           performance=0.95, accessibility=0.85, best_practices=0.2):
    """Minimal Lighthouse JSON report.

    With the defaults: EcoIndex 70.0 (grade C), requests in warning,
    accessibility in warning, best practices in error, two failed audits.
    """
    return {
        "requestedUrl": url,
        "finalUrl": url,
        "categories": {
            "performance": {
                "score": performance,
                "auditRefs": [{"id": "render-blocking-resources"}, {"id": "dom-size"}],
            },
            "accessibility": {
                "score": accessibility,
                "auditRefs": [{"id": "image-alt"}],
            },
            "best-practices": {
                "score": best_practices,
                "auditRefs": [{"id": "is-on-https"}],
            },
        },
        "audits": {
            "network-requests": {"details": {"items": [{"url": f"{url}{i}"} for i in range(requests)]}},
            "total-byte-weight": {"numericValue": size_kb * 1024},
            "dom-size": {"numericValue": dom, "score": 0.9, "title": "Avoids an excessive DOM size"},
            "render-blocking-resources": {"score": 1, "title": "Eliminate render-blocking resources"},
            "image-alt": {
                "score": 0,
                "title": "Image elements do not have [alt] attributes",
                "description": "Informative elements should aim for short, descriptive alternate text.",
            },
            "is-on-https": {
                "score": 0,
                "title": "Does not use HTTPS",
                "description": "All sites should be protected with HTTPS.",
            },
        },
    }


def make_page(eco_index, url="https://example.com/", performance=None, accessibility=None,
              best_practices=None, page_metrics=(), thresholds=None):
    """PageReport with a given eco-index, bypassing the computation"""
    thresholds = thresholds or Thresholds()
    return PageReport(
        metrics=PageMetrics(
            url=url, requests=10, size_kb=100.0, dom_size=100,
            performance=performance, accessibility=accessibility, best_practices=best_practices,
        ),
        eco_index=eco_index,
        grade="A",
        greenhouse_gases=2.5,
        water=3.75,
        page_metrics=tuple(page_metrics),
        statuses={"ecoIndex": classify(eco_index, thresholds)},
    )


@pytest.fixture
def lighthouse_report():
    return make_lighthouse_report()


@pytest.fixture
def lighthouse_report_file(tmp_path, lighthouse_report):
    path = tmp_path / "home.report.json"
    path.write_text(json.dumps(lighthouse_report), encoding="utf-8")
    return path


@pytest.fixture
def options(tmp_path):
    return AuditOptions(
        urls=["https://example.com/"],
        outputs=["json"],
        output_dir=tmp_path / "out",
        sonar_file_path="package.json",
    )


@pytest.fixture
def global_report(lighthouse_report):
    scorer = ScoringSystem()
    return scorer.aggregate([
        scorer.score_page(extract_metrics(lighthouse_report)),
        scorer.score_page(extract_metrics(make_lighthouse_report(
            url="https://example.com/about", requests=10, size_kb=200, dom=100,
            performance=1, accessibility=1, best_practices=1,
        ))),
    ])
