"""
SonarQube generic issue report

Scores below ``fail`` are MAJOR issues, scores in [fail, pass) are MINOR.
Every Lighthouse audit scoring 0 is a MAJOR issue, and each GreenIT metric
in warning (MINOR) or error (MAJOR) produces exactly one issue.
"""

import json
from typing import Dict, List, Optional

from ecoindex_audit.exceptions import ConfigurationError
from ecoindex_audit.models import GlobalReport, Status
from ecoindex_audit.reporters.base import Reporter
from ecoindex_audit.thresholds import classify

ENGINE_ECOINDEX = "eco-index"
ENGINE_LIGHTHOUSE = "lighthouse"

METRIC_MESSAGES = {
    "number_requests": "The number of HTTP requests ({value}) is above the recommendation: {recommendation}",
    "page_size": "The size of the page ({value} KB) is above the recommendation: {recommendation}",
    "Page_complexity": "The complexity of the page ({value} DOM elements) is above the recommendation: {recommendation}",
}

SEVERITIES = {
    Status.WARNING: "MINOR",
    Status.ERROR: "MAJOR",
}


class SonarReporter(Reporter):
    name = "sonar"
    filename = "report.json"

    def _issue(self, engine_id: str, rule_id: str, severity: str, message: str) -> Dict:
        return {
            "engineId": engine_id,
            "ruleId": rule_id,
            "severity": severity,
            "type": "BUG",
            "primaryLocation": {
                "message": message,
                "filePath": self.options.sonar_file_path,
            },
        }

    def _score_issue(self, value: Optional[float], rule_id: str, label: str,
                     engine_id: str) -> Optional[Dict]:
        thresholds = self.options.thresholds
        status = classify(value, thresholds)
        if status == Status.ERROR:
            limit = thresholds.fail_value
        elif status == Status.WARNING:
            limit = thresholds.pass_value
        else:
            return None
        return self._issue(
            engine_id, rule_id, SEVERITIES[status],
            f"Your {label} ({value}) is below the configured threshold ({limit})",
        )

    def issues(self, report: GlobalReport) -> List[Dict]:
        """Sonar issues for the report, in a stable order"""
        if not self.options.sonar_file_path:
            raise ConfigurationError("You should define the sonarFilePath property")

        issues = []

        issue = self._score_issue(report.eco_index, "eco-index-below-threshold", "ecoindex",
                                  ENGINE_ECOINDEX)
        if issue:
            issues.append(issue)

        for page in report.pages:
            for audit in page.metrics.failed_audits:
                issues.append(self._issue(
                    ENGINE_LIGHTHOUSE,
                    f"{audit.category}-{audit.audit_id}",
                    "MAJOR",
                    f"{audit.title} - {audit.description} ({page.url})",
                ))

        for page in report.pages:
            for metric in page.page_metrics:
                if metric.status not in SEVERITIES:
                    continue
                message = METRIC_MESSAGES[metric.name].format(
                    value=metric.value, recommendation=metric.recommendation
                )
                issues.append(self._issue(
                    ENGINE_ECOINDEX,
                    f"eco-index-{metric.name.lower()}",
                    SEVERITIES[metric.status],
                    f"{message} ({page.url})",
                ))

        for value, rule_id, label in [
            (report.performance, "performance-below-threshold", "performance"),
            (report.accessibility, "accessibility-below-threshold", "accessibility"),
            (report.best_practices, "bestPractices-below-threshold", "bestPractices"),
        ]:
            issue = self._score_issue(value, rule_id, label, ENGINE_LIGHTHOUSE)
            if issue:
                issues.append(issue)

        return issues

    def render(self, report: GlobalReport) -> str:
        return json.dumps({"issues": self.issues(report)}, indent=2)
