"""
Lighthouse integration

Lighthouse drives the headless browser and audits the page. We only run
the CLI and read its JSON report: category scores, request count,
transferred bytes, DOM size and the audits that failed outright.
"""

import json
import subprocess
import tempfile
from pathlib import Path
from typing import Dict, List, Optional
import logging

from ecoindex_audit.config import LIGHTHOUSE_CATEGORIES, LIGHTHOUSE_COMMAND, LIGHTHOUSE_TIMEOUT
from ecoindex_audit.exceptions import LighthouseError
from ecoindex_audit.models import AuditFinding, PageMetrics

logger = logging.getLogger(__name__)


def load_report(path: Path) -> Dict:
    """Load a Lighthouse JSON report saved on disk"""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise LighthouseError(f"Lighthouse report not found: {path}") from e
    except json.JSONDecodeError as e:
        raise LighthouseError(f"Invalid Lighthouse report {path}: {e}") from e


def _category_score(report: Dict, category_id: str) -> Optional[int]:
    category = report.get("categories", {}).get(category_id)
    if not category or category.get("score") is None:
        return None
    return int(round(category["score"] * 100))


def _failed_audits(report: Dict) -> List[AuditFinding]:
    audits = report.get("audits", {})
    findings = []
    for category_id, category in report.get("categories", {}).items():
        for ref in category.get("auditRefs", []):
            audit = audits.get(ref.get("id"))
            if audit and audit.get("score") == 0:
                findings.append(AuditFinding(
                    category=category_id,
                    audit_id=ref["id"],
                    title=audit.get("title", ref["id"]),
                    description=audit.get("description", ""),
                ))
    return findings


def extract_metrics(report: Dict, report_path: Optional[str] = None) -> PageMetrics:
    """
    Build PageMetrics from a Lighthouse JSON report.

    Args:
        report: Parsed Lighthouse report
        report_path: Where the report lives, linked from the HTML report

    Returns:
        PageMetrics for the audited URL
    """
    audits = report.get("audits", {})
    url = report.get("finalDisplayedUrl") or report.get("finalUrl") or report.get("requestedUrl")
    if not url:
        raise LighthouseError("Lighthouse report does not contain the audited URL")

    network = audits.get("network-requests", {}).get("details", {}).get("items", [])
    total_bytes = audits.get("total-byte-weight", {}).get("numericValue", 0) or 0
    dom_size = audits.get("dom-size", {}).get("numericValue", 0) or 0

    scores = {
        field: _category_score(report, category_id)
        for category_id, field in LIGHTHOUSE_CATEGORIES.items()
    }

    metrics = PageMetrics(
        url=url,
        requests=len(network),
        size_kb=round(total_bytes / 1024, 2),
        dom_size=int(dom_size),
        failed_audits=tuple(_failed_audits(report)),
        lighthouse_report=report_path,
        **scores,
    )
    logger.debug(f"Extracted metrics for {url}: requests={metrics.requests}, "
                 f"size={metrics.size_kb}KB, dom={metrics.dom_size}")
    return metrics


class LighthouseRunner:
    """Run the Lighthouse CLI against a URL"""

    def __init__(self, command: str = LIGHTHOUSE_COMMAND, timeout: int = LIGHTHOUSE_TIMEOUT,
                 output_dir: Optional[Path] = None, extra_args: Optional[List[str]] = None):
        self.command = command
        self.timeout = timeout
        self.output_dir = Path(output_dir) if output_dir else None
        self.extra_args = extra_args or ["--quiet", "--chrome-flags=--headless"]

    def _report_path(self, directory: Path, index: int) -> Path:
        return directory / f"lighthouse-{index}.report.json"

    def run(self, url: str, index: int = 1) -> Dict:
        """
        Audit a URL.

        The JSON report is kept in output_dir when one was given, otherwise
        it is written to a temporary directory and discarded.
        """
        if self.output_dir:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            return self._run(url, self._report_path(self.output_dir, index))

        with tempfile.TemporaryDirectory() as tmpdir:
            return self._run(url, self._report_path(Path(tmpdir), index))

    def _run(self, url: str, report_path: Path) -> Dict:
        cmd = [
            self.command,
            url,
            "--output=json",
            f"--output-path={report_path}",
            *self.extra_args,
        ]
        logger.info(f"Running Lighthouse for {url}")
        logger.debug(" ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise LighthouseError(f"Lighthouse timed out after {self.timeout}s for {url}") from e
        except FileNotFoundError as e:
            raise LighthouseError(
                f"Unable to run '{self.command}'. Install Lighthouse with: npm install -g lighthouse"
            ) from e

        if result.returncode != 0:
            logger.error(f"Lighthouse failed for {url}: {result.stderr}")
            raise LighthouseError(f"Lighthouse failed for {url}: {result.stderr.strip()}")

        report = load_report(report_path)
        if self.output_dir:
            report["_reportPath"] = str(report_path)
        return report

    def collect(self, url: str, index: int = 1) -> PageMetrics:
        report = self.run(url, index)
        return extract_metrics(report, report.pop("_reportPath", None))
