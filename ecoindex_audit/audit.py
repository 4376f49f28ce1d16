"""
Audit orchestration

Pages are processed one after the other: Lighthouse audits the URL (or a
saved report is loaded), the metrics are scored, and once every page is
done the global report is aggregated and sent to each configured output.
"""

from pathlib import Path
from typing import List, Optional
import logging

from tqdm import tqdm

from ecoindex_audit import lighthouse
from ecoindex_audit.exceptions import ConfigurationError
from ecoindex_audit.models import GlobalReport, PageMetrics, PageReport
from ecoindex_audit.options import AuditOptions
from ecoindex_audit.reporters import check_outputs, publish
from ecoindex_audit.scoring import ScoringSystem

logger = logging.getLogger(__name__)


class EcoIndexAudit:
    """Run an eco-index audit over the configured URLs"""

    def __init__(self, options: AuditOptions, runner: Optional[lighthouse.LighthouseRunner] = None):
        self.options = options
        self.runner = runner or lighthouse.LighthouseRunner(output_dir=options.output_dir / "lighthouse")
        self.scorer = ScoringSystem(
            thresholds=options.thresholds,
            visits=options.visits,
            metric_limits=options.metric_limits,
        )

    def _collect_saved(self) -> List[PageMetrics]:
        metrics = []
        for path in self.options.lighthouse_reports:
            report = lighthouse.load_report(Path(path))
            metrics.append(lighthouse.extract_metrics(report, str(path)))
        return metrics

    def collect(self) -> List[PageReport]:
        """Score every page in order"""
        if not self.options.urls and not self.options.lighthouse_reports:
            raise ConfigurationError("No URL to audit, use --url or the 'urls' key of the config file")

        pages = []
        for metrics in self._collect_saved():
            pages.append(self.scorer.score_page(metrics))

        urls = self.options.urls
        for index, url in enumerate(tqdm(urls, desc="Auditing", unit="page", disable=len(urls) < 2), 1):
            metrics = self.runner.collect(url, index)
            pages.append(self.scorer.score_page(metrics))
        return pages

    def run(self) -> GlobalReport:
        check_outputs(self.options)
        report = self.scorer.aggregate(self.collect())
        publish(report, self.options)
        return report


def check_gate(report: GlobalReport, eco_index_threshold: Optional[float]) -> bool:
    """True when the global eco-index reaches the CI threshold (or no threshold is set)"""
    if eco_index_threshold is None:
        return True
    if report.eco_index < eco_index_threshold:
        logger.error(f"EcoIndex {report.eco_index:.2f} is below the threshold {eco_index_threshold}")
        return False
    return True
