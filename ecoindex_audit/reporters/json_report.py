"""JSON output of the full report"""

import json

from ecoindex_audit.models import GlobalReport
from ecoindex_audit.reporters.base import Reporter


class JsonReporter(Reporter):
    name = "json"
    filename = "results.json"

    def render(self, report: GlobalReport) -> str:
        return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)
