"""CSV output, one row per page followed by the global row"""

import csv
import io

from ecoindex_audit.models import GlobalReport
from ecoindex_audit.reporters.base import Reporter

HEADER = [
    "url", "ecoindex", "grade", "greenhouse_gases", "water",
    "number_requests", "page_size", "page_complexity",
    "performance", "accessibility", "best_practices",
]


def _cell(value):
    return "" if value is None else value


class CsvReporter(Reporter):
    name = "csv"
    filename = "report.csv"

    def render(self, report: GlobalReport) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(HEADER)

        for page in report.pages:
            writer.writerow([
                page.url,
                page.eco_index,
                page.grade,
                page.greenhouse_gases,
                page.water,
                page.metrics.requests,
                page.metrics.size_kb,
                page.metrics.dom_size,
                _cell(page.performance),
                _cell(page.accessibility),
                _cell(page.best_practices),
            ])

        writer.writerow([
            "global",
            report.eco_index,
            report.grade,
            report.greenhouse_gases,
            report.water,
            "", "", "",
            _cell(report.performance),
            _cell(report.accessibility),
            _cell(report.best_practices),
        ])
        return buffer.getvalue()
