"""Console table output"""

from ecoindex_audit.models import GlobalReport
from ecoindex_audit.reporters.base import Reporter
from ecoindex_audit.thresholds import classify


def _fmt(value) -> str:
    return "-" if value is None else f"{value:.0f}"


class TableReporter(Reporter):
    name = "table"

    def render(self, report: GlobalReport) -> str:
        width = 110
        lines = []
        lines.append("=" * width)
        lines.append("                                   EcoIndex Audit")
        lines.append("=" * width)
        lines.append(f"{'#':<4}{'URL':<50}{'EcoIndex':<10}{'Grade':<7}{'Perf':<7}"
                     f"{'A11y':<7}{'BP':<7}{'Req':<6}{'KB':<9}{'DOM':<6}")
        lines.append("-" * width)

        for i, page in enumerate(report.pages, 1):
            url = page.url if len(page.url) <= 48 else page.url[:45] + "..."
            lines.append(
                f"{i:<4}{url:<50}{page.eco_index:<10.2f}{page.grade:<7}"
                f"{_fmt(page.performance):<7}{_fmt(page.accessibility):<7}{_fmt(page.best_practices):<7}"
                f"{page.metrics.requests:<6}{page.metrics.size_kb:<9.0f}{page.metrics.dom_size:<6}"
            )

        lines.append("-" * width)
        status = classify(report.eco_index, self.options.thresholds).value.upper()
        lines.append(f"EcoIndex: {report.eco_index:.2f} ({report.grade}) [{status}]  "
                     f"Performance: {_fmt(report.performance)}  "
                     f"Accessibility: {_fmt(report.accessibility)}  "
                     f"Best practices: {_fmt(report.best_practices)}  "
                     f"Global note: {report.global_note:.0f}")
        lines.append(f"Greenhouse gases: {report.greenhouse_gases} gCO2e/visit "
                     f"({report.greenhouse_gases_km} km by car for {report.visits} visits)")
        lines.append(f"Water: {report.water} cl/visit "
                     f"({report.water_shower} showers for {report.visits} visits)")
        lines.append("=" * width)
        return "\n".join(lines)
