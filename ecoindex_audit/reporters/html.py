"""HTML report rendered with Jinja2 templates"""

import re
import shutil
from pathlib import Path
from typing import Dict, Optional
import logging

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ecoindex_audit.config import TEMPLATES_DIR
from ecoindex_audit.models import GlobalReport, PageReport
from ecoindex_audit.reporters.base import Reporter
from ecoindex_audit.thresholds import css_class, global_status, metric_css_class, page_status
from ecoindex_audit.translations import load_translations

logger = logging.getLogger(__name__)

GAUGE_CIRCUMFERENCE = 351.858

PAGE_ICONS = {
    "error": "&#10060;",
    "warning": "&#9888;",
}

_BETWEEN_TAGS = re.compile(r">\s+<")
_COMMENTS = re.compile(r"<!--.*?-->", re.DOTALL)


def minify_html(html: str) -> str:
    """Drop comments and collapse whitespace between tags to one space"""
    html = _COMMENTS.sub("", html)
    html = _BETWEEN_TAGS.sub("> <", html)
    return html.strip()


class HtmlReporter(Reporter):
    name = "html"
    filename = "report.html"

    def __init__(self, options, template_dir: Optional[Path] = None):
        super().__init__(options)
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir or TEMPLATES_DIR)),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["gauge_class"] = self._gauge_class
        self.env.filters["gauge_dash"] = self._gauge_dash
        self.env.filters["metric_class"] = metric_css_class

    def _gauge_class(self, value) -> str:
        return css_class(value, self.options.thresholds)

    @staticmethod
    def _gauge_dash(value) -> str:
        filled = (value or 0) / 100 * GAUGE_CIRCUMFERENCE
        return f"{filled:.2f} {GAUGE_CIRCUMFERENCE}"

    def _copy_source_report(self, number: int, page: PageReport) -> Optional[str]:
        """Copy the page's Lighthouse report next to report.html and return its relative link

        The copy is prefixed with the page number so reports sharing a file
        name do not overwrite each other.
        """
        source = page.metrics.lighthouse_report
        if not source:
            return None
        source = Path(source)
        if not source.exists():
            logger.warning(f"Lighthouse report {source} not found, the link is omitted")
            return None

        target_dir = self.options.output_dir / "lighthouse"
        target_dir.mkdir(parents=True, exist_ok=True)
        if source.resolve().parent == target_dir.resolve():
            return f"lighthouse/{source.name}"
        name = f"{number}-{source.name}"
        shutil.copyfile(source, target_dir / name)
        return f"lighthouse/{name}"

    def _page_context(self, number: int, page: PageReport) -> Dict:
        logger.debug(f"Populate report for page {number}: {page.url}")
        status = page_status(page, self.options.thresholds).value
        return {
            "number": number,
            "page": page,
            "status": status,
            "icon": PAGE_ICONS.get(status, ""),
            "lighthouse_link": self._copy_source_report(number, page),
            "requests": page.metric("number_requests"),
            "size": page.metric("page_size"),
            "complexity": page.metric("Page_complexity"),
        }

    def render(self, report: GlobalReport) -> str:
        logger.debug("Generate HTML report")
        translations = load_translations(self.options.lang)

        template = self.env.get_template("report.html")
        html = template.render(
            lang=self.options.lang,
            t=translations,
            report=report,
            global_status=global_status(report.global_note, self.options.thresholds).value,
            pages=[self._page_context(i, page) for i, page in enumerate(report.pages, 1)],
        )

        if self.options.minify:
            html = minify_html(html)
        return html
