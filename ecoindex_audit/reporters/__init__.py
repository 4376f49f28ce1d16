"""Presentation adapters and output sinks"""

from typing import Dict, List, Type
import logging

from ecoindex_audit.exceptions import ConfigurationError
from ecoindex_audit.models import GlobalReport
from ecoindex_audit.options import AuditOptions
from ecoindex_audit.reporters.base import Reporter
from ecoindex_audit.reporters.csv_report import CsvReporter
from ecoindex_audit.reporters.html import HtmlReporter
from ecoindex_audit.reporters.json_report import JsonReporter
from ecoindex_audit.reporters.sinks import post_webhook, run_callback
from ecoindex_audit.reporters.sonar import SonarReporter
from ecoindex_audit.reporters.table import TableReporter

logger = logging.getLogger(__name__)

REPORTERS: Dict[str, Type[Reporter]] = {
    "table": TableReporter,
    "csv": CsvReporter,
    "json": JsonReporter,
    "sonar": SonarReporter,
    "html": HtmlReporter,
}


def get_reporter(name: str, options: AuditOptions) -> Reporter:
    try:
        return REPORTERS[name](options)
    except KeyError:
        raise ConfigurationError(f"Unknown output format '{name}'")


def check_outputs(options: AuditOptions) -> None:
    """Fail fast on output configuration that would only break after the audit"""
    if "sonar" in options.outputs and not options.sonar_file_path:
        raise ConfigurationError("You should define the sonarFilePath property")


def publish(report: GlobalReport, options: AuditOptions) -> List:
    """
    Send the report to every configured output.

    Outputs are format names, ``module:function`` callbacks, or
    ``{"callback": ...}`` / ``{"webhook": url}`` mappings from the config file.
    Sonar configuration is checked before anything is written.
    """
    check_outputs(options)

    written = []
    for output in options.outputs:
        if isinstance(output, dict):
            if "webhook" in output:
                post_webhook(output["webhook"], report)
            else:
                run_callback(output["callback"], report)
        elif ":" in output:
            run_callback(output, report)
        else:
            path = get_reporter(output, options).publish(report)
            if path:
                written.append(path)
    return written


__all__ = [
    "REPORTERS",
    "Reporter",
    "check_outputs",
    "get_reporter",
    "publish",
]
