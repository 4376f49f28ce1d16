"""CLI interface for ecoindex-audit"""

import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Tuple

import click

from ecoindex_audit import __version__
from ecoindex_audit.audit import EcoIndexAudit, check_gate
from ecoindex_audit.config import is_verbose, load_config_file
from ecoindex_audit.exceptions import EcoIndexAuditError
from ecoindex_audit.models import GlobalReport
from ecoindex_audit.options import AuditOptions
from ecoindex_audit.reporters import publish

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _fail(error):
    click.echo(f"[ERROR] {error}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Verbose logging (same as ECOINDEX_VERBOSE=1)")
def main(verbose: bool):
    """ecoindex-audit - environmental footprint audit of web pages

    Runs Lighthouse on each URL, computes the EcoIndex and renders
    table/CSV/JSON/Sonar/HTML reports.
    """
    _setup_logging(verbose or is_verbose())


def _output_options(func):
    options = [
        click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False),
                     help="YAML configuration file (default: ./ecoindex-audit.yml when present)"),
        click.option("--output", "outputs", multiple=True,
                     help="Output: table, csv, json, sonar, html or a module:function callback (repeatable)"),
        click.option("--sonarFilePath", "sonar_file_path",
                     help="File the Sonar issues are attached to (required by the sonar output)"),
        click.option("--outputPathDir", "output_dir", type=click.Path(file_okay=False),
                     help="Directory for report files (default: current directory)"),
        click.option("--pass", "pass_value", type=click.FloatRange(0, 100),
                     help="Score at or above which a result passes (default: 90)"),
        click.option("--fail", "fail_value", type=click.FloatRange(0, 100),
                     help="Score below which a result fails (default: 30)"),
        click.option("--lang", help="Language of the HTML report (default: en-GB)"),
        click.option("--minify/--no-minify", default=None, help="Minify the HTML report"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@main.command()
@click.option("--url", "urls", multiple=True, help="URL to audit (repeatable)")
@click.option("--ecoIndex", "eco_index_threshold", type=click.FloatRange(0, 100),
              help="Exit with an error when the global EcoIndex is below this value")
@click.option("--visits", type=click.IntRange(min=1),
              help="Number of visits used for the CO2 and water projections (default: 2000)")
@click.option("--lighthouse-report", "lighthouse_reports", multiple=True,
              type=click.Path(exists=True, dir_okay=False),
              help="Score a saved Lighthouse JSON report instead of running Lighthouse (repeatable)")
@_output_options
def audit(urls: Tuple[str], eco_index_threshold: Optional[float], visits: Optional[int],
          lighthouse_reports: Tuple[str], config_path: Optional[str], outputs: Tuple[str],
          sonar_file_path: Optional[str], output_dir: Optional[str], pass_value: Optional[float],
          fail_value: Optional[float], lang: Optional[str], minify: Optional[bool]):
    """Audit URLs and render the reports"""
    try:
        options = AuditOptions.build(
            load_config_file(Path(config_path) if config_path else None),
            urls=urls,
            eco_index_threshold=eco_index_threshold,
            visits=visits,
            lighthouse_reports=lighthouse_reports,
            outputs=outputs,
            sonar_file_path=sonar_file_path,
            output_dir=output_dir,
            pass_value=pass_value,
            fail_value=fail_value,
            lang=lang,
            minify=minify,
        )
        report = EcoIndexAudit(options).run()
    except EcoIndexAuditError as e:
        _fail(e)

    if not check_gate(report, options.eco_index_threshold):
        click.echo(f"[ERROR] EcoIndex {report.eco_index:.2f} is below the threshold "
                   f"{options.eco_index_threshold}", err=True)
        sys.exit(1)


@main.command()
@click.argument("results", type=click.Path(exists=True, dir_okay=False))
@_output_options
def report(results: str, config_path: Optional[str], outputs: Tuple[str],
           sonar_file_path: Optional[str], output_dir: Optional[str], pass_value: Optional[float],
           fail_value: Optional[float], lang: Optional[str], minify: Optional[bool]):
    """Render reports again from a saved json output (RESULTS)"""
    try:
        with open(results, "r", encoding="utf-8") as f:
            global_report = GlobalReport.from_dict(json.load(f))
    except (ValueError, KeyError) as e:
        _fail(f"Invalid results file {results}: {e}")

    try:
        file_config = load_config_file(Path(config_path) if config_path else None)
        file_config.pop("urls", None)
        options = AuditOptions.build(
            file_config,
            outputs=outputs,
            sonar_file_path=sonar_file_path,
            output_dir=output_dir,
            pass_value=pass_value if pass_value is not None else global_report.thresholds.pass_value,
            fail_value=fail_value if fail_value is not None else global_report.thresholds.fail_value,
            lang=lang,
            minify=minify,
        )
        publish(replace(global_report, thresholds=options.thresholds), options)
    except EcoIndexAuditError as e:
        _fail(e)


if __name__ == "__main__":
    main()
