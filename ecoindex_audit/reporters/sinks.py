"""Sinks forwarding the report to external systems"""

import importlib
import json
from typing import Callable
import logging

import requests

from ecoindex_audit.exceptions import ConfigurationError
from ecoindex_audit.models import GlobalReport

logger = logging.getLogger(__name__)

WEBHOOK_TIMEOUT = 30


def resolve_callback(reference: str) -> Callable[[GlobalReport], None]:
    """Import a ``package.module:function`` reference"""
    module_name, _, attr = reference.partition(":")
    if not module_name or not attr:
        raise ConfigurationError(f"Invalid callback '{reference}', expected 'module:function'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import callback module '{module_name}': {e}") from e

    callback = getattr(module, attr, None)
    if not callable(callback):
        raise ConfigurationError(f"'{reference}' is not a callable")
    return callback


def run_callback(reference: str, report: GlobalReport) -> None:
    callback = resolve_callback(reference)
    logger.info(f"Sending report to callback {reference}")
    callback(report)


def post_webhook(url: str, report: GlobalReport, session=None) -> None:
    """POST the JSON report to a webhook"""
    session = session or requests.Session()
    logger.info(f"Posting report to {url}")
    response = session.post(
        url,
        data=json.dumps(report.to_dict()),
        headers={"Content-Type": "application/json"},
        timeout=WEBHOOK_TIMEOUT,
    )
    response.raise_for_status()
