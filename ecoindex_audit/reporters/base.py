"""Base class for presentation adapters"""

from pathlib import Path
from typing import Optional
import logging

from ecoindex_audit.models import GlobalReport
from ecoindex_audit.options import AuditOptions

logger = logging.getLogger(__name__)


class Reporter:
    """
    Stateless formatter for a GlobalReport.

    Subclasses implement ``render``. Reporters with a ``filename`` write
    their output into the configured output directory; the others print it.
    """

    name: str = ""
    filename: Optional[str] = None

    def __init__(self, options: AuditOptions):
        self.options = options

    def render(self, report: GlobalReport) -> str:
        raise NotImplementedError

    def publish(self, report: GlobalReport) -> Optional[Path]:
        content = self.render(report)
        if self.filename is None:
            print(content)
            return None

        self.options.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.options.output_dir / self.filename
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        logger.info(f"Saved {self.name} report to {path}")
        return path
