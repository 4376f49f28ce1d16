"""Audit options merged from defaults, the YAML config file and CLI flags"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ecoindex_audit.config import (
    DEFAULT_FAIL,
    DEFAULT_LANG,
    DEFAULT_PASS,
    DEFAULT_VISITS,
    OUTPUT_FORMATS,
    default_outputs,
    get_metric_limits,
)
from ecoindex_audit.exceptions import ConfigurationError
from ecoindex_audit.models import Thresholds

# Config file keys -> AuditOptions fields
_FILE_KEYS = {
    "urls": "urls",
    "output": "outputs",
    "pass": "pass_value",
    "fail": "fail_value",
    "ecoIndex": "eco_index_threshold",
    "visits": "visits",
    "lang": "lang",
    "sonarFilePath": "sonar_file_path",
    "outputPathDir": "output_dir",
    "minify": "minify",
    "lighthouseReports": "lighthouse_reports",
    "metrics": "metric_limits",
}


@dataclass
class AuditOptions:
    urls: List[str] = field(default_factory=list)
    outputs: List[Union[str, Dict[str, str]]] = field(default_factory=default_outputs)
    pass_value: float = DEFAULT_PASS
    fail_value: float = DEFAULT_FAIL
    eco_index_threshold: Optional[float] = None
    visits: int = DEFAULT_VISITS
    lang: str = DEFAULT_LANG
    sonar_file_path: Optional[str] = None
    output_dir: Path = field(default_factory=Path.cwd)
    minify: bool = True
    lighthouse_reports: List[str] = field(default_factory=list)
    metric_limits: Dict[str, Dict[str, Any]] = field(default_factory=get_metric_limits)

    def __post_init__(self):
        self.output_dir = Path(self.output_dir)
        self.metric_limits = get_metric_limits(self.metric_limits)
        for output in self.outputs:
            if isinstance(output, str) and output not in OUTPUT_FORMATS and ":" not in output:
                raise ConfigurationError(
                    f"Unknown output '{output}', expected one of {', '.join(OUTPUT_FORMATS)} "
                    f"or a 'module:function' callback"
                )

    @property
    def thresholds(self) -> Thresholds:
        try:
            return Thresholds(self.pass_value, self.fail_value)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    @classmethod
    def build(cls, file_config: Optional[Dict[str, Any]] = None, **overrides) -> "AuditOptions":
        """
        Merge a parsed config file with CLI overrides.

        Overrides set to None (or empty sequences) leave the file value in place.
        """
        values: Dict[str, Any] = {}
        for key, value in (file_config or {}).items():
            values[_FILE_KEYS[key]] = value
        for name, value in overrides.items():
            if value is None or (isinstance(value, (list, tuple)) and not value):
                continue
            values[name] = list(value) if isinstance(value, tuple) else value
        return cls(**values)
