"""Report labels per locale"""

import json
from typing import Dict
import logging

from ecoindex_audit.config import DEFAULT_LANG, TRANSLATIONS_DIR

logger = logging.getLogger(__name__)


def load_translations(lang: str = DEFAULT_LANG) -> Dict[str, str]:
    """
    Load the labels for a locale.

    A locale without a translation file falls back to the default locale;
    the fallback is only reported at DEBUG level.
    """
    path = TRANSLATIONS_DIR / f"{lang}.json"
    logger.debug(f"Translate by file: {path.name}")

    if not path.exists():
        if lang == DEFAULT_LANG:
            raise FileNotFoundError(f"Default translation file missing: {path}")
        logger.debug(f"The file {path.name} does not exist, using {DEFAULT_LANG}")
        return load_translations(DEFAULT_LANG)

    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
