"""Loading the word catalog from a JSON file."""
import json
import logging
from pathlib import Path
from typing import Optional, Union

from vocadeck.config import settings
from vocadeck.errors import LoadError
from vocadeck.models.word import WordCatalog

logger = logging.getLogger(__name__)


def load_catalog(path: Optional[Union[str, Path]] = None) -> WordCatalog:
    """Read the word list and build the catalog.

    Any read or parse failure is reported as LoadError; the underlying
    exception is logged, not exposed.
    """
    path = Path(path) if path is not None else settings.paths.words_file
    try:
        with open(path, "r", encoding="utf-8") as f:
            records = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Error loading word list from {path}: {e}")
        raise LoadError(f"Failed to load {path.name}") from None

    if not isinstance(records, list):
        logger.error(f"Word list {path} is not a JSON array")
        raise LoadError(f"Failed to load {path.name}")

    for i, record in enumerate(records):
        if not isinstance(record, dict):
            logger.error(f"Entry {i} in {path} is not an object")
            raise LoadError(f"Failed to load {path.name}")

    catalog = WordCatalog.from_records(records)
    logger.info(f"Loaded {len(catalog)} words from {path}: {catalog.count_by_type()}")
    return catalog
