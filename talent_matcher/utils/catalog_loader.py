"""
Loads catalog snapshots from JSON files.
"""

from pathlib import Path
from typing import Union
import json
import logging

from talent_matcher.core.models import Catalog

logger = logging.getLogger(__name__)


def load_catalog(path: Union[str, Path]) -> Catalog:
    """
    Read a ``{"talents": [...], "opportunities": [...]}`` file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a JSON object
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    with open(path, 'r') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Catalog file must contain a JSON object: {path}")

    catalog = Catalog.from_dict(data)
    logger.info(
        f"Loaded {len(catalog.talents)} talents and "
        f"{len(catalog.opportunities)} opportunities from {path}"
    )
    return catalog


def save_catalog(catalog: Catalog, path: Union[str, Path]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(catalog.to_dict(), f, indent=2)
