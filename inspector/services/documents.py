"""
Loading inspect documents from JSON text or files.

``docker inspect`` prints a list even for a single container, while the
Engine API returns a bare object; both shapes are accepted here.
"""
import json
import logging
from pathlib import Path
from typing import Any, Union

from ..models.schemas import ContainerSnapshot
from .extractor import StructuredFieldExtractor
from .lookup import MalformedDocument

logger = logging.getLogger(__name__)


def load_document(raw: Any) -> dict:
    """Parse ``raw`` (JSON text, bytes or an already parsed value) into one document."""
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            raw = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedDocument("", f"invalid JSON: {e}") from e

    if isinstance(raw, list):
        if len(raw) != 1:
            raise MalformedDocument("", f"expected exactly one inspect document, got {len(raw)}")
        raw = raw[0]

    if not isinstance(raw, dict):
        raise MalformedDocument("", f"inspect document must be an object, got {type(raw).__name__}")
    return raw


def load_inspect_file(path: Union[str, Path]) -> dict:
    path = Path(path)
    logger.debug(f"Loading inspect document from {path}")
    # json detects UTF-8, UTF-16 and UTF-32 from the raw bytes
    return load_document(path.read_bytes())


def snapshot_from_file(path: Union[str, Path]) -> ContainerSnapshot:
    return StructuredFieldExtractor(load_inspect_file(path)).snapshot()
