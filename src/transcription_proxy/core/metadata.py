"""Application metadata loaded from deepgram.toml."""

import logging
import tomllib
from pathlib import Path

from transcription_proxy.core.errors import MetadataError

logger = logging.getLogger(__name__)


def load_metadata(path: str) -> dict:
    """
    Read the [meta] table from a TOML file.

    Args:
        path: Location of the metadata file

    Returns:
        Contents of the [meta] table

    Raises:
        MetadataError: If the file is missing, unreadable or has no [meta] table
    """
    metadata_file = Path(path)
    name = metadata_file.name

    if not metadata_file.is_file():
        raise MetadataError(f"{name} not found")

    try:
        with metadata_file.open("rb") as f:
            config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.error(f"Error reading metadata: {e}")
        raise MetadataError(f"Failed to read metadata from {name}")

    meta = config.get("meta")
    if not isinstance(meta, dict):
        raise MetadataError(f"Missing [meta] section in {name}")

    return meta
