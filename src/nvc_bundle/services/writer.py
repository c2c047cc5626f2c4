"""
Output files and the version marker.

``nvc-version.json`` holds ``{"versionId": ...}`` between runs and is the only
state the job keeps. ``vaccine-table/nvc-bundle.json`` holds
``{"version": ..., "table": ...}``.
"""

import json
import logging
from pathlib import Path

from nvc_bundle.constants import BUNDLE_TABLE_FILE, TABLE_DIR, VERSION_FILE
from nvc_bundle.services.flattener import LookupTable
from nvc_bundle.utils.json_files import read_json, write_json

logger = logging.getLogger(__name__)


class VersionStore:
    """Reads and writes the persisted bundle version marker."""

    def __init__(self, path: Path):
        self.path = path

    def read(self) -> str | None:
        """Return the stored version id, or None on a first run.

        A missing, unreadable or malformed marker counts as no previous version.
        """
        try:
            data = read_json(self.path)
        except (OSError, json.JSONDecodeError, UnicodeDecodeError):
            logger.info("No previous version found, will write new data.")
            return None

        version_id = data.get("versionId") if isinstance(data, dict) else None
        if version_id is None:
            logger.info("No previous version found, will write new data.")
            return None
        return str(version_id)

    def write(self, version_id: str) -> Path:
        return write_json(self.path, {"versionId": version_id})


class BundleWriter:
    """Writes the lookup table and version marker under *output_dir*."""

    def __init__(self, output_dir: Path):
        self.output_dir = output_dir
        self.versions = VersionStore(output_dir / VERSION_FILE)

    @property
    def table_dir(self) -> Path:
        return self.output_dir / TABLE_DIR

    @property
    def table_path(self) -> Path:
        return self.table_dir / BUNDLE_TABLE_FILE

    def is_unchanged(self, version_id: str, previous: str | None) -> bool:
        """Exact string comparison of the fetched and stored version ids."""
        if previous is not None and previous == version_id:
            logger.info("No change! current version is: %s", previous)
            return True
        return False

    def write(self, version_id: str, table: LookupTable) -> list[Path]:
        """Write the table, then the marker, and return both paths."""
        written = [
            write_json(self.table_path, {"version": version_id, "table": table}),
            self.versions.write(version_id),
        ]
        logger.info("Successfully updated! current version is: %s", version_id)
        return written
