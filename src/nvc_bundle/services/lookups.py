"""
Auxiliary name lookups for diseases and market-authorization holders.

The Disease and MarketAuthorizationHolder value sets are persisted as their
raw ``compose`` objects (``disease.json`` / ``mah.json``), then read back and
reduced to ``{code: {language: name}}``. A missing resource or an unreadable
file yields an empty lookup rather than an error.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from nvc_bundle.constants import (
    DISEASE_FILE,
    DISEASE_VALUE_SET,
    MAH_FILE,
    MAH_VALUE_SET,
    NAMING_SYSTEM_URL,
)
from nvc_bundle.helpers.designation_helpers import localized_names
from nvc_bundle.models.model_nvc import Compose
from nvc_bundle.utils.json_files import read_json, write_json

logger = logging.getLogger(__name__)

NameLookup = dict[str, dict[str, str]]


class NameLookups(BaseModel):
    """Disease and MAH lookups consumed by the flattener."""

    disease: NameLookup = {}
    mah: NameLookup = {}
    files_written: list[Path] = []


def find_raw_resource(raw_bundle: dict[str, Any], resource_id: str) -> dict[str, Any] | None:
    """Return the first entry resource with the given id from the raw bundle."""
    entries = raw_bundle.get("entry")
    if not isinstance(entries, list):
        return None
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        resource = entry.get("resource")
        if isinstance(resource, dict) and resource.get("id") == resource_id:
            return resource
    return None


def persist_compose(
    raw_bundle: dict[str, Any], resource_id: str, path: Path
) -> Path | None:
    """Write the ``compose`` object of *resource_id* to *path*.

    Returns the path written, or None when the resource is not in the bundle,
    in which case a file left at *path* by an earlier run is removed.
    """
    resource = find_raw_resource(raw_bundle, resource_id)
    if resource is None:
        logger.warning("Resource '%s' not found in bundle; lookup will be empty", resource_id)
        path.unlink(missing_ok=True)
        return None
    return write_json(path, resource.get("compose") or {})


def load_name_lookup(
    path: Path,
    languages: tuple[str, ...],
    naming_system: str = NAMING_SYSTEM_URL,
) -> NameLookup:
    """Read a persisted compose file into ``{code: {language: name}}``."""
    try:
        data = read_json(path)
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Could not read lookup file %s: %s", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Lookup file %s does not hold a compose object", path)
        return {}

    compose = Compose.model_validate(data)
    lookup: NameLookup = {}
    for include in compose.include:
        for concept in include.concept:
            if concept.code is None:
                continue
            lookup[concept.code] = localized_names(concept, languages, naming_system)
    return lookup


def build_lookups(
    raw_bundle: dict[str, Any],
    table_dir: Path,
    languages: tuple[str, ...],
    naming_system: str = NAMING_SYSTEM_URL,
) -> NameLookups:
    """Persist the Disease and MAH compose files and build their name lookups."""
    lookups = NameLookups()
    for resource_id, file_name, attr in (
        (DISEASE_VALUE_SET, DISEASE_FILE, "disease"),
        (MAH_VALUE_SET, MAH_FILE, "mah"),
    ):
        path = persist_compose(raw_bundle, resource_id, table_dir / file_name)
        if path is None:
            continue
        lookups.files_written.append(path)
        setattr(lookups, attr, load_name_lookup(path, languages, naming_system))

    logger.info(
        "Built lookups: %d diseases, %d market authorization holders",
        len(lookups.disease),
        len(lookups.mah),
    )
    return lookups
