"""
Fetch → transform → persist, run once per invocation.

`run_fetch` pulls the bundle from the API; `run_transform` does everything
after the network call and is also used on a bundle read from disk.
"""

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from nvc_bundle.config import get_settings
from nvc_bundle.constants import DEFAULT_LANGUAGES
from nvc_bundle.data_sources.base_client import ClientConfig
from nvc_bundle.data_sources.nvc import NVCClient
from nvc_bundle.models.model_nvc import Bundle
from nvc_bundle.models.profile import RunProfile
from nvc_bundle.services.flattener import flatten_bundle
from nvc_bundle.services.lookups import NameLookups, build_lookups
from nvc_bundle.services.writer import BundleWriter

logger = logging.getLogger(__name__)


class RunResult(BaseModel):
    """What a run did."""

    version_id: str
    previous_version_id: str | None = None
    updated: bool = False
    table_size: int = 0
    files_written: list[Path] = []


def run_transform(
    raw_bundle: dict[str, Any],
    profile: RunProfile,
    output_dir: Path,
    *,
    force: bool = False,
    naming_system: str | None = None,
) -> RunResult:
    """Flatten *raw_bundle* and write the outputs allowed by *profile*."""
    naming_system = naming_system or get_settings().naming_system_url
    bundle = Bundle.model_validate(raw_bundle)
    writer = BundleWriter(output_dir)

    previous = writer.versions.read()
    result = RunResult(version_id=bundle.version_id, previous_version_id=previous)

    if profile.gate_on_version and not force:
        if writer.is_unchanged(bundle.version_id, previous):
            return result

    lookups = NameLookups()
    if profile.build_lookups:
        lookups = build_lookups(
            raw_bundle,
            writer.table_dir,
            profile.languages or DEFAULT_LANGUAGES,
            naming_system,
        )

    table = flatten_bundle(
        bundle,
        profile.languages,
        disease_lookup=lookups.disease,
        mah_lookup=lookups.mah,
        naming_system=naming_system,
    )

    result.files_written = lookups.files_written + writer.write(bundle.version_id, table)
    result.updated = True
    result.table_size = len(table)
    return result


async def fetch_bundle(profile: RunProfile, api_url: str | None = None) -> dict[str, Any]:
    config = ClientConfig(timeout_seconds=profile.timeout_seconds)
    async with NVCClient(api_url=api_url, config=config) as client:
        return await client.get_bundle()


async def run_fetch(
    profile: RunProfile,
    output_dir: Path,
    *,
    api_url: str | None = None,
    force: bool = False,
) -> RunResult:
    """Fetch the bundle from the NVC API and run the transform on it."""
    logger.info("Starting NVC fetch with profile '%s'", profile.name)
    raw_bundle = await fetch_bundle(profile, api_url=api_url)
    return run_transform(raw_bundle, profile, output_dir, force=force)
