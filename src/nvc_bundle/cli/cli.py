"""Command-line interface for the NVC bundle fetcher."""

import asyncio
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from nvc_bundle.config import get_settings
from nvc_bundle.constants import VERSION_FILE
from nvc_bundle.data_sources.base_client import DataSourceError
from nvc_bundle.models.profile import PROFILES, RunProfile, get_profile
from nvc_bundle.runners.fetch_runner import RunResult, run_fetch, run_transform
from nvc_bundle.services.writer import VersionStore
from nvc_bundle.utils.json_files import read_json

logger = logging.getLogger("nvc_bundle.cli")

RUN_ERRORS = (DataSourceError, ValidationError, OSError, ValueError)


def _configure_logging(level: str | None) -> None:
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_profile(
    name: str | None, languages: tuple[str, ...], gate: bool | None
) -> RunProfile:
    profile = get_profile(name or get_settings().profile)
    overrides: dict = {}
    if languages:
        overrides["languages"] = languages
    if gate is not None:
        overrides["gate_on_version"] = gate
    if not overrides:
        return profile
    return RunProfile.model_validate(
        {**profile.model_dump(), "name": f"{profile.name}+custom", **overrides}
    )


def _report(result: RunResult) -> None:
    if result.updated:
        click.echo(
            f"Version {result.version_id}: wrote {result.table_size} vaccine records"
        )
        for path in result.files_written:
            click.echo(f"  {path}")
    else:
        click.echo(f"No change (version {result.version_id})")


def profile_options(f):
    """Options shared by the commands that run the transform."""
    f = click.option(
        "--log-level",
        default=None,
        help="Logging level (defaults to LOG_LEVEL or INFO)",
    )(f)
    f = click.option(
        "--force",
        is_flag=True,
        help="Write outputs even if the stored version matches",
    )(f)
    f = click.option(
        "--gate/--no-gate",
        default=None,
        help="Skip writing when the bundle version is unchanged",
    )(f)
    f = click.option(
        "-l",
        "--language",
        "languages",
        multiple=True,
        help="Language to emit (repeatable); overrides the profile",
    )(f)
    f = click.option(
        "-o",
        "--output-dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Directory receiving nvc-version.json and vaccine-table/",
    )(f)
    f = click.option(
        "-p",
        "--profile",
        "profile_name",
        type=click.Choice(sorted(PROFILES)),
        default=None,
        help="Run profile (defaults to PROFILE or bilingual)",
    )(f)
    return f


@click.group()
@click.version_option(package_name="nvc-bundle")
def main():
    """Fetch and flatten the Canadian National Vaccine Catalogue bundle."""
    pass


@main.command()
@profile_options
@click.option("--api-url", default=None, help="NVC API base URL (defaults to API_URL)")
def fetch(
    profile_name: str | None,
    output_dir: Path | None,
    languages: tuple[str, ...],
    gate: bool | None,
    force: bool,
    log_level: str | None,
    api_url: str | None,
):
    """Fetch the NVC bundle and write the vaccine lookup table."""
    _configure_logging(log_level)
    settings = get_settings()
    profile = _build_profile(profile_name, languages, gate)
    try:
        result = asyncio.run(
            run_fetch(
                profile,
                output_dir or settings.output_dir,
                api_url=api_url or settings.api_url,
                force=force,
            )
        )
    except RUN_ERRORS as e:
        logger.error("Error: %s", e)
        sys.exit(1)
    _report(result)


@main.command()
@profile_options
@click.option(
    "-i",
    "--input",
    "input_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Bundle JSON file previously downloaded from the API",
)
def flatten(
    profile_name: str | None,
    output_dir: Path | None,
    languages: tuple[str, ...],
    gate: bool | None,
    force: bool,
    log_level: str | None,
    input_path: Path,
):
    """Flatten a bundle file already on disk."""
    _configure_logging(log_level)
    settings = get_settings()
    profile = _build_profile(profile_name, languages, gate)
    try:
        raw_bundle = read_json(input_path)
        if not isinstance(raw_bundle, dict):
            raise ValueError(f"{input_path} does not contain a JSON object")
        result = run_transform(
            raw_bundle, profile, output_dir or settings.output_dir, force=force
        )
    except RUN_ERRORS as e:
        logger.error("Error: %s", e)
        sys.exit(1)
    _report(result)


@main.command()
@click.option(
    "-o",
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding nvc-version.json",
)
def version(output_dir: Path | None):
    """Print the stored bundle version."""
    store = VersionStore((output_dir or get_settings().output_dir) / VERSION_FILE)
    version_id = store.read()
    if version_id is None:
        click.echo("No stored version")
    else:
        click.echo(version_id)


if __name__ == "__main__":
    main()
