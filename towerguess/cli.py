#!/usr/bin/env python3
"""towerguess CLI - build and check the tower catalog, run the quiz server."""

import logging

import click

from towerguess.config import load_config
from towerguess.core.builder import generate
from towerguess.core.catalog import load_catalog_file
from towerguess.core.integrity import find_duplicate_answers
from towerguess.core.lookup import CatalogBuildError


def _settings(config_path, **overrides):
    try:
        settings = load_config(config_path)
    except FileNotFoundError as e:
        raise click.ClickException(str(e)) from e
    updates = {k: v for k, v in overrides.items() if v is not None}
    return settings.model_copy(update=updates) if updates else settings


@click.group()
@click.version_option(version="1.0.0")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def cli(verbose):
    """Guess the EToH Tower - catalog tools and quiz server."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@cli.command()
@click.option("--config", "config_path", help="Path to YAML config")
@click.option("--sheet-url", help="CSV export URL of the tower name sheet")
@click.option("--images-dir", help="Image folder to scan")
@click.option("--output", "catalog_file", help="Catalog JSON to write")
def build(config_path, sheet_url, images_dir, catalog_file):
    """Generate towers.json from the name sheet and the image folder."""
    settings = _settings(config_path, sheet_url=sheet_url, images_dir=images_dir, catalog_file=catalog_file)
    try:
        path = generate(settings)
    except CatalogBuildError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"✅ towers.json generated at {path}")


@cli.command()
@click.option("--config", "config_path", help="Path to YAML config")
@click.option("--catalog", "catalog_file", help="Catalog JSON to check")
def check(config_path, catalog_file):
    """Report towers whose accepted answers repeat each other."""
    settings = _settings(config_path, catalog_file=catalog_file)
    try:
        document = load_catalog_file(settings.catalog_file)
    except FileNotFoundError as e:
        raise click.ClickException(f"{e}. Run 'towerguess build' first.") from e
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if not isinstance(document, dict):
        raise click.ClickException(f"{settings.catalog_file} is not a catalog document")

    findings = find_duplicate_answers(document)
    for finding in findings:
        click.echo(
            f"⚠️ {finding['reason'].capitalize()} answers in {finding['pool']} "
            f"for {finding['url']}: [{', '.join(finding['answers'])}]"
        )

    if not findings:
        click.echo("✅ No duplicate answers found in either defaultImages or pomImages.")


@cli.command()
@click.option("--config", "config_path", help="Path to YAML config")
@click.option("--host", help="Bind address")
@click.option("--port", type=int, help="Port")
def serve(config_path, host, port):
    """Run the quiz server."""
    import os
    import uvicorn

    if config_path:
        os.environ["TOWERGUESS_CONFIG"] = config_path
    settings = _settings(config_path, host=host, port=port)
    uvicorn.run("towerguess.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    cli()
