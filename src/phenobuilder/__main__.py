"""
Command-line interface for phenobuilder.

Writes the bundled example containers, converts containers between JSON and
binary, validates them (cross-references, namespaces, and optionally HPO
terms) and downloads HPO releases for the latter.
"""

import logging
import os
import pathlib
import sys
import typing

import click
import requests
from stairval.notepad import Notepad, create_notepad

from .codec import decode_binary, decode_json, encode_binary, encode_json
from .errors import DecodeError
from .examples import bethlem_myopathy_family, urothelial_carcinoma_phenopacket
from .hpo import audit_hpo_terms, load_hpo, validate_annotations
from .phenopacket import Container, Family, Phenopacket
from .validation import audit

logger = logging.getLogger(__name__)

HPO_PATH_ENV = "PHENOBUILDER_HPO_PATH"
_BINARY_SUFFIXES = {".pb", ".bin"}
_HPO_RELEASES_URL = "https://github.com/obophenotype/human-phenotype-ontology/releases"
_HPO_API_URL = "https://api.github.com/repos/obophenotype/human-phenotype-ontology"
_HTTP_TIMEOUT = 30


@click.group()
@click.option("--verbose", is_flag=True, help="Log debug messages to stderr")
def main(verbose: bool):
    """phenobuilder: build, validate and convert phenopackets."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@main.command(name="download")
@click.option("-d", "--data-path", "data_dir", default="data", type=click.Path(file_okay=False),
              help="Directory to write hp.json to")
@click.option("-v", "--hpo-version", default=None, help="Release to fetch, e.g. 2025-03-03")
def download(data_dir: str, hpo_version: typing.Optional[str]):
    """
    Fetch hp.json of an HPO release (the latest one unless --hpo-version is given).
    """
    if hpo_version:
        tag = "v" + hpo_version.lstrip("v")
    else:
        tag = _latest_hpo_tag()

    click.echo(f"Fetching HPO {tag}")
    resp = requests.get(f"{_HPO_RELEASES_URL}/download/{tag}/hp.json", timeout=_HTTP_TIMEOUT)
    resp.raise_for_status()

    target = pathlib.Path(data_dir) / "hp.json"
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(resp.content)
    click.echo(f"HPO {tag} written to {target}")


def _latest_hpo_tag() -> str:
    resp = requests.get(f"{_HPO_API_URL}/releases/latest", timeout=_HTTP_TIMEOUT)
    resp.raise_for_status()
    return resp.json()["tag_name"]


@main.command(name="examples")
@click.option(
    "-o",
    "--output-dir",
    "output_dir",
    default="examples",
    type=click.Path(file_okay=False),
    help="directory to write the example containers to",
)
@click.option("--binary", is_flag=True, help="Write protobuf bytes (.pb) instead of JSON")
def examples(output_dir: str, binary: bool):
    """
    Write the urothelial carcinoma phenopacket and the Bethlem myopathy family.
    """
    out_dir = pathlib.Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    containers = {
        "urothelial-carcinoma": urothelial_carcinoma_phenopacket(),
        "bethlem-myopathy-family": bethlem_myopathy_family(),
    }
    for name, container in containers.items():
        path = out_dir / f"{name}{'.pb' if binary else '.json'}"
        _write_container(container, path)
        click.echo(f"Wrote {type(container).__name__} {container.id!r} to {path}")


@main.command(name="convert")
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.argument("target", type=click.Path(dir_okay=False))
@click.option("--family", is_flag=True, help="Input is a Family rather than a Phenopacket")
def convert(source: str, target: str, family: bool):
    """
    Convert SOURCE to TARGET; the format of each is chosen by its suffix
    (.pb/.bin for protobuf bytes, anything else for JSON).
    """
    container = _read_container(pathlib.Path(source), family)
    _write_container(container, pathlib.Path(target))
    click.echo(f"Converted {source} to {target}")


@main.command(name="validate")
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option("--family", is_flag=True, help="Input is a Family rather than a Phenopacket")
@click.option(
    "-hpo",
    "--hpo",
    "hpo_path",
    type=click.Path(dir_okay=False),
    default=None,
    help=f"HPO JSON used to check HP terms (defaults to ${HPO_PATH_ENV} if set)",
)
def validate_command(source: str, family: bool, hpo_path: typing.Optional[str]):
    """
    Check cross-references and declared namespaces of a container, reporting
    every problem at once. Exits with status 1 if any error was found.
    """
    container = _read_container(pathlib.Path(source), family)

    notepad = create_notepad(container.id or source)
    audit(container, notepad)

    hpo_path = hpo_path or os.getenv(HPO_PATH_ENV)
    if hpo_path:
        if not pathlib.Path(hpo_path).is_file():
            click.echo(f"Error: HPO file not found at {hpo_path}", err=True)
            sys.exit(1)
        hpo = load_hpo(hpo_path)
        audit_hpo_terms(container, hpo, notepad)
        validate_annotations(container, hpo, notepad)

    _report_issues(notepad)
    if notepad.has_errors(include_subsections=True):
        sys.exit(1)
    click.echo(f"{type(container).__name__} {container.id!r} is valid")


def _read_container(path: pathlib.Path, family: bool) -> Container:
    kind = Family if family else Phenopacket
    try:
        if path.suffix in _BINARY_SUFFIXES:
            return decode_binary(path.read_bytes(), kind)
        return decode_json(path.read_text(encoding="utf-8"), kind)
    except DecodeError as e:
        click.echo(f"Error: cannot decode {path}: {e}", err=True)
        sys.exit(1)


def _write_container(container: Container, path: pathlib.Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix in _BINARY_SUFFIXES:
        path.write_bytes(encode_binary(container))
    else:
        with open(path, "w", encoding="utf-8") as out_f:
            out_f.write(encode_json(container))
    logger.debug("Wrote %s", path)


def _report_issues(notepad: Notepad):
    # if there were errors, show them
    if notepad.has_errors(include_subsections=True):
        click.echo("Errors found in validation:")
        for err in notepad.errors():
            click.echo(f"- {err.message}")
    # show any warnings but keep going
    if notepad.has_warnings(include_subsections=True):
        click.echo("Warnings found in validation:")
        for w in notepad.warnings():
            click.echo(f"- {w.message}")


if __name__ == "__main__":
    main()
