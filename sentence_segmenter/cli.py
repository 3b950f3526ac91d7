from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import typer

from sentence_segmenter.config import LANGUAGE_SECTION, load_spec
from sentence_segmenter.core import SplitFlags, Sentence
from sentence_segmenter.env_utils import log_level
from sentence_segmenter.framework import registry

STDIN = "-"


def _spec_path_candidates(path: str | Path) -> Iterator[Path]:
    """Yield potential spec locations without hitting the filesystem."""
    candidate = Path(path)
    pkg_dir = Path(__file__).resolve().parent
    yield from (
        candidate,
        pkg_dir.parent / candidate,
        pkg_dir / candidate,
    )


def _resolve_spec_path(path: str | Path) -> Path:
    """Pick the first existing pipeline spec from candidate locations."""
    return next((p for p in _spec_path_candidates(path) if p.exists()), Path(path))


def _exit_with_error(exc: Exception) -> None:
    """Print ``exc`` to stderr and exit with status 1."""
    print(f"error: {exc}", file=sys.stderr)
    raise typer.Exit(1)


def _safe(func: Callable[[], None]) -> None:
    """Invoke ``func`` and exit non-zero on any exception."""
    try:
        func()
    except typer.Exit:
        raise
    except Exception as exc:  # pragma: no cover - exercised in CLI tests
        _exit_with_error(exc)


def _read_text(input_path: str | None, encoding: str) -> str:
    if input_path in (None, STDIN):
        return sys.stdin.read()
    path = Path(input_path)
    if not path.is_file():
        raise FileNotFoundError(f"{input_path} does not exist")
    return path.read_text(encoding=encoding)


def _engine(spec: str, profile: str | None) -> Sentence:
    overrides = {LANGUAGE_SECTION: {"profile": profile}} if profile else None
    return Sentence.from_spec(load_spec(_resolve_spec_path(spec), overrides=overrides))


def _run_split(
    input_path: str | None, trim: bool, as_json: bool, profile: str | None, spec: str, encoding: str
) -> None:
    engine = _engine(spec, profile)
    sentences = engine.split(
        _read_text(input_path, encoding), SplitFlags.TRIM if trim else SplitFlags.NONE
    )
    if as_json:
        print(json.dumps(sentences, ensure_ascii=False, indent=2))
    else:
        print("\n".join(sentences))


def _run_count(input_path: str | None, profile: str | None, spec: str, encoding: str) -> None:
    print(_engine(spec, profile).count(_read_text(input_path, encoding)))


def _run_trace(input_path: str | None, profile: str | None, spec: str, encoding: str) -> None:
    traces = _engine(spec, profile).trace(_read_text(input_path, encoding))
    print(json.dumps([t.as_dict() for t in traces], ensure_ascii=False, indent=2))


app = typer.Typer(add_completion=False, no_args_is_help=True)


def _input() -> Any:
    return typer.Argument(None, help="Text file to read; '-' or omitted reads stdin.")


def _profile() -> Any:
    return typer.Option(None, "--profile", help="Built-in language profile (en, nl, de).")


def _spec() -> Any:
    return typer.Option("pipeline.yaml", "--spec")


def _encoding() -> Any:
    return typer.Option("utf-8", "--encoding")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v")) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else log_level())


@app.command()
def split(
    input_path: str | None = _input(),
    trim: bool = typer.Option(True, "--trim/--no-trim"),
    as_json: bool = typer.Option(False, "--json"),
    profile: str | None = _profile(),
    spec: str = _spec(),
    encoding: str = _encoding(),
) -> None:
    """Print one detected sentence per line."""
    _safe(lambda: _run_split(input_path, trim, as_json, profile, spec, encoding))


@app.command()
def count(
    input_path: str | None = _input(),
    profile: str | None = _profile(),
    spec: str = _spec(),
    encoding: str = _encoding(),
) -> None:
    """Print the number of detected sentences."""
    _safe(lambda: _run_count(input_path, profile, spec, encoding))


@app.command()
def trace(
    input_path: str | None = _input(),
    profile: str | None = _profile(),
    spec: str = _spec(),
    encoding: str = _encoding(),
) -> None:
    """Print the fragments produced by every pass as JSON."""
    _safe(lambda: _run_trace(input_path, profile, spec, encoding))


@app.command()
def passes() -> None:
    """List registered passes."""
    print("\n".join(registry()))


if __name__ == "__main__":
    app()
