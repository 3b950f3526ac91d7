from __future__ import annotations

import os
import pathlib
import warnings
from functools import reduce
from importlib import import_module
from typing import Any, Dict, Iterable, List, Mapping, Tuple, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

yaml = cast(Any, import_module("yaml"))

DEFAULT_TERMINALS: Tuple[str, ...] = (".", "!", "?")
DEFAULT_ABBREVIATORS: Tuple[str, ...] = (".",)

DEFAULT_PIPELINE: Tuple[str, ...] = (
    "punctuation_split",
    "parentheses_merge",
    "punctuation_merge",
    "abbreviation_merge",
    "close_quotes_merge",
    "sentence_merge",
)

# Options section that configures the engine rather than a single pass.
LANGUAGE_SECTION = "language"
ENV_PREFIX = "SENTENCE_SEGMENTER__"


class LanguageProfile(BaseModel):
    """Terminal and abbreviator characters for one family of languages."""

    model_config = ConfigDict(frozen=True)

    terminals: Tuple[str, ...] = DEFAULT_TERMINALS
    abbreviators: Tuple[str, ...] = DEFAULT_ABBREVIATORS

    @field_validator("terminals", "abbreviators")
    @classmethod
    def _single_characters(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        bad = [ch for ch in value if len(ch) != 1]
        if bad:
            raise ValueError(f"entries must be single characters: {bad!r}")
        if len(set(value)) != len(value):
            raise ValueError(f"duplicate entries: {value!r}")
        return value

    @field_validator("terminals")
    @classmethod
    def _non_empty(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        if not value:
            raise ValueError("at least one terminal character is required")
        return value

    @model_validator(mode="after")
    def _abbreviators_are_terminals(self) -> "LanguageProfile":
        stray = [ch for ch in self.abbreviators if ch not in self.terminals]
        if stray:
            raise ValueError(f"abbreviators must also be terminals: {stray!r}")
        return self

    @property
    def definite_terminators(self) -> Tuple[str, ...]:
        """Terminals that always close a sentence."""
        return tuple(ch for ch in self.terminals if ch not in self.abbreviators)


class PipelineSpec(BaseModel):
    """Declarative per-line pipeline specification."""

    pipeline: List[str] = Field(default_factory=lambda: list(DEFAULT_PIPELINE))
    options: Dict[str, Dict[str, Any]] = Field(default_factory=dict)


def _read_yaml(path: str | os.PathLike | None) -> Dict[str, Any]:
    """Return a dict from YAML or {} if path is None/missing/empty."""
    if not path:
        return {}
    p = pathlib.Path(path)
    if not p.exists():
        return {}
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise TypeError("pipeline.yaml must contain a top-level mapping")
    return data


def _env_overrides(environ: Mapping[str, str] | None = None) -> Dict[str, Dict[str, Any]]:
    """
    Map SENTENCE_SEGMENTER__STEP__key=value -> options[step][key]=value
    (step/key lower-cased). Values are YAML-coerced so lists and bools work.
    """
    out: Dict[str, Dict[str, Any]] = {}
    for k, v in (os.environ if environ is None else environ).items():
        if not k.startswith(ENV_PREFIX):
            continue
        rest = k[len(ENV_PREFIX):]
        if "__" not in rest:
            continue
        step, key = rest.lower().split("__", 1)
        try:
            val = yaml.safe_load(v)
        except yaml.YAMLError:
            val = v
        out.setdefault(step, {})[key] = val
    return out


def _merge_options(
    base: Dict[str, Dict[str, Any]], override: Dict[str, Dict[str, Any]]
) -> Dict[str, Dict[str, Any]]:
    """Shallow-merge per-step options with comprehension; override wins."""
    sources = set(base) | set(override)
    return {s: {**base.get(s, {}), **override.get(s, {})} for s in sources}


def _warn_unknown_options(pipeline: Iterable[str], opts: Mapping[str, Any]) -> None:
    """Emit a warning when options contain steps absent from the pipeline."""

    steps = set(pipeline)
    unknown = [step for step in opts if step not in steps and step != LANGUAGE_SECTION]
    if unknown:
        warnings.warn(
            f"Unknown pipeline options: {', '.join(sorted(unknown))}",
            stacklevel=2,
        )


def load_spec(
    path: str | os.PathLike | None = "pipeline.yaml",
    overrides: Dict[str, Dict[str, Any]] | None = None,
) -> PipelineSpec:
    """Load YAML + env/CLI overrides into a validated PipelineSpec."""
    data = _read_yaml(path)
    opts = data.get("options") or {}
    sources: Iterable[Dict[str, Dict[str, Any]]] = (
        d for d in (opts, _env_overrides(), overrides) if d
    )
    acc: Dict[str, Dict[str, Any]] = {}
    merged = reduce(_merge_options, sources, acc)

    pipeline = data.get("pipeline") or list(DEFAULT_PIPELINE)
    _warn_unknown_options(pipeline, merged)
    data = {**data, "pipeline": pipeline, "options": merged}
    return PipelineSpec.model_validate(data)
