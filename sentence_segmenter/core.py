from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import IntFlag
from functools import lru_cache
from typing import Any, Final

from sentence_segmenter.config import (
    DEFAULT_ABBREVIATORS,
    DEFAULT_PIPELINE,
    DEFAULT_TERMINALS,
    LANGUAGE_SECTION,
    LanguageProfile,
    PipelineSpec,
)
from sentence_segmenter.framework import (
    Artifact,
    Fragments,
    Pass,
    configure_pass,
    registry,
    run_passes,
    run_step,
)
from sentence_segmenter.language import get_profile, resolve_profile
from sentence_segmenter.text_processing import is_blank, split_lines

logger = logging.getLogger(__name__)

FIRST_STEP: Final = "punctuation_split"
LAST_STEP: Final = "sentence_merge"
TEXT_STEPS: Final = frozenset({"text_clean"})


class SplitFlags(IntFlag):
    """Bit flags accepted by :meth:`Sentence.split`."""

    NONE = 0
    TRIM = 0x1


SPLIT_TRIM: Final = SplitFlags.TRIM


@dataclass(frozen=True)
class LineTrace:
    """Fragments of one line after each per-line pass."""

    line: str
    stages: tuple[tuple[str, Fragments], ...]

    @property
    def sentences(self) -> Fragments:
        return self.stages[-1][1] if self.stages else ()

    def as_dict(self) -> dict[str, Any]:
        return {"line": self.line, "stages": {name: list(frags) for name, frags in self.stages}}


def enforce_invariants(steps: Sequence[str]) -> list[str]:
    """Validate the per-line step list and return it as a new list."""
    regs = registry()
    unknown = [s for s in steps if s not in regs]
    if unknown:
        raise KeyError(f"unknown steps: {unknown}")
    misplaced = [s for s in steps if s in TEXT_STEPS]
    if misplaced:
        raise ValueError(f"{misplaced[0]} runs on the whole text, not per line")
    if not steps or steps[0] != FIRST_STEP:
        raise ValueError(f"per-line pipeline must start with {FIRST_STEP}")
    if steps[-1] != LAST_STEP:
        raise ValueError(f"per-line pipeline must end with {LAST_STEP}")
    return list(steps)


def _require_text(text: Any) -> str:
    if not isinstance(text, str):
        raise TypeError(f"text must be str, not {type(text).__name__}")
    return text


def _configure(
    steps: Iterable[str],
    profile: LanguageProfile,
    options: Mapping[str, Mapping[str, Any]],
) -> tuple[Pass, ...]:
    regs = registry()
    base = {"terminals": profile.terminals, "abbreviators": profile.abbreviators}
    for step, opts in options.items():
        shadowed = sorted(set(opts) & set(base))
        if shadowed:
            raise ValueError(
                f"{step} options may not set {', '.join(shadowed)}; "
                f"configure them engine-wide under options.{LANGUAGE_SECTION}"
            )
    return tuple(configure_pass(regs[s], {**options.get(s, {}), **base}) for s in steps)


class Sentence:
    """
    Rule-based sentence segmenter.

    Holds only its terminal/abbreviator configuration and the configured pass
    chain, so one instance can be shared between threads.

    >>> Sentence().split("Mr. Comey was fired. He was not available.", SPLIT_TRIM)
    ['Mr. Comey was fired.', 'He was not available.']
    """

    SPLIT_TRIM: Final = SplitFlags.TRIM

    def __init__(
        self,
        terminals: Iterable[str] = DEFAULT_TERMINALS,
        abbreviators: Iterable[str] = DEFAULT_ABBREVIATORS,
        pipeline: Sequence[str] | None = None,
        options: Mapping[str, Mapping[str, Any]] | None = None,
    ) -> None:
        self.profile = LanguageProfile(terminals=tuple(terminals), abbreviators=tuple(abbreviators))
        self.pipeline = tuple(enforce_invariants(list(pipeline or DEFAULT_PIPELINE)))
        self._passes = _configure(self.pipeline, self.profile, options or {})

    @classmethod
    def from_profile(cls, code: str | None = None) -> Sentence:
        """Engine for a built-in language profile (``en``, ``nl``, ``de``)."""
        profile = get_profile(code)
        return cls(profile.terminals, profile.abbreviators)

    @classmethod
    def from_spec(cls, spec: PipelineSpec) -> Sentence:
        """Engine for a loaded :class:`PipelineSpec`."""
        profile = resolve_profile(spec.options.get(LANGUAGE_SECTION))
        options = {k: v for k, v in spec.options.items() if k != LANGUAGE_SECTION}
        return cls(profile.terminals, profile.abbreviators, spec.pipeline, options)

    @property
    def terminals(self) -> tuple[str, ...]:
        return self.profile.terminals

    @property
    def abbreviators(self) -> tuple[str, ...]:
        return self.profile.abbreviators

    def __repr__(self) -> str:
        return f"Sentence(terminals={self.terminals!r}, abbreviators={self.abbreviators!r})"

    def _lines(self, text: str) -> Iterable[str]:
        cleaned = run_step("text_clean", Artifact(payload=text)).payload
        return (line for line in split_lines(cleaned) if not is_blank(line))

    def _run_line(self, line: str, *, trace: bool = False) -> Artifact:
        seed = Artifact(payload=(line,), meta={"metrics": {}, "trace": [] if trace else None})
        return run_passes(list(self._passes), seed)

    def split(self, text: str, flags: int = 0) -> list[str]:
        """
        Return the sentences detected in ``text``.

        Pass ``SPLIT_TRIM`` to strip surrounding whitespace from each sentence.
        """
        _require_text(text)
        sentences = [s for line in self._lines(text) for s in self._run_line(line).payload]
        logger.debug("split %d chars into %d sentences", len(text), len(sentences))
        if flags & SplitFlags.TRIM:
            return [s.strip() for s in sentences]
        return sentences

    def count(self, text: str) -> int:
        """Return the number of sentences detected in ``text``."""
        return len(self.split(text))

    def trace(self, text: str) -> list[LineTrace]:
        """Return per-pass fragments for every non-blank line of ``text``."""
        _require_text(text)
        traces = []
        for line in self._lines(text):
            meta = self._run_line(line, trace=True).meta or {}
            traces.append(LineTrace(line=line, stages=tuple(meta.get("trace") or ())))
        return traces


@lru_cache(maxsize=1)
def default_engine() -> Sentence:
    return Sentence()


def split(text: str, flags: int = 0) -> list[str]:
    """Split ``text`` with the default English configuration."""
    return default_engine().split(text, flags)


def count(text: str) -> int:
    """Count sentences in ``text`` with the default English configuration."""
    return default_engine().count(text)
