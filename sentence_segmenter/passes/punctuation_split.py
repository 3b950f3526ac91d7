from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Tuple

from sentence_segmenter.config import DEFAULT_TERMINALS
from sentence_segmenter.framework import Artifact, Fragments, as_fragments, register, with_metrics


def _runs(line: str, terminals: Tuple[str, ...]) -> Iterator[str]:
    """Yield maximal runs of terminal / non-terminal characters.

    ``"There ... is. More!"`` -> ``"There "``, ``"..."``, ``" is"``, ``"."``,
    ``" More"``, ``"!"``.
    """
    if not line:
        return
    is_terminal = line[0] in terminals
    part = ""
    for char in line:
        if (char in terminals) != is_terminal:
            yield part
            part = ""
            is_terminal = not is_terminal
        part += char
    if part:
        yield part


def split_punctuation(lines: Iterable[str], terminals: Tuple[str, ...]) -> Fragments:
    return tuple(run for line in lines for run in _runs(line, terminals))


@dataclass(frozen=True)
class _PunctuationSplitPass:
    name: str = field(default="punctuation_split", init=False)
    input_type: type = field(default=str, init=False)
    output_type: type = field(default=tuple, init=False)
    terminals: Tuple[str, ...] = DEFAULT_TERMINALS

    def __call__(self, a: Artifact) -> Artifact:
        fragments = split_punctuation(as_fragments(a.payload), self.terminals)
        return with_metrics(a, self.name, fragments)


punctuation_split = register(_PunctuationSplitPass())
