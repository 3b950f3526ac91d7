from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from sentence_segmenter.config import DEFAULT_ABBREVIATORS, DEFAULT_TERMINALS
from sentence_segmenter.framework import Artifact, Fragments, as_fragments, register, with_metrics


def _closes(part: str, terminals: Tuple[str, ...], definite: Tuple[str, ...]) -> bool:
    """A lone terminal, or any definite terminator inside ``part``, ends a unit."""
    if len(part) == 1 and part in terminals:
        return True
    return any(terminal in part for terminal in definite)


def merge_punctuation(
    parts: Fragments,
    terminals: Tuple[str, ...],
    abbreviators: Tuple[str, ...],
) -> Fragments:
    """
    Append each terminal run to the non-terminal text before it.

    ``("There ", "...", " is", ".", " More", "!")`` becomes
    ``("There ... is.", " More!")``: the ellipsis holds only abbreviators, so
    it does not close the unit on its own.
    """
    definite = tuple(ch for ch in terminals if ch not in abbreviators)
    merges: List[str] = []
    merge = ""
    for part in parts:
        if not part:
            continue
        merge += part
        if _closes(part, terminals, definite):
            merges.append(merge)
            merge = ""
    if merge:
        merges.append(merge)
    return tuple(merges)


@dataclass(frozen=True)
class _PunctuationMergePass:
    name: str = field(default="punctuation_merge", init=False)
    input_type: type = field(default=tuple, init=False)
    output_type: type = field(default=tuple, init=False)
    terminals: Tuple[str, ...] = DEFAULT_TERMINALS
    abbreviators: Tuple[str, ...] = DEFAULT_ABBREVIATORS

    def __call__(self, a: Artifact) -> Artifact:
        merged = merge_punctuation(as_fragments(a.payload), self.terminals, self.abbreviators)
        return with_metrics(a, self.name, merged)


punctuation_merge = register(_PunctuationMergePass())
