from __future__ import annotations

from typing import List

from sentence_segmenter.framework import Artifact, Fragments, as_fragments, register, with_metrics


def merge_parentheses(parts: Fragments) -> Fragments:
    """Attach any part starting with ``)`` to the part before it."""
    merged: List[str] = []
    for part in parts:
        if part.startswith(")") and merged:
            merged[-1] += part
        else:
            merged.append(part)
    return tuple(merged)


class _ParenthesesMergePass:
    name = "parentheses_merge"
    input_type = tuple
    output_type = tuple

    def __call__(self, a: Artifact) -> Artifact:
        return with_metrics(a, self.name, merge_parentheses(as_fragments(a.payload)))


parentheses_merge = register(_ParenthesesMergePass())
