from __future__ import annotations

from typing import List

from sentence_segmenter.framework import Artifact, Fragments, as_fragments, register, with_metrics

QUOTES = ('"', "'")


def is_closing_quote(statement: str) -> bool:
    """
    Detect a closing quote: the whole statement is a quotation mark, or it is
    a quote, a space and an ASCII lowercase letter (``'" he said.'``).
    """
    if statement.strip() in QUOTES:
        return True
    return (
        statement[:1] in QUOTES
        and statement[1:2] == " "
        and "a" <= statement[2:3] <= "z"
    )


def merge_close_quotes(statements: Fragments) -> Fragments:
    """
    Include closing quotes with the previous statement.

    ``('"That was very interesting.', '" he said.')`` becomes
    ``('"That was very interesting." he said.',)``.
    """
    merged: List[str] = []
    for statement in statements:
        if merged and is_closing_quote(statement):
            merged[-1] += statement
        else:
            merged.append(statement)
    return tuple(merged)


class _CloseQuotesMergePass:
    name = "close_quotes_merge"
    input_type = tuple
    output_type = tuple

    def __call__(self, a: Artifact) -> Artifact:
        return with_metrics(a, self.name, merge_close_quotes(as_fragments(a.payload)))


close_quotes_merge = register(_CloseQuotesMergePass())
