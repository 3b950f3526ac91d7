from __future__ import annotations

import logging
import unicodedata
from typing import List

from sentence_segmenter.framework import Artifact, Fragments, as_fragments, register, with_metrics
from sentence_segmenter.text_processing import last_word

logger = logging.getLogger(__name__)

MAX_ABBREVIATION_LEN = 3


def _starts_uppercase(word: str) -> bool:
    return bool(word) and unicodedata.category(word[0]) == "Lu"


def is_abbreviation(fragment: str) -> bool:
    """True when the last word looks like a title or an initial (``Mr.``, ``B.``)."""
    word = last_word(fragment)
    return (
        _starts_uppercase(word)
        and fragment.strip().endswith(".")
        and len(word) <= MAX_ABBREVIATION_LEN
    )


def merge_abbreviations(fragments: Fragments) -> Fragments:
    """
    Include fragments ending in a capitalized abbreviation with the next one.

    ``("... of the F.", "B.", "I.", " James B.", " Comey was fired.")``
    collapses to one unit; chains keep growing until a fragment that is not an
    abbreviation closes them.
    """
    merged: List[str] = []
    previous_is_abbreviation = False
    for fragment in fragments:
        if previous_is_abbreviation and merged:
            merged[-1] += fragment
        else:
            merged.append(fragment)
        previous_is_abbreviation = is_abbreviation(fragment)
        if previous_is_abbreviation:
            logger.debug("abbreviation continues into next fragment: %r", merged[-1][-40:])
    return tuple(merged)


class _AbbreviationMergePass:
    name = "abbreviation_merge"
    input_type = tuple
    output_type = tuple

    def __call__(self, a: Artifact) -> Artifact:
        return with_metrics(a, self.name, merge_abbreviations(as_fragments(a.payload)))


abbreviation_merge = register(_AbbreviationMergePass())
