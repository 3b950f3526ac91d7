from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from sentence_segmenter.config import DEFAULT_ABBREVIATORS, DEFAULT_TERMINALS
from sentence_segmenter.framework import Artifact, Fragments, as_fragments, register, with_metrics
from sentence_segmenter.text_processing import word_count


def merge_sentences(
    shorts: Fragments,
    terminals: Tuple[str, ...],
    abbreviators: Tuple[str, ...],
) -> Fragments:
    """
    Assemble short units into sentences.

    A new sentence starts after a unit ending on a definite terminator, or when
    the sentence already holds a multi-word unit and the next unit has more
    than one word. Single-word units are absorbed into the running sentence.
    """
    definite = tuple(ch for ch in terminals if ch not in abbreviators)
    sentences: List[str] = []
    sentence = ""
    has_words = False
    previous_word_ending: Optional[str] = None
    for short in shorts:
        count = word_count(short)
        after_definite_terminal = previous_word_ending in definite
        if after_definite_terminal or (has_words and count > 1):
            sentences.append(sentence)
            sentence = ""
            has_words = count > 1
        else:
            has_words = has_words or count > 1
        sentence += short
        previous_word_ending = short[-1:]
    if sentence:
        sentences.append(sentence)
    return tuple(sentences)


@dataclass(frozen=True)
class _SentenceMergePass:
    name: str = field(default="sentence_merge", init=False)
    input_type: type = field(default=tuple, init=False)
    output_type: type = field(default=tuple, init=False)
    terminals: Tuple[str, ...] = DEFAULT_TERMINALS
    abbreviators: Tuple[str, ...] = DEFAULT_ABBREVIATORS

    def __call__(self, a: Artifact) -> Artifact:
        merged = merge_sentences(as_fragments(a.payload), self.terminals, self.abbreviators)
        return with_metrics(a, self.name, merged)


sentence_merge = register(_SentenceMergePass())
