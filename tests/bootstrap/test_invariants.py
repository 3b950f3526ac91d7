from collections.abc import Callable
from functools import reduce

import pytest

from sentence_segmenter import Sentence
from sentence_segmenter.config import PipelineSpec
from sentence_segmenter.core import enforce_invariants


def _add(step: str) -> Callable[[PipelineSpec], PipelineSpec]:
    return lambda spec: PipelineSpec(pipeline=[*spec.pipeline, step])


def _build_pipeline(*steps: str) -> PipelineSpec:
    return reduce(lambda spec, s: _add(s)(spec), steps, PipelineSpec(pipeline=[]))


def test_valid_pipeline() -> None:
    spec = _build_pipeline("punctuation_split", "punctuation_merge", "sentence_merge")
    assert enforce_invariants(spec.pipeline) == spec.pipeline


def test_unknown_step_rejected() -> None:
    spec = _build_pipeline("punctuation_split", "emit_jsonl", "sentence_merge")
    with pytest.raises(KeyError):
        enforce_invariants(spec.pipeline)


def test_split_must_come_first() -> None:
    spec = _build_pipeline("parentheses_merge", "punctuation_split", "sentence_merge")
    with pytest.raises(ValueError):
        enforce_invariants(spec.pipeline)


def test_sentence_merge_must_come_last() -> None:
    spec = _build_pipeline("punctuation_split", "sentence_merge", "close_quotes_merge")
    with pytest.raises(ValueError):
        enforce_invariants(spec.pipeline)


def test_text_clean_is_not_a_line_pass() -> None:
    spec = _build_pipeline("punctuation_split", "text_clean", "sentence_merge")
    with pytest.raises(ValueError):
        enforce_invariants(spec.pipeline)


def test_reduced_pipeline_still_runs() -> None:
    engine = Sentence(pipeline=["punctuation_split", "punctuation_merge", "sentence_merge"])
    # without parentheses_merge the closing paren opens its own sentence
    assert engine.split("(See note.) It follows.") == ["(See note.", ") It follows."]
    assert engine.count("") == 0
