import string

import pytest
from hypothesis import given, strategies as st

from sentence_segmenter.config import DEFAULT_TERMINALS
from sentence_segmenter.framework import Artifact
from sentence_segmenter.passes.punctuation_split import punctuation_split, split_punctuation


def _split(line: str, terminals=DEFAULT_TERMINALS) -> tuple[str, ...]:
    return split_punctuation([line], terminals)


def test_alternating_runs() -> None:
    assert _split("There ... is. More!") == ("There ", "...", " is", ".", " More", "!")


@pytest.mark.parametrize(
    "line, expected",
    [
        ("?!Hello", ("?!", "Hello")),
        ("Hello world", ("Hello world",)),
        ("...", ("...",)),
        ("", ()),
        ("Café… über. Ünïcode!", ("Café… über", ".", " Ünïcode", "!")),
    ],
)
def test_edge_cases(line: str, expected: tuple[str, ...]) -> None:
    assert _split(line) == expected


def test_custom_terminals() -> None:
    assert _split("a;b.c", (";",)) == ("a", ";", "b.c")


def test_pass_accepts_plain_string_payload() -> None:
    out = punctuation_split(Artifact(payload="Hi. Yo"))
    assert out.payload == ("Hi", ".", " Yo")
    assert out.meta["metrics"]["punctuation_split"] == {"fragments": 3}


@given(st.text(alphabet=string.ascii_letters + " .!?()\"'", min_size=1, max_size=80))
def test_runs_are_lossless_and_alternate(line: str) -> None:
    runs = _split(line)
    assert "".join(runs) == line
    kinds = [all(ch in DEFAULT_TERMINALS for ch in run) for run in runs]
    assert all(
        all(ch in DEFAULT_TERMINALS for ch in run) or not any(ch in DEFAULT_TERMINALS for ch in run)
        for run in runs
    )
    assert all(a != b for a, b in zip(kinds, kinds[1:]))
