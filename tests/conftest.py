from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Dict, Tuple

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from sentence_segmenter import Sentence  # noqa: E402

Stages = Dict[str, Tuple[str, ...]]


@pytest.fixture
def engine() -> Sentence:
    return Sentence()


@pytest.fixture
def stages(engine: Sentence) -> Callable[[str], Stages]:
    """Fragments after every pass for a single-line input."""
    return lambda line: dict(engine.trace(line)[0].stages)
