from __future__ import annotations

from sentence_segmenter.framework import Artifact, register
from sentence_segmenter.text_cleaning import clean_text


class _TextCleanPass:
    name = "text_clean"
    input_type = str
    output_type = str

    def __call__(self, a: Artifact) -> Artifact:
        meta = dict(a.meta or {})
        metrics = dict(meta.get("metrics") or {})
        metrics["normalized"] = True
        meta["metrics"] = metrics
        return Artifact(payload=clean_text(a.payload), meta=meta)


text_clean = register(_TextCleanPass())
