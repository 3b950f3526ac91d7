import logging
import textwrap
import warnings

import pytest
from pydantic import ValidationError

from sentence_segmenter import SPLIT_TRIM, Sentence
from sentence_segmenter.config import (
    DEFAULT_PIPELINE,
    LanguageProfile,
    PipelineSpec,
    _env_overrides,
    load_spec,
)
from sentence_segmenter.env_utils import LOG_LEVEL_ENV, log_level
from sentence_segmenter.language import available_profiles, default_language, resolve_profile


def test_default_profile() -> None:
    profile = LanguageProfile()
    assert profile.terminals == (".", "!", "?")
    assert profile.abbreviators == (".",)
    assert profile.definite_terminators == ("!", "?")


@pytest.mark.parametrize(
    "terminals, abbreviators",
    [
        ((".", "!"), ("?",)),
        (("...",), ()),
        ((), ()),
        ((".", "."), (".",)),
    ],
)
def test_invalid_profiles_are_rejected(terminals, abbreviators) -> None:
    with pytest.raises(ValidationError):
        LanguageProfile(terminals=terminals, abbreviators=abbreviators)


def test_engine_validates_configuration() -> None:
    with pytest.raises(ValidationError):
        Sentence(terminals=".", abbreviators="!")


def test_builtin_profiles() -> None:
    assert default_language() == "en"
    assert available_profiles() == ("de", "en", "nl")


def test_resolve_profile_overrides_sets() -> None:
    profile = resolve_profile({"profile": "nl", "terminals": [".", "!", "?", ";"]})
    assert profile.terminals == (".", "!", "?", ";")
    assert profile.abbreviators == (".",)
    assert resolve_profile(None) == LanguageProfile()


def test_missing_file_gives_defaults(tmp_path) -> None:
    spec = load_spec(tmp_path / "absent.yaml")
    assert spec.pipeline == list(DEFAULT_PIPELINE)


def test_yaml_language_options(tmp_path) -> None:
    cfg = tmp_path / "pipeline.yaml"
    cfg.write_text(
        textwrap.dedent(
            """
            options:
              language:
                terminals: [".", "!", "?", ";"]
                abbreviators: ["."]
            """
        )
    )
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        spec = load_spec(cfg)
    engine = Sentence.from_spec(spec)
    assert engine.terminals == (".", "!", "?", ";")
    assert engine.split("First part here; second part here.", SPLIT_TRIM) == [
        "First part here;",
        "second part here.",
    ]


def test_unknown_step_options_warn(tmp_path) -> None:
    cfg = tmp_path / "pipeline.yaml"
    cfg.write_text(
        textwrap.dedent(
            """
            options:
              extra_pass:
                foo: 1
            """
        )
    )
    with pytest.warns(UserWarning, match="extra_pass"):
        load_spec(cfg)


def test_non_mapping_yaml_is_rejected(tmp_path) -> None:
    cfg = tmp_path / "pipeline.yaml"
    cfg.write_text("- just\n- a list\n")
    with pytest.raises(TypeError):
        load_spec(cfg)


def test_env_overrides_are_yaml_coerced() -> None:
    env = {
        "SENTENCE_SEGMENTER__LANGUAGE__TERMINALS": "['.', '!', '?', ';']",
        "SENTENCE_SEGMENTER__LANGUAGE__PROFILE": "de",
        "UNRELATED__KEY": "1",
    }
    assert _env_overrides(env) == {
        "language": {"terminals": [".", "!", "?", ";"], "profile": "de"}
    }


def test_env_overrides_reach_spec(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("SENTENCE_SEGMENTER__LANGUAGE__ABBREVIATORS", "['.', '!']")
    spec = load_spec(tmp_path / "absent.yaml")
    assert Sentence.from_spec(spec).abbreviators == (".", "!")


def test_explicit_overrides_win(tmp_path) -> None:
    cfg = tmp_path / "pipeline.yaml"
    cfg.write_text("options:\n  language:\n    profile: nl\n")
    spec = load_spec(cfg, overrides={"language": {"profile": "de"}})
    assert spec.options["language"]["profile"] == "de"


@pytest.mark.parametrize(
    "options",
    [
        {"sentence_merge": {"terminals": ";", "abbreviators": ""}},
        {"punctuation_split": {"terminals": ("..",)}},
        {"punctuation_merge": {"abbreviators": (".", "!")}},
    ],
)
def test_step_options_cannot_override_character_sets(options) -> None:
    with pytest.raises(ValueError, match="options.language"):
        Sentence.from_spec(PipelineSpec(options=options))
    with pytest.raises(ValueError, match="options.language"):
        Sentence(options=options)


def test_passes_share_engine_character_sets() -> None:
    spec = PipelineSpec(options={"language": {"terminals": [".", "!", "?", ";"]}})
    engine = Sentence.from_spec(spec)
    assert all(
        getattr(p, "terminals", engine.terminals) == engine.terminals for p in engine._passes
    )
    assert engine.split("First part here; second part here.", SPLIT_TRIM) == [
        "First part here;",
        "second part here.",
    ]


@pytest.mark.parametrize(
    "value, expected",
    [(None, logging.WARNING), ("debug", logging.DEBUG), ("10", 10), ("bogus", logging.WARNING)],
)
def test_log_level_from_env(monkeypatch, value, expected) -> None:
    if value is None:
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    else:
        monkeypatch.setenv(LOG_LEVEL_ENV, value)
    assert log_level() == expected
