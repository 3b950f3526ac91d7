"""Language utilities."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from sentence_segmenter.config import LanguageProfile

# Germanic languages share the same terminal characters; they are kept as
# separate entries so callers can select them by code.
_PROFILES: Mapping[str, LanguageProfile] = MappingProxyType(
    {code: LanguageProfile() for code in ("en", "nl", "de")}
)


def default_language() -> str:
    """Return the deterministic default language code."""
    return "en"


def available_profiles() -> tuple[str, ...]:
    """Return the codes of the built-in profiles."""
    return tuple(sorted(_PROFILES))


def get_profile(code: str | None = None) -> LanguageProfile:
    """Return the built-in profile for ``code`` (default language when None)."""
    key = (code or default_language()).lower()
    try:
        return _PROFILES[key]
    except KeyError:
        raise KeyError(f"unknown language profile: {code!r}") from None


def resolve_profile(options: Mapping[str, Any] | None) -> LanguageProfile:
    """Build a profile from a ``language`` options section.

    ``profile`` selects a built-in base; explicit ``terminals`` and
    ``abbreviators`` replace the base sets.
    """

    opts = dict(options or {})
    base = get_profile(opts.get("profile"))
    updates = {k: opts[k] for k in ("terminals", "abbreviators") if opts.get(k) is not None}
    if not updates:
        return base
    return LanguageProfile.model_validate({**base.model_dump(), **updates})
