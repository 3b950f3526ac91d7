from __future__ import annotations
from dataclasses import dataclass, fields, is_dataclass, replace
from functools import reduce
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Protocol, Tuple, Type, runtime_checkable

Fragments = Tuple[str, ...]


@dataclass(frozen=True)
class Artifact:
    """Immutable carrier of fragments + metadata between passes."""

    payload: Any
    meta: Dict[str, Any] | None = None


@runtime_checkable
class Pass(Protocol):
    name: str
    input_type: Type
    output_type: Type

    def __call__(self, a: Artifact) -> Artifact:
        """Execute the pass."""
        ...


_REGISTRY: Mapping[str, Pass] = MappingProxyType({})


def register(p: Pass) -> Pass:
    """Register a pass by name; idempotent for same object."""
    global _REGISTRY
    _REGISTRY = MappingProxyType({**dict(_REGISTRY), p.name: p})
    return p


def run_step(name: str, a: Artifact) -> Artifact:
    """Run a single registered step."""
    return _REGISTRY[name](a)


def run_pipeline(steps: List[str], a: Artifact) -> Artifact:
    """Apply registered steps in order."""
    return reduce(lambda acc, s: run_step(s, acc), steps, a)


def run_passes(passes: List[Pass], a: Artifact) -> Artifact:
    """Apply already configured pass objects in order."""
    return reduce(lambda acc, p: p(acc), passes, a)


def registry() -> Dict[str, Pass]:
    """Shallow copy of the registry for inspection/testing."""
    return dict(_REGISTRY)


def configure_pass(pass_obj: Pass, opts: Mapping[str, Any]) -> Pass:
    """Return a new pass with ``opts`` merged without mutating ``pass_obj``.

    Only keys naming a dataclass field of the pass are applied; everything else
    is ignored so a single option mapping can be shared by every pass.
    """

    if not opts or not is_dataclass(pass_obj):
        return pass_obj
    names = {f.name for f in fields(pass_obj)}
    updates = {k: opts[k] for k in opts if k in names}
    return replace(pass_obj, **updates) if updates else pass_obj


def as_fragments(payload: Any) -> Fragments:
    """Coerce a pass payload (a line or a fragment sequence) to a tuple."""
    if isinstance(payload, str):
        return (payload,)
    return tuple(payload)


def with_metrics(a: Artifact, name: str, fragments: Fragments) -> Artifact:
    """Return a new artifact carrying ``fragments`` and their count for ``name``."""
    meta = dict(a.meta or {})
    metrics = dict(meta.get("metrics") or {})
    metrics[name] = {"fragments": len(fragments)}
    meta["metrics"] = metrics
    trace = meta.get("trace")
    if trace is not None:
        meta["trace"] = [*trace, (name, fragments)]
    return Artifact(payload=fragments, meta=meta)
