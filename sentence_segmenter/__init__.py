# Auto-register passes on package import (e.g., when importing any submodule)
from . import passes  # noqa: F401
from .core import SPLIT_TRIM, LineTrace, Sentence, SplitFlags, count, split

__version__ = "0.1.0"

__all__: list[str] = ["SPLIT_TRIM", "LineTrace", "Sentence", "SplitFlags", "count", "split"]
