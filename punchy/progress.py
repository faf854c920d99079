"""Asset load progress tracking over nested metadata."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable

_UNTRACKED_KEY = "load_progress_untracked"
_UNTRACKED_CLASS_ATTR = "_load_progress_untracked"


@dataclass(frozen=True)
class LoadProgress:
    """How many items must be loaded and how many already are."""

    loaded: int = 0
    total: int = 0

    def __str__(self) -> str:
        return f"{self.loaded} / {self.total}"

    def as_percent(self) -> float:
        """Loaded fraction; NaN or infinity when there is nothing to load."""
        if self.total == 0:
            return math.nan if self.loaded == 0 else math.inf
        return self.loaded / self.total

    @classmethod
    def merged(cls, progresses: Iterable["LoadProgress"]) -> "LoadProgress":
        """Sum several progresses into one."""
        loaded = 0
        total = 0
        for progress in progresses:
            loaded += progress.loaded
            total += progress.total
        return cls(loaded, total)


@dataclass(frozen=True)
class AssetHandle:
    """Reference to an asset by its path."""

    path: str = ""


def untracked(**kwargs: Any) -> Any:
    """A dataclass field that is left out of load progress."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[_UNTRACKED_KEY] = True
    return dataclasses.field(metadata=metadata, **kwargs)


def untracked_type(cls: type) -> type:
    """Class decorator: instances report no load progress."""
    setattr(cls, _UNTRACKED_CLASS_ATTR, True)
    return cls


_PLAIN_TYPES = (str, bytes, int, float, Enum)


def load_progress(value: Any, is_loaded: Callable[[AssetHandle], bool]) -> LoadProgress:
    """Compute the load progress of ``value``.

    Handles count as one item each; dataclass fields, sequences and mapping values
    are merged; plain values and untracked types count as nothing.
    """
    if isinstance(value, AssetHandle):
        return LoadProgress(1 if is_loaded(value) else 0, 1)
    if value is None or isinstance(value, _PLAIN_TYPES):
        return LoadProgress()
    if vars(type(value)).get(_UNTRACKED_CLASS_ATTR, False):
        return LoadProgress()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return LoadProgress.merged(
            load_progress(getattr(value, f.name), is_loaded)
            for f in dataclasses.fields(value)
            if not f.metadata.get(_UNTRACKED_KEY, False)
        )
    if isinstance(value, dict):
        return LoadProgress.merged(load_progress(v, is_loaded) for v in value.values())
    if isinstance(value, (list, tuple, set, frozenset)):
        return LoadProgress.merged(load_progress(v, is_loaded) for v in value)
    raise TypeError(f"cannot compute load progress of {type(value).__name__}")