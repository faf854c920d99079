import math
from dataclasses import dataclass, field
from typing import Optional

import pytest

from punchy.progress import (
    AssetHandle,
    LoadProgress,
    load_progress,
    untracked,
    untracked_type,
)


def loaded_if(*paths):
    return lambda handle: handle.path in paths


@dataclass
class Image:
    path: str
    size: tuple
    handle: AssetHandle


@dataclass
class Level:
    background: Image
    music: AssetHandle
    extra: Optional[AssetHandle] = None
    players: list = field(default_factory=list)
    fonts: dict = field(default_factory=dict)
    skipped: AssetHandle = untracked(default=AssetHandle("skipped"))


@untracked_type
@dataclass
class Opaque:
    handle: AssetHandle


def test_merged_sums():
    parts = [LoadProgress(1, 2), LoadProgress(3, 4)]
    merged = LoadProgress.merged(parts)
    assert merged.loaded == sum(p.loaded for p in parts)
    assert merged.total == sum(p.total for p in parts)


def test_merged_empty_is_default():
    assert LoadProgress.merged([]) == LoadProgress()


def test_display():
    assert str(LoadProgress(3, 7)) == "3 / 7"


def test_as_percent_complete():
    assert LoadProgress(5, 5).as_percent() == 1.0
    assert LoadProgress(2, 5).as_percent() < 1.0


def test_as_percent_nothing_to_load_is_nan():
    percent = LoadProgress().as_percent()
    assert str(percent) == "nan"
    assert math.isnan(percent)
    assert not percent >= 1.0


def test_handle_progress():
    handle = AssetHandle("a.png")
    assert load_progress(handle, loaded_if("a.png")) == LoadProgress(1, 1)
    assert load_progress(handle, loaded_if()) == LoadProgress(0, 1)


@pytest.mark.parametrize("value", ["text", 3, 2.5, True, None, (1.0, 2.0)])
def test_plain_values_have_no_progress(value):
    assert load_progress(value, loaded_if()) == LoadProgress()


def test_nested_structure():
    handles = [AssetHandle("bg.png"), AssetHandle("music.ogg"), AssetHandle("p1"),
               AssetHandle("p2"), AssetHandle("font.ttf")]
    level = Level(
        background=Image("bg.png", (1.0, 2.0), handles[0]),
        music=handles[1],
        players=[handles[2], handles[3]],
        fonts={"main": handles[4]},
    )
    progress = load_progress(level, loaded_if("bg.png", "p2"))
    assert progress.total == len(handles)
    assert progress.loaded == 2


def test_untracked_field_is_skipped():
    level = Level(background=Image("x", (0, 0), AssetHandle("x")), music=AssetHandle("m"))
    progress = load_progress(level, loaded_if("x", "m", "skipped"))
    assert progress.loaded == progress.total
    assert progress.as_percent() == 1.0


def test_optional_field_counted_when_present():
    base = Level(background=Image("x", (0, 0), AssetHandle("x")), music=AssetHandle("m"))
    with_extra = Level(
        background=Image("x", (0, 0), AssetHandle("x")),
        music=AssetHandle("m"),
        extra=AssetHandle("e"),
    )
    check = loaded_if()
    assert load_progress(with_extra, check).total == load_progress(base, check).total + 1


def test_untracked_type_reports_nothing():
    assert load_progress(Opaque(AssetHandle("h")), loaded_if("h")) == LoadProgress()


def test_dict_keys_are_ignored():
    value = {AssetHandle("key"): AssetHandle("value")}
    assert load_progress(value, loaded_if("value")) == LoadProgress(1, 1)


def test_unsupported_type_raises():
    with pytest.raises(TypeError):
        load_progress(object(), loaded_if())