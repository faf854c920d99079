# punchy

Game rules and asset handling for a 2.5D side-scrolling beat 'em up: YAML
asset metadata with strict validation, dependency resolution between assets,
load progress tracking, sprite animation stepping, combat and pickup rules,
enemy targeting, and engine configuration.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
punchy [options] [GAME_ASSET]
```

The command reads `GAME_ASSET` (default `default.game.yaml`) from the asset
directory, then reads the start level that the game asset names, and prints
a short summary: the game asset, the start level path, the number of
players, enemies and items placed in the level, and the state the game
would begin in (`main_menu`, or `in_game` with `--auto-start`). It exits
with status 1 and an `error:` message when an asset cannot be read or does
not validate.

Options:

- `-a`, `--asset-dir DIR`: the directory to load assets from (default
  `assets`)
- `-s`, `--auto-start`: skip the menu and start the game straight away
- `-l`, `--log-level LEVEL`: the log level; the first comma-separated item
  without `=` sets the level of the command's logging, `module=level` items
  are accepted and ignored
- `-R`, `--hot-reload`: recorded in `EngineConfig.hot_reload`

## What the package does not do

There is no window, renderer, audio output or input handling. The command
loads and validates assets and reports what a level would contain; it does
not run a playable game or watch files for changes. The library modules
decide *what* happens (which frame to show, which sound to play, where a
projectile goes, when a fighter dies) and leave drawing, playing and
simulating to whatever engine uses them. Settings are parsed from game
assets but not stored anywhere.

## Library overview

- `punchy.config`: `EngineConfig`, built from command-line arguments with
  `EngineConfig.from_args` or from a page query string with
  `EngineConfig.from_web_params`; `parse_url_query_string`.
- `punchy.theme` and `punchy.metadata`: dataclasses for game, level,
  fighter and item assets (`GameMeta`, `LevelMeta`, `FighterMeta`,
  `ItemMeta` and their parts), built with `from_dict`. Missing or unknown
  fields and values of the wrong type raise `MetadataError`.
- `punchy.assets`: `load_asset` picks a loader by file name (`*.game.yaml`,
  `*.level.yaml`, `*.fighter.yaml`, `*.item.yaml` and their `.yml` forms,
  `*.ttf`) and returns a `LoadedAsset` with its dependencies.
  `relative_asset_path` resolves paths against the loading file, or against
  the asset root for paths starting with `/`. `detect_locale` reads the
  system locale, defaulting to `en-US`.
- `punchy.progress`: `LoadProgress`, `AssetHandle` and `load_progress`,
  which walks metadata and counts asset handles that are loaded; `untracked`
  and `untracked_type` leave fields or types out.
- `punchy.animation`: `Animation`, `Clip` and `Facing`.
- `punchy.combat`: `Attack`, `AttackFrames`, `Projectile`, `ThrownItem`,
  `FlopJump`, `throw_angles`, `enemy_attack_offset`,
  `enemy_attack_decision`.
- `punchy.collisions`: `BodyLayers` and `resolve_hit`.
- `punchy.entities`: `EnemySpawn`, `ItemSpawn`, `pick_items` and
  `item_carried_by_player`.
- `punchy.audio`: `FighterStateEffectsPlayback`, `menu_music`,
  `level_music`.
- `punchy.camera`: `camera_move_speed`.
- `punchy.loading`: `menu_input_map`, `level_ready`, `GameLoader`,
  `build_level`, `load_fighter`.
- `punchy.game`: `GameState`, `kill_check`, `set_target_near_player` and
  the `main` entry point of the command.

```python
from punchy.config import parse_url_query_string

parse_url_query_string("?RUST_LOG=debug&hello=world", "RUST_LOG")  # "debug"
```