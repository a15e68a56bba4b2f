"""Layered run configuration.

Layers are plain mappings with an ``engine`` and a ``match`` section. They are
merged in order (config files, then ``CARCASSONNE_AI__`` environment
variables, then explicit overrides from the CLI) and each section is turned
into its dataclass at the end. Environment keys nest on double underscores,
``CARCASSONNE_AI__MATCH__BOT_PARAMS__MCTS__ITERATIONS=50``, and their values
are read as YAML scalars, so ``5`` is an int and ``true`` a bool.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Iterable, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "CARCASSONNE_AI__"

Layer = Dict[str, Any]


class _Section:
    """``from_dict`` for a config section; unknown keys are reported and dropped."""

    section: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]):
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("unknown %s keys ignored: %s", cls.section, ", ".join(unknown))
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def from_layers(cls, merged: Mapping[str, Any]):
        return cls.from_dict(merged.get(cls.section))


@dataclass
class EngineConfig(_Section):
    """Rules knobs."""

    section = "engine"

    meeples_per_player: int = 7
    tiles_path: Optional[str] = None


@dataclass
class MatchConfig(_Section):
    section = "match"

    seed: Optional[int] = None
    bots: Dict[str, str] = field(default_factory=lambda: {"White": "random", "Black": "greedy"})
    # bot kind (or "*" for every bot) -> constructor keyword arguments
    bot_params: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    record: Optional[str] = None


def merge_layers(*layers: Optional[Mapping[str, Any]]) -> Layer:
    """Fold ``layers`` left to right; nested mappings merge, anything else is replaced."""
    out: Layer = {}
    for layer in layers:
        for key, value in (layer or {}).items():
            current = out.get(key)
            if isinstance(value, Mapping) and isinstance(current, Mapping):
                out[key] = merge_layers(current, value)
            elif isinstance(value, Mapping):
                out[key] = merge_layers(value)
            else:
                out[key] = value
    return out


def read_config_file(path: str) -> Layer:
    """One YAML (or JSON, which YAML reads too) file as a layer."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            logger.warning("ignoring config %s: %s", path, exc)
            return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: top level is %s, not a mapping", path, type(data).__name__)
        return {}
    return data


def _scalar(raw: str) -> Any:
    try:
        value = yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw
    # only scalars; "[1, 2]" or "a: b" in an env var stays a string
    if isinstance(value, (dict, list)):
        return raw
    return value


def env_layer(prefix: str = ENV_PREFIX, environ: Optional[Mapping[str, str]] = None) -> Layer:
    environ = os.environ if environ is None else environ
    out: Layer = {}
    for name, raw in environ.items():
        if not name.startswith(prefix) or len(name) == len(prefix):
            continue
        *parents, leaf = [part.lower() for part in name[len(prefix):].split("__")]
        target = out
        for part in parents:
            target = target.setdefault(part, {})
        target[leaf] = _scalar(raw)
    return out


def load_engine_config(
    paths: Iterable[str] | None = None,
    prefix: str = ENV_PREFIX,
    overrides: Optional[Mapping[str, Any]] = None,
) -> tuple[EngineConfig, MatchConfig]:
    """Files, then environment, then explicit overrides; later layers win."""
    layers = [read_config_file(path) for path in (paths or [])]
    layers.append(env_layer(prefix))
    layers.append(overrides or {})
    merged = merge_layers(*layers)
    return EngineConfig.from_layers(merged), MatchConfig.from_layers(merged)


__all__ = [
    "ENV_PREFIX",
    "EngineConfig",
    "MatchConfig",
    "merge_layers",
    "read_config_file",
    "env_layer",
    "load_engine_config",
]
