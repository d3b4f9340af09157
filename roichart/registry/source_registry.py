# roichart/registry/source_registry.py
from __future__ import annotations
import importlib
import os
from dataclasses import dataclass
from typing import Callable, Dict, Any, List, Mapping
from pathlib import Path

import yaml
from roichart.data.base import RecordSource, Record

Factory = Callable[[], RecordSource]


@dataclass
class _Entry:
    name: str
    factory: Factory


class SourceRegistry:
    """Simple registry mapping source names to factories."""

    def __init__(self) -> None:
        self._entries: Dict[str, _Entry] = {}

    def register(self, name: str, factory: Factory) -> None:
        if name in self._entries:
            raise KeyError(f"Source '{name}' is already registered")
        self._entries[name] = _Entry(name, factory)

    def register_cls(self, name: str, cls: type, **params: Any) -> None:
        def _factory() -> RecordSource:
            return cls(**params)  # type: ignore

        self.register(name, _factory)

    def get(self, name: str) -> RecordSource:
        if name not in self._entries:
            raise KeyError(f"Source '{name}' is not registered")
        src = self._entries[name].factory()
        if not hasattr(src, "load"):
            raise TypeError(f"Source '{name}' must expose an async .load()")
        return src

    async def load(self, name: str) -> List[Record]:
        return await self.get(name).load()

    async def load_with_params(self, name: str, **params: Any) -> List[Record]:
        return await self.get(name).add_params(**params).load()

    def list(self) -> Dict[str, Dict[str, Any]]:
        return {k: {"name": v.name} for k, v in self._entries.items()}


def _import_from_string(path: str) -> type:
    mod, _, obj = path.rpartition(".")
    if not mod:
        raise ValueError(f"Invalid dotted path: {path}")
    module = importlib.import_module(mod)
    return getattr(module, obj)


def _resolve_paths_in_params(params: Any, base_dir: Path, keys=("path",)) -> Any:
    """
    Recursively resolve any dict item whose key is in `keys` as a filesystem path:
    - expandvars / expanduser
    - make absolute relative to YAML's directory
    """
    if isinstance(params, Mapping):
        out = {}
        for k, v in params.items():
            if k in keys and isinstance(v, str):
                s = os.path.expandvars(os.path.expanduser(v))
                p = Path(s)
                if not p.is_absolute():
                    p = (base_dir / p).resolve()
                out[k] = str(p)
            else:
                out[k] = _resolve_paths_in_params(v, base_dir, keys)
        return out
    elif isinstance(params, list):
        return [_resolve_paths_in_params(x, base_dir, keys) for x in params]
    else:
        return params


def registry_from_mapping(spec: Mapping[str, Any], base_dir: Path) -> SourceRegistry:
    reg = SourceRegistry()
    datasets = spec.get("datasets", {}) or {}
    for name, node in datasets.items():
        cls_path = node["cls"]
        raw_params = node.get("params", {}) or {}
        params = _resolve_paths_in_params(raw_params, base_dir, keys=("path", "paths"))
        cls = _import_from_string(cls_path)
        reg.register_cls(name, cls, **params)
    return reg


def load_registry_from_yaml(yaml_path: str | os.PathLike[str]) -> SourceRegistry:
    yaml_path = Path(yaml_path).resolve()
    if not yaml_path.exists():
        raise FileNotFoundError(f"Config not found: {yaml_path}")

    with open(yaml_path, "r", encoding="utf-8") as f:
        spec = yaml.safe_load(f) or {}
    return registry_from_mapping(spec, yaml_path.parent)
