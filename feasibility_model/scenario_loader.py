from typing import Dict, Any
import os
import glob
import logging
import yaml
from copy import deepcopy

__all__ = ['load', 'deep_merge']

logger = logging.getLogger(__name__)

SCENARIO_PATTERNS = ('*.yaml', '*.yml', '*.json')


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge override into base and return the result.
    Lists (grades, discount categories, revenue rows) are replaced, not merged.
    """
    for key, val in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(val, dict):
            base[key] = deep_merge(base[key], val)
        else:
            base[key] = deepcopy(val)
    return base


def _read(fp: str) -> Dict[str, Any]:
    # yaml.safe_load also accepts JSON documents
    with open(fp, encoding='utf-8') as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"Scenario file {fp} must contain a mapping")
    return cfg


def load(path: str) -> Any:
    """
    Load a scenario from a YAML/JSON file or a directory of them.
    If path is a directory, returns Dict[str, Dict] keyed by file stem.
    If path is a file, returns a single scenario dict, resolving 'extends'.
    """
    if os.path.isdir(path):
        raw = {}
        for ext in SCENARIO_PATTERNS:
            for fp in sorted(glob.glob(os.path.join(path, ext))):
                name = os.path.splitext(os.path.basename(fp))[0]
                raw[name] = _read(fp)

        def resolve(name: str, seen=None):
            if seen is None:
                seen = set()
            if name in seen:
                raise ValueError(f"Circular extends detected in '{name}'")
            seen.add(name)
            cfg = raw.get(name)
            if cfg is None:
                raise ValueError(f"Scenario '{name}' not found in {path}")
            parent = cfg.get('extends')
            base = {}
            if parent:
                parent_name = os.path.splitext(parent)[0]
                base = resolve(parent_name, seen)
            overrides = {k: v for k, v in cfg.items() if k != 'extends'}
            return deep_merge(base, overrides)

        logger.debug(f"Resolving {len(raw)} scenarios from {path}")
        return {name: resolve(name) for name in raw}
    return _load_file(path, set())


def _load_file(path: str, seen: set) -> Dict[str, Any]:
    real = os.path.realpath(path)
    if real in seen:
        raise ValueError(f"Circular extends detected in '{path}'")
    seen.add(real)
    cfg = _read(path)
    parent = cfg.get('extends')
    if not parent:
        return cfg
    parent_fp = os.path.join(os.path.dirname(path), parent)
    if not os.path.exists(parent_fp):
        raise FileNotFoundError(f"Parent config '{parent}' not found for {path}")
    logger.debug(f"{path} extends {parent_fp}")
    parent_cfg = _load_file(parent_fp, seen)
    overrides = {k: v for k, v in cfg.items() if k != 'extends'}
    return deep_merge(parent_cfg, overrides)
