# roichart/figure/utils.py
from __future__ import annotations
import importlib
import math
from pathlib import Path
from typing import Any, Dict

import yaml
import matplotlib


def use_headless_backend() -> None:
    """Switch to Agg unless already on a non-interactive/inline backend."""
    try:
        if matplotlib.get_backend().lower() not in ("agg", "module://matplotlib_inline.backend_inline"):
            matplotlib.use("Agg", force=True)
    except Exception:
        matplotlib.use("Agg", force=True)

# --- YAML loader ---

def load_yaml(path: str | Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}

# --- Dynamic import ---

def import_object(dotted_path: str):
    mod, _, name = dotted_path.rpartition(".")
    if not mod:
        raise ValueError(f"Invalid dotted path: {dotted_path}")
    module = importlib.import_module(mod)
    return getattr(module, name)

# --- Label formatting ---

def format_number(value: float) -> str:
    """Shortest plain rendering of a tick value: 20 -> '20', 2.5 -> '2.5'."""
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def money_label(value: float) -> str:
    return f"${format_number(value)}M"


def percent_label(value: float) -> str:
    return f"{format_number(value)}%"

# --- Output ---

def ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


def save_figure(fig, path: Path, dpi: int = 72, overwrite: bool = True) -> Path:
    """Write ``fig`` at its own canvas size; with overwrite=False a numbered sibling is used."""
    path = Path(path)
    ensure_dir(path.parent)
    if not overwrite:
        k = 1
        base = path
        while path.exists():
            path = base.with_name(f"{base.stem}-{k}{base.suffix}")
            k += 1
    fig.savefig(path, dpi=dpi, transparent=True)
    return path
