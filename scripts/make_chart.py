# scripts/make_chart.py
from __future__ import annotations
import argparse
import sys
from pathlib import Path
from typing import Dict, Any

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from roichart.figure.utils import use_headless_backend, load_yaml, import_object

use_headless_backend()

from roichart.figure.base import ChartSpec, Context
from roichart.registry import load_registry_from_yaml


def main(cfg_path: str = str(ROOT / "configs" / "charts.yaml")):
    cfg_file = Path(cfg_path).resolve()
    cfg = load_yaml(cfg_file)

    registry = load_registry_from_yaml(cfg_file.parent / cfg.get("registry", "datasets.yaml"))
    output_cfg = cfg.get("output", {}) or {}
    out_dir = ROOT / output_cfg.get("figs_dir", "report/figs")
    out_dir.mkdir(parents=True, exist_ok=True)

    ctx = Context(
        root=ROOT,
        registry=registry,
        output_dir=out_dir,
        overwrite=bool(output_cfg.get("overwrite", True)),
        dpi=int(output_cfg.get("fig_dpi", 72)),
        formats=list(output_cfg.get("formats", ["svg"])),
    )

    charts: Dict[str, Any] = cfg.get("charts", {})
    for key, node in charts.items():
        spec = ChartSpec(
            key=key,
            title=node.get("title", key),
            cls_ref=node["cls"],
            source=node["source"],
            params=node.get("params", {}) or {},
        )
        Cls = import_object(spec.cls_ref)
        for out_path in Cls(spec, ctx).run():
            print(f"[OK] {key}: {out_path}")


if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Render the bubble charts listed in a YAML config.")
    ap.add_argument("config", nargs="?", default=str(ROOT / "configs" / "charts.yaml"))
    main(ap.parse_args().config)
