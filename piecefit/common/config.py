"""
Utilities for loading YAML search configs.
Keep it simple and transparent.

Layout of a search config (see configs/search.yaml):

    search:
      n_workers: 8
      progress: true
      verbose: false
      top_k: 10
      reports_dir: reports
    segments:
      left:
        a: {min: 0.75, max: 1.65, step: 0.05}
        b: {values: [-0.2, 0.0, 0.2]}
        c: {min: 3, max: 3, step: 1, type: int}
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..params.ranges import UniformRange, ValuesRange

_TYPES = {"float": float, "int": int, "str": str, "bool": bool}


def load_yaml(path: str | Path) -> Dict[str, Any]:
    """
    Read a search config. An empty file is an empty config, not an error.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Search config not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data or {}


def require_keys(cfg: Dict[str, Any], keys: List[str], ctx: str) -> None:
    """
    Fail before the search starts if a section or range field is missing.
    `ctx` names the section in the message ("segments", "range", ...).
    """
    missing = [k for k in keys if k not in cfg]
    if missing:
        raise KeyError(f"Missing keys in {ctx} config: {missing}")



@dataclass
class SearchSettings:
    """
    Run settings for a grid search.
    """
    n_workers: Optional[int] = None  # None -> os.cpu_count()
    progress: bool = True
    verbose: bool = False
    top_k: int = 10
    reports_dir: str = "reports"

    @classmethod
    def from_dict(cls, raw: Optional[Dict[str, Any]]) -> "SearchSettings":
        raw = raw or {}
        n_workers = raw.get("n_workers")
        return cls(
            n_workers=int(n_workers) if n_workers is not None else None,
            progress=bool(raw.get("progress", True)),
            verbose=bool(raw.get("verbose", False)),
            top_k=int(raw.get("top_k", 10)),
            reports_dir=str(raw.get("reports_dir", "reports")),
        )


def load_settings(path: str | Path) -> SearchSettings:
    data = load_yaml(path)
    return SearchSettings.from_dict(data.get("search"))


def range_from_config(raw: Dict[str, Any]):
    """
    Build a range from {min, max, step[, type]} or {values: [...][, type]}.

    Bad numbers are not rejected here: an ill-formed uniform range just has
    size 0 and empties the grid it belongs to.
    """
    type_name = str(raw.get("type", "float"))
    if type_name not in _TYPES:
        raise ValueError(f"Unknown range type '{type_name}' (expected one of {sorted(_TYPES)})")
    value_type = _TYPES[type_name]

    if "values" in raw:
        return ValuesRange(items=[value_type(v) for v in raw["values"]], value_type=value_type)

    require_keys(raw, ["min", "max", "step"], "range")
    return UniformRange(min=raw["min"], max=raw["max"], step=raw["step"], value_type=value_type)


def apply_grid_config(grid: Any, raw: Dict[str, Any]) -> None:
    """
    Assign ranges to a grid by parameter name.

    Unknown names raise UnknownParameterError (via grid.set_by_label), so a
    typo in the YAML fails before the search starts.
    """
    for label, range_raw in (raw or {}).items():
        grid.set_by_label(str(label), range_from_config(range_raw))
