"""
Fit a three-piece model (line | parabola | hyperbola) by exhaustive grid search.
Synthesizes observations from known parameters, searches every combination in
configs/search.yaml, and saves the ranked table plus the best model.

Optionally (--bridge) the middle piece is not searched at all: it becomes a
straight line fitted between the outer pieces at x1 and x2.
"""

from __future__ import annotations

import argparse
from datetime import datetime
from pathlib import Path
import sys
import time

import joblib
import numpy as np

# Add project root to sys.path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from piecefit.common.config import SearchSettings, apply_grid_config, load_yaml, require_keys
from piecefit.core.orchestrator import Orchestrator
from piecefit.metrics import pearson_correlation, sample_model
from piecefit.model.domains import Interval
from piecefit.model.piecewise import PiecewiseModel
from piecefit.model.shapes import FitLineBetween, Hyperbola, Line, Parabola
from piecefit.params.grid import ParamGrid, UnitGrid
from piecefit.search.runner import run_search
from piecefit.search.strategy import EnumerationStrategy, ReverseEnumerationStrategy


def _true_model(x1: float, x2: float):
    """Piecewise model the observations are generated from."""
    line = Line()
    line.k.value, line.m.value = -0.8, 0.5
    parabola = Parabola()
    parabola.a.value, parabola.b.value, parabola.c.value = 1.2, 0.2, -0.3
    hyperbola = Hyperbola()
    hyperbola.a.value, hyperbola.b.value = 2.0, 0.1

    pm = PiecewiseModel()
    pm.add(Interval(None, x1), line)
    pm.add(Interval(x1, x2), parabola)
    pm.add(Interval(x2, None), hyperbola)
    return pm


def build_orchestrator(cfg: dict, bridge: bool, reverse: bool) -> Orchestrator:
    data_cfg = cfg.get("data", {})
    x1, x2 = float(data_cfg.get("x1", -1.0)), float(data_cfg.get("x2", 1.0))
    seg_cfg = cfg.get("segments", {})
    require_keys(seg_cfg, ["line", "parabola", "hyperbola"], "segments")

    line_grid = ParamGrid(Line, "k", "m")
    apply_grid_config(line_grid, seg_cfg["line"])
    hyp_grid = ParamGrid(Hyperbola, "a", "b")
    apply_grid_config(hyp_grid, seg_cfg["hyperbola"])

    orch = Orchestrator(strategy=ReverseEnumerationStrategy if reverse else EnumerationStrategy)
    orch.add(Interval(None, x1), line_grid, name="line")
    if bridge:
        orch.add_constrained(Interval(x1, x2), UnitGrid(Line), x1, x2, FitLineBetween(x1, x2), name="bridge")
    else:
        par_grid = ParamGrid(Parabola, "a", "b", "c")
        apply_grid_config(par_grid, seg_cfg["parabola"])
        orch.add(Interval(x1, x2), par_grid, name="parabola")
    orch.add(Interval(x2, None), hyp_grid, name="hyperbola")
    return orch


def _plot(xs, observed, fitted, path: Path) -> None:
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(xs, observed, ".", ms=3, label="observed")
    ax.plot(xs, fitted, "-", lw=1.5, label="best fit")
    ax.legend()
    ax.grid(alpha=0.3)
    fig.tight_layout()
    fig.savefig(path, dpi=120)
    plt.close(fig)


def main() -> int:
    parser = argparse.ArgumentParser(description="Piecewise grid search (line | parabola | hyperbola)")
    parser.add_argument("--config", default=str(PROJECT_ROOT / "configs" / "search.yaml"), help="Search YAML")
    parser.add_argument("--workers", type=int, default=None, help="Parallel workers (override config; 1 = sequential)")
    parser.add_argument("--bridge", action=argparse.BooleanOptionalAction, default=False,
                        help="Replace the parabola by a constrained line between neighbours")
    parser.add_argument("--reverse", action=argparse.BooleanOptionalAction, default=False,
                        help="Sequential mode: enumerate combinations in reverse order")
    parser.add_argument("--noise", type=float, default=0.0, help="Gaussian noise std added to observations")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--save-report", action=argparse.BooleanOptionalAction, default=True,
                        help="Save ranked CSV and best model artifact")
    parser.add_argument("--plot", action=argparse.BooleanOptionalAction, default=False, help="Save a PNG of the fit")
    args = parser.parse_args()

    cfg = load_yaml(args.config)
    settings = SearchSettings.from_dict(cfg.get("search"))
    n_workers = args.workers if args.workers is not None else settings.n_workers

    data_cfg = cfg.get("data", {})
    xs = np.arange(
        float(data_cfg.get("x_min", -5.0)),
        float(data_cfg.get("x_max", 5.0)) + 1e-12,
        float(data_cfg.get("x_step", 0.05)),
    )
    x1, x2 = float(data_cfg.get("x1", -1.0)), float(data_cfg.get("x2", 1.0))
    observed = sample_model(_true_model(x1, x2), xs)
    if args.noise > 0:
        rng = np.random.default_rng(args.seed)
        observed = observed + rng.normal(0.0, args.noise, size=observed.shape)

    orch = build_orchestrator(cfg, bridge=args.bridge, reverse=args.reverse)

    print("=" * 80)
    print(f"[SEARCH] segments: {', '.join(f'{s.name}={s.size()}' for s in orch.segments)}")
    print(f"[SEARCH] total combinations: {orch.size()}  workers: {n_workers or 'auto'}")
    print("=" * 80)

    t0 = time.perf_counter()
    result = run_search(
        orch,
        score=lambda pm: pearson_correlation(sample_model(pm, xs), observed),
        n_workers=n_workers,
        progress=settings.progress,
        verbose=settings.verbose,
        top_k=settings.top_k,
    )
    elapsed = time.perf_counter() - t0

    if result.best_index is None:
        print("[ERROR] Search produced no usable result.")
        return 1

    print(f"\nElapsed: {elapsed:.2f} s")
    print(f"Best score: {result.best_score:.6f}")
    print(f"Best global: {result.best_index}")
    print("Best parameters:")
    for seg_name, params in result.best_params:
        print(f"  [{seg_name}]")
        for label, value in params:
            print(f"    {label} = {value:g}")

    print(f"\nTOP {len(result.table)}:")
    print(result.table.to_string(index=False))

    if args.save_report or args.plot:
        reports_dir = Path(settings.reports_dir)
        if not reports_dir.is_absolute():
            reports_dir = PROJECT_ROOT / reports_dir
        reports_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        if args.save_report:
            csv_path = reports_dir / f"piecewise_search_{timestamp}.csv"
            result.table.to_csv(csv_path, index=False)
            model_path = reports_dir / f"piecewise_best_{timestamp}.joblib"
            joblib.dump({"model": result.best_model, "params": result.best_params, "score": result.best_score},
                        model_path)
            print(f"\nResults saved to: {csv_path}")
            print(f"Best model saved to: {model_path}")

        if args.plot:
            png_path = reports_dir / f"piecewise_fit_{timestamp}.png"
            _plot(xs, observed, sample_model(result.best_model, xs), png_path)
            print(f"Plot saved to: {png_path}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
