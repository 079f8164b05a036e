"""Write a synthetic multitask dataset, a matching taxonomy and an experiment config."""

from __future__ import annotations

import argparse
from pathlib import Path

import numpy as np
import pandas as pd
import yaml

# parent -> [(child, weight)], declared top-down
DEMO_TREE: dict[str, list[tuple[str, float]]] = {
    "root": [("vertebrates", 0.5), ("invertebrates", 0.5)],
    "vertebrates": [("mammals", 1.0), ("birds", 1.0)],
    "invertebrates": [("insects", 1.0), ("molluscs", 1.0)],
}

# leaf task -> (slope, offset); siblings get similar functions
TASK_FUNCS = {
    "mammals": (1.0, 0.0),
    "birds": (1.2, 0.1),
    "insects": (-0.8, 1.0),
    "molluscs": (-0.6, 0.9),
}


def make_taxonomy_config() -> dict:
    nodes = [
        {"parent": parent, "name": child, "weight": weight}
        for parent, children in DEMO_TREE.items()
        for child, weight in children
    ]
    return {"root_weight": 1.0, "nodes": nodes}


def make_multitask_table(n_per_task: int, seed: int) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    frames = []
    for task, (slope, offset) in TASK_FUNCS.items():
        x = rng.uniform(-2.0, 2.0, size=(n_per_task, 3))
        y = np.sin(slope * x[:, 0]) + 0.3 * x[:, 1] * slope + offset + rng.normal(0, 0.05, n_per_task)
        frames.append(pd.DataFrame({"x1": x[:, 0], "x2": x[:, 1], "x3": x[:, 2], "task": task, "y": y}))
    return pd.concat(frames, ignore_index=True)


def make_sine_table(n_examples: int = 100, dim: int = 3) -> pd.DataFrame:
    """The classic LPP smoke-test data: an N x dim matrix filled row by row with sin(i / (N*dim) * 3.14)."""
    values = np.sin(np.arange(n_examples * dim) / float(n_examples * dim) * 3.14)
    matrix = values.reshape(n_examples, dim)
    return pd.DataFrame(matrix, columns=[f"f{i}" for i in range(dim)])


def make_experiment_config(data_dir: Path, taxonomy_file: Path) -> dict:
    return {
        "data_dir": str(data_dir),
        "data_file": "multitask.csv",
        "taxonomy_file": str(taxonomy_file),
        "columns": {"feature_cols": ["x1", "x2", "x3"], "task_col": "task", "target_col": "y"},
        "kernel": {"type": "gaussian", "params": {"width": 2.0}},
        "model": {"machine": "multitask_krr", "tau": 0.01, "test_size": 0.25},
        "embedding": {"target_dim": 2, "k": 10, "width": 1.0, "n_jobs": 4},
        "stats": {"seed": 42, "n_boot": 1000, "alpha": 0.05},
    }


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--data-dir", default="dataset", help="Where to write CSV files (default: dataset)")
    ap.add_argument("--config-dir", default="configs", help="Where to write YAML files (default: configs)")
    ap.add_argument("--n-per-task", type=int, default=60, help="Examples per leaf task")
    ap.add_argument("--seed", type=int, default=42)
    ap.add_argument("--force", action="store_true", help="Overwrite existing files")
    args = ap.parse_args()

    data_dir = Path(args.data_dir)
    config_dir = Path(args.config_dir)
    taxonomy_file = config_dir / "taxonomy.yaml"
    experiment_file = config_dir / "experiment.yaml"

    outputs = [data_dir / "multitask.csv", data_dir / "lpp_sine.csv", taxonomy_file, experiment_file]
    existing = [p for p in outputs if p.exists()]
    if existing and not args.force:
        raise SystemExit(f"Refusing to overwrite {[str(p) for p in existing]} (use --force)")

    data_dir.mkdir(parents=True, exist_ok=True)
    config_dir.mkdir(parents=True, exist_ok=True)

    make_multitask_table(args.n_per_task, args.seed).to_csv(data_dir / "multitask.csv", index=False)
    make_sine_table().to_csv(data_dir / "lpp_sine.csv", index=False)
    taxonomy_file.write_text(yaml.safe_dump(make_taxonomy_config(), sort_keys=False), encoding="utf-8")
    experiment_file.write_text(
        yaml.safe_dump(make_experiment_config(data_dir, taxonomy_file), sort_keys=False),
        encoding="utf-8",
    )

    for path in outputs:
        print(f"Wrote {path}")


if __name__ == "__main__":
    main()
