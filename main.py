"""
CLI entrypoint for the multitask kernel pipeline.

Commands:
- train: loads .env and configs/experiment.yaml, creates a per-run output folder
  under outputs/, trains the configured machine on a random split of the data,
  serializes held-out predictions, computes metrics (overall and per task),
  saves the trained model and logs a human-readable summary
- embed: fits Locality Preserving Projections on the table's features and
  saves the embedding together with the fitted converter
"""

import argparse
import logging
import os
from datetime import datetime
from pathlib import Path

import opik
from dotenv import load_dotenv

from application import (
    attach_and_serialize_predictions,
    log_evaluation_summary,
    run_embedding,
    run_evaluation,
    run_training,
)
from application.constants import (
    CONFIG_SNAPSHOT_FILENAME,
    CONVERTER_FILENAME,
    DATA_FINGERPRINT_FILENAME,
    EMBEDDING_FILENAME,
    LOG_FILENAME,
    METRICS_FILENAME,
    MODEL_FILENAME,
    PREDICTIONS_FILENAME,
    TASK_METRICS_FILENAME,
    get_output_root,
)
from domain.taxonomy import taxonomy_to_config
from infrastructure.config import RunConfig, load_run_config
from infrastructure.constants import ENV_TRACK_DISABLE, EXPERIMENT_FILE
from infrastructure.io import ensure_exists, read_table, save_model, write_json, write_table
from infrastructure.observability import configure_logging, make_run_tag, set_log_context
from infrastructure.utils import set_seed

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Train multitask kernel models or embed data with LPP")
    p.add_argument("command", choices=["train", "embed"], help="Pipeline to run")
    p.add_argument(
        "--experiment",
        type=str,
        default=str(EXPERIMENT_FILE),
        help="Path to experiment.yaml (default: configs/experiment.yaml)",
    )
    p.add_argument(
        "--env",
        type=str,
        default=".env",
        help="Path to .env file, loaded when it exists (default: .env)",
    )
    p.add_argument(
        "--trace",
        action="store_true",
        help="Send traces to Opik (requires a configured Opik workspace).",
    )
    p.add_argument(
        "--console-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level",
    )
    p.add_argument(
        "--file-level",
        type=str,
        default="DEBUG",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="File log level",
    )
    return p.parse_args(argv)


def _make_run_id(command: str, cfg: RunConfig) -> str:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    if command == "train":
        return f"{ts}_train_{cfg.model.machine.value}_{cfg.kernel.type.value}_tau{cfg.model.tau:g}"
    return f"{ts}_embed_lpp_d{cfg.embedding.target_dim}_k{cfg.embedding.k}"


def _write_snapshots(cfg: RunConfig, run_dir: Path, df_shape: tuple[int, int], columns: list[str]) -> None:
    snapshot = cfg.model_dump(mode="json")
    snapshot["taxonomy"] = taxonomy_to_config(cfg.taxonomy)
    write_json(snapshot, run_dir / CONFIG_SNAPSHOT_FILENAME)
    write_json(
        {
            "data_file": str(cfg.data_file_path),
            "rows": int(df_shape[0]),
            "columns": columns,
            "taxonomy_file": str(cfg.taxonomy_file) if cfg.taxonomy_file else None,
            "taxonomy_nodes": cfg.taxonomy.num_nodes,
        },
        run_dir / DATA_FINGERPRINT_FILENAME,
    )


def _train(cfg: RunConfig, run_dir: Path) -> None:
    df = read_table(cfg.data_file_path)
    logger.info("Data loaded: %d rows, %d columns", df.shape[0], df.shape[1])
    _write_snapshots(cfg, run_dir, df.shape, list(df.columns))

    result = run_training(cfg, df)
    model_path = save_model(result.machine, run_dir / MODEL_FILENAME)

    predictions_path = attach_and_serialize_predictions(
        cfg=cfg,
        test_df_out=result.test_df_out,
        predictions_path=run_dir / PREDICTIONS_FILENAME,
    )

    metrics, task_table = run_evaluation(cfg, result)
    metrics_path = write_json(metrics, run_dir / METRICS_FILENAME)
    logger.info("Saved metrics to %s", metrics_path)

    if task_table is not None:
        task_table_path = write_table(task_table, run_dir / TASK_METRICS_FILENAME)
        logger.info("Saved per-task metrics to %s", task_table_path)

    log_evaluation_summary(
        metrics=metrics,
        task_table=task_table,
        predictions_path=predictions_path,
        metrics_path=metrics_path,
        model_path=model_path,
    )


def _embed(cfg: RunConfig, run_dir: Path) -> None:
    df = read_table(cfg.data_file_path)
    logger.info("Data loaded: %d rows, %d columns", df.shape[0], df.shape[1])
    _write_snapshots(cfg, run_dir, df.shape, list(df.columns))

    converter, embedding_df = run_embedding(cfg, df)
    embedding_path = write_table(embedding_df, run_dir / EMBEDDING_FILENAME)
    converter_path = save_model(converter, run_dir / CONVERTER_FILENAME)

    logger.info("--- Artifacts ---")
    logger.info("Embedding CSV: %s", embedding_path)
    logger.info("Converter: %s", converter_path)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)

    env_file = Path(args.env)
    if env_file.exists():
        load_dotenv(env_file, override=True)

    if args.trace:
        opik.configure()
    else:
        os.environ[ENV_TRACK_DISABLE] = "true"

    experiment_path = Path(args.experiment)
    ensure_exists(experiment_path, "experiment.yaml")

    cfg = load_run_config(experiment_path)
    set_seed(cfg.stats.seed)

    # ---- Per-run output folder ----
    run_id = _make_run_id(args.command, cfg)
    run_dir = get_output_root() / run_id
    run_dir.mkdir(parents=True, exist_ok=True)

    log_path = run_dir / LOG_FILENAME
    configure_logging(
        log_file=log_path,
        console_level=getattr(logging, args.console_level),
        file_level=getattr(logging, args.file_level),
    )
    set_log_context(run_id_full=run_id)

    logger.info("Starting run: run_id=%s (run_tag=%s)", run_id, make_run_tag(run_id))
    logger.info("Run output directory: %s", run_dir)
    logger.info("Taxonomy: %r", cfg.taxonomy)

    if args.command == "train":
        _train(cfg, run_dir)
    else:
        _embed(cfg, run_dir)

    logger.info("Detailed log: %s", log_path)


if __name__ == "__main__":
    main()
