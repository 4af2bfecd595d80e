"""
Experiment tracking helpers (optional MLflow backend).

MLflow is only imported when tracking is requested, so it stays an optional
extra. Tracking problems are logged and never abort a run.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional

_active = False


@contextmanager
def maybe_mlflow_run(enabled: bool, run_name: str, log_dir: Optional[Path] = None) -> Iterator[bool]:
    """Open an MLflow run when ``enabled``; yields whether a run is active."""
    global _active
    if not enabled:
        yield False
        return
    try:
        import mlflow  # type: ignore

        if log_dir is not None:
            log_dir.mkdir(parents=True, exist_ok=True)
            mlflow.set_tracking_uri((log_dir.resolve() / "mlruns").as_uri())
        run = mlflow.start_run(run_name=run_name)
    except Exception as e:
        logging.warning("Tracking disabled: %s: %s", type(e).__name__, e)
        yield False
        return
    _active = True
    try:
        with run:
            yield True
    finally:
        _active = False


def log_params(params: Dict[str, object]) -> None:
    if not _active:
        return
    try:
        import mlflow  # type: ignore

        mlflow.log_params(params)
    except Exception as e:
        logging.warning("mlflow.log_params failed: %s", e)


def log_metrics(metrics: Dict[str, float]) -> None:
    if not _active:
        return
    try:
        import mlflow  # type: ignore

        mlflow.log_metrics(metrics)
    except Exception as e:
        logging.warning("mlflow.log_metrics failed: %s", e)


def log_artifact(path: Path, artifact_path: Optional[str] = None) -> None:
    if not _active:
        return
    try:
        import mlflow  # type: ignore

        mlflow.log_artifact(str(path), artifact_path=artifact_path)
    except Exception as e:
        logging.warning("mlflow.log_artifact failed: %s", e)
