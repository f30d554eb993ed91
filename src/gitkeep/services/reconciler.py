# File: src/gitkeep/services/reconciler.py

import logging
from pathlib import Path
from ..domain import Config, Summary

logger = logging.getLogger("gitkeep")


class MarkerReconciler:
    """Creates and removes marker files, recording every outcome in the summary."""

    def __init__(self, config: Config, summary: Summary):
        self.config = config
        self.summary = summary

    def marker_rel_path(self, rel_dir: str) -> str:
        name = self.config.marker_name
        return name if rel_dir == "." else f"{rel_dir}/{name}"

    def create(self, dir_path: Path, rel_dir: str) -> None:
        rel_path = self.marker_rel_path(rel_dir)

        if self.config.dry_run:
            logger.info(f"[DRY-RUN] Would create {rel_path}")
            return

        try:
            (Path(dir_path) / self.config.marker_name).write_text(self.config.marker_content, encoding="utf-8")
        except OSError as e:
            msg = f"Failed to create {rel_path}: {e}"
            logger.warning(msg)
            self.summary.errors.append(msg)
            return

        self.summary.created.append(rel_path)
        logger.info(f"Created {rel_path}")

    def remove(self, dir_path: Path, rel_dir: str) -> None:
        rel_path = self.marker_rel_path(rel_dir)

        if self.config.dry_run:
            logger.info(f"[DRY-RUN] Would remove {rel_path}")
            return

        try:
            (Path(dir_path) / self.config.marker_name).unlink()
        except OSError as e:
            msg = f"Failed to remove {rel_path}: {e}"
            logger.warning(msg)
            self.summary.errors.append(msg)
            return

        self.summary.removed.append(rel_path)
        logger.info(f"Removed {rel_path}")
