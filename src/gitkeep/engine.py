# File: src/gitkeep/engine.py

import logging
import os
from pathlib import Path
from typing import List, Optional
from .domain import Config, Mode, Summary
from .services.accumulator import RulesAccumulator, is_ignored
from .services.reconciler import MarkerReconciler
from .services.rule_loader import RuleTableLoader

logger = logging.getLogger("gitkeep")


class DirectoryWalker:
    """
    Post-order walk that decides, bottom-up, which directories are empty.

    A directory is empty when it has no visible files (the marker and ignored
    files don't count) and every subdirectory is empty, ignored or excluded.
    """

    def __init__(self, config: Config, accumulator: RulesAccumulator, reconciler: MarkerReconciler, summary: Summary):
        self.config = config
        self.accumulator = accumulator
        self.reconciler = reconciler
        self.summary = summary

    def walk(self, dir_path: Path, rel_dir: str = ".") -> bool:
        dir_path = Path(dir_path)
        logger.debug(f"Walking {rel_dir}")

        if rel_dir != "." and dir_path.name in self.config.exclude_dirs:
            logger.debug(f"{rel_dir} is in the exclude list, skipping")
            self.summary.skipped.append(rel_dir)
            return True

        rules = self.accumulator.accumulate(rel_dir)

        # The root is matched as ".", so a root rule such as "*" or ".*" skips the whole tree.
        if is_ignored(rel_dir, True, rules):
            logger.debug(f"{rel_dir} is ignored, skipping")
            self.summary.skipped.append(rel_dir)
            return True

        try:
            with os.scandir(dir_path) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            msg = f"Cannot read directory {dir_path}: {e}"
            logger.warning(msg)
            self.summary.errors.append(msg)
            return True

        subdirs = [e.name for e in entries if e.is_dir(follow_symlinks=False)]
        files = [e.name for e in entries if e.is_file(follow_symlinks=False)]

        has_non_empty_subdir = False
        for name in subdirs:
            sub_rel = name if rel_dir == "." else f"{rel_dir}/{name}"
            if not self.walk(dir_path / name, sub_rel):
                has_non_empty_subdir = True

        visible_files = self._visible_files(files, rel_dir, rules)
        has_marker = self.config.marker_name in files
        is_empty = not visible_files and not has_non_empty_subdir

        self._reconcile(dir_path, rel_dir, is_empty, has_marker)
        return is_empty

    def _visible_files(self, files: List[str], rel_dir: str, rules) -> List[str]:
        visible = []
        for name in files:
            if name == self.config.marker_name:
                continue
            rel_path = name if rel_dir == "." else f"{rel_dir}/{name}"
            if is_ignored(rel_path, False, rules):
                logger.debug(f"File {rel_path} is ignored")
                continue
            visible.append(name)
        return visible

    def _reconcile(self, dir_path: Path, rel_dir: str, is_empty: bool, has_marker: bool) -> None:
        mode = self.config.mode
        marker = self.config.marker_name

        if mode is Mode.CLEAN:
            if has_marker:
                self.reconciler.remove(dir_path, rel_dir)
        elif mode is Mode.CHECK:
            if is_empty and not has_marker:
                logger.info(f"{rel_dir} - empty directory without {marker}")
                self.summary.mismatched.append(rel_dir)
            elif not is_empty and has_marker:
                logger.info(f"{rel_dir} - non-empty directory with {marker}")
                self.summary.mismatched.append(rel_dir)
        elif mode is Mode.NORMAL:
            if is_empty and not has_marker:
                self.reconciler.create(dir_path, rel_dir)
            elif not is_empty and has_marker:
                self.reconciler.remove(dir_path, rel_dir)
        else:
            raise ValueError(f"Unknown mode: {mode}")


def run(config: Config, summary: Optional[Summary] = None) -> Summary:
    """Loads every ignore file under the root, then walks the tree once."""
    summary = summary if summary is not None else Summary()
    root = Path(config.root)

    logger.debug("Loading ignore rules...")
    gitignore_map, gitkeep_ignore_map = RuleTableLoader(config, summary.errors).load(root)

    accumulator = RulesAccumulator(gitignore_map, gitkeep_ignore_map)
    reconciler = MarkerReconciler(config, summary)
    walker = DirectoryWalker(config, accumulator, reconciler, summary)

    logger.debug("Walking directories...")
    walker.walk(root)
    return summary
