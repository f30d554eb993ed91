# File: src/gitkeep/services/rule_loader.py

import logging
import os
from pathlib import Path
from typing import List, Optional, Tuple
from ..const import GITIGNORE_FILENAME, GITKEEP_IGNORE_FILENAME
from ..domain import Config, Rule, RulesMap
from .patterns import compile_rule

logger = logging.getLogger("gitkeep")


def parse_ignore_lines(lines: List[str], rel_dir: str) -> List[Rule]:
    rules = []
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        rule = compile_rule(line, rel_dir, original=raw)
        if rule is not None:
            rules.append(rule)
    return rules


class RuleTableLoader:
    """
    Pre-order pass over the tree that reads every .gitignore (and, when enabled,
    every .gitkeepignore) into two tables keyed by root-relative directory path.

    Read failures are logged and, when an error list is supplied, appended to it.
    The pass itself never raises on I/O problems.
    """

    def __init__(self, config: Config, errors: Optional[List[str]] = None):
        self.config = config
        self.errors = errors if errors is not None else []

    def load(self, root: Path) -> Tuple[RulesMap, RulesMap]:
        gitignore_map: RulesMap = {}
        gitkeep_ignore_map: RulesMap = {}
        self._load_dir(Path(root), ".", gitignore_map, gitkeep_ignore_map)
        logger.debug(f"Loaded {len(gitignore_map)} {GITIGNORE_FILENAME} file(s)")
        logger.debug(f"Loaded {len(gitkeep_ignore_map)} {GITKEEP_IGNORE_FILENAME} file(s)")
        return gitignore_map, gitkeep_ignore_map

    def load_file(self, dir_path: Path, rel_dir: str, filename: str) -> List[Rule]:
        ignore_path = dir_path / filename

        try:
            lines = ignore_path.read_text(encoding="utf-8").splitlines()
        except (FileNotFoundError, IsADirectoryError):
            return []
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Failed to read {ignore_path}: {e}"
            logger.warning(msg)
            self.errors.append(msg)
            return []

        rules = parse_ignore_lines(lines, rel_dir)
        if rules:
            shown = filename if rel_dir == "." else f"{rel_dir}/{filename}"
            logger.debug(f"Loaded {len(rules)} rule(s) from {shown}")
        return rules

    def _load_dir(self, dir_path: Path, rel_dir: str, gitignore_map: RulesMap, gitkeep_ignore_map: RulesMap):
        rules = self.load_file(dir_path, rel_dir, GITIGNORE_FILENAME)
        if rules:
            gitignore_map[rel_dir] = rules

        if self.config.respect_marker_ignore:
            rules = self.load_file(dir_path, rel_dir, GITKEEP_IGNORE_FILENAME)
            if rules:
                gitkeep_ignore_map[rel_dir] = rules

        try:
            with os.scandir(dir_path) as it:
                subdirs = sorted(e.name for e in it if e.is_dir(follow_symlinks=False))
        except OSError as e:
            # The walk reports unreadable directories; nothing to add here.
            logger.debug(f"Cannot list {dir_path} while loading rules: {e}")
            return

        for name in subdirs:
            if name in self.config.exclude_dirs:
                continue
            sub_rel = name if rel_dir == "." else f"{rel_dir}/{name}"
            self._load_dir(dir_path / name, sub_rel, gitignore_map, gitkeep_ignore_map)
