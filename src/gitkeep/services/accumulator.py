# File: src/gitkeep/services/accumulator.py

import logging
from typing import Dict, List, Optional
from ..domain import Rule, RulesMap

logger = logging.getLogger("gitkeep")


class RulesAccumulator:
    """Builds and memoizes the root-to-directory rule list for each directory."""

    def __init__(self, gitignore_map: RulesMap, gitkeep_ignore_map: Optional[RulesMap] = None):
        self.gitignore_map = gitignore_map
        self.gitkeep_ignore_map = gitkeep_ignore_map or {}
        self._cache: Dict[str, List[Rule]] = {}

    def accumulate(self, rel_dir: str) -> List[Rule]:
        if rel_dir in self._cache:
            return self._cache[rel_dir]

        parts = [] if rel_dir == "." else rel_dir.split("/")
        accumulated: List[Rule] = []

        for i in range(len(parts) + 1):
            ancestor = "/".join(parts[:i]) if i else "."
            accumulated.extend(self.gitignore_map.get(ancestor, []))
            accumulated.extend(self.gitkeep_ignore_map.get(ancestor, []))

        self._cache[rel_dir] = accumulated
        return accumulated


def is_ignored(rel_path: str, is_dir: bool, rules: List[Rule]) -> bool:
    """Last matching rule wins; a negated match un-ignores."""
    ignored = False

    for rule in rules:
        if rule.matches(rel_path, is_dir):
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(f"Rule '{rule.original}' from '{rule.base_dir}' matched '{rel_path}' (is_dir={is_dir})")
            ignored = not rule.negated

    return ignored
